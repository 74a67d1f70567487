"""Execution engine package."""

from __future__ import annotations

from .config import DEFAULT_GAS_LIMIT, InterpreterConfig, UnknownOpcodePolicy
from .interpreter import DEFAULT_HANDLERS, Handler, Interpreter, execute
from .state import ExecutionContext, ExecutionResult, GasMeter, HaltReason, OperandStack

__all__ = [
    "DEFAULT_GAS_LIMIT",
    "DEFAULT_HANDLERS",
    "ExecutionContext",
    "ExecutionResult",
    "GasMeter",
    "HaltReason",
    "Handler",
    "Interpreter",
    "InterpreterConfig",
    "OperandStack",
    "UnknownOpcodePolicy",
    "execute",
]
