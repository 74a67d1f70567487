"""Interpreter core for a 256-bit EVM stack machine subset."""

from __future__ import annotations

from .engine import ExecutionResult, Interpreter, InterpreterConfig, execute
from .errors import ExecutionError, InvalidOpcode, OutOfGas, StackUnderflow

__version__ = "0.1.0"

__all__ = [
    "ExecutionError",
    "ExecutionResult",
    "Interpreter",
    "InterpreterConfig",
    "InvalidOpcode",
    "OutOfGas",
    "StackUnderflow",
    "__version__",
    "execute",
]
