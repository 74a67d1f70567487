"""Execution fault types."""
from __future__ import annotations

__all__ = ["ExecutionError", "InvalidOpcode", "OutOfGas", "StackUnderflow"]


class ExecutionError(Exception):
    """Fault that halts an execution with ``success=False``."""


class StackUnderflow(ExecutionError, IndexError):
    def __init__(self, needed: int, available: int) -> None:
        super().__init__(f"stack underflow (needed {needed}, have {available})")
        self.needed = needed
        self.available = available


class InvalidOpcode(ExecutionError):
    def __init__(self, opcode: int, offset: int) -> None:
        super().__init__(f"invalid opcode 0x{opcode:02X} at 0x{offset:04X}")
        self.opcode = opcode
        self.offset = offset


class OutOfGas(ExecutionError):
    def __init__(self, requested: int, remaining: int) -> None:
        super().__init__(f"out of gas (requested {requested}, remaining {remaining})")
        self.requested = requested
        self.remaining = remaining
