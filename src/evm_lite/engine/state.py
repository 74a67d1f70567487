"""Execution state models."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

from ..bytecode.parser import BytecodeCursor
from ..errors import OutOfGas, StackUnderflow
from .alu import UINT256_MAX


class HaltReason(StrEnum):
    STOP = "stop"
    END_OF_CODE = "end-of-code"
    FAULT = "fault"
    STEP_LIMIT = "step-limit"


class OperandStack:
    """Word stack; the last pushed word is the top and is popped first."""

    __slots__ = ("_items",)

    def __init__(self, items: list[int] | None = None) -> None:
        self._items: list[int] = list(items) if items else []

    def __len__(self) -> int:
        return len(self._items)

    def push(self, word: int) -> None:
        if not 0 <= word <= UINT256_MAX:
            raise ValueError(f"word out of range: {word}")
        self._items.append(word)

    def pop(self) -> int:
        if not self._items:
            raise StackUnderflow(1, 0)
        return self._items.pop()

    def pop_n(self, count: int) -> list[int]:
        """Pop ``count`` words, returned top first. Leaves the stack intact on underflow."""
        if count > len(self._items):
            raise StackUnderflow(count, len(self._items))
        if count == 0:
            return []
        popped = self._items[-count:]
        del self._items[-count:]
        popped.reverse()
        return popped

    def peek(self) -> int:
        if not self._items:
            raise StackUnderflow(1, 0)
        return self._items[-1]

    def snapshot(self) -> tuple[int, ...]:
        """Contents from top to bottom."""
        return tuple(reversed(self._items))


@dataclass(slots=True)
class GasMeter:
    limit: int
    used: int = 0

    @property
    def remaining(self) -> int:
        return self.limit - self.used

    def would_exceed(self, amount: int) -> bool:
        return amount > self.remaining

    def consume(self, amount: int) -> None:
        if amount < 0:
            raise ValueError(f"negative gas amount: {amount}")
        if self.would_exceed(amount):
            raise OutOfGas(amount, self.remaining)
        self.used += amount

    def refund(self, amount: int) -> None:
        if amount < 0:
            raise ValueError(f"negative gas amount: {amount}")
        self.used = max(0, self.used - amount)


@dataclass(slots=True)
class ExecutionContext:
    """Everything an instruction handler may touch during one step."""

    cursor: BytecodeCursor
    stack: OperandStack = field(default_factory=OperandStack)
    gas: GasMeter = field(default_factory=lambda: GasMeter(limit=0))
    offset: int = 0
    halted: bool = False
    halt_reason: HaltReason | None = None
    steps: int = 0
    unknown_opcodes: list[int] = field(default_factory=list)

    def halt(self, reason: HaltReason) -> None:
        self.halted = True
        self.halt_reason = reason


@dataclass(slots=True, frozen=True)
class ExecutionResult:
    stack: tuple[int, ...]
    success: bool
    halt_reason: HaltReason
    pc: int
    steps: int = 0
    gas_used: int = 0
    error: str | None = None
    unknown_opcodes: tuple[int, ...] = ()

    @property
    def top(self) -> int | None:
        return self.stack[0] if self.stack else None
