"""Interpreter configuration."""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType

DEFAULT_GAS_LIMIT = 100_000_000


class UnknownOpcodePolicy(StrEnum):
    IGNORE = "ignore"
    FAULT = "fault"


@dataclass(slots=True, frozen=True)
class InterpreterConfig:
    """Knobs for one :class:`~evm_lite.engine.interpreter.Interpreter`.

    ``fee_schedule`` maps opcode to the gas debited before the instruction
    runs. It is empty by default, which leaves the gas meter untouched.
    ``max_steps`` bounds the number of executed instructions (``None`` means
    unbounded).
    """

    unknown_opcode: UnknownOpcodePolicy = UnknownOpcodePolicy.IGNORE
    gas_limit: int = DEFAULT_GAS_LIMIT
    fee_schedule: Mapping[int, int] = field(default_factory=lambda: MappingProxyType({}))
    max_steps: int | None = None

    def __post_init__(self) -> None:
        if self.gas_limit < 0:
            raise ValueError("gas_limit must be >= 0")
        if self.max_steps is not None and self.max_steps < 1:
            raise ValueError("max_steps must be >= 1")
        negative = {opcode: cost for opcode, cost in self.fee_schedule.items() if cost < 0}
        if negative:
            raise ValueError(f"fee_schedule has negative costs: {negative}")
        object.__setattr__(self, "unknown_opcode", UnknownOpcodePolicy(self.unknown_opcode))
        object.__setattr__(self, "fee_schedule", MappingProxyType(dict(self.fee_schedule)))
