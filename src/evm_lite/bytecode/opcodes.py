"""EVM opcode definitions and immediate-operand metadata.

Only the arithmetic, comparison, bitwise and stack subset executed by
:mod:`evm_lite.engine` is enumerated here.
"""
from __future__ import annotations

from enum import IntEnum


class OpCode(IntEnum):
    STOP = 0x00
    ADD = 0x01
    MUL = 0x02
    SUB = 0x03
    DIV = 0x04
    SDIV = 0x05
    MOD = 0x06
    SMOD = 0x07
    ADDMOD = 0x08
    MULMOD = 0x09
    EXP = 0x0A
    SIGNEXTEND = 0x0B
    LT = 0x10
    GT = 0x11
    SLT = 0x12
    SGT = 0x13
    EQ = 0x14
    ISZERO = 0x15
    AND = 0x16
    OR = 0x17
    XOR = 0x18
    NOT = 0x19
    SHL = 0x1B
    SHR = 0x1C
    SAR = 0x1D
    POP = 0x50
    PUSH0 = 0x5F
    PUSH1 = 0x60
    PUSH2 = 0x61
    PUSH3 = 0x62
    PUSH4 = 0x63
    PUSH5 = 0x64
    PUSH6 = 0x65
    PUSH7 = 0x66
    PUSH8 = 0x67
    PUSH9 = 0x68
    PUSH10 = 0x69
    PUSH11 = 0x6A
    PUSH12 = 0x6B
    PUSH13 = 0x6C
    PUSH14 = 0x6D
    PUSH15 = 0x6E
    PUSH16 = 0x6F
    PUSH17 = 0x70
    PUSH18 = 0x71
    PUSH19 = 0x72
    PUSH20 = 0x73
    PUSH21 = 0x74
    PUSH22 = 0x75
    PUSH23 = 0x76
    PUSH24 = 0x77
    PUSH25 = 0x78
    PUSH26 = 0x79
    PUSH27 = 0x7A
    PUSH28 = 0x7B
    PUSH29 = 0x7C
    PUSH30 = 0x7D
    PUSH31 = 0x7E
    PUSH32 = 0x7F


def immediate_size(opcode: int) -> int:
    """Number of immediate bytes following ``opcode`` (0 for non-push opcodes)."""
    if OpCode.PUSH0 <= opcode <= OpCode.PUSH32:
        return opcode - OpCode.PUSH0
    return 0


def opcode_name(opcode: int) -> str:
    try:
        return OpCode(opcode).name
    except ValueError:
        return f"UNKNOWN_0x{opcode:02X}"


# Base fee tiers from the instruction set's fee schedule.
G_ZERO = 0
G_BASE = 2
G_VERYLOW = 3
G_LOW = 5
G_MID = 8
G_EXP = 10

# Static cost per opcode. EXP's per-byte exponent surcharge is not modelled.
STATIC_GAS: dict[int, int] = {
    OpCode.STOP: G_ZERO,
    OpCode.ADD: G_VERYLOW,
    OpCode.MUL: G_LOW,
    OpCode.SUB: G_VERYLOW,
    OpCode.DIV: G_LOW,
    OpCode.SDIV: G_LOW,
    OpCode.MOD: G_LOW,
    OpCode.SMOD: G_LOW,
    OpCode.ADDMOD: G_MID,
    OpCode.MULMOD: G_MID,
    OpCode.EXP: G_EXP,
    OpCode.SIGNEXTEND: G_LOW,
    OpCode.LT: G_VERYLOW,
    OpCode.GT: G_VERYLOW,
    OpCode.SLT: G_VERYLOW,
    OpCode.SGT: G_VERYLOW,
    OpCode.EQ: G_VERYLOW,
    OpCode.ISZERO: G_VERYLOW,
    OpCode.AND: G_VERYLOW,
    OpCode.OR: G_VERYLOW,
    OpCode.XOR: G_VERYLOW,
    OpCode.NOT: G_VERYLOW,
    OpCode.SHL: G_VERYLOW,
    OpCode.SHR: G_VERYLOW,
    OpCode.SAR: G_VERYLOW,
    OpCode.POP: G_BASE,
    OpCode.PUSH0: G_BASE,
    **{push: G_VERYLOW for push in range(OpCode.PUSH1, OpCode.PUSH32 + 1)},
}
