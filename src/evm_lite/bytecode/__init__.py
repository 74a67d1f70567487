"""Bytecode decoding package."""

from __future__ import annotations

from .opcodes import STATIC_GAS, OpCode, immediate_size, opcode_name
from .parser import BytecodeCursor, Instruction, decode_hex, disassemble

__all__ = [
    "STATIC_GAS",
    "BytecodeCursor",
    "Instruction",
    "OpCode",
    "decode_hex",
    "disassemble",
    "immediate_size",
    "opcode_name",
]
