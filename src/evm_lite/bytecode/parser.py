"""Bytecode cursor, hex decoding and disassembler."""
from __future__ import annotations

import re
from dataclasses import dataclass

from .opcodes import immediate_size, opcode_name

_HEX_RE = re.compile(r"^[0-9a-fA-F]*$")


@dataclass(slots=True, frozen=True)
class Instruction:
    opcode: int
    offset: int
    operand: bytes = b""
    size: int = 1
    truncated: bool = False

    @property
    def name(self) -> str:
        return opcode_name(self.opcode)

    @property
    def immediate(self) -> int:
        return int.from_bytes(self.operand, "big") if self.operand else 0


class BytecodeCursor:
    """Read position over an immutable code buffer."""

    def __init__(self, code: bytes) -> None:
        self._code = bytes(code)
        self._pc = 0

    @property
    def code(self) -> bytes:
        return self._code

    @property
    def pc(self) -> int:
        return self._pc

    @property
    def at_end(self) -> bool:
        return self._pc >= len(self._code)

    def current_opcode(self) -> int | None:
        if self.at_end:
            return None
        return self._code[self._pc]

    def advance(self, n: int = 1) -> None:
        if n < 0:
            raise ValueError("negative advance")
        self._pc = min(self._pc + n, len(self._code))

    def read_immediate(self, length: int) -> bytes:
        """Consume ``length`` bytes at pc, zero-filling whatever lies past end-of-code."""
        if length < 0:
            raise ValueError("negative length")
        chunk = self._code[self._pc : self._pc + length]
        self.advance(length)
        return chunk.ljust(length, b"\x00")


def decode_hex(text: str) -> bytes:
    """Decode hex bytecode text, tolerating a ``0x`` prefix and whitespace."""
    cleaned = "".join(text.split())
    if cleaned[:2].lower() == "0x":
        cleaned = cleaned[2:]
    if not _HEX_RE.match(cleaned):
        raise ValueError("Bytecode contains non-hex characters")
    if len(cleaned) % 2:
        raise ValueError(f"Bytecode hex has odd length {len(cleaned)}")
    return bytes.fromhex(cleaned)


def disassemble(code: bytes) -> list[Instruction]:
    """Split bytecode into instructions.

    Unknown opcode bytes are kept as one-byte instructions. A push whose
    immediate runs past the end of code is zero-padded and flagged as
    ``truncated``.
    """
    instructions: list[Instruction] = []
    cursor = BytecodeCursor(code)

    while not cursor.at_end:
        offset = cursor.pc
        opcode = cursor.current_opcode()
        cursor.advance()
        operand_size = immediate_size(opcode)
        available = len(code) - cursor.pc
        operand = cursor.read_immediate(operand_size)
        instructions.append(
            Instruction(
                opcode=opcode,
                offset=offset,
                operand=operand,
                size=1 + operand_size,
                truncated=available < operand_size,
            )
        )

    return instructions
