"""Cross-check word arithmetic against z3 bit-vector semantics."""
import random

import pytest
import z3

from evm_lite.engine import alu
from evm_lite.engine.alu import SIGN_BIT, UINT256_MAX

WORDS = [0, 1, 2, 3, 0x80, 0xFF, SIGN_BIT - 1, SIGN_BIT, UINT256_MAX - 1, UINT256_MAX]
_rng = random.Random(20240601)
WORDS += [_rng.getrandbits(256) for _ in range(6)]
PAIRS = [(a, b) for a in WORDS for b in WORDS[::2]]


def bv(value: int) -> z3.BitVecNumRef:
    return z3.BitVecVal(value, 256)


def evaluate(expr) -> int:
    simplified = z3.simplify(expr)
    if z3.is_bool(simplified):
        return 1 if z3.is_true(simplified) else 0
    return simplified.as_long()


BINARY_REFERENCES = [
    (alu.add, lambda a, b: a + b),
    (alu.sub, lambda a, b: a - b),
    (alu.mul, lambda a, b: a * b),
    (alu.and_, lambda a, b: a & b),
    (alu.or_, lambda a, b: a | b),
    (alu.xor, lambda a, b: a ^ b),
    (alu.lt, z3.ULT),
    (alu.gt, z3.UGT),
    (alu.slt, lambda a, b: a < b),
    (alu.sgt, lambda a, b: a > b),
    (alu.eq, lambda a, b: a == b),
]


@pytest.mark.parametrize("op,reference", BINARY_REFERENCES, ids=[op.__name__ for op, _ in BINARY_REFERENCES])
def test_binary_ops_match_bitvectors(op, reference):
    for a, b in PAIRS:
        assert op(a, b) == evaluate(reference(bv(a), bv(b))), (hex(a), hex(b))


# z3 defines division by zero differently, so only non-zero divisors are compared here.
DIVISION_REFERENCES = [
    (alu.div, z3.UDiv),
    (alu.mod, z3.URem),
    (alu.sdiv, lambda a, b: a / b),
    (alu.smod, z3.SRem),
]


@pytest.mark.parametrize("op,reference", DIVISION_REFERENCES, ids=[op.__name__ for op, _ in DIVISION_REFERENCES])
def test_division_ops_match_bitvectors(op, reference):
    for a, b in PAIRS:
        if b == 0:
            continue
        assert op(a, b) == evaluate(reference(bv(a), bv(b))), (hex(a), hex(b))


SHIFT_AMOUNTS = [0, 1, 7, 8, 128, 254, 255, 256, 257, UINT256_MAX]

SHIFT_REFERENCES = [
    (alu.shl, lambda value, shift: value << shift),
    (alu.shr, z3.LShR),
    (alu.sar, lambda value, shift: value >> shift),
]


@pytest.mark.parametrize("op,reference", SHIFT_REFERENCES, ids=[op.__name__ for op, _ in SHIFT_REFERENCES])
def test_shifts_match_bitvectors(op, reference):
    for shift in SHIFT_AMOUNTS:
        for value in WORDS:
            assert op(shift, value) == evaluate(reference(bv(value), bv(shift))), (shift, hex(value))


def test_not_matches_bitvector_complement():
    for value in WORDS:
        assert alu.not_(value) == evaluate(~bv(value))
        assert alu.iszero(value) == evaluate(bv(value) == 0)


@pytest.mark.parametrize("byte_index", [0, 1, 2, 15, 30])
def test_signextend_matches_bitvector_sign_extension(byte_index):
    width = 8 * (byte_index + 1)
    for value in WORDS:
        expected = z3.SignExt(256 - width, z3.Extract(width - 1, 0, bv(value)))
        assert alu.signextend(byte_index, value) == evaluate(expected), hex(value)
