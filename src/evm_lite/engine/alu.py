"""256-bit word arithmetic.

Every function takes unsigned words (``0 <= w < 2**256``) in stack pop order
and returns an unsigned word. None of them raise: zero divisors, oversized
shifts and signed overflow all map to defined results.
"""
from __future__ import annotations

WORD_BITS = 256
WORD_BYTES = WORD_BITS // 8
UINT256_CEIL = 1 << WORD_BITS
UINT256_MAX = UINT256_CEIL - 1
SIGN_BIT = 1 << (WORD_BITS - 1)
INT256_MIN = -SIGN_BIT


def to_signed(word: int) -> int:
    return word - UINT256_CEIL if word & SIGN_BIT else word


def to_unsigned(value: int) -> int:
    return value & UINT256_MAX


def is_negative(word: int) -> bool:
    return bool(word & SIGN_BIT)


def _bool_word(flag: bool) -> int:
    return 1 if flag else 0


# Arithmetic


def add(a: int, b: int) -> int:
    return (a + b) & UINT256_MAX


def mul(a: int, b: int) -> int:
    return (a * b) & UINT256_MAX


def sub(a: int, b: int) -> int:
    return (a - b) & UINT256_MAX


def div(a: int, b: int) -> int:
    if b == 0:
        return 0
    return a // b


def mod(a: int, b: int) -> int:
    if b == 0:
        return 0
    return a % b


def sdiv(a: int, b: int) -> int:
    """Signed division truncating toward zero; ``INT256_MIN / -1`` wraps to itself."""
    if b == 0:
        return 0
    numerator, denominator = to_signed(a), to_signed(b)
    quotient = abs(numerator) // abs(denominator)
    if (numerator < 0) != (denominator < 0):
        quotient = -quotient
    return to_unsigned(quotient)


def smod(a: int, b: int) -> int:
    """Signed remainder; the result carries the sign of the dividend."""
    if b == 0:
        return 0
    numerator, denominator = to_signed(a), to_signed(b)
    remainder = abs(numerator) % abs(denominator)
    if numerator < 0:
        remainder = -remainder
    return to_unsigned(remainder)


def addmod(a: int, b: int, n: int) -> int:
    # Python ints are unbounded, so a + b is never truncated before the modulus.
    if n == 0:
        return 0
    return (a + b) % n


def mulmod(a: int, b: int, n: int) -> int:
    if n == 0:
        return 0
    return (a * b) % n


def exp(base: int, exponent: int) -> int:
    return pow(base, exponent, UINT256_CEIL)


def signextend(byte_index: int, value: int) -> int:
    """Extend the sign bit of byte ``byte_index`` (0 = lowest) through the word."""
    if byte_index >= WORD_BYTES - 1:
        return value
    sign_bit = byte_index * 8 + 7
    if value & (1 << sign_bit):
        return value | (UINT256_CEIL - (1 << sign_bit))
    return value & ((1 << sign_bit) - 1)


# Comparison


def lt(a: int, b: int) -> int:
    return _bool_word(a < b)


def gt(a: int, b: int) -> int:
    return _bool_word(a > b)


def slt(a: int, b: int) -> int:
    a_negative, b_negative = is_negative(a), is_negative(b)
    if a_negative != b_negative:
        return _bool_word(a_negative)
    # Same sign: two's-complement order matches unsigned order.
    return _bool_word(a < b)


def sgt(a: int, b: int) -> int:
    a_negative, b_negative = is_negative(a), is_negative(b)
    if a_negative != b_negative:
        return _bool_word(b_negative)
    return _bool_word(a > b)


def eq(a: int, b: int) -> int:
    return _bool_word(a == b)


def iszero(a: int) -> int:
    return _bool_word(a == 0)


# Bitwise


def and_(a: int, b: int) -> int:
    return a & b


def or_(a: int, b: int) -> int:
    return a | b


def xor(a: int, b: int) -> int:
    return a ^ b


def not_(a: int) -> int:
    return UINT256_MAX ^ a


def shl(shift: int, value: int) -> int:
    if shift >= WORD_BITS:
        return 0
    return (value << shift) & UINT256_MAX


def shr(shift: int, value: int) -> int:
    if shift >= WORD_BITS:
        return 0
    return value >> shift


def sar(shift: int, value: int) -> int:
    if shift >= WORD_BITS:
        return UINT256_MAX if is_negative(value) else 0
    return to_unsigned(to_signed(value) >> shift)
