"""Fixed-width unsigned integer helpers and Q64.64 constants."""

from __future__ import annotations

__all__ = [
    "AmmError",
    "ArithmeticOverflow",
    "Q64",
    "RESOLUTION",
    "U64_MAX",
    "U128_MAX",
    "U256_MAX",
    "I128_MAX",
    "I128_MIN",
    "mask",
    "leading_zeros",
    "trailing_zeros",
    "shl",
    "checked_u128",
    "checked_i128",
    "div_rounding_up",
]

# Q64.64 fixed point: one unit equals 2**64.
RESOLUTION = 64
Q64 = 1 << RESOLUTION

U64_MAX = (1 << 64) - 1
U128_MAX = (1 << 128) - 1
U256_MAX = (1 << 256) - 1
I128_MAX = (1 << 127) - 1
I128_MIN = -(1 << 127)


class AmmError(Exception):
    """Base class for all errors raised by this package."""


class ArithmeticOverflow(AmmError, OverflowError):
    """A value does not fit the integer width it is required to have."""


def mask(value: int, bits: int) -> int:
    """Truncate ``value`` to its lowest ``bits`` bits."""
    return value & ((1 << bits) - 1)


def leading_zeros(value: int, bits: int) -> int:
    """Number of leading zero bits of ``value`` seen as a ``bits``-wide integer."""
    return bits - mask(value, bits).bit_length()


def trailing_zeros(value: int, bits: int) -> int:
    """Number of trailing zero bits of ``value`` seen as a ``bits``-wide integer."""
    value = mask(value, bits)
    if value == 0:
        return bits
    return (value & -value).bit_length() - 1


def shl(value: int, shift: int, bits: int) -> int:
    """Shift left within a ``bits``-wide integer; bits shifted out are lost."""
    if shift < 0:
        raise ValueError("shift must not be negative")
    return mask(value << shift, bits)


def checked_u128(value: int) -> int:
    """Return ``value`` if it is a valid u128, otherwise raise ArithmeticOverflow."""
    if value < 0:
        raise ArithmeticOverflow("unsigned integer can't be created from negative value")
    if value > U128_MAX:
        raise ArithmeticOverflow("integer overflow when casting to u128")
    return value


def checked_i128(value: int) -> int:
    """Return ``value`` if it is a valid i128, otherwise raise ArithmeticOverflow."""
    if not I128_MIN <= value <= I128_MAX:
        raise ArithmeticOverflow("integer overflow when casting to i128")
    return value


def div_rounding_up(x: int, y: int) -> int:
    """Return ceil(x / y) for non-negative integers; raises ZeroDivisionError on y == 0."""
    quotient, remainder = divmod(x, y)
    return quotient + (1 if remainder > 0 else 0)