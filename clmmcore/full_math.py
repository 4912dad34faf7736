"""Multiply-then-divide without intermediate overflow, with a bound on the result."""

from __future__ import annotations

from .bits import U128_MAX, U256_MAX, U64_MAX, ArithmeticOverflow

__all__ = ["mul_div_floor", "mul_div_ceil", "to_underflow_u64"]


def _check_operands(value: int, num: int, denom: int) -> None:
    if value < 0 or num < 0 or denom < 0:
        raise ValueError("operands must be non-negative")
    if denom == 0:
        raise ZeroDivisionError("denominator must not be zero")


def _bounded(result: int, limit: int) -> int:
    if result > limit:
        raise ArithmeticOverflow(f"result {result} exceeds limit {limit}")
    return result


def mul_div_floor(value: int, num: int, denom: int, limit: int = U128_MAX) -> int:
    """Return floor(value * num / denom).

    Raises ArithmeticOverflow if the product exceeds 256 bits or the result
    exceeds ``limit``; ZeroDivisionError if ``denom`` is zero.
    """
    _check_operands(value, num, denom)
    product = value * num
    if product > U256_MAX:
        raise ArithmeticOverflow("arithmetic operation overflow")
    return _bounded(product // denom, limit)


def mul_div_ceil(value: int, num: int, denom: int, limit: int = U128_MAX) -> int:
    """Return ceil(value * num / denom).

    Raises ArithmeticOverflow if the intermediate sum exceeds 256 bits or the
    result exceeds ``limit``; ZeroDivisionError if ``denom`` is zero.
    """
    _check_operands(value, num, denom)
    numerator = value * num + (denom - 1)
    if numerator > U256_MAX:
        raise ArithmeticOverflow("arithmetic operation overflow")
    return _bounded(numerator // denom, limit)


def to_underflow_u64(value: int) -> int:
    """Return ``value`` if it is below u64::MAX, otherwise 0."""
    return value if value < U64_MAX else 0