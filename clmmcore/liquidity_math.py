"""Liquidity arithmetic: token amounts versus liquidity over a price range."""

from __future__ import annotations

from .bits import (
    Q64,
    RESOLUTION,
    U128_MAX,
    U64_MAX,
    AmmError,
    ArithmeticOverflow,
    checked_u128,
    div_rounding_up,
)
from .full_math import mul_div_ceil, mul_div_floor
from .tick_math import get_sqrt_price_at_tick

__all__ = [
    "LiquidityAddError",
    "LiquiditySubError",
    "add_delta",
    "get_liquidity_from_amount_0",
    "get_liquidity_from_amount_1",
    "get_liquidity_from_amounts",
    "get_liquidity_from_single_amount_0",
    "get_liquidity_from_single_amount_1",
    "get_delta_amount_0_unsigned",
    "get_delta_amount_1_unsigned",
    "get_delta_amount_0_signed",
    "get_delta_amount_1_signed",
    "get_delta_amounts_signed",
]


class LiquidityAddError(AmmError, OverflowError):
    """Adding a liquidity delta overflowed u128."""


class LiquiditySubError(AmmError, ArithmeticError):
    """Subtracting a liquidity delta went below zero."""


def _ordered(a: int, b: int) -> tuple[int, int]:
    return (a, b) if a <= b else (b, a)


def _as_u64(value: int) -> int:
    if value > U64_MAX:
        raise ArithmeticOverflow("integer overflow when casting to u64")
    return value


def add_delta(x: int, y: int) -> int:
    """Add a signed liquidity delta ``y`` to liquidity ``x``.

    Raises LiquiditySubError on underflow and LiquidityAddError on overflow.
    """
    z = x + y
    if y < 0:
        if z < 0:
            raise LiquiditySubError(f"liquidity {x} cannot be reduced by {-y}")
    elif z > U128_MAX:
        raise LiquidityAddError(f"liquidity {x} cannot be increased by {y}")
    return z


def get_liquidity_from_amount_0(sqrt_ratio_a_x64: int, sqrt_ratio_b_x64: int, amount_0: int) -> int:
    """Liquidity for ``amount_0`` of token_0: Δx * √Pa * √Pb / (√Pb - √Pa)."""
    a, b = _ordered(sqrt_ratio_a_x64, sqrt_ratio_b_x64)
    intermediate = mul_div_floor(a, b, Q64)
    return mul_div_floor(amount_0, intermediate, b - a)


def get_liquidity_from_amount_1(sqrt_ratio_a_x64: int, sqrt_ratio_b_x64: int, amount_1: int) -> int:
    """Liquidity for ``amount_1`` of token_1: Δy / (√Pb - √Pa)."""
    a, b = _ordered(sqrt_ratio_a_x64, sqrt_ratio_b_x64)
    return mul_div_floor(amount_1, Q64, b - a)


def get_liquidity_from_amounts(
    sqrt_ratio_x64: int,
    sqrt_ratio_a_x64: int,
    sqrt_ratio_b_x64: int,
    amount_0: int,
    amount_1: int,
) -> int:
    """Maximum liquidity obtainable from both amounts at the current price."""
    a, b = _ordered(sqrt_ratio_a_x64, sqrt_ratio_b_x64)
    if sqrt_ratio_x64 <= a:
        return get_liquidity_from_amount_0(a, b, amount_0)
    if sqrt_ratio_x64 < b:
        return min(
            get_liquidity_from_amount_0(sqrt_ratio_x64, b, amount_0),
            get_liquidity_from_amount_1(a, sqrt_ratio_x64, amount_1),
        )
    return get_liquidity_from_amount_1(a, b, amount_1)


def get_liquidity_from_single_amount_0(
    sqrt_ratio_x64: int, sqrt_ratio_a_x64: int, sqrt_ratio_b_x64: int, amount_0: int
) -> int:
    """Liquidity obtainable from ``amount_0`` alone; zero above the range."""
    a, b = _ordered(sqrt_ratio_a_x64, sqrt_ratio_b_x64)
    if sqrt_ratio_x64 <= a:
        return get_liquidity_from_amount_0(a, b, amount_0)
    if sqrt_ratio_x64 < b:
        return get_liquidity_from_amount_0(sqrt_ratio_x64, b, amount_0)
    return 0


def get_liquidity_from_single_amount_1(
    sqrt_ratio_x64: int, sqrt_ratio_a_x64: int, sqrt_ratio_b_x64: int, amount_1: int
) -> int:
    """Liquidity obtainable from ``amount_1`` alone; zero below the range."""
    a, b = _ordered(sqrt_ratio_a_x64, sqrt_ratio_b_x64)
    if sqrt_ratio_x64 <= a:
        return 0
    if sqrt_ratio_x64 < b:
        return get_liquidity_from_amount_1(a, sqrt_ratio_x64, amount_1)
    return get_liquidity_from_amount_1(a, b, amount_1)


def get_delta_amount_0_unsigned(
    sqrt_ratio_a_x64: int, sqrt_ratio_b_x64: int, liquidity: int, round_up: bool
) -> int:
    """Token_0 amount for ``liquidity`` over the range: L * (√Pb - √Pa) / (√Pb * √Pa).

    Raises ValueError if the lower price is zero and ArithmeticOverflow if the
    result does not fit u64.
    """
    a, b = _ordered(sqrt_ratio_a_x64, sqrt_ratio_b_x64)
    if a <= 0:
        raise ValueError("lower sqrt price must be positive")
    numerator_1 = liquidity << RESOLUTION
    numerator_2 = b - a
    if round_up:
        result = div_rounding_up(mul_div_ceil(numerator_1, numerator_2, b), a)
    else:
        result = mul_div_floor(numerator_1, numerator_2, b) // a
    return _as_u64(result)


def get_delta_amount_1_unsigned(
    sqrt_ratio_a_x64: int, sqrt_ratio_b_x64: int, liquidity: int, round_up: bool
) -> int:
    """Token_1 amount for ``liquidity`` over the range: L * (√Pb - √Pa)."""
    a, b = _ordered(sqrt_ratio_a_x64, sqrt_ratio_b_x64)
    rounding = mul_div_ceil if round_up else mul_div_floor
    return _as_u64(rounding(liquidity, b - a, Q64))


def get_delta_amount_0_signed(sqrt_ratio_a_x64: int, sqrt_ratio_b_x64: int, liquidity: int) -> int:
    """Token_0 amount for a signed liquidity change; rounds up when adding."""
    if liquidity < 0:
        return get_delta_amount_0_unsigned(
            sqrt_ratio_a_x64, sqrt_ratio_b_x64, checked_u128(-liquidity), False
        )
    return get_delta_amount_0_unsigned(
        sqrt_ratio_a_x64, sqrt_ratio_b_x64, checked_u128(liquidity), True
    )


def get_delta_amount_1_signed(sqrt_ratio_a_x64: int, sqrt_ratio_b_x64: int, liquidity: int) -> int:
    """Token_1 amount for a signed liquidity change; rounds up when adding."""
    if liquidity < 0:
        return get_delta_amount_1_unsigned(
            sqrt_ratio_a_x64, sqrt_ratio_b_x64, checked_u128(-liquidity), False
        )
    return get_delta_amount_1_unsigned(
        sqrt_ratio_a_x64, sqrt_ratio_b_x64, checked_u128(liquidity), True
    )


def get_delta_amounts_signed(
    tick_current: int,
    sqrt_price_x64_current: int,
    tick_lower: int,
    tick_upper: int,
    liquidity_delta: int,
) -> tuple[int, int]:
    """Return (amount_0, amount_1) for a liquidity change on [tick_lower, tick_upper)."""
    amount_0 = 0
    amount_1 = 0
    if tick_current < tick_lower:
        amount_0 = get_delta_amount_0_signed(
            get_sqrt_price_at_tick(tick_lower),
            get_sqrt_price_at_tick(tick_upper),
            liquidity_delta,
        )
    elif tick_current < tick_upper:
        amount_0 = get_delta_amount_0_signed(
            sqrt_price_x64_current, get_sqrt_price_at_tick(tick_upper), liquidity_delta
        )
        amount_1 = get_delta_amount_1_signed(
            get_sqrt_price_at_tick(tick_lower), sqrt_price_x64_current, liquidity_delta
        )
    else:
        amount_1 = get_delta_amount_1_signed(
            get_sqrt_price_at_tick(tick_lower),
            get_sqrt_price_at_tick(tick_upper),
            liquidity_delta,
        )
    return amount_0, amount_1