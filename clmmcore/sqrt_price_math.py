"""Next square-root price after adding or removing an amount of a token."""

from __future__ import annotations

from .bits import RESOLUTION, U128_MAX, U256_MAX, ArithmeticOverflow, checked_u128, div_rounding_up
from .full_math import mul_div_ceil

__all__ = [
    "get_next_sqrt_price_from_amount_0_rounding_up",
    "get_next_sqrt_price_from_amount_1_rounding_down",
    "get_next_sqrt_price_from_input",
    "get_next_sqrt_price_from_output",
]


def get_next_sqrt_price_from_amount_0_rounding_up(
    sqrt_price_x64: int, liquidity: int, amount: int, add: bool
) -> int:
    """Return the next sqrt price after a change of token_0, rounded up.

    Uses ``sqrt_p * L / (L + amount * sqrt_p)`` and falls back to
    ``L / (L / sqrt_p + amount)`` when the first form would overflow.
    """
    if amount == 0:
        return sqrt_price_x64
    numerator_1 = liquidity << RESOLUTION
    product = amount * sqrt_price_x64

    if add:
        denominator = numerator_1 + product
        if product <= U256_MAX and denominator <= U256_MAX:
            return checked_u128(mul_div_ceil(numerator_1, sqrt_price_x64, denominator))
        fallback = numerator_1 // sqrt_price_x64 + amount
        if fallback > U256_MAX:
            raise ArithmeticOverflow("arithmetic operation overflow")
        return checked_u128(div_rounding_up(numerator_1, fallback))

    if product > U256_MAX:
        raise ArithmeticOverflow("arithmetic operation overflow")
    denominator = numerator_1 - product
    if denominator < 0:
        raise ArithmeticOverflow("amount out exceeds the reserve of token_0")
    return checked_u128(mul_div_ceil(numerator_1, sqrt_price_x64, denominator))


def get_next_sqrt_price_from_amount_1_rounding_down(
    sqrt_price_x64: int, liquidity: int, amount: int, add: bool
) -> int:
    """Return the next sqrt price after a change of token_1, rounded down.

    Uses ``sqrt_p + amount / L``.
    """
    shifted = amount << RESOLUTION
    if add:
        result = sqrt_price_x64 + checked_u128(shifted // liquidity)
        if result > U128_MAX:
            raise ArithmeticOverflow("sqrt price overflow")
        return result
    result = sqrt_price_x64 - checked_u128(div_rounding_up(shifted, liquidity))
    if result < 0:
        raise ArithmeticOverflow("sqrt price underflow")
    return result


def _check_price_and_liquidity(sqrt_price_x64: int, liquidity: int) -> None:
    if sqrt_price_x64 <= 0:
        raise ValueError("sqrt price must be positive")
    if liquidity <= 0:
        raise ValueError("liquidity must be positive")


def get_next_sqrt_price_from_input(
    sqrt_price_x64: int, liquidity: int, amount_in: int, zero_for_one: bool
) -> int:
    """Return the next sqrt price given an input amount of token_0 or token_1.

    Raises ValueError if price or liquidity is zero.
    """
    _check_price_and_liquidity(sqrt_price_x64, liquidity)
    if zero_for_one:
        return get_next_sqrt_price_from_amount_0_rounding_up(
            sqrt_price_x64, liquidity, amount_in, True
        )
    return get_next_sqrt_price_from_amount_1_rounding_down(
        sqrt_price_x64, liquidity, amount_in, True
    )


def get_next_sqrt_price_from_output(
    sqrt_price_x64: int, liquidity: int, amount_out: int, zero_for_one: bool
) -> int:
    """Return the next sqrt price given an output amount of token_0 or token_1.

    Raises ValueError if price or liquidity is zero.
    """
    _check_price_and_liquidity(sqrt_price_x64, liquidity)
    if zero_for_one:
        return get_next_sqrt_price_from_amount_1_rounding_down(
            sqrt_price_x64, liquidity, amount_out, False
        )
    return get_next_sqrt_price_from_amount_0_rounding_up(
        sqrt_price_x64, liquidity, amount_out, False
    )