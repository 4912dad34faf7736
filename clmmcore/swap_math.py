"""A single step of a swap within one price range."""

from __future__ import annotations

from dataclasses import dataclass

from . import liquidity_math, sqrt_price_math
from .bits import U64_MAX, ArithmeticOverflow
from .config import FEE_RATE_DENOMINATOR_VALUE
from .full_math import mul_div_ceil, mul_div_floor

__all__ = ["SwapStep", "compute_swap_step"]


@dataclass
class SwapStep:
    """Result of a swap step."""

    sqrt_price_next_x64: int = 0
    amount_in: int = 0
    amount_out: int = 0
    fee_amount: int = 0


def compute_swap_step(
    sqrt_price_current_x64: int,
    sqrt_price_target_x64: int,
    liquidity: int,
    amount_remaining: int,
    fee_rate: int,
    is_base_input: bool,
    zero_for_one: bool,
) -> SwapStep:
    """Swap ``amount_remaining`` in (or out) towards the target price."""
    current = sqrt_price_current_x64
    target = sqrt_price_target_x64
    step = SwapStep()

    if is_base_input:
        amount_remaining_less_fee = mul_div_floor(
            amount_remaining,
            FEE_RATE_DENOMINATOR_VALUE - fee_rate,
            FEE_RATE_DENOMINATOR_VALUE,
            U64_MAX,
        )
        if zero_for_one:
            step.amount_in = liquidity_math.get_delta_amount_0_unsigned(
                target, current, liquidity, True
            )
        else:
            step.amount_in = liquidity_math.get_delta_amount_1_unsigned(
                current, target, liquidity, True
            )
        if amount_remaining_less_fee >= step.amount_in:
            step.sqrt_price_next_x64 = target
        else:
            step.sqrt_price_next_x64 = sqrt_price_math.get_next_sqrt_price_from_input(
                current, liquidity, amount_remaining_less_fee, zero_for_one
            )
    else:
        if zero_for_one:
            step.amount_out = liquidity_math.get_delta_amount_1_unsigned(
                target, current, liquidity, False
            )
        else:
            step.amount_out = liquidity_math.get_delta_amount_0_unsigned(
                current, target, liquidity, False
            )
        if amount_remaining >= step.amount_out:
            step.sqrt_price_next_x64 = target
        else:
            step.sqrt_price_next_x64 = sqrt_price_math.get_next_sqrt_price_from_output(
                current, liquidity, amount_remaining, zero_for_one
            )

    reached_target = target == step.sqrt_price_next_x64
    next_price = step.sqrt_price_next_x64
    if zero_for_one:
        if not (reached_target and is_base_input):
            step.amount_in = liquidity_math.get_delta_amount_0_unsigned(
                next_price, current, liquidity, True
            )
        if not (reached_target and not is_base_input):
            step.amount_out = liquidity_math.get_delta_amount_1_unsigned(
                next_price, current, liquidity, False
            )
    else:
        if not (reached_target and is_base_input):
            step.amount_in = liquidity_math.get_delta_amount_1_unsigned(
                current, next_price, liquidity, True
            )
        if not (reached_target and not is_base_input):
            step.amount_out = liquidity_math.get_delta_amount_0_unsigned(
                current, next_price, liquidity, False
            )

    if not is_base_input and step.amount_out > amount_remaining:
        step.amount_out = amount_remaining

    if is_base_input and next_price != target:
        # The target was not reached: the leftover input is taken as fee.
        fee = amount_remaining - step.amount_in
        if fee < 0:
            raise ArithmeticOverflow("amount in exceeds amount remaining")
        step.fee_amount = fee
    else:
        step.fee_amount = mul_div_ceil(
            step.amount_in, fee_rate, FEE_RATE_DENOMINATOR_VALUE - fee_rate, U64_MAX
        )
    return step