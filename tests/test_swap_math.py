import pytest
from hypothesis import assume, given, settings
from hypothesis import strategies as st

from clmmcore.config import FEE_RATE_DENOMINATOR_VALUE
from clmmcore.swap_math import compute_swap_step
from clmmcore.tick_math import MAX_SQRT_PRICE_X64, MIN_SQRT_PRICE_X64, get_sqrt_price_at_tick

U32_MAX = (1 << 32) - 1
U64_MAX = (1 << 64) - 1


@settings(max_examples=300, deadline=None)
@given(
    sqrt_price_current_x64=st.integers(MIN_SQRT_PRICE_X64, MAX_SQRT_PRICE_X64 - 1),
    sqrt_price_target_x64=st.integers(MIN_SQRT_PRICE_X64, MAX_SQRT_PRICE_X64 - 1),
    liquidity=st.integers(1, U32_MAX - 1),
    amount_remaining=st.integers(1, U64_MAX - 1),
    fee_rate=st.integers(1, FEE_RATE_DENOMINATOR_VALUE // 2 - 1),
    is_base_input=st.booleans(),
)
def test_compute_swap_step(
    sqrt_price_current_x64,
    sqrt_price_target_x64,
    liquidity,
    amount_remaining,
    fee_rate,
    is_base_input,
):
    assume(sqrt_price_current_x64 != sqrt_price_target_x64)
    zero_for_one = sqrt_price_current_x64 > sqrt_price_target_x64
    step = compute_swap_step(
        sqrt_price_current_x64,
        sqrt_price_target_x64,
        liquidity,
        amount_remaining,
        fee_rate,
        is_base_input,
        zero_for_one,
    )
    amount_used = step.amount_in + step.fee_amount if is_base_input else step.amount_out
    if step.sqrt_price_next_x64 != sqrt_price_target_x64:
        assert amount_used == amount_remaining
    else:
        assert amount_used <= amount_remaining
    assert min(sqrt_price_current_x64, sqrt_price_target_x64) <= step.sqrt_price_next_x64
    assert step.sqrt_price_next_x64 <= max(sqrt_price_current_x64, sqrt_price_target_x64)


def test_large_input_reaches_target():
    current = get_sqrt_price_at_tick(0)
    target = get_sqrt_price_at_tick(-10)
    step = compute_swap_step(current, target, 10**12, 10**15, 3000, True, True)
    assert step.sqrt_price_next_x64 == target
    assert step.amount_in + step.fee_amount <= 10**15
    assert step.amount_out > 0


def test_small_input_stops_before_target():
    current = get_sqrt_price_at_tick(0)
    target = get_sqrt_price_at_tick(100)
    step = compute_swap_step(current, target, 10**18, 1000, 3000, True, False)
    assert step.sqrt_price_next_x64 != target
    assert step.amount_in + step.fee_amount == 1000
    assert current <= step.sqrt_price_next_x64 < target


def test_exact_output_is_capped():
    current = get_sqrt_price_at_tick(0)
    target = get_sqrt_price_at_tick(-100)
    step = compute_swap_step(current, target, 10**18, 1, 3000, False, True)
    assert step.amount_out <= 1
    assert target <= step.sqrt_price_next_x64 <= current


def test_fee_rate_above_denominator_rejected():
    current = get_sqrt_price_at_tick(0)
    target = get_sqrt_price_at_tick(-100)
    with pytest.raises(ValueError):
        compute_swap_step(current, target, 10**12, 1000, FEE_RATE_DENOMINATOR_VALUE + 1, True, True)