import pytest

from clmmcore.bits import (
    ArithmeticOverflow,
    AmmError,
    I128_MAX,
    U128_MAX,
    U64_MAX,
    checked_i128,
    checked_u128,
    div_rounding_up,
    leading_zeros,
    mask,
    shl,
    trailing_zeros,
)


def test_divide_by_factor():
    assert div_rounding_up(4, 2) == 2


def test_divide_and_round_up():
    assert div_rounding_up(4, 3) == 2


def test_divide_by_zero():
    with pytest.raises(ZeroDivisionError):
        div_rounding_up(2, 0)


def test_div_rounding_up_large_values():
    assert div_rounding_up(U128_MAX, 2) == 1 << 127


def test_mask_truncates():
    assert mask((1 << 64) + 5, 64) == 5
    assert mask(U128_MAX, 64) == U64_MAX


def test_leading_zeros():
    assert leading_zeros(0, 1024) == 1024
    assert leading_zeros(1, 1024) == 1023
    assert leading_zeros(1 << 1023, 1024) == 0
    assert leading_zeros(U64_MAX, 128) == 64


def test_trailing_zeros():
    assert trailing_zeros(0, 1024) == 1024
    assert trailing_zeros(1, 1024) == 0
    assert trailing_zeros(1 << 63, 64) == 63
    assert trailing_zeros(1 << 1023, 1024) == 1023


def test_shl_drops_high_bits():
    assert shl(U128_MAX, 1, 128) == U128_MAX - 1
    assert shl(1, 128, 128) == 0
    assert shl(3, 4, 128) == 48


def test_shl_negative_shift():
    with pytest.raises(ValueError):
        shl(1, -1, 64)


def test_checked_u128_accepts_range():
    assert checked_u128(U128_MAX) == U128_MAX
    assert checked_u128(0) == 0


@pytest.mark.parametrize("value", [U128_MAX + 1, -1])
def test_checked_u128_rejects(value):
    with pytest.raises(ArithmeticOverflow):
        checked_u128(value)


def test_checked_i128():
    assert checked_i128(I128_MAX) == I128_MAX
    with pytest.raises(ArithmeticOverflow):
        checked_i128(I128_MAX + 1)


def test_overflow_is_amm_error():
    with pytest.raises(AmmError):
        checked_u128(1 << 200)