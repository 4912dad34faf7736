import pytest
from hypothesis import given, strategies as st

from clmmcore.bits import ArithmeticOverflow, U128_MAX, U256_MAX, U64_MAX
from clmmcore.full_math import mul_div_ceil, mul_div_floor, to_underflow_u64

u64s = st.integers(min_value=0, max_value=U64_MAX)
nonzero_u64s = st.integers(min_value=1, max_value=U64_MAX)
u128s = st.integers(min_value=1, max_value=U128_MAX)


@pytest.mark.parametrize(
    "args, expected",
    [((3, 4, 2), 6), ((5, 2, 3), 3), ((3, 3, 2), 4)],
)
def test_floor_examples(args, expected):
    assert mul_div_floor(*args) == expected


@pytest.mark.parametrize(
    "args, expected",
    [((3, 4, 2), 6), ((5, 2, 3), 4), ((3, 3, 2), 5)],
)
def test_ceil_examples(args, expected):
    assert mul_div_ceil(*args) == expected


def test_u64_limit_overflow():
    with pytest.raises(ArithmeticOverflow):
        mul_div_floor(U64_MAX, 2, 1, U64_MAX)
    with pytest.raises(ArithmeticOverflow):
        mul_div_ceil(U64_MAX, 3, 2, U64_MAX)


def test_large_intermediate_product_ok():
    assert mul_div_floor(U128_MAX, U128_MAX, U128_MAX) == U128_MAX
    assert mul_div_ceil(U128_MAX, U128_MAX, U128_MAX) == U128_MAX


def test_result_above_u128_rejected_by_default():
    with pytest.raises(ArithmeticOverflow):
        mul_div_floor(U128_MAX, 2, 1)


def test_product_beyond_256_bits_rejected():
    with pytest.raises(ArithmeticOverflow):
        mul_div_floor(U256_MAX, 2, U256_MAX, U256_MAX)


def test_zero_denominator():
    with pytest.raises(ZeroDivisionError):
        mul_div_floor(1, 1, 0)
    with pytest.raises(ZeroDivisionError):
        mul_div_ceil(1, 1, 0)


def test_negative_operand():
    with pytest.raises(ValueError):
        mul_div_floor(-1, 1, 1)


@given(val=u64s, num=u64s, den=nonzero_u64s)
def test_scale_floor_u64(val, num, den):
    product = val * num
    try:
        result = mul_div_floor(val, num, den, U64_MAX)
    except ArithmeticOverflow:
        assert product >= (U64_MAX + 1) * den
    else:
        assert result <= U64_MAX
        assert result * den <= product < (result + 1) * den


@given(val=u64s, num=u64s, den=nonzero_u64s)
def test_scale_ceil_u64(val, num, den):
    product = val * num
    try:
        result = mul_div_ceil(val, num, den, U64_MAX)
    except ArithmeticOverflow:
        assert product > U64_MAX * den
    else:
        assert result <= U64_MAX
        assert (result - 1) * den < product <= result * den


@given(val=u128s, num=u128s, den=u128s)
def test_scale_floor_u128(val, num, den):
    product = val * num
    try:
        result = mul_div_floor(val, num, den)
    except ArithmeticOverflow:
        assert product >= (U128_MAX + 1) * den
    else:
        assert result <= U128_MAX
        assert result * den <= product < (result + 1) * den


@given(val=u128s, num=u128s, den=u128s)
def test_scale_ceil_u128(val, num, den):
    product = val * num
    try:
        result = mul_div_ceil(val, num, den)
    except ArithmeticOverflow:
        assert product > U128_MAX * den
    else:
        assert result <= U128_MAX
        assert (result - 1) * den < product <= result * den


@pytest.mark.parametrize(
    "value, expected",
    [(5, 5), (U64_MAX - 1, U64_MAX - 1), (U64_MAX, 0), (1 << 100, 0)],
)
def test_to_underflow_u64(value, expected):
    assert to_underflow_u64(value) == expected