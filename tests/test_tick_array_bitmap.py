import pytest

from clmmcore.tick_array_bitmap import (
    InvalidTickIndexError,
    check_current_tick_array_is_initialized,
    get_bitmap_tick_boundary,
    least_significant_bit,
    max_tick_in_tickarray_bitmap,
    most_significant_bit,
    next_initialized_tick_array_start_index,
)
from clmmcore.tick_math import MAX_TICK, MIN_TICK

FULL = (1 << 1024) - 1

EIGEN_WORDS = [
    1,
    0,
    0,
    0,
    0,
    0,
    9223372036854775808,
    16140901064495857665,
    7,
    1,
    0,
    0,
    0,
    0,
    0,
    9223372036854775808,
]


def _walk(start, zero_for_one, steps=5, tick_spacing=10, bit_map=FULL):
    found_indexes = []
    current = start
    for _ in range(steps):
        found, index = next_initialized_tick_array_start_index(
            bit_map, current, tick_spacing, zero_for_one
        )
        if not found:
            return found_indexes, index
        found_indexes.append(index)
        current = index
    return found_indexes, None


def test_max_tick_in_bitmap():
    assert max_tick_in_tickarray_bitmap(1) == 30720
    assert max_tick_in_tickarray_bitmap(10) == 307200


def test_check_current_tick_array_is_initialized():
    bit_map = [1] + [0] * 14 + [1 << 63]
    initialized = set()
    tick = -307200
    for _ in range(1024):
        is_set, start = check_current_tick_array_is_initialized(bit_map, tick, 10)
        if is_set:
            initialized.add(start)
        tick += 600
    assert initialized == {-307200, 306600}


def test_check_current_tick_array_start_rounds_down():
    assert check_current_tick_array_is_initialized(FULL, -1, 10) == (True, -600)
    assert check_current_tick_array_is_initialized(0, 599, 10) == (False, 0)


def test_check_current_tick_out_of_range():
    with pytest.raises(InvalidTickIndexError):
        check_current_tick_array_is_initialized(FULL, MAX_TICK + 1, 10)


def test_positive_price_down():
    found, end = _walk(306600, True)
    assert found == [306000, 305400, 304800, 304200, 303600]
    assert end is None


def test_negative_price_down():
    found, end = _walk(-307200 + 600 + 600, True)
    assert found == [-306600, -307200]
    assert end == -307200


def test_price_down_cross_zero():
    found, _ = _walk(1800, True)
    assert found == [1200, 600, 0, -600, -1200]


def test_positive_price_up():
    found, end = _walk(306600 - 600 - 600, False)
    assert found == [306000, 306600]
    assert end == 306600


def test_negative_price_up():
    found, _ = _walk(-307200, False)
    assert found == [-306600, -306000, -305400, -304800, -304200]


def test_price_up_cross_zero():
    found, _ = _walk(-1800, False)
    assert found == [-1200, -600, 0, 600, 1200]


@pytest.mark.parametrize(
    "start, zero_for_one, expected",
    [
        (0, True, -600),
        (-600, True, -1200),
        (-1200, True, -1800),
        (-1800, True, -38400),
        (-38400, True, -39000),
        (-39000, True, -307200),
        (0, False, 600),
        (600, False, 1200),
        (1200, False, 38400),
        (38400, False, 306600),
    ],
)
def test_next_with_eigenvalues(start, zero_for_one, expected):
    _, index = next_initialized_tick_array_start_index(EIGEN_WORDS, start, 10, zero_for_one)
    assert index == expected


def test_next_not_found_returns_boundary():
    assert next_initialized_tick_array_start_index(0, 0, 10, True) == (False, -307200)
    assert next_initialized_tick_array_start_index(0, 0, 10, False) == (False, 306600)


def test_next_boundary():
    start = (MIN_TICK // 60 * 1 + (1 if MIN_TICK % 60 else 0) - 1) * 60
    assert start == -443640
    found, index = next_initialized_tick_array_start_index(FULL, start, 1, False)
    assert found is False
    assert index == start

    start = (MAX_TICK // 60) * 60
    found, index = next_initialized_tick_array_start_index(FULL, start, 1, True)
    assert found is False
    assert index == start


def test_next_rejects_invalid_start():
    with pytest.raises(InvalidTickIndexError):
        next_initialized_tick_array_start_index(FULL, 10, 10, True)


def test_get_bitmap_tick_boundary():
    assert get_bitmap_tick_boundary(-430080, 1) == (-430080, -399360)
    assert get_bitmap_tick_boundary(-430140, 1) == (-460800, -430080)
    assert get_bitmap_tick_boundary(430080, 1) == (430080, 460800)
    assert get_bitmap_tick_boundary(430020, 1) == (399360, 430080)


def test_significant_bits():
    assert most_significant_bit(0) is None
    assert least_significant_bit(0) is None
    assert most_significant_bit(1) == 1023
    assert least_significant_bit(1) == 0
    assert most_significant_bit(1 << 1023) == 0
    assert least_significant_bit(1 << 1023) == 1023
    assert least_significant_bit([0, 1] + [0] * 14) == 64