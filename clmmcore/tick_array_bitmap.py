"""Bitmap of initialized tick arrays and searches for the next initialized one."""

from __future__ import annotations

from collections.abc import Iterable

from .bits import AmmError, leading_zeros, shl, trailing_zeros
from .tick_math import MAX_TICK, MIN_TICK

__all__ = [
    "TICK_ARRAY_SIZE",
    "TICK_ARRAY_BITMAP_SIZE",
    "BITMAP_BITS",
    "InvalidTickIndexError",
    "max_tick_in_tickarray_bitmap",
    "get_bitmap_tick_boundary",
    "most_significant_bit",
    "least_significant_bit",
    "check_current_tick_array_is_initialized",
    "next_initialized_tick_array_start_index",
]

# Number of ticks held by one tick array.
TICK_ARRAY_SIZE = 60
# Number of tick arrays on each side of zero covered by the bitmap.
TICK_ARRAY_BITMAP_SIZE = 512
BITMAP_BITS = 1024

_WORD_BITS = 64


class InvalidTickIndexError(AmmError, ValueError):
    """A tick or tick-array start index is not valid."""


def _as_int(bit_map: int | Iterable[int]) -> int:
    """Accept a 1024-bit integer or its 16 little-endian 64-bit words."""
    if isinstance(bit_map, int):
        if bit_map < 0 or bit_map.bit_length() > BITMAP_BITS:
            raise ValueError("bitmap must be a non-negative 1024-bit integer")
        return bit_map
    words = list(bit_map)
    if len(words) != BITMAP_BITS // _WORD_BITS:
        raise ValueError("bitmap must have 16 words")
    return sum(word << (_WORD_BITS * pos) for pos, word in enumerate(words))


def _tick_count(tick_spacing: int) -> int:
    return TICK_ARRAY_SIZE * tick_spacing


def _array_start_index(tick: int, tick_spacing: int) -> int:
    count = _tick_count(tick_spacing)
    return (tick // count) * count


def _is_valid_start_index(start_index: int, tick_spacing: int) -> bool:
    if start_index % _tick_count(tick_spacing) != 0:
        return False
    return _array_start_index(MIN_TICK, tick_spacing) <= start_index <= MAX_TICK


def _compressed(tick: int, multiplier: int) -> int:
    # Floor division rounds towards negative infinity, as required here.
    return tick // multiplier + TICK_ARRAY_BITMAP_SIZE


def max_tick_in_tickarray_bitmap(tick_spacing: int) -> int:
    """Number of ticks covered by one side of the bitmap."""
    return tick_spacing * TICK_ARRAY_SIZE * TICK_ARRAY_BITMAP_SIZE


def get_bitmap_tick_boundary(tick_array_start_index: int, tick_spacing: int) -> tuple[int, int]:
    """Return the (min, max) tick bounds of the bitmap holding the tick array."""
    ticks_in_one_bitmap = max_tick_in_tickarray_bitmap(tick_spacing)
    m = abs(tick_array_start_index) // ticks_in_one_bitmap
    if tick_array_start_index < 0 and abs(tick_array_start_index) % ticks_in_one_bitmap != 0:
        m += 1
    min_value = ticks_in_one_bitmap * m
    if tick_array_start_index < 0:
        return -min_value, -min_value + ticks_in_one_bitmap
    return min_value, min_value + ticks_in_one_bitmap


def most_significant_bit(x: int | Iterable[int]) -> int | None:
    """Leading-zero count of the 1024-bit value, or None if it is zero."""
    value = _as_int(x)
    if value == 0:
        return None
    return leading_zeros(value, BITMAP_BITS)


def least_significant_bit(x: int | Iterable[int]) -> int | None:
    """Trailing-zero count of the 1024-bit value, or None if it is zero."""
    value = _as_int(x)
    if value == 0:
        return None
    return trailing_zeros(value, BITMAP_BITS)


def check_current_tick_array_is_initialized(
    bit_map: int | Iterable[int], tick_current: int, tick_spacing: int
) -> tuple[bool, int]:
    """Return whether the tick array holding ``tick_current`` is set, and its start index.

    Raises InvalidTickIndexError if the tick is outside [MIN_TICK, MAX_TICK].
    """
    if tick_current < MIN_TICK or tick_current > MAX_TICK:
        raise InvalidTickIndexError(f"tick {tick_current} is out of range")
    value = _as_int(bit_map)
    multiplier = tick_spacing * TICK_ARRAY_SIZE
    compressed = _compressed(tick_current, multiplier)
    bit_pos = abs(compressed)
    initialized = value & shl(1, bit_pos, BITMAP_BITS) != 0
    return initialized, (compressed - TICK_ARRAY_BITMAP_SIZE) * multiplier


def next_initialized_tick_array_start_index(
    bit_map: int | Iterable[int],
    last_tick_array_start_index: int,
    tick_spacing: int,
    zero_for_one: bool,
) -> tuple[bool, int]:
    """Find the next initialized tick array after ``last_tick_array_start_index``.

    Searches downwards when ``zero_for_one`` is true, upwards otherwise.
    Returns (found, start_index); when nothing is found the start index is the
    boundary of the bitmap, or the given index if already at the boundary.
    """
    if not _is_valid_start_index(last_tick_array_start_index, tick_spacing):
        raise InvalidTickIndexError(
            f"{last_tick_array_start_index} is not a valid tick array start index"
        )
    value = _as_int(bit_map)
    tick_boundary = max_tick_in_tickarray_bitmap(tick_spacing)
    count = _tick_count(tick_spacing)
    if zero_for_one:
        next_start = last_tick_array_start_index - count
    else:
        next_start = last_tick_array_start_index + count

    if next_start < -tick_boundary or next_start >= tick_boundary:
        return False, last_tick_array_start_index

    multiplier = tick_spacing * TICK_ARRAY_SIZE
    bit_pos = abs(_compressed(next_start, multiplier))

    if zero_for_one:
        # Search from higher bits to lower bits.
        offset_bit_map = shl(value, BITMAP_BITS - bit_pos - 1, BITMAP_BITS)
        next_bit = most_significant_bit(offset_bit_map)
        if next_bit is None:
            return False, -tick_boundary
        return True, (bit_pos - next_bit - TICK_ARRAY_BITMAP_SIZE) * multiplier

    # Search from lower bits to higher bits.
    offset_bit_map = value >> bit_pos
    next_bit = least_significant_bit(offset_bit_map)
    if next_bit is None:
        return False, tick_boundary - count
    return True, (bit_pos + next_bit - TICK_ARRAY_BITMAP_SIZE) * multiplier