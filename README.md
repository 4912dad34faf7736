# clmmcore

Exact integer arithmetic and account-state models for a concentrated-liquidity
automated market maker. Prices are square roots in Q64.64 fixed point, and
liquidity sits in tick ranges. All values are plain Python integers. The code
checks them against the widths they must fit, such as u64 and u128, and
follows fixed rounding rules. Account keys are 32-byte `bytes` values, and
`clmmcore.config.DEFAULT_PUBKEY` (32 zero bytes) stands for "no key".

## Installation

```
pip install .
```

To install the test dependencies as well:

```
pip install ".[test]"
```

## Modules

- `clmmcore.bits`: the constants `Q64`, `RESOLUTION`, `U64_MAX`, `U128_MAX`,
  `U256_MAX`, `I128_MAX` and `I128_MIN`.
  - Fixed-width helpers: `mask`, `shl`, `leading_zeros` and `trailing_zeros`.
  - `checked_u128` and `checked_i128`.
  - `div_rounding_up`, which rounds up and raises `ZeroDivisionError` when
    the divisor is zero.
  - The base error `AmmError` and `ArithmeticOverflow`.
- `clmmcore.full_math`: `mul_div_floor` and `mul_div_ceil`. Both compute
  `value * num / denom` and take an upper `limit` on the result, which is
  u128 by default. They raise `ArithmeticOverflow` when the result is too
  large. The module also has `to_underflow_u64`.
- `clmmcore.tick_math`: `get_sqrt_price_at_tick` and `get_tick_at_sqrt_price`,
  the range constants `MIN_TICK`, `MAX_TICK`, `MIN_SQRT_PRICE_X64` and
  `MAX_SQRT_PRICE_X64`, and the errors `TickOutOfRangeError` and
  `SqrtPriceOutOfRangeError`.
- `clmmcore.sqrt_price_math`: the next square-root price after a given input
  or output amount of token_0 or token_1.
- `clmmcore.liquidity_math`: conversions between liquidity and token amounts,
  including `get_delta_amounts_signed` for a tick range.
  - `add_delta` raises `LiquidityAddError` when the sum overflows u128.
  - It raises `LiquiditySubError` when the result would go below zero.
- `clmmcore.swap_math`: `compute_swap_step` works out one swap step towards a
  target price and returns a `SwapStep` with `sqrt_price_next_x64`,
  `amount_in`, `amount_out` and `fee_amount`.
- `clmmcore.tick_array_bitmap`: searches the 1024-bit tick-array bitmap.
  - The bitmap is given either as an integer or as 16 little-endian 64-bit
    words.
  - `check_current_tick_array_is_initialized` checks the tick array that
    holds a given tick.
  - `next_initialized_tick_array_start_index` finds the next initialized
    tick array.
  - `get_bitmap_tick_boundary` and `max_tick_in_tickarray_bitmap` give the
    tick bounds the bitmap covers.
- `clmmcore.config`: `AmmConfig`, which holds the fee rates, tick spacing and
  owners. Its `is_authorized` raises `NotApprovedError`. The module also has
  `ConfigChangeEvent` and `FEE_RATE_DENOMINATOR_VALUE` (1,000,000).
- `clmmcore.operation_account`: `OperationState`, with a fixed-size list of
  10 operation owners and one of 100 whitelisted mints.
  - Adding owners gives a deduplicated, sorted list.
  - Adding mints keeps them in insertion order, without duplicates.
  - Going past either size raises `ValueError`.
- `clmmcore.oracle`: `Observation` and `ObservationState`, a ring buffer of
  1000 price observations.
  - `update_check` records an observation only when at least the given
    duration has passed and the price has changed. It returns the index it
    wrote, or `None` when it wrote nothing.
  - `block_timestamp()` returns the current Unix time truncated to 32 bits.
- `clmmcore.personal_position`: `PersonalPositionState`, whose
  `update_rewards` adds the rewards a position has earned. The module also
  has `PositionRewardInfo` and the position events
  `CreatePersonalPositionEvent`, `IncreaseLiquidityEvent`,
  `DecreaseLiquidityEvent`, `LiquidityCalculateEvent`,
  `CollectPersonalFeeEvent` and `UpdateRewardInfosEvent`.

## Example

```python
from clmmcore.tick_math import get_sqrt_price_at_tick, get_tick_at_sqrt_price
from clmmcore.swap_math import compute_swap_step

price = get_sqrt_price_at_tick(-28861)
assert get_tick_at_sqrt_price(price) == -28861

step = compute_swap_step(
    sqrt_price_current_x64=get_sqrt_price_at_tick(100),
    sqrt_price_target_x64=get_sqrt_price_at_tick(0),
    liquidity=10**12,
    amount_remaining=1_000_000,
    fee_rate=2500,
    is_base_input=True,
    zero_for_one=True,
)
print(step.amount_in, step.amount_out, step.fee_amount)
```

## Errors

Errors that are specific to the domain derive from `AmmError`. Examples are a
tick out of range, a result that overflows its width, or a signer that is not
approved. Malformed arguments raise the standard exceptions instead:

- A zero price or zero liquidity passed to the next-price functions raises
  `ValueError`.
- A bitmap of the wrong size raises `ValueError`.
- A zero denominator in `mul_div_floor` or `mul_div_ceil` raises
  `ZeroDivisionError`.

## What it does not do

This package is a library of arithmetic and in-memory state. It does not
contain:

- pool or tick-array state, and no swap that crosses ticks;
- handlers for creating pools, opening positions or collecting fees;
- token transfers;
- reading or writing accounts in any serialized form.

It has no command-line interface and no storage.

## Running the tests

```
pytest
```