"""Price oracle: a ring buffer of time-weighted price observations."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import ClassVar

from .bits import Q64, U128_MAX, AmmError, ArithmeticOverflow
from .config import DEFAULT_PUBKEY
from .full_math import mul_div_floor

__all__ = [
    "OBSERVATION_SEED",
    "OBSERVATION_NUM",
    "Observation",
    "ObservationState",
    "block_timestamp",
]

OBSERVATION_SEED = "observation"
OBSERVATION_NUM = 1000

_U32_MASK = (1 << 32) - 1
_U128_MODULUS = 1 << 128


@dataclass
class Observation:
    """One entry of the observation ring buffer."""

    LEN: ClassVar[int] = 4 + 16 + 16 + 16

    block_timestamp: int = 0
    sqrt_price_x64: int = 0
    cumulative_time_price_x64: int = 0
    padding: int = 0


def _empty_observations() -> list[Observation]:
    return [Observation() for _ in range(OBSERVATION_NUM)]


@dataclass
class ObservationState:
    """Oracle account holding the observations of one pool."""

    LEN: ClassVar[int] = 8 + 1 + 32 + Observation.LEN * OBSERVATION_NUM + 16 * 5

    initialized: bool = False
    pool_id: bytes = DEFAULT_PUBKEY
    observations: list[Observation] = field(default_factory=_empty_observations)
    padding: tuple[int, int, int, int, int] = (0, 0, 0, 0, 0)

    def initialize(self, pool_id: bytes) -> None:
        """Bind a fresh observation state to ``pool_id``.

        Raises AmmError if the state is already in use.
        """
        if self.initialized:
            raise AmmError("observation state is already initialized")
        if self.pool_id != DEFAULT_PUBKEY:
            raise AmmError("observation state already belongs to a pool")
        self.pool_id = pool_id

    def update_check(
        self,
        block_timestamp: int,
        sqrt_price_x64: int,
        observation_index: int,
        observation_update_duration: int,
    ) -> int | None:
        """Record an observation if due and return the index written, else None.

        The first call writes at ``observation_index`` itself. Later calls write
        at the next slot (wrapping to 0 after the last), provided at least
        ``observation_update_duration`` seconds have passed and the price changed.
        The cumulative price wraps around modulo 2**128.
        """
        if not self.initialized:
            self.initialized = True
            first = self.observations[observation_index]
            first.block_timestamp = block_timestamp
            first.sqrt_price_x64 = sqrt_price_x64
            first.cumulative_time_price_x64 = 0
            return observation_index

        last = self.observations[observation_index]
        last_timestamp = last.block_timestamp
        last_price = last.sqrt_price_x64
        last_cumulative = last.cumulative_time_price_x64

        delta_time = max(block_timestamp - last_timestamp, 0)
        if delta_time < observation_update_duration or sqrt_price_x64 == last_price:
            return None

        cur_price_x64 = mul_div_floor(sqrt_price_x64, sqrt_price_x64, Q64)
        delta_price_x64 = cur_price_x64 * delta_time
        if delta_price_x64 > U128_MAX:
            raise ArithmeticOverflow("time-weighted price overflows u128")

        next_index = 0 if observation_index == OBSERVATION_NUM - 1 else observation_index + 1
        nxt = self.observations[next_index]
        nxt.block_timestamp = block_timestamp
        nxt.sqrt_price_x64 = sqrt_price_x64
        nxt.cumulative_time_price_x64 = (last_cumulative + delta_price_x64) % _U128_MODULUS
        return next_index


def block_timestamp() -> int:
    """Current Unix time in seconds, truncated to 32 bits."""
    return int(time.time()) & _U32_MASK