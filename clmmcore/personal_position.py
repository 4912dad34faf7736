"""Personal position account and the events emitted for positions."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import ClassVar

from .bits import Q64, U64_MAX, ArithmeticOverflow
from .config import DEFAULT_PUBKEY
from .full_math import mul_div_floor, to_underflow_u64

__all__ = [
    "REWARD_NUM",
    "PositionRewardInfo",
    "PersonalPositionState",
    "CreatePersonalPositionEvent",
    "IncreaseLiquidityEvent",
    "DecreaseLiquidityEvent",
    "LiquidityCalculateEvent",
    "CollectPersonalFeeEvent",
    "UpdateRewardInfosEvent",
]

# Number of reward tokens a pool can emit.
REWARD_NUM = 3

_U128_MODULUS = 1 << 128


def _require_reward_len(values: Sequence[int], what: str) -> tuple[int, ...]:
    values = tuple(values)
    if len(values) != REWARD_NUM:
        raise ValueError(f"{what} must have {REWARD_NUM} entries, got {len(values)}")
    return values


@dataclass
class PositionRewardInfo:
    """Reward bookkeeping of a position for one reward token."""

    LEN: ClassVar[int] = 16 + 8

    growth_inside_last_x64: int = 0
    reward_amount_owed: int = 0


def _empty_reward_infos() -> list[PositionRewardInfo]:
    return [PositionRewardInfo() for _ in range(REWARD_NUM)]


@dataclass
class PersonalPositionState:
    """A liquidity position owned through a position NFT."""

    LEN: ClassVar[int] = (
        8 + 1 + 32 + 32 + 4 + 4 + 16 + 16 + 16 + 8 + 8
        + PositionRewardInfo.LEN * REWARD_NUM + 64
    )

    bump: int = 0
    nft_mint: bytes = DEFAULT_PUBKEY
    pool_id: bytes = DEFAULT_PUBKEY
    tick_lower_index: int = 0
    tick_upper_index: int = 0
    liquidity: int = 0
    fee_growth_inside_0_last_x64: int = 0
    fee_growth_inside_1_last_x64: int = 0
    token_fees_owed_0: int = 0
    token_fees_owed_1: int = 0
    reward_infos: list[PositionRewardInfo] = field(default_factory=_empty_reward_infos)
    padding: tuple[int, ...] = (0,) * 8

    def update_rewards(self, reward_growths_inside: Sequence[int], add_delta: bool) -> None:
        """Bring the reward snapshots up to ``reward_growths_inside``.

        When ``add_delta`` is true the reward earned since the last snapshot is
        added to the amount owed. A growth delta that wraps around is taken
        modulo 2**128; an owed delta that does not fit below u64::MAX counts as
        zero. Raises ArithmeticOverflow if an owed amount would exceed u64, in
        which case nothing is changed.
        """
        growths = _require_reward_len(reward_growths_inside, "reward_growths_inside")
        updated: list[PositionRewardInfo] = []
        for growth_inside, info in zip(growths, self.reward_infos):
            owed = info.reward_amount_owed
            if add_delta:
                growth_delta = (growth_inside - info.growth_inside_last_x64) % _U128_MODULUS
                owed_delta = to_underflow_u64(mul_div_floor(growth_delta, self.liquidity, Q64))
                owed += owed_delta
                if owed > U64_MAX:
                    raise ArithmeticOverflow("reward amount owed overflows u64")
            updated.append(
                PositionRewardInfo(growth_inside_last_x64=growth_inside, reward_amount_owed=owed)
            )
        self.reward_infos = updated


@dataclass(frozen=True)
class CreatePersonalPositionEvent:
    """Emitted when a new position is created."""

    pool_state: bytes
    minter: bytes
    nft_owner: bytes
    tick_lower_index: int
    tick_upper_index: int
    liquidity: int
    deposit_amount_0: int
    deposit_amount_1: int
    deposit_amount_0_transfer_fee: int
    deposit_amount_1_transfer_fee: int


@dataclass(frozen=True)
class IncreaseLiquidityEvent:
    """Emitted when liquidity of a position is increased."""

    position_nft_mint: bytes
    liquidity: int
    amount_0: int
    amount_1: int
    amount_0_transfer_fee: int
    amount_1_transfer_fee: int


@dataclass(frozen=True)
class DecreaseLiquidityEvent:
    """Emitted when liquidity of a position is decreased."""

    position_nft_mint: bytes
    liquidity: int
    decrease_amount_0: int
    decrease_amount_1: int
    fee_amount_0: int
    fee_amount_1: int
    reward_amounts: tuple[int, ...]
    transfer_fee_0: int
    transfer_fee_1: int

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "reward_amounts", _require_reward_len(self.reward_amounts, "reward_amounts")
        )


@dataclass(frozen=True)
class LiquidityCalculateEvent:
    """Emitted when the amounts for a liquidity change are calculated."""

    pool_liquidity: int
    pool_sqrt_price_x64: int
    pool_tick: int
    calc_amount_0: int
    calc_amount_1: int
    trade_fee_owed_0: int
    trade_fee_owed_1: int
    transfer_fee_0: int
    transfer_fee_1: int


@dataclass(frozen=True)
class CollectPersonalFeeEvent:
    """Emitted when fees are collected for a position."""

    position_nft_mint: bytes
    recipient_token_account_0: bytes
    recipient_token_account_1: bytes
    amount_0: int
    amount_1: int


@dataclass(frozen=True)
class UpdateRewardInfosEvent:
    """Emitted when the reward growth of a pool is updated."""

    reward_growth_global_x64: tuple[int, ...]

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "reward_growth_global_x64",
            _require_reward_len(self.reward_growth_global_x64, "reward_growth_global_x64"),
        )