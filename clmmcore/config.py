"""AMM configuration account: fee rates, tick spacing and owners."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from .bits import AmmError

__all__ = [
    "AMM_CONFIG_SEED",
    "FEE_RATE_DENOMINATOR_VALUE",
    "DEFAULT_PUBKEY",
    "NotApprovedError",
    "AmmConfig",
    "ConfigChangeEvent",
]

AMM_CONFIG_SEED = "amm_config"

# Fee rates are expressed in hundredths of a basis point (10**-6).
FEE_RATE_DENOMINATOR_VALUE = 1_000_000

DEFAULT_PUBKEY = bytes(32)


class NotApprovedError(AmmError, PermissionError):
    """The signer is neither the config owner nor the expected key."""


@dataclass
class AmmConfig:
    """Protocol-wide settings shared by the pools that use this config."""

    LEN: ClassVar[int] = 8 + 1 + 2 + 32 + 4 + 4 + 2 + 64

    bump: int = 0
    index: int = 0
    owner: bytes = DEFAULT_PUBKEY
    protocol_fee_rate: int = 0
    trade_fee_rate: int = 0
    tick_spacing: int = 0
    fund_fee_rate: int = 0
    padding_u32: int = 0
    fund_owner: bytes = DEFAULT_PUBKEY
    padding: tuple[int, int, int] = (0, 0, 0)

    def is_authorized(self, signer: bytes, expect_pubkey: bytes) -> None:
        """Raise NotApprovedError unless ``signer`` is the owner or ``expect_pubkey``."""
        if signer != self.owner and signer != expect_pubkey:
            raise NotApprovedError("signer is not approved for this config")


@dataclass(frozen=True)
class ConfigChangeEvent:
    """Emitted when a config is created or updated."""

    index: int
    owner: bytes
    protocol_fee_rate: int
    trade_fee_rate: int
    tick_spacing: int
    fund_fee_rate: int
    fund_owner: bytes