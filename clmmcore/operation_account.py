"""Operation account: operation owners and whitelisted reward mints."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import ClassVar

from .config import DEFAULT_PUBKEY

__all__ = [
    "OPERATION_SEED",
    "OPERATION_SIZE_USIZE",
    "WHITE_MINT_SIZE_USIZE",
    "OperationState",
]

OPERATION_SEED = "operation"
OPERATION_SIZE_USIZE = 10
WHITE_MINT_SIZE_USIZE = 100


def _empty(size: int) -> list[bytes]:
    return [DEFAULT_PUBKEY] * size


def _fill(keys: list[bytes], size: int, what: str) -> list[bytes]:
    if len(keys) > size:
        raise ValueError(f"too many {what}: {len(keys)} > {size}")
    return keys + _empty(size - len(keys))


@dataclass
class OperationState:
    """Fixed-size lists of operation owners and whitelisted mints."""

    LEN: ClassVar[int] = 8 + 1 + 32 * OPERATION_SIZE_USIZE + 32 * WHITE_MINT_SIZE_USIZE

    bump: int = 0
    operation_owners: list[bytes] = field(default_factory=lambda: _empty(OPERATION_SIZE_USIZE))
    whitelist_mints: list[bytes] = field(default_factory=lambda: _empty(WHITE_MINT_SIZE_USIZE))

    def initialize(self, bump: int) -> None:
        """Set the bump and clear both lists."""
        self.bump = bump
        self.operation_owners = _empty(OPERATION_SIZE_USIZE)
        self.whitelist_mints = _empty(WHITE_MINT_SIZE_USIZE)

    def validate_operation_owner(self, owner: bytes) -> bool:
        """True if ``owner`` is a non-default key among the operation owners."""
        return owner != DEFAULT_PUBKEY and owner in self.operation_owners

    def validate_whitelist_mint(self, mint: bytes) -> bool:
        """True if ``mint`` is a non-default key among the whitelisted mints."""
        return mint != DEFAULT_PUBKEY and mint in self.whitelist_mints

    def update_operation_owner(self, keys: Iterable[bytes]) -> None:
        """Add ``keys`` to the owners; the result is deduplicated and sorted.

        Raises ValueError if more than OPERATION_SIZE_USIZE owners would remain.
        """
        merged = {k for k in [*self.operation_owners, *keys] if k != DEFAULT_PUBKEY}
        self.operation_owners = _fill(sorted(merged), OPERATION_SIZE_USIZE, "operation owners")

    def remove_operation_owner(self, keys: Iterable[bytes]) -> None:
        """Remove ``keys`` from the owners, compacting the rest to the front."""
        removed = set(keys)
        kept = [k for k in self.operation_owners if k not in removed]
        self.operation_owners = _fill(kept, OPERATION_SIZE_USIZE, "operation owners")

    def update_whitelist_mint(self, keys: Iterable[bytes]) -> None:
        """Add ``keys`` to the whitelist, deduplicated.

        Raises ValueError if more than WHITE_MINT_SIZE_USIZE mints would remain.
        """
        merged = dict.fromkeys(k for k in [*self.whitelist_mints, *keys] if k != DEFAULT_PUBKEY)
        self.whitelist_mints = _fill(list(merged), WHITE_MINT_SIZE_USIZE, "whitelist mints")

    def remove_whitelist_mint(self, keys: Iterable[bytes]) -> None:
        """Remove ``keys`` from the whitelist, compacting the rest to the front."""
        removed = set(keys)
        kept = [k for k in self.whitelist_mints if k not in removed]
        self.whitelist_mints = _fill(kept, WHITE_MINT_SIZE_USIZE, "whitelist mints")