"""
Data models for the points core.

PointsAccount is the normalized, authoritative-as-of-a-slot record; it is
frozen and replaced wholesale on each sync. Raw server records stay plain
dicts until normalizer.normalize_account turns them into PointsAccount.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum

ADJUSTMENT_TYPES = ("click", "margin_trade", "claim", "manual")
ZERO = Decimal(0)


@dataclass(frozen=True)
class Adjustments:
    """Adjustment totals per category."""

    click: Decimal = ZERO
    margin_trade: Decimal = ZERO
    claim: Decimal = ZERO
    manual: Decimal = ZERO

    def as_dict(self) -> dict[str, Decimal]:
        return {t: getattr(self, t) for t in ADJUSTMENT_TYPES}


@dataclass(frozen=True)
class PointsAccount:
    """
    Normalized points record for one wallet.

    rank is 1-based. points_per_day is derived from the slot time estimate at
    normalization and is never stored server-side.
    """

    wallet: str
    quantity: Decimal
    points_per_slot: Decimal
    points_per_day: Decimal
    snapshot_slot: int | None
    snapshot_timestamp: int | None
    rank: int
    rank_delta: int
    id: int | None = None
    stale: bool = False
    adjustments: Adjustments = field(default_factory=Adjustments)


class ClickStatus(str, Enum):
    UNCLICKED = "unclicked"
    REQUESTED = "requested"
    CLICKED = "clicked"
    MAXED = "maxed"


@dataclass(frozen=True)
class ClickState:
    status: ClickStatus = ClickStatus.UNCLICKED
    current: int | None = None
    max: int | None = None


class ClickOutcome(str, Enum):
    CLICKED = "clicked"
    MAXED = "maxed"
    REJECTED = "rejected"  # precondition failed; no request was sent
    FAILED = "failed"  # transport or parse failure; state reverted to unclicked
    SUPERSEDED = "superseded"  # wallet changed while the request was in flight


@dataclass(frozen=True)
class ClickResult:
    outcome: ClickOutcome
    current: int | None = None
    max: int | None = None
    error: str | None = None


@dataclass(frozen=True)
class PointsConfigEntry:
    """Multiplier record from /points/config."""

    reserve: str
    market: str
    side: str  # borrow | supply
    weight: float


@dataclass(frozen=True)
class LeaderboardEntry:
    """Display-only ranking of a normalized account; recomputed, never persisted."""

    account: PointsAccount
    sorted_rank: int
    rank_delta: int

    @property
    def wallet(self) -> str:
        return self.account.wallet

    @property
    def quantity(self) -> Decimal:
        return self.account.quantity
