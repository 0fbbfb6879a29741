"""
Tests for raw record normalization, adjustment reduction and config/click parsing.
"""

from __future__ import annotations

from decimal import Decimal

import pytest

from backend_points.core.exceptions import MalformedDataError, NetworkFailure
from backend_points.points.models import Adjustments
from backend_points.points.normalizer import (
    normalize_account,
    parse_click_response,
    parse_config,
    points_per_day,
    reduce_adjustments,
)
from tests.factories import WALLET_A, raw_record


def test_rank_is_shifted_to_one_based():
    """Server rank 4 (0-based) becomes 5."""
    account = normalize_account(raw_record(WALLET_A, rank=4), 0.5)
    assert account.rank == 5


def test_double_normalization_is_rejected():
    """Normalizing an already-normalized account raises instead of shifting rank again."""
    account = normalize_account(raw_record(WALLET_A, rank=4), 0.5)
    with pytest.raises(TypeError, match="already normalized"):
        normalize_account(account, 0.5)


def test_missing_rank_becomes_zero():
    """A record with no rank normalizes to rank 0 (unranked)."""
    raw = raw_record(WALLET_A)
    del raw["rank"]
    assert normalize_account(raw, 0.5).rank == 0


def test_decimals_parsed_exactly():
    """quantity and pointsPerSlot keep full decimal precision."""
    account = normalize_account(
        raw_record(WALLET_A, quantity="123456789.123456789", points_per_slot="0.000000001"), 0.5
    )
    assert account.quantity == Decimal("123456789.123456789")
    assert account.points_per_slot == Decimal("0.000000001")


def test_points_per_day():
    """pointsPerSlot=0.002 at 0.45s per slot is 384 per day."""
    assert points_per_day(Decimal("0.002"), 0.45) == Decimal("384")
    account = normalize_account(raw_record(WALLET_A, points_per_slot="0.002"), 0.45)
    assert account.points_per_day == Decimal("384")


def test_points_per_day_requires_positive_slot_time():
    """A zero slot time is never used as a divisor."""
    with pytest.raises(ValueError, match="positive"):
        points_per_day(Decimal("1"), 0)


def test_malformed_quantity_is_network_failure():
    """A non-numeric quantity fails the fetch as MalformedDataError (a NetworkFailure)."""
    with pytest.raises(MalformedDataError) as exc:
        normalize_account(raw_record(WALLET_A, quantity="lots"), 0.5, "/points")
    assert isinstance(exc.value, NetworkFailure)
    assert exc.value.endpoint == "/points"


def test_record_without_wallet_is_malformed():
    """Records must carry a wallet."""
    raw = raw_record(WALLET_A)
    raw["wallet"] = None
    with pytest.raises(MalformedDataError, match="wallet"):
        normalize_account(raw, 0.5)


def test_reduce_adjustments_sums_by_type():
    """Adjustment history is summed per category; unknown types are ignored."""
    totals = reduce_adjustments(
        [
            {"quantity": 1, "type": "click"},
            {"quantity": 2, "type": "click"},
            {"quantity": 10.5, "type": "margin_trade"},
            {"quantity": 4, "type": "claim"},
            {"quantity": 6, "type": "manual"},
            {"quantity": 99, "type": "airdrop"},
        ]
    )
    assert totals == Adjustments(
        click=Decimal(3), margin_trade=Decimal("10.5"), claim=Decimal(4), manual=Decimal(6)
    )


def test_reduce_adjustments_empty():
    """No history → all zero."""
    assert reduce_adjustments([]) == Adjustments()


def test_parse_config():
    """Config records become PointsConfigEntry; missing keys are malformed."""
    entries = parse_config([{"reserve": "SOL", "market": "main", "side": "borrow", "weight": 1.5}])
    assert entries[0].side == "borrow"
    assert entries[0].weight == 1.5
    with pytest.raises(MalformedDataError):
        parse_config([{"reserve": "SOL"}])


def test_parse_click_response():
    """Click responses need current, max and a boolean success."""
    assert parse_click_response({"current": 2, "max": 5, "success": True}) == (2, 5, True)
    with pytest.raises(MalformedDataError):
        parse_click_response({"current": 2, "max": 5})
