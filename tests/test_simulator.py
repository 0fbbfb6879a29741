"""
Tests for AccrualSimulator ticks and the points breakdown.
"""

from __future__ import annotations

import dataclasses
from decimal import Decimal

import pytest

from backend_points.points.breakdown import compute_breakdown
from backend_points.points.click import ClickClaim
from backend_points.points.models import Adjustments, ClickStatus
from backend_points.points.normalizer import normalize_account
from backend_points.points.simulator import AccrualSimulator
from backend_points.points_api import CLICK_PATH
from tests.factories import WALLET_A, raw_record


def _account(quantity="100", pps="1", click="0"):
    account = normalize_account(raw_record(WALLET_A, quantity=quantity, points_per_slot=pps), 0.5)
    return dataclasses.replace(account, adjustments=Adjustments(click=Decimal(click)))


def test_two_ticks_without_clicks(api):
    """quantity=100, pointsPerSlot=1, two ticks → 102."""
    sim = AccrualSimulator()
    account = _account()
    claim = ClickClaim(api)
    sim.tick(account, claim)
    assert sim.tick(account, claim) == Decimal(102)
    assert account.quantity == Decimal(100)


def test_seeded_on_first_read(api):
    """Unset values are seeded from the account when first read."""
    sim = AccrualSimulator()
    account = _account(click="4")
    assert not sim.is_seeded
    assert sim.computed_points(account) == Decimal(100)
    assert sim.computed_clicks(account) == Decimal(4)
    assert sim.computed_points(None) == Decimal(100)


def test_unset_without_account():
    """No account and nothing computed → None."""
    sim = AccrualSimulator()
    assert sim.computed_points(None) is None
    assert sim.computed_clicks(None) is None


@pytest.mark.asyncio
async def test_click_credited_exactly_once(api):
    """A confirmed click adds pointsPerSlot+1 on the next tick only, then reverts to unclicked."""
    sim = AccrualSimulator()
    account = _account(pps="0.5", click="2")
    claim = ClickClaim(api)
    before = sim.computed_points(account)
    await claim.submit(WALLET_A)
    after = sim.tick(account, claim)
    assert after - before == Decimal("1.5")
    assert claim.state.status == ClickStatus.UNCLICKED
    assert sim.computed_clicks(account) == Decimal(3)
    assert sim.tick(account, claim) - after == Decimal("0.5")


@pytest.mark.asyncio
async def test_maxed_reverts_after_one_tick_without_credit(api, server):
    """maxed adds nothing and is cleared by the next tick."""
    server.set(CLICK_PATH, {"current": 5, "max": 5, "success": False})
    sim = AccrualSimulator()
    account = _account()
    claim = ClickClaim(api)
    await claim.submit(WALLET_A)
    assert sim.tick(account, claim) == Decimal(101)
    assert claim.state.status == ClickStatus.UNCLICKED
    assert sim.computed_clicks(account) == Decimal(0)


@pytest.mark.asyncio
async def test_accrual_formula_over_many_ticks(api):
    """computed == quantity + n×pps + number of ticks that saw clicked."""
    sim = AccrualSimulator()
    account = _account(quantity="7.25", pps="0.125")
    claim = ClickClaim(api)
    clicked_ticks = 0
    for n in range(12):
        if n % 3 == 0:
            await claim.submit(WALLET_A)
            clicked_ticks += 1
        sim.tick(account, claim)
    expected = Decimal("7.25") + 12 * Decimal("0.125") + clicked_ticks
    assert sim.computed_points(account) == expected


def test_reset_forces_reseed(api):
    """reset() forgets computed points; click seed may be published directly."""
    sim = AccrualSimulator()
    account = _account()
    sim.tick(account, ClickClaim(api))
    sim.reset(click_seed=Decimal(9))
    fresh = _account(quantity="500")
    assert sim.computed_points(fresh) == Decimal(500)
    assert sim.computed_clicks(fresh) == Decimal(9)


def test_breakdown():
    """interest = points + claim − clicks − margin − manual, floored at zero."""
    account = dataclasses.replace(
        _account(),
        adjustments=Adjustments(
            click=Decimal(3), margin_trade=Decimal(10), claim=Decimal(5), manual=Decimal(2)
        ),
    )
    b = compute_breakdown(account, Decimal(100), Decimal(3))
    assert b.interest == Decimal(90)
    assert (b.margin, b.clicks, b.misc) == (Decimal(10), Decimal(3), Decimal(2))
    assert compute_breakdown(account, Decimal(1), Decimal(3)).interest == Decimal(0)
    assert compute_breakdown(None, None, None).interest == Decimal(0)
