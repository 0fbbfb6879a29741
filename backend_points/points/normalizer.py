"""
Normalizer — raw /points JSON to internal models.

- rank: server 0-based → 1-based (missing rank becomes 0).
- quantity / pointsPerSlot: parsed as Decimal (from their string form).
- pointsPerDay = pointsPerSlot × 86400 / avg_slot_time_sec.
A numeric field that does not parse raises MalformedDataError, which fails
only the fetch it came from.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any

from backend_points.core.exceptions import MalformedDataError
from backend_points.points.models import (
    ADJUSTMENT_TYPES,
    ZERO,
    Adjustments,
    PointsAccount,
    PointsConfigEntry,
)
from backend_points.points_logging import get_logger

logger = get_logger(__name__)

SECONDS_PER_DAY = Decimal(86400)


def parse_decimal(value: Any, field_name: str, endpoint: str) -> Decimal:
    """Parse a numeric JSON value into Decimal; None → 0."""
    if value is None:
        return ZERO
    if isinstance(value, bool):
        raise MalformedDataError(endpoint, f"{field_name} is not numeric: {value!r}")
    try:
        d = Decimal(str(value))
    except (InvalidOperation, ValueError) as e:
        raise MalformedDataError(endpoint, f"{field_name} is not numeric: {value!r}") from e
    if not d.is_finite():
        raise MalformedDataError(endpoint, f"{field_name} is not finite: {value!r}")
    return d


def _parse_int(value: Any, field_name: str, endpoint: str) -> int | None:
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise MalformedDataError(endpoint, f"{field_name} is not an integer: {value!r}") from e


def points_per_day(points_per_slot: Decimal, avg_slot_time_sec: float) -> Decimal:
    if avg_slot_time_sec <= 0:
        raise ValueError("avg_slot_time_sec must be positive")
    return points_per_slot * SECONDS_PER_DAY / Decimal(str(avg_slot_time_sec))


def _parse_adjustments(raw: Any, endpoint: str) -> Adjustments:
    if not isinstance(raw, dict):
        return Adjustments()
    return Adjustments(
        **{t: parse_decimal(raw.get(t), f"adjustments.{t}", endpoint) for t in ADJUSTMENT_TYPES}
    )


def normalize_account(
    raw: dict[str, Any],
    avg_slot_time_sec: float,
    endpoint: str = "/points",
) -> PointsAccount:
    """
    Build a PointsAccount from one raw server record.

    Only raw dicts are accepted: normalizing is not idempotent (rank would
    shift again), so an already-normalized PointsAccount raises TypeError.
    """
    if isinstance(raw, PointsAccount):
        raise TypeError("account is already normalized")
    if not isinstance(raw, dict):
        raise MalformedDataError(endpoint, f"expected object, got {type(raw).__name__}")
    wallet = raw.get("wallet")
    if not isinstance(wallet, str) or not wallet:
        raise MalformedDataError(endpoint, "record has no wallet")

    raw_rank = _parse_int(raw.get("rank"), "rank", endpoint)
    pps = parse_decimal(raw.get("pointsPerSlot"), "pointsPerSlot", endpoint)
    return PointsAccount(
        id=_parse_int(raw.get("id"), "id", endpoint),
        wallet=wallet,
        quantity=parse_decimal(raw.get("quantity"), "quantity", endpoint),
        points_per_slot=pps,
        points_per_day=points_per_day(pps, avg_slot_time_sec),
        snapshot_slot=_parse_int(raw.get("slot"), "slot", endpoint),
        snapshot_timestamp=_parse_int(raw.get("timestamp"), "timestamp", endpoint),
        rank=(raw_rank if raw_rank is not None else -1) + 1,
        rank_delta=_parse_int(raw.get("rankDelta"), "rankDelta", endpoint) or 0,
        stale=bool(raw.get("stale", False)),
        adjustments=_parse_adjustments(raw.get("adjustments"), endpoint),
    )


def reduce_adjustments(
    records: list[dict[str, Any]],
    endpoint: str = "/points/adjustments",
) -> Adjustments:
    """Sum adjustment history into per-category totals; unknown types are ignored."""
    if not isinstance(records, list):
        raise MalformedDataError(endpoint, "expected a list of adjustments")
    totals = {t: ZERO for t in ADJUSTMENT_TYPES}
    for rec in records:
        if not isinstance(rec, dict):
            raise MalformedDataError(endpoint, f"adjustment is not an object: {rec!r}")
        kind = rec.get("type")
        if kind not in totals:
            logger.debug("adjustment_type_ignored", type=kind)
            continue
        totals[kind] += parse_decimal(rec.get("quantity"), "quantity", endpoint)
    return Adjustments(**totals)


def parse_config(records: list[dict[str, Any]], endpoint: str = "/points/config") -> list[PointsConfigEntry]:
    if not isinstance(records, list):
        raise MalformedDataError(endpoint, "expected a list of config records")
    out: list[PointsConfigEntry] = []
    for rec in records:
        try:
            out.append(
                PointsConfigEntry(
                    reserve=str(rec["reserve"]),
                    market=str(rec["market"]),
                    side=str(rec["side"]),
                    weight=float(rec["weight"]),
                )
            )
        except (KeyError, TypeError, ValueError) as e:
            raise MalformedDataError(endpoint, f"bad config record {rec!r}: {e}") from e
    return out


def parse_click_response(raw: Any, endpoint: str = "/points/click") -> tuple[int, int, bool]:
    """Return (current, max, success) from a click response."""
    if not isinstance(raw, dict):
        raise MalformedDataError(endpoint, "expected object")
    current = _parse_int(raw.get("current"), "current", endpoint)
    maximum = _parse_int(raw.get("max"), "max", endpoint)
    success = raw.get("success")
    if current is None or maximum is None or not isinstance(success, bool):
        raise MalformedDataError(endpoint, f"incomplete click response: {raw!r}")
    return current, maximum, success
