"""Classic floor-trader pivot points from the previous daily bar, once per UTC day."""

from __future__ import annotations

from datetime import date, datetime, timezone

import pandas as pd
import structlog

from level_overlay.models.pivot import PivotSet

logger = structlog.get_logger()

HLC_COLUMNS = ["high", "low", "close"]
MIN_DAILY_BARS = 2  # yesterday (closed) + today (forming)


def compute_pivots(
    high: float, low: float, close: float, calculation_date: date = date.min
) -> PivotSet:
    pivot = (high + low + close) / 3
    r1 = 2 * pivot - low
    s1 = 2 * pivot - high
    r2 = pivot + (r1 - s1)
    s2 = pivot - (r1 - s1)
    return PivotSet(
        pivot=pivot,
        r1=r1,
        r2=r2,
        s1=s1,
        s2=s2,
        last_calculation_date=calculation_date,
    )


def utc_date(now: datetime) -> date:
    """Truncate a timestamp to its UTC calendar date (naive values are taken as UTC)."""
    if now.tzinfo is not None:
        now = now.astimezone(timezone.utc)
    return now.date()


def is_new_day(current_date: date, last_calculation_date: date) -> bool:
    return current_date > last_calculation_date


def previous_daily_bar(daily: pd.DataFrame | None) -> pd.Series | None:
    """
    Return yesterday's completed bar: the second-to-last row.

    The last row is today's still-forming bar and is never used. Returns None
    when fewer than two rows exist or the bar lacks high/low/close values.
    """
    if daily is None or len(daily) < MIN_DAILY_BARS:
        return None
    bar = daily.iloc[-2].reindex(HLC_COLUMNS)
    if bar.isna().any():
        return None
    return bar


def maybe_recompute_pivots(
    daily: pd.DataFrame | None,
    current_date: date,
    last_calculation_date: date,
) -> tuple[PivotSet, date] | None:
    """
    Recompute pivots when current_date is past last_calculation_date.

    Returns (PivotSet, new_last_calculation_date), or None when nothing was
    computed: same day, or not enough daily history yet.
    """
    if not is_new_day(current_date, last_calculation_date):
        return None

    bar = previous_daily_bar(daily)
    if bar is None:
        logger.debug(
            "pivots_skipped",
            reason="insufficient_history",
            bars=0 if daily is None else len(daily),
        )
        return None

    pivots = compute_pivots(
        float(bar["high"]),
        float(bar["low"]),
        float(bar["close"]),
        calculation_date=current_date,
    )
    logger.info(
        "pivots_calculated",
        date=current_date.isoformat(),
        pivot=pivots.pivot,
        r1=pivots.r1,
        s1=pivots.s1,
    )
    return pivots, current_date
