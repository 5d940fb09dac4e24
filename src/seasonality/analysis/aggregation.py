"""Calendar-bucketed roll-ups of a daily series.

Points are grouped by (year, unit index) for a single target year. Numeric
fields are summed or averaged; categorical fields are reduced to their most
frequent value.

Week buckets use ISO week numbers pinned to the calendar year: a
late-December day that ISO places in week 1 of the following year goes to
an extra trailing week (last ISO week + 1), and an early-January day that ISO
places in the previous year's last week goes to week 0. Every bucket therefore
covers one contiguous run of days inside the target year.
"""

from __future__ import annotations

import logging
from collections import Counter
from datetime import date
from typing import Iterable, Sequence, TypeVar

from seasonality.exceptions import AnalysisError
from seasonality.types import (
    AggregatedPeriod,
    CalendarUnit,
    MarketDataPoint,
    Performance,
    VolatilityLevel,
)

logger = logging.getLogger(__name__)

E = TypeVar("E", VolatilityLevel, Performance)


def dominant_category(values: Iterable[E], order: Sequence[E]) -> E:
    """Most frequent value, ties going to the value listed first in ``order``.

    :param values: Observed categorical values (at least one).
    :param order: Every category in tie-break priority order.
    :returns: The mode of ``values``.
    :raises ValueError: If ``values`` is empty.
    """
    counts = Counter(values)
    if not counts:
        raise ValueError("dominant_category() requires at least one value")
    # max() keeps the first maximal element, so iterating in ``order`` is the tie-break
    return max(order, key=lambda category: counts.get(category, 0))


def week_index(day: date) -> int:
    """ISO week number of ``day``, pinned to its calendar year."""
    iso_year, iso_week, _ = day.isocalendar()
    if iso_year > day.year:
        # 28 December is always in the last ISO week of its year
        return date(day.year, 12, 28).isocalendar()[1] + 1
    if iso_year < day.year:
        return 0
    return iso_week


def month_index(day: date) -> int:
    """Calendar month number (1-12) of ``day``."""
    return day.month


def period_id(year: int, unit: CalendarUnit, index: int) -> str:
    """Bucket key, e.g. ``2024-W05`` for weeks or ``2024-03`` for months."""
    if unit is CalendarUnit.WEEK:
        return f"{year}-W{index:02d}"
    return f"{year}-{index:02d}"


def _coerce_unit(unit: CalendarUnit | str) -> CalendarUnit:
    try:
        return CalendarUnit(unit)
    except ValueError as e:
        raise AnalysisError(
            f"Invalid calendar unit '{unit}'. "
            f"Valid options: {[u.value for u in CalendarUnit]}"
        ) from e


def _reduce_bucket(
    year: int,
    unit: CalendarUnit,
    index: int,
    points: list[MarketDataPoint],
) -> AggregatedPeriod:
    count = len(points)
    dates = [p.date for p in points]
    return AggregatedPeriod(
        period_id=period_id(year, unit, index),
        unit=unit,
        year=year,
        index=index,
        start_date=min(dates),
        end_date=max(dates),
        dominant_volatility=dominant_category(
            (p.volatility_level for p in points), list(VolatilityLevel)
        ),
        dominant_performance=dominant_category(
            (p.performance for p in points), list(Performance)
        ),
        total_volume=sum(p.volume for p in points),
        mean_price_change_percent=sum(p.price_change_percent for p in points) / count,
        mean_liquidity=sum(p.liquidity for p in points) / count,
        sample_count=count,
    )


def aggregate_series(
    points: Sequence[MarketDataPoint],
    year: int,
    unit: CalendarUnit | str,
) -> list[AggregatedPeriod]:
    """Roll a daily series up into week or month buckets for one year.

    :param points: Daily series (any order; input is not modified).
    :param year: Calendar year to aggregate; other years are discarded.
    :param unit: ``CalendarUnit.WEEK``/``"week"`` or ``CalendarUnit.MONTH``/``"month"``.
    :returns: One period per non-empty bucket, ordered by unit index.
    :raises AnalysisError: If ``unit`` is not a calendar unit.
    """
    unit = _coerce_unit(unit)
    index_of = week_index if unit is CalendarUnit.WEEK else month_index

    buckets: dict[int, list[MarketDataPoint]] = {}
    for point in points:
        if point.date.year != year:
            continue
        buckets.setdefault(index_of(point.date), []).append(point)

    logger.debug(
        "Aggregated %d points into %d %s buckets for %d",
        sum(len(b) for b in buckets.values()),
        len(buckets),
        unit.value,
        year,
    )
    return [
        _reduce_bucket(year, unit, index, buckets[index]) for index in sorted(buckets)
    ]


def aggregate_by_week(points: Sequence[MarketDataPoint], year: int) -> list[AggregatedPeriod]:
    """Weekly roll-up for one year; see :func:`aggregate_series`."""
    return aggregate_series(points, year, CalendarUnit.WEEK)


def aggregate_by_month(points: Sequence[MarketDataPoint], year: int) -> list[AggregatedPeriod]:
    """Monthly roll-up for one year; see :func:`aggregate_series`."""
    return aggregate_series(points, year, CalendarUnit.MONTH)


__all__ = [
    "aggregate_series",
    "aggregate_by_week",
    "aggregate_by_month",
    "dominant_category",
    "week_index",
    "month_index",
    "period_id",
]
