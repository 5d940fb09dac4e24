"""Recurring calendar-position biases in a daily series.

Two independent passes group the whole series (all years together) by month
of year and by day of week. Each sufficiently large group may yield a
directional pattern (bullish/bearish) and a volatility pattern. Results from
both passes are pooled and ranked by strength.
"""

from __future__ import annotations

import calendar
import logging
from typing import Callable, Sequence

import numpy as np

from seasonality.types import (
    AnalysisThresholds,
    MarketDataPoint,
    PatternKind,
    SeasonalPattern,
    VolatilityLevel,
)

logger = logging.getLogger(__name__)

MONTH_CHANGE_THRESHOLD = 2.0
MONTH_CHANGE_STRENGTH_FACTOR = 20.0
MONTH_HIGH_VOLATILITY_RATIO = 0.6

WEEKDAY_CHANGE_THRESHOLD = 1.5
WEEKDAY_CHANGE_STRENGTH_FACTOR = 30.0
WEEKDAY_VOLUME_RATIO = 1.3

# Sunday-first, matching the 0-6 weekday index used for grouping
WEEKDAY_NAMES = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)


def weekday_index(point: MarketDataPoint) -> int:
    """Day of week with Sunday as 0 and Saturday as 6."""
    return (point.date.weekday() + 1) % 7


def month_of_year(point: MarketDataPoint) -> int:
    return point.date.month


def _group_by(
    points: Sequence[MarketDataPoint],
    key: Callable[[MarketDataPoint], int],
) -> dict[int, list[MarketDataPoint]]:
    groups: dict[int, list[MarketDataPoint]] = {}
    for point in points:
        groups.setdefault(key(point), []).append(point)
    return {k: groups[k] for k in sorted(groups)}


def _direction(mean_change: float) -> tuple[PatternKind, str]:
    if mean_change > 0:
        return PatternKind.BULLISH, "positive"
    return PatternKind.BEARISH, "negative"


def _month_patterns(
    points: Sequence[MarketDataPoint],
    min_group_points: int,
) -> list[SeasonalPattern]:
    patterns: list[SeasonalPattern] = []
    for month, group in _group_by(points, month_of_year).items():
        if len(group) < min_group_points:
            logger.debug("Skipping month %d: %d points", month, len(group))
            continue

        label = calendar.month_name[month]
        mean_change = float(np.mean([p.price_change_percent for p in group]))
        high_ratio = sum(
            1 for p in group if p.volatility_level is VolatilityLevel.HIGH
        ) / len(group)

        if abs(mean_change) > MONTH_CHANGE_THRESHOLD:
            kind, word = _direction(mean_change)
            patterns.append(
                SeasonalPattern(
                    kind=kind,
                    calendar_label=label,
                    strength=min(100.0, abs(mean_change) * MONTH_CHANGE_STRENGTH_FACTOR),
                    narrative=(
                        f"Historically {word} in {label} "
                        f"({mean_change:.1f}% avg)"
                    ),
                    sample_count=len(group),
                )
            )

        if high_ratio > MONTH_HIGH_VOLATILITY_RATIO:
            patterns.append(
                SeasonalPattern(
                    kind=PatternKind.VOLATILE,
                    calendar_label=label,
                    strength=high_ratio * 100,
                    narrative=(
                        f"High volatility period in {label} "
                        f"({high_ratio * 100:.0f}% of days)"
                    ),
                    sample_count=len(group),
                )
            )
    return patterns


def _weekday_patterns(
    points: Sequence[MarketDataPoint],
    min_group_points: int,
) -> list[SeasonalPattern]:
    overall_mean_volume = float(np.mean([p.volume for p in points]))

    patterns: list[SeasonalPattern] = []
    for weekday, group in _group_by(points, weekday_index).items():
        if len(group) < min_group_points:
            logger.debug("Skipping weekday %d: %d points", weekday, len(group))
            continue

        label = WEEKDAY_NAMES[weekday]
        mean_change = float(np.mean([p.price_change_percent for p in group]))
        mean_volume = float(np.mean([p.volume for p in group]))
        # An all-zero-volume series has no meaningful ratio
        volume_ratio = mean_volume / overall_mean_volume if overall_mean_volume > 0 else 0.0

        if abs(mean_change) > WEEKDAY_CHANGE_THRESHOLD:
            kind, word = _direction(mean_change)
            patterns.append(
                SeasonalPattern(
                    kind=kind,
                    calendar_label=label,
                    strength=min(100.0, abs(mean_change) * WEEKDAY_CHANGE_STRENGTH_FACTOR),
                    narrative=f"{label}s tend to be {word} ({mean_change:.1f}% avg)",
                    sample_count=len(group),
                )
            )

        if volume_ratio > WEEKDAY_VOLUME_RATIO:
            patterns.append(
                SeasonalPattern(
                    kind=PatternKind.VOLATILE,
                    calendar_label=label,
                    strength=min(100.0, (volume_ratio - 1) * 100),
                    narrative=(
                        f"High trading activity on {label}s "
                        f"({(volume_ratio - 1) * 100:.0f}% above average)"
                    ),
                    sample_count=len(group),
                )
            )
    return patterns


def detect_seasonal_patterns(
    points: Sequence[MarketDataPoint],
    thresholds: AnalysisThresholds | None = None,
) -> list[SeasonalPattern]:
    """Find month-of-year and day-of-week biases in a daily series.

    :param points: Daily series, any date range and number of years.
    :param thresholds: Sample-size limits; defaults apply when None.
    :returns: Up to ``max_patterns`` patterns, strongest first; empty when the
        series is shorter than ``min_pattern_points``.
    """
    thresholds = thresholds or AnalysisThresholds()
    if len(points) < thresholds.min_pattern_points:
        logger.debug(
            "Not enough points for seasonal inference (%d < %d)",
            len(points),
            thresholds.min_pattern_points,
        )
        return []

    patterns = _month_patterns(points, thresholds.min_group_points)
    patterns.extend(_weekday_patterns(points, thresholds.min_group_points))

    # sorted() is stable: equal strengths keep month-pass-first order
    ranked = sorted(patterns, key=lambda p: p.strength, reverse=True)
    return ranked[: thresholds.max_patterns]


__all__ = [
    "detect_seasonal_patterns",
    "weekday_index",
    "month_of_year",
    "WEEKDAY_NAMES",
]
