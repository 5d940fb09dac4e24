"""Whole-series statistics and per-day grades."""

from __future__ import annotations

from collections import Counter
from typing import Sequence

import numpy as np

from seasonality.types import (
    DayAssessment,
    MarketDataPoint,
    Performance,
    SeriesSummary,
    Severity,
    VolatilityLevel,
)

RECENT_WINDOW = 7
TREND_THRESHOLD = 1.0

VOLATILITY_SCORES = {
    VolatilityLevel.LOW: 20,
    VolatilityLevel.MEDIUM: 50,
    VolatilityLevel.HIGH: 80,
}

# (minimum liquidity, grade), best grade first
LIQUIDITY_GRADES = ((80.0, "A"), (60.0, "B"), (40.0, "C"))
SIGNAL_MIN_LIQUIDITY = 60.0


def summarize_series(points: Sequence[MarketDataPoint]) -> SeriesSummary | None:
    """Compute whole-series statistics.

    :param points: Daily series in ascending date order.
    :returns: Summary, or None for an empty series.
    """
    if not points:
        return None

    days = len(points)
    volumes = np.array([p.volume for p in points], dtype=float)
    changes = np.array([p.price_change_percent for p in points], dtype=float)
    liquidity = np.array([p.liquidity for p in points], dtype=float)

    volatility_counts = Counter(p.volatility_level for p in points)
    performance_counts = Counter(p.performance for p in points)

    recent_change = float(changes[-RECENT_WINDOW:].mean())
    if recent_change > TREND_THRESHOLD:
        trend = Performance.POSITIVE
    elif recent_change < -TREND_THRESHOLD:
        trend = Performance.NEGATIVE
    else:
        trend = Performance.NEUTRAL

    return SeriesSummary(
        start_date=points[0].date,
        end_date=points[-1].date,
        trading_days=days,
        total_volume=float(volumes.sum()),
        mean_volume=float(volumes.mean()),
        mean_price_change_percent=float(changes.mean()),
        mean_liquidity=float(liquidity.mean()),
        volatility_counts={level: volatility_counts[level] for level in VolatilityLevel},
        performance_counts={perf: performance_counts[perf] for perf in Performance},
        risk_score=volatility_counts[VolatilityLevel.HIGH] / days * 100,
        recent_trend=trend,
    )


def assess_day(point: MarketDataPoint, mean_volume: float) -> DayAssessment:
    """Grade a single day against the series' mean volume.

    :param point: Day to grade.
    :param mean_volume: Mean daily volume of the surrounding series.
    :returns: Volatility score, volume trend, liquidity and risk grades, and a
        naive trading signal.
    """
    volatility_score = VOLATILITY_SCORES[point.volatility_level]

    if point.volume > mean_volume * 1.2:
        volume_trend = "high"
    elif point.volume < mean_volume * 0.8:
        volume_trend = "low"
    else:
        volume_trend = "normal"

    liquidity_grade = next(
        (grade for floor, grade in LIQUIDITY_GRADES if point.liquidity >= floor), "D"
    )

    risk_level = (volatility_score + (100 - point.liquidity)) / 2
    if risk_level >= 70:
        risk_grade = Severity.HIGH
    elif risk_level >= 40:
        risk_grade = Severity.MEDIUM
    else:
        risk_grade = Severity.LOW

    signal = "hold"
    if point.liquidity > SIGNAL_MIN_LIQUIDITY:
        if point.performance is Performance.POSITIVE:
            signal = "buy"
        elif point.performance is Performance.NEGATIVE:
            signal = "sell"

    return DayAssessment(
        date=point.date,
        volatility_score=volatility_score,
        volume_trend=volume_trend,
        liquidity_grade=liquidity_grade,
        risk_grade=risk_grade,
        trading_signal=signal,
    )


__all__ = ["summarize_series", "assess_day"]
