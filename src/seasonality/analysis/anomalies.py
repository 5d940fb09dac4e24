"""Single-day outliers in a daily series.

Three independent rules are applied to every point, so one day can be
flagged more than once:

- volume spike: volume z-score above 2
- volatility spike: a high-volatility day whose absolute price change sits
  more than two standard deviations above the mean absolute change
- price gap: day-over-day difference in price change above 5 points

Mean and standard deviation are population statistics over the whole series.
"""

from __future__ import annotations

import logging
from typing import Sequence

import numpy as np

from seasonality.types import (
    AnalysisThresholds,
    Anomaly,
    AnomalyKind,
    MarketDataPoint,
    Severity,
    VolatilityLevel,
)

logger = logging.getLogger(__name__)

VOLUME_Z_THRESHOLD = 2.0
VOLUME_Z_MEDIUM = 2.5
VOLUME_Z_HIGH = 3.0

VOLATILITY_STD_THRESHOLD = 2.0
VOLATILITY_STD_HIGH = 3.0

PRICE_GAP_THRESHOLD = 5.0
PRICE_GAP_MEDIUM = 7.0
PRICE_GAP_HIGH = 10.0


def _volume_spike(
    point: MarketDataPoint,
    mean_volume: float,
    std_volume: float,
) -> Anomaly | None:
    if std_volume == 0:
        return None

    z_score = (point.volume - mean_volume) / std_volume
    if not z_score > VOLUME_Z_THRESHOLD:
        return None

    if z_score > VOLUME_Z_HIGH:
        severity = Severity.HIGH
    elif z_score > VOLUME_Z_MEDIUM:
        severity = Severity.MEDIUM
    else:
        severity = Severity.LOW

    above = (point.volume / mean_volume - 1) * 100 if mean_volume > 0 else 0.0
    return Anomaly(
        date=point.date,
        kind=AnomalyKind.VOLUME_SPIKE,
        severity=severity,
        magnitude=point.volume,
        narrative=f"Unusual trading volume: {above:.0f}% above average (z={z_score:.2f})",
    )


def _volatility_spike(
    point: MarketDataPoint,
    mean_change: float,
    std_change: float,
) -> Anomaly | None:
    if point.volatility_level is not VolatilityLevel.HIGH:
        return None

    move = abs(point.price_change_percent)
    if not move > mean_change + VOLATILITY_STD_THRESHOLD * std_change:
        return None

    severity = (
        Severity.HIGH
        if move > mean_change + VOLATILITY_STD_HIGH * std_change
        else Severity.MEDIUM
    )
    return Anomaly(
        date=point.date,
        kind=AnomalyKind.VOLATILITY_SPIKE,
        severity=severity,
        magnitude=move,
        narrative=f"High volatility event: {move:.1f}% price movement",
    )


def _price_gap(point: MarketDataPoint, previous: MarketDataPoint) -> Anomaly | None:
    gap = abs(point.price_change_percent - previous.price_change_percent)
    if not gap > PRICE_GAP_THRESHOLD:
        return None

    if gap > PRICE_GAP_HIGH:
        severity = Severity.HIGH
    elif gap > PRICE_GAP_MEDIUM:
        severity = Severity.MEDIUM
    else:
        severity = Severity.LOW

    return Anomaly(
        date=point.date,
        kind=AnomalyKind.PRICE_GAP,
        severity=severity,
        magnitude=gap,
        narrative=f"Significant price gap: {gap:.1f}% difference from previous day",
    )


def detect_anomalies(
    points: Sequence[MarketDataPoint],
    thresholds: AnalysisThresholds | None = None,
) -> list[Anomaly]:
    """Flag statistically unusual days in a daily series.

    :param points: Daily series in ascending date order.
    :param thresholds: Sample-size limits; defaults apply when None.
    :returns: Up to ``max_anomalies`` anomalies, most recent first; empty when
        the series is shorter than ``min_anomaly_points``.
    """
    thresholds = thresholds or AnalysisThresholds()
    if len(points) < thresholds.min_anomaly_points:
        return []

    volumes = np.array([p.volume for p in points], dtype=float)
    moves = np.abs(np.array([p.price_change_percent for p in points], dtype=float))
    mean_volume, std_volume = float(volumes.mean()), float(volumes.std())
    mean_change, std_change = float(moves.mean()), float(moves.std())

    if std_volume == 0:
        logger.debug("Constant volume across %d points; volume rule disabled", len(points))

    anomalies: list[Anomaly] = []
    for i, point in enumerate(points):
        found = [
            _volume_spike(point, mean_volume, std_volume),
            _volatility_spike(point, mean_change, std_change),
            _price_gap(point, points[i - 1]) if i > 0 else None,
        ]
        anomalies.extend(a for a in found if a is not None)

    logger.debug("Flagged %d anomalies in %d points", len(anomalies), len(points))
    ranked = sorted(anomalies, key=lambda a: a.date, reverse=True)
    return ranked[: thresholds.max_anomalies]


__all__ = ["detect_anomalies"]
