"""Analytics over a daily series: roll-ups, seasonal patterns, anomalies."""

from seasonality.analysis.aggregation import (
    aggregate_by_month,
    aggregate_by_week,
    aggregate_series,
    dominant_category,
)
from seasonality.analysis.anomalies import detect_anomalies
from seasonality.analysis.patterns import detect_seasonal_patterns
from seasonality.analysis.summary import assess_day, summarize_series

__all__ = [
    # Aggregation
    "aggregate_series",
    "aggregate_by_week",
    "aggregate_by_month",
    "dominant_category",
    # Patterns
    "detect_seasonal_patterns",
    # Anomalies
    "detect_anomalies",
    # Summary
    "summarize_series",
    "assess_day",
]
