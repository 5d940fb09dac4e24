"""Core type definitions for the seasonality analytics.

All data models use Pydantic BaseModel for automatic validation, JSON
serialization, and better error messages. Records handed to and returned
from the analytics are frozen.
"""

from __future__ import annotations

import datetime as dt
from enum import Enum
from typing import Any, NewType

from pydantic import BaseModel, ConfigDict, Field

# Type aliases for domain-specific identifiers
Symbol = NewType("Symbol", str)
DatasetId = NewType("DatasetId", str)


# ---------------------------------------------------------------------------
# Base Configuration
# ---------------------------------------------------------------------------


class FrozenModel(BaseModel):
    """Base model with frozen (immutable) configuration."""

    model_config = ConfigDict(frozen=True)


# ---------------------------------------------------------------------------
# Categorical Types
# ---------------------------------------------------------------------------
#
# Declaration order matters: it is the tie-break order used when reducing a
# bucket to its dominant category.


class VolatilityLevel(str, Enum):
    """Coarse volatility bucket for a trading day."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Performance(str, Enum):
    """Direction of a trading day."""

    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"


class CalendarUnit(str, Enum):
    """Aggregation granularity."""

    WEEK = "week"
    MONTH = "month"


class PatternKind(str, Enum):
    """Kind of recurring seasonal bias."""

    BULLISH = "bullish"
    BEARISH = "bearish"
    VOLATILE = "volatile"
    STABLE = "stable"


class AnomalyKind(str, Enum):
    """Kind of single-day anomaly."""

    VOLUME_SPIKE = "volume_spike"
    VOLATILITY_SPIKE = "volatility_spike"
    PRICE_GAP = "price_gap"


class Severity(str, Enum):
    """Severity grade of an anomaly."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


# ---------------------------------------------------------------------------
# Date Types
# ---------------------------------------------------------------------------


class DateRange(FrozenModel):
    """Inclusive calendar date range.

    :param start: First day of the range (inclusive).
    :param end: Last day of the range (inclusive).
    """

    start: dt.date
    end: dt.date

    def __contains__(self, day: object) -> bool:
        return isinstance(day, dt.date) and self.start <= day <= self.end


# ---------------------------------------------------------------------------
# Market Data Types
# ---------------------------------------------------------------------------


class MarketDataPoint(FrozenModel):
    """One calendar day of descriptors for a single instrument.

    This is the common structure produced by every series source and
    consumed by all analytics.

    :param date: Calendar day; unique and ascending within a series.
    :param volatility_level: Coarse volatility bucket.
    :param volume: Traded volume (non-negative).
    :param performance: Direction of the day.
    :param price_change_percent: Signed open-to-close change in percent (finite).
    :param liquidity: Liquidity score on a 0-100 scale.
    """

    date: dt.date
    volatility_level: VolatilityLevel
    volume: float = Field(ge=0.0, allow_inf_nan=False)
    performance: Performance
    price_change_percent: float = Field(allow_inf_nan=False)
    liquidity: float = Field(ge=0.0, le=100.0, allow_inf_nan=False)


class AggregatedPeriod(FrozenModel):
    """One week or month bucket of a daily series.

    :param period_id: Key unique per (year, unit, index), e.g. "2024-W05" or "2024-03".
    :param unit: Calendar unit the bucket was built for.
    :param year: Calendar year of the bucket.
    :param index: Week number or month number within the year.
    :param start_date: Earliest contributing date.
    :param end_date: Latest contributing date.
    :param dominant_volatility: Most frequent volatility level.
    :param dominant_performance: Most frequent performance.
    :param total_volume: Sum of contributing volumes.
    :param mean_price_change_percent: Mean of contributing price changes.
    :param mean_liquidity: Mean of contributing liquidity scores.
    :param sample_count: Number of contributing points.
    """

    period_id: str
    unit: CalendarUnit
    year: int
    index: int
    start_date: dt.date
    end_date: dt.date
    dominant_volatility: VolatilityLevel
    dominant_performance: Performance
    total_volume: float
    mean_price_change_percent: float
    mean_liquidity: float
    sample_count: int = Field(ge=1)


class SeasonalPattern(FrozenModel):
    """A recurring calendar-position bias.

    :param kind: Kind of bias.
    :param calendar_label: Recurring position, e.g. "January" or "Friday".
    :param strength: Magnitude-derived confidence score in [0, 100].
    :param narrative: Human-readable explanation.
    :param sample_count: Historical occurrences supporting the pattern.
    """

    kind: PatternKind
    calendar_label: str
    strength: float = Field(ge=0.0, le=100.0)
    narrative: str
    sample_count: int


class Anomaly(FrozenModel):
    """A statistically unusual day.

    :param date: The flagged day.
    :param kind: Which rule flagged it.
    :param severity: Severity grade.
    :param magnitude: Raw value that triggered the flag.
    :param narrative: Human-readable explanation.
    """

    date: dt.date
    kind: AnomalyKind
    severity: Severity
    magnitude: float
    narrative: str = ""


# ---------------------------------------------------------------------------
# Summary Types
# ---------------------------------------------------------------------------


class SeriesSummary(FrozenModel):
    """Whole-series statistics.

    :param start_date: First date in the series.
    :param end_date: Last date in the series.
    :param trading_days: Number of points.
    :param total_volume: Sum of volumes.
    :param mean_volume: Mean daily volume.
    :param mean_price_change_percent: Mean daily price change.
    :param mean_liquidity: Mean liquidity score.
    :param volatility_counts: Days per volatility level.
    :param performance_counts: Days per performance.
    :param risk_score: Share of high-volatility days, in percent.
    :param recent_trend: Direction of the most recent week of trading.
    """

    start_date: dt.date
    end_date: dt.date
    trading_days: int
    total_volume: float
    mean_volume: float
    mean_price_change_percent: float
    mean_liquidity: float
    volatility_counts: dict[VolatilityLevel, int]
    performance_counts: dict[Performance, int]
    risk_score: float
    recent_trend: Performance


class DayAssessment(FrozenModel):
    """Per-day derived grades.

    :param date: The assessed day.
    :param volatility_score: 20/50/80 for low/medium/high volatility.
    :param volume_trend: "high", "normal" or "low" relative to the mean.
    :param liquidity_grade: Letter grade A-D.
    :param risk_grade: Severity grade of the combined risk level.
    :param trading_signal: "buy", "sell" or "hold".
    """

    date: dt.date
    volatility_score: int
    volume_trend: str
    liquidity_grade: str
    risk_grade: Severity
    trading_signal: str


# ---------------------------------------------------------------------------
# Configuration Types
# ---------------------------------------------------------------------------


class SynthConfig(FrozenModel):
    """Configuration for generating a synthetic daily series.

    :param symbol: Synthetic instrument name.
    :param date_range: Inclusive range to generate.
    :param random_seed: Seed for reproducibility, or None for random.
    :param dataset_id: Dataset identifier, auto-generated if None.
    """

    symbol: Symbol
    date_range: DateRange
    random_seed: int | None = None
    dataset_id: DatasetId | None = None


class AnalysisThresholds(FrozenModel):
    """Sample-size limits for the detectors.

    :param min_pattern_points: Series length below which no patterns are inferred.
    :param min_group_points: Calendar groups smaller than this are skipped.
    :param max_patterns: Maximum patterns returned.
    :param min_anomaly_points: Series length below which no anomalies are flagged.
    :param max_anomalies: Maximum anomalies returned.
    """

    min_pattern_points: int = Field(default=30, gt=0)
    min_group_points: int = Field(default=3, gt=0)
    max_patterns: int = Field(default=6, gt=0)
    min_anomaly_points: int = Field(default=10, gt=0)
    max_anomalies: int = Field(default=10, gt=0)


class AnalysisConfig(FrozenModel):
    """Configuration for an analysis run.

    :param source_type: Series source ("synth" or "csv").
    :param source_params: Source-specific parameters.
    :param date_range: Days to load; None means everything the source has
        (only valid for sources that are not generated).
    :param year: Year to aggregate, or None for the latest year in the series.
    :param unit: Calendar unit to aggregate by.
    :param thresholds: Detector sample-size limits.
    :param log_level: Logging level.
    """

    source_type: str = "synth"
    source_params: dict[str, Any] = Field(default_factory=dict)
    date_range: DateRange | None = None
    year: int | None = None
    unit: CalendarUnit = CalendarUnit.MONTH
    thresholds: AnalysisThresholds = Field(default_factory=AnalysisThresholds)
    log_level: str = "INFO"


# ---------------------------------------------------------------------------
# Exports
# ---------------------------------------------------------------------------

__all__ = [
    # Type aliases
    "Symbol",
    "DatasetId",
    # Base models
    "FrozenModel",
    # Categorical
    "VolatilityLevel",
    "Performance",
    "CalendarUnit",
    "PatternKind",
    "AnomalyKind",
    "Severity",
    # Dates
    "DateRange",
    # Market data
    "MarketDataPoint",
    "AggregatedPeriod",
    "SeasonalPattern",
    "Anomaly",
    # Summary
    "SeriesSummary",
    "DayAssessment",
    # Configuration
    "SynthConfig",
    "AnalysisThresholds",
    "AnalysisConfig",
]
