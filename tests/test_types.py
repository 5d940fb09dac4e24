"""Tests for core type definitions."""

from datetime import date

import pytest
from pydantic import ValidationError

from seasonality.types import (AggregatedPeriod, AnalysisConfig,
                               AnalysisThresholds, Anomaly, AnomalyKind,
                               CalendarUnit, DatasetId, DateRange,
                               MarketDataPoint, PatternKind, Performance,
                               SeasonalPattern, Severity, Symbol, SynthConfig,
                               VolatilityLevel)

# ---------------------------------------------------------------------------
# Market Data Tests
# ---------------------------------------------------------------------------


def test_market_data_point_creation_and_attributes() -> None:
    """MarketDataPoint should store all fields, coercing strings to enums."""
    point = MarketDataPoint(
        date="2024-01-02",
        volatility_level="high",
        volume=1500,
        performance="negative",
        price_change_percent=-1.5,
        liquidity=70,
    )

    assert point.date == date(2024, 1, 2)
    assert point.volatility_level is VolatilityLevel.HIGH
    assert point.volume == 1500.0
    assert point.performance is Performance.NEGATIVE
    assert point.price_change_percent == -1.5
    assert point.liquidity == 70.0


def test_market_data_point_is_immutable() -> None:
    """Points are frozen once created."""
    point = MarketDataPoint(
        date=date(2024, 1, 2),
        volatility_level=VolatilityLevel.LOW,
        volume=1.0,
        performance=Performance.NEUTRAL,
        price_change_percent=0.0,
        liquidity=50.0,
    )

    with pytest.raises(ValidationError):
        point.volume = 2.0  # type: ignore[misc]


@pytest.mark.parametrize(
    "overrides",
    [
        {"volatility_level": "extreme"},
        {"performance": "sideways"},
        {"volume": -1.0},
        {"liquidity": 100.5},
        {"liquidity": -0.1},
        {"price_change_percent": float("nan")},
        {"price_change_percent": float("inf")},
        {"volume": float("inf")},
        {"liquidity": float("nan")},
    ],
)
def test_market_data_point_rejects_out_of_domain_values(overrides: dict) -> None:
    """Categoricals in-domain, numbers finite, volume non-negative, liquidity in [0, 100]."""
    fields = {
        "date": date(2024, 1, 2),
        "volatility_level": "low",
        "volume": 10.0,
        "performance": "positive",
        "price_change_percent": 1.0,
        "liquidity": 50.0,
    }
    fields.update(overrides)

    with pytest.raises(ValidationError):
        MarketDataPoint(**fields)


def test_enum_declaration_order_is_tie_break_order() -> None:
    """Categorical enums iterate in their documented fixed order."""
    assert [v.value for v in VolatilityLevel] == ["low", "medium", "high"]
    assert [p.value for p in Performance] == ["positive", "negative", "neutral"]


def test_enums_are_string_valued() -> None:
    """Enums compare equal to their wire values."""
    assert CalendarUnit.WEEK == "week"
    assert PatternKind.VOLATILE == "volatile"
    assert AnomalyKind.PRICE_GAP == "price_gap"
    assert Severity.MEDIUM == "medium"


# ---------------------------------------------------------------------------
# Result Record Tests
# ---------------------------------------------------------------------------


def test_aggregated_period_requires_positive_sample_count() -> None:
    """Buckets with zero samples cannot be represented."""
    with pytest.raises(ValidationError):
        AggregatedPeriod(
            period_id="2024-01",
            unit=CalendarUnit.MONTH,
            year=2024,
            index=1,
            start_date=date(2024, 1, 1),
            end_date=date(2024, 1, 31),
            dominant_volatility=VolatilityLevel.LOW,
            dominant_performance=Performance.POSITIVE,
            total_volume=0.0,
            mean_price_change_percent=0.0,
            mean_liquidity=0.0,
            sample_count=0,
        )


def test_seasonal_pattern_strength_is_bounded() -> None:
    """Strength above 100 is rejected."""
    with pytest.raises(ValidationError):
        SeasonalPattern(
            kind=PatternKind.BULLISH,
            calendar_label="January",
            strength=100.1,
            narrative="",
            sample_count=3,
        )


def test_anomaly_fields() -> None:
    """Anomaly should store all fields with an empty default narrative."""
    anomaly = Anomaly(
        date=date(2024, 3, 1),
        kind=AnomalyKind.VOLUME_SPIKE,
        severity=Severity.LOW,
        magnitude=2_000_000.0,
    )

    assert anomaly.date == date(2024, 3, 1)
    assert anomaly.kind is AnomalyKind.VOLUME_SPIKE
    assert anomaly.narrative == ""


# ---------------------------------------------------------------------------
# Date and Configuration Tests
# ---------------------------------------------------------------------------


def test_date_range_is_inclusive() -> None:
    """DateRange membership includes both endpoints."""
    dr = DateRange(start=date(2024, 1, 1), end=date(2024, 1, 31))

    assert date(2024, 1, 1) in dr
    assert date(2024, 1, 31) in dr
    assert date(2024, 2, 1) not in dr
    assert "2024-01-15" not in dr


def test_identifier_newtypes_wrap_strings() -> None:
    """NewType identifiers should behave as strings."""
    ds_id = DatasetId("synth_btcusdt_20240101_20241231")
    symbol = Symbol("BTCUSDT")

    assert isinstance(ds_id, str)
    assert isinstance(symbol, str)


def test_synth_config_defaults() -> None:
    """SynthConfig should default seed and dataset id to None."""
    config = SynthConfig(
        symbol=Symbol("BTCUSDT"),
        date_range=DateRange(start=date(2024, 1, 1), end=date(2024, 1, 31)),
    )

    assert config.random_seed is None
    assert config.dataset_id is None


def test_analysis_config_defaults() -> None:
    """AnalysisConfig should have sensible defaults."""
    config = AnalysisConfig()

    assert config.source_type == "synth"
    assert config.unit is CalendarUnit.MONTH
    assert config.year is None
    assert config.thresholds == AnalysisThresholds()
    assert config.thresholds.min_pattern_points == 30
    assert config.thresholds.max_patterns == 6
    assert config.thresholds.min_anomaly_points == 10
    assert config.thresholds.max_anomalies == 10


@pytest.mark.parametrize(
    "field",
    ["min_pattern_points", "min_group_points", "max_patterns", "min_anomaly_points", "max_anomalies"],
)
@pytest.mark.parametrize("value", [0, -1])
def test_analysis_thresholds_must_be_positive(field: str, value: int) -> None:
    """Zero or negative limits are rejected at construction."""
    with pytest.raises(ValidationError):
        AnalysisThresholds(**{field: value})
