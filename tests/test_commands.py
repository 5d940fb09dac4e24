"""Tests for command configuration loaders."""

from datetime import date, datetime, timezone
from pathlib import Path

import pytest
import yaml

from seasonality.commands.analyze import (load_analysis_config,
                                          parse_analysis_params,
                                          validate_analysis_config)
from seasonality.commands.gen_synth import (_generate_dataset_id, _parse_date,
                                            load_gen_synth_config,
                                            parse_synth_params)
from seasonality.exceptions import ConfigError
from seasonality.types import (AnalysisThresholds, CalendarUnit, DatasetId,
                               DateRange, Symbol)


def _write_yaml(tmp_path: Path, config: object, name: str = "config.yaml") -> Path:
    config_file = tmp_path / name
    config_file.write_text(yaml.dump(config))
    return config_file


class TestParseDate:
    """Tests for date parsing utility."""

    def test_parse_simple_date(self) -> None:
        """Parse simple YYYY-MM-DD format."""
        assert _parse_date("2024-01-15") == date(2024, 1, 15)

    def test_parse_iso_datetime(self) -> None:
        """A full ISO timestamp is truncated to its day."""
        assert _parse_date("2024-01-15T10:30:00Z") == date(2024, 1, 15)

    def test_parse_date_object(self) -> None:
        """Pass through date objects."""
        assert _parse_date(date(2024, 1, 15)) == date(2024, 1, 15)

    def test_parse_datetime_object(self) -> None:
        """Datetime objects collapse to their date."""
        assert _parse_date(datetime(2024, 1, 15, 23, tzinfo=timezone.utc)) == date(2024, 1, 15)

    def test_parse_invalid_format_raises(self) -> None:
        """Invalid format raises ConfigError."""
        with pytest.raises(ConfigError, match="Invalid date format"):
            _parse_date("not-a-date")


class TestGenerateDatasetId:
    """Tests for dataset ID generation."""

    def test_basic_generation(self) -> None:
        """Generate ID from symbol and range."""
        date_range = DateRange(start=date(2023, 1, 1), end=date(2024, 1, 1))

        result = _generate_dataset_id(Symbol("BTCUSDT"), date_range, None)

        assert result == "synth_btcusdt_20230101_20240101"

    def test_seed_included(self) -> None:
        """The seed is appended for reproducibility."""
        date_range = DateRange(start=date(2023, 1, 1), end=date(2024, 1, 1))

        result = _generate_dataset_id(Symbol("ETH"), date_range, 42)

        assert result.endswith("_s42")


class TestLoadGenSynthConfig:
    """Tests for gen-synth config loading."""

    def test_load_valid_config(self, tmp_path: Path) -> None:
        """Load a valid configuration file."""
        config_file = _write_yaml(
            tmp_path,
            {
                "symbol": "BTCUSDT",
                "date_range": {"start": "2023-01-01", "end": "2024-12-31"},
                "random_seed": 42,
            },
        )

        result = load_gen_synth_config(config_file)

        assert result.symbol == Symbol("BTCUSDT")
        assert result.date_range == DateRange(start=date(2023, 1, 1), end=date(2024, 12, 31))
        assert result.random_seed == 42
        assert result.dataset_id == "synth_btcusdt_20230101_20241231_s42"

    def test_explicit_dataset_id(self) -> None:
        """A provided dataset id is kept verbatim."""
        result = parse_synth_params(
            {
                "symbol": "BTC",
                "date_range": {"start": "2024-01-01", "end": "2024-01-31"},
                "dataset_id": "my_dataset",
            }
        )

        assert result.dataset_id == DatasetId("my_dataset")

    @pytest.mark.parametrize("missing", ["symbol", "date_range"])
    def test_missing_required_field(self, missing: str) -> None:
        """Missing required fields raise ConfigError."""
        raw = {"symbol": "BTC", "date_range": {"start": "2024-01-01", "end": "2024-01-31"}}
        del raw[missing]

        with pytest.raises(ConfigError, match=f"Missing required field: {missing}"):
            parse_synth_params(raw)

    def test_blank_symbol(self) -> None:
        """Whitespace-only symbols are rejected."""
        with pytest.raises(ConfigError, match="non-empty string"):
            parse_synth_params(
                {"symbol": "  ", "date_range": {"start": "2024-01-01", "end": "2024-01-31"}}
            )

    @pytest.mark.parametrize("seed", ["42", 4.2, True])
    def test_non_integer_seed(self, seed: object) -> None:
        """Seeds must be integers."""
        with pytest.raises(ConfigError, match="'random_seed' must be an integer"):
            parse_synth_params(
                {
                    "symbol": "BTC",
                    "date_range": {"start": "2024-01-01", "end": "2024-01-31"},
                    "random_seed": seed,
                }
            )

    def test_inverted_range(self) -> None:
        """start after end is rejected."""
        with pytest.raises(ConfigError, match="must not be after"):
            parse_synth_params(
                {"symbol": "BTC", "date_range": {"start": "2024-02-01", "end": "2024-01-01"}}
            )

    def test_file_not_found(self, tmp_path: Path) -> None:
        """Missing file raises ConfigError."""
        with pytest.raises(ConfigError, match="not found"):
            load_gen_synth_config(tmp_path / "missing.yaml")

    def test_not_a_mapping(self, tmp_path: Path) -> None:
        """A YAML list is not a valid configuration."""
        config_file = _write_yaml(tmp_path, ["symbol", "BTC"])

        with pytest.raises(ConfigError, match="YAML mapping"):
            load_gen_synth_config(config_file)

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        """Malformed YAML raises ConfigError."""
        config_file = tmp_path / "broken.yaml"
        config_file.write_text("symbol: [unclosed\n")

        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_gen_synth_config(config_file)


class TestLoadAnalysisConfig:
    """Tests for analyze config loading."""

    def test_load_csv_config(self, tmp_path: Path) -> None:
        """Load a complete csv configuration."""
        config_file = _write_yaml(
            tmp_path,
            {
                "source": {"type": "csv", "params": {"file_path": "daily.csv"}},
                "year": 2024,
                "unit": "week",
                "thresholds": {"max_patterns": 3},
                "logging": {"level": "debug"},
            },
        )

        result = load_analysis_config(config_file)

        assert result.source_type == "csv"
        assert result.source_params == {"file_path": "daily.csv"}
        assert result.date_range is None
        assert result.year == 2024
        assert result.unit is CalendarUnit.WEEK
        assert result.thresholds.max_patterns == 3
        assert result.thresholds.min_pattern_points == 30
        assert result.log_level == "DEBUG"

    def test_synth_defaults(self) -> None:
        """A synth source needs only a date range."""
        result = parse_analysis_params({"date_range": {"start": "2024-01-01", "end": "2024-12-31"}})

        assert result.source_type == "synth"
        assert result.unit is CalendarUnit.MONTH
        assert result.thresholds == AnalysisThresholds()
        assert result.log_level == "INFO"

    def test_synth_requires_date_range(self) -> None:
        """A synthetic series has no natural extent."""
        with pytest.raises(ConfigError, match="'date_range' is required"):
            parse_analysis_params({"source": {"type": "synth"}})

    def test_csv_requires_file_path(self) -> None:
        """csv sources must name a file."""
        with pytest.raises(ConfigError, match="file_path"):
            parse_analysis_params({"source": {"type": "csv"}})

    def test_invalid_source_type(self) -> None:
        """Unknown source types are rejected."""
        with pytest.raises(ConfigError, match="Invalid source type"):
            parse_analysis_params({"source": {"type": "yahoo"}})

    def test_invalid_unit(self) -> None:
        """Only week and month are valid units."""
        with pytest.raises(ConfigError, match="Invalid unit 'quarter'"):
            parse_analysis_params(
                {
                    "date_range": {"start": "2024-01-01", "end": "2024-12-31"},
                    "unit": "quarter",
                }
            )

    def test_year_must_be_integer(self) -> None:
        """A string year is rejected."""
        with pytest.raises(ConfigError, match="'year' must be an integer"):
            parse_analysis_params(
                {"date_range": {"start": "2024-01-01", "end": "2024-12-31"}, "year": "2024"}
            )

    @pytest.mark.parametrize(
        ("thresholds", "match"),
        [
            ({"min_points": 5}, "Unknown threshold"),
            ({"max_patterns": 0}, "positive integer"),
            ({"max_anomalies": 2.5}, "positive integer"),
        ],
    )
    def test_invalid_thresholds(self, thresholds: dict, match: str) -> None:
        """Threshold keys must be known and values positive integers."""
        with pytest.raises(ConfigError, match=match):
            parse_analysis_params(
                {
                    "date_range": {"start": "2024-01-01", "end": "2024-12-31"},
                    "thresholds": thresholds,
                }
            )

    def test_invalid_log_level(self) -> None:
        """Unknown log levels are rejected."""
        with pytest.raises(ConfigError, match="Invalid log level"):
            parse_analysis_params(
                {
                    "date_range": {"start": "2024-01-01", "end": "2024-12-31"},
                    "logging": {"level": "verbose"},
                }
            )


class TestValidateAnalysisConfig:
    """Tests for validate_analysis_config."""

    def test_defaults_have_no_warnings(self) -> None:
        """A default configuration is warning-free."""
        config = parse_analysis_params({"date_range": {"start": "2024-01-01", "end": "2024-12-31"}})

        assert validate_analysis_config(config) == []

    def test_lowered_thresholds_warn(self) -> None:
        """Thresholds below the defaults produce warnings."""
        config = parse_analysis_params(
            {
                "date_range": {"start": "2024-01-01", "end": "2024-12-31"},
                "thresholds": {"min_pattern_points": 5, "min_anomaly_points": 3},
            }
        )

        warnings = validate_analysis_config(config)

        assert len(warnings) == 2
        assert "min_pattern_points=5" in warnings[0]
        assert "min_anomaly_points=3" in warnings[1]

    def test_year_outside_range_warns(self) -> None:
        """A year the range cannot cover will aggregate to nothing."""
        config = parse_analysis_params(
            {"date_range": {"start": "2024-01-01", "end": "2024-12-31"}, "year": 2020}
        )

        warnings = validate_analysis_config(config)

        assert len(warnings) == 1
        assert "Year 2020" in warnings[0]
