"""Configuration for the analyze command.

Example config file (analyze.yaml):

    source:
      type: "csv"             # synth | csv
      params:
        file_path: "btc_daily.csv"
    date_range:               # Required for synth, optional for csv
      start: "2022-01-01"
      end: "2024-12-31"
    year: 2024                # Optional; latest year in the series by default
    unit: "month"             # week | month
    thresholds:               # Optional; defaults shown
      min_pattern_points: 30
      min_group_points: 3
      max_patterns: 6
      min_anomaly_points: 10
      max_anomalies: 10
    logging:
      level: "INFO"
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from seasonality.commands.gen_synth import _parse_date_range, _read_yaml_mapping
from seasonality.exceptions import ConfigError
from seasonality.types import AnalysisConfig, AnalysisThresholds, CalendarUnit

VALID_SOURCE_TYPES = frozenset(["synth", "csv"])

VALID_LOG_LEVELS = frozenset(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"])


def _parse_thresholds(raw_thresholds: Any) -> AnalysisThresholds:
    """Parse the optional thresholds mapping.

    :raises ConfigError: On unknown keys or non-positive values.
    """
    if not isinstance(raw_thresholds, dict):
        raise ConfigError("'thresholds' must be a mapping")

    known = set(AnalysisThresholds.model_fields)
    unknown = set(raw_thresholds) - known
    if unknown:
        raise ConfigError(
            f"Unknown threshold(s) {sorted(unknown)}. Valid options: {sorted(known)}"
        )

    for name, value in raw_thresholds.items():
        if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
            raise ConfigError(f"'thresholds.{name}' must be a positive integer")

    return AnalysisThresholds(**raw_thresholds)


def parse_analysis_params(raw_config: dict[str, Any]) -> AnalysisConfig:
    """Validate an in-memory analyze mapping.

    :param raw_config: Mapping with the keys documented in this module.
    :returns: Validated AnalysisConfig object.
    :raises ConfigError: If the mapping is invalid.
    """
    # Parse source
    raw_source = raw_config.get("source", {"type": "synth"})
    if not isinstance(raw_source, dict):
        raise ConfigError("'source' must be a mapping")

    source_type = str(raw_source.get("type", "synth")).lower()
    if source_type not in VALID_SOURCE_TYPES:
        raise ConfigError(
            f"Invalid source type '{source_type}'. "
            f"Valid options: {sorted(VALID_SOURCE_TYPES)}"
        )

    source_params: dict[str, Any] = raw_source.get("params", {}) or {}
    if not isinstance(source_params, dict):
        raise ConfigError("'source.params' must be a mapping")
    if source_type == "csv" and not source_params.get("file_path"):
        raise ConfigError("'source.params.file_path' is required for csv sources")

    # Parse date_range (required for generated series)
    date_range = None
    if raw_config.get("date_range") is not None:
        date_range = _parse_date_range(raw_config["date_range"])
    elif source_type == "synth":
        raise ConfigError("'date_range' is required for synth sources")

    # Parse year (optional)
    year = raw_config.get("year")
    if year is not None and (not isinstance(year, int) or isinstance(year, bool)):
        raise ConfigError("'year' must be an integer")

    # Parse unit
    raw_unit = raw_config.get("unit", CalendarUnit.MONTH.value)
    try:
        unit = CalendarUnit(str(raw_unit).lower())
    except ValueError as e:
        raise ConfigError(
            f"Invalid unit '{raw_unit}'. "
            f"Valid options: {[u.value for u in CalendarUnit]}"
        ) from e

    # Parse thresholds (optional)
    thresholds = _parse_thresholds(raw_config.get("thresholds", {}) or {})

    # Parse logging (optional)
    raw_logging = raw_config.get("logging", {}) or {}
    if not isinstance(raw_logging, dict):
        raise ConfigError("'logging' must be a mapping")

    log_level = str(raw_logging.get("level", "INFO")).upper()
    if log_level not in VALID_LOG_LEVELS:
        raise ConfigError(
            f"Invalid log level '{log_level}'. "
            f"Valid options: {sorted(VALID_LOG_LEVELS)}"
        )

    return AnalysisConfig(
        source_type=source_type,
        source_params=source_params,
        date_range=date_range,
        year=year,
        unit=unit,
        thresholds=thresholds,
        log_level=log_level,
    )


def load_analysis_config(config_path: str | Path) -> AnalysisConfig:
    """Parse and validate an analyze configuration file.

    :param config_path: Path to YAML configuration file.
    :returns: Validated AnalysisConfig object.
    :raises ConfigError: If file cannot be read or config is invalid.
    """
    return parse_analysis_params(_read_yaml_mapping(config_path))


def validate_analysis_config(config: AnalysisConfig) -> list[str]:
    """Perform additional checks on an analysis config.

    :param config: Analysis configuration to validate.
    :returns: List of warning messages (empty if no warnings).
    """
    warnings: list[str] = []
    defaults = AnalysisThresholds()

    if config.thresholds.min_pattern_points < defaults.min_pattern_points:
        warnings.append(
            f"min_pattern_points={config.thresholds.min_pattern_points} is below "
            f"the default {defaults.min_pattern_points} - patterns may be noise"
        )
    if config.thresholds.min_anomaly_points < defaults.min_anomaly_points:
        warnings.append(
            f"min_anomaly_points={config.thresholds.min_anomaly_points} is below "
            f"the default {defaults.min_anomaly_points} - z-scores may be unstable"
        )

    if (
        config.year is not None
        and config.date_range is not None
        and not config.date_range.start.year <= config.year <= config.date_range.end.year
    ):
        warnings.append(
            f"Year {config.year} is outside the date range "
            f"{config.date_range.start} - {config.date_range.end}; "
            "aggregation will be empty"
        )

    return warnings
