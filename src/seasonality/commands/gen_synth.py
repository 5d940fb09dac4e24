"""Configuration for the gen-synth command.

Example config file (gen_synth.yaml):

    symbol: "BTCUSDT"
    date_range:
      start: "2023-01-01"
      end: "2024-12-31"
    random_seed: 42
    dataset_id: "synth_btcusdt_20230101_20241231"  # Optional
"""

from __future__ import annotations

from datetime import date, datetime
from pathlib import Path
from typing import Any

import yaml

from seasonality.exceptions import ConfigError
from seasonality.types import DatasetId, DateRange, Symbol, SynthConfig


def _parse_date(value: str | date) -> date:
    """Parse a date string or pass through date objects.

    :param value: ISO format string, date or datetime.
    :returns: Calendar date.
    :raises ConfigError: If parsing fails.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    try:
        return date.fromisoformat(str(value))
    except ValueError:
        pass

    try:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00")).date()
    except ValueError as e:
        raise ConfigError(f"Invalid date format: {value}") from e


def _read_yaml_mapping(config_path: str | Path) -> dict[str, Any]:
    """Read a YAML file that must contain a mapping.

    :param config_path: Path to YAML configuration file.
    :returns: Parsed mapping.
    :raises ConfigError: If the file cannot be read or is not a mapping.
    """
    config_path = Path(config_path)
    try:
        with open(config_path) as f:
            raw_config = yaml.safe_load(f)
    except FileNotFoundError as e:
        raise ConfigError(f"Configuration file not found: {config_path}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in configuration file: {e}") from e

    if not isinstance(raw_config, dict):
        raise ConfigError("Configuration must be a YAML mapping")
    return raw_config


def _parse_date_range(raw_date_range: Any) -> DateRange:
    """Parse an inclusive ``{start, end}`` mapping.

    :raises ConfigError: If the mapping is malformed or start is after end.
    """
    if not isinstance(raw_date_range, dict):
        raise ConfigError("'date_range' must be a mapping with 'start' and 'end'")
    if "start" not in raw_date_range or "end" not in raw_date_range:
        raise ConfigError("'date_range' must contain 'start' and 'end'")

    start = _parse_date(raw_date_range["start"])
    end = _parse_date(raw_date_range["end"])
    if start > end:
        raise ConfigError("'date_range.start' must not be after 'date_range.end'")
    return DateRange(start=start, end=end)


def _generate_dataset_id(
    symbol: Symbol,
    date_range: DateRange,
    random_seed: int | None,
) -> DatasetId:
    """Generate a dataset ID from configuration parameters.

    :param symbol: Synthetic symbol.
    :param date_range: Date range.
    :param random_seed: Random seed (included in ID for reproducibility).
    :returns: Generated dataset ID.
    """
    start_str = date_range.start.strftime("%Y%m%d")
    end_str = date_range.end.strftime("%Y%m%d")
    seed_part = f"_s{random_seed}" if random_seed is not None else ""
    return DatasetId(f"synth_{str(symbol).lower()}_{start_str}_{end_str}{seed_part}")


def parse_synth_params(raw_config: dict[str, Any]) -> SynthConfig:
    """Validate an in-memory gen-synth mapping.

    :param raw_config: Mapping with the keys documented in this module.
    :returns: Validated SynthConfig object.
    :raises ConfigError: If the mapping is invalid.
    """
    for field in ("symbol", "date_range"):
        if field not in raw_config:
            raise ConfigError(f"Missing required field: {field}")

    raw_symbol = raw_config["symbol"]
    if not isinstance(raw_symbol, str) or not raw_symbol.strip():
        raise ConfigError("'symbol' must be a non-empty string")
    symbol = Symbol(raw_symbol.strip())

    date_range = _parse_date_range(raw_config["date_range"])

    random_seed: int | None = raw_config.get("random_seed")
    if random_seed is not None and (
        not isinstance(random_seed, int) or isinstance(random_seed, bool)
    ):
        raise ConfigError("'random_seed' must be an integer")

    if "dataset_id" in raw_config:
        dataset_id = DatasetId(str(raw_config["dataset_id"]))
    else:
        dataset_id = _generate_dataset_id(symbol, date_range, random_seed)

    return SynthConfig(
        symbol=symbol,
        date_range=date_range,
        random_seed=random_seed,
        dataset_id=dataset_id,
    )


def load_gen_synth_config(config_path: str | Path) -> SynthConfig:
    """Parse and validate a gen-synth configuration file.

    :param config_path: Path to YAML configuration file.
    :returns: Validated SynthConfig object.
    :raises ConfigError: If file cannot be read or config is invalid.
    """
    return parse_synth_params(_read_yaml_mapping(config_path))
