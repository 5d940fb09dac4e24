"""Series source implementations for loading daily market data.

This module provides an abstract interface for series sources and concrete
implementations for the synthesizer and local CSV files.
"""

from __future__ import annotations

import csv
import logging
from abc import ABC, abstractmethod
from datetime import date
from pathlib import Path
from typing import Any, Iterator

from pydantic import ValidationError

from seasonality.data.synth import SeriesSynthesizer
from seasonality.exceptions import DataSourceError
from seasonality.types import DateRange, MarketDataPoint

logger = logging.getLogger(__name__)


class SeriesSource(ABC):
    """Abstract base class for series sources.

    All source implementations must inherit from this class and implement
    the `fetch_points` method.
    """

    @abstractmethod
    def fetch_points(self, date_range: DateRange) -> Iterator[MarketDataPoint]:
        """Fetch daily points for an inclusive date range.

        :param date_range: Days to fetch (inclusive on both ends).
        :returns: Iterator of points in chronological order.
        :raises DataSourceError: If fetching fails.
        """
        ...


class SynthSeriesSource(SeriesSource):
    """Series source backed by the synthetic generator.

    :param source_params: Optional parameters for configuring the source.
        - random_seed: Seed for reproducible output (default: None)
    """

    def __init__(self, source_params: dict[str, Any] | None = None) -> None:
        self.params = source_params or {}
        self.random_seed = self.params.get("random_seed")
        if self.random_seed is not None and not isinstance(self.random_seed, int):
            raise DataSourceError("'random_seed' must be an integer")

    def fetch_points(self, date_range: DateRange) -> Iterator[MarketDataPoint]:
        """Generate a synthetic weekday series for the range."""
        synth = SeriesSynthesizer(seed=self.random_seed)
        yield from synth.generate(date_range.start, date_range.end)


class CSVSeriesSource(SeriesSource):
    """Series source that reads daily points from a CSV file.

    Expected CSV format (default columns):
    - date: YYYY-MM-DD
    - volatility_level: low, medium or high
    - volume: Traded volume
    - performance: positive, negative or neutral
    - price_change_percent: Signed change in percent
    - liquidity: Score on a 0-100 scale

    :param source_params: Required parameters:
        - file_path: Path to the CSV file.
        Optional parameters:
        - date_col, volatility_col, volume_col, performance_col,
          change_col, liquidity_col: Column name overrides
        - delimiter: CSV delimiter (default: ",")
    """

    def __init__(self, source_params: dict[str, Any] | None = None) -> None:
        """Initialize CSV series source.

        :param source_params: Configuration with file_path and optional column mappings.
        :raises DataSourceError: If file_path is not provided.
        """
        self.params = source_params or {}
        self.file_path = self.params.get("file_path")
        if not self.file_path:
            raise DataSourceError("CSVSeriesSource requires 'file_path' in source_params")

        # Column name mappings with defaults
        self.date_col = self.params.get("date_col", "date")
        self.volatility_col = self.params.get("volatility_col", "volatility_level")
        self.volume_col = self.params.get("volume_col", "volume")
        self.performance_col = self.params.get("performance_col", "performance")
        self.change_col = self.params.get("change_col", "price_change_percent")
        self.liquidity_col = self.params.get("liquidity_col", "liquidity")
        self.delimiter = self.params.get("delimiter", ",")

    def fetch_points(self, date_range: DateRange) -> Iterator[MarketDataPoint]:
        """Read daily points from the CSV file.

        :param date_range: Days to keep (inclusive on both ends).
        :returns: Iterator of points in file order.
        :raises DataSourceError: If the file is missing, lacks the date
            column, or a row is malformed.
        """
        path = Path(self.file_path)
        if not path.exists():
            raise DataSourceError(f"CSV file not found: {self.file_path}")

        try:
            # utf-8-sig strips the BOM that spreadsheet exports prepend
            with open(path, newline="", encoding="utf-8-sig") as f:
                reader = csv.DictReader(f, delimiter=self.delimiter)
                if reader.fieldnames is not None and self.date_col not in reader.fieldnames:
                    raise DataSourceError(
                        f"CSV file {self.file_path} has no '{self.date_col}' column. "
                        f"Found: {reader.fieldnames}"
                    )

                for line_no, row in enumerate(reader, start=2):
                    raw_date = row.get(self.date_col)
                    if not raw_date:
                        continue  # Skip rows without a date

                    try:
                        day = date.fromisoformat(raw_date.strip())
                    except ValueError as e:
                        raise DataSourceError(
                            f"Failed to parse date '{raw_date}' on line {line_no}: {e}"
                        ) from e

                    if day not in date_range:
                        continue

                    try:
                        yield MarketDataPoint(
                            date=day,
                            volatility_level=row[self.volatility_col].strip().lower(),
                            volume=float(row[self.volume_col]),
                            performance=row[self.performance_col].strip().lower(),
                            price_change_percent=float(row[self.change_col]),
                            liquidity=float(row[self.liquidity_col]),
                        )
                    except (KeyError, ValueError, AttributeError, ValidationError) as e:
                        raise DataSourceError(
                            f"Failed to parse row on line {line_no}: {e}"
                        ) from e

        except csv.Error as e:
            raise DataSourceError(f"CSV parsing error: {e}") from e
        except OSError as e:
            raise DataSourceError(f"Failed to read CSV file: {e}") from e


def resolve_series_source(
    source_type: str,
    source_params: dict[str, Any] | None = None,
) -> SeriesSource:
    """Construct a series source by type name.

    :param source_type: "synth" or "csv".
    :param source_params: Source-specific parameters.
    :returns: SeriesSource instance for the specified type.
    :raises DataSourceError: If the source type is unrecognized.
    """
    kind = source_type.lower()
    logger.debug("Resolving series source '%s'", kind)

    if kind == "synth":
        return SynthSeriesSource(source_params)
    elif kind == "csv":
        return CSVSeriesSource(source_params)
    else:
        raise DataSourceError(
            f"Unrecognized series source type: '{source_type}'. "
            f"Supported types: synth, csv"
        )
