"""Series synthesis, normalization and source management module."""

from seasonality.data.normalize import Bar, OrderBook, bars_to_points
from seasonality.data.sources import (CSVSeriesSource, SeriesSource,
                                      SynthSeriesSource, resolve_series_source)
from seasonality.data.synth import SeriesSynthesizer, generate_series

__all__ = [
    "SeriesSource",
    "SynthSeriesSource",
    "CSVSeriesSource",
    "resolve_series_source",
    "SeriesSynthesizer",
    "generate_series",
    "Bar",
    "OrderBook",
    "bars_to_points",
]
