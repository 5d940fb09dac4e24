"""Seasonality package root."""

from seasonality.exceptions import ConfigError, SeasonalityError

__version__ = "0.1.0"

__all__ = ["__version__", "ConfigError", "SeasonalityError"]
