"""CLI command configuration for the seasonality tools.

Each command module provides:
- Configuration loading and validation
- Translation of YAML mappings into typed config models
"""

from seasonality.commands.analyze import (load_analysis_config,
                                          validate_analysis_config)
from seasonality.commands.gen_synth import load_gen_synth_config

__all__ = [
    "load_analysis_config",
    "validate_analysis_config",
    "load_gen_synth_config",
]
