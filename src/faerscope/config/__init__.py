"""Configuration module for FAERScope Core."""

from .settings import (
    config,
    Config,
    SignalCriteria,
    PUBLISHED_SIGNAL_CRITERIA,
    TimeSeriesConfig,
    AppConfig,
    ConfigurationError,
)
from .constants import (
    Z_95,
    NORMAL_CDF_COEFFICIENTS,
    NORMAL_CDF_P,
    NORMAL_CDF_CLAMP,
    SPIKE_WINDOW,
    SPIKE_THRESHOLD,
    CUSUM_DRIFT_SIGMA,
    CUSUM_THRESHOLD_SIGMA,
    CUSUM_MIN_POINTS,
    FDR_ALPHA,
    DedupMode,
    CharacterizationMode,
    DEDUP_MODE_DESCRIPTIONS,
    CHARACTERIZATION_MODE_DESCRIPTIONS,
    get_dedup_mode_description,
    get_characterization_mode_description,
)

__all__ = [
    # Settings
    "config",
    "Config",
    "SignalCriteria",
    "PUBLISHED_SIGNAL_CRITERIA",
    "TimeSeriesConfig",
    "AppConfig",
    "ConfigurationError",
    # Constants
    "Z_95",
    "NORMAL_CDF_COEFFICIENTS",
    "NORMAL_CDF_P",
    "NORMAL_CDF_CLAMP",
    "SPIKE_WINDOW",
    "SPIKE_THRESHOLD",
    "CUSUM_DRIFT_SIGMA",
    "CUSUM_THRESHOLD_SIGMA",
    "CUSUM_MIN_POINTS",
    "FDR_ALPHA",
    "DedupMode",
    "CharacterizationMode",
    "DEDUP_MODE_DESCRIPTIONS",
    "CHARACTERIZATION_MODE_DESCRIPTIONS",
    # Helper functions
    "get_dedup_mode_description",
    "get_characterization_mode_description",
]
