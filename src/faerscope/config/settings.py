"""Application settings and configuration.

Values read from the environment are opt-in: the analysis functions fall
back to the published constants in ``constants.py``, and callers pass
``config.signals`` or ``config.time_series`` values explicitly to apply
local overrides.
"""

from pathlib import Path
from dataclasses import dataclass, field
import os
from typing import Optional
from dotenv import load_dotenv

from .constants import (
    EVANS_PRR_THRESHOLD,
    EVANS_CHI2_THRESHOLD,
    EVANS_MIN_CASES,
    STRONG_ROR_LOWER_THRESHOLD,
    STRONG_IC025_THRESHOLD,
    SPIKE_WINDOW,
    SPIKE_THRESHOLD,
    CUSUM_DRIFT_SIGMA,
    CUSUM_THRESHOLD_SIGMA,
    CUSUM_MIN_POINTS,
)

# Load environment variables from .env file
load_dotenv()


class ConfigurationError(Exception):
    """Raised when configuration loading or access fails."""

    pass


def _env_float(name: str, default: float) -> float:
    """Read a float from the environment, falling back to a default."""
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}")


def _env_int(name: str, default: int) -> int:
    """Read an integer from the environment, falling back to a default."""
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}")


def _env_path(name: str) -> Optional[Path]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    return Path(raw)


@dataclass(frozen=True)
class SignalCriteria:
    """Thresholds used to classify a drug-reaction pair."""

    # Evans et al. (2001)
    prr_threshold: float = field(
        default_factory=lambda: _env_float("FAERSCOPE_PRR_THRESHOLD", EVANS_PRR_THRESHOLD)
    )
    chi2_threshold: float = field(
        default_factory=lambda: _env_float("FAERSCOPE_CHI2_THRESHOLD", EVANS_CHI2_THRESHOLD)
    )
    min_cases: int = field(
        default_factory=lambda: _env_int("FAERSCOPE_MIN_CASES", EVANS_MIN_CASES)
    )

    # Strong signal: frequentist and Bayesian evidence together
    ror_lower_threshold: float = field(
        default_factory=lambda: _env_float(
            "FAERSCOPE_ROR_LOWER_THRESHOLD", STRONG_ROR_LOWER_THRESHOLD
        )
    )
    ic025_threshold: float = field(
        default_factory=lambda: _env_float("FAERSCOPE_IC025_THRESHOLD", STRONG_IC025_THRESHOLD)
    )


# Built from explicit values so the environment never changes it
PUBLISHED_SIGNAL_CRITERIA = SignalCriteria(
    prr_threshold=EVANS_PRR_THRESHOLD,
    chi2_threshold=EVANS_CHI2_THRESHOLD,
    min_cases=EVANS_MIN_CASES,
    ror_lower_threshold=STRONG_ROR_LOWER_THRESHOLD,
    ic025_threshold=STRONG_IC025_THRESHOLD,
)


@dataclass
class TimeSeriesConfig:
    """Locally tuned spike and changepoint parameters."""

    spike_window: int = field(
        default_factory=lambda: _env_int("FAERSCOPE_SPIKE_WINDOW", SPIKE_WINDOW)
    )
    spike_threshold: float = field(
        default_factory=lambda: _env_float("FAERSCOPE_SPIKE_THRESHOLD", SPIKE_THRESHOLD)
    )
    cusum_min_points: int = field(
        default_factory=lambda: _env_int("FAERSCOPE_CUSUM_MIN_POINTS", CUSUM_MIN_POINTS)
    )
    cusum_drift_sigma: float = field(
        default_factory=lambda: _env_float("FAERSCOPE_CUSUM_DRIFT_SIGMA", CUSUM_DRIFT_SIGMA)
    )
    cusum_threshold_sigma: float = field(
        default_factory=lambda: _env_float(
            "FAERSCOPE_CUSUM_THRESHOLD_SIGMA", CUSUM_THRESHOLD_SIGMA
        )
    )


@dataclass
class AppConfig:
    """Application configuration settings."""

    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    log_file: Optional[Path] = field(default_factory=lambda: _env_path("FAERSCOPE_LOG_FILE"))
    # Relative to the working directory, never to the installed package
    exports_path: Path = field(
        default_factory=lambda: Path(
            os.getenv("FAERSCOPE_EXPORTS_PATH", str(Path.cwd() / "data" / "exports"))
        )
    )


@dataclass
class Config:
    """Main configuration container."""

    signals: SignalCriteria = field(default_factory=SignalCriteria)
    time_series: TimeSeriesConfig = field(default_factory=TimeSeriesConfig)
    app: AppConfig = field(default_factory=AppConfig)

    def ensure_directories(self) -> None:
        """Create necessary directories if they don't exist."""
        self.app.exports_path.mkdir(parents=True, exist_ok=True)


# Global config instance
config = Config()
