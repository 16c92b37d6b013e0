"""Constants for FAERScope Core.

Numeric constants shared by the disproportionality calculators and the
enumerations callers use to describe how report counts were obtained.
"""

from enum import Enum
from typing import Dict


# =============================================================================
# Numeric Constants
# =============================================================================

# Two-sided 95% normal quantile used for ROR and IC intervals
Z_95 = 1.96

# Abramowitz & Stegun 26.2.17 rational approximation to the normal CDF
NORMAL_CDF_COEFFICIENTS = (
    0.254829592,
    -0.284496736,
    1.421413741,
    -1.453152027,
    1.061405429,
)
NORMAL_CDF_P = 0.3275911

# Beyond +/- this many standard deviations the CDF is clamped to 0 or 1
NORMAL_CDF_CLAMP = 8.0


# =============================================================================
# Published Defaults
# =============================================================================

# Evans et al. (2001) signal criteria
EVANS_PRR_THRESHOLD = 2.0
EVANS_CHI2_THRESHOLD = 4.0
EVANS_MIN_CASES = 3

# Strong signal: ROR lower 95% bound and IC025 both above these
STRONG_ROR_LOWER_THRESHOLD = 1.0
STRONG_IC025_THRESHOLD = 0.0

# Spike detection
SPIKE_WINDOW = 12
SPIKE_THRESHOLD = 2.0

# Two-sided CUSUM, in units of the series standard deviation
CUSUM_DRIFT_SIGMA = 0.5
CUSUM_THRESHOLD_SIGMA = 4.0
CUSUM_MIN_POINTS = 10

# Benjamini-Hochberg significance level
FDR_ALPHA = 0.05


# =============================================================================
# Query Modes
# =============================================================================

class DedupMode(Enum):
    """Deduplication strategy applied when counts were retrieved."""
    RAW = "raw"
    FILTERED = "filtered"
    STRICT = "strict"


class CharacterizationMode(Enum):
    """Drug roles included when counts were retrieved."""
    ALL = "all"
    SUSPECT = "suspect"
    SUSPECT_INTERACTING = "suspect_interacting"


DEDUP_MODE_DESCRIPTIONS: Dict[DedupMode, str] = {
    DedupMode.RAW: "No deduplication",
    DedupMode.FILTERED: "Duplicate-flagged removed",
    DedupMode.STRICT: "Initial spontaneous only",
}

CHARACTERIZATION_MODE_DESCRIPTIONS: Dict[CharacterizationMode, str] = {
    CharacterizationMode.ALL: "All drug roles",
    CharacterizationMode.SUSPECT: "Suspect role only",
    CharacterizationMode.SUSPECT_INTERACTING: "Suspect + interacting",
}


def get_dedup_mode_description(mode: DedupMode) -> str:
    """Get description for a deduplication mode."""
    return DEDUP_MODE_DESCRIPTIONS[mode]


def get_characterization_mode_description(mode: CharacterizationMode) -> str:
    """Get description for a drug characterization mode."""
    return CHARACTERIZATION_MODE_DESCRIPTIONS[mode]
