"""Disproportionality analysis for drug-reaction pairs.

Every calculator here is a pure function of a 2x2 contingency table. None of
them raise or return NaN/Infinity: degenerate tables (zero cells or margins)
map to a fixed sentinel, usually 0.

                  Reaction    NOT Reaction
    Drug             a             b          a+b
    NOT Drug         c             d          c+d
                    a+c           b+d          N

References:
    Evans, S.J.W., et al. (2001). Pharmacoepidemiology and Drug Safety, 10(6), 483-486.
    Rothman, K.J., et al. (2004). The Reporting Odds Ratio. Pharmacoepidemiology and Drug Safety.
    Bate, A., et al. (1998). A Bayesian neural network method for adverse drug
        reaction signal generation. Eur J Clin Pharmacol, 54(4), 315-321.
"""

import math
from dataclasses import dataclass
from typing import Optional, Tuple

from ..config import PUBLISHED_SIGNAL_CRITERIA, SignalCriteria
from ..config.constants import (
    Z_95,
    NORMAL_CDF_COEFFICIENTS,
    NORMAL_CDF_P,
    NORMAL_CDF_CLAMP,
)
from ..config.logging_config import get_logger

logger = get_logger("disproportionality")


@dataclass(frozen=True)
class ContingencyTable:
    """2x2 table of report counts for one drug-reaction pair."""

    a: int  # drug AND reaction
    b: int  # drug, NOT reaction
    c: int  # reaction, NOT drug
    d: int  # neither
    n: int  # a + b + c + d


@dataclass(frozen=True)
class DisproportionalityScore:
    """Complete disproportionality result for a single drug-reaction pair."""

    reaction: str
    count: int
    table: ContingencyTable

    # PRR
    prr: float
    prr_chi2: float
    prr_p_value: float

    # ROR (Woolf logit interval)
    ror: float
    ror_lower_95: float
    ror_upper_95: float

    # Information Component
    ic: float
    ic025: float
    ic975: float

    # Classification
    is_signal: bool
    is_strong_signal: bool

    # Set only by Benjamini-Hochberg batch correction
    fdr_p_value: Optional[float] = None


def build_contingency_table(
    pair_count: int,
    drug_total: int,
    reaction_total: int,
    total_reports: int,
) -> ContingencyTable:
    """
    Build a contingency table from marginal report counts.

    Args:
        pair_count: Reports mentioning both the drug and the reaction.
        drug_total: Reports mentioning the drug.
        reaction_total: Reports mentioning the reaction.
        total_reports: All reports in the database.

    Returns:
        ContingencyTable with derived cells clipped at zero and n equal to
        the sum of the four cells.
    """
    a = max(0, pair_count)
    b = drug_total - a
    c = reaction_total - a
    d = total_reports - a - b - c

    if b < 0 or c < 0 or d < 0:
        logger.warning(
            f"Inconsistent marginal counts (pair={pair_count}, drug={drug_total}, "
            f"reaction={reaction_total}, total={total_reports}); clipping cells at 0"
        )

    b, c, d = max(0, b), max(0, c), max(0, d)
    return ContingencyTable(a=a, b=b, c=c, d=d, n=a + b + c + d)


# =============================================================================
# Chi-squared p-value (1 degree of freedom)
# =============================================================================

def _normal_cdf(x: float) -> float:
    """Standard normal CDF via Abramowitz & Stegun 26.2.17 (error ~1.5e-7)."""
    if x < -NORMAL_CDF_CLAMP:
        return 0.0
    if x > NORMAL_CDF_CLAMP:
        return 1.0

    a1, a2, a3, a4, a5 = NORMAL_CDF_COEFFICIENTS
    sign = -1.0 if x < 0 else 1.0
    z = abs(x) / math.sqrt(2.0)
    t = 1.0 / (1.0 + NORMAL_CDF_P * z)
    erf = 1.0 - ((((a5 * t + a4) * t + a3) * t + a2) * t + a1) * t * math.exp(-z * z)
    return 0.5 * (1.0 + sign * erf)


def chi2_p_value_1df(chi2: float) -> float:
    """
    Two-sided p-value for a chi-squared statistic with 1 degree of freedom.

    Uses chi^2(1) = N(0,1)^2, so p = 2 * (1 - Phi(sqrt(chi^2))).

    Args:
        chi2: Chi-squared statistic.

    Returns:
        p-value in [0, 1]. Returns 1 for chi2 <= 0.
    """
    if chi2 <= 0:
        return 1.0
    return 2.0 * (1.0 - _normal_cdf(math.sqrt(chi2)))


# =============================================================================
# Metric Calculators
# =============================================================================

def compute_prr(table: ContingencyTable) -> float:
    """
    Proportional Reporting Ratio: (a / (a + b)) / (c / (c + d)).

    Returns 0 if a+b, c+d or c is zero.
    """
    a, b, c, d = table.a, table.b, table.c, table.d
    if a + b == 0 or c + d == 0 or c == 0:
        return 0.0
    return (a / (a + b)) / (c / (c + d))


def compute_chi2(table: ContingencyTable) -> float:
    """
    Chi-squared statistic for the 2x2 table (1 df, no continuity correction).

    chi^2 = (ad - bc)^2 * N / ((a+b)(c+d)(a+c)(b+d))

    Returns 0 if any marginal total is zero.
    """
    a, b, c, d = table.a, table.b, table.c, table.d
    n = a + b + c + d
    denominator = (a + b) * (c + d) * (a + c) * (b + d)
    if denominator == 0:
        return 0.0
    return (a * d - b * c) ** 2 * n / denominator


def compute_ror(table: ContingencyTable) -> float:
    """
    Reporting Odds Ratio: (a * d) / (b * c).

    Returns 0 if b or c is zero.
    """
    if table.b == 0 or table.c == 0:
        return 0.0
    return (table.a * table.d) / (table.b * table.c)


def compute_ror_ci(table: ContingencyTable) -> Tuple[float, float]:
    """
    95% confidence interval for the ROR (Woolf logit method).

    exp(ln(ROR) +/- 1.96 * sqrt(1/a + 1/b + 1/c + 1/d))

    Returns:
        Tuple of (lower, upper). (0, 0) if any cell is zero.
    """
    a, b, c, d = table.a, table.b, table.c, table.d
    if a == 0 or b == 0 or c == 0 or d == 0:
        return (0.0, 0.0)

    log_ror = math.log((a * d) / (b * c))
    se = math.sqrt(1 / a + 1 / b + 1 / c + 1 / d)
    return (math.exp(log_ror - Z_95 * se), math.exp(log_ror + Z_95 * se))


def compute_ic(table: ContingencyTable) -> float:
    """
    Information Component: log2(observed / expected).

    expected = (a + b) * (a + c) / N, as used by the WHO Uppsala Monitoring
    Centre for VigiBase.

    Returns 0 for a=0, a+b=0, a+c=0 or a zero expected count.
    """
    a, b, c = table.a, table.b, table.c
    n = a + b + c + table.d
    if a == 0 or a + b == 0 or a + c == 0:
        return 0.0
    expected = (a + b) * (a + c) / n
    if expected == 0:
        return 0.0
    return math.log2(a / expected)


def _ic_standard_error(a: int) -> float:
    return 1.0 / (math.log(2) * math.sqrt(max(a, 0.5)))


def compute_ic025(table: ContingencyTable) -> float:
    """Lower 2.5% credibility bound of the IC. Returns 0 if a <= 0."""
    if table.a <= 0:
        return 0.0
    return compute_ic(table) - Z_95 * _ic_standard_error(table.a)


def compute_ic975(table: ContingencyTable) -> float:
    """Upper 97.5% credibility bound of the IC. Returns 0 if a <= 0."""
    if table.a <= 0:
        return 0.0
    return compute_ic(table) + Z_95 * _ic_standard_error(table.a)


# =============================================================================
# Signal Classification
# =============================================================================

def classify_signal(
    prr: float,
    chi2: float,
    cases: int,
    criteria: Optional[SignalCriteria] = None,
) -> bool:
    """Evans criteria: PRR >= 2, chi^2 >= 4 and at least 3 cases."""
    criteria = criteria or PUBLISHED_SIGNAL_CRITERIA
    return (
        prr >= criteria.prr_threshold
        and chi2 >= criteria.chi2_threshold
        and cases >= criteria.min_cases
    )


def classify_strong_signal(
    ror_lower_95: float,
    ic025: float,
    criteria: Optional[SignalCriteria] = None,
) -> bool:
    """Strong signal: ROR lower 95% bound > 1 and IC025 > 0."""
    criteria = criteria or PUBLISHED_SIGNAL_CRITERIA
    return ror_lower_95 > criteria.ror_lower_threshold and ic025 > criteria.ic025_threshold


# =============================================================================
# Score Assembly
# =============================================================================

def compute_disproportionality(
    reaction: str,
    count: int,
    table: ContingencyTable,
    criteria: Optional[SignalCriteria] = None,
) -> DisproportionalityScore:
    """
    Compute the full disproportionality analysis for one drug-reaction pair.

    Args:
        reaction: MedDRA Preferred Term.
        count: Raw report count for the pair (cell a).
        table: Precomputed 2x2 contingency table.
        criteria: Classification thresholds (published defaults if None).

    Returns:
        DisproportionalityScore with fdr_p_value unset.
    """
    prr = compute_prr(table)
    chi2 = compute_chi2(table)
    ror = compute_ror(table)
    ror_lower, ror_upper = compute_ror_ci(table)
    ic025 = compute_ic025(table)

    return DisproportionalityScore(
        reaction=reaction,
        count=count,
        table=table,
        prr=prr,
        prr_chi2=chi2,
        prr_p_value=chi2_p_value_1df(chi2),
        ror=ror,
        ror_lower_95=ror_lower,
        ror_upper_95=ror_upper,
        ic=compute_ic(table),
        ic025=ic025,
        ic975=compute_ic975(table),
        is_signal=classify_signal(prr, chi2, table.a, criteria),
        is_strong_signal=classify_strong_signal(ror_lower, ic025, criteria),
    )
