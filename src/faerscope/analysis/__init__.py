"""Analysis module for disproportionality and trend statistics."""

from .disproportionality import (
    ContingencyTable,
    DisproportionalityScore,
    build_contingency_table,
    chi2_p_value_1df,
    compute_prr,
    compute_chi2,
    compute_ror,
    compute_ror_ci,
    compute_ic,
    compute_ic025,
    compute_ic975,
    classify_signal,
    classify_strong_signal,
    compute_disproportionality,
)
from .multiple_testing import benjamini_hochberg, apply_benjamini_hochberg
from .time_series import (
    TrendPoint,
    TrendWithStats,
    YearMonthCount,
    moving_average,
    rolling_z_score,
    detect_spikes,
    detect_changepoints,
    year_over_year,
)
from .summary import SignalSummary, summarize_scores, filter_significant
from .export import (
    SignalExporter,
    score_to_record,
    scores_to_dataframe,
    trend_to_dataframe,
)

__all__ = [
    # Disproportionality
    "ContingencyTable",
    "DisproportionalityScore",
    "build_contingency_table",
    "chi2_p_value_1df",
    "compute_prr",
    "compute_chi2",
    "compute_ror",
    "compute_ror_ci",
    "compute_ic",
    "compute_ic025",
    "compute_ic975",
    "classify_signal",
    "classify_strong_signal",
    "compute_disproportionality",
    # Multiple testing
    "benjamini_hochberg",
    "apply_benjamini_hochberg",
    # Time series
    "TrendPoint",
    "TrendWithStats",
    "YearMonthCount",
    "moving_average",
    "rolling_z_score",
    "detect_spikes",
    "detect_changepoints",
    "year_over_year",
    # Summary
    "SignalSummary",
    "summarize_scores",
    "filter_significant",
    # Export
    "SignalExporter",
    "score_to_record",
    "scores_to_dataframe",
    "trend_to_dataframe",
]
