"""Batch-level summaries of disproportionality results."""

from dataclasses import dataclass
from typing import List, Sequence

from ..config.constants import FDR_ALPHA
from .disproportionality import DisproportionalityScore


@dataclass
class SignalSummary:
    """Counts reported alongside a batch of scores."""

    reactions_analyzed: int
    signals_detected: int
    strong_signals_detected: int
    fdr_enabled: bool
    fdr_significant: int
    alpha: float


def _fdr_or_one(score: DisproportionalityScore) -> float:
    return score.fdr_p_value if score.fdr_p_value is not None else 1.0


def filter_significant(
    scores: Sequence[DisproportionalityScore],
    alpha: float = FDR_ALPHA,
) -> List[DisproportionalityScore]:
    """
    Scores whose FDR-adjusted p-value is below alpha, in input order.

    Scores that were never corrected are treated as p = 1.
    """
    return [s for s in scores if _fdr_or_one(s) < alpha]


def summarize_scores(
    scores: Sequence[DisproportionalityScore],
    alpha: float = FDR_ALPHA,
) -> SignalSummary:
    """
    Summarize a batch of scores for reporting.

    Args:
        scores: Scores, optionally already FDR-corrected.
        alpha: FDR significance level (default 0.05).

    Returns:
        SignalSummary with signal and FDR counts.
    """
    return SignalSummary(
        reactions_analyzed=len(scores),
        signals_detected=sum(1 for s in scores if s.is_signal),
        strong_signals_detected=sum(1 for s in scores if s.is_strong_signal),
        fdr_enabled=bool(scores) and all(s.fdr_p_value is not None for s in scores),
        fdr_significant=len(filter_significant(scores, alpha)),
        alpha=alpha,
    )
