"""Multiple testing correction for batches of disproportionality scores."""

from dataclasses import replace
from typing import List, Sequence

from ..config.logging_config import get_logger
from .disproportionality import DisproportionalityScore

logger = get_logger("multiple_testing")


def benjamini_hochberg(p_values: Sequence[float]) -> List[float]:
    """
    Benjamini-Hochberg step-up adjusted p-values.

    Ties in the raw p-values keep their input order when ranked, so the
    result is deterministic for identical inputs.

    Args:
        p_values: Raw p-values in the caller's order.

    Returns:
        Adjusted p-values in the same order, each capped at 1.

    See:
        Benjamini, Y. & Hochberg, Y. (1995). Controlling the false discovery
        rate. JRSS-B, 57(1), 289-300.
    """
    m = len(p_values)
    if m == 0:
        return []

    # sorted() is stable
    order = sorted(range(m), key=lambda i: p_values[i])

    adjusted = [0.0] * m
    running_min = 1.0
    for rank in range(m, 0, -1):
        idx = order[rank - 1]
        raw = p_values[idx] * m / rank
        running_min = min(running_min, raw)
        adjusted[idx] = min(running_min, 1.0)

    return adjusted


def apply_benjamini_hochberg(
    scores: Sequence[DisproportionalityScore],
) -> List[DisproportionalityScore]:
    """
    Attach Benjamini-Hochberg FDR-adjusted p-values to a batch of scores.

    The whole batch must be corrected in one call: ranks and the
    monotonicity walk are global over the batch.

    Args:
        scores: Scores in the caller's canonical order.

    Returns:
        New list in the same order with fdr_p_value populated. prr_p_value
        and every other field are copied unchanged.
    """
    if not scores:
        return []

    adjusted = benjamini_hochberg([s.prr_p_value for s in scores])
    logger.debug(f"Applied Benjamini-Hochberg correction to {len(scores)} scores")

    return [replace(score, fdr_p_value=p) for score, p in zip(scores, adjusted)]
