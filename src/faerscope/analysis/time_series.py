"""Time-series statistics for adverse event report volumes.

All functions work on position in the sequence, not on calendar gaps:
callers are expected to fill (or deliberately omit) missing date buckets
before calling.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

import numpy as np

from ..config.constants import (
    SPIKE_WINDOW,
    SPIKE_THRESHOLD,
    CUSUM_DRIFT_SIGMA,
    CUSUM_THRESHOLD_SIGMA,
    CUSUM_MIN_POINTS,
)
from ..config.logging_config import get_logger

logger = get_logger("time_series")


@dataclass(frozen=True)
class TrendPoint:
    """A single point in a report-count time series."""

    time: str  # YYYYMMDD
    count: int
    label: str


@dataclass(frozen=True)
class TrendWithStats(TrendPoint):
    """A trend point annotated by spike detection."""

    ma: Optional[float] = None
    z_score: Optional[float] = None
    is_spike: bool = False


@dataclass
class YearMonthCount:
    """Report count aggregated to one calendar month of a year."""

    month: int
    count: int


def moving_average(data: Sequence[float], window: int) -> List[Optional[float]]:
    """
    Trailing simple moving average.

    Args:
        data: Numeric values in chronological order.
        window: Number of points averaged.

    Returns:
        List of the same length; None until the window is full.
    """
    if window < 1:
        return [None] * len(data)

    values = np.asarray(data, dtype=float)
    result: List[Optional[float]] = []
    for i in range(len(values)):
        if i < window - 1:
            result.append(None)
        else:
            result.append(float(values[i - window + 1:i + 1].sum() / window))
    return result


def rolling_z_score(data: Sequence[float], window: int) -> List[Optional[float]]:
    """
    Z-scores against a centered rolling window.

    The window around index i spans [i - window//2, i + window//2], clipped
    to the series. Population standard deviation is used.

    Returns:
        List of the same length. None where fewer than 3 points fall in the
        window, 0 where the window has zero spread.
    """
    values = np.asarray(data, dtype=float)
    half = window // 2
    last = len(values) - 1

    result: List[Optional[float]] = []
    for i, value in enumerate(values):
        window_values = values[max(0, i - half):min(last, i + half) + 1]
        if len(window_values) < 3:
            result.append(None)
            continue

        std = float(np.std(window_values))
        if std == 0:
            result.append(0.0)
        else:
            result.append(float((value - np.mean(window_values)) / std))
    return result


def detect_spikes(
    data: Sequence[TrendPoint],
    window: int = SPIKE_WINDOW,
    threshold: float = SPIKE_THRESHOLD,
) -> List[TrendWithStats]:
    """
    Flag points that deviate from their local baseline.

    Window sizes adapt to the series length: the moving average uses
    min(window, max(3, len // 4)) points and the z-score uses
    min(2 * window, len) points.

    Args:
        data: Trend points in chronological order.
        window: Requested window size (default 12).
        threshold: Absolute z-score above which a point is a spike (default 2.0).

    Returns:
        New list of TrendWithStats; the input is not modified.
    """
    counts = [point.count for point in data]
    ma = moving_average(counts, min(window, max(3, len(data) // 4)))
    z_scores = rolling_z_score(counts, min(window * 2, len(data)))

    annotated = []
    for point, ma_value, z in zip(data, ma, z_scores):
        annotated.append(TrendWithStats(
            time=point.time,
            count=point.count,
            label=point.label,
            ma=ma_value,
            z_score=z,
            is_spike=z is not None and abs(z) > threshold,
        ))
    return annotated


def detect_changepoints(
    data: Sequence[float],
    threshold: Optional[float] = None,
    drift_sigma: float = CUSUM_DRIFT_SIGMA,
    threshold_sigma: float = CUSUM_THRESHOLD_SIGMA,
    min_points: int = CUSUM_MIN_POINTS,
) -> List[int]:
    """
    Two-sided CUSUM changepoint detection.

    Both accumulators are reset after each detection, so the next change is
    measured from that index onward. Index 0 is the baseline and is never
    reported.

    Args:
        data: Numeric values in chronological order.
        threshold: Decision threshold h. Defaults to threshold_sigma * sigma.
        drift_sigma: Slack per step in units of sigma (default 0.5).
        threshold_sigma: Default h in units of sigma (default 4.0).
        min_points: Shorter series return no changepoints (default 10).

    Returns:
        Indices where a shift in mean level was detected.
    """
    if len(data) < min_points:
        return []

    values = np.asarray(data, dtype=float)
    mean = float(np.mean(values))
    std = float(np.std(values))
    h = threshold if threshold is not None else std * threshold_sigma
    drift = std * drift_sigma

    s_pos = 0.0
    s_neg = 0.0
    changepoints = []

    for i in range(1, len(values)):
        diff = float(values[i]) - mean
        s_pos = max(0.0, s_pos + diff - drift)
        s_neg = min(0.0, s_neg + diff + drift)

        if s_pos > h or s_neg < -h:
            changepoints.append(i)
            s_pos = 0.0
            s_neg = 0.0

    logger.debug(f"CUSUM found {len(changepoints)} changepoints in {len(values)} points")
    return changepoints


def year_over_year(data: Sequence[TrendPoint]) -> Dict[str, List[YearMonthCount]]:
    """
    Regroup a daily series into per-year monthly totals.

    Months absent from the input are not filled in.

    Args:
        data: Trend points with YYYYMMDD time keys.

    Returns:
        Mapping of year ("2024") to month entries in first-seen order.
    """
    years: Dict[str, Dict[int, YearMonthCount]] = {}
    for point in data:
        year = point.time[:4]
        month = int(point.time[4:6])
        months = years.setdefault(year, {})
        if month in months:
            months[month].count += point.count
        else:
            months[month] = YearMonthCount(month=month, count=point.count)

    return {year: list(months.values()) for year, months in years.items()}
