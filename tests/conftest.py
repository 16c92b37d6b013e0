"""Pytest configuration and fixtures for FAERScope Core tests."""

import pytest


@pytest.fixture
def known_table():
    """Published worked example: PRR ~ 10 with a clear signal."""
    from faerscope.analysis.disproportionality import ContingencyTable

    return ContingencyTable(a=150, b=4850, c=3000, d=992000, n=1000000)


@pytest.fixture
def sample_scores():
    """A small batch of scores spanning strong, weak and null pairs."""
    from faerscope.analysis.disproportionality import (
        build_contingency_table,
        compute_disproportionality,
    )

    drug_total = 5000
    total_reports = 1000000
    reactions = [
        ("NAUSEA", 150, 3150),
        ("HEADACHE", 40, 7000),
        ("RASH", 12, 1500),
        ("FATIGUE", 5, 1000),
        ("DIZZINESS", 0, 100),
    ]

    return [
        compute_disproportionality(
            term,
            count,
            build_contingency_table(count, drug_total, reaction_total, total_reports),
        )
        for term, count, reaction_total in reactions
    ]


@pytest.fixture
def flat_trend_with_outlier():
    """Thirty daily points at 100 reports with a single 10,000 outlier."""
    from faerscope.analysis.time_series import TrendPoint

    points = []
    for day in range(1, 31):
        count = 10000 if day == 16 else 100
        time = f"202403{day:02d}"
        points.append(TrendPoint(time=time, count=count, label=f"2024-03-{day:02d}"))
    return points


@pytest.fixture
def step_series():
    """Thirty points at 10 followed by thirty points at 100."""
    return [10] * 30 + [100] * 30
