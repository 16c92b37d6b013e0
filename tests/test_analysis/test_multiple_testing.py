"""Tests for multiple testing correction module."""

import pytest


def _score_with_p(reaction, p_value):
    """Build a score carrying an arbitrary raw p-value."""
    from dataclasses import replace
    from faerscope.analysis.disproportionality import (
        ContingencyTable,
        compute_disproportionality,
    )

    table = ContingencyTable(a=5, b=95, c=50, d=9850, n=10000)
    return replace(compute_disproportionality(reaction, 5, table), prr_p_value=p_value)


class TestBenjaminiHochberg:
    """Tests for the raw p-value adjustment."""

    def test_textbook_example(self):
        """Test adjusted values against a hand-worked batch."""
        from faerscope.analysis.multiple_testing import benjamini_hochberg

        adjusted = benjamini_hochberg([0.01, 0.04, 0.03, 0.005])

        # sorted: 0.005, 0.01, 0.03, 0.04 -> raw 0.02, 0.02, 0.04, 0.04
        assert adjusted == pytest.approx([0.02, 0.04, 0.04, 0.02])

    def test_step_up_takes_running_minimum(self):
        """Test a later smaller adjusted value pulls earlier ranks down."""
        from faerscope.analysis.multiple_testing import benjamini_hochberg

        # raw adjusted: 0.03, 0.045, 0.03
        adjusted = benjamini_hochberg([0.01, 0.03, 0.03])

        assert adjusted == pytest.approx([0.03, 0.03, 0.03])

    def test_capped_at_one(self):
        """Test adjusted values never exceed 1."""
        from faerscope.analysis.multiple_testing import benjamini_hochberg

        adjusted = benjamini_hochberg([0.9, 0.95, 1.0, 0.8])

        assert all(p <= 1.0 for p in adjusted)
        assert max(adjusted) == 1.0

    def test_empty(self):
        """Test an empty batch gives an empty result."""
        from faerscope.analysis.multiple_testing import benjamini_hochberg

        assert benjamini_hochberg([]) == []

    def test_ties_are_deterministic(self):
        """Test identical p-values get identical adjustments on every call."""
        from faerscope.analysis.multiple_testing import benjamini_hochberg

        p_values = [0.02, 0.02, 0.02, 0.5]
        first = benjamini_hochberg(p_values)

        assert first == benjamini_hochberg(p_values)
        assert first[0] == first[1] == first[2]


class TestApplyBenjaminiHochberg:
    """Tests for correcting a batch of scores."""

    def test_single_score_unchanged(self):
        """Test m = 1 leaves the p-value as is."""
        from faerscope.analysis.multiple_testing import apply_benjamini_hochberg

        score = _score_with_p("NAUSEA", 0.037)
        corrected = apply_benjamini_hochberg([score])

        assert len(corrected) == 1
        assert corrected[0].fdr_p_value == corrected[0].prr_p_value

    def test_empty_batch(self):
        """Test an empty batch returns an empty list."""
        from faerscope.analysis.multiple_testing import apply_benjamini_hochberg

        assert apply_benjamini_hochberg([]) == []

    def test_preserves_order_and_fields(self, sample_scores):
        """Test output order and non-FDR fields match the input."""
        from dataclasses import replace
        from faerscope.analysis.multiple_testing import apply_benjamini_hochberg

        corrected = apply_benjamini_hochberg(sample_scores)

        assert [s.reaction for s in corrected] == [s.reaction for s in sample_scores]
        for before, after in zip(sample_scores, corrected):
            assert after.fdr_p_value is not None
            assert after.prr_p_value == before.prr_p_value
            assert replace(after, fdr_p_value=None) == before

    def test_does_not_mutate_input(self, sample_scores):
        """Test the input scores keep fdr_p_value unset."""
        from faerscope.analysis.multiple_testing import apply_benjamini_hochberg

        apply_benjamini_hochberg(sample_scores)

        assert all(s.fdr_p_value is None for s in sample_scores)

    def test_monotone_in_raw_p_value(self):
        """Test adjusted values are non-decreasing along ascending raw p."""
        from faerscope.analysis.multiple_testing import apply_benjamini_hochberg

        raw = [0.2, 0.001, 0.04, 0.04, 0.5, 0.012, 0.3, 0.0001, 0.07, 0.9]
        scores = [_score_with_p(f"PT{i}", p) for i, p in enumerate(raw)]

        corrected = apply_benjamini_hochberg(scores)
        ordered = sorted(corrected, key=lambda s: s.prr_p_value)
        fdr = [s.fdr_p_value for s in ordered]

        assert all(later >= earlier for earlier, later in zip(fdr, fdr[1:]))

    def test_adjusted_not_below_raw(self, sample_scores):
        """Test correction never makes a p-value smaller."""
        from faerscope.analysis.multiple_testing import apply_benjamini_hochberg

        for score in apply_benjamini_hochberg(sample_scores):
            assert score.fdr_p_value >= score.prr_p_value
