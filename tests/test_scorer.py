"""
Tests for the scorer: weights, clamping, grades and monotonicity.
"""

import pytest

from codegate.contracts import Issue, IssueCategory
from codegate.core.config import Settings
from codegate.validators.scorer import compute_score, grade_for, score_issues


def _errors(count):
    return [
        Issue.error(IssueCategory.SEO, f"Missing <title> tag #{i}", rule="title")
        for i in range(count)
    ]


def _warnings(count):
    return [
        Issue.warning(IssueCategory.PERFORMANCE, f"Image missing lazy loading #{i}", rule="img-lazy")
        for i in range(count)
    ]


class TestComputeScore:
    """Tests for the clamped score formula."""

    @pytest.mark.parametrize(
        "errors, warnings, expected",
        [
            (0, 0, 100),
            (1, 0, 90),
            (0, 1, 95),
            (2, 3, 65),
            (10, 0, 0),
            (50, 50, 0),
        ],
    )
    def test_default_weights(self, errors, warnings, expected):
        assert compute_score(errors, warnings) == expected

    def test_custom_weights(self):
        assert compute_score(1, 1, error_weight=20, warning_weight=1) == 79

    def test_negative_weight_rejected(self):
        """Negative weights would break monotonicity."""
        with pytest.raises(ValueError):
            compute_score(1, 0, error_weight=-10)

    def test_negative_count_rejected(self):
        with pytest.raises(ValueError):
            compute_score(-1, 0)

    @pytest.mark.parametrize("errors", range(0, 12))
    @pytest.mark.parametrize("warnings", range(0, 12, 3))
    def test_monotone(self, errors, warnings):
        """Adding an issue of either severity never raises the score."""
        base = compute_score(errors, warnings)
        assert compute_score(errors + 1, warnings) <= base
        assert compute_score(errors, warnings + 1) <= base


class TestGrades:
    """Tests for the score-to-grade mapping."""

    @pytest.mark.parametrize(
        "score, grade",
        [
            (100, "A"),
            (90, "A"),
            (89, "B"),
            (80, "B"),
            (79, "C"),
            (70, "C"),
            (69, "D"),
            (60, "D"),
            (59, "F"),
            (0, "F"),
        ],
    )
    def test_thresholds(self, score, grade):
        assert grade_for(score) == grade


class TestScoreIssues:
    """Tests for building a ValidationSummary from issues."""

    def test_summary_fields(self, settings):
        summary = score_issues(_errors(1), _warnings(2), settings)

        assert summary.score == 80
        assert summary.grade == "B"
        assert summary.errors == 1
        assert summary.warnings == 2

    def test_weights_come_from_settings(self):
        strict = Settings(SCORE_ERROR_WEIGHT=25, SCORE_WARNING_WEIGHT=10, _env_file=None)

        summary = score_issues(_errors(2), _warnings(1), strict)

        assert summary.score == 40
        assert summary.grade == "F"

    def test_settings_reject_negative_weights(self):
        with pytest.raises(ValueError):
            Settings(SCORE_ERROR_WEIGHT=-1, _env_file=None)

    def test_no_issues(self, settings):
        summary = score_issues([], [], settings)
        assert (summary.score, summary.grade) == (100, "A")
