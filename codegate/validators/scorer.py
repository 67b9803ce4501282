"""
Scorer - maps issue counts to a 0-100 score and a letter grade.

    score = clamp(100 - errors * we - warnings * ww, 0, 100)

Weights must be non-negative so that adding an issue can never raise
the score.
"""

from typing import Optional, Sequence

from ..contracts.issues import Issue
from ..contracts.results import Grade, ValidationSummary
from ..core.config import Settings, settings as default_settings


MAX_SCORE = 100

# (minimum score, grade), checked top to bottom
GRADE_THRESHOLDS = (
    (90, "A"),
    (80, "B"),
    (70, "C"),
    (60, "D"),
)


def compute_score(
    error_count: int,
    warning_count: int,
    error_weight: int = 10,
    warning_weight: int = 5,
) -> int:
    """
    Compute the clamped score for the given counts.

    Raises:
        ValueError: If a weight or count is negative
    """
    if error_weight < 0 or warning_weight < 0:
        raise ValueError("Score weights must be non-negative")
    if error_count < 0 or warning_count < 0:
        raise ValueError("Issue counts must be non-negative")

    raw = MAX_SCORE - error_count * error_weight - warning_count * warning_weight
    return max(0, min(MAX_SCORE, raw))


def grade_for(score: int) -> Grade:
    """Map a score to A/B/C/D/F."""
    for threshold, grade in GRADE_THRESHOLDS:
        if score >= threshold:
            return grade
    return "F"


def score_issues(
    errors: Sequence[Issue],
    warnings: Sequence[Issue],
    settings: Optional[Settings] = None,
) -> ValidationSummary:
    """
    Build the summary for a set of errors and warnings.

    Args:
        errors: ERROR issues
        warnings: WARNING issues
        settings: Weight source (module settings by default)
    """
    settings = settings or default_settings
    score = compute_score(
        len(errors),
        len(warnings),
        error_weight=settings.SCORE_ERROR_WEIGHT,
        warning_weight=settings.SCORE_WARNING_WEIGHT,
    )
    return ValidationSummary(
        score=score,
        grade=grade_for(score),
        errors=len(errors),
        warnings=len(warnings),
    )
