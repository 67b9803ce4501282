"""
Results - Outcomes of validation and auto-fix runs.

These structures cross the boundary to the HTTP layer:
1. ValidationSummary: score and letter grade
2. ValidationResult: issues partitioned by severity
3. AutoFixResult: rewritten HTML and the fix log
"""

from typing import List, Literal

from pydantic import BaseModel, Field, model_validator

from .issues import Issue, Severity


Grade = Literal["A", "B", "C", "D", "F"]


class ValidationSummary(BaseModel):
    """Numeric score and letter grade derived from issue counts."""

    score: int = Field(ge=0, le=100, description="0-100, higher is better")
    grade: Grade = Field(description="A/B/C/D/F")
    errors: int = Field(default=0, ge=0, description="Number of errors")
    warnings: int = Field(default=0, ge=0, description="Number of warnings")


class ValidationResult(BaseModel):
    """
    Outcome of one validate_all call.

    `passed` means "no errors" and nothing else; the score is an
    independent signal and must not be read as a pass/fail threshold.
    """

    errors: List[Issue] = Field(default_factory=list)
    warnings: List[Issue] = Field(default_factory=list)
    passed: bool
    summary: ValidationSummary

    @model_validator(mode="after")
    def _check_partition(self) -> "ValidationResult":
        for issue in self.errors:
            if issue.severity != Severity.ERROR:
                raise ValueError(f"Non-error issue in errors: {issue.message!r}")
        for issue in self.warnings:
            if issue.severity != Severity.WARNING:
                raise ValueError(f"Non-warning issue in warnings: {issue.message!r}")
        if self.passed != (len(self.errors) == 0):
            raise ValueError("passed must be true exactly when there are no errors")
        return self

    @property
    def score(self) -> int:
        return self.summary.score

    @property
    def grade(self) -> str:
        return self.summary.grade

    @property
    def issues(self) -> List[Issue]:
        """All issues, errors first."""
        return [*self.errors, *self.warnings]

    def has_rule(self, rule: str) -> bool:
        """Check if any issue was produced by the given rule."""
        return any(issue.rule == rule for issue in self.issues)

    def describe(self) -> str:
        """Generate human-readable summary."""
        status = "PASSED" if self.passed else "FAILED"
        lines = [
            f"ValidationResult: {status} "
            f"(score {self.summary.score}, grade {self.summary.grade})"
        ]
        for issue in self.issues:
            lines.append(f"  {issue.describe()}")
        return "\n".join(lines)


class AutoFixResult(BaseModel):
    """
    Result of applying the auto-fix catalog to HTML.

    Attributes:
        fixed: HTML after every applicable fix
        applied_fixes: One log entry per applied fix, containing the rule keyword
        remaining_issues: Issues of the input result the catalog does not address
    """

    fixed: str
    applied_fixes: List[str] = Field(default_factory=list)
    remaining_issues: int = Field(default=0, ge=0)

    @property
    def changed(self) -> bool:
        return bool(self.applied_fixes)
