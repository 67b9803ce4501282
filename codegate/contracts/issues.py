"""
Issues - Classification of defects found in generated HTML/CSS/JS.

Every defect is reported as an Issue with:
- category: one of exactly six IssueCategory members
- severity: ERROR blocks "passed", WARNING only lowers the score
- rule: stable identifier of the check that produced it (the auto-fixer
  keys its catalog on this value)
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class IssueCategory(str, Enum):
    """Closed set of issue categories. Any other value is rejected."""

    SYNTAX = "syntax"
    SECURITY = "security"
    PERFORMANCE = "performance"
    ACCESSIBILITY = "accessibility"
    SEO = "seo"
    BEST_PRACTICES = "best-practices"


class Severity(str, Enum):
    """Issue severity. Errors fail validation; warnings only cost points."""

    ERROR = "error"
    WARNING = "warning"


class Issue(BaseModel):
    """
    One detected problem.

    The message always contains the keyword of the rule that produced it
    (e.g. "DOCTYPE", "viewport", "alt") so that callers can match on it.

    Example:
        Issue(
            message="Missing <title> tag",
            category=IssueCategory.SEO,
            severity=Severity.ERROR,
            rule="title",
        )
    """

    model_config = ConfigDict(frozen=True)

    message: str = Field(min_length=1, description="Human-readable description")
    category: IssueCategory = Field(description="One of the six issue categories")
    severity: Severity = Field(description="error or warning")
    rule: str = Field(default="unknown", description="Identifier of the producing check")
    line: Optional[int] = Field(default=None, ge=1, description="1-based source line")
    column: Optional[int] = Field(default=None, ge=0, description="Source column")
    fix: Optional[str] = Field(default=None, description="Suggested remedy")

    @classmethod
    def error(
        cls,
        category: IssueCategory,
        message: str,
        rule: str,
        fix: Optional[str] = None,
        line: Optional[int] = None,
        column: Optional[int] = None,
    ) -> "Issue":
        """Build an ERROR issue."""
        return cls(
            message=message,
            category=category,
            severity=Severity.ERROR,
            rule=rule,
            fix=fix,
            line=line,
            column=column,
        )

    @classmethod
    def warning(
        cls,
        category: IssueCategory,
        message: str,
        rule: str,
        fix: Optional[str] = None,
        line: Optional[int] = None,
        column: Optional[int] = None,
    ) -> "Issue":
        """Build a WARNING issue."""
        return cls(
            message=message,
            category=category,
            severity=Severity.WARNING,
            rule=rule,
            fix=fix,
            line=line,
            column=column,
        )

    def describe(self) -> str:
        """Generate human-readable one-line description."""
        location = ""
        if self.line is not None:
            location = f" (line {self.line}"
            if self.column is not None:
                location += f", col {self.column}"
            location += ")"
        return f"[{self.severity.value}/{self.category.value}] {self.message}{location}"
