"""
Contracts - Data structures for the quality gate.

Provides:
- IssueCategory / Severity / Issue: one detected defect
- ValidationSummary / ValidationResult: outcome of validate_all
- AutoFixResult: outcome of auto_fix_code
- StreamEvent / ExtractedCode / StreamingState: streaming session data
"""

from .issues import Issue, IssueCategory, Severity
from .results import AutoFixResult, Grade, ValidationResult, ValidationSummary
from .streaming import ExtractedCode, StreamEvent, StreamingState

__all__ = [
    "Issue",
    "IssueCategory",
    "Severity",
    "Grade",
    "ValidationSummary",
    "ValidationResult",
    "AutoFixResult",
    "StreamEvent",
    "ExtractedCode",
    "StreamingState",
]
