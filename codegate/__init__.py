"""
Codegate - Quality gate for AI-generated HTML/CSS/JavaScript.

Validates generated code for syntax and best practices, scores it,
auto-fixes boilerplate defects and decides when streamed code is
complete enough to save.

Usage:
    from codegate import validate_all, auto_fix_code

    result = validate_all(html, css, js)
    if not result.passed:
        fixed = auto_fix_code(html, result).fixed
"""

from .contracts import (
    AutoFixResult,
    ExtractedCode,
    Issue,
    IssueCategory,
    Severity,
    StreamEvent,
    StreamingState,
    ValidationResult,
    ValidationSummary,
)
from .core.config import Settings, settings
from .fixers import CodeAutoFixer, auto_fix_code
from .rules import RuleEngine, ValidationRule, create_default_engine
from .streaming import (
    extract_code_blocks,
    get_validation_error_message,
    process_stream,
    should_save_code,
)
from .validators import (
    CodeValidator,
    grade_for,
    is_code_complete,
    score_issues,
    validate_all,
    validate_css,
    validate_html,
    validate_javascript,
)

__version__ = "0.1.0"

__all__ = [
    # Contracts
    "Issue",
    "IssueCategory",
    "Severity",
    "ValidationSummary",
    "ValidationResult",
    "AutoFixResult",
    "StreamEvent",
    "ExtractedCode",
    "StreamingState",
    # Config
    "Settings",
    "settings",
    # Syntax checkers
    "validate_javascript",
    "validate_html",
    "validate_css",
    "is_code_complete",
    # Rules and scoring
    "RuleEngine",
    "ValidationRule",
    "create_default_engine",
    "score_issues",
    "grade_for",
    # Facade
    "CodeValidator",
    "validate_all",
    # Auto-fix
    "CodeAutoFixer",
    "auto_fix_code",
    # Streaming
    "process_stream",
    "should_save_code",
    "extract_code_blocks",
    "get_validation_error_message",
]
