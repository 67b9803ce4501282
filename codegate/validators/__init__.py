"""
Validators - Syntax checks, scoring and the validate_all entry point.

Components:
- validate_html / validate_css / validate_javascript: per-language syntax checks
- is_code_complete: completeness probe used before saving streamed code
- score_issues / grade_for: issue counts to score and letter grade
- CodeValidator / validate_all: syntax checks + rules + scorer
"""

from .js_validator import validate_javascript, check_bracket_balance, parse_javascript
from .html_validator import validate_html
from .css_validator import validate_css
from .completeness import CodeKind, is_code_complete
from .scorer import compute_score, grade_for, score_issues
from .code_validator import CodeValidator, get_code_validator, validate_all

__all__ = [
    # Syntax
    "validate_javascript",
    "validate_html",
    "validate_css",
    "check_bracket_balance",
    "parse_javascript",
    # Completeness
    "CodeKind",
    "is_code_complete",
    # Scoring
    "compute_score",
    "grade_for",
    "score_issues",
    # Facade
    "CodeValidator",
    "get_code_validator",
    "validate_all",
]
