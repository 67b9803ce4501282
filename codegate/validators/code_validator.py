"""
Code Validator - Single entry point for validating generated code.

Combines:
1. Syntax checkers (HTML heuristics, CSS braces, JS parse + completeness)
2. Best-practice rules (RuleEngine)
3. Scorer (score and grade from error/warning counts)

Usage:
    from codegate.validators import validate_all

    result = validate_all(html, css, js)
    if not result.passed:
        for issue in result.errors:
            print(issue.describe())
"""

import logging
from typing import List, Optional

from ..contracts.issues import Issue, Severity
from ..contracts.results import ValidationResult
from ..core.config import Settings, settings as default_settings
from ..monitoring.logger import gate_logger
from ..rules.rule_engine import RuleEngine, create_default_engine
from .css_validator import validate_css
from .html_validator import validate_html
from .js_validator import validate_javascript
from .scorer import score_issues


logger = logging.getLogger(__name__)


class CodeValidator:
    """
    Validates an html/css/js triple.

    Syntax issues come first (html, css, js), followed by rule issues in
    rule priority order. The validator holds no per-call state and can
    be shared between concurrent callers.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        engine: Optional[RuleEngine] = None,
    ):
        """
        Initialize the validator.

        Args:
            settings: Scoring weights and rule thresholds
            engine: Custom rule engine (default rules if None)
        """
        self.settings = settings or default_settings
        self.engine = engine if engine is not None else create_default_engine(self.settings)

    def collect_issues(self, html: str, css: str = "", js: str = "") -> List[Issue]:
        """
        Run every checker and rule without scoring.

        Returns:
            All issues, syntax checks first
        """
        html = html or ""
        css = css or ""
        js = js or ""

        issues: List[Issue] = []
        issues.extend(validate_html(html))
        issues.extend(validate_css(css))
        issues.extend(validate_javascript(js))
        issues.extend(self.engine.run(html, css, js))
        return issues

    def validate(self, html: str, css: str = "", js: str = "") -> ValidationResult:
        """
        Validate generated code.

        Args:
            html: HTML document
            css: Stylesheet source
            js: JavaScript source

        Returns:
            ValidationResult with issues partitioned by severity
        """
        issues = self.collect_issues(html, css, js)

        errors = [issue for issue in issues if issue.severity == Severity.ERROR]
        warnings = [issue for issue in issues if issue.severity == Severity.WARNING]

        result = ValidationResult(
            errors=errors,
            warnings=warnings,
            passed=not errors,
            summary=score_issues(errors, warnings, self.settings),
        )

        logger.debug(
            f"Validated html={len(html or '')} css={len(css or '')} js={len(js or '')} chars: "
            f"{len(errors)} errors, {len(warnings)} warnings"
        )
        gate_logger.log_validation(
            result,
            sources={"html": len(html or ""), "css": len(css or ""), "js": len(js or "")},
        )
        return result


# Module-level default, built lazily so settings overrides in tests apply
_default_validator: Optional[CodeValidator] = None


def get_code_validator() -> CodeValidator:
    """Get the shared default validator."""
    global _default_validator
    if _default_validator is None:
        _default_validator = CodeValidator()
    return _default_validator


def validate_all(html: str, css: str = "", js: str = "") -> ValidationResult:
    """
    Validate an html/css/js triple with the default validator.

    Args:
        html: HTML document
        css: Stylesheet source
        js: JavaScript source

    Returns:
        ValidationResult
    """
    return get_code_validator().validate(html, css, js)
