"""
RuleEngine - Runs the ordered set of best-practice rules.

Usage:
    from codegate.rules import RuleEngine, create_default_engine

    # Use default engine with all rules
    engine = create_default_engine()
    issues = engine.run(html, css, js)

    # Or build custom engine
    engine = RuleEngine()
    engine.register(DoctypeRule())
    engine.register(EvalRule())
    issues = engine.run(html, css, js)
"""

import logging
from typing import List, Optional, Type

from ..contracts.issues import Issue
from ..core.config import Settings, settings as default_settings

from .base_rule import RuleContext, ValidationRule


logger = logging.getLogger(__name__)


class RuleEngine:
    """
    Evaluates registered ValidationRules in priority order.

    Every rule sees the same RuleContext and none sees another rule's
    issues, so the output is the concatenation of independent results.
    A rule that raises is a bug and the exception propagates.
    """

    def __init__(self):
        """Initialize the rule engine."""
        self._rules: List[ValidationRule] = []

    def register(self, rule: ValidationRule) -> None:
        """
        Register a validation rule.

        Args:
            rule: ValidationRule instance to register
        """
        self._rules.append(rule)
        # sort is stable, equal priorities keep registration order
        self._rules.sort(key=lambda r: r.priority)
        logger.debug(f"Registered rule: {rule.name}")

    def register_all(self, rules: List[ValidationRule]) -> None:
        """
        Register multiple rules at once.

        Args:
            rules: List of ValidationRule instances
        """
        for rule in rules:
            self.register(rule)

    def unregister(self, rule_class: Type[ValidationRule]) -> bool:
        """
        Unregister a rule by class.

        Args:
            rule_class: Class of rule to remove

        Returns:
            True if rule was found and removed
        """
        original_count = len(self._rules)
        self._rules = [r for r in self._rules if not isinstance(r, rule_class)]
        removed = len(self._rules) < original_count
        if removed:
            logger.debug(f"Unregistered rule: {rule_class.__name__}")
        return removed

    def evaluate(self, context: RuleContext) -> List[Issue]:
        """
        Run every rule against a prepared context.

        Args:
            context: Sources under validation

        Returns:
            Issues in rule priority order
        """
        issues: List[Issue] = []
        for rule in self._rules:
            found = rule.check(context)
            if found:
                logger.debug(f"Rule {rule.name} reported {len(found)} issue(s)")
            issues.extend(found)

        logger.debug(
            f"Evaluated {len(self._rules)} rules: {len(issues)} issue(s) found"
        )
        return issues

    def run(self, html: str, css: str = "", js: str = "") -> List[Issue]:
        """
        Run every rule against raw sources.

        Args:
            html: HTML document
            css: Stylesheet source
            js: JavaScript source

        Returns:
            Issues in rule priority order
        """
        return self.evaluate(RuleContext(html=html or "", css=css or "", js=js or ""))

    @property
    def rules(self) -> List[ValidationRule]:
        """Get all registered rules (sorted by priority)."""
        return self._rules.copy()

    @property
    def rule_ids(self) -> List[str]:
        return [rule.rule_id for rule in self._rules]

    def __len__(self) -> int:
        return len(self._rules)

    def __repr__(self) -> str:
        return f"RuleEngine({len(self._rules)} rules)"


def create_default_engine(settings: Optional[Settings] = None) -> RuleEngine:
    """
    Create a RuleEngine with all default rules registered.

    Args:
        settings: Thresholds and environment (module settings by default)

    Returns:
        Configured RuleEngine ready to use
    """
    from .document_rules import (
        CharsetRule,
        DoctypeRule,
        H1Rule,
        HeadingLevelRule,
        LangRule,
        MetaDescriptionRule,
        TitleRule,
        ViewportRule,
    )
    from .content_rules import (
        ButtonLabelRule,
        GenericLinkTextRule,
        ImgAltRule,
        InputLabelRule,
    )
    from .security_rules import (
        DocumentWriteRule,
        EvalRule,
        ExternalLinkRelRule,
        FunctionConstructorRule,
        HardcodedCredentialRule,
        InlineHandlerRule,
        InlineStyleCSPRule,
        InnerHTMLRule,
    )
    from .performance_rules import (
        ConsoleLogRule,
        CssImportRule,
        ImgLazyRule,
        LargeInlineScriptRule,
    )

    settings = settings or default_settings

    engine = RuleEngine()
    engine.register_all([
        DoctypeRule(),             # Priority 10 - Document skeleton first
        CharsetRule(),             # Priority 11
        ViewportRule(),            # Priority 12
        LangRule(),                # Priority 13
        TitleRule(),               # Priority 20 - SEO
        MetaDescriptionRule(),     # Priority 21
        H1Rule(),                  # Priority 22
        HeadingLevelRule(),        # Priority 23
        ImgAltRule(),              # Priority 30 - Accessibility
        ButtonLabelRule(),         # Priority 31
        GenericLinkTextRule(),     # Priority 32
        InputLabelRule(),          # Priority 33
        InlineStyleCSPRule(),      # Priority 40 - Security
        InlineHandlerRule(),       # Priority 41
        ExternalLinkRelRule(),     # Priority 42
        EvalRule(),                # Priority 43
        FunctionConstructorRule(), # Priority 44
        DocumentWriteRule(),       # Priority 45
        InnerHTMLRule(),           # Priority 46
        HardcodedCredentialRule(), # Priority 47
        ImgLazyRule(settings.HERO_IMAGE_MARKERS),                 # Priority 50
        LargeInlineScriptRule(settings.LARGE_INLINE_SCRIPT_CHARS), # Priority 51
        CssImportRule(),           # Priority 52
    ])

    if settings.is_production:
        engine.register(ConsoleLogRule())  # Priority 60

    logger.info(f"Created default engine with {len(engine)} rules")
    return engine
