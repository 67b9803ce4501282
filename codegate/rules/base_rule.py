"""
ValidationRule - Abstract base class for best-practice rules.

Each rule inspects one RuleContext (the html/css/js triple plus a parsed
DOM) and returns zero or more Issues. Rules are independent predicates:
they never see each other's output and never mutate the context.

Usage:
    class MyRule(ValidationRule):
        rule_id = "my-rule"
        category = IssueCategory.SEO
        priority = 10

        def check(self, context: RuleContext) -> List[Issue]:
            if "<title" not in context.html:
                return [self.error("Missing <title> tag")]
            return []
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from functools import cached_property
from typing import List, Optional

from bs4 import Tag

from ..analyzers.dom_parser import DOMParser
from ..contracts.issues import Issue, IssueCategory


@dataclass
class RuleContext:
    """
    Sources under validation, shared read-only by every rule of one run.

    Attributes:
        html: HTML document
        css: Stylesheet source
        js: JavaScript source
        dom: Lenient parse of html
    """

    html: str
    css: str = ""
    js: str = ""
    dom: DOMParser = field(init=False, repr=False)

    def __post_init__(self):
        self.dom = DOMParser(self.html)

    @cached_property
    def scripts(self) -> str:
        """The js source followed by every inline <script> body."""
        return "\n".join([self.js, *self.dom.get_inline_scripts()])

    @cached_property
    def stylesheets(self) -> str:
        """The css source followed by every <style> body."""
        blocks = [style.get_text() for style in self.dom.get_elements_by_tag("style")]
        return "\n".join([self.css, *blocks])


class ValidationRule(ABC):
    """
    Abstract base class for validation rules.

    Subclasses must define:
    - rule_id: Stable identifier copied into Issue.rule
    - category: IssueCategory of every issue the rule reports
    - priority: Execution order (lower = earlier)
    - check(): Evaluate the rule

    Priority Ranges:
    - 10-29: Document structure and SEO
    - 30-39: Accessibility
    - 40-49: Security
    - 50-59: Performance
    - 60+: Environment-specific best practices
    """

    rule_id: str
    category: IssueCategory
    priority: int

    @property
    def name(self) -> str:
        """
        Rule name for logging and debugging.

        Returns:
            Class name by default
        """
        return self.__class__.__name__

    @abstractmethod
    def check(self, context: RuleContext) -> List[Issue]:
        """
        Evaluate the rule.

        Args:
            context: Sources under validation

        Returns:
            Issues found (empty if the rule is satisfied)
        """
        pass

    def error(
        self,
        message: str,
        fix: Optional[str] = None,
        element: Optional[Tag] = None,
        context: Optional[RuleContext] = None,
    ) -> Issue:
        """Build an ERROR issue for this rule, positioned at element if given."""
        line, column = self._position(element, context)
        return Issue.error(
            self.category, message, rule=self.rule_id, fix=fix, line=line, column=column
        )

    def warning(
        self,
        message: str,
        fix: Optional[str] = None,
        element: Optional[Tag] = None,
        context: Optional[RuleContext] = None,
    ) -> Issue:
        """Build a WARNING issue for this rule, positioned at element if given."""
        line, column = self._position(element, context)
        return Issue.warning(
            self.category, message, rule=self.rule_id, fix=fix, line=line, column=column
        )

    @staticmethod
    def _position(element, context):
        if element is None or context is None:
            return None, None
        return context.dom.get_source_position(element)

    def __repr__(self) -> str:
        """String representation."""
        return f"{self.name}(rule={self.rule_id}, priority={self.priority})"

    def __eq__(self, other: object) -> bool:
        """Equality check based on class type."""
        if not isinstance(other, ValidationRule):
            return False
        return self.__class__ == other.__class__

    def __hash__(self) -> int:
        """Hash based on class name."""
        return hash(self.__class__.__name__)
