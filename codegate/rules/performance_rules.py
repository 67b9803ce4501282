"""
Performance rules - loading behaviour of images, scripts and stylesheets.

Hero images (logo, banner, above-the-fold art) are exempt from the
lazy-loading check; the same predicate drives the auto-fixer so that
the fixer never lazy-loads an image the rule would leave alone.
"""

import re
from typing import Iterable, List, Optional

from ..contracts.issues import Issue, IssueCategory

from .base_rule import RuleContext, ValidationRule


CSS_IMPORT = re.compile(r"@import\b", re.IGNORECASE)
CSS_COMMENT = re.compile(r"/\*.*?\*/", re.DOTALL)
CONSOLE_LOG = re.compile(r"\bconsole\s*\.\s*log\s*\(")


def is_hero_image(values: Iterable[Optional[str]], markers: Iterable[str]) -> bool:
    """
    Check if any of an image's identifying values carries a hero marker.

    Args:
        values: src, class and id of the image (None for absent ones)
        markers: Lower-case substrings marking above-the-fold images

    Returns:
        True if the image must keep eager loading
    """
    haystack = " ".join(value for value in values if value).lower()
    return any(marker.lower() in haystack for marker in markers)


class ImgLazyRule(ValidationRule):
    rule_id = "img-lazy"
    category = IssueCategory.PERFORMANCE
    priority = 50

    def __init__(self, hero_markers: Iterable[str] = ("hero", "logo", "banner")):
        self.hero_markers = list(hero_markers)

    def check(self, context: RuleContext) -> List[Issue]:
        dom = context.dom
        missing = []
        for img in dom.get_elements_by_tag("img"):
            if img.has_attr("loading"):
                continue
            identity = [
                dom.get_attribute(img, "src"),
                dom.get_attribute(img, "class"),
                dom.get_attribute(img, "id"),
            ]
            if is_hero_image(identity, self.hero_markers):
                continue
            missing.append((img, identity[0] or "<no src>"))

        if not missing:
            return []

        # One aggregate issue per page, positioned at the first image
        sources = ", ".join(src for _, src in missing)
        return [
            self.warning(
                f"{len(missing)} image(s) missing lazy loading: {sources}",
                fix='Add loading="lazy" to images below the fold',
                element=missing[0][0],
                context=context,
            )
        ]


class LargeInlineScriptRule(ValidationRule):
    rule_id = "large-inline-script"
    category = IssueCategory.PERFORMANCE
    priority = 51

    def __init__(self, max_chars: int = 5000):
        self.max_chars = max_chars

    def check(self, context: RuleContext) -> List[Issue]:
        issues = []
        for script in context.dom.get_elements_by_tag("script"):
            if script.has_attr("src"):
                continue
            size = len(script.get_text())
            if size > self.max_chars:
                issues.append(
                    self.warning(
                        f"Large inline script detected ({size} chars)",
                        fix="Extract large scripts to external files",
                        element=script,
                        context=context,
                    )
                )
        return issues


class CssImportRule(ValidationRule):
    rule_id = "css-import"
    category = IssueCategory.PERFORMANCE
    priority = 52

    def check(self, context: RuleContext) -> List[Issue]:
        if not CSS_IMPORT.search(CSS_COMMENT.sub("", context.stylesheets)):
            return []
        return [
            self.warning(
                "CSS @import blocks parallel stylesheet downloads",
                fix="Use <link rel=\"stylesheet\"> tags instead of @import",
            )
        ]


class ConsoleLogRule(ValidationRule):
    """Registered only for production builds."""

    rule_id = "console-log"
    category = IssueCategory.BEST_PRACTICES
    priority = 60

    def check(self, context: RuleContext) -> List[Issue]:
        if not CONSOLE_LOG.search(context.scripts):
            return []
        return [
            self.warning(
                "console.log statements should be removed in production",
                fix="Remove debugging output before shipping",
            )
        ]
