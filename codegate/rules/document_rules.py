"""
Document rules - skeleton and SEO checks on the HTML head and headings.

Handles:
- doctype: missing <!DOCTYPE html> (error)
- charset: missing <meta charset> (warning)
- viewport: missing <meta name="viewport"> (error)
- lang: missing lang on <html> (warning)
- title: missing or empty <title> (error)
- meta-description: missing <meta name="description"> (warning)
- h1: no <h1> (error) or several (warning)
- heading-level: skipped heading level (warning)
"""

import re
from typing import List

from ..contracts.issues import Issue, IssueCategory

from .base_rule import RuleContext, ValidationRule


HEADING_TAG = re.compile(r"^h([1-6])$")


class DoctypeRule(ValidationRule):
    rule_id = "doctype"
    category = IssueCategory.BEST_PRACTICES
    priority = 10

    def check(self, context: RuleContext) -> List[Issue]:
        if context.dom.has_doctype():
            return []
        return [
            self.error(
                "Missing <!DOCTYPE html> declaration",
                fix="Add <!DOCTYPE html> at the beginning of the file",
            )
        ]


class CharsetRule(ValidationRule):
    rule_id = "charset"
    category = IssueCategory.BEST_PRACTICES
    priority = 11

    def check(self, context: RuleContext) -> List[Issue]:
        if context.dom.has_charset_meta():
            return []
        return [
            self.warning(
                "Missing charset declaration",
                fix='Add <meta charset="UTF-8"> in <head>',
            )
        ]


class ViewportRule(ValidationRule):
    """Mobile rendering depends on the viewport meta; its absence fails the page."""

    rule_id = "viewport"
    category = IssueCategory.SEO
    priority = 12

    def check(self, context: RuleContext) -> List[Issue]:
        if context.dom.get_meta("viewport") is not None:
            return []
        return [
            self.error(
                "Missing viewport meta tag for mobile responsiveness",
                fix=(
                    'Add <meta name="viewport" content="width=device-width, '
                    'initial-scale=1.0"> in <head>'
                ),
            )
        ]


class LangRule(ValidationRule):
    rule_id = "lang"
    category = IssueCategory.ACCESSIBILITY
    priority = 13

    def check(self, context: RuleContext) -> List[Issue]:
        html_tag = context.dom.get_html_tag()
        if html_tag is not None and (context.dom.get_attribute(html_tag, "lang") or "").strip():
            return []
        return [
            self.warning(
                "Missing lang attribute on <html> tag",
                fix='Add lang="en" to <html> tag for screen readers',
                element=html_tag,
                context=context,
            )
        ]


class TitleRule(ValidationRule):
    rule_id = "title"
    category = IssueCategory.SEO
    priority = 20

    def check(self, context: RuleContext) -> List[Issue]:
        titles = context.dom.get_elements_by_tag("title")
        if not titles:
            return [
                self.error(
                    "Missing <title> tag",
                    fix="Add <title>Your Page Title</title> in <head>",
                )
            ]
        if not context.dom.get_text_content(titles[0]):
            return [
                self.error(
                    "Empty <title> tag",
                    fix="Give the page a descriptive title",
                    element=titles[0],
                    context=context,
                )
            ]
        return []


class MetaDescriptionRule(ValidationRule):
    rule_id = "meta-description"
    category = IssueCategory.SEO
    priority = 21

    def check(self, context: RuleContext) -> List[Issue]:
        meta = context.dom.get_meta("description")
        if meta is not None and (context.dom.get_attribute(meta, "content") or "").strip():
            return []
        return [
            self.warning(
                "Missing meta description for SEO",
                fix='Add <meta name="description" content="Your page description"> in <head>',
            )
        ]


class H1Rule(ValidationRule):
    """
    Exactly one <h1> per page.

    Zero headings is an error (the page has no title for search engines
    and screen readers); more than one is only a warning.
    """

    rule_id = "h1"
    category = IssueCategory.SEO
    priority = 22

    def check(self, context: RuleContext) -> List[Issue]:
        headings = context.dom.get_elements_by_tag("h1")
        if not headings:
            return [
                self.error(
                    "Missing h1 heading for page title",
                    fix="Add <h1>Page Title</h1> as the main heading",
                )
            ]
        if len(headings) > 1:
            return [
                self.warning(
                    f"Multiple h1 elements found ({len(headings)}). Should have only one",
                    fix="Use only one <h1> tag for the main page title",
                    element=headings[1],
                    context=context,
                )
            ]
        return []


class HeadingLevelRule(ValidationRule):
    rule_id = "heading-level"
    category = IssueCategory.ACCESSIBILITY
    priority = 23

    def check(self, context: RuleContext) -> List[Issue]:
        headings = context.dom.soup.find_all(HEADING_TAG)
        previous = None
        for heading in headings:
            level = int(HEADING_TAG.match(heading.name).group(1))
            if previous is not None and level - previous > 1:
                # Report only the first skip, the rest usually cascade from it
                return [
                    self.warning(
                        f"Skipped heading level: h{previous} to h{level}",
                        fix="Follow proper heading hierarchy without skipping levels",
                        element=heading,
                        context=context,
                    )
                ]
            previous = level
        return []
