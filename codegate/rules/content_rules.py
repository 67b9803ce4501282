"""
Content rules - per-element accessibility checks.

Each offending element yields its own Issue, positioned at the element's
source line/column.
"""

from typing import List

from ..contracts.issues import Issue, IssueCategory

from .base_rule import RuleContext, ValidationRule


GENERIC_LINK_TEXTS = frozenset({"click here", "read more", "here", "more"})

# Input types that are labelled by their own value or never shown
UNLABELLED_INPUT_TYPES = frozenset({"submit", "button", "hidden", "reset", "image"})


class ImgAltRule(ValidationRule):
    rule_id = "img-alt"
    category = IssueCategory.ACCESSIBILITY
    priority = 30

    def check(self, context: RuleContext) -> List[Issue]:
        issues = []
        for img in context.dom.get_elements_by_tag("img"):
            if (context.dom.get_attribute(img, "alt") or "").strip():
                continue
            src = context.dom.get_attribute(img, "src") or "<no src>"
            issues.append(
                self.error(
                    f"Image missing alt attribute: {src}",
                    fix="Add descriptive alt text to all images for accessibility",
                    element=img,
                    context=context,
                )
            )
        return issues


class ButtonLabelRule(ValidationRule):
    rule_id = "button-label"
    category = IssueCategory.ACCESSIBILITY
    priority = 31

    def check(self, context: RuleContext) -> List[Issue]:
        issues = []
        for button in context.dom.get_elements_by_tag("button"):
            if context.dom.get_text_content(button):
                continue
            if (context.dom.get_attribute(button, "aria-label") or "").strip():
                continue
            if button.has_attr("aria-labelledby"):
                continue
            issues.append(
                self.warning(
                    "Button without text or aria-label",
                    fix="Add text content or aria-label to buttons",
                    element=button,
                    context=context,
                )
            )
        return issues


class GenericLinkTextRule(ValidationRule):
    rule_id = "link-text"
    category = IssueCategory.ACCESSIBILITY
    priority = 32

    def check(self, context: RuleContext) -> List[Issue]:
        issues = []
        for link in context.dom.get_elements_by_tag("a"):
            text = context.dom.get_text_content(link)
            if text.lower() in GENERIC_LINK_TEXTS:
                issues.append(
                    self.warning(
                        f'Link with generic text: "{text}"',
                        fix='Use descriptive link text instead of "click here" or "read more"',
                        element=link,
                        context=context,
                    )
                )
        return issues


class InputLabelRule(ValidationRule):
    rule_id = "input-label"
    category = IssueCategory.ACCESSIBILITY
    priority = 33

    def check(self, context: RuleContext) -> List[Issue]:
        issues = []
        for field in context.dom.get_elements_by_tag("input"):
            input_type = (context.dom.get_attribute(field, "type") or "text").strip().lower()
            if input_type in UNLABELLED_INPUT_TYPES:
                continue
            if (context.dom.get_attribute(field, "id") or "").strip():
                continue
            issues.append(
                self.warning(
                    "Form input missing id for label association",
                    fix='Add id to inputs and associate with <label for="...">',
                    element=field,
                    context=context,
                )
            )
        return issues
