"""
HTML Validator - Structural heuristics for generated HTML.

No DOM is built here. The checks are deliberately coarse and tuned for
generated, mostly well-formed documents:
- empty input
- no tag-like substring at all
- truncation (input ends inside a tag)
- many opening tags but not a single closing tag
"""

import re
from typing import List

from ..contracts.issues import Issue, IssueCategory


TAG_PATTERN = re.compile(r"<[^>]+>")
OPEN_TAG_PATTERN = re.compile(r"<[^/!?>][^>]*(?<!/)>")
CLOSE_TAG_PATTERN = re.compile(r"</[^>]+>")
TRUNCATED_TAG_PATTERN = re.compile(r"<[^>]*$")

# More opening tags than this with zero closing tags means truncation
MIN_OPEN_TAGS_FOR_MISMATCH = 3


def validate_html(html: str) -> List[Issue]:
    """
    Validate HTML structure.

    Args:
        html: HTML source

    Returns:
        List of syntax-category ERROR issues
    """
    if not html or not html.strip():
        return [
            Issue.error(
                IssueCategory.SYNTAX,
                "HTML is empty or missing",
                rule="html-empty",
            )
        ]

    issues: List[Issue] = []
    text = html.strip()

    if not TAG_PATTERN.search(text):
        issues.append(
            Issue.error(
                IssueCategory.SYNTAX,
                "No valid HTML tags found",
                rule="html-structure",
            )
        )

    if ends_mid_tag(text):
        issues.append(
            Issue.error(
                IssueCategory.SYNTAX,
                "HTML appears truncated (ends mid-tag)",
                rule="html-truncated",
            )
        )

    open_tags = OPEN_TAG_PATTERN.findall(text)
    close_tags = CLOSE_TAG_PATTERN.findall(text)
    if len(open_tags) > MIN_OPEN_TAGS_FOR_MISMATCH and not close_tags:
        issues.append(
            Issue.error(
                IssueCategory.SYNTAX,
                f"HTML appears incomplete - {len(open_tags)} opening tags "
                "but no closing tags",
                rule="html-structure",
            )
        )

    return issues


def ends_mid_tag(html: str) -> bool:
    """Check if the text ends with a '<' that is never closed by '>'."""
    return bool(TRUNCATED_TAG_PATTERN.search(html.rstrip()))


def has_closing_tag(html: str) -> bool:
    return bool(CLOSE_TAG_PATTERN.search(html))
