"""
CSS Validator - Brace balance and truncation checks for generated CSS.

Checks:
1. Truncation: ends on an open "{" or on "property:" with no ";" or "}"
2. Rule fragments that close with "}" but never opened with "{"
3. Overall "{" vs "}" count (exact counts in the message)
"""

import re
from typing import List, Tuple

from ..contracts.issues import Issue, IssueCategory


COMMENT_PATTERN = re.compile(r"/\*.*?\*/", re.DOTALL)
DANGLING_DECLARATION = re.compile(r":\s*[^;{}]*$")


def validate_css(css: str) -> List[Issue]:
    """
    Validate CSS syntax.

    Args:
        css: CSS source (empty is valid)

    Returns:
        List of syntax-category ERROR issues
    """
    if not css or not css.strip():
        return []

    issues: List[Issue] = []
    text = strip_comments(css).strip()

    if ends_truncated(text):
        issues.append(
            Issue.error(
                IssueCategory.SYNTAX,
                "CSS appears truncated (incomplete rule)",
                rule="css-truncated",
            )
        )

    segments = text.split("}")
    for segment in segments[:-1]:
        fragment = segment.strip()
        if fragment and "{" not in fragment:
            issues.append(
                Issue.error(
                    IssueCategory.SYNTAX,
                    "CSS appears incomplete (rule closed without opening brace)",
                    rule="css-braces",
                )
            )
            break

    open_count, close_count = count_braces(text)
    if open_count != close_count:
        issues.append(
            Issue.error(
                IssueCategory.SYNTAX,
                f"CSS has unmatched braces ({open_count} open, {close_count} close)",
                rule="css-braces",
            )
        )

    return issues


def strip_comments(css: str) -> str:
    return COMMENT_PATTERN.sub("", css)


def count_braces(css: str) -> Tuple[int, int]:
    return css.count("{"), css.count("}")


def ends_truncated(css: str) -> bool:
    """
    Check if CSS stops in the middle of a rule.

    A trailing "prop: value" without ";" is only truncation when a block
    is still open; "a { color: red }" legitimately ends without ";".
    """
    text = css.rstrip()
    if not text:
        return False
    if text.endswith("{"):
        return True
    tail = text[text.rfind("}") + 1:]
    return "{" in tail and bool(DANGLING_DECLARATION.search(tail))
