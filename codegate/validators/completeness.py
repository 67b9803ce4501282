"""
Completeness probes - quick "does this look finished?" checks per code type.

Used by the streaming gate before persisting generated code:
- html: does not end mid-tag and contains at least one closing tag
- css: balanced braces and does not end on an open "{"
- js: parses cleanly on its own
"""

from enum import Enum
from typing import Union

from .css_validator import count_braces, strip_comments
from .html_validator import ends_mid_tag, has_closing_tag
from .js_validator import parse_javascript


class CodeKind(str, Enum):
    HTML = "html"
    CSS = "css"
    JS = "js"


def is_code_complete(code: str, kind: Union[CodeKind, str]) -> bool:
    """
    Check if code of the given kind appears complete.

    Args:
        code: Source text
        kind: "html", "css" or "js"

    Returns:
        False for empty input or when the probe fails

    Raises:
        ValueError: If kind is not a known code kind
    """
    kind = CodeKind(kind)

    if not code or not code.strip():
        return False

    if kind == CodeKind.HTML:
        return not ends_mid_tag(code) and has_closing_tag(code)

    if kind == CodeKind.CSS:
        text = strip_comments(code).strip()
        open_count, close_count = count_braces(text)
        return open_count == close_count and not text.endswith("{")

    return parse_javascript(code) is None
