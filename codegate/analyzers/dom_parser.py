"""
DOM Parser - Lenient element lookup over generated HTML using BeautifulSoup.

The best-practice rules query elements (meta tags, headings, images,
links, buttons, inputs) through this wrapper. The "html.parser" backend
never raises on malformed or truncated input and records the source
position of every tag, which is reused as Issue line/column.

Usage:
    from codegate.analyzers import DOMParser

    parser = DOMParser(html_string)
    for img in parser.get_elements_by_tag("img"):
        line, column = parser.get_source_position(img)
"""

import re
from typing import List, Optional, Tuple

from bs4 import BeautifulSoup, Tag


DOCTYPE_PATTERN = re.compile(r"<!DOCTYPE\s+html\b", re.IGNORECASE)


class DOMParser:
    """
    HTML parser using BeautifulSoup for rule evaluation.

    Provides methods for:
    - Tag and attribute lookup
    - Meta tag queries (name / http-equiv / charset)
    - Inline script extraction
    - Source position extraction
    """

    def __init__(self, html: str):
        """
        Initialize parser with HTML content.

        Args:
            html: Raw HTML string to parse
        """
        self._html = html or ""
        self._soup = BeautifulSoup(self._html, "html.parser")

    @property
    def soup(self) -> BeautifulSoup:
        """Access the underlying BeautifulSoup object."""
        return self._soup

    @property
    def html(self) -> str:
        """Access the original HTML string."""
        return self._html

    # =========================================================================
    # ELEMENT SELECTION
    # =========================================================================

    def get_elements_by_tag(self, tag_name: str) -> List[Tag]:
        """
        Get all elements with specific tag name.

        Args:
            tag_name: HTML tag name (e.g., "img", "h1")

        Returns:
            List of matching Tags in document order
        """
        return self._soup.find_all(tag_name)

    def get_all_elements(self) -> List[Tag]:
        return self._soup.find_all(True)

    def get_html_tag(self) -> Optional[Tag]:
        return self._soup.find("html")

    def get_meta(self, name: str) -> Optional[Tag]:
        """
        Get the first <meta name="..."> tag, matching the name case-insensitively.

        Args:
            name: Meta name (e.g., "viewport", "description")
        """
        wanted = name.lower()
        for meta in self.get_elements_by_tag("meta"):
            if (self.get_attribute(meta, "name") or "").strip().lower() == wanted:
                return meta
        return None

    def get_meta_http_equiv(self, value: str) -> Optional[Tag]:
        """Get the first <meta http-equiv="..."> tag (case-insensitive)."""
        wanted = value.lower()
        for meta in self.get_elements_by_tag("meta"):
            if (self.get_attribute(meta, "http-equiv") or "").strip().lower() == wanted:
                return meta
        return None

    def has_charset_meta(self) -> bool:
        """Check for <meta charset> or a Content-Type meta carrying a charset."""
        for meta in self.get_elements_by_tag("meta"):
            if meta.has_attr("charset"):
                return True
        content_type = self.get_meta_http_equiv("content-type")
        if content_type is not None:
            return "charset" in (self.get_attribute(content_type, "content") or "").lower()
        return False

    def has_csp_meta(self) -> bool:
        return self.get_meta_http_equiv("content-security-policy") is not None

    def has_doctype(self) -> bool:
        return bool(DOCTYPE_PATTERN.search(self._html))

    def get_inline_scripts(self) -> List[str]:
        """
        Get the bodies of all inline <script> elements.

        External scripts (with src) are skipped.
        """
        bodies = []
        for script in self.get_elements_by_tag("script"):
            if script.has_attr("src"):
                continue
            content = script.string or script.get_text()
            if content and content.strip():
                bodies.append(content)
        return bodies

    def get_elements_with_event_handlers(self) -> List[Tuple[Tag, str]]:
        """Get (element, attribute) pairs for every inline on* handler."""
        found = []
        for element in self.get_all_elements():
            for attr in element.attrs:
                if attr.lower().startswith("on") and len(attr) > 2:
                    found.append((element, attr.lower()))
        return found

    # =========================================================================
    # CONTEXT AND METADATA
    # =========================================================================

    def get_source_position(self, element: Tag) -> Tuple[Optional[int], Optional[int]]:
        """
        Get the source line (1-indexed) and column (0-indexed) of an element.

        Returns:
            (line, column), either may be None if unavailable
        """
        return getattr(element, "sourceline", None), getattr(element, "sourcepos", None)

    def get_text_content(self, element: Tag) -> str:
        """
        Get text content of an element (stripped).

        Args:
            element: Target element

        Returns:
            Text content with whitespace normalized
        """
        return element.get_text(strip=True)

    def get_attribute(self, element: Tag, attr: str) -> Optional[str]:
        """
        Get attribute value from element.

        Multi-valued attributes (class, rel) are joined with spaces.

        Args:
            element: Target element
            attr: Attribute name

        Returns:
            Attribute value or None
        """
        value = element.get(attr)
        if isinstance(value, list):
            return " ".join(value)
        return value

    def __repr__(self) -> str:
        """String representation."""
        return f"DOMParser({len(self.get_all_elements())} elements)"
