"""
CodeAutoFixer - Rewrites boilerplate defects in generated HTML.

Only issues that need boilerplate, not generated content, are fixed:

    rule        transform
    ----------  ------------------------------------------------------
    doctype     prepend <!DOCTYPE html>
    charset     <meta charset="UTF-8"> as first child of <head>
    viewport    <meta name="viewport" ...> in <head>
    lang        lang="en" on <html>
    img-lazy    loading="lazy" on non-hero <img>
    link-rel    rel="noopener noreferrer" on external <a>

A transform runs only when the supplied ValidationResult reports its
rule, and each one checks the current text first, so feeding the output
back in is a no-op. Edits are made on the raw text; markup outside the
edited tags is left byte-identical.

Usage:
    from codegate.fixers import auto_fix_code
    from codegate.validators import validate_all

    validation = validate_all(html, css, js)
    result = auto_fix_code(html, validation)
    html = result.fixed
"""

import logging
import re
from typing import Callable, List, Optional, Tuple

from ..analyzers.dom_parser import DOCTYPE_PATTERN, DOMParser
from ..contracts.results import AutoFixResult, ValidationResult
from ..core.config import Settings, settings as default_settings
from ..monitoring.logger import gate_logger
from ..rules.performance_rules import is_hero_image


logger = logging.getLogger(__name__)


FIXABLE_RULES = ("doctype", "charset", "viewport", "lang", "img-lazy", "link-rel")

CHARSET_META = '<meta charset="UTF-8">'
VIEWPORT_META = '<meta name="viewport" content="width=device-width, initial-scale=1.0">'
EXTERNAL_REL = 'rel="noopener noreferrer"'

HEAD_OPEN = re.compile(r"<head\b[^>]*>", re.IGNORECASE)
HTML_OPEN = re.compile(r"<html\b[^>]*>", re.IGNORECASE)
DOCTYPE_TAG = re.compile(r"<!DOCTYPE\s+html\b[^>]*>", re.IGNORECASE)
CHARSET_TAG = re.compile(r"<meta\b[^>]*\bcharset\b[^>]*>", re.IGNORECASE)
IMG_TAG = re.compile(r"<img\b[^>]*>", re.IGNORECASE)
ANCHOR_TAG = re.compile(r"<a\b[^>]*>", re.IGNORECASE)
# Any lang attribute, with or without a value
LANG_ATTR = re.compile(
    r"""\s+lang(?:\s*=\s*(?:"[^"]*"|'[^']*'|[^\s"'>]+))?(?=[\s/>])""",
    re.IGNORECASE,
)
EXTERNAL_HREF_ATTR = re.compile(r"""(?<![\w-])href\s*=\s*["']?\s*https?://""", re.IGNORECASE)


def _attr_pattern(name: str) -> "re.Pattern":
    return re.compile(
        rf"""(?<![\w-]){name}\s*=\s*(?:"([^"]*)"|'([^']*)'|([^\s"'>]+))""",
        re.IGNORECASE,
    )


SRC_ATTR = _attr_pattern("src")
CLASS_ATTR = _attr_pattern("class")
ID_ATTR = _attr_pattern("id")
LOADING_ATTR = re.compile(r"(?<![\w-])loading\s*=", re.IGNORECASE)
REL_ATTR = re.compile(r"(?<![\w-])rel\s*=", re.IGNORECASE)


class CodeAutoFixer:
    """
    Applies the fix catalog to HTML.

    Stateless between calls: every auto_fix() builds its own log, so one
    instance can serve concurrent callers.
    """

    def __init__(self, settings: Optional[Settings] = None):
        """
        Initialize the fixer.

        Args:
            settings: Default lang and hero image markers
        """
        self.settings = settings or default_settings

    def auto_fix(self, source: str, validation: ValidationResult) -> AutoFixResult:
        """
        Fix every catalog issue reported by validation.

        Args:
            source: HTML the validation was computed on
            validation: ValidationResult of the unfixed source

        Returns:
            AutoFixResult with the rewritten HTML and the fix log

        Raises:
            TypeError: If source is not a string
            pydantic.ValidationError: If validation is not a valid ValidationResult
        """
        if not isinstance(source, str):
            raise TypeError(f"source must be str, got {type(source).__name__}")
        if not isinstance(validation, ValidationResult):
            validation = ValidationResult.model_validate(validation)

        transforms: List[Tuple[str, Callable[[str], Tuple[str, Optional[str]]]]] = [
            ("doctype", self.fix_doctype),
            ("charset", self.fix_charset),
            ("viewport", self.fix_viewport),
            ("lang", self.fix_lang),
            ("img-lazy", self.fix_lazy_loading),
            ("link-rel", self.fix_external_links),
        ]

        fixed = source
        applied: List[str] = []
        for rule, transform in transforms:
            if not validation.has_rule(rule):
                continue
            fixed, message = transform(fixed)
            if message:
                applied.append(message)
                logger.debug(f"Applied {rule} fix: {message}")

        remaining = sum(1 for issue in validation.issues if issue.rule not in FIXABLE_RULES)

        result = AutoFixResult(fixed=fixed, applied_fixes=applied, remaining_issues=remaining)
        logger.info(f"Auto-fix applied {len(applied)} fix(es), {remaining} issue(s) remain")
        gate_logger.log_autofix(result)
        return result

    # =========================================================================
    # TRANSFORMS
    # =========================================================================
    # Each returns (html, log message) with message None when nothing changed.

    def fix_doctype(self, html: str) -> Tuple[str, Optional[str]]:
        if DOCTYPE_PATTERN.search(html):
            return html, None
        return "<!DOCTYPE html>\n" + html.lstrip(), "Added <!DOCTYPE html> declaration"

    def fix_charset(self, html: str) -> Tuple[str, Optional[str]]:
        if DOMParser(html).has_charset_meta():
            return html, None
        return _insert_into_head(html, CHARSET_META), 'Added <meta charset="UTF-8"> to <head>'

    def fix_viewport(self, html: str) -> Tuple[str, Optional[str]]:
        if DOMParser(html).get_meta("viewport") is not None:
            return html, None

        charset = CHARSET_TAG.search(html)
        if charset:
            fixed = html[:charset.end()] + "\n  " + VIEWPORT_META + html[charset.end():]
        else:
            fixed = _insert_into_head(html, VIEWPORT_META)
        return fixed, "Added viewport meta tag for mobile responsiveness"

    def fix_lang(self, html: str) -> Tuple[str, Optional[str]]:
        match = HTML_OPEN.search(html)
        if match is None:
            return html, None

        tag = match.group(0)
        html_tag = DOMParser(tag).get_html_tag()
        if html_tag is not None and (html_tag.get("lang") or "").strip():
            return html, None

        lang = self.settings.AUTOFIX_DEFAULT_LANG
        new_tag = "<html" + f' lang="{lang}"' + LANG_ATTR.sub("", tag)[len("<html"):]
        fixed = html[:match.start()] + new_tag + html[match.end():]
        return fixed, f'Added lang="{lang}" attribute to <html> tag'

    def fix_lazy_loading(self, html: str) -> Tuple[str, Optional[str]]:
        count = 0

        def add_loading(match: "re.Match") -> str:
            nonlocal count
            tag = match.group(0)
            if LOADING_ATTR.search(tag):
                return tag
            identity = [_attr_value(SRC_ATTR, tag), _attr_value(CLASS_ATTR, tag), _attr_value(ID_ATTR, tag)]
            if is_hero_image(identity, self.settings.HERO_IMAGE_MARKERS):
                return tag
            count += 1
            return _add_attribute(tag, 'loading="lazy"')

        fixed = IMG_TAG.sub(add_loading, html)
        if not count:
            return html, None
        return fixed, f'Added loading="lazy" to {count} image(s)'

    def fix_external_links(self, html: str) -> Tuple[str, Optional[str]]:
        count = 0

        def add_rel(match: "re.Match") -> str:
            nonlocal count
            tag = match.group(0)
            if not EXTERNAL_HREF_ATTR.search(tag) or REL_ATTR.search(tag):
                return tag
            count += 1
            return _add_attribute(tag, EXTERNAL_REL)

        fixed = ANCHOR_TAG.sub(add_rel, html)
        if not count:
            return html, None
        return fixed, f'Added {EXTERNAL_REL} to {count} external link(s)'


def _insert_into_head(html: str, snippet: str) -> str:
    """
    Insert snippet as the first child of <head>.

    Creates <head> right after <html> (or after the doctype, or at the
    very start) when the document has none.
    """
    head = HEAD_OPEN.search(html)
    if head:
        return html[:head.end()] + "\n  " + snippet + html[head.end():]

    block = f"<head>\n  {snippet}\n</head>"
    root = HTML_OPEN.search(html)
    if root:
        return html[:root.end()] + "\n" + block + html[root.end():]

    doctype = DOCTYPE_TAG.search(html)
    if doctype:
        return html[:doctype.end()] + "\n" + block + html[doctype.end():]

    return block + "\n" + html


def _attr_value(pattern: "re.Pattern", tag: str) -> Optional[str]:
    match = pattern.search(tag)
    if match is None:
        return None
    return next((group for group in match.groups() if group is not None), "")


def _add_attribute(tag: str, attribute: str) -> str:
    """Append attribute before the end of an opening tag, keeping "/>" intact."""
    if tag.endswith("/>"):
        return tag[:-2].rstrip() + f" {attribute} />"
    return tag[:-1].rstrip() + f" {attribute}>"


# Module-level default
_default_fixer: Optional[CodeAutoFixer] = None


def get_auto_fixer() -> CodeAutoFixer:
    """Get the shared default fixer."""
    global _default_fixer
    if _default_fixer is None:
        _default_fixer = CodeAutoFixer()
    return _default_fixer


def auto_fix_code(source: str, validation: ValidationResult) -> AutoFixResult:
    """
    Apply the fix catalog with the default fixer.

    Args:
        source: HTML the validation was computed on
        validation: ValidationResult of the unfixed source

    Returns:
        AutoFixResult
    """
    return get_auto_fixer().auto_fix(source, validation)
