"""
Security rules - CSP, link hygiene and dangerous JavaScript patterns.

JavaScript patterns are matched against the js source plus every inline
<script> body (RuleContext.scripts), so generated pages that inline
their code are covered too.

Handles:
- csp-inline-style: style="" attributes under a CSP meta (error)
- inline-handler: on*="" attributes (error under CSP, warning otherwise)
- link-rel: external links without rel (warning)
- eval / function-constructor / document-write: dangerous calls (error)
- innerhtml: innerHTML built from dynamic content (warning)
- credential: hardcoded key-like literals (error)
"""

import re
from typing import List

from ..contracts.issues import Issue, IssueCategory

from .base_rule import RuleContext, ValidationRule


EXTERNAL_HREF = re.compile(r"^\s*https?://", re.IGNORECASE)

EVAL_CALL = re.compile(r"(?<![\w$])eval\s*\(")
FUNCTION_CONSTRUCTOR = re.compile(r"(?<![\w$.])(?:new\s+)?Function\s*\(")
DOCUMENT_WRITE = re.compile(r"\bdocument\s*\.\s*write(?:ln)?\s*\(")

# (pattern, message) pairs, each reported at most once
INNER_HTML_PATTERNS = [
    (
        re.compile(r"\.innerHTML\s*=\s*`[^`]*\$\{"),
        "innerHTML with template literal (XSS risk). Use textContent instead.",
    ),
    (
        re.compile(r"\.innerHTML\s*=[^=;\n][^;\n]*\+"),
        "innerHTML with concatenation (XSS risk). Use textContent instead.",
    ),
    (
        re.compile(r"\.innerHTML\s*\+="),
        "innerHTML append operation (XSS risk). Use textContent instead.",
    ),
]

CREDENTIAL_PATTERNS = [
    re.compile(r"""['"](?:sk|pk)[-_][A-Za-z0-9_]{20,}['"]"""),
    re.compile(r"""['"]eyJ[A-Za-z0-9_\-.]{30,}['"]"""),
    re.compile(r"""SUPABASE\w*KEY\w*\s*[:=]\s*['"][^'"\n]{40,}['"]""", re.IGNORECASE),
    re.compile(r"""API[_-]?KEY\w*\s*[:=]\s*['"][^'"\n]{20,}['"]""", re.IGNORECASE),
]


class InlineStyleCSPRule(ValidationRule):
    """
    Inline style attributes are blocked by a Content-Security-Policy
    without 'unsafe-inline'. Only reported when the page declares a CSP.
    """

    rule_id = "csp-inline-style"
    category = IssueCategory.SECURITY
    priority = 40

    def check(self, context: RuleContext) -> List[Issue]:
        if not context.dom.has_csp_meta():
            return []
        styled = context.dom.soup.find_all(style=True)
        if not styled:
            return []
        return [
            self.error(
                f"CSP violation: found {len(styled)} inline style attribute(s)",
                fix="Move inline styles into the stylesheet",
                element=styled[0],
                context=context,
            )
        ]


class InlineHandlerRule(ValidationRule):
    rule_id = "inline-handler"
    category = IssueCategory.SECURITY
    priority = 41

    def check(self, context: RuleContext) -> List[Issue]:
        handlers = context.dom.get_elements_with_event_handlers()
        if not handlers:
            return []

        strict = context.dom.has_csp_meta()
        build = self.error if strict else self.warning
        issues = []
        seen = set()
        for element, attr in handlers:
            if attr in seen:
                continue
            seen.add(attr)
            prefix = "CSP violation: " if strict else ""
            issues.append(
                build(
                    f"{prefix}Found inline {attr} handler",
                    fix="Attach handlers with addEventListener in a script",
                    element=element,
                    context=context,
                )
            )
        return issues


class ExternalLinkRelRule(ValidationRule):
    rule_id = "link-rel"
    category = IssueCategory.SECURITY
    priority = 42

    def check(self, context: RuleContext) -> List[Issue]:
        missing = []
        for link in context.dom.get_elements_by_tag("a"):
            href = context.dom.get_attribute(link, "href") or ""
            if not EXTERNAL_HREF.match(href) or link.has_attr("rel"):
                continue
            missing.append((link, href.strip()))

        if not missing:
            return []

        hrefs = ", ".join(href for _, href in missing)
        return [
            self.warning(
                f"{len(missing)} external link(s) missing rel attribute: {hrefs}",
                fix='Add rel="noopener noreferrer" to external links',
                element=missing[0][0],
                context=context,
            )
        ]


class EvalRule(ValidationRule):
    rule_id = "eval"
    category = IssueCategory.SECURITY
    priority = 43

    def check(self, context: RuleContext) -> List[Issue]:
        if not EVAL_CALL.search(context.scripts):
            return []
        return [
            self.error(
                "Security risk: eval() usage detected",
                fix="Replace eval() with explicit parsing such as JSON.parse",
            )
        ]


class FunctionConstructorRule(ValidationRule):
    rule_id = "function-constructor"
    category = IssueCategory.SECURITY
    priority = 44

    def check(self, context: RuleContext) -> List[Issue]:
        if not FUNCTION_CONSTRUCTOR.search(context.scripts):
            return []
        return [self.error("Security risk: Function constructor detected")]


class DocumentWriteRule(ValidationRule):
    rule_id = "document-write"
    category = IssueCategory.SECURITY
    priority = 45

    def check(self, context: RuleContext) -> List[Issue]:
        if not DOCUMENT_WRITE.search(context.scripts):
            return []
        return [
            self.error(
                "Security risk: document.write() can be dangerous",
                fix="Build nodes with createElement/appendChild instead",
            )
        ]


class InnerHTMLRule(ValidationRule):
    rule_id = "innerhtml"
    category = IssueCategory.SECURITY
    priority = 46

    def check(self, context: RuleContext) -> List[Issue]:
        scripts = context.scripts
        return [
            self.warning(message)
            for pattern, message in INNER_HTML_PATTERNS
            if pattern.search(scripts)
        ]


class HardcodedCredentialRule(ValidationRule):
    rule_id = "credential"
    category = IssueCategory.SECURITY
    priority = 47

    def check(self, context: RuleContext) -> List[Issue]:
        scripts = context.scripts
        if not any(pattern.search(scripts) for pattern in CREDENTIAL_PATTERNS):
            return []
        return [
            self.error(
                "Possible hardcoded API key or credential detected",
                fix="Load secrets from the server, never ship them to the browser",
            )
        ]
