"""
JavaScript Validator - Syntax and completeness checks for generated JS.

Validates:
1. Full parse with tree-sitter-javascript (ES2022 and later: optional
   chaining, nullish coalescing, class fields, BigInt). The first
   ERROR or MISSING node becomes one syntax error with its position
2. Truncation patterns (unterminated function/class/if/for/while/arrow
   bodies, trailing unterminated block comment)
3. Bracket balance of {} [] () with string, template literal, comment
   and regex literal state tracked so their contents are ignored

Each check runs independently; a parse failure does not suppress the
completeness or balance checks.

Usage:
    from codegate.validators.js_validator import validate_javascript

    for issue in validate_javascript(js_code):
        print(issue.describe())
"""

import logging
import re
from dataclasses import dataclass
from typing import List, NamedTuple, Optional, Tuple

import tree_sitter_javascript
from tree_sitter import Language, Node, Parser

from ..contracts.issues import Issue, IssueCategory


logger = logging.getLogger(__name__)


JS_LANGUAGE = Language(tree_sitter_javascript.language())

# Longest token text quoted in a syntax error message
MAX_TOKEN_CHARS = 30

# Anchored at end of input: an opened body that never closes.
INCOMPLETE_PATTERNS: List[Tuple[re.Pattern, str]] = [
    (
        re.compile(r"function\s+\w+\s*\([^)]*\)\s*\{[^}]*$", re.DOTALL),
        "Incomplete function definition (missing closing brace)",
    ),
    (
        re.compile(r"class\s+\w+(?:\s+extends\s+[\w.]+)?\s*\{[^}]*$", re.DOTALL),
        "Incomplete class definition (missing closing brace)",
    ),
    (
        re.compile(r"\bif\s*\([^)]*\)\s*\{[^}]*$", re.DOTALL),
        "Incomplete if statement (missing closing brace)",
    ),
    (
        re.compile(r"\bfor\s*\([^)]*\)\s*\{[^}]*$", re.DOTALL),
        "Incomplete for loop (missing closing brace)",
    ),
    (
        re.compile(r"\bwhile\s*\([^)]*\)\s*\{[^}]*$", re.DOTALL),
        "Incomplete while loop (missing closing brace)",
    ),
    (
        re.compile(r"=>\s*\{[^}]*$", re.DOTALL),
        "Incomplete arrow function (missing closing brace)",
    ),
]

UNTERMINATED_COMMENT_MESSAGE = "Ends with incomplete block comment (missing */)"

OPENERS = {"{": "}", "[": "]", "(": ")"}
CLOSERS = {"}": "{", "]": "[", ")": "("}

# After one of these, a "/" starts a regex literal rather than a division
REGEX_PRECEDERS = set("(,=:[!&|?{};+-*%<>~^")
REGEX_KEYWORDS = {
    "return", "typeof", "case", "do", "else", "in", "of",
    "new", "delete", "void", "throw", "yield", "await",
}


@dataclass(frozen=True)
class JSSyntaxError:
    """First syntax error found by the parser."""

    description: str
    line: int    # 1-based
    column: int  # 0-based, in characters


class _ScanResult(NamedTuple):
    bracket_issues: List[Issue]
    unterminated_comment: bool


def parse_javascript(js: str) -> Optional[JSSyntaxError]:
    """
    Parse JS as a classic script.

    Returns:
        None if the source parses, otherwise the first syntax error
    """
    source = js.encode("utf-8")
    # Parser objects are not thread-safe; one per call
    tree = Parser(JS_LANGUAGE).parse(source)
    if not tree.root_node.has_error:
        return None

    node = _first_error_node(tree.root_node)
    if node is None:
        return JSSyntaxError("Unknown error", line=1, column=0)
    return _describe_error(node, source)


def _first_error_node(root: Node) -> Optional[Node]:
    """First ERROR or MISSING node in document order."""
    stack = [root]
    while stack:
        node = stack.pop()
        if node.is_error or node.is_missing:
            return node
        # Descend only into subtrees that contain an error
        stack.extend(child for child in reversed(node.children) if child.has_error or child.is_missing)
    return None


def _describe_error(node: Node, source: bytes) -> JSSyntaxError:
    row, byte_column = node.start_point
    line_prefix = source[node.start_byte - byte_column:node.start_byte]
    column = len(line_prefix.decode("utf-8", errors="replace"))
    at_end = node.start_byte >= len(source.rstrip())

    if node.is_missing:
        expected = node.type
        if at_end:
            description = f"Unexpected end of input (expected '{expected}')"
        else:
            description = f"Line {row + 1}: Missing '{expected}'"
    elif at_end:
        description = "Unexpected end of input"
    else:
        leaf = node
        while leaf.children:
            leaf = leaf.children[0]
        token = source[leaf.start_byte:leaf.end_byte].decode("utf-8", errors="replace")
        token = token.strip()[:MAX_TOKEN_CHARS] or node.type
        description = f"Line {row + 1}: Unexpected token {token}"

    return JSSyntaxError(description, line=row + 1, column=column)


def validate_javascript(js: str) -> List[Issue]:
    """
    Validate JavaScript for syntax errors and completeness.

    Args:
        js: JavaScript source (empty or whitespace-only is valid)

    Returns:
        List of syntax-category ERROR issues
    """
    if not js or not js.strip():
        return []

    issues: List[Issue] = []

    error = parse_javascript(js)
    if error is not None:
        issues.append(
            Issue.error(
                IssueCategory.SYNTAX,
                f"JavaScript Syntax Error: {error.description}",
                rule="js-syntax",
                line=error.line,
                column=error.column,
            )
        )

    for pattern, message in INCOMPLETE_PATTERNS:
        if pattern.search(js):
            issues.append(_completeness_issue(message))

    scan = _scan(js)
    if scan.unterminated_comment:
        issues.append(_completeness_issue(UNTERMINATED_COMMENT_MESSAGE))
    issues.extend(scan.bracket_issues)

    if issues:
        logger.debug(f"JavaScript validation found {len(issues)} issue(s)")
    return issues


def _completeness_issue(message: str) -> Issue:
    return Issue.error(
        IssueCategory.SYNTAX,
        f"JavaScript completeness: {message}",
        rule="js-completeness",
    )


def check_bracket_balance(code: str) -> List[Issue]:
    """
    Single-pass bracket balance check.

    Brackets inside strings, template literals, comments and regex
    literals are ignored. Every unmatched closer yields one issue;
    leftover openers yield one aggregate issue.
    """
    return _scan(code).bracket_issues


def _scan(code: str) -> _ScanResult:
    issues: List[Issue] = []
    stack: List[Tuple[str, int, int]] = []
    unterminated_comment = False

    i = 0
    n = len(code)
    line = 1
    line_start = 0
    prev: Optional[str] = None  # last significant code character
    prev_pos = -1
    word = ""  # identifier/keyword ending at prev

    while i < n:
        char = code[i]
        nxt = code[i + 1] if i + 1 < n else ""

        if char == "\n":
            line += 1
            line_start = i + 1
            i += 1
            continue

        if char.isspace():
            i += 1
            continue

        # Line comment
        if char == "/" and nxt == "/":
            end = code.find("\n", i)
            i = n if end == -1 else end
            continue

        # Block comment
        if char == "/" and nxt == "*":
            end = code.find("*/", i + 2)
            unterminated_comment = end == -1
            stop = n if unterminated_comment else end + 2
            line, line_start = _advance_lines(code, i, stop, line, line_start)
            i = stop
            continue

        # Strings and template literals
        if char in ("'", '"', "`"):
            stop = _skip_string(code, i, char)
            line, line_start = _advance_lines(code, i, stop, line, line_start)
            i = stop
            prev, word = char, ""
            continue

        # Regex literal
        if char == "/" and (prev is None or prev in REGEX_PRECEDERS or word in REGEX_KEYWORDS):
            i = _skip_regex(code, i)
            prev, word = "/", ""
            continue

        if char in OPENERS:
            stack.append((char, line, i - line_start))
        elif char in CLOSERS:
            if stack and stack[-1][0] == CLOSERS[char]:
                stack.pop()
            else:
                if stack:
                    stack.pop()
                issues.append(
                    Issue.error(
                        IssueCategory.SYNTAX,
                        f"Unmatched closing bracket '{char}'",
                        rule="js-brackets",
                        line=line,
                        column=i - line_start,
                    )
                )

        if char.isalnum() or char in "_$":
            word = word + char if word and prev_pos == i - 1 else char
        else:
            word = ""
        prev = char
        prev_pos = i
        i += 1

    if stack:
        first_char, first_line, first_col = stack[0]
        issues.append(
            Issue.error(
                IssueCategory.SYNTAX,
                f"{len(stack)} unmatched opening bracket(s) found "
                f"(first '{first_char}' never closed)",
                rule="js-brackets",
                line=first_line,
                column=first_col,
            )
        )

    return _ScanResult(issues, unterminated_comment)


def _skip_string(code: str, start: int, quote: str) -> int:
    """Return index just past the closing quote (or end of input)."""
    i = start + 1
    n = len(code)
    while i < n:
        char = code[i]
        if char == "\\":
            i += 2
            continue
        if char == quote:
            return i + 1
        if char == "\n" and quote != "`":
            # Unterminated single-line string; resume scanning at newline
            return i
        i += 1
    return n


def _skip_regex(code: str, start: int) -> int:
    """Return index just past a regex literal body (flags are scanned as code)."""
    i = start + 1
    n = len(code)
    in_class = False
    while i < n:
        char = code[i]
        if char == "\\":
            i += 2
            continue
        if char == "\n":
            return i
        if char == "[":
            in_class = True
        elif char == "]":
            in_class = False
        elif char == "/" and not in_class:
            return i + 1
        i += 1
    return n


def _advance_lines(
    code: str, start: int, stop: int, line: int, line_start: int
) -> Tuple[int, int]:
    """Account for newlines skipped inside a string or comment."""
    newlines = code.count("\n", start, stop)
    if newlines:
        line += newlines
        line_start = code.rfind("\n", start, stop) + 1
    return line, line_start
