"""
Streaming - Data structures for one code generation session.

StreamingState is owned by exactly one session: the token consumption
loop is its only writer, and it is discarded once the save decision
has been made.
"""

from dataclasses import dataclass
from typing import Optional

from .results import ValidationResult


@dataclass(frozen=True)
class StreamEvent:
    """
    One upstream event: either a text fragment or the end-of-stream marker.

    Usage:
        StreamEvent.delta("<html>")
        StreamEvent.end()
    """

    text: Optional[str] = None
    is_end: bool = False

    @classmethod
    def delta(cls, text: str) -> "StreamEvent":
        return cls(text=text)

    @classmethod
    def end(cls) -> "StreamEvent":
        return cls(is_end=True)


@dataclass(frozen=True)
class ExtractedCode:
    """HTML/CSS/JS pulled out of fenced code blocks."""

    html: str = ""
    css: str = ""
    js: str = ""


@dataclass
class StreamingState:
    """
    Mutable accumulator for one generation session.

    Lifecycle: STREAMING (is_complete=False) -> COMPLETE (is_complete=True).
    `validation` is only set once the session is complete.
    """

    accumulated_code: str = ""
    html: str = ""
    css: str = ""
    js: str = ""
    is_complete: bool = False
    validation: Optional[ValidationResult] = None

    def apply_extraction(self, extracted: ExtractedCode) -> None:
        """Replace the live html/css/js view with a fresh extraction."""
        self.html = extracted.html
        self.css = extracted.css
        self.js = extracted.js
