"""
Test configuration and fixtures for pytest.

This module provides shared fixtures used across all tests:
- Settings instances (development and production, .env ignored)
- Sample documents from tests/fixtures/
- A page factory for building documents that differ in one detail
"""

from pathlib import Path
from typing import Callable

import pytest

from codegate.core.config import Settings


FIXTURES_DIR = Path(__file__).parent / "fixtures"


# ---------------------------------------------------------------------------
# SETTINGS FIXTURES
# ---------------------------------------------------------------------------

@pytest.fixture
def settings() -> Settings:
    """Default settings, independent of any local .env file."""
    return Settings(_env_file=None)


@pytest.fixture
def production_settings() -> Settings:
    """Settings for a production build (enables the console.log rule)."""
    return Settings(ENVIRONMENT="production", _env_file=None)


# ---------------------------------------------------------------------------
# DOCUMENT FIXTURES
# ---------------------------------------------------------------------------

def load_fixture(name: str) -> str:
    return (FIXTURES_DIR / name).read_text(encoding="utf-8")


@pytest.fixture
def valid_html() -> str:
    """Complete page that satisfies every rule."""
    return load_fixture("valid_page.html")


@pytest.fixture
def broken_html() -> str:
    """Page with many errors and warnings (CSP, eval, missing head tags)."""
    return load_fixture("broken_page.html")


@pytest.fixture
def minimal_html() -> str:
    """Bare skeleton: html/head/body and nothing else."""
    return load_fixture("minimal_page.html").strip()


@pytest.fixture
def valid_css() -> str:
    return "body { margin: 0; }\n.hero { padding: 2rem; }\n"


@pytest.fixture
def valid_js() -> str:
    return (
        "document.querySelector('form').addEventListener('submit', function (event) {\n"
        "  event.preventDefault();\n"
        "});\n"
    )


@pytest.fixture
def make_page() -> Callable[..., str]:
    """
    Factory for a complete, valid page with one detail changed.

    Every keyword toggles one part of the document; the defaults produce
    a page with no issues.
    """

    def _make_page(
        body: str = "<h1>Test page</h1>",
        head: str = "",
        doctype: bool = True,
        lang: str = "en",
        charset: bool = True,
        viewport: bool = True,
        title: str = "Test page",
        description: bool = True,
    ) -> str:
        parts = []
        if doctype:
            parts.append("<!DOCTYPE html>")
        parts.append(f'<html lang="{lang}">' if lang else "<html>")
        parts.append("<head>")
        if charset:
            parts.append('  <meta charset="UTF-8">')
        if viewport:
            parts.append(
                '  <meta name="viewport" content="width=device-width, initial-scale=1.0">'
            )
        if description:
            parts.append('  <meta name="description" content="A page used in tests">')
        if title is not None:
            parts.append(f"  <title>{title}</title>")
        if head:
            parts.append(f"  {head}")
        parts.append("</head>")
        parts.append("<body>")
        parts.append(f"  {body}")
        parts.append("</body>")
        parts.append("</html>")
        return "\n".join(parts)

    return _make_page
