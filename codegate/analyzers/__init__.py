"""Analyzers - read-only views over generated HTML."""

from .dom_parser import DOMParser

__all__ = ["DOMParser"]
