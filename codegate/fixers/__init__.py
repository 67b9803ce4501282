"""
Fixers - Deterministic repairs for generated HTML.

Usage:
    from codegate.fixers import auto_fix_code

    result = auto_fix_code(html, validation)
"""

from .auto_fixer import FIXABLE_RULES, CodeAutoFixer, auto_fix_code, get_auto_fixer

__all__ = ["FIXABLE_RULES", "CodeAutoFixer", "auto_fix_code", "get_auto_fixer"]
