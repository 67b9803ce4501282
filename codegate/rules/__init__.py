"""
Rules - Best-practice checks over generated HTML/CSS/JS.

Components:
- ValidationRule: Abstract base class for all rules
- RuleContext: Sources plus parsed DOM shared by one run
- RuleEngine: Runs registered rules in priority order
- Concrete Rules: DoctypeRule, ImgAltRule, EvalRule, etc.

Usage:
    from codegate.rules import create_default_engine

    engine = create_default_engine()
    issues = engine.run(html, css, js)
"""

from .base_rule import RuleContext, ValidationRule
from .rule_engine import RuleEngine, create_default_engine
from .document_rules import (
    CharsetRule,
    DoctypeRule,
    H1Rule,
    HeadingLevelRule,
    LangRule,
    MetaDescriptionRule,
    TitleRule,
    ViewportRule,
)
from .content_rules import ButtonLabelRule, GenericLinkTextRule, ImgAltRule, InputLabelRule
from .security_rules import (
    DocumentWriteRule,
    EvalRule,
    ExternalLinkRelRule,
    FunctionConstructorRule,
    HardcodedCredentialRule,
    InlineHandlerRule,
    InlineStyleCSPRule,
    InnerHTMLRule,
)
from .performance_rules import (
    ConsoleLogRule,
    CssImportRule,
    ImgLazyRule,
    LargeInlineScriptRule,
    is_hero_image,
)


__all__ = [
    # Base
    "ValidationRule",
    "RuleContext",
    "RuleEngine",
    "create_default_engine",
    # Document
    "DoctypeRule",
    "CharsetRule",
    "ViewportRule",
    "LangRule",
    "TitleRule",
    "MetaDescriptionRule",
    "H1Rule",
    "HeadingLevelRule",
    # Content
    "ImgAltRule",
    "ButtonLabelRule",
    "GenericLinkTextRule",
    "InputLabelRule",
    # Security
    "InlineStyleCSPRule",
    "InlineHandlerRule",
    "ExternalLinkRelRule",
    "EvalRule",
    "FunctionConstructorRule",
    "DocumentWriteRule",
    "InnerHTMLRule",
    "HardcodedCredentialRule",
    # Performance
    "ImgLazyRule",
    "LargeInlineScriptRule",
    "CssImportRule",
    "ConsoleLogRule",
    "is_hero_image",
]
