"""
Tests for the auto-fixer.

This module tests:
- Each catalog transform and its log keyword
- Idempotence (fixing the fixed output is a no-op)
- remaining_issues counted from non-catalog rules
- Hero images left eager
- Contract errors (non-str source, malformed validation)
"""

import pytest
from pydantic import ValidationError

from codegate.fixers import FIXABLE_RULES, CodeAutoFixer
from codegate.validators.code_validator import CodeValidator


@pytest.fixture
def validator(settings) -> CodeValidator:
    return CodeValidator(settings=settings)


@pytest.fixture
def fixer(settings) -> CodeAutoFixer:
    return CodeAutoFixer(settings=settings)


def _fix(fixer, validator, html):
    return fixer.auto_fix(html, validator.validate(html))


# ---------------------------------------------------------------------------
# CATALOG
# ---------------------------------------------------------------------------

class TestAutoFixCatalog:
    """Tests for individual transforms."""

    def test_minimal_document(self, fixer, validator, minimal_html):
        """The bare skeleton gets all four boilerplate fixes."""
        result = _fix(fixer, validator, minimal_html)

        assert "<!DOCTYPE html>" in result.fixed
        assert 'charset="UTF-8"' in result.fixed
        assert 'name="viewport"' in result.fixed
        assert 'lang="en"' in result.fixed
        assert len(result.applied_fixes) >= 4
        assert result.remaining_issues > 0

    def test_fix_log_keywords(self, fixer, validator, minimal_html):
        """Each log entry names the rule keyword it addressed."""
        applied = " | ".join(_fix(fixer, validator, minimal_html).applied_fixes)

        for keyword in ("DOCTYPE", "charset", "viewport", "lang"):
            assert keyword in applied

    def test_doctype_prepended_once(self, fixer, validator, make_page):
        result = _fix(fixer, validator, make_page(doctype=False))

        assert result.fixed.startswith("<!DOCTYPE html>\n<html")
        assert result.fixed.count("<!DOCTYPE html>") == 1

    def test_charset_is_first_child_of_head(self, fixer, validator, make_page):
        result = _fix(fixer, validator, make_page(charset=False))

        assert '<head>\n  <meta charset="UTF-8">' in result.fixed

    def test_head_created_when_missing(self, fixer, validator):
        html = "<html><body><h1>Hello</h1></body></html>"

        result = _fix(fixer, validator, html)

        assert result.fixed.count("<head>") == 1
        head = result.fixed[result.fixed.index("<head>"):result.fixed.index("</head>")]
        assert 'charset="UTF-8"' in head
        assert 'name="viewport"' in head
        assert result.fixed.index("</head>") < result.fixed.index("<body>")

    def test_viewport_follows_charset(self, fixer, validator, make_page):
        result = _fix(fixer, validator, make_page(viewport=False))

        assert result.fixed.index('charset="UTF-8"') < result.fixed.index('name="viewport"')

    def test_lang_added(self, fixer, validator, make_page):
        result = _fix(fixer, validator, make_page(lang=""))

        assert '<html lang="en">' in result.fixed

    @pytest.mark.parametrize(
        "html_tag",
        ['<html lang=" ">', "<html lang>", "<html LANG='' class=\"page\">", '<html lang="" lang=" ">'],
    )
    def test_lang_replaces_blank_attribute(self, fixer, validator, make_page, html_tag):
        """Blank or valueless lang attributes are replaced, never duplicated."""
        html = make_page(lang="").replace("<html>", html_tag, 1)

        first = _fix(fixer, validator, html)
        second = _fix(fixer, validator, first.fixed)

        opening = first.fixed[first.fixed.index("<html"):first.fixed.index(">", first.fixed.index("<html")) + 1]
        assert opening.lower().count("lang") == 1
        assert opening.startswith('<html lang="en"')
        assert second.fixed == first.fixed
        assert second.applied_fixes == []

    def test_lang_from_settings(self, validator, make_page):
        from codegate.core.config import Settings

        fixer = CodeAutoFixer(settings=Settings(AUTOFIX_DEFAULT_LANG="es", _env_file=None))

        result = _fix(fixer, validator, make_page(lang=""))

        assert '<html lang="es">' in result.fixed

    def test_lazy_loading_skips_hero(self, fixer, validator, make_page):
        """Hero images keep eager loading; others become lazy."""
        html = make_page(
            body='<h1>A</h1><img src="hero.jpg" alt="Hero"><img src="team.jpg" alt="Team">'
        )

        result = _fix(fixer, validator, html)

        assert '<img src="hero.jpg" alt="Hero">' in result.fixed
        assert '<img src="team.jpg" alt="Team" loading="lazy">' in result.fixed
        assert any("lazy" in entry for entry in result.applied_fixes)

    def test_lazy_loading_self_closing(self, fixer, validator, make_page):
        html = make_page(body='<h1>A</h1><img src="team.jpg" alt="Team" />')

        result = _fix(fixer, validator, html)

        assert '<img src="team.jpg" alt="Team" loading="lazy" />' in result.fixed

    def test_external_link_rel(self, fixer, validator, make_page):
        html = make_page(
            body='<h1>A</h1><a href="https://example.com">Example site</a><a href="/about">About us</a>'
        )

        result = _fix(fixer, validator, html)

        assert '<a href="https://example.com" rel="noopener noreferrer">' in result.fixed
        assert '<a href="/about">' in result.fixed
        assert any("rel" in entry for entry in result.applied_fixes)

    def test_untouched_markup_is_preserved(self, fixer, validator, valid_html):
        """A document with nothing to fix comes back byte-identical."""
        result = _fix(fixer, validator, valid_html)

        assert result.fixed == valid_html
        assert result.applied_fixes == []
        assert result.changed is False


# ---------------------------------------------------------------------------
# IDEMPOTENCE AND COUNTS
# ---------------------------------------------------------------------------

class TestAutoFixInvariants:
    """Tests for idempotence, the no-regression floor and issue counts."""

    @pytest.mark.parametrize(
        "fixture_name",
        ["minimal_html", "broken_html", "valid_html"],
    )
    def test_idempotent(self, request, fixer, validator, fixture_name):
        html = request.getfixturevalue(fixture_name)

        first = _fix(fixer, validator, html)
        second = _fix(fixer, validator, first.fixed)

        assert second.fixed == first.fixed
        assert second.applied_fixes == []

    def test_same_validation_twice(self, fixer, validator, minimal_html):
        """Re-applying the original validation to the output changes nothing."""
        validation = validator.validate(minimal_html)

        first = fixer.auto_fix(minimal_html, validation)
        second = fixer.auto_fix(first.fixed, validation)

        assert second.fixed == first.fixed
        assert second.applied_fixes == []

    @pytest.mark.parametrize("fixture_name", ["minimal_html", "broken_html"])
    def test_no_new_errors_for_fixed_rules(self, request, fixer, validator, fixture_name):
        html = request.getfixturevalue(fixture_name)
        before = validator.validate(html)

        after = validator.validate(fixer.auto_fix(html, before).fixed)

        for rule in FIXABLE_RULES:
            count_before = sum(1 for issue in before.issues if issue.rule == rule)
            count_after = sum(1 for issue in after.issues if issue.rule == rule)
            assert count_after <= count_before

    def test_remaining_issues_counts_non_catalog_rules(self, fixer, validator, minimal_html):
        validation = validator.validate(minimal_html)
        expected = sum(1 for issue in validation.issues if issue.rule not in FIXABLE_RULES)

        result = fixer.auto_fix(minimal_html, validation)

        assert result.remaining_issues == expected
        # title, h1 and meta description need generated content
        assert expected == 3

    def test_nothing_applied_without_matching_issues(self, fixer, validator, minimal_html, valid_html):
        """Transforms only run for rules present in the supplied validation."""
        clean_validation = validator.validate(valid_html)

        result = fixer.auto_fix(minimal_html, clean_validation)

        assert result.fixed == minimal_html
        assert result.remaining_issues == 0


# ---------------------------------------------------------------------------
# CONTRACT ERRORS
# ---------------------------------------------------------------------------

class TestAutoFixContract:
    """Tests for caller contract violations."""

    def test_non_string_source(self, fixer, validator, minimal_html):
        with pytest.raises(TypeError):
            fixer.auto_fix(None, validator.validate(minimal_html))

    def test_malformed_validation(self, fixer, minimal_html):
        with pytest.raises(ValidationError):
            fixer.auto_fix(minimal_html, {"errors": "nope", "passed": True})

    def test_validation_as_dict(self, fixer, validator, minimal_html):
        """A dict that validates as a ValidationResult is accepted."""
        validation = validator.validate(minimal_html).model_dump()

        result = fixer.auto_fix(minimal_html, validation)

        assert "<!DOCTYPE html>" in result.fixed

    def test_module_level_entry_point(self, minimal_html):
        from codegate import auto_fix_code, validate_all

        result = auto_fix_code(minimal_html, validate_all(minimal_html))

        assert result.fixed.startswith("<!DOCTYPE html>")
