"""Tests for the Jinja2 template engine wrapper."""

import pytest

from openapi_wit.codegen.core.templates import TemplateError, create_template_engine
from openapi_wit.codegen.wit.naming import create_wit_sanitizer


@pytest.fixture
def engine():
    return create_template_engine(sanitizer=create_wit_sanitizer())


class TestFilters:
    @pytest.mark.parametrize(
        ("template", "value", "expected"),
        [
            ("{{ v | kebab_case }}", "listPets", "list-pets"),
            ("{{ v | pascal_case }}", "list_pets", "ListPets"),
            ("{{ v | type_name }}", "pet-store", "PetStore"),
            ("{{ v | type_name }}", "record", "record_type"),
            ("{{ v | sanitize }}", "Pet Store!", "pet-store"),
        ],
    )
    def test_naming_filters(self, engine, template, value, expected):
        assert engine.render_string(template, {"v": value}) == expected

    def test_indent_skips_first_line(self, engine):
        result = engine.render_string("{{ v | indent(2) }}", {"v": "a\nb\n\nc"})
        assert result == "a\n  b\n\n  c"

    def test_indent_first_line(self, engine):
        assert engine.render_string("{{ v | indent(2, true) }}", {"v": "a\nb"}) == "  a\n  b"

    def test_comment(self, engine):
        result = engine.render_string("{{ v | comment }}", {"v": "one\n\ntwo"})
        assert result == "/// one\n///\n/// two"

    def test_comment_style(self, engine):
        assert engine.render_string('{{ v | comment("//") }}', {"v": "x"}) == "// x"


class TestTemplates:
    def test_in_memory_template(self, engine):
        engine.add_template("greeting.j2", "hello {{ name }}")
        assert engine.template_exists("greeting.j2")
        assert engine.render_template("greeting.j2", {"name": "wit"}) == "hello wit"

    def test_missing_template(self, engine):
        assert not engine.template_exists("missing.j2")
        with pytest.raises(TemplateError):
            engine.render_template("missing.j2", {})

    def test_undefined_variables_fail(self, engine):
        with pytest.raises(TemplateError, match="undefined"):
            engine.render_string("{{ nope }}", {})

    def test_syntax_errors_fail(self, engine):
        with pytest.raises(TemplateError):
            engine.render_string("{% for %}", {})
