"""Tests for the TemplateProcessor facade."""

import pytest

from mgen.template import TemplateProcessor, TemplateSyntaxError, render_template


class TestTemplateProcessor:

    def test_process_template_text(self):
        processor = TemplateProcessor()
        out = processor.process_template_text("Hi {{who}}", {"who": "there"})
        assert out == "Hi there"

    def test_parse_is_cached(self):
        processor = TemplateProcessor()
        first = processor.parse("{{a}}", "x.mustache")
        second = processor.parse("{{a}}", "x.mustache")
        assert first is second

    def test_cache_keyed_by_text(self):
        processor = TemplateProcessor()
        first = processor.parse("{{a}}", "x.mustache")
        second = processor.parse("{{b}}", "x.mustache")
        assert first is not second

    def test_identical_text_shares_ast_across_names(self):
        processor = TemplateProcessor()
        assert processor.parse("{{a}}", "x.mustache") is processor.parse("{{a}}", "y.mustache")

    def test_ast_reused_with_different_data(self):
        processor = TemplateProcessor()
        ast = processor.parse("{{n}}")
        assert processor.render(ast, {"n": 1}) == "1"
        assert processor.render(ast, {"n": 2}) == "2"

    def test_outer_scopes_are_shadowed_by_data(self):
        processor = TemplateProcessor()
        builtins = {"TemplateFile": "a.mustache", "Other": "o"}
        out = processor.process_template_text(
            "{{TemplateFile}} {{Other}}",
            {"TemplateFile": "mine"},
            outer_scopes=[builtins],
        )
        assert out == "mine o"

    def test_outer_scopes_visible_when_not_shadowed(self):
        out = render_template("{{TemplateFile}}", {}, outer_scopes=[{"TemplateFile": "a.mustache"}])
        assert out == "a.mustache"

    def test_syntax_error_carries_template_name(self):
        processor = TemplateProcessor()
        with pytest.raises(TemplateSyntaxError) as exc:
            processor.process_template_text("{{#a}}", {}, template_name="bad.mustache")
        assert str(exc.value).startswith("bad.mustache:1:1:")

    def test_options_flow_to_renderer(self):
        processor = TemplateProcessor(escape="none", strict=False)
        assert processor.process_template_text("{{x}}", {"x": "<"}) == "<"

    def test_root_data_may_be_a_list(self):
        assert render_template("{{#.}}{{.}}{{/.}}", ["a", "b"]) == "ab"
