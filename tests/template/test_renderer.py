"""Tests for TemplateRenderer semantics."""

import pytest

from mgen.template import (
    MISSING,
    MissingVariableError,
    RenderContext,
    TemplateRenderer,
    parse_template,
    render_template,
)
from mgen.template.renderer import display_value, is_falsy


def _render(text, data, **kwargs):
    return render_template(text, data, **kwargs)


class TestVariables:

    def test_plain_substitution(self):
        assert _render("Hello {{name}}!", {"name": "Alice"}) == "Hello Alice!"

    def test_unknown_variable_renders_empty(self):
        assert _render("[{{unknown}}]", {}) == "[]"

    def test_null_renders_empty(self):
        assert _render("[{{x}}]", {"x": None}) == "[]"

    def test_html_escaping_by_default(self):
        data = {"x": "<a href=\"q\">&'"}
        assert _render("{{x}}", data) == "&lt;a href=&quot;q&quot;&gt;&amp;&#x27;"

    def test_raw_forms_skip_escaping(self):
        data = {"x": "<b>"}
        assert _render("{{{x}}}|{{&x}}", data) == "<b>|<b>"

    def test_escape_none(self):
        assert _render("{{x}}", {"x": "a < b"}, escape="none") == "a < b"

    def test_unknown_escape_mode(self):
        with pytest.raises(ValueError):
            TemplateRenderer(escape="latex")

    def test_scalars_display_as_json(self):
        data = {"b": True, "n": 3, "f": 1.5, "z": 0}
        assert _render("{{b}} {{n}} {{f}} {{z}}", data) == "true 3 1.5 0"

    def test_composites_display_as_json(self):
        data = {"l": [1, "x"], "m": {"k": "é"}}
        assert _render("{{{l}}} {{{m}}}", data) == '[1, "x"] {"k": "é"}'

    def test_dotted_name(self):
        assert _render("{{a.b.c}}", {"a": {"b": {"c": "deep"}}}) == "deep"

    def test_strict_mode_raises(self):
        with pytest.raises(MissingVariableError) as exc:
            _render("ok\n  {{nope}}", {}, strict=True, template_name="t.mustache")
        err = exc.value
        assert err.name == "nope"
        assert (err.line, err.column) == (2, 3)
        assert str(err).startswith("t.mustache:2:3:")

    def test_strict_mode_allows_null(self):
        assert _render("[{{x}}]", {"x": None}, strict=True) == "[]"

    def test_strict_mode_ignores_sections(self):
        assert _render("{{#nope}}x{{/nope}}{{^nope}}y{{/nope}}", {}, strict=True) == "y"


class TestSections:

    def test_list_iteration(self):
        text = "{{#friends}}\nHello {{.}}!\n{{/friends}}\n"
        data = {"friends": ["Rachel", "Monica", "Phoebe"]}
        assert _render(text, data) == "Hello Rachel!\nHello Monica!\nHello Phoebe!\n"

    def test_list_of_maps(self):
        text = "{{#people}}{{name}}={{age}};{{/people}}"
        data = {"people": [{"name": "a", "age": 1}, {"name": "b", "age": 2}]}
        assert _render(text, data) == "a=1;b=2;"

    def test_outer_names_visible_inside_section(self):
        text = "{{#items}}{{prefix}}{{.}} {{/items}}"
        data = {"prefix": "#", "items": ["a", "b"]}
        assert _render(text, data) == "#a #b "

    def test_inner_scope_shadows_outer(self):
        text = "{{#child}}{{name}}{{/child}}/{{name}}"
        data = {"name": "parent", "child": {"name": "kid"}}
        assert _render(text, data) == "kid/parent"

    def test_map_section_renders_once(self):
        assert _render("{{#m}}[{{k}}]{{/m}}", {"m": {"k": "v"}}) == "[v]"

    def test_truthy_scalar_renders_once_without_push(self):
        text = "{{#flag}}{{.}}|{{flag}}{{/flag}}"
        data = {"flag": "yes"}
        # "." still refers to the root map
        assert _render(text, data, escape="none") == '{"flag": "yes"}|yes'

    @pytest.mark.parametrize("value", [None, False, []])
    def test_falsy_values_skip_section(self, value):
        assert _render("{{#v}}x{{/v}}", {"v": value}) == ""

    @pytest.mark.parametrize("value", [None, False, []])
    def test_falsy_values_render_negated(self, value):
        assert _render("{{^v}}x{{/v}}", {"v": value}) == "x"

    @pytest.mark.parametrize("value", [0, 0.0, "", {}])
    def test_zero_empty_string_and_empty_map_are_present(self, value):
        assert _render("{{^v}}x{{/v}}", {"v": value}) == ""
        assert _render("{{#v}}x{{/v}}", {"v": value}) == "x"

    def test_empty_map_section_pushes_scope(self):
        assert _render("{{#m}}[{{name}}]{{/m}}", {"m": {}, "name": "outer"}) == "[outer]"

    def test_missing_name_renders_negated(self):
        assert _render("{{^friends}}No friends.{{/friends}}", {}) == "No friends."

    def test_negated_is_complement(self):
        text = "{{#v}}A{{/v}}{{^v}}B{{/v}}"
        for value in (None, True, False, 1, 0, "s", "", [1], [], {"k": 1}, {}):
            assert _render(text, {"v": value}) in ("A", "B")
            assert _render(text, {"v": value}) == ("B" if is_falsy(value) else "A")

    def test_nested_sections(self):
        text = "{{#groups}}{{name}}:{{#members}}{{.}},{{/members}}{{^members}}-{{/members}};{{/groups}}"
        data = {"groups": [{"name": "g1", "members": ["a", "b"]}, {"name": "g2", "members": []}]}
        assert _render(text, data) == "g1:a,b,;g2:-;"

    def test_scope_stack_restored_after_section(self):
        ctx = RenderContext({"items": [{"x": 1}], "x": 0})
        renderer = TemplateRenderer()
        ast = parse_template("{{#items}}{{x}}{{/items}}{{x}}")
        assert renderer.render(ast, ctx) == "10"
        assert len(ctx.scopes) == 1


class TestDeterminism:

    def test_same_inputs_same_output(self):
        ast = parse_template("{{#a}}{{b}}{{/a}}{{c}}")
        data = {"a": [{"b": 1}, {"b": 2}], "c": "<x>"}
        renderer = TemplateRenderer()
        first = renderer.render(ast, RenderContext(data))
        second = renderer.render(ast, RenderContext(data))
        assert first == second == "12&lt;x&gt;"

    def test_data_is_not_mutated(self):
        data = {"items": ["a"], "m": {"k": 1}}
        _render("{{#items}}{{.}}{{/items}}{{#m}}{{k}}{{/m}}", data)
        assert data == {"items": ["a"], "m": {"k": 1}}


class TestHelpers:

    def test_display_value(self):
        assert display_value(MISSING) == ""
        assert display_value(None) == ""
        assert display_value("x") == "x"
        assert display_value(False) == "false"

    def test_is_falsy(self):
        assert is_falsy(MISSING)
        assert not is_falsy(0.0)
        assert not is_falsy({})
        assert not is_falsy("0")
        assert not is_falsy([0])
