"""Tests for RenderContext lookup rules."""

from mgen.template.context import MISSING, RenderContext


class TestRenderContext:

    def test_simple_lookup(self):
        ctx = RenderContext({"name": "Alice"})
        assert ctx.lookup("name") == "Alice"

    def test_missing_is_distinct_from_null(self):
        ctx = RenderContext({"present": None})
        assert ctx.lookup("present") is None
        assert ctx.lookup("absent") is MISSING
        assert not MISSING

    def test_innermost_scope_wins(self):
        ctx = RenderContext({"x": "outer", "y": "outer-y"}, {"x": "inner"})
        assert ctx.lookup("x") == "inner"
        # falls through to the outer scope
        assert ctx.lookup("y") == "outer-y"

    def test_scalar_scopes_are_skipped(self):
        ctx = RenderContext({"x": 1}, "just a string")
        assert ctx.lookup("x") == 1

    def test_implicit_iterator(self):
        ctx = RenderContext({"a": 1}, "item")
        assert ctx.lookup(".") == "item"

    def test_dotted_names(self):
        ctx = RenderContext({"person": {"name": {"first": "Ada"}}})
        assert ctx.lookup("person.name.first") == "Ada"
        assert ctx.lookup("person.age") is MISSING
        assert ctx.lookup("person.name.first.x") is MISSING

    def test_dotted_name_does_not_walk_back(self):
        # "a" resolves in the inner scope, "a.b" is not searched in the outer one
        ctx = RenderContext({"a": {"b": "outer"}}, {"a": {}})
        assert ctx.lookup("a.b") is MISSING

    def test_list_index_segment(self):
        ctx = RenderContext({"items": ["x", "y"]})
        assert ctx.lookup("items.1") == "y"
        assert ctx.lookup("items.5") is MISSING

    def test_scope_context_manager_restores(self):
        ctx = RenderContext({"a": 1})
        with ctx.scope({"a": 2}):
            assert ctx.lookup("a") == 2
        assert ctx.lookup("a") == 1
        assert len(ctx.scopes) == 1

    def test_empty_stack(self):
        ctx = RenderContext()
        assert ctx.lookup("x") is MISSING
        assert ctx.lookup(".") is MISSING
