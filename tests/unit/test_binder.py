"""Tests for constructor and binding-statement maintenance."""

from __future__ import annotations

from handler_bind.binder import (
    create_binding,
    create_constructor,
    ensure_binding,
    ensure_constructor,
    find_constructor,
)
from handler_bind.transform_types import BindStyle
from handler_bind.tree import (
    NodeKind,
    assignment_expression,
    block_statement,
    call_expression,
    class_declaration,
    expression_statement,
    identifier,
    member_expression,
    method_definition,
    opaque,
    super_expression,
    this_expression,
    this_member,
)


def _component(*members):
    return class_declaration("Button", identifier("Component"), list(members))


def _members(class_node):
    return class_node["body"]["body"]


def _super_call():
    return expression_statement(call_expression(super_expression(), [identifier("props")]))


def _call_binding(name):
    bound = call_expression(member_expression(this_member(name), identifier("bind")), [this_expression()])
    return expression_statement(assignment_expression(this_member(name), bound))


class TestCreateBinding:
    def test_operator_style(self):
        stmt = create_binding("handleClick")
        assignment = stmt["expression"]
        assert stmt.kind == NodeKind.EXPRESSION_STATEMENT
        assert assignment["operator"] == "="
        assert assignment["left"].to_dict() == this_member("handleClick").to_dict()
        assert assignment["right"].kind == NodeKind.BIND_EXPRESSION
        assert assignment["right"]["object"] is None
        assert assignment["right"]["callee"].to_dict() == this_member("handleClick").to_dict()

    def test_call_style(self):
        stmt = create_binding("handleClick", BindStyle.CALL)
        assert stmt.to_dict() == _call_binding("handleClick").to_dict()

    def test_fresh_nodes_each_time(self):
        assert create_binding("a") is not create_binding("a")


class TestEnsureConstructor:
    def test_created_before_first_instance_method(self):
        static = method_definition("defaultProps", [], [], static=True)
        render = method_definition("render", [], [])
        comp = _component(static, render)

        block, created = ensure_constructor(comp)

        assert created
        members = _members(comp)
        assert members[0] is static
        assert members[2] is render
        ctor = members[1]
        assert ctor["kind"] == "constructor"
        assert ctor["body"] is block
        assert ctor.to_dict() == create_constructor().to_dict()
        assert comp["body"].modified

    def test_created_above_comments_of_first_method(self):
        static = method_definition("create", [], [], static=True)
        note = opaque("comment", [])
        render = method_definition("render", [], [])
        comp = _component(static, note, render)

        ensure_constructor(comp)

        members = _members(comp)
        assert members[0] is static
        assert members[1]["kind"] == "constructor"
        assert members[2:] == [note, render]

    def test_appended_when_no_instance_method(self):
        static = method_definition("create", [], [], static=True)
        comp = _component(static)
        ensure_constructor(comp)
        assert _members(comp)[0] is static
        assert _members(comp)[1]["kind"] == "constructor"

    def test_appended_to_empty_class(self):
        comp = _component()
        block, created = ensure_constructor(comp)
        assert created
        assert _members(comp)[0]["body"] is block

    def test_existing_constructor_is_reused(self):
        ctor = method_definition("constructor", [identifier("props")], [_super_call()], kind="constructor")
        comp = _component(method_definition("render", [], []), ctor)

        block, created = ensure_constructor(comp)

        assert not created
        assert block is ctor["body"]
        assert len(_members(comp)) == 2
        assert not comp["body"].modified

    def test_custom_parameter(self):
        comp = _component()
        ensure_constructor(comp, "p")
        ctor = find_constructor(comp)
        assert ctor["params"][0]["name"] == "p"
        assert ctor["body"]["body"][0]["expression"]["arguments"][0]["name"] == "p"

    def test_static_constructor_named_method_is_not_a_constructor(self):
        assert find_constructor(_component(method_definition("constructor", [], [], static=True))) is None


class TestEnsureBinding:
    def test_appended_after_existing_statements(self):
        block = block_statement([_super_call()])
        stmt = ensure_binding(block, "handleClick")
        assert block["body"][-1] is stmt
        assert len(block["body"]) == 2

    def test_stale_binding_replaced_in_place(self):
        stale = _call_binding("handleClick")
        other = expression_statement(assignment_expression(this_member("state"), identifier("initial")))
        block = block_statement([_super_call(), stale, other])

        stmt = ensure_binding(block, "handleClick")

        assert block["body"][1] is stmt
        assert block["body"][2] is other
        assert stmt.to_dict() == create_binding("handleClick").to_dict()

    def test_duplicates_are_removed(self):
        block = block_statement(
            [
                _super_call(),
                _call_binding("handleClick"),
                create_binding("handleClick"),
                _call_binding("handleClick"),
            ]
        )
        ensure_binding(block, "handleClick")
        assert len(block["body"]) == 2
        assert block["body"][1].to_dict() == create_binding("handleClick").to_dict()

    def test_canonical_binding_is_kept_untouched(self):
        existing = create_binding("handleClick")
        block = block_statement([_super_call(), existing])

        assert ensure_binding(block, "handleClick") is existing
        assert not block.modified

    def test_other_names_are_left_alone(self):
        unrelated = _call_binding("handleSubmit")
        block = block_statement([unrelated])
        ensure_binding(block, "handleClick")
        assert block["body"][0] is unrelated
        assert len(block["body"]) == 2

    def test_nested_assignments_are_not_bindings(self):
        nested = expression_statement(
            call_expression(identifier("setup"), [assignment_expression(this_member("handleClick"), identifier("x"))])
        )
        block = block_statement([nested])
        ensure_binding(block, "handleClick")
        assert block["body"][0] is nested
        assert len(block["body"]) == 2

    def test_repeated_calls_are_stable(self):
        block = block_statement([_super_call()])
        first = ensure_binding(block, "handleClick", BindStyle.CALL)
        second = ensure_binding(block, "handleClick", BindStyle.CALL)
        assert first is second
        assert len(block["body"]) == 2
