"""Tests for handler name canonicalization and renaming."""

from __future__ import annotations

import pytest

from handler_bind.naming import canonical_name, normalize_handler_name
from handler_bind.tree import (
    arrow_function,
    assignment_expression,
    call_expression,
    class_declaration,
    expression_statement,
    identifier,
    member_expression,
    method_definition,
    opaque,
    this_member,
)


@pytest.mark.parametrize(
    "name, expected",
    [
        ("onClick", "handleClick"),
        ("_onClick", "handleClick"),
        ("handleClick", "handleClick"),
        ("_handleSubmit", "handleSubmit"),
        ("onion", "handleion"),
        ("click", "click"),
        ("toggle", "toggle"),
        ("on", "on"),
        ("handle", "handle"),
        ("__onClick", "__onClick"),
    ],
)
def test_canonical_name(name, expected):
    assert canonical_name(name) == expected


def _class_with_references():
    handler = method_definition("onClick", [identifier("e")], [])
    other = method_definition(
        "componentDidMount",
        [],
        [expression_statement(call_expression(member_expression(identifier("window"), identifier("on")), [this_member("onClick")]))],
    )
    ctor = method_definition(
        "constructor",
        [identifier("props")],
        [expression_statement(assignment_expression(this_member("onClick"), this_member("onClick")))],
        kind="constructor",
    )
    return class_declaration("Button", identifier("Component"), [ctor, handler, other])


class TestNormalizeHandlerName:
    def test_renames_method_and_all_this_references(self):
        comp = _class_with_references()
        ctor, handler, other = comp["body"]["body"]

        assert normalize_handler_name(comp, "onClick") == "handleClick"

        assert handler["key"]["name"] == "handleClick"
        assignment = ctor["body"]["body"][0]["expression"]
        assert assignment["left"]["property"]["name"] == "handleClick"
        assert assignment["right"]["property"]["name"] == "handleClick"
        call = other["body"]["body"][0]["expression"]
        assert call["arguments"][0]["property"]["name"] == "handleClick"

    def test_does_not_rename_non_this_members(self):
        props_read = member_expression(this_member("props"), identifier("onClick"))
        comp = class_declaration(
            "Button",
            identifier("Component"),
            [method_definition("render", [], [expression_statement(props_read)])],
        )
        normalize_handler_name(comp, "onClick")
        assert props_read["property"]["name"] == "onClick"

    def test_unprefixed_name_is_left_alone(self):
        comp = class_declaration("Button", identifier("Component"), [method_definition("toggle", [], [])])
        before = comp.to_dict()
        assert normalize_handler_name(comp, "toggle") == "toggle"
        assert comp.to_dict() == before
        assert not comp["body"]["body"][0]["key"].modified

    def test_canonical_name_performs_no_mutation(self):
        comp = class_declaration("Button", identifier("Component"), [method_definition("handleClick", [], [])])
        assert normalize_handler_name(comp, "handleClick") == "handleClick"
        assert not comp["body"]["body"][0]["key"].modified


class TestNameCollisions:
    def test_existing_canonical_method_blocks_the_rename(self):
        raw_ref = this_member("onClick")
        comp = class_declaration(
            "Button",
            identifier("Component"),
            [
                method_definition("onClick", [], []),
                method_definition("handleClick", [], [expression_statement(raw_ref)]),
            ],
        )

        assert normalize_handler_name(comp, "onClick") == "onClick"

        assert [m["key"]["name"] for m in comp["body"]["body"]] == ["onClick", "handleClick"]
        assert raw_ref["property"]["name"] == "onClick"
        assert not raw_ref["property"].modified

    def test_existing_canonical_field_blocks_the_rename(self):
        field = opaque("field_definition", [identifier("handleClick"), arrow_function([], identifier("x"))])
        comp = class_declaration("Button", identifier("Component"), [field, method_definition("onClick", [], [])])
        assert normalize_handler_name(comp, "onClick") == "onClick"
        assert comp["body"]["body"][1]["key"]["name"] == "onClick"

    def test_field_handler_is_renamed_with_its_references(self):
        field = opaque("field_definition", [identifier("onClick"), arrow_function([], identifier("x"))])
        ref = this_member("onClick")
        comp = class_declaration(
            "Button",
            identifier("Component"),
            [field, method_definition("render", [], [expression_statement(ref)])],
        )

        assert normalize_handler_name(comp, "onClick") == "handleClick"

        assert field["children"][0]["name"] == "handleClick"
        assert ref["property"]["name"] == "handleClick"
