"""Tests for printing synthesized trees."""

from __future__ import annotations

import pytest

from handler_bind.binder import create_binding, create_constructor
from handler_bind.printer import detect_indent_unit, print_tree
from handler_bind.transform_types import BindStyle
from handler_bind.tree import (
    arrow_function,
    call_expression,
    class_declaration,
    identifier,
    jsx_attribute,
    jsx_expression_container,
    member_expression,
    method_definition,
    opaque,
    program,
    return_statement,
    this_member,
)


class TestFreshStatements:
    def test_operator_binding(self):
        assert print_tree(create_binding("handleClick")) == "this.handleClick = ::this.handleClick;"

    def test_call_binding(self):
        stmt = create_binding("handleClick", BindStyle.CALL)
        assert print_tree(stmt) == "this.handleClick = this.handleClick.bind(this);"

    def test_constructor(self):
        assert print_tree(create_constructor()) == "constructor(props) {\n    super(props);\n}"

    def test_return_without_argument(self):
        assert print_tree(return_statement(None)) == "return;"


class TestFreshExpressions:
    def test_arrow_function(self):
        closure = arrow_function([identifier("a"), identifier("b")], call_expression(this_member("go"), [identifier("a"), identifier("b")]))
        assert print_tree(closure) == "(a, b) => this.go(a, b)"

    def test_jsx_attribute(self):
        assert print_tree(jsx_attribute("onClick", jsx_expression_container(this_member("go")))) == "onClick={this.go}"

    def test_valueless_jsx_attribute(self):
        assert print_tree(jsx_attribute("disabled", None)) == "disabled"


class TestFreshDeclarations:
    def test_class_with_members(self):
        comp = class_declaration(
            "Button",
            member_expression(identifier("React"), identifier("Component")),
            [create_constructor(), method_definition("handleClick", [], [])],
        )
        expected = (
            "class Button extends React.Component {\n"
            "    constructor(props) {\n"
            "        super(props);\n"
            "    }\n"
            "\n"
            "    handleClick() {}\n"
            "}"
        )
        assert print_tree(comp) == expected

    def test_empty_anonymous_class(self):
        assert print_tree(class_declaration(None, None, [])) == "class {}"

    def test_static_and_accessor_methods(self):
        assert print_tree(method_definition("create", [], [], static=True)) == "static create() {}"
        assert print_tree(method_definition("label", [], [], kind="get")) == "get label() {}"

    def test_program_joins_statements(self):
        root = program([create_binding("a"), create_binding("b")])
        assert print_tree(root) == "this.a = ::this.a;\nthis.b = ::this.b;"


class TestUnprintable:
    def test_synthesized_opaque_node(self):
        with pytest.raises(ValueError, match="OPAQUE"):
            print_tree(opaque("jsx_element", []))


class TestDetectIndentUnit:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("class A {\n  render() {}\n}", "  "),
            ("class A {\n\trender() {}\n}", "\t"),
            ("const a = 1;\n", "    "),
            ("", "    "),
        ],
    )
    def test_first_indented_line(self, text, expected):
        assert detect_indent_unit(text) == expected
