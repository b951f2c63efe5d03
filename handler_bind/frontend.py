"""JavaScriptFrontend — tree-sitter JavaScript/JSX AST → handler-binding syntax tree."""

from __future__ import annotations

import logging
from typing import Callable

from . import constants
from .tree import Node, NodeKind, SourceSpan

logger = logging.getLogger(__name__)


class JavaScriptFrontend:
    """Lowers a JavaScript tree-sitter AST into :class:`~handler_bind.tree.Node` trees.

    Node types the transform reasons about get typed nodes through
    ``_DISPATCH``; everything else becomes an ``OPAQUE`` node that keeps the
    tree-sitter type and its lowered named children, so descendants remain
    searchable and the printer can copy the original text back verbatim.
    """

    COMMENT_TYPES: frozenset[str] = constants.COMMENT_TYPES

    def __init__(self):
        self._source: bytes = b""
        self._DISPATCH: dict[str, Callable] = {
            "program": self._lower_program,
            "class_declaration": self._lower_class,
            "class": self._lower_class,
            "class_body": self._lower_class_body,
            "method_definition": self._lower_method,
            "statement_block": self._lower_block,
            "expression_statement": self._lower_expression_statement,
            "return_statement": self._lower_return,
            "assignment_expression": self._lower_assignment,
            "call_expression": self._lower_call,
            "member_expression": self._lower_member,
            "arrow_function": self._lower_arrow_function,
            "this": lambda _: Node(NodeKind.THIS_EXPRESSION),
            "super": lambda _: Node(NodeKind.SUPER),
            "identifier": self._lower_identifier,
            "property_identifier": self._lower_identifier,
            "jsx_attribute": self._lower_jsx_attribute,
            "jsx_expression": self._lower_jsx_expression,
        }

    # ── entry point ──────────────────────────────────────────────

    def lower(self, tree, source: bytes) -> Node:
        logger.debug("Lowering %d bytes of JavaScript", len(source))
        self._source = source
        return self._lower(tree.root_node)

    def _lower(self, ts_node) -> Node:
        handler = self._DISPATCH.get(ts_node.type, self._lower_opaque)
        node = handler(ts_node)
        node.mark_original(self._source_span(ts_node))
        return node

    # ── helpers ──────────────────────────────────────────────────

    def _node_text(self, ts_node) -> str:
        return self._source[ts_node.start_byte : ts_node.end_byte].decode("utf-8")

    def _source_span(self, ts_node) -> SourceSpan:
        s, e = ts_node.start_point, ts_node.end_point
        return SourceSpan(
            start_byte=ts_node.start_byte,
            end_byte=ts_node.end_byte,
            start_line=s[0] + 1,
            start_col=s[1],
            end_line=e[0] + 1,
            end_col=e[1],
        )

    def _named(self, ts_node) -> list:
        """Named children, comments excluded."""
        return [c for c in ts_node.named_children if c.type not in self.COMMENT_TYPES]

    def _first_named(self, ts_node):
        named = self._named(ts_node)
        return named[0] if named else None

    def _lower_optional(self, ts_node) -> Node | None:
        return self._lower(ts_node) if ts_node is not None else None

    def _lower_all(self, ts_node) -> list[Node]:
        return [self._lower(c) for c in ts_node.named_children]

    # ── lowerers ─────────────────────────────────────────────────

    def _lower_opaque(self, ts_node) -> Node:
        return Node(
            NodeKind.OPAQUE,
            {"type": ts_node.type, "children": self._lower_all(ts_node)},
        )

    def _lower_program(self, ts_node) -> Node:
        return Node(NodeKind.PROGRAM, {"body": self._lower_all(ts_node)})

    def _lower_identifier(self, ts_node) -> Node:
        return Node(NodeKind.IDENTIFIER, {"name": self._node_text(ts_node)})

    def _lower_class(self, ts_node) -> Node:
        name_node = ts_node.child_by_field_name("name")
        body_node = ts_node.child_by_field_name("body")
        if body_node is None:
            return self._lower_opaque(ts_node)
        heritage = next(
            (c for c in ts_node.named_children if c.type == "class_heritage"), None
        )
        super_node = self._first_named(heritage) if heritage is not None else None
        kind = (
            NodeKind.CLASS_DECLARATION
            if ts_node.type == "class_declaration"
            else NodeKind.CLASS_EXPRESSION
        )
        return Node(
            kind,
            {
                "id": self._lower_optional(name_node),
                "super_class": self._lower_optional(super_node),
                "body": self._lower(body_node),
            },
        )

    def _lower_class_body(self, ts_node) -> Node:
        return Node(NodeKind.CLASS_BODY, {"body": self._lower_all(ts_node)})

    def _lower_method(self, ts_node) -> Node:
        name_node = ts_node.child_by_field_name("name")
        params_node = ts_node.child_by_field_name("parameters")
        body_node = ts_node.child_by_field_name("body")
        if name_node is None or params_node is None or body_node is None:
            return self._lower_opaque(ts_node)

        tokens = {c.type for c in ts_node.children if not c.is_named}
        static = "static" in tokens
        key = self._lower(name_node)
        if (
            not static
            and key.kind == NodeKind.IDENTIFIER
            and key["name"] == constants.CONSTRUCTOR_NAME
        ):
            kind = constants.METHOD_KIND_CONSTRUCTOR
        elif constants.METHOD_KIND_GET in tokens:
            kind = constants.METHOD_KIND_GET
        elif constants.METHOD_KIND_SET in tokens:
            kind = constants.METHOD_KIND_SET
        else:
            kind = constants.METHOD_KIND_METHOD

        return Node(
            NodeKind.METHOD_DEFINITION,
            {
                "key": key,
                "params": [self._lower(p) for p in self._named(params_node)],
                "body": self._lower(body_node),
                "kind": kind,
                "static": static,
            },
        )

    def _lower_block(self, ts_node) -> Node:
        return Node(NodeKind.BLOCK_STATEMENT, {"body": self._lower_all(ts_node)})

    def _lower_expression_statement(self, ts_node) -> Node:
        expr = self._first_named(ts_node)
        if expr is None:
            return self._lower_opaque(ts_node)
        return Node(NodeKind.EXPRESSION_STATEMENT, {"expression": self._lower(expr)})

    def _lower_return(self, ts_node) -> Node:
        return Node(
            NodeKind.RETURN_STATEMENT,
            {"argument": self._lower_optional(self._first_named(ts_node))},
        )

    def _lower_assignment(self, ts_node) -> Node:
        left = ts_node.child_by_field_name("left")
        right = ts_node.child_by_field_name("right")
        if left is None or right is None:
            return self._lower_opaque(ts_node)
        return Node(
            NodeKind.ASSIGNMENT_EXPRESSION,
            {"left": self._lower(left), "operator": "=", "right": self._lower(right)},
        )

    def _lower_call(self, ts_node) -> Node:
        func_node = ts_node.child_by_field_name("function")
        args_node = ts_node.child_by_field_name("arguments")
        # tagged templates carry a template_string instead of arguments
        if func_node is None or args_node is None or args_node.type != "arguments":
            return self._lower_opaque(ts_node)
        return Node(
            NodeKind.CALL_EXPRESSION,
            {
                "callee": self._lower(func_node),
                "arguments": [self._lower(a) for a in self._named(args_node)],
            },
        )

    def _lower_member(self, ts_node) -> Node:
        obj_node = ts_node.child_by_field_name("object")
        prop_node = ts_node.child_by_field_name("property")
        if obj_node is None or prop_node is None:
            return self._lower_opaque(ts_node)
        return Node(
            NodeKind.MEMBER_EXPRESSION,
            {"object": self._lower(obj_node), "property": self._lower(prop_node)},
        )

    def _lower_arrow_function(self, ts_node) -> Node:
        body_node = ts_node.child_by_field_name("body")
        single = ts_node.child_by_field_name("parameter")
        params_node = ts_node.child_by_field_name("parameters")
        if body_node is None:
            return self._lower_opaque(ts_node)
        if single is not None:
            params = [self._lower(single)]
        elif params_node is not None:
            params = [self._lower(p) for p in self._named(params_node)]
        else:
            params = []
        return Node(NodeKind.ARROW_FUNCTION, {"params": params, "body": self._lower(body_node)})

    def _lower_jsx_attribute(self, ts_node) -> Node:
        named = self._named(ts_node)
        if not named:
            return self._lower_opaque(ts_node)
        return Node(
            NodeKind.JSX_ATTRIBUTE,
            {
                "name": self._lower(named[0]),
                "value": self._lower(named[1]) if len(named) > 1 else None,
            },
        )

    def _lower_jsx_expression(self, ts_node) -> Node:
        return Node(
            NodeKind.JSX_EXPRESSION_CONTAINER,
            {"expression": self._lower_optional(self._first_named(ts_node))},
        )
