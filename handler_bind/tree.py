"""Syntax tree nodes, builders and traversal."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator

from pydantic import BaseModel


class NodeKind(str, Enum):
    PROGRAM = "PROGRAM"
    # Classes
    CLASS_DECLARATION = "CLASS_DECLARATION"
    CLASS_EXPRESSION = "CLASS_EXPRESSION"
    CLASS_BODY = "CLASS_BODY"
    METHOD_DEFINITION = "METHOD_DEFINITION"
    # Statements
    BLOCK_STATEMENT = "BLOCK_STATEMENT"
    EXPRESSION_STATEMENT = "EXPRESSION_STATEMENT"
    RETURN_STATEMENT = "RETURN_STATEMENT"
    # Expressions
    ASSIGNMENT_EXPRESSION = "ASSIGNMENT_EXPRESSION"
    CALL_EXPRESSION = "CALL_EXPRESSION"
    MEMBER_EXPRESSION = "MEMBER_EXPRESSION"
    BIND_EXPRESSION = "BIND_EXPRESSION"
    ARROW_FUNCTION = "ARROW_FUNCTION"
    THIS_EXPRESSION = "THIS_EXPRESSION"
    SUPER = "SUPER"
    IDENTIFIER = "IDENTIFIER"
    # Markup
    JSX_ATTRIBUTE = "JSX_ATTRIBUTE"
    JSX_EXPRESSION_CONTAINER = "JSX_EXPRESSION_CONTAINER"
    # Anything the engine does not reason about
    OPAQUE = "OPAQUE"


class SourceSpan(BaseModel):
    """Byte range and 1-based line / 0-based column of a parsed node."""

    start_byte: int
    end_byte: int
    start_line: int
    start_col: int
    end_line: int
    end_col: int

    def __str__(self) -> str:
        return f"{self.start_line}:{self.start_col}-{self.end_line}:{self.end_col}"


@dataclass(eq=False)
class Node:
    """A tree node with a kind tag and ordered named fields.

    Field values are nodes, lists of nodes, or scalars (``str``/``bool``/``None``).
    Equality is identity: two structurally identical occurrences are distinct
    nodes.  Nodes lowered from source carry their ``span`` and an ``origin``
    snapshot of their fields; every mutation goes through the methods below so
    that ``modified`` tells the printer which nodes need re-printing.
    """

    kind: NodeKind
    fields: dict[str, Any] = field(default_factory=dict)
    span: SourceSpan | None = None
    origin: dict[str, Any] | None = field(default=None, repr=False)
    modified: bool = False

    # ── access ───────────────────────────────────────────────────

    def get(self, name: str, default: Any = None) -> Any:
        return self.fields.get(name, default)

    def __getitem__(self, name: str) -> Any:
        return self.fields[name]

    def children(self) -> Iterator[Node]:
        """Yield direct child nodes in field order."""
        for value in self.fields.values():
            if isinstance(value, Node):
                yield value
            elif isinstance(value, list):
                yield from (item for item in value if isinstance(item, Node))

    def index_of(self, name: str, child: Node) -> int:
        """Position of *child* (by identity) in list field *name*, or -1."""
        for i, item in enumerate(self.fields.get(name) or []):
            if item is child:
                return i
        return -1

    # ── mutation ─────────────────────────────────────────────────

    def set(self, name: str, value: Any) -> None:
        if name in self.fields and self.fields[name] is value:
            return
        self.fields[name] = value
        self.modified = True

    def insert(self, name: str, index: int, value: Node) -> None:
        self.fields[name].insert(index, value)
        self.modified = True

    def append(self, name: str, value: Node) -> None:
        self.fields[name].append(value)
        self.modified = True

    def replace(self, name: str, old: Node, new: Node) -> None:
        index = self.index_of(name, old)
        if index < 0:
            raise ValueError(f"{old.kind.value} is not an element of {self.kind.value}.{name}")
        self.fields[name][index] = new
        self.modified = True

    def remove(self, name: str, child: Node) -> None:
        index = self.index_of(name, child)
        if index < 0:
            raise ValueError(f"{child.kind.value} is not an element of {self.kind.value}.{name}")
        del self.fields[name][index]
        self.modified = True

    # ── provenance ───────────────────────────────────────────────

    def mark_original(self, span: SourceSpan) -> None:
        """Record *span* and snapshot the current fields as the source layout."""
        self.span = span
        self.origin = {
            name: list(value) if isinstance(value, list) else value
            for name, value in self.fields.items()
        }
        self.modified = False

    @property
    def is_original(self) -> bool:
        return self.origin is not None and self.span is not None

    def to_dict(self) -> dict[str, Any]:
        """Structural dump (no spans, no identity) for comparisons and debugging."""

        def _dump(value: Any) -> Any:
            if isinstance(value, Node):
                return value.to_dict()
            if isinstance(value, list):
                return [_dump(item) for item in value]
            return value

        return {"kind": self.kind.value, **{k: _dump(v) for k, v in self.fields.items()}}


def iter_nodes(root: Node) -> Iterator[Node]:
    """Pre-order traversal of *root* and all its descendants, in document order."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(list(node.children())))


# ── builders ─────────────────────────────────────────────────────


def program(body: list[Node]) -> Node:
    return Node(NodeKind.PROGRAM, {"body": body})


def class_declaration(name: str | None, super_class: Node | None, members: list[Node]) -> Node:
    return Node(
        NodeKind.CLASS_DECLARATION,
        {
            "id": identifier(name) if name else None,
            "super_class": super_class,
            "body": class_body(members),
        },
    )


def class_body(members: list[Node]) -> Node:
    return Node(NodeKind.CLASS_BODY, {"body": members})


def method_definition(
    name: str,
    params: list[Node],
    body: list[Node],
    kind: str = "method",
    static: bool = False,
) -> Node:
    return Node(
        NodeKind.METHOD_DEFINITION,
        {
            "key": identifier(name),
            "params": params,
            "body": block_statement(body),
            "kind": kind,
            "static": static,
        },
    )


def block_statement(body: list[Node]) -> Node:
    return Node(NodeKind.BLOCK_STATEMENT, {"body": body})


def expression_statement(expression: Node) -> Node:
    return Node(NodeKind.EXPRESSION_STATEMENT, {"expression": expression})


def return_statement(argument: Node | None) -> Node:
    return Node(NodeKind.RETURN_STATEMENT, {"argument": argument})


def assignment_expression(left: Node, right: Node, operator: str = "=") -> Node:
    return Node(
        NodeKind.ASSIGNMENT_EXPRESSION,
        {"left": left, "operator": operator, "right": right},
    )


def call_expression(callee: Node, arguments: list[Node]) -> Node:
    return Node(NodeKind.CALL_EXPRESSION, {"callee": callee, "arguments": arguments})


def member_expression(obj: Node, prop: Node) -> Node:
    return Node(NodeKind.MEMBER_EXPRESSION, {"object": obj, "property": prop})


def bind_expression(callee: Node, obj: Node | None = None) -> Node:
    return Node(NodeKind.BIND_EXPRESSION, {"object": obj, "callee": callee})


def arrow_function(params: list[Node], body: Node) -> Node:
    return Node(NodeKind.ARROW_FUNCTION, {"params": params, "body": body})


def this_expression() -> Node:
    return Node(NodeKind.THIS_EXPRESSION)


def super_expression() -> Node:
    return Node(NodeKind.SUPER)


def identifier(name: str) -> Node:
    return Node(NodeKind.IDENTIFIER, {"name": name})


def this_member(name: str) -> Node:
    """``this.<name>``"""
    return member_expression(this_expression(), identifier(name))


def jsx_attribute(name: str, value: Node | None) -> Node:
    return Node(NodeKind.JSX_ATTRIBUTE, {"name": identifier(name), "value": value})


def jsx_expression_container(expression: Node | None) -> Node:
    return Node(NodeKind.JSX_EXPRESSION_CONTAINER, {"expression": expression})


def opaque(node_type: str, children: list[Node] | None = None) -> Node:
    return Node(NodeKind.OPAQUE, {"type": node_type, "children": children or []})
