"""Structural matcher: compares tree nodes against declarative shape templates.

A template constraint is one of:

* a literal (``str``, ``bool``, ``None`` ...): the field must be equal to it;
* a :class:`Shape`: the field must be a node of that kind whose own
  constrained fields match recursively;
* a :class:`Predicate`: the field value is handed to a function;
* a :class:`OneOf`: at least one alternative must match (no alternatives
  matches anything);
* a ``tuple`` of constraints: the field must be a list of the same length
  whose items match elementwise.

Matching fails closed: missing fields, wrong kinds and arity mismatches
answer ``False``; nothing here raises for an ill-shaped tree.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Mapping

from .tree import Node, NodeKind, iter_nodes


class _Missing:
    def __repr__(self) -> str:
        return "<missing>"


MISSING = _Missing()


@dataclass(frozen=True)
class Shape:
    kind: NodeKind
    constraints: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))


@dataclass(frozen=True)
class OneOf:
    options: tuple[Any, ...] = ()


@dataclass(frozen=True)
class Predicate:
    test: Callable[[Any], bool]
    description: str = ""


def shape(kind: NodeKind, /, **constraints: Any) -> Shape:
    """Build an immutable :class:`Shape` from keyword field constraints."""
    return Shape(kind, MappingProxyType(dict(constraints)))


def one_of(*options: Any) -> OneOf:
    return OneOf(tuple(options))


def predicate(test: Callable[[Any], bool], description: str = "") -> Predicate:
    return Predicate(test, description)


def matches(value: Any, template: Any) -> bool:
    """Return True if *value* satisfies *template*."""
    if isinstance(template, Shape):
        return _matches_shape(value, template)
    if isinstance(template, OneOf):
        return not template.options or any(matches(value, option) for option in template.options)
    if isinstance(template, Predicate):
        return value is not MISSING and bool(template.test(value))
    if isinstance(template, tuple):
        return _matches_elementwise(value, template)
    if isinstance(value, Node) or value is MISSING:
        return False
    return value == template


def _matches_shape(value: Any, template: Shape) -> bool:
    if not isinstance(value, Node) or value.kind != template.kind:
        return False
    return all(
        matches(value.fields.get(name, MISSING), constraint)
        for name, constraint in template.constraints.items()
    )


def _matches_elementwise(value: Any, templates: tuple[Any, ...]) -> bool:
    if not isinstance(value, (list, tuple)) or len(value) != len(templates):
        return False
    return all(matches(item, template) for item, template in zip(value, templates))


def find(root: Node, template: Any) -> list[Node]:
    """All nodes in *root*'s subtree (itself included) matching *template*, in document order."""
    return [node for node in iter_nodes(root) if matches(node, template)]
