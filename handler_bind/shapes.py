"""Shape templates for the node patterns the handler-binding transform looks for."""

from __future__ import annotations

import re
from typing import Any

from . import constants
from .matcher import OneOf, Shape, matches, one_of, predicate, shape
from .tree import NodeKind

_EVENT_ATTRIBUTE_RE = re.compile(constants.EVENT_ATTRIBUTE_PATTERN)

# this
THIS = shape(NodeKind.THIS_EXPRESSION)

# this.<anything>
THIS_MEMBER = shape(
    NodeKind.MEMBER_EXPRESSION,
    object=THIS,
    property=shape(NodeKind.IDENTIFIER),
)

# this.<name>.bind(this)
BIND_CALL = shape(
    NodeKind.CALL_EXPRESSION,
    callee=shape(
        NodeKind.MEMBER_EXPRESSION,
        object=THIS_MEMBER,
        property=shape(NodeKind.IDENTIFIER, name=constants.BIND_METHOD_NAME),
    ),
    arguments=(THIS,),
)

# ::this.<name>
BIND_OPERATOR = shape(NodeKind.BIND_EXPRESSION, object=None, callee=THIS_MEMBER)


def _is_delegating_closure(value: Any) -> bool:
    """(a, b) => this.<name>(a, b)"""
    if not matches(value, shape(NodeKind.ARROW_FUNCTION)):
        return False
    params = value.get("params")
    if not isinstance(params, list):
        return False
    if not all(matches(param, shape(NodeKind.IDENTIFIER)) for param in params):
        return False
    forwarded = tuple(shape(NodeKind.IDENTIFIER, name=param["name"]) for param in params)
    return matches(
        value.get("body"),
        shape(NodeKind.CALL_EXPRESSION, callee=THIS_MEMBER, arguments=forwarded),
    )


DELEGATING_CLOSURE = predicate(_is_delegating_closure, "delegating closure")

HANDLER_VALUE = one_of(THIS_MEMBER, BIND_CALL, BIND_OPERATOR, DELEGATING_CLOSURE)

EVENT_NAME = predicate(
    lambda name: isinstance(name, str) and _EVENT_ATTRIBUTE_RE.match(name) is not None,
    "event attribute name",
)

EVENT_HANDLER_ATTRIBUTE = shape(
    NodeKind.JSX_ATTRIBUTE,
    name=shape(NodeKind.IDENTIFIER, name=EVENT_NAME),
    value=shape(NodeKind.JSX_EXPRESSION_CONTAINER, expression=HANDLER_VALUE),
)

CONSTRUCTOR = shape(
    NodeKind.METHOD_DEFINITION,
    kind=constants.METHOD_KIND_CONSTRUCTOR,
    static=False,
)

INSTANCE_METHOD = shape(NodeKind.METHOD_DEFINITION, static=False)

COMMENT = shape(NodeKind.OPAQUE, type=predicate(lambda t: t in constants.COMMENT_TYPES, "comment"))


def this_member_named(name: str) -> Shape:
    """this.<name> for one specific name."""
    return shape(
        NodeKind.MEMBER_EXPRESSION,
        object=THIS,
        property=shape(NodeKind.IDENTIFIER, name=name),
    )


def method_named(name: str) -> Shape:
    return shape(NodeKind.METHOD_DEFINITION, key=shape(NodeKind.IDENTIFIER, name=name))


def field_named(name: str) -> Shape:
    """Class field ``<name> = ...`` (left opaque by the front end)."""
    return shape(
        NodeKind.OPAQUE,
        type=constants.FIELD_DEFINITION_TYPE,
        children=predicate(
            lambda children: bool(children)
            and matches(children[0], shape(NodeKind.IDENTIFIER, name=name))
        ),
    )


def member_named(name: str) -> OneOf:
    return one_of(method_named(name), field_named(name))


def binding_statement(name: str) -> Shape:
    """Any ``this.<name> = ...;`` statement."""
    return shape(
        NodeKind.EXPRESSION_STATEMENT,
        expression=shape(NodeKind.ASSIGNMENT_EXPRESSION, left=this_member_named(name)),
    )


def component_superclass(base_component: str, namespace: str) -> OneOf:
    """``Component`` or ``React.Component``."""
    return one_of(
        shape(NodeKind.IDENTIFIER, name=base_component),
        shape(
            NodeKind.MEMBER_EXPRESSION,
            object=shape(NodeKind.IDENTIFIER, name=namespace),
            property=shape(NodeKind.IDENTIFIER, name=base_component),
        ),
    )


def component_class(base_component: str, namespace: str) -> OneOf:
    superclass = component_superclass(base_component, namespace)
    return one_of(
        shape(NodeKind.CLASS_DECLARATION, super_class=superclass),
        shape(NodeKind.CLASS_EXPRESSION, super_class=superclass),
    )
