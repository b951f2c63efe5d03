"""Constructor binder: one canonical binding statement per handler."""

from __future__ import annotations

import logging

from . import constants, shapes
from .locators import class_members
from .matcher import matches
from .transform_types import BindStyle
from .tree import (
    Node,
    assignment_expression,
    bind_expression,
    call_expression,
    expression_statement,
    identifier,
    member_expression,
    method_definition,
    super_expression,
    this_expression,
    this_member,
)

logger = logging.getLogger(__name__)


def create_binding(name: str, bind_style: BindStyle = BindStyle.OPERATOR) -> Node:
    """``this.<name> = ::this.<name>;`` (or ``.bind(this)`` for ``BindStyle.CALL``)."""
    if bind_style == BindStyle.CALL:
        bound = call_expression(
            member_expression(this_member(name), identifier(constants.BIND_METHOD_NAME)),
            [this_expression()],
        )
    else:
        bound = bind_expression(this_member(name))
    return expression_statement(assignment_expression(this_member(name), bound))


def create_constructor(param: str = constants.CONSTRUCTOR_PARAM) -> Node:
    """``constructor(<param>) { super(<param>); }``"""
    return method_definition(
        constants.CONSTRUCTOR_NAME,
        [identifier(param)],
        [expression_statement(call_expression(super_expression(), [identifier(param)]))],
        kind=constants.METHOD_KIND_CONSTRUCTOR,
    )


def find_constructor(class_node: Node) -> Node | None:
    for member in class_members(class_node):
        if matches(member, shapes.CONSTRUCTOR):
            return member
    return None


def ensure_constructor(
    class_node: Node, param: str = constants.CONSTRUCTOR_PARAM
) -> tuple[Node, bool]:
    """Return the constructor's statement block, creating the constructor if absent.

    A new constructor goes right before the first non-static method and the
    comments directly above it, or at the end of the class body when there
    is no such method.  The second element of the
    result tells whether a constructor was created.
    """
    constructor = find_constructor(class_node)
    if constructor is not None:
        return constructor["body"], False

    constructor = create_constructor(param)
    body = class_node["body"]
    first_method = next(
        (member for member in body["body"] if matches(member, shapes.INSTANCE_METHOD)),
        None,
    )
    if first_method is not None:
        index = body.index_of("body", first_method)
        # keep comments above the method attached to it
        while index > 0 and matches(body["body"][index - 1], shapes.COMMENT):
            index -= 1
        body.insert("body", index, constructor)
    else:
        body.append("body", constructor)
    logger.debug("Created constructor(%s)", param)
    return constructor["body"], True


def ensure_binding(
    block: Node, name: str, bind_style: BindStyle = BindStyle.OPERATOR
) -> Node:
    """Make *block* hold exactly one canonical ``this.<name> = ...`` statement.

    The first existing assignment to ``this.<name>`` is replaced in place and
    any later ones are dropped; without one, the binding is appended.
    Returns the binding statement now in the block.
    """
    replacement = create_binding(name, bind_style)
    existing = [stmt for stmt in block["body"] if matches(stmt, shapes.binding_statement(name))]
    if not existing:
        block.append("body", replacement)
        return replacement

    first, duplicates = existing[0], existing[1:]
    for duplicate in duplicates:
        block.remove("body", duplicate)
    if first.to_dict() == replacement.to_dict():
        return first
    block.replace("body", first, replacement)
    return replacement
