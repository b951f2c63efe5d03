"""Component and handler locators."""

from __future__ import annotations

import logging

from . import shapes
from .matcher import find, matches, shape
from .transform_types import DEFAULT_CONFIG, ComponentRecord, HandlerRecord, TransformConfig
from .tree import Node, NodeKind, iter_nodes

logger = logging.getLogger(__name__)


def find_component_classes(root: Node, config: TransformConfig = DEFAULT_CONFIG) -> list[Node]:
    """Class declarations/expressions extending the base component, in document order."""
    template = shapes.component_class(config.base_component, config.framework_namespace)
    return find(root, template)


def class_name(class_node: Node) -> str:
    ident = class_node.get("id")
    if matches(ident, shape(NodeKind.IDENTIFIER)):
        return ident["name"]
    return "<anonymous>"


def class_members(class_node: Node) -> list[Node]:
    body = class_node.get("body")
    if not matches(body, shape(NodeKind.CLASS_BODY)):
        return []
    return list(body.get("body") or [])


def find_render_methods(class_node: Node, render_method: str) -> list[Node]:
    template = shapes.method_named(render_method)
    return [member for member in class_members(class_node) if matches(member, template)]


def handler_name(expression: Node) -> str | None:
    """Property name of the first ``this.<name>`` reached inside *expression*."""
    for node in iter_nodes(expression):
        if matches(node, shapes.THIS_MEMBER):
            return node["property"]["name"]
    return None


def find_handlers(class_node: Node, config: TransformConfig = DEFAULT_CONFIG) -> ComponentRecord:
    """Collect the event-handler attributes of the class's render method.

    Only attributes named ``on...`` whose value is one of the recognized
    bound-callback shapes count; their expression containers are grouped
    under the handler's raw name.
    """
    record = ComponentRecord(class_node=class_node)
    for method in find_render_methods(class_node, config.render_method):
        for attribute in find(method, shapes.EVENT_HANDLER_ATTRIBUTE):
            container = attribute["value"]
            name = handler_name(container["expression"])
            if name is None:
                continue
            handler = record.handlers.setdefault(name, HandlerRecord(raw_name=name))
            handler.usages.append(container)
            logger.debug(
                "%s: %s -> this.%s",
                class_name(class_node),
                attribute["name"]["name"],
                name,
            )
    return record
