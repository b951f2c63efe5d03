"""Orchestrates the handler-binding passes over every component class."""

from __future__ import annotations

import logging

from .binder import ensure_binding, ensure_constructor
from .locators import class_name, find_component_classes, find_handlers
from .naming import normalize_handler_name
from .transform_types import DEFAULT_CONFIG, ComponentReport, TransformConfig
from .tree import Node
from .usages import rewrite_usages

logger = logging.getLogger(__name__)


def fix_component(
    class_node: Node, config: TransformConfig = DEFAULT_CONFIG
) -> ComponentReport | None:
    """Normalize the event handlers of one component class.

    Passes run in a fixed order: usages are collapsed to ``this.<name>``
    first so that renaming only ever sees that one shape, then names are
    canonicalized, then the constructor bindings are ensured.  A class
    without qualifying handlers is not touched at all; ``None`` is returned.
    """
    record = find_handlers(class_node, config)
    if not record.handlers:
        return None

    report = ComponentReport(class_name=class_name(class_node))
    handlers = list(record.handlers.values())

    for handler in handlers:
        report.usages_rewritten += rewrite_usages(handler)

    for handler in handlers:
        handler.canonical_name = normalize_handler_name(class_node, handler.raw_name)
        if handler.canonical_name != handler.raw_name:
            report.renames[handler.raw_name] = handler.canonical_name

    block, report.constructor_created = ensure_constructor(class_node, config.constructor_param)
    for name in dict.fromkeys(handler.canonical_name for handler in handlers):
        binding = ensure_binding(block, name, config.bind_style)
        for handler in handlers:
            if handler.canonical_name == name:
                handler.binding = binding
        report.bound.append(name)

    logger.info(
        "%s: %d handler(s) bound, %d renamed%s",
        report.class_name,
        len(report.bound),
        len(report.renames),
        ", constructor created" if report.constructor_created else "",
    )
    return report


def transform_with_report(
    root: Node, config: TransformConfig = DEFAULT_CONFIG
) -> list[ComponentReport]:
    """Transform *root* in place; return one report per component that changed."""
    reports: list[ComponentReport] = []
    classes = find_component_classes(root, config)
    logger.debug("Found %d component class(es)", len(classes))
    for class_node in classes:
        report = fix_component(class_node, config)
        if report is not None:
            reports.append(report)
    return reports


def transform(root: Node, config: TransformConfig = DEFAULT_CONFIG) -> Node:
    """Normalize handler bindings of every component class in *root*; return *root*."""
    transform_with_report(root, config)
    return root
