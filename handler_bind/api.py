"""Composable API functions for the handler-binding transform.

Each function corresponds to a step the CLI and the batch runner perform,
but is callable programmatically on source text.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .frontend import JavaScriptFrontend
from .parser import Parser, TreeSitterParserFactory
from .printer import print_tree
from .transform import transform_with_report
from .transform_types import DEFAULT_CONFIG, ComponentReport, TransformConfig
from .tree import Node

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransformOutcome:
    """Result of transforming one source document."""

    source: str
    output: str
    components: list[ComponentReport] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return self.output != self.source


def parse_source(source: str) -> Node:
    """Parse JavaScript/JSX source text into a syntax tree.

    Raises:
        SourceParseError: the source has syntax errors.
    """
    encoded = source.encode("utf-8")
    tree = Parser(TreeSitterParserFactory()).parse(encoded)
    return JavaScriptFrontend().lower(tree, encoded)


def transform_document(
    source: str, config: TransformConfig | None = None
) -> TransformOutcome:
    """Parse, transform and re-print one document.

    Args:
        source: The source code text.
        config: Names and binding style; defaults to ``DEFAULT_CONFIG``.

    Returns:
        A ``TransformOutcome`` holding the input, the output and one report
        per component class that was changed.
    """
    config = config or DEFAULT_CONFIG
    root = parse_source(source)
    reports = transform_with_report(root, config)
    if not reports:
        logger.debug("No component handlers to normalize")
        return TransformOutcome(source=source, output=source)
    output = print_tree(root, source)
    return TransformOutcome(source=source, output=output, components=reports)


def transform_source(source: str, config: TransformConfig | None = None) -> str:
    """Return *source* with its component handler bindings normalized."""
    return transform_document(source, config).output
