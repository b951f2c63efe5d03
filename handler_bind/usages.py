"""Usage rewriter."""

from __future__ import annotations

from .transform_types import HandlerRecord
from .tree import this_member


def rewrite_usages(handler: HandlerRecord) -> int:
    """Replace each usage expression of *handler* with a fresh ``this.<raw name>``.

    Returns the number of usage sites rewritten.
    """
    for container in handler.usages:
        container.set("expression", this_member(handler.raw_name))
    return len(handler.usages)
