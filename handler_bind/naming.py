"""Handler name normalization: ``onClick`` and friends become ``handleClick``."""

from __future__ import annotations

import logging
import re

from . import constants, shapes
from .locators import class_members
from .matcher import find, matches
from .tree import Node

logger = logging.getLogger(__name__)

_HANDLER_NAME_RE = re.compile(constants.HANDLER_NAME_PATTERN)


def canonical_name(name: str) -> str:
    """``onClick``/``_onClick``/``handleClick``/``_handleClick`` -> ``handleClick``.

    Names with neither prefix are returned unchanged.
    """
    match = _HANDLER_NAME_RE.match(name)
    if match is None:
        return name
    return constants.HANDLER_PREFIX + match.group(1)


def normalize_handler_name(class_node: Node, name: str) -> str:
    """Rename handler *name* throughout *class_node*; return the name now in use.

    The method or field declaring *name* and every ``this.<name>`` in the
    class body are renamed together.  Nothing is touched when the name is
    already canonical, or when another member already declares the canonical
    name; the raw name is returned then.
    """
    new_name = canonical_name(name)
    if new_name == name:
        return name

    members = class_members(class_node)
    if any(matches(member, shapes.member_named(new_name)) for member in members):
        logger.warning("Not renaming %s: %s is already declared", name, new_name)
        return name

    for member in members:
        if matches(member, shapes.method_named(name)):
            member["key"].set("name", new_name)
        elif matches(member, shapes.field_named(name)):
            member["children"][0].set("name", new_name)

    references = find(class_node["body"], shapes.this_member_named(name))
    for reference in references:
        reference["property"].set("name", new_name)

    logger.debug("Renamed %s -> %s (%d references)", name, new_name, len(references))
    return new_name
