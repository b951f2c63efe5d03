"""Named constants for the names and patterns the transform recognizes."""

from __future__ import annotations

EVENT_ATTRIBUTE_PATTERN = r"^on.+$"
HANDLER_NAME_PATTERN = r"^(?:_?on|_?handle)(.+)$"
HANDLER_PREFIX = "handle"

BASE_COMPONENT_NAME = "Component"
FRAMEWORK_NAMESPACE = "React"
RENDER_METHOD_NAME = "render"

CONSTRUCTOR_NAME = "constructor"
CONSTRUCTOR_PARAM = "props"
BIND_METHOD_NAME = "bind"

METHOD_KIND_CONSTRUCTOR = "constructor"
METHOD_KIND_METHOD = "method"
METHOD_KIND_GET = "get"
METHOD_KIND_SET = "set"
FIELD_DEFINITION_TYPE = "field_definition"
COMMENT_TYPES: frozenset[str] = frozenset({"comment", "html_comment"})

TREE_SITTER_LANGUAGE = "javascript"
DEFAULT_EXTENSIONS: tuple[str, ...] = (".js", ".jsx")
DEFAULT_INDENT = "    "
