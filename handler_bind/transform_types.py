"""Transform data types (pure data, no business logic)."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from . import constants
from .tree import Node


class BindStyle(Enum):
    """How the constructor binding statement binds the method to the instance."""

    OPERATOR = "operator"  # this.x = ::this.x;
    CALL = "call"  # this.x = this.x.bind(this);


@dataclass(frozen=True)
class TransformConfig:
    """Groups the names the transform recognizes and emits."""

    base_component: str = constants.BASE_COMPONENT_NAME
    framework_namespace: str = constants.FRAMEWORK_NAMESPACE
    render_method: str = constants.RENDER_METHOD_NAME
    constructor_param: str = constants.CONSTRUCTOR_PARAM
    bind_style: BindStyle = BindStyle.OPERATOR


DEFAULT_CONFIG = TransformConfig()


@dataclass
class HandlerRecord:
    """One handler referenced from the render method.

    ``usages`` are the JSX expression containers whose expression refers to
    the handler; several attributes may share the same raw name.
    """

    raw_name: str
    usages: list[Node] = field(default_factory=list)
    canonical_name: str = ""
    binding: Node | None = None


@dataclass
class ComponentRecord:
    """A component class together with the handlers found in it."""

    class_node: Node
    handlers: dict[str, HandlerRecord] = field(default_factory=dict)

    @property
    def handler_names(self) -> list[str]:
        return list(self.handlers)


@dataclass
class ComponentReport:
    """What the transform did to one component class."""

    class_name: str
    renames: dict[str, str] = field(default_factory=dict)
    bound: list[str] = field(default_factory=list)
    constructor_created: bool = False
    usages_rewritten: int = 0
