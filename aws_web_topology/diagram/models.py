"""Shared dataclasses and style tables for topology diagrams."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Tuple, Union

from ..errors import InvalidNameError, UnknownKindError

RESERVED_DELIMITERS = (",", "\n", "\r")


class ResourceKind(str, Enum):
    """Closed set of resource kinds that can appear on a diagram."""

    COMPUTE_INSTANCE = "ComputeInstance"
    LOAD_BALANCER = "LoadBalancer"


@dataclass(frozen=True)
class NodeStyle:
    """Visual style of a diagram node in draw.io terms."""

    fill: str
    stroke: str
    shape: str


KIND_STYLES: Dict[ResourceKind, NodeStyle] = {
    ResourceKind.COMPUTE_INSTANCE: NodeStyle(
        fill="#ED7100",
        stroke="#ffffff",
        shape="mxgraph.aws4.ec2",
    ),
    ResourceKind.LOAD_BALANCER: NodeStyle(
        fill="#8C4FFF",
        stroke="#ffffff",
        shape="mxgraph.aws4.application_load_balancer",
    ),
}


def resolve_kind(kind: Union[ResourceKind, str]) -> ResourceKind:
    """Return the :class:`ResourceKind` for ``kind`` or raise :class:`UnknownKindError`."""

    if isinstance(kind, ResourceKind):
        resolved = kind
    else:
        try:
            resolved = ResourceKind(kind)
        except ValueError:
            valid = ", ".join(member.value for member in ResourceKind)
            raise UnknownKindError(
                f"Unknown resource kind {kind!r}. Valid kinds: {valid}"
            ) from None
    if resolved not in KIND_STYLES:
        raise UnknownKindError(f"Resource kind '{resolved.value}' has no style mapping")
    return resolved


def style_for(kind: Union[ResourceKind, str]) -> NodeStyle:
    """Return the visual style for ``kind``."""

    return KIND_STYLES[resolve_kind(kind)]


def validate_name(name: object) -> str:
    """Return ``name`` if it can be used as a diagram component name."""

    if not isinstance(name, str) or not name:
        raise InvalidNameError("Resource name must be a non-empty string")
    for delimiter in RESERVED_DELIMITERS:
        if delimiter in name:
            raise InvalidNameError(
                f"Resource name {name!r} contains reserved delimiter {delimiter!r}"
            )
    return name


@dataclass(frozen=True)
class ResourceNode:
    """A provisioned resource and the names of the resources it depends on.

    ``name`` and ``kind`` are fixed once the node exists.  References are only
    appended through :meth:`DiagramBuilder.add_reference`, which validates the
    target before it lands here.
    """

    name: str
    kind: ResourceKind
    _references: List[str] = field(
        default_factory=list, init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        validate_name(self.name)
        object.__setattr__(self, "kind", resolve_kind(self.kind))

    @property
    def references(self) -> Tuple[str, ...]:
        return tuple(self._references)

    @property
    def style(self) -> NodeStyle:
        return KIND_STYLES[self.kind]

    def _append_reference(self, target_name: str) -> bool:
        if target_name in self._references:
            return False
        self._references.append(target_name)
        return True


@dataclass(frozen=True)
class WebTopology:
    """Identifiers of a load balancer and the instances registered behind it."""

    load_balancer_name: str
    instance_ids: Tuple[str, ...]


__all__ = [
    "KIND_STYLES",
    "NodeStyle",
    "RESERVED_DELIMITERS",
    "ResourceKind",
    "ResourceNode",
    "WebTopology",
    "resolve_kind",
    "style_for",
    "validate_name",
]
