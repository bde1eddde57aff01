"""Construction of validated diagram node lists."""
from __future__ import annotations

import logging
from typing import Dict, List, Tuple, Union

from ..errors import InvalidNameError, UnknownTargetError
from .models import ResourceKind, ResourceNode

logger = logging.getLogger(__name__)


class DiagramBuilder:
    """Build an ordered list of :class:`ResourceNode` for one diagram.

    The builder owns the set of names it has issued so that references can be
    checked when they are added rather than when the diagram is rendered.
    """

    def __init__(self) -> None:
        self._nodes: Dict[str, ResourceNode] = {}

    def create_node(self, kind: Union[ResourceKind, str], name: str) -> ResourceNode:
        """Create a node of ``kind`` named ``name`` with no references."""

        node = ResourceNode(name=name, kind=kind)
        if name in self._nodes:
            raise InvalidNameError(f"Resource name '{name}' is already in use")
        self._nodes[name] = node
        logger.debug("Created %s node %s", node.kind.value, name)
        return node

    def add_reference(self, node: ResourceNode, target_name: str) -> None:
        """Record that ``node`` depends on the node named ``target_name``."""

        if self._nodes.get(node.name) is not node:
            raise UnknownTargetError(
                f"Node '{node.name}' was not created by this builder"
            )
        if target_name not in self._nodes:
            raise UnknownTargetError(
                f"Cannot reference unknown resource '{target_name}' from '{node.name}'"
            )
        if not node._append_reference(target_name):
            logger.debug("Ignoring duplicate reference %s -> %s", node.name, target_name)

    def get(self, name: str) -> ResourceNode:
        try:
            return self._nodes[name]
        except KeyError:
            raise UnknownTargetError(f"Unknown resource '{name}'") from None

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    @property
    def nodes(self) -> Tuple[ResourceNode, ...]:
        return tuple(self._nodes.values())

    @property
    def names(self) -> List[str]:
        return list(self._nodes)


__all__ = ["DiagramBuilder"]
