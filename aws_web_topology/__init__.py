"""Draw.io diagram export for a load-balanced AWS web server topology."""

from __future__ import annotations

from .core import (
    build_web_server_diagram,
    build_web_topology_nodes,
    export_nodes_to_excel,
    write_text,
)
from .diagram import (
    DiagramBuilder,
    DrawioOptions,
    ResourceKind,
    ResourceNode,
    WebTopology,
    render_drawio_csv,
)
from .errors import (
    DiagramError,
    DiscoveryError,
    ExportError,
    InvalidNameError,
    TopologyError,
    UnknownKindError,
    UnknownTargetError,
)

__all__ = [
    "DiagramBuilder",
    "DiagramError",
    "DiscoveryError",
    "DrawioOptions",
    "ExportError",
    "InvalidNameError",
    "ResourceKind",
    "ResourceNode",
    "TopologyError",
    "UnknownKindError",
    "UnknownTargetError",
    "WebTopology",
    "build_web_server_diagram",
    "build_web_topology_nodes",
    "export_nodes_to_excel",
    "render_drawio_csv",
    "write_text",
]
