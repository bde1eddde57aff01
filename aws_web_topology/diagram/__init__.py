"""Diagram model, draw.io CSV rendering and Graphviz previews."""

from __future__ import annotations

from .builder import DiagramBuilder
from .drawio import (
    DEFAULT_OPTIONS,
    DEFAULT_TITLE,
    DrawioOptions,
    render_drawio_csv,
)
from .models import (
    KIND_STYLES,
    NodeStyle,
    ResourceKind,
    ResourceNode,
    WebTopology,
    style_for,
    validate_name,
)
from .preview import build_graphviz_digraph, render_graphviz, render_graphviz_source

__all__ = [
    "DEFAULT_OPTIONS",
    "DEFAULT_TITLE",
    "DiagramBuilder",
    "DrawioOptions",
    "KIND_STYLES",
    "NodeStyle",
    "ResourceKind",
    "ResourceNode",
    "WebTopology",
    "build_graphviz_digraph",
    "render_drawio_csv",
    "render_graphviz",
    "render_graphviz_source",
    "style_for",
    "validate_name",
]
