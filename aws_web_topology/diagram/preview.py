"""Graphviz preview of a diagram node list."""
from __future__ import annotations

from pathlib import Path
from subprocess import CalledProcessError
from typing import Iterable, Union

from ..errors import ExportError
from .drawio import DEFAULT_TITLE
from .models import ResourceNode

EDGE_COLOR = "#6c8ebf"


def _import_digraph():
    try:
        from graphviz import Digraph
    except ImportError as exc:  # pragma: no cover - dependency missing during tests
        raise ExportError(
            "The 'graphviz' package is required for diagram previews. "
            "Install it with 'pip install graphviz'."
        ) from exc
    return Digraph


def build_graphviz_digraph(nodes: Iterable[ResourceNode], title: str = DEFAULT_TITLE):
    """Return a :class:`graphviz.Digraph` mirroring the draw.io diagram.

    Edges run from the referenced node to the node holding the reference, the
    same direction draw.io draws them for the inverted ``connect`` directive.
    """

    Digraph = _import_digraph()
    graph = Digraph("aws_web_topology", format="png")
    graph.attr(rankdir="LR")
    graph.attr(label=title, labelloc="t")
    graph.attr(bgcolor="white")
    graph.attr(fontname="Helvetica")
    graph.node_attr.update(fontname="Helvetica", fontsize="12")
    graph.edge_attr.update(color=EDGE_COLOR, style="dashed", arrowhead="empty")

    nodes = list(nodes)
    for node in nodes:
        style = node.style
        graph.node(
            node.name,
            f"{node.name}\\n{node.kind.value}",
            shape="box",
            style="filled,rounded",
            fillcolor=style.fill,
            color=style.stroke,
            fontcolor="#ffffff",
        )
    for node in nodes:
        for reference in node.references:
            graph.edge(reference, node.name)
    return graph


def render_graphviz_source(nodes: Iterable[ResourceNode], title: str = DEFAULT_TITLE) -> str:
    """Return the DOT source for ``nodes``."""

    return build_graphviz_digraph(nodes, title).source


def render_graphviz(
    nodes: Iterable[ResourceNode],
    output_path: Union[str, Path],
    *,
    title: str = DEFAULT_TITLE,
    fmt: str = "png",
) -> str:
    """Render ``nodes`` to an image next to ``output_path`` using ``dot``."""

    graph = build_graphviz_digraph(nodes, title)
    graph.format = fmt
    from graphviz import ExecutableNotFound

    try:
        return graph.render(str(output_path), cleanup=True)
    except ExecutableNotFound as exc:
        raise ExportError(
            "The Graphviz 'dot' executable was not found; write DOT source instead."
        ) from exc
    except CalledProcessError as exc:
        stderr = (
            exc.stderr.decode("utf-8", "replace")
            if isinstance(exc.stderr, bytes)
            else exc.stderr
        )
        message = (stderr or "").strip() or str(exc)
        raise ExportError(f"graphviz failed to render the diagram: {message}") from exc


__all__ = ["build_graphviz_digraph", "render_graphviz", "render_graphviz_source"]
