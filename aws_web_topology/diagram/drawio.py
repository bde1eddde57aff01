"""Rendering of diagram nodes into the draw.io CSV import format."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List

from .models import ResourceNode

DEFAULT_TITLE = "Simple web server AWS diagram"

# draw.io reads the edge direction from this directive: each row's ``refs``
# column holds the sources of arrows pointing at that row.
CONNECT_DIRECTIVE = (
    '{"from":"refs", "to":"component", "invert":true, '
    '"style":"curved=0;endArrow=block;endFill=0;dashed=1;strokeColor=#6c8ebf;"}'
)
STYLE_DIRECTIVE = (
    "shape=%shape%;fillColor=%fill%;strokeColor=%stroke%;verticalLabelPosition=bottom;"
)
CSV_COLUMNS = ("component", "fill", "stroke", "shape", "refs")


@dataclass(frozen=True)
class DrawioOptions:
    """Header parameters for the draw.io CSV importer."""

    title: str = DEFAULT_TITLE
    width: int = 80
    height: int = 80
    node_spacing: int = 40
    level_spacing: int = 40
    edge_spacing: int = 40
    layout: str = "horizontaltree"

    def __post_init__(self) -> None:
        if "\n" in self.title or "\r" in self.title:
            raise ValueError("Diagram title must be a single line")
        if self.width <= 0 or self.height <= 0:
            raise ValueError("Node width and height must be positive")
        if min(self.node_spacing, self.level_spacing, self.edge_spacing) < 0:
            raise ValueError("Spacing values must not be negative")
        if not self.layout or any(ch.isspace() for ch in self.layout):
            raise ValueError(f"Invalid draw.io layout name {self.layout!r}")


DEFAULT_OPTIONS = DrawioOptions()


def header_lines(options: DrawioOptions = DEFAULT_OPTIONS) -> List[str]:
    """Return the directive block that precedes the CSV rows."""

    return [
        f"## {options.title}",
        "# label: %component%",
        f"# style: {STYLE_DIRECTIVE}",
        "# namespace: csvimport-",
        f"# connect: {CONNECT_DIRECTIVE}",
        f"# width: {options.width}",
        f"# height: {options.height}",
        "# ignore: refs",
        f"# nodespacing: {options.node_spacing}",
        f"# levelspacing: {options.level_spacing}",
        f"# edgespacing: {options.edge_spacing}",
        f"# layout: {options.layout}",
        "## CSV data starts below this line",
        ",".join(CSV_COLUMNS),
    ]


def format_row(node: ResourceNode) -> str:
    """Return the CSV row for ``node``.

    Names are validated delimiter-free by the builder, so no quoting is applied.
    """

    style = node.style
    return ",".join(
        [node.name, style.fill, style.stroke, style.shape, ",".join(node.references)]
    )


def render_drawio_csv(
    nodes: Iterable[ResourceNode], options: DrawioOptions = DEFAULT_OPTIONS
) -> str:
    """Return the draw.io CSV text for ``nodes`` in the order given."""

    lines = header_lines(options)
    lines.extend(format_row(node) for node in nodes)
    return "\n".join(lines) + "\n"


__all__ = [
    "CSV_COLUMNS",
    "DEFAULT_OPTIONS",
    "DEFAULT_TITLE",
    "DrawioOptions",
    "format_row",
    "header_lines",
    "render_drawio_csv",
]
