"""Core orchestration utilities for the topology exporter."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Sequence, Union

from .diagram import (
    DEFAULT_OPTIONS,
    DiagramBuilder,
    DrawioOptions,
    ResourceKind,
    ResourceNode,
    WebTopology,
    render_drawio_csv,
)
from .errors import ExportError

logger = logging.getLogger(__name__)


def build_web_topology_nodes(topology: WebTopology) -> List[ResourceNode]:
    """Return the diagram nodes for a load balancer and its instances.

    The load balancer comes first, followed by each instance in the order
    given; every instance references the load balancer.
    """

    builder = DiagramBuilder()
    builder.create_node(ResourceKind.LOAD_BALANCER, topology.load_balancer_name)
    for instance_id in topology.instance_ids:
        node = builder.create_node(ResourceKind.COMPUTE_INSTANCE, instance_id)
        builder.add_reference(node, topology.load_balancer_name)
    logger.debug(
        "Built diagram for %s with %d instance(s)",
        topology.load_balancer_name,
        len(topology.instance_ids),
    )
    return list(builder.nodes)


def build_web_server_diagram(
    load_balancer_name: str,
    instance_ids: Union[str, Sequence[str]],
    options: DrawioOptions = DEFAULT_OPTIONS,
) -> str:
    """Return the draw.io CSV for ``load_balancer_name`` and ``instance_ids``."""

    if isinstance(instance_ids, str):
        instance_ids = [instance_ids]
    topology = WebTopology(
        load_balancer_name=load_balancer_name, instance_ids=tuple(instance_ids)
    )
    return render_drawio_csv(build_web_topology_nodes(topology), options)


def write_text(path: Union[str, Path], text: str) -> str:
    """Write ``text`` to ``path`` and return the path written."""

    target = Path(path)
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(text, encoding="utf-8")
    except OSError as exc:
        raise ExportError(f"Failed to write {target}: {exc}") from exc
    return str(target)


def export_nodes_to_excel(nodes: Iterable[ResourceNode], path: str) -> str:
    """Write one row per node in *nodes* to an Excel workbook at *path*."""

    headers = ("Component", "Kind", "Fill", "Stroke", "Shape", "References")
    rows = (
        (
            node.name,
            node.kind.value,
            node.style.fill,
            node.style.stroke,
            node.style.shape,
            ", ".join(node.references),
        )
        for node in nodes
    )
    return _export_rows_to_excel(rows, headers, path, sheet_title="Topology")


def _export_rows_to_excel(
    rows: Iterable[Sequence[object]],
    headers: Sequence[str],
    path: str,
    *,
    sheet_title: str,
) -> str:
    """Write ``rows`` with ``headers`` to an Excel sheet using :mod:`openpyxl`."""

    try:
        from openpyxl import Workbook
        from openpyxl.utils import get_column_letter
    except ImportError as exc:  # pragma: no cover - dependency missing during tests
        raise ExportError(
            "The 'openpyxl' package is required to export the topology to Excel. "
            "Install it with 'pip install openpyxl'."
        ) from exc

    workbook = Workbook()
    sheet = workbook.active
    sheet.title = sheet_title

    sheet.append(list(headers))
    column_widths = [len(header) for header in headers]

    for row in rows:
        values = list(row)
        sheet.append(values)
        for idx, value in enumerate(values):
            column_widths[idx] = max(column_widths[idx], len(str(value)))

    for idx, width in enumerate(column_widths, start=1):
        column_letter = get_column_letter(idx)
        sheet.column_dimensions[column_letter].width = min(width + 2, 60)

    try:
        workbook.save(path)
    except OSError as exc:
        raise ExportError(f"Failed to write {path}: {exc}") from exc
    return path


__all__ = [
    "build_web_server_diagram",
    "build_web_topology_nodes",
    "export_nodes_to_excel",
    "write_text",
]
