"""Command line interface for the topology exporter."""
from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

import boto3

from .core import build_web_topology_nodes, export_nodes_to_excel, write_text
from .diagram import (
    DEFAULT_TITLE,
    DrawioOptions,
    WebTopology,
    render_drawio_csv,
    render_graphviz,
    render_graphviz_source,
)
from .discovery import discover_web_topology
from .errors import ExitCode, TopologyError, as_exit_code
from .logging import configure_logging

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Return parsed command line arguments."""

    parser = argparse.ArgumentParser(
        description="Export an ALB + EC2 web topology as a draw.io CSV diagram."
    )
    parser.add_argument("--profile", help="AWS CLI profile to use", default=None)
    parser.add_argument("--region", help="AWS region of the load balancer", default=None)
    parser.add_argument(
        "--load-balancer",
        dest="load_balancer",
        required=True,
        help="Name of the application load balancer",
    )
    sources = parser.add_mutually_exclusive_group()
    sources.add_argument(
        "--instance",
        dest="instances",
        action="append",
        default=None,
        help="EC2 instance ID behind the load balancer (repeatable)",
    )
    sources.add_argument(
        "--discover",
        action="store_true",
        help="Look up the instances registered behind the load balancer with boto3",
    )
    parser.add_argument("--title", default=DEFAULT_TITLE, help="Diagram title")
    parser.add_argument(
        "--output", dest="output_path", help="Write the CSV to this path instead of stdout"
    )
    parser.add_argument(
        "--excel",
        dest="excel_path",
        help="Optional path to export the diagram nodes as an Excel workbook (.xlsx)",
    )
    parser.add_argument(
        "--dot", dest="dot_path", help="Optional path to write Graphviz DOT source"
    )
    parser.add_argument(
        "--preview",
        dest="preview_path",
        help="Render a PNG preview at the given path (requires the Graphviz 'dot' binary)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (defaults to $AWS_WEB_TOPOLOGY_LOG_LEVEL or WARNING)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point used by ``python -m aws_web_topology``."""

    args = parse_args(argv)
    try:
        configure_logging(args.log_level)
        options = DrawioOptions(title=args.title)
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return int(ExitCode.CONFIG_ERROR)

    try:
        if args.discover:
            session = boto3.Session(profile_name=args.profile, region_name=args.region)
            topology = discover_web_topology(session, args.load_balancer)
            if not topology.instance_ids:
                print(
                    f"Warning: No instances are registered behind {args.load_balancer}.",
                    file=sys.stderr,
                )
        else:
            topology = WebTopology(
                load_balancer_name=args.load_balancer,
                instance_ids=tuple(args.instances or ()),
            )

        nodes = build_web_topology_nodes(topology)
        csv_text = render_drawio_csv(nodes, options)

        if args.output_path:
            path = write_text(args.output_path, csv_text)
            print(f"draw.io CSV written to {path}")
        else:
            sys.stdout.write(csv_text)

        if args.excel_path:
            path = export_nodes_to_excel(nodes, args.excel_path)
            print(f"Excel inventory written to {path}")

        if args.dot_path:
            path = write_text(args.dot_path, render_graphviz_source(nodes, args.title))
            print(f"Graphviz source written to {path}")

        if args.preview_path:
            path = render_graphviz(nodes, args.preview_path, title=args.title)
            print(f"Diagram preview written to {path}")
    except TopologyError as exc:
        logger.debug("Export failed", exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
        return as_exit_code(exc)

    return int(ExitCode.OK)


__all__ = ["main", "parse_args"]
