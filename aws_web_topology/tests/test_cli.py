"""Tests for the command line interface."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[2]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


from aws_web_topology import cli
from aws_web_topology.diagram import WebTopology
from aws_web_topology.errors import DiscoveryError, ExitCode, ExportError


def test_main_prints_csv_for_given_identifiers(capsys) -> None:
    """Identifiers on the command line render without AWS calls."""

    exit_code = cli.main(["--load-balancer", "alb-1", "--instance", "i-1"])

    out = capsys.readouterr().out
    assert exit_code == ExitCode.OK
    assert out.startswith("## Simple web server AWS diagram\n")
    assert out.endswith("i-1,#ED7100,#ffffff,mxgraph.aws4.ec2,alb-1\n")


def test_main_writes_output_file(tmp_path: Path, capsys) -> None:
    """The CSV lands at --output with a custom title."""

    target = tmp_path / "diagram.csv"

    exit_code = cli.main(
        [
            "--load-balancer",
            "alb-1",
            "--instance",
            "i-1",
            "--instance",
            "i-2",
            "--title",
            "Prod",
            "--output",
            str(target),
        ]
    )

    assert exit_code == ExitCode.OK
    lines = target.read_text(encoding="utf-8").splitlines()
    assert lines[0] == "## Prod"
    assert lines[-2:] == [
        "i-1,#ED7100,#ffffff,mxgraph.aws4.ec2,alb-1",
        "i-2,#ED7100,#ffffff,mxgraph.aws4.ec2,alb-1",
    ]
    assert str(target) in capsys.readouterr().out


def test_main_reports_invalid_names(capsys) -> None:
    """Validation errors print a message and return the diagram exit code."""

    exit_code = cli.main(["--load-balancer", "alb-1", "--instance", "i-1,i-2"])

    captured = capsys.readouterr()
    assert exit_code == ExitCode.DIAGRAM_ERROR
    assert captured.out == ""
    assert "Error:" in captured.err


def test_main_rejects_multiline_title(capsys) -> None:
    """A title that would break the header is a configuration error."""

    exit_code = cli.main(["--load-balancer", "alb-1", "--title", "a\nb"])

    assert exit_code == ExitCode.CONFIG_ERROR
    assert "single line" in capsys.readouterr().err


def test_main_discovers_instances(monkeypatch, capsys) -> None:
    """--discover uses the boto3 lookup for the instance list."""

    calls = []

    def fake_discover(session, name):
        calls.append(name)
        return WebTopology(load_balancer_name=name, instance_ids=("i-0abc",))

    monkeypatch.setattr(cli, "discover_web_topology", fake_discover)
    monkeypatch.setattr(cli.boto3, "Session", lambda **kwargs: object())

    exit_code = cli.main(["--load-balancer", "alb-1", "--discover"])

    assert exit_code == ExitCode.OK
    assert calls == ["alb-1"]
    assert capsys.readouterr().out.endswith("i-0abc,#ED7100,#ffffff,mxgraph.aws4.ec2,alb-1\n")


def test_main_maps_discovery_errors(monkeypatch, capsys) -> None:
    """AWS failures map to the AWS exit code."""

    def failing_discover(session, name):
        raise DiscoveryError(f"Load balancer '{name}' was not found")

    monkeypatch.setattr(cli, "discover_web_topology", failing_discover)
    monkeypatch.setattr(cli.boto3, "Session", lambda **kwargs: object())

    exit_code = cli.main(["--load-balancer", "missing", "--discover"])

    assert exit_code == ExitCode.AWS_ERROR
    assert "not found" in capsys.readouterr().err


def test_instance_and_discover_are_exclusive() -> None:
    """Explicit instances cannot be combined with discovery."""

    with pytest.raises(SystemExit):
        cli.parse_args(["--load-balancer", "alb-1", "--instance", "i-1", "--discover"])


def test_main_writes_excel_inventory(tmp_path: Path, capsys) -> None:
    """--excel writes one workbook row per diagram node."""

    openpyxl = pytest.importorskip("openpyxl")
    target = tmp_path / "topology.xlsx"

    exit_code = cli.main(
        ["--load-balancer", "alb-1", "--instance", "i-1", "--excel", str(target)]
    )

    assert exit_code == ExitCode.OK
    sheet = openpyxl.load_workbook(target).active
    components = [row[0].value for row in sheet.iter_rows(min_row=2)]
    assert components == ["alb-1", "i-1"]
    assert f"Excel inventory written to {target}" in capsys.readouterr().out


def test_main_writes_dot_source(tmp_path: Path, capsys) -> None:
    """--dot writes Graphviz source with the inverted edge direction."""

    pytest.importorskip("graphviz")
    target = tmp_path / "diagrams" / "topology.gv"

    exit_code = cli.main(
        ["--load-balancer", "alb-1", "--instance", "i-1", "--dot", str(target)]
    )

    assert exit_code == ExitCode.OK
    source = target.read_text(encoding="utf-8")
    assert source.startswith("digraph aws_web_topology")
    assert '"alb-1" -> "i-1"' in source
    assert f"Graphviz source written to {target}" in capsys.readouterr().out


def test_main_renders_preview(monkeypatch, tmp_path: Path, capsys) -> None:
    """--preview passes the nodes and title to the Graphviz renderer."""

    calls = []

    def fake_render(nodes, output_path, *, title):
        calls.append(([node.name for node in nodes], output_path, title))
        return f"{output_path}.png"

    monkeypatch.setattr(cli, "render_graphviz", fake_render)
    target = str(tmp_path / "preview")

    exit_code = cli.main(
        ["--load-balancer", "alb-1", "--instance", "i-1", "--title", "Web", "--preview", target]
    )

    assert exit_code == ExitCode.OK
    assert calls == [(["alb-1", "i-1"], target, "Web")]
    assert f"Diagram preview written to {target}.png" in capsys.readouterr().out


def test_main_maps_export_errors(monkeypatch, tmp_path: Path, capsys) -> None:
    """A failed preview render returns the runtime exit code."""

    def failing_render(nodes, output_path, *, title):
        raise ExportError("The Graphviz 'dot' executable was not found")

    monkeypatch.setattr(cli, "render_graphviz", failing_render)

    exit_code = cli.main(
        ["--load-balancer", "alb-1", "--preview", str(tmp_path / "preview")]
    )

    assert exit_code == ExitCode.RUNTIME_ERROR
    assert "'dot' executable was not found" in capsys.readouterr().err
