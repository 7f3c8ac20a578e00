"""Shared test fixtures and helpers for kbgraph tests.

Provides:
- Model builders: make_entity(), make_edges(), make_nodes()
- A small sample snapshot (two triangles + one orphan)
- Project fixtures: snapshot_file -> kb_project
- CliRunner fixtures: cli_runner, invoke_cli()
- JSON validation helpers: parse_json_output(), assert_json_envelope()
"""

from __future__ import annotations

import json
import os

import pytest
from click.testing import CliRunner

from kbgraph.models import Entity, Position, RelatedEntry, RenderEdge, RenderNode

# ===========================================================================
# Model builders
# ===========================================================================


def make_entity(entity_id, *related, type="", title=None):
    """Build an Entity whose related entries point at *related* ids."""
    return Entity(
        id=entity_id,
        title=title if title is not None else entity_id.replace("-", " ").title(),
        type=type,
        related_entries=tuple(RelatedEntry(id=r, relationship="related") for r in related),
    )


def make_edges(*pairs):
    """Build render edges ``"S-T"`` from ``("S", "T")`` pairs."""
    return [RenderEdge(id=f"{s}-{t}", source=s, target=t) for s, t in pairs]


def make_nodes(*specs):
    """Build render nodes from ``(id, x, y)`` or ``(id, x, y, type)`` tuples."""
    nodes = []
    for spec in specs:
        node_id, x, y = spec[:3]
        node_type = spec[3] if len(spec) > 3 else "causeEffect"
        nodes.append(
            RenderNode(id=node_id, type=node_type, data={"label": f"Node {node_id}"}, position=Position(x=x, y=y))
        )
    return nodes


# ===========================================================================
# Sample snapshot
# ===========================================================================


SAMPLE_SNAPSHOT = {
    "entities": [
        {
            "id": "deceptive-alignment",
            "title": "Deceptive Alignment",
            "type": "risk",
            "relatedEntries": [
                {"id": "mesa-optimization", "type": "risk", "relationship": "causes", "strength": "strong"},
                {"id": "goal-misgeneralization", "type": "risk", "relationship": "related"},
            ],
        },
        {
            "id": "mesa-optimization",
            "title": "Mesa-Optimization",
            "type": "risk",
            "relatedEntries": [
                {"id": "goal-misgeneralization", "type": "risk", "relationship": "related"},
            ],
        },
        {"id": "goal-misgeneralization", "title": "Goal Misgeneralization", "type": "risk"},
        {
            "id": "anthropic",
            "title": "Anthropic",
            "type": "lab",
            "relatedEntries": [
                {"id": "openai", "type": "lab", "relationship": "competes-with"},
                {"id": "deepmind", "type": "lab", "relationship": "competes-with"},
            ],
        },
        {
            "id": "openai",
            "title": "OpenAI",
            "type": "lab",
            "relatedEntries": [{"id": "deepmind", "type": "lab", "relationship": "competes-with"}],
        },
        {"id": "deepmind", "title": "Google DeepMind", "type": "lab", "relatedEntries": []},
        {"id": "lonely-concept", "title": "Lonely Concept", "type": "concept"},
    ],
    # Duplicates an authored edge from the other side
    "backlinks": {
        "mesa-optimization": [{"id": "deceptive-alignment", "relationship": "causes"}],
    },
}


@pytest.fixture
def snapshot_file(tmp_path):
    """Write SAMPLE_SNAPSHOT to a standalone JSON file and return its path."""
    path = tmp_path / "database.json"
    path.write_text(json.dumps(SAMPLE_SNAPSHOT), encoding="utf-8")
    return path


@pytest.fixture
def kb_project(tmp_path, monkeypatch):
    """A project root (has .git) with the snapshot at the default location.

    The working directory is switched into the project.
    """
    proj = tmp_path / "wiki"
    (proj / ".git").mkdir(parents=True)
    data_dir = proj / "src" / "data"
    data_dir.mkdir(parents=True)
    (data_dir / "database.json").write_text(json.dumps(SAMPLE_SNAPSHOT), encoding="utf-8")
    monkeypatch.delenv("KBGRAPH_DATABASE", raising=False)
    monkeypatch.chdir(proj)
    return proj


# ===========================================================================
# CliRunner helpers
# ===========================================================================


@pytest.fixture
def cli_runner():
    """Provide a Click CliRunner for in-process CLI testing."""
    return CliRunner()


def invoke_cli(runner, args, cwd=None, json_mode=False, database=None):
    """Invoke the kbgraph CLI via CliRunner.

    Args:
        runner: CliRunner instance
        args: list of CLI arguments (e.g. ["clusters"])
        cwd: directory to run in
        json_mode: if True, prepend --json flag
        database: optional --database value
    Returns:
        click.testing.Result
    """
    from kbgraph.cli import cli

    full_args = []
    if json_mode:
        full_args.append("--json")
    if database is not None:
        full_args.extend(["--database", str(database)])
    full_args.extend(args)

    old_cwd = os.getcwd()
    try:
        if cwd:
            os.chdir(str(cwd))
        result = runner.invoke(cli, full_args)
    finally:
        os.chdir(old_cwd)

    return result


# ===========================================================================
# JSON validation helpers
# ===========================================================================


def parse_json_output(result, command=None):
    """Parse JSON from a CliRunner result, asserting a zero exit code."""
    assert result.exit_code == 0, f"Command {command or '?'} failed (exit {result.exit_code}):\n{result.output}"
    try:
        return json.loads(result.output)
    except json.JSONDecodeError as e:
        pytest.fail(f"Invalid JSON from {command or '?'}: {e}\nOutput was:\n{result.output[:500]}")


def assert_json_envelope(data, command=None):
    """Validate that a parsed JSON dict follows the kbgraph envelope contract.

    Checks required top-level keys: schema, command, version, summary.
    Checks _meta contains timestamp (non-deterministic metadata).
    """
    assert isinstance(data, dict), f"Expected dict, got {type(data)}"
    assert data.get("schema") == "kbgraph-envelope-v1"
    assert "command" in data, "Missing 'command' key in envelope"
    assert "version" in data, "Missing 'version' key in envelope"
    assert "summary" in data, "Missing 'summary' key in envelope"
    assert "timestamp" in data.get("_meta", {}), "Missing 'timestamp' in _meta"
    if command:
        assert data["command"] == command, f"Expected command={command}, got {data['command']}"
    assert isinstance(data["summary"], dict), f"summary should be dict, got {type(data['summary'])}"
