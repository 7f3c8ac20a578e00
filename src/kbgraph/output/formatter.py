"""Plain-text tables and JSON envelopes for CLI output."""

from __future__ import annotations

import json as _json
import time
from datetime import datetime, timezone

# Envelope schema versioning (semver: major.minor.patch)
ENVELOPE_SCHEMA_VERSION = "1.0.0"
ENVELOPE_SCHEMA_NAME = "kbgraph-envelope-v1"


def truncate_lines(lines: list[str], budget: int) -> list[str]:
    if len(lines) <= budget:
        return lines
    return lines[:budget] + [f"(+{len(lines) - budget} more)"]


def format_table(headers: list[str], rows: list[list[str]], budget: int = 0) -> str:
    if not rows:
        return "(none)"
    widths = [len(h) for h in headers]
    num_cols = len(widths)
    for row in rows:
        for i, cell in enumerate(row):
            if i < num_cols:
                widths[i] = max(widths[i], len(str(cell)))
    lines = ["  ".join(h.ljust(widths[i]) for i, h in enumerate(headers))]
    lines.append("  ".join("-" * w for w in widths))
    display_rows = rows[:budget] if budget and len(rows) > budget else rows
    for row in display_rows:
        lines.append("  ".join(str(cell).ljust(widths[i]) for i, cell in enumerate(row)))
    if budget and len(rows) > budget:
        lines.append(f"(+{len(rows) - budget} more)")
    return "\n".join(lines)


def format_table_compact(headers: list[str], rows: list[list[str]], budget: int = 0) -> str:
    """Tab-separated table output for --compact mode."""
    if not rows:
        return "(none)"
    lines = ["\t".join(headers)]
    display_rows = rows[:budget] if budget and len(rows) > budget else rows
    for row in display_rows:
        lines.append("\t".join(str(cell) for cell in row))
    if budget and len(rows) > budget:
        lines.append(f"(+{len(rows) - budget} more)")
    return "\n".join(lines)


def table(headers: list[str], rows: list[list[str]], budget: int = 0) -> str:
    """Padded table, or TSV when --compact was requested."""
    if _compact_mode_enabled():
        return format_table_compact(headers, rows, budget)
    return format_table(headers, rows, budget)


def to_json(data) -> str:
    """Serialize data to a JSON string with deterministic key ordering.

    Uses ``sort_keys=True`` so that identical data always produces
    byte-identical output.
    """
    return _json.dumps(data, indent=2, default=str, sort_keys=True)


def _cli_obj() -> dict:
    import click

    ctx = click.get_current_context(silent=True)
    if ctx and isinstance(ctx.find_root().obj, dict):
        return ctx.find_root().obj
    return {}


def _compact_mode_enabled() -> bool:
    """Return True when the CLI requested compact output."""
    return bool(_cli_obj().get("compact"))


def json_envelope(command: str, summary: dict | None = None, **payload) -> dict:
    """Wrap command output in a self-describing envelope.

    Non-deterministic metadata (``timestamp``, ``database_age_s``) lives in
    ``_meta`` so the content keys stay byte-stable across runs.

    Returns a dict with at minimum::

        {
            "schema":         "kbgraph-envelope-v1",
            "schema_version": "1.0.0",
            "command":        "clusters",
            "version":        "<current>",
            "project":        "<project dir name>",
            "summary":        { ... },
            "_meta":          {"timestamp": "...", "database_age_s": 42},
            ...payload
        }
    """
    if _compact_mode_enabled():
        return compact_json_envelope(command, summary=summary or {}, **payload)

    ts = datetime.now(timezone.utc).replace(microsecond=0).isoformat().replace("+00:00", "Z")

    out: dict = {
        "schema": ENVELOPE_SCHEMA_NAME,
        "schema_version": ENVELOPE_SCHEMA_VERSION,
        "command": command,
        "version": _get_version(),
        "project": _project_name(),
        "summary": summary or {},
    }
    out.update(payload)
    out["_meta"] = {
        "timestamp": ts,
        "database_age_s": _database_age_seconds(),
    }
    return out


def compact_json_envelope(command: str, **payload) -> dict:
    """Minimal JSON envelope: command name, summary and payload only."""
    out = {"command": command}
    out.update(payload)
    return out


def _get_version() -> str:
    from kbgraph import __version__

    return __version__


def _database_age_seconds() -> int | None:
    """Seconds since the entity snapshot was last modified, or None."""
    path = _cli_obj().get("database_path")
    if path is None or not path.exists():
        return None
    return int(time.time() - path.stat().st_mtime)


def _project_name() -> str:
    """Basename of the project root directory."""
    from kbgraph.config import find_project_root

    return find_project_root().name
