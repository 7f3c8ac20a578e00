"""Shared snapshot loading and config helpers for all kbgraph commands."""

from __future__ import annotations

import click

from kbgraph.config import find_project_root, get_database_path, load_project_config
from kbgraph.exit_codes import DatabaseInvalidError, DatabaseMissingError
from kbgraph.models import Corpus, RenderGraph
from kbgraph.store import load_corpus, load_render_graph


def cli_obj(ctx: click.Context) -> dict:
    root = ctx.find_root()
    if root.obj is None:
        root.obj = {}
    return root.obj


def project_config(ctx: click.Context) -> dict:
    """Project config (with defaults), loaded once per invocation."""
    obj = cli_obj(ctx)
    if "config" not in obj:
        obj["config"] = load_project_config(find_project_root())
    return obj["config"]


def require_corpus(ctx: click.Context) -> Corpus:
    """Load the entity snapshot or fail with a clear exit code.

    Raises DatabaseMissingError (exit 3) or DatabaseInvalidError (exit 4).
    """
    obj = cli_obj(ctx)
    path = get_database_path(obj.get("database"))
    obj["database_path"] = path
    try:
        return load_corpus(path)
    except FileNotFoundError:
        raise DatabaseMissingError(
            f"No entity snapshot at {path}\n"
            "  Tip: pass --database PATH, set KBGRAPH_DATABASE, or add\n"
            '       {"database": "<path>"} to .kbgraph/config.json.'
        )
    except ValueError as exc:
        raise DatabaseInvalidError(f"Cannot read entity snapshot: {exc}")


def require_render_graph(path: str) -> RenderGraph:
    try:
        return load_render_graph(path)
    except FileNotFoundError:
        raise DatabaseMissingError(f"No render graph at {path}")
    except ValueError as exc:
        raise DatabaseInvalidError(f"Cannot read render graph: {exc}")
