"""Read the compiled entity snapshot and rendering graphs from JSON."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from pathlib import Path

from kbgraph.models import (
    Backlink,
    Corpus,
    Entity,
    Position,
    RelatedEntry,
    RenderEdge,
    RenderGraph,
    RenderNode,
)

log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Entity corpus
# ---------------------------------------------------------------------------


def _parse_entity(raw: dict) -> Entity:
    related = tuple(
        RelatedEntry(
            id=r["id"],
            type=r.get("type") or "",
            relationship=r.get("relationship") or "",
            strength=r.get("strength"),
        )
        for r in raw.get("relatedEntries") or ()
    )
    return Entity(
        id=raw["id"],
        title=raw.get("title") or "",
        type=raw.get("type") or "",
        related_entries=related,
    )


def parse_corpus(data: dict) -> Corpus:
    """Build a :class:`Corpus` from the decoded snapshot document.

    Expects ``{"entities": [...], "backlinks": {id: [...]}}``; both keys are
    optional.  Raises ``ValueError`` when the top-level shape is wrong or
    a record is not an object with an ``id``.  Optional record fields are
    not validated.
    """
    if not isinstance(data, dict):
        raise ValueError("Snapshot must be a JSON object")
    raw_entities = data.get("entities") or []
    raw_backlinks = data.get("backlinks") or {}
    if not isinstance(raw_entities, list):
        raise ValueError("'entities' must be a list")
    if not isinstance(raw_backlinks, dict):
        raise ValueError("'backlinks' must be an object keyed by entity id")

    try:
        entities = [_parse_entity(e) for e in raw_entities]
        backlinks = {
            entity_id: [Backlink(id=link["id"], relationship=link.get("relationship") or "") for link in links]
            for entity_id, links in raw_backlinks.items()
        }
    except (KeyError, TypeError, AttributeError) as exc:
        raise ValueError(f"Malformed snapshot record: {exc!r}") from exc
    return Corpus(entities=entities, backlinks=backlinks)


def load_corpus(path: str | Path) -> Corpus:
    """Read and parse the snapshot at *path*.

    Raises ``FileNotFoundError`` when the file is missing and ``ValueError``
    when it is not valid JSON or has the wrong shape.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"No entity snapshot at {path}")
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"{path} is not valid JSON: {exc}") from exc
    corpus = parse_corpus(data)
    log.info("Loaded %d entities and %d backlink lists from %s", len(corpus.entities), len(corpus.backlinks), path)
    return corpus


def entity_map(entities: Iterable[Entity]) -> dict[str, Entity]:
    """Return ``{id: entity}``; a later duplicate id replaces an earlier one."""
    return {e.id: e for e in entities}


# ---------------------------------------------------------------------------
# Rendering graph
# ---------------------------------------------------------------------------


def _parse_node(raw: dict) -> RenderNode:
    pos = raw.get("position") or {}
    return RenderNode(
        id=raw["id"],
        type=raw.get("type"),
        data=dict(raw.get("data") or {}),
        position=Position(x=pos.get("x") or 0, y=pos.get("y") or 0),
    )


def _parse_edge(raw: dict) -> RenderEdge:
    source, target = raw["source"], raw["target"]
    return RenderEdge(
        id=raw.get("id") or f"{source}-{target}",
        source=source,
        target=target,
        label=raw.get("label"),
        animated=bool(raw.get("animated", False)),
        weight=int(raw.get("weight") or 1),
    )


def parse_render_graph(data: dict) -> RenderGraph:
    """Build a :class:`RenderGraph` from ``{"nodes": [...], "edges": [...]}``.

    Edges without an ``id`` get ``"{source}-{target}"``.
    Raises ``ValueError`` when the shape is wrong or a record lacks its
    ``id`` (nodes) or ``source``/``target`` (edges).
    """
    if not isinstance(data, dict):
        raise ValueError("Render graph must be a JSON object")
    nodes = data.get("nodes") or []
    edges = data.get("edges") or []
    if not isinstance(nodes, list) or not isinstance(edges, list):
        raise ValueError("'nodes' and 'edges' must be lists")
    try:
        return RenderGraph(nodes=[_parse_node(n) for n in nodes], edges=[_parse_edge(e) for e in edges])
    except (KeyError, TypeError, AttributeError) as exc:
        raise ValueError(f"Malformed render graph record: {exc!r}") from exc


def load_render_graph(path: str | Path) -> RenderGraph:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"No render graph at {path}")
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"{path} is not valid JSON: {exc}") from exc
    return parse_render_graph(data)
