"""Lay out the entity corpus as a render graph for the dashboard view."""

from __future__ import annotations

import math
import random
from collections.abc import Iterable, Mapping

from kbgraph.graph.adjacency import build_adjacency
from kbgraph.graph.centrality import find_orphans
from kbgraph.models import Backlink, Entity, Position, RenderEdge, RenderGraph, RenderNode

TYPE_COLORS: dict[str, str] = {
    "risk": "#dc2626",
    "risk-factor": "#ef4444",
    "safety-agenda": "#16a34a",
    "intervention": "#22c55e",
    "policy": "#2563eb",
    "capability": "#9333ea",
    "model": "#f59e0b",
    "crux": "#06b6d4",
    "concept": "#64748b",
    "organization": "#0ea5e9",
    "lab": "#0284c7",
    "lab-frontier": "#0369a1",
    "researcher": "#7c3aed",
    "funder": "#84cc16",
    "ai-transition-model-parameter": "#8b5cf6",
    "ai-transition-model-metric": "#a78bfa",
    "ai-transition-model-scenario": "#f97316",
    "ai-transition-model-factor": "#ef4444",
    "ai-transition-model-subitem": "#fb923c",
    "default": "#6b7280",
}

ENTITY_NODE_TYPE = "entity"

# Grid cell size and maximum jitter, in layout units
_CELL_W, _CELL_H = 200, 100
_JITTER_X, _JITTER_Y = 50, 30


def type_color(entity_type: str) -> str:
    return TYPE_COLORS.get(entity_type, TYPE_COLORS["default"])


def prepare_render_graph(
    entities: Iterable[Entity],
    backlinks: Mapping[str, Iterable[Backlink]] | None = None,
    focus_entity: str | None = None,
    show_orphans: bool = False,
    max_nodes: int | None = None,
    jitter: bool = True,
    seed: int = 42,
) -> RenderGraph:
    """Place entities on a square grid and connect their authored relations.

    Orphans (no relations in either direction) are left out unless
    *show_orphans*; the remainder is cut to *max_nodes*.  Jitter comes from
    a ``random.Random(seed)`` so a given seed always yields the same layout.

    Only related entries whose target is a placed node become edges; ids
    are ``"{source}-{target}"`` and a repeated pair yields one edge (the first).
    """
    entities = list(entities)
    orphans = set(find_orphans(build_adjacency(entities, backlinks)))

    placed = entities if show_orphans else [e for e in entities if e.id not in orphans]
    if max_nodes and len(placed) > max_nodes:
        placed = placed[:max_nodes]

    rng = random.Random(seed)
    cols = math.ceil(math.sqrt(len(placed))) if placed else 1

    nodes: list[RenderNode] = []
    for index, entity in enumerate(placed):
        row, col = divmod(index, cols)
        x = col * _CELL_W + (rng.random() * _JITTER_X if jitter else 0)
        y = row * _CELL_H + (rng.random() * _JITTER_Y if jitter else 0)
        nodes.append(
            RenderNode(
                id=entity.id,
                type=ENTITY_NODE_TYPE,
                data={
                    "label": entity.title,
                    "entityType": entity.type,
                    "isOrphan": entity.id in orphans,
                    "color": type_color(entity.type),
                    "focused": entity.id == focus_entity,
                },
                position=Position(x=x, y=y),
            )
        )

    node_ids = {n.id for n in nodes}
    edges: list[RenderEdge] = []
    seen: set[tuple[str, str]] = set()
    for entity in placed:
        for rel in entity.related_entries:
            if rel.id not in node_ids or (entity.id, rel.id) in seen:
                continue
            seen.add((entity.id, rel.id))
            edges.append(
                RenderEdge(
                    id=f"{entity.id}-{rel.id}",
                    source=entity.id,
                    target=rel.id,
                    label=rel.relationship or None,
                    animated=rel.relationship == "causes",
                    weight=2 if rel.strength == "strong" else 1,
                )
            )

    return RenderGraph(nodes=nodes, edges=edges)
