"""Data types for the semantic entity graph and the rendering graph.

The two graphs are kept apart on purpose: an :class:`Entity` describes a
knowledge-base item and its authored relations, while a :class:`RenderNode`
is whatever the rendering layer draws, including synthetic layout nodes
(see :class:`StructuralNodeType`) that must never reach semantic analyses.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


# ---------------------------------------------------------------------------
# Semantic graph
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RelatedEntry:
    """A forward relation authored on an entity."""

    id: str
    type: str = ""
    relationship: str = ""
    strength: str | None = None


@dataclass(frozen=True)
class Backlink:
    """A reverse relation from the precomputed backlink index."""

    id: str
    relationship: str = ""


@dataclass(frozen=True)
class Entity:
    id: str
    title: str = ""
    type: str = ""
    related_entries: tuple[RelatedEntry, ...] = ()


@dataclass(frozen=True)
class Cluster:
    """A community found by label propagation.

    ``id`` is the converged label, which is itself an entity id.
    """

    id: str
    entities: list[str]
    central_node: str
    size: int

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "entities": list(self.entities),
            "central_node": self.central_node,
            "size": self.size,
        }


@dataclass
class Corpus:
    """Parsed snapshot of the entity store."""

    entities: list[Entity] = field(default_factory=list)
    backlinks: dict[str, list[Backlink]] = field(default_factory=dict)


# ---------------------------------------------------------------------------
# Rendering graph
# ---------------------------------------------------------------------------


class StructuralNodeType(str, Enum):
    """Layout-only node types with no relationship meaning."""

    GROUP = "group"
    SUBGROUP = "subgroup"
    CLUSTER_CONTAINER = "clusterContainer"


STRUCTURAL_NODE_TYPES = frozenset(t.value for t in StructuralNodeType)


def is_structural(node_type: str | None) -> bool:
    return node_type in STRUCTURAL_NODE_TYPES


@dataclass(frozen=True)
class Position:
    x: float = 0.0
    y: float = 0.0


@dataclass(frozen=True)
class RenderNode:
    id: str
    type: str | None = None
    data: dict[str, Any] = field(default_factory=dict)
    position: Position = field(default_factory=Position)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "type": self.type,
            "data": dict(self.data),
            "position": {"x": self.position.x, "y": self.position.y},
        }


@dataclass(frozen=True)
class RenderEdge:
    id: str
    source: str
    target: str
    label: str | None = None
    animated: bool = False
    weight: int = 1

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "source": self.source,
            "target": self.target,
            "label": self.label,
            "animated": self.animated,
            "weight": self.weight,
        }


@dataclass
class RenderGraph:
    nodes: list[RenderNode] = field(default_factory=list)
    edges: list[RenderEdge] = field(default_factory=list)


@dataclass
class Neighborhood:
    """Nodes reached and edges traversed by a bounded walk."""

    node_ids: set[str] = field(default_factory=set)
    edge_ids: set[str] = field(default_factory=set)


@dataclass
class WalkView:
    """A focused, filtered and recentered slice of a render graph."""

    center: str
    depth: int
    nodes: list[RenderNode]
    edges: list[RenderEdge]
    neighborhood: Neighborhood
