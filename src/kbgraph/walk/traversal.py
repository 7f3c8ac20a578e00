"""Depth-bounded neighborhood walks over a rendering graph's edge list.

Implements the wave-by-wave BFS behind walk mode: starting from a focus
node, expand one hop per wave, record every edge crossed, and stop at the
depth cap or when a wave discovers nothing new.  The index is built from
the caller's edge list on every call and is unrelated to the semantic
adjacency in :mod:`kbgraph.graph.adjacency`.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable
from enum import Enum
from typing import Dict, List, Tuple

from kbgraph.models import Neighborhood, RenderEdge

# node -> [(neighbor, edge_id), ...] in edge-list order
_Index = Dict[str, List[Tuple[str, str]]]


class TraversalMode(str, Enum):
    UNDIRECTED = "undirected"
    DIRECTED = "directed"


def _index(edges: Iterable[RenderEdge], forward: bool = True, backward: bool = True) -> _Index:
    index: _Index = defaultdict(list)
    for edge in edges:
        if forward:
            index[edge.source].append((edge.target, edge.id))
        if backward:
            index[edge.target].append((edge.source, edge.id))
    return index


def _walk(start_id: str, index: _Index, depth: int, result: Neighborhood) -> None:
    """Expand *result* from *start_id* through *index* for up to *depth* waves.

    Edges into already-visited nodes are recorded but those nodes are not
    expanded again, so cycles terminate.
    """
    frontier = {start_id}
    for _ in range(depth):
        if not frontier:
            break
        next_frontier: set[str] = set()
        for node in frontier:
            for next_id, edge_id in index.get(node, ()):
                result.edge_ids.add(edge_id)
                if next_id not in result.node_ids:
                    result.node_ids.add(next_id)
                    next_frontier.add(next_id)
        frontier = next_frontier


def traverse_graph(
    start_id: str,
    edges: Iterable[RenderEdge],
    depth: int,
    mode: TraversalMode = TraversalMode.UNDIRECTED,
) -> Neighborhood:
    """Collect nodes and edges within *depth* hops of *start_id*.

    ``UNDIRECTED`` treats every edge as two-way (the local neighborhood).
    ``DIRECTED`` walks downstream (source -> target) and then upstream
    (target -> source) separately, sharing one visited set, so the result
    holds only nodes on a causal chain through the start node.

    An unknown *start_id* or a non-positive *depth* yields just the start
    node and no edges.
    """
    edges = list(edges)
    result = Neighborhood(node_ids={start_id}, edge_ids=set())

    if TraversalMode(mode) is TraversalMode.DIRECTED:
        indexes = [_index(edges, backward=False), _index(edges, forward=False)]
    else:
        indexes = [_index(edges)]

    for index in indexes:
        _walk(start_id, index, depth, result)
    return result


def compute_neighborhood(center_node_id: str, edges: Iterable[RenderEdge], depth: int) -> Neighborhood:
    """Bidirectional *depth*-hop neighborhood of *center_node_id*."""
    return traverse_graph(center_node_id, edges, depth, TraversalMode.UNDIRECTED)


def compute_causal_path(start_id: str, edges: Iterable[RenderEdge], max_depth: int = 10) -> Neighborhood:
    """Everything upstream or downstream of *start_id* within *max_depth* hops."""
    return traverse_graph(start_id, edges, max_depth, TraversalMode.DIRECTED)
