"""Turn a neighborhood into the node list drawn in walk mode."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import replace

from kbgraph.models import Position, RenderEdge, RenderNode, WalkView, is_structural
from kbgraph.walk.traversal import TraversalMode, traverse_graph


def filter_walk_nodes(nodes: Iterable[RenderNode], neighborhood_node_ids: set[str]) -> list[RenderNode]:
    """Keep neighborhood members, always dropping structural layout nodes.

    A group/subgroup/clusterContainer node is dropped even when it lies
    inside the neighborhood.  Order and node fields are preserved.
    """
    return [
        node for node in nodes
        if not is_structural(node.type) and node.id in neighborhood_node_ids
    ]


def center_nodes_around(nodes: list[RenderNode], center_node_id: str) -> list[RenderNode]:
    """Translate every position so *center_node_id* sits at the origin.

    When the center is not among *nodes* the input is returned unchanged.
    Only ``position`` changes; other fields pass through as-is.
    """
    center = next((n for n in nodes if n.id == center_node_id), None)
    if center is None:
        return nodes

    cx, cy = center.position.x, center.position.y
    return [
        replace(node, position=Position(x=node.position.x - cx, y=node.position.y - cy))
        for node in nodes
    ]


def walk_view(
    nodes: Iterable[RenderNode],
    edges: Iterable[RenderEdge],
    center_node_id: str,
    depth: int = 1,
    mode: TraversalMode = TraversalMode.UNDIRECTED,
) -> WalkView:
    """Compute, filter and recenter the walk-mode slice around a focus node.

    Edges are limited to those traversed by the walk whose endpoints both
    survived filtering.  ``TraversalMode.DIRECTED`` shows the causal path
    through the focus node instead of its plain neighborhood.
    """
    edges = list(edges)
    neighborhood = traverse_graph(center_node_id, edges, depth, mode)
    kept = center_nodes_around(filter_walk_nodes(nodes, neighborhood.node_ids), center_node_id)

    kept_ids = {n.id for n in kept}
    kept_edges = [
        e for e in edges
        if e.id in neighborhood.edge_ids and e.source in kept_ids and e.target in kept_ids
    ]
    return WalkView(
        center=center_node_id,
        depth=depth,
        nodes=kept,
        edges=kept_edges,
        neighborhood=neighborhood,
    )
