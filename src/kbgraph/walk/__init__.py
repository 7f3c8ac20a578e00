"""Walk mode: bounded neighborhoods over a rendering graph."""

from kbgraph.walk.projector import center_nodes_around, filter_walk_nodes, walk_view
from kbgraph.walk.traversal import (
    TraversalMode,
    compute_causal_path,
    compute_neighborhood,
    traverse_graph,
)

__all__ = [
    "TraversalMode",
    "traverse_graph",
    "compute_neighborhood",
    "compute_causal_path",
    "filter_walk_nodes",
    "center_nodes_around",
    "walk_view",
]
