"""Graph algorithms for the entity corpus."""

from kbgraph.graph.adjacency import build_adjacency, neighbor_count
from kbgraph.graph.centrality import degree_centrality, find_orphans, top_connected
from kbgraph.graph.clusters import (
    MAX_ITERATIONS,
    cluster_quality,
    detect_clusters,
    label_clusters,
)
from kbgraph.graph.dashboard import build_dashboard

__all__ = [
    "build_adjacency",
    "neighbor_count",
    "find_orphans",
    "degree_centrality",
    "top_connected",
    "MAX_ITERATIONS",
    "detect_clusters",
    "label_clusters",
    "cluster_quality",
    "build_dashboard",
]
