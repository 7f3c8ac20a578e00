"""One-call summary of the whole corpus for the dashboard view."""

from __future__ import annotations

from kbgraph.graph.adjacency import build_adjacency
from kbgraph.graph.centrality import find_orphans, top_connected
from kbgraph.graph.clusters import cluster_quality, detect_clusters, label_clusters
from kbgraph.models import Corpus
from kbgraph.store import entity_map


def build_dashboard(corpus: Corpus, top_limit: int = 10) -> dict:
    """Compute the corpus-wide structure shown on the dashboard.

    Returns::

        {
            "entity_count": int,
            "node_count": int,       # includes ids only mentioned in links
            "edge_count": int,
            "orphans": [id, ...],
            "clusters": [{"id", "label", "entities", "central_node", "size"}],
            "quality": {"modularity", "per_cluster", "mean_conductance"},
            "top_connected": [{"id", "title", "connections"}],
        }
    """
    G = build_adjacency(corpus.entities, corpus.backlinks)
    clusters = detect_clusters(G)
    labels = label_clusters(clusters, corpus.entities)

    return {
        "entity_count": len(corpus.entities),
        "node_count": G.number_of_nodes(),
        "edge_count": G.number_of_edges(),
        "orphans": find_orphans(G),
        "clusters": [dict(c.to_dict(), label=labels.get(c.id, c.id)) for c in clusters],
        "quality": cluster_quality(G, clusters),
        "top_connected": top_connected(G, entity_map(corpus.entities), limit=top_limit),
    }
