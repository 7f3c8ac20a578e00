"""Build the undirected semantic graph from entity relations and backlinks."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

import networkx as nx

from kbgraph.models import Backlink, Entity


def build_adjacency(
    entities: Iterable[Entity],
    backlinks: Mapping[str, Iterable[Backlink]] | None = None,
) -> nx.Graph:
    """Union forward relations and backlinks into one symmetric graph.

    Every entity becomes a node, even with no relations.  Relation and
    backlink targets that are not in *entities* become bare nodes with no
    attributes.  Direction and relationship type are discarded; duplicate
    records collapse into one edge.

    Node order is first-mention order and each node's neighbor order is
    first-insertion order.  Tie-breaking in centrality and clustering
    depends on both.

    Records are assumed well-formed (every record has an ``id``).
    """
    G = nx.Graph()

    entities = list(entities)
    G.add_nodes_from(e.id for e in entities)

    for entity in entities:
        for rel in entity.related_entries:
            G.add_edge(entity.id, rel.id)

    for entity_id, links in (backlinks or {}).items():
        G.add_node(entity_id)
        for link in links:
            G.add_edge(entity_id, link.id)

    return G


def neighbor_count(G: nx.Graph, node: str) -> int:
    """Distinct neighbors of *node* (a self relation counts once)."""
    return len(G.adj[node]) if node in G else 0
