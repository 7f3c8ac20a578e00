"""Orphan detection and degree centrality over the semantic graph."""

from __future__ import annotations

from collections.abc import Mapping

import networkx as nx

from kbgraph.models import Entity


def find_orphans(G: nx.Graph) -> list[str]:
    """Return nodes with no neighbors, in node order."""
    return [node for node, nbrs in G.adj.items() if len(nbrs) == 0]


def degree_centrality(G: nx.Graph) -> dict[str, int]:
    """Return ``{node: distinct_neighbor_count}``.

    Plain degree, unweighted by relationship type or strength.  This is
    not ``nx.degree_centrality`` (which normalizes and double-counts
    self loops).
    """
    return {node: len(nbrs) for node, nbrs in G.adj.items()}


def _title_of(titles: Mapping[str, str | Entity], node: str) -> str:
    value = titles.get(node)
    if isinstance(value, Entity):
        return value.title or node
    return value or node


def top_connected(
    G: nx.Graph,
    titles: Mapping[str, str | Entity] | None = None,
    limit: int = 10,
) -> list[dict]:
    """Rank nodes by degree, highest first.

    *titles* maps id to a title (or to the :class:`Entity`); ids with no
    title are shown as-is.  Ties keep node order, which is stable but
    carries no meaning.

    Returns ``[{"id": str, "title": str, "connections": int}, ...]``.
    """
    if limit <= 0:
        return []
    titles = titles or {}
    ranked = sorted(degree_centrality(G).items(), key=lambda kv: kv[1], reverse=True)
    return [
        {"id": node, "title": _title_of(titles, node), "connections": count}
        for node, count in ranked[:limit]
    ]
