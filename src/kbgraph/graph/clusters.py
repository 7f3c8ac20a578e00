"""Label propagation community detection for the entity graph."""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterable

import networkx as nx

from kbgraph.graph.adjacency import neighbor_count
from kbgraph.models import Cluster, Entity

log = logging.getLogger(__name__)

MAX_ITERATIONS = 10


def _propagate_labels(G: nx.Graph, max_iterations: int) -> dict[str, str]:
    """Run asynchronous label propagation and return ``{node: label}``.

    Updates are visible within the same pass, so the result depends on
    node order.  Ties go to the first label reaching the highest count in
    neighbor order (``Counter`` keeps first-encountered order for ties).
    """
    labels = {node: node for node in G}

    for iteration in range(max_iterations):
        changed = False
        for node, nbrs in G.adj.items():
            if not nbrs:
                continue
            counts = Counter(labels.get(nbr, nbr) for nbr in nbrs)
            best = counts.most_common(1)[0][0]
            if labels[node] != best:
                labels[node] = best
                changed = True
        if not changed:
            log.debug("Label propagation converged after %d passes", iteration + 1)
            break
    else:
        # Not an error: the partition at the cap is returned as-is.
        log.debug("Label propagation stopped at the %d-pass cap without converging", max_iterations)

    return labels


def detect_clusters(G: nx.Graph, max_iterations: int = MAX_ITERATIONS) -> list[Cluster]:
    """Detect communities in *G* by label propagation.

    Groups of one node are dropped.  Each cluster's ``central_node`` is its
    highest-degree member (first seen wins ties) and its ``id`` is the
    converged label.  Clusters are sorted by size, largest first; equal
    sizes keep discovery order.

    ``networkx.community.asyn_lpa_communities`` is not used because its
    randomized node order and tie-breaking would change cluster ids.
    """
    if len(G) == 0:
        return []

    labels = _propagate_labels(G, max_iterations)

    groups: dict[str, list[str]] = {}
    for node, label in labels.items():
        groups.setdefault(label, []).append(node)

    clusters: list[Cluster] = []
    for label, members in groups.items():
        if len(members) < 2:
            continue
        central = members[0]
        best_degree = 0
        for member in members:
            degree = neighbor_count(G, member)
            if degree > best_degree:
                best_degree = degree
                central = member
        clusters.append(Cluster(id=label, entities=members, central_node=central, size=len(members)))

    clusters.sort(key=lambda c: c.size, reverse=True)
    return clusters


def label_clusters(clusters: list[Cluster], entities: Iterable[Entity]) -> dict[str, str]:
    """Generate human-readable labels for clusters.

    Strategy:
    1. Name the cluster after its central node's title.
    2. Append the dominant entity type.  When no type covers at least 60%
       of the typed members, show the top two types with percentages.

    Ids missing from *entities* fall back to the raw id and carry no type.

    Returns ``{cluster_id: label}``.
    """
    if not clusters:
        return {}

    lookup = {e.id: e for e in entities}

    labels: dict[str, str] = {}
    for cluster in clusters:
        central = lookup.get(cluster.central_node)
        title = (central.title if central else "") or cluster.central_node

        types = Counter(lookup[m].type for m in cluster.entities if m in lookup and lookup[m].type)
        if not types:
            labels[cluster.id] = title
            continue

        typed = sum(types.values())
        top_type, top_count = types.most_common(1)[0]
        if len(types) == 1 or top_count / typed >= 0.6:
            labels[cluster.id] = f"{title} ({top_type})"
            continue

        parts = [f"{t} {c * 100 / typed:.0f}%" for t, c in types.most_common(2)]
        labels[cluster.id] = f"{title} ({' + '.join(parts)})"
    return labels


def cluster_quality(G: nx.Graph, clusters: list[Cluster]) -> dict:
    """Compute quality metrics for the detected community structure.

    Returns a dict with:
    - ``modularity``: Newman's modularity Q-score [-0.5, 1.0] over the
      partition formed by the clusters plus one singleton community for
      every unclustered node.  Q > 0.3 indicates meaningful structure.
    - ``per_cluster``: ``{cluster_id: conductance}``.
      Conductance phi(S) = cut(S, S_bar) / min(vol(S), vol(S_bar)).
      Lower = tighter cluster.
    - ``mean_conductance``: average conductance across all clusters.
    """
    if not clusters or G.number_of_edges() == 0:
        return {"modularity": 0.0, "per_cluster": {}, "mean_conductance": 0.0}

    communities = [set(c.entities) for c in clusters]
    covered = set().union(*communities)
    communities.extend({node} for node in G if node not in covered)

    q = nx.community.modularity(G, communities)

    per_cluster: dict[str, float] = {}
    for cluster in clusters:
        members = set(cluster.entities)
        rest = G.number_of_nodes() - len(members)
        if rest == 0:
            per_cluster[cluster.id] = 0.0
            continue
        try:
            per_cluster[cluster.id] = round(nx.conductance(G, members), 4)
        except ZeroDivisionError:
            # The complement has no edges at all.
            per_cluster[cluster.id] = 0.0

    conductances = list(per_cluster.values())
    mean_cond = round(sum(conductances) / len(conductances), 4) if conductances else 0.0

    return {
        "modularity": round(q, 4),
        "per_cluster": per_cluster,
        "mean_conductance": mean_cond,
    }
