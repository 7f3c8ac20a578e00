"""Show detected entity clusters and their quality."""

from __future__ import annotations

import click

from kbgraph.commands.resolve import require_corpus
from kbgraph.graph.adjacency import build_adjacency
from kbgraph.graph.clusters import cluster_quality, detect_clusters, label_clusters
from kbgraph.output.formatter import json_envelope, table, to_json, truncate_lines
from kbgraph.output.mermaid import diagram, edge, node, sanitize_id, subgraph
from kbgraph.store import entity_map

# Keep diagrams readable
_MERMAID_MAX_CLUSTERS = 8
_MERMAID_MAX_MEMBERS = 12


def _clusters_mermaid(G, clusters, labels, titles) -> str:
    """One subgraph per cluster plus the edges between the members shown."""
    elements: list[str] = []
    shown: set[str] = set()
    for c in clusters[:_MERMAID_MAX_CLUSTERS]:
        members = c.entities[:_MERMAID_MAX_MEMBERS]
        shown.update(members)
        lines = [node(m, titles[m].title if m in titles and titles[m].title else m) for m in members]
        elements.append(subgraph(labels.get(c.id, c.id), lines))

    seen: set[tuple[str, str]] = set()
    for u, v in G.edges():
        if u in shown and v in shown and u != v:
            key = tuple(sorted((sanitize_id(u), sanitize_id(v))))
            if key in seen:
                continue
            seen.add(key)
            elements.append(edge(u, v))
    return diagram("LR", elements)


@click.command()
@click.option('--min-size', type=int, default=2, show_default=True, help='Hide clusters smaller than this')
@click.option('--members', 'show_members', is_flag=True, help='List member ids under each cluster')
@click.option('--mermaid', is_flag=True, help='Emit a Mermaid flowchart instead of a table')
@click.pass_context
def clusters(ctx, min_size, show_members, mermaid):
    """Detect clusters of related entities by label propagation."""
    json_mode = ctx.obj.get('json') if ctx.obj else False
    corpus = require_corpus(ctx)
    titles = entity_map(corpus.entities)

    G = build_adjacency(corpus.entities, corpus.backlinks)
    found = detect_clusters(G)
    quality = cluster_quality(G, found)
    visible = [c for c in found if c.size >= min_size]
    labels = label_clusters(visible, corpus.entities)

    if mermaid:
        click.echo(_clusters_mermaid(G, visible, labels, titles))
        return

    if json_mode:
        click.echo(to_json(json_envelope(
            "clusters",
            summary={
                "clusters": len(visible),
                "clustered_entities": sum(c.size for c in visible),
                "modularity": quality["modularity"],
                "mean_conductance": quality["mean_conductance"],
            },
            clusters=[
                dict(
                    c.to_dict(),
                    label=labels.get(c.id, c.id),
                    conductance=quality["per_cluster"].get(c.id, 0.0),
                )
                for c in visible
            ],
        )))
        return

    if not visible:
        click.echo("No clusters found.")
        return

    click.echo(f"=== Clusters ({len(visible)}, modularity {quality['modularity']:.2f}) ===")
    rows = [
        [labels.get(c.id, c.id), str(c.size), c.central_node, f"{quality['per_cluster'].get(c.id, 0.0):.2f}"]
        for c in visible
    ]
    click.echo(table(["Cluster", "Size", "Central", "Conductance"], rows))

    if show_members:
        for c in visible:
            click.echo(f"\n  {labels.get(c.id, c.id)}:")
            for line in truncate_lines(c.entities, 20):
                click.echo(f"    {line}")
