"""Show corpus-wide graph structure: counts, clusters, hubs, orphans."""

from __future__ import annotations

import click

from kbgraph.commands.resolve import project_config, require_corpus
from kbgraph.graph.dashboard import build_dashboard
from kbgraph.output.formatter import json_envelope, table, to_json


@click.command()
@click.option('--limit', type=int, default=None, help='Rows per table (default: top_limit from config)')
@click.pass_context
def dashboard(ctx, limit):
    """Summarize clusters, most connected entities and orphans."""
    json_mode = ctx.obj.get('json') if ctx.obj else False
    if limit is None:
        limit = int(project_config(ctx)["top_limit"])

    corpus = require_corpus(ctx)
    data = build_dashboard(corpus, top_limit=limit)

    if json_mode:
        click.echo(to_json(json_envelope(
            "dashboard",
            summary={
                "entities": data["entity_count"],
                "nodes": data["node_count"],
                "edges": data["edge_count"],
                "orphans": len(data["orphans"]),
                "clusters": len(data["clusters"]),
                "modularity": data["quality"]["modularity"],
            },
            clusters=data["clusters"][:limit],
            top_connected=data["top_connected"],
            orphans=data["orphans"],
        )))
        return

    click.echo(
        f"Entities: {data['entity_count']}  Nodes: {data['node_count']}  "
        f"Edges: {data['edge_count']}  Orphans: {len(data['orphans'])}"
    )
    click.echo(
        f"Clusters: {len(data['clusters'])}  "
        f"(modularity {data['quality']['modularity']:.2f}, "
        f"mean conductance {data['quality']['mean_conductance']:.2f})"
    )

    click.echo("\n=== Largest clusters ===")
    rows = [[c["label"], str(c["size"]), c["central_node"]] for c in data["clusters"]]
    click.echo(table(["Cluster", "Size", "Central"], rows, budget=limit))

    click.echo("\n=== Most connected ===")
    rows = [[t["title"], t["id"], str(t["connections"])] for t in data["top_connected"]]
    click.echo(table(["Title", "ID", "Links"], rows))
