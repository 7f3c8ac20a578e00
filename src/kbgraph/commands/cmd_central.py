"""Rank entities by how many others they connect to."""

from __future__ import annotations

import click

from kbgraph.commands.resolve import project_config, require_corpus
from kbgraph.graph.adjacency import build_adjacency
from kbgraph.graph.centrality import top_connected
from kbgraph.output.formatter import json_envelope, table, to_json
from kbgraph.store import entity_map


@click.command()
@click.option('--limit', type=int, default=None, help='How many entities to show (default: top_limit from config)')
@click.pass_context
def central(ctx, limit):
    """Show the most connected entities (plain degree)."""
    json_mode = ctx.obj.get('json') if ctx.obj else False
    if limit is None:
        limit = int(project_config(ctx)["top_limit"])

    corpus = require_corpus(ctx)
    G = build_adjacency(corpus.entities, corpus.backlinks)
    ranked = top_connected(G, entity_map(corpus.entities), limit=limit)

    if json_mode:
        click.echo(to_json(json_envelope(
            "central",
            summary={"shown": len(ranked), "nodes": G.number_of_nodes()},
            top_connected=ranked,
        )))
        return

    click.echo(f"=== Most connected ({len(ranked)} of {G.number_of_nodes()}) ===")
    rows = [[r["title"], r["id"], str(r["connections"])] for r in ranked]
    click.echo(table(["Title", "ID", "Links"], rows))
