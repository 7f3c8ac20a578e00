"""Emit the laid-out render graph for the entity corpus."""

from __future__ import annotations

import click

from kbgraph.commands.resolve import require_corpus
from kbgraph.output.formatter import json_envelope, to_json
from kbgraph.render import prepare_render_graph


@click.command()
@click.option('--focus', default=None, help='Entity id to mark as focused')
@click.option('--show-orphans', is_flag=True, help='Include entities with no relations')
@click.option('--max-nodes', type=click.IntRange(min=1), default=None, help='Cap on placed entities')
@click.option('--seed', type=int, default=42, show_default=True, help='Seed for position jitter')
@click.option('--no-jitter', is_flag=True, help='Place nodes exactly on the grid')
@click.pass_context
def render(ctx, focus, show_orphans, max_nodes, seed, no_jitter):
    """Lay out entities on a grid as render nodes and edges (always JSON)."""
    corpus = require_corpus(ctx)
    graph = prepare_render_graph(
        corpus.entities,
        corpus.backlinks,
        focus_entity=focus,
        show_orphans=show_orphans,
        max_nodes=max_nodes,
        jitter=not no_jitter,
        seed=seed,
    )
    click.echo(to_json(json_envelope(
        "render",
        summary={"nodes": len(graph.nodes), "edges": len(graph.edges)},
        nodes=[n.to_dict() for n in graph.nodes],
        edges=[e.to_dict() for e in graph.edges],
    )))
