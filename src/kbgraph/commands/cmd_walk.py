"""Walk the graph from one entity: its N-hop neighborhood, recentered."""

from __future__ import annotations

import click

from kbgraph.commands.resolve import project_config, require_corpus, require_render_graph
from kbgraph.output.formatter import json_envelope, table, to_json
from kbgraph.output.mermaid import diagram, edge, node
from kbgraph.render import prepare_render_graph
from kbgraph.walk.projector import walk_view
from kbgraph.walk.traversal import TraversalMode

# Causal paths follow long chains; the plain walk stays local
_CAUSAL_DEFAULT_DEPTH = 10


def _walk_mermaid(view) -> str:
    elements = [node(n.id, str(n.data.get("label") or n.id)) for n in view.nodes]
    elements.extend(edge(e.source, e.target, e.label) for e in view.edges)
    return diagram("LR", elements)


@click.command()
@click.argument('entity_id')
@click.option('--depth', type=click.IntRange(min=0), default=None,
              help='Hops from the focus entity (default: walk_depth from config; 10 with --causal)')
@click.option('--graph', 'graph_path', type=click.Path(dir_okay=False), default=None,
              help='Render graph JSON ({"nodes": [...], "edges": [...]}); default: laid out from the snapshot')
@click.option('--causal', is_flag=True, help='Follow edge direction: only upstream and downstream chains')
@click.option('--mermaid', is_flag=True, help='Emit a Mermaid flowchart of the walk')
@click.pass_context
def walk(ctx, entity_id, depth, graph_path, causal, mermaid):
    """Show the neighborhood of ENTITY_ID as walk mode would draw it."""
    json_mode = ctx.obj.get('json') if ctx.obj else False
    if depth is None:
        depth = _CAUSAL_DEFAULT_DEPTH if causal else int(project_config(ctx)["walk_depth"])

    if graph_path:
        graph = require_render_graph(graph_path)
    else:
        corpus = require_corpus(ctx)
        graph = prepare_render_graph(
            corpus.entities, corpus.backlinks, focus_entity=entity_id, show_orphans=True, jitter=False,
        )

    mode = TraversalMode.DIRECTED if causal else TraversalMode.UNDIRECTED
    view = walk_view(graph.nodes, graph.edges, entity_id, depth=depth, mode=mode)

    if mermaid:
        click.echo(_walk_mermaid(view))
        return

    if json_mode:
        click.echo(to_json(json_envelope(
            "walk",
            summary={
                "center": entity_id,
                "depth": depth,
                "mode": mode.value,
                "nodes": len(view.nodes),
                "edges": len(view.edges),
                "found": any(n.id == entity_id for n in view.nodes),
            },
            nodes=[n.to_dict() for n in view.nodes],
            edges=[e.to_dict() for e in view.edges],
        )))
        return

    if not any(n.id == entity_id for n in view.nodes):
        click.echo(f"{entity_id} is not in the graph; nothing to walk.")
        return

    label = "Causal path" if causal else "Walk"
    click.echo(f"=== {label} from {entity_id} (depth {depth}): {len(view.nodes)} nodes, {len(view.edges)} edges ===")
    rows = [
        [n.id, str(n.data.get("label") or ""), f"{n.position.x:.0f}", f"{n.position.y:.0f}"]
        for n in view.nodes
    ]
    click.echo(table(["ID", "Label", "X", "Y"], rows))
    if view.edges:
        click.echo("\nEdges:")
        rows = [[e.source, e.label or "", e.target] for e in view.edges]
        click.echo(table(["Source", "Relationship", "Target"], rows))
