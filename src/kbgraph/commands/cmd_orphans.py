"""List entities with no relations in either direction."""

from __future__ import annotations

import click

from kbgraph.commands.resolve import require_corpus
from kbgraph.exit_codes import GateFailureError
from kbgraph.graph.adjacency import build_adjacency
from kbgraph.graph.centrality import find_orphans
from kbgraph.output.formatter import json_envelope, table, to_json
from kbgraph.store import entity_map


@click.command()
@click.option('--fail-on-orphans', is_flag=True, help='Exit with code 5 when any orphan exists (for CI)')
@click.pass_context
def orphans(ctx, fail_on_orphans):
    """Find entities that nothing links to and that link to nothing."""
    json_mode = ctx.obj.get('json') if ctx.obj else False
    corpus = require_corpus(ctx)
    lookup = entity_map(corpus.entities)

    found = find_orphans(build_adjacency(corpus.entities, corpus.backlinks))

    if json_mode:
        click.echo(to_json(json_envelope(
            "orphans",
            summary={"orphans": len(found), "entities": len(corpus.entities)},
            orphans=[
                {"id": o, "title": lookup[o].title if o in lookup else o, "type": lookup[o].type if o in lookup else ""}
                for o in found
            ],
        )))
    elif not found:
        click.echo("No orphans.")
    else:
        click.echo(f"=== Orphans ({len(found)} of {len(corpus.entities)} entities) ===")
        rows = [[o, lookup[o].title if o in lookup else "", lookup[o].type if o in lookup else ""] for o in found]
        click.echo(table(["ID", "Title", "Type"], rows))

    if fail_on_orphans and found:
        raise GateFailureError(f"{len(found)} orphaned entities")
