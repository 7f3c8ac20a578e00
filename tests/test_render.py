"""Tests for laying out the entity corpus as a render graph."""

from __future__ import annotations

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent))
from conftest import SAMPLE_SNAPSHOT, make_entity

from kbgraph.models import Entity, Position, RelatedEntry
from kbgraph.render import ENTITY_NODE_TYPE, TYPE_COLORS, prepare_render_graph, type_color
from kbgraph.store import parse_corpus


def _corpus():
    return parse_corpus(SAMPLE_SNAPSHOT)


class TestPrepareRenderGraph:
    def test_orphans_hidden_by_default(self):
        corpus = _corpus()
        graph = prepare_render_graph(corpus.entities, corpus.backlinks)
        ids = [n.id for n in graph.nodes]
        assert "lonely-concept" not in ids
        assert len(ids) == 6

    def test_show_orphans(self):
        corpus = _corpus()
        graph = prepare_render_graph(corpus.entities, corpus.backlinks, show_orphans=True)
        orphan = next(n for n in graph.nodes if n.id == "lonely-concept")
        assert orphan.data["isOrphan"] is True
        assert len(graph.nodes) == 7

    def test_grid_positions_without_jitter(self):
        corpus = _corpus()
        graph = prepare_render_graph(corpus.entities, corpus.backlinks, show_orphans=True, jitter=False)
        positions = {n.id: (n.position.x, n.position.y) for n in graph.nodes}
        # 7 nodes -> 3 columns
        assert positions["deceptive-alignment"] == (0, 0)
        assert positions["mesa-optimization"] == (200, 0)
        assert positions["goal-misgeneralization"] == (400, 0)
        assert positions["anthropic"] == (0, 100)
        assert positions["lonely-concept"] == (0, 200)

    def test_jitter_is_seeded(self):
        corpus = _corpus()
        one = prepare_render_graph(corpus.entities, corpus.backlinks, seed=7)
        two = prepare_render_graph(corpus.entities, corpus.backlinks, seed=7)
        other = prepare_render_graph(corpus.entities, corpus.backlinks, seed=8)
        assert one.nodes == two.nodes
        assert [n.position for n in one.nodes] != [n.position for n in other.nodes]

    def test_jitter_stays_within_cell(self):
        corpus = _corpus()
        graph = prepare_render_graph(corpus.entities, corpus.backlinks, show_orphans=True)
        for index, node in enumerate(graph.nodes):
            row, col = divmod(index, 3)
            assert col * 200 <= node.position.x < col * 200 + 50
            assert row * 100 <= node.position.y < row * 100 + 30

    def test_node_data(self):
        corpus = _corpus()
        graph = prepare_render_graph(corpus.entities, corpus.backlinks, focus_entity="anthropic")
        node = next(n for n in graph.nodes if n.id == "anthropic")
        assert node.type == ENTITY_NODE_TYPE
        assert node.data == {
            "label": "Anthropic",
            "entityType": "lab",
            "isOrphan": False,
            "color": TYPE_COLORS["lab"],
            "focused": True,
        }
        others = [n for n in graph.nodes if n.id != "anthropic"]
        assert not any(n.data["focused"] for n in others)

    def test_edges_from_related_entries(self):
        corpus = _corpus()
        graph = prepare_render_graph(corpus.entities, corpus.backlinks)
        by_id = {e.id: e for e in graph.edges}
        assert len(graph.edges) == 6
        causes = by_id["deceptive-alignment-mesa-optimization"]
        assert causes.source == "deceptive-alignment"
        assert causes.target == "mesa-optimization"
        assert causes.label == "causes"
        assert causes.animated is True
        assert causes.weight == 2
        related = by_id["mesa-optimization-goal-misgeneralization"]
        assert related.animated is False
        assert related.weight == 1

    def test_edges_to_unplaced_targets_dropped(self):
        entities = [make_entity("a", "b", "ghost"), make_entity("b")]
        graph = prepare_render_graph(entities)
        assert [e.id for e in graph.edges] == ["a-b"]

    def test_repeated_relation_gives_one_edge(self):
        entities = [
            Entity(
                id="a",
                related_entries=(
                    RelatedEntry(id="b", relationship="causes", strength="strong"),
                    RelatedEntry(id="b", relationship="related"),
                ),
            ),
            Entity(id="b", related_entries=(RelatedEntry(id="a"),)),
        ]
        graph = prepare_render_graph(entities)
        assert [e.id for e in graph.edges] == ["a-b", "b-a"]
        # the first entry wins
        assert graph.edges[0].label == "causes"
        assert graph.edges[0].weight == 2

    def test_max_nodes(self):
        corpus = _corpus()
        graph = prepare_render_graph(corpus.entities, corpus.backlinks, max_nodes=2, jitter=False)
        assert [n.id for n in graph.nodes] == ["deceptive-alignment", "mesa-optimization"]
        assert [e.id for e in graph.edges] == ["deceptive-alignment-mesa-optimization"]
        # 2 nodes -> 2 columns
        assert graph.nodes[1].position == Position(200, 0)

    def test_empty_relationship_gives_no_label(self):
        entities = [
            Entity(id="a", related_entries=(RelatedEntry(id="b"),)),
            Entity(id="b"),
        ]
        (edge,) = prepare_render_graph(entities).edges
        assert edge.label is None

    def test_empty_corpus(self):
        graph = prepare_render_graph([])
        assert graph.nodes == []
        assert graph.edges == []


class TestTypeColor:
    def test_known_type(self):
        assert type_color("risk") == TYPE_COLORS["risk"]

    def test_unknown_type_uses_default(self):
        assert type_color("mystery") == TYPE_COLORS["default"]
        assert type_color("") == TYPE_COLORS["default"]
