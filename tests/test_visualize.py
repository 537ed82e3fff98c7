"""Tests for page and report generation."""

import json

from linkitall.assets import PACKAGED_ASSETS
from linkitall.graph import load_graph
from linkitall.layout import NodeDefinition
from linkitall.visualize import (
    format_level_map,
    generate_html,
    generate_json,
    generate_summary,
    layout_graph,
    render_node,
)


class TestGenerateHtml:
    """Tests for generate_html function."""

    def test_page_structure(self, graph_dir):
        definition = load_graph(graph_dir / "graph.yaml")
        layout = layout_graph(definition)
        output = graph_dir / "index.html"

        generate_html(definition, layout, output)
        content = output.read_text()

        assert content.startswith("<!DOCTYPE html>")
        assert "<title>Test graph</title>" in content
        assert "linkitall_assets/main.js" in content
        assert "linkitall_assets/style.css" in content
        for node in layout.nodes:
            assert f'id="{node.elem_id}"' in content

    def test_dots_paired(self, graph_dir):
        definition = load_graph(graph_dir / "graph.yaml")
        layout = layout_graph(definition)
        output = graph_dir / "index.html"

        generate_html(definition, layout, output)
        content = output.read_text()

        for node in layout.nodes:
            for dot in node.depends_on_dots:
                assert f'class="dot link-source" id="{dot.dot_id}"' in content
                assert f'id="{dot.dot_id.replace("D_", "U_", 1)}"' in content

    def test_dots_jump_to_partner(self, graph_dir):
        definition = load_graph(graph_dir / "graph.yaml")
        layout = layout_graph(definition)
        theorem = layout.nodes[2]

        html = render_node(theorem, 300)

        for dot in theorem.depends_on_dots:
            assert f"onclick=\"showNode('{dot.partner_elem_id}')\"" in html
        assert "function showNode(" in (PACKAGED_ASSETS / "main.js").read_text()

    def test_link_box(self, graph_dir):
        definition = load_graph(graph_dir / "graph.yaml")
        layout = layout_graph(definition)
        output = graph_dir / "index.html"

        generate_html(definition, layout, output)
        content = output.read_text()

        assert 'href="spec.pdf#page=1&amp;section2"' in content
        assert content.count('class="link-box"') == 1

    def test_text_escaped(self, graph_dir):
        definition = load_graph(graph_dir / "graph.yaml")
        layout = layout_graph(definition)
        node = layout.nodes[0]
        node.definition = NodeDefinition(name="a", title="<b>x</b>")

        html = render_node(node, 300)

        assert "&lt;b&gt;x&lt;/b&gt;" in html
        assert "<b>x</b>" not in html

    def test_positions_in_style(self, graph_dir):
        definition = load_graph(graph_dir / "graph.yaml")
        layout = layout_graph(definition)

        theorem = layout.nodes[2]
        html = render_node(theorem, 300)

        assert "left: 0px; top: 0px; width: 300px;" in html


class TestGenerateJson:
    """Tests for generate_json function."""

    def test_contents(self, graph_dir):
        layout = layout_graph(load_graph(graph_dir / "graph.yaml"))
        output = graph_dir / "layout.json"

        generate_json(layout, output)
        data = json.loads(output.read_text())

        assert data["strategy"] == "bottom2top"
        assert data["level_map"] == [[0], [1], [2]]
        assert [n["name"] for n in data["nodes"]] == ["axiom_one", "lemma", "theorem"]
        assert data["nodes"][1]["link"] == "spec.pdf#page=1&section2"
        assert data["nodes"][2]["depends_on_dots"][0]["dot_id"].startswith("D_00002_")


class TestSummary:
    """Tests for generate_summary and format_level_map."""

    def test_format_level_map_top_first(self, graph_dir):
        layout = layout_graph(load_graph(graph_dir / "graph.yaml"))

        lines = format_level_map(layout)

        assert lines == ["    2: theorem", "    1: lemma", "    0: axiom_one"]

    def test_summary_file(self, graph_dir):
        definition = load_graph(graph_dir / "graph.yaml")
        layout = layout_graph(definition)
        output = graph_dir / "summary.txt"

        generate_summary(definition, layout, output)
        content = output.read_text()

        assert "Nodes: 3" in content
        assert "Edges: 3" in content
        assert "Levels: 3" in content
        assert "Level strategy: bottom2top" in content
