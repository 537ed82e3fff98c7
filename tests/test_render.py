"""Tests for the pyvis network view."""

from linkitall.layout import compute_layout, render_network


class TestRenderNetwork:
    """Tests for render_network function."""

    def test_render_creates_file(self, diamond_graph, tmp_path):
        layout = compute_layout(diamond_graph, {})
        output_path = tmp_path / "network.html"

        render_network(layout.nodes, output_path)

        assert output_path.exists()
        content = output_path.read_text()
        assert "<html" in content
        assert "</html>" in content
        for node in layout.nodes:
            assert node.elem_id in content

    def test_edges_point_to_dependents(self, linear_chain, tmp_path):
        layout = compute_layout(linear_chain, {})
        output_path = tmp_path / "network.html"

        render_network(layout.nodes, output_path, node_box_width=200)

        content = output_path.read_text()
        assert '"from": "00000"' in content
        assert '"to": "00002"' in content
