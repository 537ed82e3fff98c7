"""Pyvis network view of a computed layout."""

from pathlib import Path

from .model import Node

# Box color per importance tier, light to dark
IMPORTANCE_COLORS = {
    "lowest": "#f1f3f5",
    "lower": "#e9ecef",
    "low": "#dee2e6",
    "normal": "#d0ebff",
    "high": "#ffd43b",
    "higher": "#ffa94d",
    "highest": "#ff6b6b",
}


def _tooltip(node: Node) -> str:
    lines = [node.definition.title or node.name]
    if node.definition.subtitle:
        lines.append(node.definition.subtitle)
    lines.append(f"Level {node.level}, shift {node.shift}")
    if node.link:
        lines.append(node.link)
    return "\n".join(lines)


def render_network(
    nodes: list[Node],
    output_path: Path,
    node_box_width: int = 300,
) -> None:
    """Render laid-out nodes with pyvis at their computed positions.

    Physics is disabled so the layered layout is kept as is. Edges point from
    a dependency to the node that uses it.

    Args:
        nodes: Nodes with positions and element IDs assigned.
        output_path: Path to write the HTML file.
        node_box_width: Width of a node box, used to center labels.
    """
    from pyvis.network import Network

    net = Network(
        height="100vh",
        width="100%",
        bgcolor="#ffffff",
        directed=True,
    )
    net.toggle_physics(False)

    for node in nodes:
        color = IMPORTANCE_COLORS.get(node.definition.importance, IMPORTANCE_COLORS["normal"])
        net.add_node(
            node.elem_id,
            label=node.definition.title or node.name,
            title=_tooltip(node),
            x=node.left + node_box_width / 2,
            y=node.top,
            fixed=True,
            shape="box",
            color=color,
            font={"size": 14},
        )

    for node in nodes:
        edge_color = IMPORTANCE_COLORS.get(node.definition.importance, "#888888")
        for dep_id in node.depends_on_ids:
            net.add_edge(nodes[dep_id].elem_id, node.elem_id, color=edge_color)

    net.set_options("""
    {
        "physics": {"enabled": false},
        "interaction": {
            "navigationButtons": true,
            "zoomView": true,
            "dragView": true,
            "hover": true,
            "selectConnectedEdges": true,
            "tooltipDelay": 100
        },
        "edges": {
            "arrows": {"to": {"enabled": true, "scaleFactor": 0.5}},
            "smooth": {"type": "cubicBezier", "forceDirection": "vertical"},
            "width": 1,
            "selectionWidth": 2,
            "hoverWidth": 2
        },
        "nodes": {
            "borderWidth": 1,
            "borderWidthSelected": 3
        }
    }
    """)

    net.save_graph(str(output_path))
