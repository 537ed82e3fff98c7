"""Generate the graph page and other outputs from a computed layout."""

import html
import json
from pathlib import Path

from .assets import ASSET_DIR_NAME
from .graph import GraphDefinition
from .layout import Dot, Layout, Node, canvas_size, compute_layout

LEADER_LINE_URL = "https://cdn.jsdelivr.net/npm/leader-line@1.0.7/leader-line.min.js"


def layout_graph(definition: GraphDefinition) -> Layout:
    """Run the layout pipeline on a loaded graph definition."""
    return compute_layout(
        definition.nodes,
        definition.resources,
        strategy=definition.level_strategy,
        horizontal_step=definition.display.horizontal_step_px,
        vertical_step=definition.display.vertical_step_px,
    )


def _px(value: float) -> str:
    if float(value).is_integer():
        return f"{int(value)}px"
    return f"{value:.1f}px"


def _dot_attrs(dot: Dot) -> str:
    # Clicking a dot jumps to the node at the other end of its line
    return f'data-partner="{dot.partner_elem_id}" onclick="showNode(\'{dot.partner_elem_id}\')"'


def _render_dots(node: Node) -> list[str]:
    lines = ['  <div class="dot-row used-by">']
    for dot in node.used_by_dots:
        lines.append(f'    <div class="dot" id="{dot.dot_id}" {_dot_attrs(dot)}></div>')
    lines.append("  </div>")
    lines.append('  <div class="dot-row depends-on">')
    for dot in node.depends_on_dots:
        lines.append(
            f'    <div class="dot link-source" id="{dot.dot_id}" {_dot_attrs(dot)}></div>'
        )
    lines.append("  </div>")
    return lines


def render_node(node: Node, node_box_width: int) -> str:
    """HTML for one positioned node box with its connection dots."""
    definition = node.definition
    style = f"left: {_px(node.left)}; top: {_px(node.top)}; width: {_px(node_box_width)};"
    lines = [
        f'<div class="node importance-{definition.importance}" id="{node.elem_id}" style="{style}">'
    ]
    lines.extend(_render_dots(node))
    lines.append(f'  <div class="title">{html.escape(definition.title)}</div>')
    if definition.subtitle:
        lines.append(f'  <div class="subtitle">{html.escape(definition.subtitle)}</div>')
    if node.link:
        url = html.escape(node.link)
        # The url is also passed to openNodeLink as a JS string literal
        js_url = html.escape(json.dumps(node.link))
        lines.append(
            f'  <a class="link-box" href="{url}" '
            f'onclick="openNodeLink(event, {js_url}, false)" '
            f'onauxclick="openNodeLink(event, {js_url}, true)">open</a>'
        )
    lines.append("</div>")
    return "\n".join(lines)


def render_page(definition: GraphDefinition, layout: Layout) -> str:
    """Full HTML document for a laid-out graph."""
    display = definition.display
    head = definition.head
    width, height = canvas_size(layout.nodes, display.node_box_width_px, display.vertical_step_px)
    nodes_html = "\n".join(render_node(node, display.node_box_width_px) for node in layout.nodes)
    title = html.escape(head.title or "Graph")

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>{title}</title>
<meta name="description" content="{html.escape(head.description)}">
<meta name="author" content="{html.escape(head.author)}">
<link rel="stylesheet" href="{ASSET_DIR_NAME}/style.css">
<script src="{LEADER_LINE_URL}"></script>
<script src="{ASSET_DIR_NAME}/main.js"></script>
</head>
<body>
<div id="link-view-panel" onclick="closeLinkViewPanel()">
<div id="link-view-inner"></div>
</div>
<div id="graph-canvas" style="width: {_px(width)}; height: {_px(height)};">
{nodes_html}
</div>
</body>
</html>
"""


def generate_html(definition: GraphDefinition, layout: Layout, output_file: Path) -> None:
    """Write the graph page.

    Args:
        definition: The loaded graph definition (head and display config).
        layout: Layout computed from the definition.
        output_file: Path to write the HTML file.
    """
    with open(output_file, "w") as f:
        f.write(render_page(definition, layout))


def layout_to_dict(layout: Layout) -> dict:
    """Computed fields of every node plus the level map, JSON-ready."""
    nodes = []
    for node in layout.nodes:
        nodes.append(
            {
                "name": node.name,
                "uid": node.uid,
                "elem_id": node.elem_id,
                "level": node.level,
                "shift": node.shift,
                "left": node.left,
                "top": node.top,
                "depends_on_ids": node.depends_on_ids,
                "used_by_ids": node.used_by_ids,
                "depends_on_dots": [
                    {"dot_id": d.dot_id, "partner": d.partner_elem_id} for d in node.depends_on_dots
                ],
                "used_by_dots": [
                    {"dot_id": d.dot_id, "partner": d.partner_elem_id} for d in node.used_by_dots
                ],
                "link": node.link,
            }
        )
    return {
        "strategy": layout.strategy.value,
        "level_map": layout.level_map,
        "nodes": nodes,
    }


def generate_json(layout: Layout, output_file: Path) -> None:
    """Write the computed layout as JSON."""
    with open(output_file, "w") as f:
        json.dump(layout_to_dict(layout), f, indent=2)


def format_level_map(layout: Layout) -> list[str]:
    """One line per level, top level first, listing node names by shift."""
    lines = []
    for level in reversed(range(len(layout.level_map))):
        names = [layout.nodes[uid].name for uid in layout.level_map[level]]
        lines.append(f"  {level:3d}: {' '.join(names)}")
    return lines


def generate_summary(definition: GraphDefinition, layout: Layout, output_file: Path) -> None:
    """Write a human-readable summary of the layout."""
    widest = max(range(len(layout.level_map)), key=lambda lvl: len(layout.level_map[lvl]))
    with open(output_file, "w") as f:
        f.write("=" * 60 + "\n")
        f.write(f"Layout Summary: {definition.head.title or 'Graph'}\n")
        f.write("=" * 60 + "\n\n")

        f.write(f"Nodes: {len(layout.nodes)}\n")
        f.write(f"Edges: {sum(len(node.depends_on_ids) for node in layout.nodes)}\n")
        f.write(f"Levels: {len(layout.level_map)}\n")
        f.write(f"Level strategy: {layout.strategy.value}\n")
        f.write(f"Widest level: {widest} ({len(layout.level_map[widest])} nodes)\n\n")

        f.write("Levels (top first):\n")
        f.write("-" * 40 + "\n")
        for line in format_level_map(layout):
            f.write(line + "\n")
