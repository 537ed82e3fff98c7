"""Pixel positions from (level, shift).

Horizontal placement uses a uniform step for every level. The widest level
starts at left = 0 and every other level is offset by half of the width it
is missing, so all levels share the same horizontal center:

    left = shift * horizontal_step + (widest - len(level)) * horizontal_step / 2

Vertical placement puts level 0 on the bottom row:

    top = (max_level - level) * vertical_step
"""

from .levelmap import widest_level_size
from .model import LevelMap, Node


def level_offset(level_size: int, widest: int, horizontal_step: int) -> float:
    """Centering offset for a level holding level_size nodes."""
    return (widest - level_size) * horizontal_step / 2


def place_nodes(
    nodes: list[Node],
    level_map: LevelMap,
    horizontal_step: int,
    vertical_step: int,
) -> None:
    """Set left and top for every node in the level map.

    Does nothing when the level map is empty or holds no nodes.

    Args:
        nodes: Nodes with level and shift assigned.
        level_map: Output of build_level_map.
        horizontal_step: Pixels between neighbouring nodes in a level.
        vertical_step: Pixels between consecutive levels.
    """
    widest = widest_level_size(level_map)
    if not level_map or widest == 0:
        return

    top_level = len(level_map) - 1
    for level, row in enumerate(level_map):
        offset = level_offset(len(row), widest, horizontal_step)
        for node_id in row:
            node = nodes[node_id]
            node.left = node.shift * horizontal_step + offset
            node.top = (top_level - level) * vertical_step


def canvas_size(
    nodes: list[Node],
    node_box_width: int,
    vertical_step: int,
) -> tuple[float, float]:
    """(width, height) needed to show every node box."""
    if not nodes:
        return (0, 0)
    width = max(node.left for node in nodes) + node_box_width
    height = max(node.top for node in nodes) + vertical_step
    return (width, height)
