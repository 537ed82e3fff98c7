"""Group nodes by level and assign their horizontal shift."""

from ..errors import EmptyLevel
from .levels import max_level
from .model import LevelMap, Node


def build_level_map(nodes: list[Node]) -> LevelMap:
    """Build the level map and set each node's shift in place.

    Nodes are scanned in uid order, so within a level the input order of the
    graph definition decides left-to-right placement.

    Args:
        nodes: Nodes with levels assigned.

    Returns:
        level -> list of node uids at that level, in shift order.

    Raises:
        EmptyLevel: If some level between 0 and the maximum has no nodes.
    """
    level_map: LevelMap = [[] for _ in range(max_level(nodes) + 1)]
    for node in nodes:
        row = level_map[node.level]
        node.shift = len(row)
        row.append(node.uid)

    for level, row in enumerate(level_map):
        if not row:
            raise EmptyLevel(level)

    return level_map


def widest_level_size(level_map: LevelMap) -> int:
    """Number of nodes in the most populated level (0 for an empty map)."""
    return max((len(row) for row in level_map), default=0)
