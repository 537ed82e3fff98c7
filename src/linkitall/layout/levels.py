"""Layered level assignment over the dependency DAG.

Levels are computed frontier by frontier. Starting from the seed nodes at
level 0, every node reached from the current frontier is given the frontier
level + 1 and becomes part of the next frontier. A node reached again from a
deeper frontier is simply overwritten, so its final level is the length of
the longest path from a seed node.
"""

from enum import Enum

from ..errors import (
    LevelMismatch,
    MaxLevelUnresolved,
    NoRootNodes,
    UnassignedLevel,
    UnknownStrategy,
)
from .model import UNASSIGNED_LEVEL, Node


class LevelStrategy(Enum):
    """Direction in which levels are seeded and propagated."""

    # Nodes without dependencies are seeds; levels grow along used-by edges
    BOTTOM_TO_TOP = "bottom2top"
    # Nodes without dependents are seeds; levels grow along depends-on edges
    # and are reversed at the end
    TOP_TO_BOTTOM = "top2bottom"

    @classmethod
    def parse(cls, value: "str | LevelStrategy") -> "LevelStrategy":
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise UnknownStrategy(str(value)) from None

    def upstream(self, node: Node) -> list[int]:
        """Neighbours a node must be placed above. Seeds have none."""
        return getattr(node, _EDGE_FIELDS[self][0])

    def downstream(self, node: Node) -> list[int]:
        """Neighbours that levels are propagated to."""
        return getattr(node, _EDGE_FIELDS[self][1])

    @property
    def reverses_levels(self) -> bool:
        return _EDGE_FIELDS[self][2]

    def expected_level(self, node: Node, nodes: list[Node], top: int) -> int:
        """Level a node must have given the levels of its upstream neighbours.

        Without reversal a node sits one above its highest upstream
        neighbour (0 for seeds). With reversal it sits one below its lowest
        upstream neighbour (the top level for seeds).
        """
        levels = [nodes[i].level for i in self.upstream(node)]
        if self.reverses_levels:
            return min(levels, default=top + 1) - 1
        return max(levels, default=-1) + 1


# strategy -> (upstream field, downstream field, reverse levels at the end)
_EDGE_FIELDS: dict[LevelStrategy, tuple[str, str, bool]] = {
    LevelStrategy.BOTTOM_TO_TOP: ("depends_on_ids", "used_by_ids", False),
    LevelStrategy.TOP_TO_BOTTOM: ("used_by_ids", "depends_on_ids", True),
}


def max_level(nodes: list[Node]) -> int:
    """Highest level among the nodes.

    Raises:
        MaxLevelUnresolved: If there are no nodes.
    """
    if not nodes:
        raise MaxLevelUnresolved()
    return max(node.level for node in nodes)


def _seed_levels(nodes: list[Node], strategy: LevelStrategy) -> list[int]:
    seeds: list[int] = []
    for node in nodes:
        node.level = UNASSIGNED_LEVEL
        if not strategy.upstream(node):
            node.level = 0
            seeds.append(node.uid)
    return seeds


def _propagate(nodes: list[Node], frontier: list[int], strategy: LevelStrategy) -> list[int]:
    next_frontier: list[int] = []
    for node_id in frontier:
        node = nodes[node_id]
        for child_id in strategy.downstream(node):
            nodes[child_id].level = node.level + 1
            next_frontier.append(child_id)
    # Deduplicate but keep first-seen order so runs are reproducible
    return list(dict.fromkeys(next_frontier))


def validate_levels(nodes: list[Node], strategy: LevelStrategy) -> None:
    """Check the level of every node against its neighbours.

    For bottom2top a node's level is max(dependency levels) + 1, or 0 when it
    has no dependencies. For top2bottom a node's level is
    min(dependent levels) - 1, or the maximum level when it has no
    dependents. Under both strategies dependencies sit strictly below and
    dependents strictly above.

    Raises:
        UnassignedLevel: If a node still has no level.
        LevelMismatch: If a level does not match the expected value.
    """
    for node in nodes:
        if node.level == UNASSIGNED_LEVEL:
            raise UnassignedLevel(node.name)
    top = max_level(nodes)

    for node in nodes:
        for dep_id in node.depends_on_ids:
            dep = nodes[dep_id]
            if dep.level >= node.level:
                raise LevelMismatch(dep.name, dep.level, node.level - 1)
        for user_id in node.used_by_ids:
            user = nodes[user_id]
            if user.level <= node.level:
                raise LevelMismatch(user.name, user.level, node.level + 1)

        expected = strategy.expected_level(node, nodes, top)
        if node.level != expected:
            raise LevelMismatch(node.name, node.level, expected)


def assign_levels(nodes: list[Node], strategy: "str | LevelStrategy") -> None:
    """Assign a level to every node in place.

    Args:
        nodes: Nodes with adjacency lists already filled.
        strategy: "bottom2top", "top2bottom" or a LevelStrategy.

    Raises:
        UnknownStrategy: If the strategy string is not recognised. Raised
            before any node is touched.
        NoRootNodes: If no node qualifies as a seed under the strategy.
        LayoutFault: If the computed levels fail validation.
    """
    strategy = LevelStrategy.parse(strategy)

    frontier = _seed_levels(nodes, strategy)
    if not frontier:
        raise NoRootNodes(strategy.value)

    # In the worst case every node gets its own level, and level 0 is done
    for _ in range(len(nodes) - 1):
        if not frontier:
            break
        frontier = _propagate(nodes, frontier, strategy)

    if strategy.reverses_levels and all(node.level != UNASSIGNED_LEVEL for node in nodes):
        top = max_level(nodes)
        for node in nodes:
            node.level = top - node.level

    validate_levels(nodes, strategy)
