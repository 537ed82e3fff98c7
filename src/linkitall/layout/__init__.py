"""Layered layout of a dependency graph into boxes, levels and connection dots.

Stages run in a fixed order, each filling fields of the same node list:
ids -> levels -> level map / shifts -> element ids -> positions -> untangling
-> resource links.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from .connectors import assign_elem_ids, untangle_dots
from .geometry import canvas_size, place_nodes
from .identity import assign_ids
from .levelmap import build_level_map, widest_level_size
from .levels import LevelStrategy, assign_levels, validate_levels
from .links import resolve_link, resolve_links
from .model import Dot, LevelMap, LinkTo, Node, NodeDefinition, create_nodes
from .render import render_network


@dataclass
class Layout:
    """Laid-out nodes plus the level map they were placed from."""

    nodes: list[Node]
    level_map: LevelMap = field(default_factory=list)
    strategy: LevelStrategy = LevelStrategy.BOTTOM_TO_TOP


def run_stages(
    nodes: list[Node],
    resources: Mapping[str, str],
    strategy: "str | LevelStrategy",
    horizontal_step: int,
    vertical_step: int,
) -> LevelMap:
    """Run every layout stage over an existing node list, in place."""
    strategy = LevelStrategy.parse(strategy)
    assign_ids(nodes)
    assign_levels(nodes, strategy)
    level_map = build_level_map(nodes)
    assign_elem_ids(nodes)
    place_nodes(nodes, level_map, horizontal_step, vertical_step)
    untangle_dots(nodes)
    resolve_links(nodes, resources)
    return level_map


def compute_layout(
    definitions: Iterable[NodeDefinition],
    resources: Mapping[str, str],
    strategy: "str | LevelStrategy" = LevelStrategy.BOTTOM_TO_TOP,
    horizontal_step: int = 400,
    vertical_step: int = 300,
) -> Layout:
    """Lay out a graph from its node definitions.

    Args:
        definitions: Node definitions in input order.
        resources: Resource name -> link, for nodes with a linkto.
        strategy: Level assignment strategy.
        horizontal_step: Pixels between nodes within a level.
        vertical_step: Pixels between levels.

    Returns:
        Layout holding the annotated nodes and the level map.

    Raises:
        InputError: For problems in the definitions or configuration.
        LayoutFault: If an internal invariant is violated.
    """
    strategy = LevelStrategy.parse(strategy)
    nodes = create_nodes(definitions)
    level_map = run_stages(nodes, resources, strategy, horizontal_step, vertical_step)
    return Layout(nodes=nodes, level_map=level_map, strategy=strategy)


__all__ = [
    "Dot",
    "Layout",
    "LevelMap",
    "LevelStrategy",
    "LinkTo",
    "Node",
    "NodeDefinition",
    "assign_elem_ids",
    "assign_ids",
    "assign_levels",
    "build_level_map",
    "canvas_size",
    "compute_layout",
    "create_nodes",
    "place_nodes",
    "render_network",
    "resolve_link",
    "resolve_links",
    "run_stages",
    "untangle_dots",
    "validate_levels",
    "widest_level_size",
]
