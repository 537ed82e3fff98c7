"""Load and validate a graph definition file (YAML)."""

import re
from dataclasses import dataclass, field
from pathlib import Path

import networkx as nx
import yaml

from .errors import GraphDefinitionError, UnknownDependency, UnknownResource
from .layout.levels import LevelStrategy
from .layout.model import LinkTo, NodeDefinition

NAME_PATTERN = re.compile(r"^[a-zA-Z0-9_]+$")
IMPORTANCE_LEVELS = ("lowest", "lower", "low", "normal", "high", "higher", "highest")

DEFAULT_HORIZONTAL_STEP_PX = 400
DEFAULT_VERTICAL_STEP_PX = 300
DEFAULT_NODE_BOX_WIDTH_PX = 300
DEFAULT_LEVEL_STRATEGY = LevelStrategy.BOTTOM_TO_TOP.value

_TOP_LEVEL_KEYS = {"nodes", "head-config", "display-config", "resources", "algo-config"}
_NODE_KEYS = {"name", "title", "subtitle", "importance", "depends-on", "linkto"}
_LINKTO_KEYS = {"resource", "target"}
_HEAD_KEYS = {"title", "description", "author"}
_DISPLAY_KEYS = {"horizontal-step-px", "vertical-step-px", "node-box-width-px"}
_ALGO_KEYS = {"level-strategy"}


@dataclass
class HeadConfig:
    """Values used in the <head> of the generated page."""

    title: str = ""
    description: str = ""
    author: str = ""


@dataclass
class DisplayConfig:
    """Grid and box sizes in pixels."""

    horizontal_step_px: int = DEFAULT_HORIZONTAL_STEP_PX
    vertical_step_px: int = DEFAULT_VERTICAL_STEP_PX
    node_box_width_px: int = DEFAULT_NODE_BOX_WIDTH_PX


@dataclass
class GraphDefinition:
    """A validated graph definition."""

    nodes: list[NodeDefinition] = field(default_factory=list)
    head: HeadConfig = field(default_factory=HeadConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    resources: dict[str, str] = field(default_factory=dict)
    level_strategy: LevelStrategy = LevelStrategy.BOTTOM_TO_TOP


def convert_name_to_title(name: str) -> str:
    """Replace underscores with spaces and capitalize every word."""
    return name.replace("_", " ").title()


def _check_keys(data: dict, allowed: set[str], where: str) -> None:
    unknown = sorted(str(k) for k in data if k not in allowed)
    if unknown:
        raise GraphDefinitionError(f"unknown field(s) in {where}: {', '.join(unknown)}")


def _as_mapping(value, where: str) -> dict:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise GraphDefinitionError(f"{where} must be a mapping")
    return value


def _as_str(value, where: str) -> str:
    if value is None:
        return ""
    if not isinstance(value, (str, int, float)) or isinstance(value, bool):
        raise GraphDefinitionError(f"{where} must be a string")
    return str(value)


def _parse_node(raw, index: int) -> NodeDefinition:
    raw = _as_mapping(raw, f"nodes[{index}]")
    _check_keys(raw, _NODE_KEYS, f"nodes[{index}]")

    name = _as_str(raw.get("name"), f"nodes[{index}].name")
    depends_on = raw.get("depends-on") or []
    if not isinstance(depends_on, list):
        raise GraphDefinitionError(f"depends-on of node '{name}' must be a list")

    linkto_raw = _as_mapping(raw.get("linkto"), f"linkto of node '{name}'")
    _check_keys(linkto_raw, _LINKTO_KEYS, f"linkto of node '{name}'")

    return NodeDefinition(
        name=name,
        title=_as_str(raw.get("title"), f"title of node '{name}'"),
        subtitle=_as_str(raw.get("subtitle"), f"subtitle of node '{name}'"),
        importance=_as_str(raw.get("importance"), f"importance of node '{name}'"),
        depends_on=tuple(_as_str(dep, f"depends-on of node '{name}'") for dep in depends_on),
        linkto=LinkTo(
            resource=_as_str(linkto_raw.get("resource"), f"linkto resource of node '{name}'"),
            target=_as_str(linkto_raw.get("target"), f"linkto target of node '{name}'"),
        ),
    )


def validate_nodes(nodes: list[NodeDefinition]) -> list[NodeDefinition]:
    """Validate node definitions and fill defaults.

    Blank importance becomes "normal" and a blank title is derived from the
    name.

    Returns:
        New list of node definitions with defaults filled.

    Raises:
        GraphDefinitionError: On invalid names, repeated names, unknown
            importance, missing level 0 nodes or a dependency cycle.
        UnknownDependency: If a node depends on a name that does not exist.
    """
    validated: list[NodeDefinition] = []
    unique_names: set[str] = set()
    num_level0_nodes = 0

    for node in nodes:
        if not NAME_PATTERN.match(node.name):
            raise GraphDefinitionError(
                f"invalid node name (only letters, numbers, _) '{node.name}'"
            )
        if node.name in unique_names:
            raise GraphDefinitionError(f"node name repeated '{node.name}'")
        unique_names.add(node.name)

        importance = node.importance or "normal"
        if importance not in IMPORTANCE_LEVELS:
            raise GraphDefinitionError(
                f"unknown importance pattern for node '{node.name}': '{importance}'"
            )

        if not node.depends_on:
            num_level0_nodes += 1

        validated.append(
            NodeDefinition(
                name=node.name,
                title=node.title or convert_name_to_title(node.name),
                subtitle=node.subtitle,
                importance=importance,
                depends_on=node.depends_on,
                linkto=node.linkto,
            )
        )

    if num_level0_nodes == 0:
        raise GraphDefinitionError("there must be at least 1 node without any dependency")

    for node in validated:
        for dep in node.depends_on:
            if dep not in unique_names:
                raise UnknownDependency(node.name, dep)

    check_acyclic(validated)
    return validated


def build_dependency_graph(nodes: list[NodeDefinition]) -> nx.DiGraph:
    """Directed graph with an edge from each dependency to its user."""
    graph = nx.DiGraph()
    for node in nodes:
        graph.add_node(node.name)
    for node in nodes:
        for dep in node.depends_on:
            graph.add_edge(dep, node.name)
    return graph


def check_acyclic(nodes: list[NodeDefinition]) -> None:
    """Raise GraphDefinitionError naming one cycle if the graph has any."""
    graph = build_dependency_graph(nodes)
    if nx.is_directed_acyclic_graph(graph):
        return
    cycle = nx.find_cycle(graph)
    path = [edge[0] for edge in cycle] + [cycle[0][0]]
    raise GraphDefinitionError(f"dependency cycle: {' -> '.join(path)}")


def _parse_display(raw) -> DisplayConfig:
    raw = _as_mapping(raw, "display-config")
    _check_keys(raw, _DISPLAY_KEYS, "display-config")
    defaults = {
        "horizontal-step-px": DEFAULT_HORIZONTAL_STEP_PX,
        "vertical-step-px": DEFAULT_VERTICAL_STEP_PX,
        "node-box-width-px": DEFAULT_NODE_BOX_WIDTH_PX,
    }
    values: dict[str, int] = {}
    for key, default in defaults.items():
        value = raw.get(key) or default
        if not isinstance(value, int) or isinstance(value, bool) or value < 0:
            raise GraphDefinitionError(f"{key} must be a positive integer, got {value!r}")
        values[key] = value
    return DisplayConfig(
        horizontal_step_px=values["horizontal-step-px"],
        vertical_step_px=values["vertical-step-px"],
        node_box_width_px=values["node-box-width-px"],
    )


def _parse_resources(raw) -> dict[str, str]:
    raw = _as_mapping(raw, "resources")
    return {str(name): _as_str(link, f"resource '{name}'") for name, link in raw.items()}


def validate_resources(resources: dict[str, str], nodes: list[NodeDefinition]) -> None:
    """Check that every node links to a resource that exists."""
    for node in nodes:
        resource = node.linkto.resource
        if resource and resource not in resources:
            raise UnknownResource(node.name, resource)


def parse_graph_definition(data) -> GraphDefinition:
    """Validate decoded YAML data and build a GraphDefinition.

    Args:
        data: Result of yaml.safe_load on a graph definition file.

    Raises:
        GraphDefinitionError: If the data is invalid.
        UnknownStrategy: If algo-config.level-strategy is not recognised.
        UnknownResource: If a node links to a resource that is not defined.
    """
    data = _as_mapping(data, "graph definition")
    _check_keys(data, _TOP_LEVEL_KEYS, "graph definition")

    raw_nodes = data.get("nodes") or []
    if not isinstance(raw_nodes, list):
        raise GraphDefinitionError("nodes must be a list")
    nodes = validate_nodes([_parse_node(raw, i) for i, raw in enumerate(raw_nodes)])

    head_raw = _as_mapping(data.get("head-config"), "head-config")
    _check_keys(head_raw, _HEAD_KEYS, "head-config")
    head = HeadConfig(
        title=_as_str(head_raw.get("title"), "head-config.title"),
        description=_as_str(head_raw.get("description"), "head-config.description"),
        author=_as_str(head_raw.get("author"), "head-config.author"),
    )

    display = _parse_display(data.get("display-config"))

    algo_raw = _as_mapping(data.get("algo-config"), "algo-config")
    _check_keys(algo_raw, _ALGO_KEYS, "algo-config")
    strategy = LevelStrategy.parse(
        _as_str(algo_raw.get("level-strategy"), "algo-config.level-strategy")
        or DEFAULT_LEVEL_STRATEGY
    )

    resources = _parse_resources(data.get("resources"))
    validate_resources(resources, nodes)

    return GraphDefinition(
        nodes=nodes,
        head=head,
        display=display,
        resources=resources,
        level_strategy=strategy,
    )


def load_graph(graph_file: Path) -> GraphDefinition:
    """Load a graph definition file.

    Args:
        graph_file: Path to the YAML graph definition.

    Returns:
        The validated graph definition.

    Raises:
        OSError: If the file cannot be read.
        GraphDefinitionError: If the file is not valid YAML or fails
            validation.
    """
    with open(graph_file) as f:
        text = f.read()
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as err:
        raise GraphDefinitionError(f"unable to parse {graph_file}: {err}") from err
    return parse_graph_definition(data)
