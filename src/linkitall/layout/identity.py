"""Integer identifiers and adjacency lists for nodes."""

from ..errors import GraphDefinitionError, UnknownDependency
from .model import Node


def assign_ids(nodes: list[Node]) -> None:
    """Fill uid, depends_on_ids and used_by_ids for every node in place.

    The uid of a node is its index in the list. Adjacency is built in both
    directions in one pass: each resolved dependency also records the current
    node in its used_by_ids.

    Args:
        nodes: Nodes in input order.

    Raises:
        GraphDefinitionError: If a node name is repeated.
        UnknownDependency: If a dependency name does not match any node.
    """
    name_to_id: dict[str, int] = {}
    for idx, node in enumerate(nodes):
        if node.name in name_to_id:
            raise GraphDefinitionError(f"node name repeated '{node.name}'")
        name_to_id[node.name] = idx
        node.uid = idx
        node.depends_on_ids = []
        node.used_by_ids = []

    for node in nodes:
        for dep_name in node.definition.depends_on:
            dep_id = name_to_id.get(dep_name)
            if dep_id is None:
                raise UnknownDependency(node.name, dep_name)
            node.depends_on_ids.append(dep_id)
            nodes[dep_id].used_by_ids.append(node.uid)
