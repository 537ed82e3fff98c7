"""Element IDs for nodes and their connection dots, and dot untangling.

A node's element ID is its uid zero-padded to ELEM_ID_WIDTH digits. Every
edge "A depends on B" gets two dots with the same suffix:

    A owns D_<A>_<B>  (depends-on dot, bottom edge of A)
    B owns U_<A>_<B>  (used-by dot, top edge of B)

so the page script can find the partner of D_x by looking up U_x.
"""

import math

from .model import Dot, Node

ELEM_ID_WIDTH = 5
DEPENDS_ON_PREFIX = "D"
USED_BY_PREFIX = "U"


def node_elem_id(uid: int) -> str:
    return f"{uid:0{ELEM_ID_WIDTH}d}"


def depends_on_dot_id(owner_elem_id: str, partner_elem_id: str) -> str:
    return f"{DEPENDS_ON_PREFIX}_{owner_elem_id}_{partner_elem_id}"


def used_by_dot_id(owner_elem_id: str, partner_elem_id: str) -> str:
    # Partner first: this is the dependent's side of the same edge
    return f"{USED_BY_PREFIX}_{partner_elem_id}_{owner_elem_id}"


def assign_elem_ids(nodes: list[Node]) -> None:
    """Fill elem_id and both dot lists for every node in place."""
    for node in nodes:
        node.elem_id = node_elem_id(node.uid)

    for node in nodes:
        node.depends_on_dots = [
            Dot(
                dot_id=depends_on_dot_id(node.elem_id, nodes[dep_id].elem_id),
                partner_elem_id=nodes[dep_id].elem_id,
            )
            for dep_id in node.depends_on_ids
        ]
        node.used_by_dots = [
            Dot(
                dot_id=used_by_dot_id(node.elem_id, nodes[user_id].elem_id),
                partner_elem_id=nodes[user_id].elem_id,
            )
            for user_id in node.used_by_ids
        ]


def _angle_to(node: Node, partner: Node) -> float:
    """Angle of the line from node to partner, in screen coordinates."""
    return math.atan2(partner.top - node.top, partner.left - node.left)


def untangle_dots(nodes: list[Node]) -> None:
    """Sort each node's dots by the angle to their partner node.

    Depends-on dots are sorted by the negated angle and used-by dots by the
    plain angle, so in both rows partners further left come first. This is a
    per-node heuristic to reduce crossings, not a global minimisation.
    Requires positions from place_nodes.
    """
    by_elem_id = {node.elem_id: node for node in nodes}

    for node in nodes:
        node.depends_on_dots.sort(
            key=lambda dot: -_angle_to(node, by_elem_id[dot.partner_elem_id])
        )
        node.used_by_dots.sort(
            key=lambda dot: _angle_to(node, by_elem_id[dot.partner_elem_id])
        )
