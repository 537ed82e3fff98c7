"""Resolve node resource references into links."""

from collections.abc import Mapping

from ..errors import UnknownResource
from .model import LinkTo, Node

# Links into a PDF already carry viewer parameters after '#'
_PDF_FRAGMENT = ".pdf#"


def resolve_link(linkto: LinkTo, resources: Mapping[str, str], node_name: str = "") -> str:
    """Build the final link for one node.

    Args:
        linkto: The node's resource reference.
        resources: Resource name -> link.
        node_name: Used in the error message only.

    Returns:
        The link, with the target appended as a fragment, or "" when the
        node does not reference a resource.

    Raises:
        UnknownResource: If the resource name is not in resources.
    """
    if not linkto.resource:
        return ""
    if linkto.resource not in resources:
        raise UnknownResource(node_name, linkto.resource)

    link = resources[linkto.resource]
    if not linkto.target:
        return link
    if _PDF_FRAGMENT in link:
        return f"{link}&{linkto.target}"
    return f"{link}#{linkto.target}"


def resolve_links(nodes: list[Node], resources: Mapping[str, str]) -> None:
    """Fill the link of every node in place.

    All links are resolved before any node is updated, so a bad reference
    leaves every node untouched.
    """
    links = [resolve_link(node.definition.linkto, resources, node.name) for node in nodes]
    for node, link in zip(nodes, links):
        node.link = link
