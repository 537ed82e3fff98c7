"""Node records shared by every layout stage."""

from dataclasses import dataclass, field

# Level of a node that no stage has placed yet
UNASSIGNED_LEVEL = -1


@dataclass(frozen=True)
class LinkTo:
    """Reference from a node to an entry in the resources mapping."""

    resource: str = ""
    target: str = ""  # Page, section or anchor inside the resource


@dataclass(frozen=True)
class NodeDefinition:
    """Node attributes as written by the user in the graph definition."""

    name: str
    title: str = ""
    subtitle: str = ""
    importance: str = "normal"
    depends_on: tuple[str, ...] = ()
    linkto: LinkTo = field(default_factory=LinkTo)


@dataclass
class Dot:
    """One end of a dependency edge, drawn on the owning node's border."""

    dot_id: str
    partner_elem_id: str


@dataclass
class Node:
    """A node definition plus every field computed by the layout stages."""

    definition: NodeDefinition
    uid: int = -1
    depends_on_ids: list[int] = field(default_factory=list)
    used_by_ids: list[int] = field(default_factory=list)
    level: int = UNASSIGNED_LEVEL
    shift: int = 0
    left: float = 0
    top: float = 0
    elem_id: str = ""
    depends_on_dots: list[Dot] = field(default_factory=list)
    used_by_dots: list[Dot] = field(default_factory=list)
    link: str = ""

    @property
    def name(self) -> str:
        return self.definition.name


# level -> node uids in that level, ordered by shift
LevelMap = list[list[int]]


def create_nodes(definitions) -> list[Node]:
    """Wrap node definitions into fresh Node records, keeping input order."""
    return [Node(definition=definition) for definition in definitions]
