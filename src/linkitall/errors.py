"""Error kinds raised while loading and laying out a graph.

InputError subclasses describe problems the user can fix by editing the graph
definition. LayoutFault subclasses mean the layout algorithm broke one of its
own invariants; they should abort the run instead of being reported as
ordinary input errors.
"""


class LinkitallError(Exception):
    """Base class for all linkitall errors."""


class InputError(LinkitallError):
    """The graph definition or configuration is invalid."""


class GraphDefinitionError(InputError):
    """The graph definition file failed validation."""


class UnknownDependency(InputError):
    def __init__(self, node: str, dependency: str):
        self.node = node
        self.dependency = dependency
        super().__init__(f"unknown dependency for node '{node}': '{dependency}'")


class UnknownResource(InputError):
    def __init__(self, node: str, resource: str):
        self.node = node
        self.resource = resource
        super().__init__(f"error in node {node}: linkto resource {resource} not found")


class UnknownStrategy(InputError):
    def __init__(self, value: str):
        self.value = value
        super().__init__(f"invalid level strategy: '{value}'")


class NoRootNodes(InputError):
    def __init__(self, strategy: str):
        self.strategy = strategy
        super().__init__(f"found no level 0 nodes for strategy '{strategy}'")


class LayoutFault(LinkitallError):
    """An internal invariant of the layout algorithm was violated."""


class UnassignedLevel(LayoutFault):
    def __init__(self, node: str):
        self.node = node
        super().__init__(f"unreachable node '{node}' was never assigned a level")


class LevelMismatch(LayoutFault):
    def __init__(self, node: str, got: int, expected: int):
        self.node = node
        self.got = got
        self.expected = expected
        super().__init__(f"for node {node}, mismatch in level. Got {got}, expected {expected}")


class EmptyLevel(LayoutFault):
    def __init__(self, level: int):
        self.level = level
        super().__init__(f"level {level} has no nodes")


class MaxLevelUnresolved(LayoutFault):
    def __init__(self):
        super().__init__("unable to find the maximum level (no nodes)")
