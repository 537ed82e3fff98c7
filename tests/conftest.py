"""Pytest fixtures for layout tests."""

import pytest

from linkitall.layout.model import LinkTo, NodeDefinition


def make_nodes(deps: dict[str, list[str]]) -> list[NodeDefinition]:
    """Node definitions from name -> dependency names, in dict order."""
    return [NodeDefinition(name=name, depends_on=tuple(d)) for name, d in deps.items()]


@pytest.fixture
def linear_chain() -> list[NodeDefinition]:
    """Chain: C depends on B, B depends on A."""
    return make_nodes({"A": [], "B": ["A"], "C": ["B"]})


@pytest.fixture
def diamond_graph() -> list[NodeDefinition]:
    """Diamond: B and C depend on A, D depends on B and C."""
    return make_nodes({"A": [], "B": ["A"], "C": ["A"], "D": ["B", "C"]})


@pytest.fixture
def skip_graph() -> list[NodeDefinition]:
    """A, B depends on A, C depends on A and B (C must sit above B)."""
    return make_nodes({"A": [], "B": ["A"], "C": ["A", "B"]})


@pytest.fixture
def uneven_graph() -> list[NodeDefinition]:
    """Two roots, a short branch and a long branch.

    X and Y have no dependencies. P depends on X. Q depends on P and Y.
    Z depends on Y only.
    """
    return make_nodes({"X": [], "Y": [], "P": ["X"], "Q": ["P", "Y"], "Z": ["Y"]})


@pytest.fixture
def wide_graph() -> list[NodeDefinition]:
    """One root with four users and one node on top of two of them."""
    return make_nodes(
        {
            "root": [],
            "a": ["root"],
            "b": ["root"],
            "c": ["root"],
            "d": ["root"],
            "top": ["a", "d"],
        }
    )


@pytest.fixture
def linked_nodes() -> tuple[list[NodeDefinition], dict[str, str]]:
    """Nodes with and without resource links plus the resource mapping."""
    nodes = [
        NodeDefinition(name="plain"),
        NodeDefinition(name="pdf", depends_on=("plain",), linkto=LinkTo("doc", "section2")),
        NodeDefinition(name="web", depends_on=("plain",), linkto=LinkTo("site", "intro")),
        NodeDefinition(name="whole", depends_on=("pdf",), linkto=LinkTo("site")),
    ]
    resources = {"doc": "spec.pdf#page=1", "site": "page.html"}
    return nodes, resources


GRAPH_YAML = """\
head-config:
  title: Test graph
  description: A small graph
  author: Someone
resources:
  doc: spec.pdf#page=1
nodes:
  - name: axiom_one
  - name: lemma
    subtitle: Needed twice
    depends-on: [axiom_one]
    linkto:
      resource: doc
      target: section2
  - name: theorem
    title: The Theorem
    importance: high
    depends-on: [lemma, axiom_one]
display-config:
  horizontal-step-px: 200
"""


@pytest.fixture
def graph_dir(tmp_path):
    """Directory holding a valid graph.yaml."""
    (tmp_path / "graph.yaml").write_text(GRAPH_YAML)
    return tmp_path
