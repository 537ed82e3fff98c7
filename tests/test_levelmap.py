"""Tests for levelmap.py module."""

import pytest

from linkitall.errors import EmptyLevel, MaxLevelUnresolved
from linkitall.layout.identity import assign_ids
from linkitall.layout.levelmap import build_level_map, widest_level_size
from linkitall.layout.levels import assign_levels
from linkitall.layout.model import NodeDefinition, create_nodes


def _levelled(definitions, strategy="bottom2top"):
    nodes = create_nodes(definitions)
    assign_ids(nodes)
    assign_levels(nodes, strategy)
    return nodes


class TestBuildLevelMap:
    """Tests for build_level_map function."""

    def test_linear_chain(self, linear_chain):
        nodes = _levelled(linear_chain)
        level_map = build_level_map(nodes)

        assert level_map == [[0], [1], [2]]
        assert [node.shift for node in nodes] == [0, 0, 0]

    def test_shift_follows_input_order(self, wide_graph):
        nodes = _levelled(wide_graph)
        level_map = build_level_map(nodes)

        assert level_map == [[0], [1, 2, 3, 4], [5]]
        assert {node.name: node.shift for node in nodes} == {
            "root": 0,
            "a": 0,
            "b": 1,
            "c": 2,
            "d": 3,
            "top": 0,
        }

    def test_every_node_once(self, uneven_graph):
        nodes = _levelled(uneven_graph, "top2bottom")
        level_map = build_level_map(nodes)

        flat = [uid for row in level_map for uid in row]
        assert sorted(flat) == [node.uid for node in nodes]
        for level, row in enumerate(level_map):
            for shift, uid in enumerate(row):
                assert nodes[uid].level == level
                assert nodes[uid].shift == shift

    def test_empty_level_is_a_fault(self, linear_chain):
        nodes = _levelled(linear_chain)
        nodes[2].level = 3

        with pytest.raises(EmptyLevel) as excinfo:
            build_level_map(nodes)

        assert excinfo.value.level == 2

    def test_no_nodes_is_a_fault(self):
        with pytest.raises(MaxLevelUnresolved):
            build_level_map([])

    def test_rebuild_is_stable(self, diamond_graph):
        nodes = _levelled(diamond_graph)

        assert build_level_map(nodes) == build_level_map(nodes)


class TestWidestLevelSize:
    """Tests for widest_level_size function."""

    def test_widest(self):
        assert widest_level_size([[0], [1, 2, 3], [4, 5]]) == 3

    def test_empty(self):
        assert widest_level_size([]) == 0

    def test_single_node(self):
        nodes = _levelled([NodeDefinition(name="only")])

        assert widest_level_size(build_level_map(nodes)) == 1
