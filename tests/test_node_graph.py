"""Tests for NodeGraph per-frame evaluation"""

import pytest
import numpy as np

from src.vectoranim.animation import SingleValueProvider
from src.vectoranim.nodes import NodeGraph, TransformDescriptor
from src.vectoranim.nodes.transform_composer import combine, transform_point


ROTATING = {"rotation": [{"frame": 0, "value": 0}, {"frame": 10, "value": 90}]}


def _add(graph, parent=None, name=None, **channels):
    return graph.add_transform_node(TransformDescriptor.from_dict(channels), parent=parent, name=name)


def _chain():
    """root -> arm -> hand, all static"""
    graph = NodeGraph()
    root = _add(graph, name="root", position=[100, 0, 0])
    arm = _add(graph, parent=root, name="arm", position=[10, 0, 0])
    hand = _add(graph, parent=arm, name="hand", position=[5, 0, 0])
    return graph, root, arm, hand


def test_first_frame_builds_every_node():
    """Nodes that were never built are rebuilt on the first frame"""
    graph, root, arm, hand = _chain()
    assert graph.update_frame(0) == 3
    assert all(node.last_update_frame == 0 for node in graph)
    assert np.allclose(transform_point(graph.node(hand).global_transform, (0, 0, 0)), (115, 0, 0))


def test_static_graph_skips_rebuild():
    """Unchanged frames and constant tracks rebuild nothing"""
    graph, *_ = _chain()
    graph.update_frame(0)

    assert graph.update_frame(0) == 0
    assert graph.update_frame(25) == 0


def test_flags_cleared_after_update():
    """Dirty flags are reset once every node has been processed"""
    graph = NodeGraph()
    root = _add(graph, **ROTATING)
    _add(graph, parent=root, position=[10, 0, 0])

    graph.update_frame(0)
    graph.update_frame(5)
    for node in graph:
        assert not node.has_local_updates
        assert not node.has_upstream_updates


def test_animated_parent_rebuilds_static_child():
    """A parent change marks its children upstream-dirty"""
    graph = NodeGraph()
    root = _add(graph, **ROTATING)
    child = _add(graph, parent=root, position=[10, 0, 0])

    graph.update_frame(0)
    assert np.allclose(transform_point(graph.node(child).global_transform, (0, 0, 0)), (10, 0, 0))

    assert graph.update_frame(10) == 2
    assert np.allclose(transform_point(graph.node(child).global_transform, (0, 0, 0)), (0, 10, 0))


def test_animated_child_leaves_parent_alone():
    """Child-only changes do not rebuild ancestors"""
    graph = NodeGraph()
    root = _add(graph, position=[1, 1, 0])
    _add(graph, parent=root, **ROTATING)

    graph.update_frame(0)
    assert graph.update_frame(5) == 1
    assert graph.node(root).last_update_frame == 0


def test_dirtiness_reaches_grandchildren():
    """Upstream dirtiness propagates through the whole subtree"""
    graph, root, arm, hand = _chain()
    sibling = _add(graph, name="sibling", position=[0, 50, 0])
    graph.update_frame(0)

    graph.set_value_provider(root, "Rotation", SingleValueProvider(90.0))
    assert graph.update_frame(0) == 3
    assert graph.node(sibling).last_update_frame == 0

    hand_node = graph.node(hand)
    assert np.allclose(transform_point(hand_node.global_transform, (0, 0, 0)), (100, 15, 0))
    expected = combine(hand_node.local_transform, graph.node(arm).global_transform)
    assert np.allclose(hand_node.global_transform, expected)


def test_external_marks():
    """Externally set flags force rebuilds of the marked subtree"""
    graph, root, arm, hand = _chain()
    graph.update_frame(0)

    graph.mark_upstream_updates(arm)
    assert graph.update_frame(0) == 2

    graph.mark_local_updates(root)
    assert graph.update_frame(0) == 3

    graph.mark_local_updates(hand)
    assert graph.update_frame(0) == 1


def test_force_rebuilds_everything():
    """Forced updates ignore dirty state"""
    graph, *_ = _chain()
    graph.update_frame(0)
    assert graph.update_frame(0, force=True) == 3
    assert graph.last_rebuild_count == 3


def test_override_updates_opacity():
    """Property overrides take effect on the next frame"""
    graph = NodeGraph()
    node = _add(graph, opacity=100)
    graph.update_frame(0)

    graph.set_value_provider(node, "Opacity", SingleValueProvider(40.0))
    graph.update_frame(1)
    assert graph.node(node).opacity == pytest.approx(0.4)


def test_parent_must_exist():
    """Children can only reference already-added parents"""
    graph = NodeGraph()
    with pytest.raises(ValueError):
        _add(graph, parent=0)
    root = _add(graph, name="root")
    with pytest.raises(ValueError):
        _add(graph, parent=root + 5)
    with pytest.raises(ValueError):
        _add(graph, name="root")


def test_lookup_helpers():
    """Handles, names and hierarchy queries"""
    graph, root, arm, hand = _chain()
    sibling = _add(graph, parent=root, name="other_arm")

    assert len(graph) == 4
    assert graph.handle_for("arm") == arm
    assert graph.handle_for("missing") is None
    assert graph.children_of(root) == [arm, sibling]
    assert graph.parent_of(hand) == arm
    assert graph.roots() == [root]
    assert graph.node(arm).name == "arm"


def test_forced_update_restores_edited_outputs():
    """A forced update re-evaluates properties and replaces edited outputs"""
    graph = NodeGraph()
    handle = _add(graph, position=[10, 0, 0])
    graph.update_frame(0)

    node = graph.node(handle)
    node.position[0] = 999.0
    assert graph.update_frame(0, force=True) == 1
    assert np.allclose(node.position, [10.0, 0.0, 0.0])
    assert np.allclose(transform_point(node.global_transform, (0, 0, 0)), (10, 0, 0))


def test_disabled_node_keeps_last_outputs():
    """Disabled nodes are skipped; children compose with their cached transform"""
    graph = NodeGraph()
    root = _add(graph, name="root", **ROTATING)
    child = _add(graph, parent=root, name="child", position=[10, 0, 0])
    graph.update_frame(0)

    graph.set_enabled(root, False)
    assert not graph.node(root).is_enabled
    assert graph.update_frame(10) == 1
    assert graph.node(root).last_update_frame == 0
    assert np.allclose(transform_point(graph.node(child).global_transform, (0, 0, 0)), (10, 0, 0))

    graph.set_enabled(root, True)
    assert graph.update_frame(10) == 2
    assert graph.node(root).last_update_frame == 10
    assert np.allclose(transform_point(graph.node(child).global_transform, (0, 0, 0)), (0, 10, 0))
