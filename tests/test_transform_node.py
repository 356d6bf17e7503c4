"""Tests for LayerTransformNode"""

import pytest
import numpy as np
from pyrr import Matrix44

from src.vectoranim.animation import SingleValueProvider
from src.vectoranim.nodes import LayerTransformNode, NodeKind, TransformDescriptor
from src.vectoranim.nodes.transform_composer import combine, rotation_matrix, transform_point


def _node(parent=None, **channels):
    return LayerTransformNode(TransformDescriptor.from_dict(channels), parent=parent)


def test_initial_state():
    """New nodes are clean but have never been built"""
    node = _node()
    assert node.kind is NodeKind.TRANSFORM
    assert not node.has_local_updates
    assert not node.has_upstream_updates
    assert node.last_update_frame is None
    assert node.opacity == 1.0
    assert np.allclose(node.global_transform, np.identity(4))


def test_should_rebuild_reflects_flags():
    """The rebuild predicate is the OR of the dirty flags"""
    node = _node()
    assert not node.should_rebuild_outputs(0)

    node.has_local_updates = True
    assert node.should_rebuild_outputs(0)

    node.has_local_updates = False
    node.has_upstream_updates = True
    assert node.should_rebuild_outputs(0)


def test_root_global_equals_local():
    """Roots have no parent contribution"""
    node = _node(position=[30, 40, 0], rotation=25, scale=[120, 80])
    node.rebuild_outputs(0)
    assert np.allclose(node.global_transform, node.local_transform)


def test_child_global_composes_parent():
    """Child global transform is local combined with parent global"""
    parent = _node(position=[100, 0, 0], rotation=90)
    child = _node(parent=0, position=[10, 0, 0])

    parent.rebuild_outputs(0)
    child.rebuild_outputs(0, parent.global_transform)

    assert np.allclose(child.global_transform, combine(child.local_transform, parent.global_transform))
    assert np.allclose(transform_point(child.global_transform, (0, 0, 0)), (100, 10, 0))


def test_parent_rotation_changes_child():
    """Rebuilding parent then child picks up a parent-only change"""
    parent = _node(rotation=90)
    child = _node(parent=0, position=[10, 0, 0])

    parent.rebuild_outputs(0)
    child.rebuild_outputs(0, parent.global_transform)
    before_local = np.array(child.local_transform)
    before_global = np.array(child.global_transform)

    parent.transform_properties.set_value_provider("Rotation", SingleValueProvider(180.0))
    parent.rebuild_outputs(0)
    child.rebuild_outputs(0, parent.global_transform)

    assert np.allclose(child.local_transform, before_local)
    assert not np.allclose(child.global_transform, before_global)
    assert np.allclose(transform_point(child.global_transform, (0, 0, 0)), (-10, 0, 0))


@pytest.mark.parametrize("percent,expected", [(100, 1.0), (0, 0.0), (50, 0.5)])
def test_opacity_scaling(percent, expected):
    """Opacity percent is scaled to a fraction"""
    node = _node(opacity=percent)
    node.rebuild_outputs(0)
    assert node.opacity == pytest.approx(expected)


def test_missing_position_resolves_to_origin():
    """Without position channels the node sits at the origin"""
    node = _node()
    node.rebuild_outputs(0)
    assert np.allclose(node.position, [0.0, 0.0, 0.0])
    assert np.allclose(node.local_transform, np.identity(4))


def test_split_position_has_zero_z():
    """Split X/Y channels are combined with Z = 0"""
    node = _node(position_x=15, position_y=[{"frame": 0, "value": 0}, {"frame": 10, "value": 20}])
    node.rebuild_outputs(5)
    assert np.allclose(node.position, [15.0, 10.0, 0.0])
    assert np.allclose(transform_point(node.local_transform, (0, 0, 0)), (15, 10, 0))


def test_combined_position():
    """Combined position drives the translation"""
    node = _node(position=[1, 2, 3])
    node.rebuild_outputs(0)
    assert np.allclose(node.position, [1.0, 2.0, 3.0])


def test_end_to_end_rotation_track():
    """A 0 -> 90 degree track reads 45 degrees halfway and composes accordingly"""
    node = _node(
        rotation=[{"frame": 0, "value": 0}, {"frame": 10, "value": 90}],
        anchor_point=[0, 0, 0],
        position=[100, 0, 0],
        scale=[100, 100],
    )
    node.rebuild_outputs(5)

    assert node.transform_properties.rotation_z.value(5) == pytest.approx(45.0)
    expected = np.asarray(rotation_matrix('z', 45.0)) @ np.asarray(Matrix44.from_translation([100.0, 0.0, 0.0]))
    assert np.allclose(node.local_transform, expected)
    assert np.allclose(node.global_transform, expected)


def test_rebuild_does_not_touch_flags():
    """Clearing dirty flags is left to the driver"""
    node = _node()
    node.has_local_updates = True
    node.has_upstream_updates = True
    node.rebuild_outputs(0)
    assert node.has_local_updates
    assert node.has_upstream_updates


def test_scalar_position_keeps_zero_z():
    """A scalar combined position spreads to X and Y only"""
    node = _node(position=5)
    node.rebuild_outputs(0)
    assert np.allclose(node.position, [5.0, 5.0, 0.0])


def test_outputs_do_not_share_property_cache():
    """Editing cached outputs leaves the property values intact"""
    node = _node(position=[10, 0, 0])
    node.rebuild_outputs(0)

    node.position[0] = 999.0
    assert np.allclose(node.transform_properties.position.value(0), [10.0, 0.0, 0.0])

    node.global_transform[3, 0] = -1.0
    assert node.global_transform is not node.local_transform
    assert node.local_transform[3, 0] == pytest.approx(10.0)
