"""
Layer Transform Node

Animator node that caches a layer's opacity and local/global transforms.
"""

from enum import Enum
from typing import Optional

import numpy as np
from pyrr import Matrix44, Vector3

from ..config.settings import OPACITY_PERCENT_SCALE
from .transform_composer import make_transform, combine
from .transform_descriptor import TransformDescriptor
from .transform_properties import LayerTransformProperties


class NodeKind(Enum):
    """Animator node variants dispatched by the node graph."""
    TRANSFORM = "transform"


class LayerTransformNode:
    """
    Transform node in a layer hierarchy.

    Dirty state is held in two flags:
    - has_local_updates: the node's own properties changed
    - has_upstream_updates: an ancestor changed

    Both are set and cleared by the driver (NodeGraph); this node only
    reads them. The parent is a handle into the owning graph, never an
    object reference. A disabled node (is_enabled False) keeps its last
    outputs and is skipped by the driver until it is enabled again.
    """

    kind = NodeKind.TRANSFORM

    def __init__(self, descriptor: TransformDescriptor, parent: Optional[int] = None,
                 name: Optional[str] = None):
        """
        Initialize transform node.

        Args:
            descriptor: Keyframe tracks for this layer's transform
            parent: Handle of the parent node in the graph (None for a root)
            name: Debug name
        """
        self.transform_properties = LayerTransformProperties(descriptor)
        self.parent = parent
        self.name = name

        self.has_local_updates = False
        self.has_upstream_updates = False
        self.last_update_frame: Optional[float] = None
        self.is_enabled = True

        self.opacity = 1.0
        self.position = Vector3([0.0, 0.0, 0.0], dtype=float)
        self.local_transform = Matrix44.identity(dtype=float)
        self.global_transform = Matrix44.identity(dtype=float)

    @property
    def is_root(self) -> bool:
        return self.parent is None

    def should_rebuild_outputs(self, frame: float) -> bool:
        """True if either dirty flag is set. Frame caching is the driver's job."""
        return self.has_local_updates or self.has_upstream_updates

    def resolve_position(self, frame: float) -> Vector3:
        """Combined position, else split X/Y with Z=0, else the origin."""
        props = self.transform_properties
        if props.position is not None:
            return props.position.value(frame)
        if props.position_x is not None and props.position_y is not None:
            return Vector3([props.position_x.value(frame), props.position_y.value(frame), 0.0],
                           dtype=float)
        return Vector3([0.0, 0.0, 0.0], dtype=float)

    def rebuild_outputs(self, frame: float, parent_global: Optional[Matrix44] = None):
        """
        Recompute opacity, local transform and global transform.

        Args:
            frame: Frame to evaluate
            parent_global: Parent's global transform for this frame, already
                rebuilt (None for a root)
        """
        props = self.transform_properties

        self.opacity = props.opacity.value(frame) * OPACITY_PERCENT_SCALE
        self.position = self.resolve_position(frame)

        self.local_transform = make_transform(
            anchor=props.anchor.value(frame),
            position=self.position,
            scale=props.scale.value(frame),
            rotation_x=props.rotation_x.value(frame),
            rotation_y=props.rotation_y.value(frame),
            rotation_z=props.rotation_z.value(frame),
            orientation=props.orientation.value(frame),
        )

        if self.is_root or parent_global is None:
            self.global_transform = Matrix44(np.array(self.local_transform, dtype=float), dtype=float)
        else:
            self.global_transform = combine(self.local_transform, parent_global)

    def __repr__(self):
        return (f"LayerTransformNode(name='{self.name}', parent={self.parent}, "
                f"last_update_frame={self.last_update_frame})")
