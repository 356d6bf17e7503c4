"""
Layer Transform Properties

The set of cached animated properties that describe one layer's transform.
"""

import logging
from typing import Dict, List, Optional

from ..animation.interpolator import KeyframeInterpolator
from ..animation.keyframe import KeyframeTrack, ValueType
from ..animation.node_property import NodeProperty
from ..config.settings import (
    DEFAULT_ANCHOR_POINT,
    DEFAULT_SCALE,
    DEFAULT_ROTATION,
    DEFAULT_OPACITY,
    DEFAULT_ORIENTATION,
    POSITION_Z_FILL,
    SCALE_Z_FILL,
)
from .transform_descriptor import TransformDescriptor


logger = logging.getLogger(__name__)


def _property(track: Optional[KeyframeTrack], default, value_type: ValueType,
              z_fill: float = 0.0) -> NodeProperty:
    if track is None:
        track = KeyframeTrack.constant(default, value_type=value_type, z_fill=z_fill)
    return NodeProperty(KeyframeInterpolator(track), value_type=value_type, z_fill=z_fill)


class LayerTransformProperties:
    """
    Cached properties of a layer transform.

    Position takes one of two shapes, fixed at construction: a combined
    Vector3D property, or split X/Y scalar properties (Z is implicitly 0).
    When neither input is present both shapes are absent and position
    resolves to the origin.

    Each property is also reachable by its keypath name through
    keypath_properties; this set is a leaf in keypath search.
    """

    keypath_name = "Transform"

    def __init__(self, descriptor: TransformDescriptor):
        """
        Initialize transform properties.

        Args:
            descriptor: Keyframe tracks for the layer transform
        """
        self.anchor = _property(descriptor.anchor_point, DEFAULT_ANCHOR_POINT,
                                ValueType.VECTOR3D, POSITION_Z_FILL)
        self.scale = _property(descriptor.scale, DEFAULT_SCALE, ValueType.VECTOR3D, SCALE_Z_FILL)
        self.rotation_x = _property(descriptor.rotation_x, DEFAULT_ROTATION, ValueType.VECTOR1D)
        self.rotation_y = _property(descriptor.rotation_y, DEFAULT_ROTATION, ValueType.VECTOR1D)
        self.rotation_z = _property(descriptor.rotation, DEFAULT_ROTATION, ValueType.VECTOR1D)
        self.opacity = _property(descriptor.opacity, DEFAULT_OPACITY, ValueType.VECTOR1D)
        self.orientation = _property(descriptor.orientation, DEFAULT_ORIENTATION,
                                     ValueType.VECTOR3D, POSITION_Z_FILL)

        property_map: Dict[str, NodeProperty] = {
            "Anchor Point": self.anchor,
            "Scale": self.scale,
            "Rotation Z": self.rotation_z,
            "Rotation X": self.rotation_x,
            "Rotation Y": self.rotation_y,
            "Rotation": self.rotation_z,
            "Opacity": self.opacity,
            "Orientation": self.orientation,
        }

        self.position: Optional[NodeProperty] = None
        self.position_x: Optional[NodeProperty] = None
        self.position_y: Optional[NodeProperty] = None

        if descriptor.position_x is not None and descriptor.position_y is not None:
            self.position_x = _property(descriptor.position_x, 0.0, ValueType.VECTOR1D)
            self.position_y = _property(descriptor.position_y, 0.0, ValueType.VECTOR1D)
            property_map["X Position"] = self.position_x
            property_map["Y Position"] = self.position_y
        elif descriptor.position is not None:
            self.position = _property(descriptor.position, (0.0, 0.0, 0.0),
                                      ValueType.VECTOR3D, POSITION_Z_FILL)
            property_map["Position"] = self.position

        assert self.position is None or (self.position_x is None and self.position_y is None), \
            "combined and split position channels are mutually exclusive"
        assert (self.position_x is None) == (self.position_y is None), \
            "split position requires both X and Y channels"

        self.keypath_properties: Dict[str, NodeProperty] = property_map

        # Unique properties ("Rotation" aliases "Rotation Z")
        self.properties: List[NodeProperty] = []
        for prop in property_map.values():
            if not any(prop is existing for existing in self.properties):
                self.properties.append(prop)

        logger.debug("Built transform properties with keypaths %s", sorted(property_map))

    @property
    def position_shape(self) -> str:
        """'combined', 'split' or 'none'."""
        if self.position is not None:
            return "combined"
        if self.position_x is not None:
            return "split"
        return "none"

    @property
    def child_keypaths(self) -> list:
        return []

    def get_property(self, keypath: str) -> NodeProperty:
        """
        Find a property by keypath name.

        Raises:
            KeyError: If no property has that name
        """
        try:
            return self.keypath_properties[keypath]
        except KeyError:
            raise KeyError(f"No transform property named '{keypath}'") from None

    def set_value_provider(self, keypath: str, provider):
        """Override the provider of the property named keypath."""
        self.get_property(keypath).set_provider(provider)

    def needs_local_update(self, frame: float) -> bool:
        """True if any property may change at frame."""
        return any(prop.needs_update(frame) for prop in self.properties)

    def update_node_properties(self, frame: float):
        """Bring every property's cached value up to date for frame."""
        for prop in self.properties:
            prop.update(frame)

    def invalidate(self):
        """Drop every cached property value."""
        for prop in self.properties:
            prop.invalidate()

    def __repr__(self):
        return f"LayerTransformProperties(position={self.position_shape}, properties={len(self.properties)})"
