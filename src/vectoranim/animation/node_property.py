"""
Node Property

Frame-memoized wrapper around a value provider.
"""

from typing import Optional

import numpy as np
from pyrr import Vector3

from .keyframe import ValueType, to_vector1d, to_vector3d


class NodeProperty:
    """
    Animated property with last-evaluated-frame memoization.

    Holds one value provider (a KeyframeInterpolator or an override
    provider) and caches the value for the last evaluated frame. Nothing
    is cached after construction, so the first read always evaluates.

    Not safe for concurrent reads at different frames.
    """

    def __init__(self, provider, value_type: Optional[ValueType] = None, z_fill: float = 0.0):
        """
        Initialize node property.

        Args:
            provider: Object exposing value_at(frame) and has_update(frame, last_frame)
            value_type: Value type results are coerced to (taken from the provider if None)
            z_fill: Z component for two-component vector results
        """
        self._provider = provider
        self.value_type = value_type if value_type is not None else getattr(provider, "value_type", None)
        self.z_fill = z_fill

        self.last_frame: Optional[float] = None
        self.last_value = None

    @property
    def provider(self):
        return self._provider

    @property
    def current_value(self):
        """Value cached for last_frame (None before the first read)."""
        return self.last_value

    def value(self, frame: float):
        """
        Get the property value at a frame.

        Returns the cached value without touching the provider when frame
        equals the last evaluated frame. Vector values are returned as
        copies so callers cannot alter the cache.
        """
        if self.last_frame is not None and frame == self.last_frame:
            return self._copy(self.last_value)
        return self._copy(self._evaluate(frame))

    def needs_update(self, frame: float) -> bool:
        """True if the value at frame may differ from the cached value."""
        if self.last_frame is None:
            return True
        return self._provider.has_update(frame, self.last_frame)

    def update(self, frame: float):
        """Re-evaluate at frame if the provider reports a change."""
        if self.needs_update(frame):
            self._evaluate(frame)

    def set_provider(self, provider):
        """
        Replace the value provider and drop the cached value.

        Args:
            provider: New provider (e.g. a keypath override)
        """
        self._provider = provider
        self.invalidate()

    def invalidate(self):
        """Drop the cached value so the next read evaluates the provider."""
        self.last_frame = None
        self.last_value = None

    def _evaluate(self, frame: float):
        value = self._coerce(self._provider.value_at(frame))
        self.last_frame = frame
        self.last_value = value
        return value

    def _copy(self, value):
        if self.value_type == ValueType.VECTOR3D and value is not None:
            return Vector3(np.array(value, dtype=float), dtype=float)
        return value

    def _coerce(self, value):
        if self.value_type == ValueType.VECTOR1D:
            return to_vector1d(value)
        if self.value_type == ValueType.VECTOR3D:
            return to_vector3d(value, self.z_fill)
        return value

    def __repr__(self):
        return f"NodeProperty(provider={self._provider!r}, last_frame={self.last_frame})"
