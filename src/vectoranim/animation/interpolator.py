"""
Keyframe Interpolator

Maps a frame number to an interpolated value over a keyframe track.
"""

from bisect import bisect_right
from typing import Optional

import numpy as np
from pyrr import Vector3

from .easing import segment_easing
from .keyframe import Keyframe, KeyframeTrack, ValueType


class KeyframeInterpolator:
    """
    Interpolation provider for a keyframe track.

    Stateless beyond the track itself: value_at() is a pure function of
    the frame, so the same interpolator can be evaluated in any order.
    """

    def __init__(self, track: KeyframeTrack):
        """
        Initialize interpolator.

        Args:
            track: Keyframe track to evaluate
        """
        self.track = track
        self._times = [keyframe.time for keyframe in track]

    @property
    def value_type(self) -> ValueType:
        return self.track.value_type

    def value_at(self, frame: float):
        """
        Sample the track at a given frame.

        Args:
            frame: Frame number (fractional frames allowed)

        Returns:
            Interpolated value (float for Vector1D, Vector3 for Vector3D)
        """
        keyframes = self.track.keyframes
        if not keyframes:
            return self.track.zero_value()
        if len(keyframes) == 1:
            return self._copy(keyframes[0].value)

        # Clamp to track range
        if frame <= keyframes[0].time:
            return self._copy(keyframes[0].value)
        if frame >= keyframes[-1].time:
            return self._copy(keyframes[-1].value)

        index = self._segment_index(frame)
        return self._interpolate(keyframes[index], keyframes[index + 1], frame)

    def has_update(self, frame: float, last_frame: Optional[float]) -> bool:
        """
        Check whether evaluating at frame could differ from last_frame.

        Args:
            frame: Frame about to be evaluated
            last_frame: Frame of the cached value (None if nothing cached)

        Returns:
            False only when both frames are known to yield the same value
        """
        if last_frame is None:
            return True
        if frame == last_frame:
            return False

        keyframes = self.track.keyframes
        if len(keyframes) <= 1:
            return False

        first = keyframes[0].time
        last = keyframes[-1].time
        if frame <= first and last_frame <= first:
            return False
        if frame >= last and last_frame >= last:
            return False

        if first < frame < last and first < last_frame < last:
            index = self._segment_index(frame)
            leading = keyframes[index]
            if leading.hold and index == self._segment_index(last_frame):
                return False
        return True

    def _segment_index(self, frame: float) -> int:
        """Index of the keyframe that starts the segment containing frame."""
        index = bisect_right(self._times, frame) - 1
        return min(max(index, 0), len(self._times) - 2)

    def _interpolate(self, k0: Keyframe, k1: Keyframe, frame: float):
        """Interpolate between the keyframes bracketing frame."""
        if k0.hold:
            return self._copy(k0.value)

        span = k1.time - k0.time
        progress = (frame - k0.time) / span if span > 0.0 else 0.0

        easing = segment_easing(k0.out_tangent, k1.in_tangent)
        if easing is not None:
            progress = easing.ease(progress)

        if self.track.value_type == ValueType.VECTOR1D:
            return k0.value + (k1.value - k0.value) * progress

        v0 = np.asarray(k0.value, dtype=float)
        v1 = np.asarray(k1.value, dtype=float)

        # Spatial path (cubic Bezier through the spatial tangents)
        if k0.spatial_out_tangent is not None or k1.spatial_in_tangent is not None:
            c0 = v0 + (np.asarray(k0.spatial_out_tangent, dtype=float)
                       if k0.spatial_out_tangent is not None else 0.0)
            c1 = v1 + (np.asarray(k1.spatial_in_tangent, dtype=float)
                       if k1.spatial_in_tangent is not None else 0.0)
            inverse = 1.0 - progress
            point = (inverse ** 3 * v0
                     + 3.0 * inverse ** 2 * progress * c0
                     + 3.0 * inverse * progress ** 2 * c1
                     + progress ** 3 * v1)
            return Vector3(point, dtype=float)

        return Vector3(v0 * (1.0 - progress) + v1 * progress, dtype=float)

    def _copy(self, value):
        if self.track.value_type == ValueType.VECTOR1D:
            return value
        return Vector3(np.array(value, dtype=float), dtype=float)

    def __repr__(self):
        return f"KeyframeInterpolator({self.track!r})"
