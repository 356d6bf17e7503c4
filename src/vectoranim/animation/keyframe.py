"""
Keyframe

Keyframe samples and immutable keyframe tracks for animated properties.
"""

from dataclasses import dataclass, replace
from enum import Enum
from numbers import Number
from typing import Iterator, Optional, Sequence, Tuple

import numpy as np
from pyrr import Vector3


class ValueType(Enum):
    """Value types an animated property can carry."""
    VECTOR1D = "vector1d"
    VECTOR3D = "vector3d"


def to_vector1d(value) -> float:
    """Coerce a scalar (or the first component of a vector) to a float."""
    if isinstance(value, Number):
        return float(value)
    components = np.asarray(value, dtype=float).ravel()
    return float(components[0]) if components.size else 0.0


def to_vector3d(value, z_fill: float = 0.0) -> Vector3:
    """
    Coerce a scalar, 2D or 3D value to a Vector3.

    Args:
        value: Scalar or sequence with 1 to 3 components
        z_fill: Z component used when the value has fewer than three components

    Returns:
        Vector3 in float64
    """
    if isinstance(value, Number):
        return Vector3([float(value), float(value), z_fill], dtype=float)

    components = [float(c) for c in np.asarray(value, dtype=float).ravel()[:3]]
    if len(components) == 0:
        components = [0.0, 0.0, z_fill]
    elif len(components) == 1:
        components = [components[0], components[0], z_fill]
    elif len(components) == 2:
        components.append(z_fill)
    return Vector3(components, dtype=float)


@dataclass(frozen=True, eq=False)
class Keyframe:
    """
    Single keyframe of a property track.

    Stores the frame time, the value, and the easing metadata of the
    segment that starts (out_tangent) or ends (in_tangent) at this keyframe.
    """

    time: float
    value: object
    hold: bool = False
    in_tangent: Optional[Tuple[float, float]] = None
    out_tangent: Optional[Tuple[float, float]] = None
    spatial_in_tangent: Optional[Vector3] = None
    spatial_out_tangent: Optional[Vector3] = None

    def __repr__(self):
        hold = ", hold" if self.hold else ""
        return f"Keyframe(t={self.time:.3f}, v={self.value}{hold})"


class KeyframeTrack:
    """
    Ordered, immutable sequence of keyframes for one property.

    A track with zero or one keyframe is a constant. Times must be
    non-decreasing; values are coerced to the track's value type on
    construction.
    """

    def __init__(
        self,
        keyframes: Sequence[Keyframe] = (),
        value_type: Optional[ValueType] = None,
        z_fill: float = 0.0
    ):
        """
        Initialize keyframe track.

        Args:
            keyframes: Keyframes ordered by time
            value_type: Value type (inferred from the first value if None)
            z_fill: Z component for two-component vector values
        """
        keyframes = list(keyframes)
        if value_type is None:
            first = keyframes[0].value if keyframes else 0.0
            value_type = ValueType.VECTOR1D if isinstance(first, Number) else ValueType.VECTOR3D

        for previous, current in zip(keyframes, keyframes[1:]):
            if current.time < previous.time:
                raise ValueError(
                    f"Keyframe times must be non-decreasing: {current.time} follows {previous.time}"
                )

        self.value_type = value_type
        self.z_fill = z_fill
        self._keyframes: Tuple[Keyframe, ...] = tuple(
            self._normalized(keyframe) for keyframe in keyframes
        )

    def _normalized(self, keyframe: Keyframe) -> Keyframe:
        if self.value_type == ValueType.VECTOR1D:
            return replace(keyframe, time=float(keyframe.time), value=to_vector1d(keyframe.value))

        spatial_in = keyframe.spatial_in_tangent
        spatial_out = keyframe.spatial_out_tangent
        return replace(
            keyframe,
            time=float(keyframe.time),
            value=to_vector3d(keyframe.value, self.z_fill),
            spatial_in_tangent=to_vector3d(spatial_in) if spatial_in is not None else None,
            spatial_out_tangent=to_vector3d(spatial_out) if spatial_out is not None else None,
        )

    @classmethod
    def constant(cls, value, value_type: Optional[ValueType] = None, z_fill: float = 0.0) -> 'KeyframeTrack':
        """Create an unanimated track holding a single value."""
        return cls([Keyframe(0.0, value)], value_type=value_type, z_fill=z_fill)

    @classmethod
    def from_samples(
        cls,
        samples: Sequence[Tuple[float, object]],
        value_type: Optional[ValueType] = None,
        hold: bool = False,
        z_fill: float = 0.0
    ) -> 'KeyframeTrack':
        """Create a linear (or hold) track from (time, value) pairs."""
        return cls(
            [Keyframe(time, value, hold=hold) for time, value in samples],
            value_type=value_type,
            z_fill=z_fill,
        )

    @property
    def keyframes(self) -> Tuple[Keyframe, ...]:
        return self._keyframes

    @property
    def is_animated(self) -> bool:
        """True when the track has more than one keyframe."""
        return len(self._keyframes) > 1

    def zero_value(self):
        """Type-appropriate zero for an empty track."""
        if self.value_type == ValueType.VECTOR1D:
            return 0.0
        return Vector3([0.0, 0.0, 0.0], dtype=float)

    def __len__(self) -> int:
        return len(self._keyframes)

    def __iter__(self) -> Iterator[Keyframe]:
        return iter(self._keyframes)

    def __getitem__(self, index: int) -> Keyframe:
        return self._keyframes[index]

    def __repr__(self):
        return f"KeyframeTrack(type={self.value_type.value}, keyframes={len(self._keyframes)})"
