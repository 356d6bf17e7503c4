"""Transform descriptor: the named keyframe tracks of one layer transform."""

from __future__ import annotations

from dataclasses import dataclass, fields
from numbers import Number
from typing import Any, Dict, Mapping, Optional

from ..animation.keyframe import Keyframe, KeyframeTrack, ValueType
from ..config.settings import POSITION_Z_FILL, SCALE_Z_FILL


# Descriptor field -> (value type, z fill)
CHANNEL_TYPES: Dict[str, tuple] = {
    "anchor_point": (ValueType.VECTOR3D, POSITION_Z_FILL),
    "position": (ValueType.VECTOR3D, POSITION_Z_FILL),
    "position_x": (ValueType.VECTOR1D, 0.0),
    "position_y": (ValueType.VECTOR1D, 0.0),
    "scale": (ValueType.VECTOR3D, SCALE_Z_FILL),
    "rotation": (ValueType.VECTOR1D, 0.0),
    "rotation_x": (ValueType.VECTOR1D, 0.0),
    "rotation_y": (ValueType.VECTOR1D, 0.0),
    "opacity": (ValueType.VECTOR1D, 0.0),
    "orientation": (ValueType.VECTOR3D, POSITION_Z_FILL),
}


@dataclass
class TransformDescriptor:
    """
    Keyframe tracks for one layer transform, as produced by a parser.

    Any channel may be None. Position comes either combined (position) or
    split (position_x and position_y).
    """

    anchor_point: Optional[KeyframeTrack] = None
    position: Optional[KeyframeTrack] = None
    position_x: Optional[KeyframeTrack] = None
    position_y: Optional[KeyframeTrack] = None
    scale: Optional[KeyframeTrack] = None
    rotation: Optional[KeyframeTrack] = None
    rotation_x: Optional[KeyframeTrack] = None
    rotation_y: Optional[KeyframeTrack] = None
    opacity: Optional[KeyframeTrack] = None
    orientation: Optional[KeyframeTrack] = None

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "TransformDescriptor":
        """
        Build a descriptor from a plain mapping.

        Each channel is either a constant value or a list of keyframe
        mappings with "frame" and "value" plus optional "hold",
        "in_tangent", "out_tangent", "spatial_in_tangent" and
        "spatial_out_tangent".
        """
        known = {f.name for f in fields(cls)}
        unknown = set(payload) - known
        if unknown:
            raise ValueError(f"Unknown transform channels: {sorted(unknown)}")

        tracks = {
            name: _track_from_data(name, data)
            for name, data in payload.items()
            if data is not None
        }
        return cls(**tracks)


def _track_from_data(name: str, data: Any) -> KeyframeTrack:
    value_type, z_fill = CHANNEL_TYPES[name]

    if isinstance(data, Number) or (
        isinstance(data, (list, tuple)) and all(isinstance(c, Number) for c in data)
    ):
        return KeyframeTrack.constant(data, value_type=value_type, z_fill=z_fill)

    keyframes = []
    for entry in data:
        if "frame" not in entry or "value" not in entry:
            raise ValueError(f"Keyframe in channel '{name}' needs 'frame' and 'value': {entry}")
        keyframes.append(Keyframe(
            time=float(entry["frame"]),
            value=entry["value"],
            hold=bool(entry.get("hold", False)),
            in_tangent=_tangent(entry.get("in_tangent")),
            out_tangent=_tangent(entry.get("out_tangent")),
            spatial_in_tangent=entry.get("spatial_in_tangent"),
            spatial_out_tangent=entry.get("spatial_out_tangent"),
        ))
    return KeyframeTrack(keyframes, value_type=value_type, z_fill=z_fill)


def _tangent(data) -> Optional[tuple]:
    if data is None:
        return None
    return (float(data[0]), float(data[1]))
