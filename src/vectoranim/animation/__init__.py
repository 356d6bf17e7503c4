"""
Animation System

Keyframe tracks, interpolation and frame-cached animated properties.
"""

from .keyframe import Keyframe, KeyframeTrack, ValueType, to_vector1d, to_vector3d
from .easing import CubicBezierEasing, segment_easing
from .interpolator import KeyframeInterpolator
from .value_providers import SingleValueProvider, ClosureValueProvider
from .node_property import NodeProperty

__all__ = [
    'Keyframe',
    'KeyframeTrack',
    'ValueType',
    'to_vector1d',
    'to_vector3d',
    'CubicBezierEasing',
    'segment_easing',
    'KeyframeInterpolator',
    'SingleValueProvider',
    'ClosureValueProvider',
    'NodeProperty',
]
