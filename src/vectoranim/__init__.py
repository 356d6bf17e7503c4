"""
VectorAnim - Layer Transform Evaluation

Evaluates keyframed layer transforms (anchor, position, scale, rotation,
orientation, opacity) per frame and composes them through a layer
hierarchy with dirty-flag caching.
"""

# Configuration
from .config.settings import *

# Animation
from .animation import (
    Keyframe,
    KeyframeTrack,
    ValueType,
    CubicBezierEasing,
    KeyframeInterpolator,
    SingleValueProvider,
    ClosureValueProvider,
    NodeProperty,
)

# Nodes
from .nodes import (
    TransformDescriptor,
    LayerTransformProperties,
    LayerTransformNode,
    NodeKind,
    NodeGraph,
    make_transform,
    combine,
)

# Loaders
from .loaders import RigLoader, RigLoadResult

__version__ = "0.1.0"
__all__ = [
    # Config (exported via *)
    # Animation
    "Keyframe",
    "KeyframeTrack",
    "ValueType",
    "CubicBezierEasing",
    "KeyframeInterpolator",
    "SingleValueProvider",
    "ClosureValueProvider",
    "NodeProperty",
    # Nodes
    "TransformDescriptor",
    "LayerTransformProperties",
    "LayerTransformNode",
    "NodeKind",
    "NodeGraph",
    "make_transform",
    "combine",
    # Loaders
    "RigLoader",
    "RigLoadResult",
]
