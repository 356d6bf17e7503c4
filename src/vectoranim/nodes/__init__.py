"""Animator nodes, transform composition and the per-frame node graph"""
from .transform_descriptor import TransformDescriptor
from .transform_properties import LayerTransformProperties
from .transform_composer import make_transform, combine, rotation_matrix, transform_point
from .transform_node import LayerTransformNode, NodeKind
from .node_graph import NodeGraph

__all__ = [
    "TransformDescriptor",
    "LayerTransformProperties",
    "make_transform",
    "combine",
    "rotation_matrix",
    "transform_point",
    "LayerTransformNode",
    "NodeKind",
    "NodeGraph",
]
