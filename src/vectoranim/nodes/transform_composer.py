"""
Transform Composer

Builds a layer's 4x4 local matrix from resolved transform values and
combines it with a parent's global matrix.

Matrices are row-major and act on row vectors (p' = p @ M), matching
pyrr: applying A and then B is A @ B, and translation lives in the last row.
"""

import math
from typing import Optional, Sequence

import numpy as np
from pyrr import Matrix44

from ..config.settings import SCALE_PERCENT_SCALE


def rotation_matrix(axis: str, degrees: float) -> Matrix44:
    """
    Create a rotation about a principal axis for row vectors.

    Positive angles rotate counter-clockwise when looking down the axis
    toward the origin (Y toward Z for the X axis, Z toward X for Y,
    X toward Y for Z).

    Args:
        axis: 'x', 'y' or 'z'
        degrees: Rotation angle in degrees

    Returns:
        4x4 rotation matrix
    """
    radians = math.radians(degrees)
    c = math.cos(radians)
    s = math.sin(radians)

    if axis == 'x':
        rows = [[1.0, 0.0, 0.0], [0.0, c, s], [0.0, -s, c]]
    elif axis == 'y':
        rows = [[c, 0.0, -s], [0.0, 1.0, 0.0], [s, 0.0, c]]
    elif axis == 'z':
        rows = [[c, s, 0.0], [-s, c, 0.0], [0.0, 0.0, 1.0]]
    else:
        raise ValueError(f"Unknown rotation axis: {axis}")

    matrix = np.identity(4, dtype=float)
    matrix[:3, :3] = rows
    return Matrix44(matrix, dtype=float)


def make_transform(
    anchor: Sequence[float],
    position: Sequence[float],
    scale: Sequence[float],
    rotation_x: float,
    rotation_y: float,
    rotation_z: float,
    orientation: Optional[Sequence[float]] = None
) -> Matrix44:
    """
    Compose a layer's local transform.

    Order of operations applied to a point:
    1. Translate by -anchor (anchor becomes the pivot)
    2. Scale (percent, 100 = unscaled; 2D scales keep Z)
    3. Rotate about X, then Y, then Z (degrees)
    4. Orientation correction about X, Y, Z (degrees)
    5. Translate by position (parent space)

    Args:
        anchor: Anchor point (x, y, z)
        position: Position (x, y, z)
        scale: Scale percent (x, y) or (x, y, z)
        rotation_x: Rotation about X in degrees
        rotation_y: Rotation about Y in degrees
        rotation_z: Rotation about Z in degrees
        orientation: Orientation (x, y, z) in degrees, or None

    Returns:
        4x4 local transform
    """
    anchor = np.asarray(anchor, dtype=float)
    position = np.asarray(position, dtype=float)
    scale = [float(s) for s in np.asarray(scale, dtype=float).ravel()]
    if len(scale) == 2:
        scale.append(100.0)

    stages = [
        Matrix44.from_translation(-anchor[:3], dtype=float),
        Matrix44.from_scale(np.array(scale[:3]) * SCALE_PERCENT_SCALE, dtype=float),
        rotation_matrix('x', rotation_x),
        rotation_matrix('y', rotation_y),
        rotation_matrix('z', rotation_z),
    ]

    if orientation is not None:
        ox, oy, oz = (float(o) for o in np.asarray(orientation, dtype=float).ravel()[:3])
        stages.extend([rotation_matrix('x', ox), rotation_matrix('y', oy), rotation_matrix('z', oz)])

    stages.append(Matrix44.from_translation(position[:3], dtype=float))

    mat = np.identity(4, dtype=float)
    for stage in stages:
        mat = np.dot(mat, np.asarray(stage))
    return Matrix44(mat, dtype=float)


def combine(local: Matrix44, parent_global: Matrix44) -> Matrix44:
    """
    Combine a local transform with the parent's global transform.

    The local transform is applied first, then the parent's space
    (row-vector form of parent * local).
    """
    return Matrix44(np.dot(np.asarray(local), np.asarray(parent_global)), dtype=float)


def transform_point(matrix: Matrix44, point: Sequence[float]) -> np.ndarray:
    """Apply a transform to a 3D point."""
    row = np.append(np.asarray(point, dtype=float)[:3], 1.0)
    result = np.dot(row, np.asarray(matrix))
    return result[:3] / result[3]
