"""Tuple vector helpers shared by points, faces and tiles.

All functions operate on ``Vector3 = Tuple[float, float, float]`` values so
they stay independent of the ``Point`` value type.
"""

from __future__ import annotations

import math
from typing import Tuple

__all__ = [
    "Vector3",
    "norm",
    "sub",
    "cross",
    "distance",
    "surface_normal",
    "signs_agree",
]

Vector3 = Tuple[float, float, float]


def norm(v: Vector3) -> float:
    """Euclidean length of *v*."""
    return math.sqrt(v[0] * v[0] + v[1] * v[1] + v[2] * v[2])


def sub(a: Vector3, b: Vector3) -> Vector3:
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


def cross(a: Vector3, b: Vector3) -> Vector3:
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def distance(a: Vector3, b: Vector3) -> float:
    return norm(sub(a, b))


def surface_normal(p1: Vector3, p2: Vector3, p3: Vector3) -> Vector3:
    """Unnormalized normal of the triangle ``p1 p2 p3`` (``(p2-p1) x (p3-p1)``)."""
    return cross(sub(p2, p1), sub(p3, p1))


def signs_agree(position: Vector3, direction: Vector3) -> bool:
    """True when every component of *direction* has the sign of *position*.

    This is a component-wise check, not a dot product: a zero component in
    *position* accepts either sign.
    """
    return (
        position[0] * direction[0] >= 0
        and position[1] * direction[1] >= 0
        and position[2] * direction[2] >= 0
    )
