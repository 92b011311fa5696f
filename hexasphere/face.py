"""Triangular faces of the subdivided icosahedron."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple

from .point import Point

__all__ = ["Face"]


@dataclass(frozen=True, slots=True)
class Face:
    """Immutable triangle of three points with a precomputed centroid.

    Corner comparisons go through ``Point.key`` so any coordinate-equal point
    may be passed to the query methods.
    """

    id: int
    points: Tuple[Point, Point, Point]
    centroid: Point = field(init=False, compare=False)

    def __post_init__(self) -> None:
        a, b, c = self.points
        object.__setattr__(
            self,
            "centroid",
            Point.exact((a.x + b.x + c.x) / 3, (a.y + b.y + c.y) / 3, (a.z + b.z + c.z) / 3),
        )

    @property
    def keys(self) -> Tuple[Tuple[float, float, float], ...]:
        return tuple(p.key for p in self.points)

    def other_points(self, point: Point) -> List[Point]:
        return [p for p in self.points if p.key != point.key]

    def find_third_point(self, point1: Point, point2: Point) -> Point | None:
        for p in self.points:
            if p.key != point1.key and p.key != point2.key:
                return p
        return None

    def is_adjacent_to(self, other: "Face") -> bool:
        """True when exactly two corners are shared (a common edge)."""
        other_keys = set(other.keys)
        shared = [p for p in self.points if p.key in other_keys]
        return len(shared) == 2
