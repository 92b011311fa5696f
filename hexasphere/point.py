"""3D points and the content-addressed point store.

Lattice points are rounded to ``PRECISION`` decimal digits when created so
two triangles that compute the same edge point from opposite directions land
on the same value and share one canonical ``Point`` through
``PointStore.canonical``. Points derived from the lattice (projections,
centroids, segments) keep full float precision; only their ``key`` is
rounded, so they still deduplicate against each other.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Dict, Iterator, List, Tuple

from . import vec3 as v3
from .errors import DegenerateInput, InvalidParameter

if TYPE_CHECKING:
    from .face import Face

__all__ = [
    "PRECISION",
    "PointKey",
    "Point",
    "PointStore",
    "DedupFunction",
]

PRECISION = 3

PointKey = Tuple[float, float, float]


def _fixed(value: float) -> float:
    # Adding 0.0 folds -0.0 into 0.0 so keys and text output stay stable.
    return round(float(value), PRECISION) + 0.0


@dataclass(frozen=True, slots=True)
class Point:
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "x", _fixed(self.x))
        object.__setattr__(self, "y", _fixed(self.y))
        object.__setattr__(self, "z", _fixed(self.z))

    @classmethod
    def exact(cls, x: float, y: float, z: float) -> "Point":
        """Build a point without rounding its coordinates."""
        point = object.__new__(cls)
        object.__setattr__(point, "x", float(x))
        object.__setattr__(point, "y", float(y))
        object.__setattr__(point, "z", float(z))
        return point

    @property
    def key(self) -> PointKey:
        return (_fixed(self.x), _fixed(self.y), _fixed(self.z))

    @property
    def coords(self) -> v3.Vector3:
        return (self.x, self.y, self.z)

    @property
    def magnitude(self) -> float:
        return v3.norm(self.coords)

    def distance_to(self, other: "Point") -> float:
        return v3.distance(self.coords, other.coords)

    def subdivide(self, other: "Point", count: int, dedup: "DedupFunction") -> List["Point"]:
        """Return ``count + 1`` evenly spaced points from self to *other*.

        Both endpoints are returned as given; every interior point is passed
        through *dedup* so neighbouring triangles resolve to the same instance.
        """
        if count < 1:
            raise InvalidParameter(f"Subdivision count must be at least 1, got {count}")
        segments = [self]
        for i in range(1, count):
            ratio = i / count
            candidate = Point(
                self.x * (1 - ratio) + other.x * ratio,
                self.y * (1 - ratio) + other.y * ratio,
                self.z * (1 - ratio) + other.z * ratio,
            )
            segments.append(dedup(candidate))
        segments.append(other)
        return segments

    def segment(self, other: "Point", percent: float) -> "Point":
        """Blend toward self by *percent*: 1.0 returns self, small values approach *other*.

        *percent* is clamped into ``[0.01, 1]``.
        """
        p = max(0.01, min(1.0, percent))
        return Point.exact(
            other.x * (1 - p) + self.x * p,
            other.y * (1 - p) + self.y * p,
            other.z * (1 - p) + self.z * p,
        )

    def midpoint(self, other: "Point") -> "Point":
        return self.segment(other, 0.5)

    def project(self, radius: float, percent: float = 1.0) -> "Point":
        """Return this point pushed along its ray to distance ``radius * percent``."""
        p = max(0.0, min(1.0, percent))
        magnitude = self.magnitude
        if magnitude == 0:
            raise DegenerateInput("Cannot project a zero-length point onto a sphere")
        ratio = radius / magnitude
        return Point.exact(self.x * ratio * p, self.y * ratio * p, self.z * ratio * p)

    def to_dict(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y, "z": self.z}

    def __str__(self) -> str:
        return ",".join(str(c) for c in self.key)


DedupFunction = Callable[[Point], Point]


@dataclass(slots=True)
class PointStore:
    """Insertion-ordered arena of canonical points keyed by rounded coordinate.

    Also holds the incident-face lists that faces register into; points
    themselves stay plain values.
    """

    _points: Dict[PointKey, Point] = field(default_factory=dict)
    _faces: Dict[PointKey, List["Face"]] = field(default_factory=dict)

    def canonical(self, point: Point) -> Point:
        """Return the stored point sharing *point*'s key, registering it if new."""
        key = point.key
        existing = self._points.get(key)
        if existing is not None:
            return existing
        self._points[key] = point
        self._faces[key] = []
        return point

    def register(self, face: "Face") -> None:
        for corner in face.points:
            self.canonical(corner)
            self._faces[corner.key].append(face)

    def faces_of(self, point: Point) -> List["Face"]:
        return list(self._faces.get(point.key, ()))

    def __contains__(self, key: object) -> bool:
        return key in self._points

    def __iter__(self) -> Iterator[Point]:
        return iter(list(self._points.values()))

    def __len__(self) -> int:
        return len(self._points)
