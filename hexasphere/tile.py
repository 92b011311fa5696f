"""Dual tiles (pentagons and hexagons) around each projected mesh point."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, List, Sequence, Set, Tuple

from . import vec3 as v3
from .errors import MeshIntegrityError
from .face import Face
from .point import Point, PointKey

__all__ = [
    "LatLon",
    "Tile",
    "clamp_hex_size",
    "order_faces",
    "build_tile",
]

VALID_FACE_COUNTS = (5, 6)


@dataclass(frozen=True, slots=True)
class LatLon:
    lat: float
    lon: float


def clamp_hex_size(hex_size: float) -> float:
    return max(0.01, min(1.0, hex_size))


def order_faces(center: Point, faces: Sequence[Face]) -> List[Face]:
    """Walk the faces around *center* into one adjacency cycle.

    Starts from the first face and repeatedly takes the first remaining face
    sharing an edge with the previously taken one.
    """

    if len(faces) not in VALID_FACE_COUNTS:
        raise MeshIntegrityError(
            f"Point {center} has {len(faces)} incident faces; expected 5 or 6",
            key=center.key,
        )

    remaining = list(faces)
    ordered = [remaining.pop(0)]
    while remaining:
        last = ordered[-1]
        for idx, candidate in enumerate(remaining):
            if candidate.is_adjacent_to(last):
                ordered.append(remaining.pop(idx))
                break
        else:
            raise MeshIntegrityError(
                f"Faces around {center} do not form a connected fan "
                f"({len(ordered)} of {len(faces)} walked)",
                key=center.key,
            )

    if not ordered[-1].is_adjacent_to(ordered[0]):
        raise MeshIntegrityError(f"Faces around {center} do not close into a cycle", key=center.key)
    return ordered


@dataclass(frozen=True, slots=True)
class Tile:
    """Polygon around one mesh point.

    ``faces[i]`` is the face whose centroid produced ``boundary[i]``.
    ``neighbor_ids`` hold the keys of adjacent tiles; resolve them through
    ``Hexasphere.neighbors``.
    """

    center: Point
    faces: Tuple[Face, ...]
    boundary: Tuple[Point, ...]
    neighbor_ids: Tuple[PointKey, ...]

    @property
    def key(self) -> PointKey:
        return self.center.key

    @property
    def is_pentagon(self) -> bool:
        return len(self.boundary) == 5

    def lat_lon(self, radius: float, boundary_index: int | None = None) -> LatLon:
        """Latitude/longitude in degrees of the center (or one boundary point).

        The longitude carries a fixed quarter-turn offset so that an
        equirectangular texture's prime meridian lines up with the mesh.
        """
        point = self.center
        if boundary_index is not None and 0 <= boundary_index < len(self.boundary):
            point = self.boundary[boundary_index]

        phi = math.acos(max(-1.0, min(1.0, point.y / radius)))
        theta = ((math.atan2(point.x, point.z) + math.pi + math.pi / 2) % (math.pi * 2)) - math.pi
        return LatLon(lat=180 * phi / math.pi - 90, lon=180 * theta / math.pi)

    def scaled_boundary(self, scale: float) -> List[Point]:
        """Boundary pulled toward the center; ``scale`` 0 collapses it onto the center.

        The segment floor of 0.01 still applies, so ``scale`` 1 leaves each
        point 1% short of the stored boundary.
        """
        s = max(0.0, min(1.0, scale))
        return [self.center.segment(p, 1 - s) for p in self.boundary]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "centerPoint": self.center.to_dict(),
            "boundary": [p.to_dict() for p in self.boundary],
        }

    def __str__(self) -> str:
        return str(self.center)


def build_tile(center: Point, incident_faces: Sequence[Face], hex_size: float = 1.0) -> Tile:
    """Build the tile around *center* from its registered faces.

    Raises ``MeshIntegrityError`` when the faces cannot be walked into a
    single 5- or 6-face cycle.
    """

    size = clamp_hex_size(hex_size)
    faces = order_faces(center, incident_faces)

    boundary = [face.centroid.segment(center, size) for face in faces]

    neighbor_ids: List[PointKey] = []
    seen: Set[PointKey] = set()
    for face in faces:
        for other in face.other_points(center):
            if other.key not in seen:
                seen.add(other.key)
                neighbor_ids.append(other.key)

    # Outward check compares component signs with the center, not a dot product.
    normal = v3.surface_normal(
        boundary[1].coords,
        boundary[2].coords,
        boundary[3].coords if len(boundary) > 3 else boundary[0].coords,
    )
    if not v3.signs_agree(center.coords, normal):
        boundary.reverse()
        faces.reverse()

    return Tile(
        center=center,
        faces=tuple(faces),
        boundary=tuple(boundary),
        neighbor_ids=tuple(neighbor_ids),
    )
