"""Base icosahedron construction and triangular-lattice subdivision.

The corner layout and face order are fixed: tile discovery order (and so the
order of every exported tile) follows from them, and the latitude/longitude
mapping assumes the poles sit on the Y axis.
"""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass
from math import sqrt
from typing import Iterator, List, Tuple

from .errors import DegenerateInput
from .face import Face
from .point import PRECISION, Point, PointStore

__all__ = [
    "CORNER_SCALE",
    "BASE_FACES",
    "IcosahedronMesh",
    "corner_points",
    "build_icosahedron",
    "subdivide_faces",
    "project_points",
    "face_id_counter",
]

log = logging.getLogger(__name__)

# Corners are built large so rounding to 3 digits keeps lattice points distinct.
CORNER_SCALE = 1000.0

BASE_FACES: List[Tuple[int, int, int]] = [
    (0, 1, 4),
    (1, 9, 4),
    (4, 9, 5),
    (5, 9, 3),
    (2, 3, 7),
    (3, 2, 5),
    (7, 10, 2),
    (0, 8, 10),
    (0, 4, 8),
    (8, 2, 10),
    (8, 4, 5),
    (8, 5, 2),
    (1, 0, 6),
    (11, 1, 6),
    (3, 9, 11),
    (6, 10, 7),
    (3, 11, 7),
    (11, 6, 7),
    (6, 0, 10),
    (9, 1, 11),
]


@dataclass(slots=True)
class IcosahedronMesh:
    corners: List[Point]
    faces: List[Face]


def corner_points(scale: float = CORNER_SCALE) -> List[Point]:
    """Twelve corners from three orthogonal golden-ratio rectangles."""

    phi = (1 + sqrt(5)) / 2
    s = scale
    return [
        Point(s, phi * s, 0),
        Point(-s, phi * s, 0),
        Point(s, -phi * s, 0),
        Point(-s, -phi * s, 0),
        Point(0, s, phi * s),
        Point(0, -s, phi * s),
        Point(0, s, -phi * s),
        Point(0, -s, -phi * s),
        Point(phi * s, 0, s),
        Point(-phi * s, 0, s),
        Point(phi * s, 0, -s),
        Point(-phi * s, 0, -s),
    ]


def build_icosahedron(store: PointStore, face_ids: Iterator[int]) -> IcosahedronMesh:
    """Seed *store* with the corners and return the 20 base faces.

    Base faces are only templates for subdivision and are not registered
    with the store.
    """

    corners = [store.canonical(p) for p in corner_points()]
    faces = [
        Face(next(face_ids), (corners[a], corners[b], corners[c]))
        for a, b, c in BASE_FACES
    ]
    return IcosahedronMesh(corners=corners, faces=faces)


def subdivide_faces(
    mesh: IcosahedronMesh,
    num_divisions: int,
    store: PointStore,
    face_ids: Iterator[int],
) -> List[Face]:
    """Split every base face into ``num_divisions ** 2`` registered triangles.

    Rows are walked from the first corner: row ``i`` holds ``i + 1`` points
    interpolated between the two edge points at that row and contributes
    ``2 * i - 1`` triangles joining it to the previous row.
    """

    new_faces: List[Face] = []

    def emit(a: Point, b: Point, c: Point) -> None:
        face = Face(next(face_ids), (a, b, c))
        store.register(face)
        new_faces.append(face)

    for base in mesh.faces:
        origin, p1, p2 = base.points
        left = origin.subdivide(p1, num_divisions, store.canonical)
        right = origin.subdivide(p2, num_divisions, store.canonical)
        bottom = [origin]
        for i in range(1, num_divisions + 1):
            prev = bottom
            bottom = left[i].subdivide(right[i], i, store.canonical)
            for j in range(i):
                emit(prev[j], bottom[j], bottom[j + 1])
                if j > 0:
                    emit(prev[j - 1], prev[j], bottom[j])

    log.debug(
        "Subdivided %d base faces into %d faces / %d points",
        len(mesh.faces),
        len(new_faces),
        len(store),
    )
    return new_faces


def project_points(
    store: PointStore, faces: List[Face], radius: float
) -> Tuple[PointStore, List[Face]]:
    """Project every stored point onto *radius* and re-key faces against the result.

    Projection changes coordinates and therefore keys, so a fresh store is
    filled in pre-projection discovery order and every face is rebuilt (same
    id) from the projected corners. Projected coordinates keep full precision.
    Raises ``DegenerateInput`` when the radius is too small for distinct
    points to keep distinct keys.
    """

    projected = PointStore()
    mapping = {}
    for point in store:
        mapping[point.key] = projected.canonical(point.project(radius))

    collapsed = len(store) - len(projected)
    if collapsed:
        raise DegenerateInput(
            f"Radius {radius:g} is too small for this subdivision: {collapsed} projected "
            f"points share a key at {PRECISION}-digit precision"
        )

    rebuilt: List[Face] = []
    for face in faces:
        new_face = Face(face.id, tuple(mapping[p.key] for p in face.points))
        projected.register(new_face)
        rebuilt.append(new_face)
    return projected, rebuilt


def face_id_counter() -> Iterator[int]:
    """Fresh monotonically increasing face id source for one generation pass."""
    return itertools.count()
