"""Hexasphere assembly: icosahedron -> subdivision -> projection -> tiles."""

from __future__ import annotations

import logging
import math
from collections import Counter
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Tuple

from . import icosahedron
from .errors import DegenerateInput, InvalidParameter, MeshIntegrityError
from .face import Face
from .point import PointKey, PointStore
from .tile import Tile, build_tile

__all__ = [
    "MIN_RADIUS",
    "Hexasphere",
    "validate_inputs",
    "generate",
    "validate_structure",
]

log = logging.getLogger(__name__)

# Radii below this are treated as zero. Larger radii that are still too small
# for the division count are rejected when projection merges point keys.
MIN_RADIUS = 1e-9


@dataclass(frozen=True, slots=True)
class Hexasphere:
    """Immutable result of one generation pass.

    ``tile_lookup`` is derived from ``tiles``; it is stored read-only and left
    out of equality and hashing.
    """

    radius: float
    num_divisions: int
    hex_size: float
    tiles: Tuple[Tile, ...]
    faces: Tuple[Face, ...]
    tile_lookup: Mapping[PointKey, Tile] = field(default_factory=dict, compare=False)
    defects: Tuple[MeshIntegrityError, ...] = field(default=(), compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "tile_lookup", MappingProxyType(dict(self.tile_lookup)))

    @property
    def face_count(self) -> int:
        return len(self.faces)

    @property
    def pentagons(self) -> List[Tile]:
        return [t for t in self.tiles if t.is_pentagon]

    @property
    def hexagons(self) -> List[Tile]:
        return [t for t in self.tiles if len(t.boundary) == 6]

    def get(self, key: PointKey) -> Tile | None:
        return self.tile_lookup.get(key)

    def neighbors(self, tile: Tile) -> List[Tile]:
        return [self.tile_lookup[k] for k in tile.neighbor_ids if k in self.tile_lookup]

    def summary(self) -> str:
        return (
            f"{len(self.tiles)} tiles ({len(self.pentagons)} pentagons / "
            f"{len(self.hexagons)} hexagons) / {self.face_count} faces"
        )


def validate_inputs(radius: float, num_divisions: int, hex_size: float) -> None:
    if isinstance(radius, bool) or not isinstance(radius, (int, float)) or not math.isfinite(radius):
        raise InvalidParameter(f"Radius must be a finite number, got {radius!r}")
    if radius < 0:
        raise InvalidParameter(f"Radius must be positive, got {radius}")
    if radius < MIN_RADIUS:
        raise DegenerateInput(f"Radius {radius} is too small to produce a sphere (min {MIN_RADIUS})")
    if isinstance(num_divisions, bool) or not isinstance(num_divisions, int):
        raise InvalidParameter(f"Number of divisions must be an integer, got {num_divisions!r}")
    if num_divisions < 1:
        raise InvalidParameter(f"Number of divisions must be at least 1, got {num_divisions}")
    if isinstance(hex_size, bool) or not isinstance(hex_size, (int, float)) or not math.isfinite(hex_size):
        raise InvalidParameter(f"Hex size must be a finite number, got {hex_size!r}")


def generate(
    radius: float,
    num_divisions: int,
    hex_size: float = 1.0,
    *,
    strict: bool = False,
) -> Hexasphere:
    """Build a hexasphere of ``10 * n**2 + 2`` tiles on a sphere of *radius*.

    Tile order follows point discovery order during subdivision. A tile
    whose faces do not form a closed fan, or a neighbor id with no matching
    tile, is a ``MeshIntegrityError``: raised immediately when *strict*,
    otherwise logged and collected on ``Hexasphere.defects``.
    """

    validate_inputs(radius, num_divisions, hex_size)

    store = PointStore()
    face_ids = icosahedron.face_id_counter()
    mesh = icosahedron.build_icosahedron(store, face_ids)
    faces = icosahedron.subdivide_faces(mesh, num_divisions, store, face_ids)
    projected, faces = icosahedron.project_points(store, faces, float(radius))

    defects: List[MeshIntegrityError] = []

    def report(exc: MeshIntegrityError) -> None:
        if strict:
            raise exc
        log.error("Mesh defect: %s", exc)
        defects.append(exc)

    tiles: List[Tile] = []
    for point in projected:
        try:
            tiles.append(build_tile(point, projected.faces_of(point), hex_size))
        except MeshIntegrityError as exc:
            report(exc)

    lookup = {tile.key: tile for tile in tiles}
    resolved: List[Tile] = []
    for tile in tiles:
        known = []
        for neighbor_id in tile.neighbor_ids:
            if neighbor_id in lookup:
                known.append(neighbor_id)
            else:
                report(
                    MeshIntegrityError(
                        f"Tile {tile} references unknown neighbor {neighbor_id}",
                        key=tile.key,
                    )
                )
        if len(known) != len(tile.neighbor_ids):
            tile = replace(tile, neighbor_ids=tuple(known))
        resolved.append(tile)

    sphere = Hexasphere(
        radius=radius,
        num_divisions=num_divisions,
        hex_size=hex_size,
        tiles=tuple(resolved),
        faces=tuple(faces),
        tile_lookup={tile.key: tile for tile in resolved},
        defects=tuple(defects),
    )
    log.info("Generated hexasphere: %s", sphere.summary())
    if defects:
        log.warning("Hexasphere generated with %d mesh defects", len(defects))
    return sphere


def _edge_key(a: PointKey, b: PointKey) -> Tuple[PointKey, PointKey]:
    return (a, b) if a < b else (b, a)


def validate_structure(sphere: Hexasphere, tolerance: float | None = None) -> Dict[str, Any]:
    """Check counts, symmetry and manifoldness of a generated hexasphere."""

    n = sphere.num_divisions
    tol = tolerance if tolerance is not None else 1e-9 * max(1.0, sphere.radius)
    expected_tiles = 10 * n * n + 2
    expected_faces = 20 * n * n

    polygon_sizes = Counter(len(tile.boundary) for tile in sphere.tiles)
    radius_errors = [abs(tile.center.magnitude - sphere.radius) for tile in sphere.tiles]
    max_radius_error = max(radius_errors) if radius_errors else 0.0
    off_sphere = sum(1 for err in radius_errors if err > tol)

    asymmetric: List[Tuple[PointKey, PointKey]] = []
    for tile in sphere.tiles:
        for neighbor in sphere.neighbors(tile):
            if tile.key not in neighbor.neighbor_ids:
                asymmetric.append((tile.key, neighbor.key))

    edge_counts: Dict[Tuple[PointKey, PointKey], int] = {}
    for face in sphere.faces:
        keys = face.keys
        for i in range(3):
            edge = _edge_key(keys[i], keys[(i + 1) % 3])
            edge_counts[edge] = edge_counts.get(edge, 0) + 1
    non_manifold = [edge for edge, count in edge_counts.items() if count != 2]

    if len(sphere.tiles) != expected_tiles:
        log.error("Expected %d tiles, found %d", expected_tiles, len(sphere.tiles))
    if sphere.face_count != expected_faces:
        log.error("Expected %d faces, found %d", expected_faces, sphere.face_count)
    if off_sphere:
        log.warning("%d tile centers deviate from the radius by more than %g", off_sphere, tol)
    if asymmetric:
        log.error(
            "%d one-sided neighbor links (showing first 5): %s",
            len(asymmetric),
            asymmetric[:5],
        )
    if non_manifold:
        log.error("%d edges are not shared by exactly two faces", len(non_manifold))
    log.info("Polygon size distribution: %s", sorted(polygon_sizes.items()))
    log.info("Max radius error: %.3g", max_radius_error)

    return {
        "tile_count": len(sphere.tiles),
        "expected_tile_count": expected_tiles,
        "face_count": sphere.face_count,
        "expected_face_count": expected_faces,
        "polygon_sizes": dict(polygon_sizes),
        "max_radius_error": max_radius_error,
        "asymmetric_neighbors": asymmetric,
        "non_manifold_edges": non_manifold,
        "defect_count": len(sphere.defects),
    }
