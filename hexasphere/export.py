"""Serialization of generated hexaspheres.

Two formats:

* a JSON document ``{"radius": r, "tiles": [{"centerPoint": {...}, "boundary": [...]}]}``
* a Wavefront OBJ-style text mesh with shared ``v`` lines and one polygon
  ``f`` line per tile (1-based indices, no normals or texture coordinates).
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List

from .point import Point, PointKey
from .tessellation import Hexasphere

__all__ = [
    "to_dict",
    "to_json",
    "to_obj",
    "export_json",
    "export_obj",
]

log = logging.getLogger(__name__)


def to_dict(sphere: Hexasphere) -> Dict[str, Any]:
    return {
        "radius": sphere.radius,
        "tiles": [tile.to_dict() for tile in sphere.tiles],
    }


def to_json(sphere: Hexasphere, indent: int | None = None) -> str:
    return json.dumps(to_dict(sphere), indent=indent)


def to_obj(sphere: Hexasphere) -> str:
    """Return the tile set as OBJ text.

    Boundary vertices are shared between tiles by coordinate key and numbered
    in first-seen order; each tile's face line keeps its stored winding.
    """
    vertices: List[Point] = []
    index_of: Dict[PointKey, int] = {}
    face_lines: List[str] = []

    for tile in sphere.tiles:
        indices = []
        for point in tile.boundary:
            idx = index_of.get(point.key)
            if idx is None:
                vertices.append(point)
                idx = len(vertices)
                index_of[point.key] = idx
            indices.append(str(idx))
        face_lines.append("f " + " ".join(indices))

    lines = ["# vertices"]
    lines.extend(f"v {p.x} {p.y} {p.z}" for p in vertices)
    lines.append("")
    lines.append("# faces")
    lines.extend(face_lines)
    return "\n".join(lines) + "\n"


def export_json(sphere: Hexasphere, destination: Path) -> None:
    """Write the JSON document for *sphere*."""
    destination.write_text(to_json(sphere), encoding="utf-8")
    log.info("Wrote JSON %s (%d tiles)", destination, len(sphere.tiles))


def export_obj(sphere: Hexasphere, destination: Path) -> None:
    """Write the OBJ text mesh for *sphere*."""
    destination.write_text(to_obj(sphere), encoding="utf-8")
    log.info("Wrote OBJ %s", destination)
