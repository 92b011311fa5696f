"""Geodesic hexasphere generator: icosahedron subdivision and dual tiling."""

from .errors import DegenerateInput, HexasphereError, InvalidParameter, MeshIntegrityError
from .tessellation import Hexasphere, generate

__all__ = [
    "errors",
    "export",
    "face",
    "icosahedron",
    "parameters",
    "point",
    "tessellation",
    "tile",
    "vec3",
    "Hexasphere",
    "generate",
    "HexasphereError",
    "InvalidParameter",
    "DegenerateInput",
    "MeshIntegrityError",
]
