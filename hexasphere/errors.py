"""Exception types raised by the hexasphere generator."""

from __future__ import annotations

from typing import Tuple

__all__ = [
    "HexasphereError",
    "InvalidParameter",
    "DegenerateInput",
    "MeshIntegrityError",
]


class HexasphereError(Exception):
    """Base class for every error raised by this package."""


class InvalidParameter(HexasphereError, ValueError):
    """A generation input is out of range or of the wrong type."""


class DegenerateInput(InvalidParameter):
    """Input would collapse the geometry (zero radius, zero-length vector)."""


class MeshIntegrityError(HexasphereError):
    """The triangulation is not a closed 2-manifold around some point."""

    def __init__(self, message: str, key: Tuple[float, float, float] | None = None) -> None:
        super().__init__(message)
        self.key = key
