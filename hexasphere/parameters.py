"""Configuration stack for the hexasphere generator.

Parameters are layered from lowest to highest precedence:

1. JSON file (primary): persistent project configuration.
2. CLI overrides: runtime tweaks for headless runs.

Validation delegates to ``tessellation.validate_inputs`` so a config file and
a direct ``generate`` call reject the same values.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple
import json
import logging

from .errors import InvalidParameter
from .tessellation import validate_inputs

__all__ = [
    "HexasphereParameters",
    "load_json_config",
    "apply_overrides",
    "parse_cli_overrides",
    "load_parameters",
]


@dataclass(slots=True)
class HexasphereParameters:
    """Canonical set of adjustable hexasphere parameters."""

    radius: float = 5.0
    num_divisions: int = 10
    hex_size: float = 1.0  # 1.0 = tiles touch; smaller leaves gaps
    strict: bool = False  # raise on the first mesh defect instead of collecting

    def validate(self) -> None:
        validate_inputs(self.radius, self.num_divisions, self.hex_size)
        if not isinstance(self.strict, bool):
            raise InvalidParameter(f"strict must be a boolean, got {self.strict!r}")

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "HexasphereParameters":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise KeyError(f"Unknown parameter(s): {', '.join(unknown)}")
        merged = {**asdict(cls()), **data}
        params = cls(**merged)
        params.validate()
        return params


def load_json_config(path: Path | str | None) -> Dict[str, Any]:
    """Load the JSON config file or return an empty dict if no path is given."""

    if path is None:
        return {}
    json_path = Path(path)
    if not json_path.exists():
        raise FileNotFoundError(f"Config file not found: {json_path}")
    data = json.loads(json_path.read_text(encoding="utf-8"))
    if not isinstance(data, Mapping):
        raise InvalidParameter("Top-level JSON config must be an object")
    return dict(data)


def apply_overrides(
    base: HexasphereParameters, overrides: Mapping[str, Any]
) -> HexasphereParameters:
    """Return a copy of ``base`` with overrides applied."""

    merged = base.to_dict()
    for key, value in overrides.items():
        if key not in merged:
            raise KeyError(f"Unknown parameter '{key}'")
        merged[key] = value
    return HexasphereParameters.from_dict(merged)


def parse_cli_overrides(
    args: Optional[Iterable[str]] = None,
) -> Tuple[Dict[str, Any], Any]:
    """Parse CLI-style overrides using argparse conventions."""

    import argparse

    parser = argparse.ArgumentParser(description="Hexasphere tile generator")
    parser.add_argument("--config", type=str, help="Path to JSON config", default=None)
    parser.add_argument("--out-dir", type=str, default="exports", help="Export folder")
    parser.add_argument("--json-name", type=str, default="hexasphere.json")
    parser.add_argument("--obj-name", type=str, default="hexasphere.obj")
    parser.add_argument("--skip-json", action="store_true", help="Disable JSON export")
    parser.add_argument("--skip-obj", action="store_true", help="Disable OBJ export")
    parser.add_argument("--radius", type=float, help="Sphere radius")
    parser.add_argument("--divisions", type=int, help="Subdivisions per icosahedron edge")
    parser.add_argument(
        "--hex-size",
        type=float,
        help="Tile shrink factor toward its center (0.01-1.0)",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Abort on the first mesh integrity defect",
    )

    parsed, unknown = parser.parse_known_args(args=args)
    if unknown:
        logging.info("Ignoring unknown CLI args: %s", " ".join(unknown))
    overrides: Dict[str, Any] = {}
    if parsed.radius is not None:
        overrides["radius"] = parsed.radius
    if parsed.divisions is not None:
        overrides["num_divisions"] = parsed.divisions
    if parsed.hex_size is not None:
        overrides["hex_size"] = parsed.hex_size
    if parsed.strict:
        overrides["strict"] = True
    return overrides, parsed


def load_parameters(
    config_path: Path | str | None,
    cli_overrides: Mapping[str, Any] | None = None,
) -> HexasphereParameters:
    """Load parameters using the JSON → CLI precedence chain."""

    data = load_json_config(config_path)
    params = HexasphereParameters.from_dict(data)
    if cli_overrides:
        params = apply_overrides(params, cli_overrides)
    return params
