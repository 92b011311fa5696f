#!/usr/bin/env python3
"""Headless entry point for the hexasphere generator."""

from __future__ import annotations

import logging
from pathlib import Path
import sys
from typing import List, Sequence

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from hexasphere import export, parameters, tessellation
from hexasphere.errors import HexasphereError


def configure_logging() -> None:
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")


def main(argv: Sequence[str] | None = None) -> int:
    configure_logging()
    overrides, cli = parameters.parse_cli_overrides(
        _sanitized_args(sys.argv[1:] if argv is None else argv)
    )
    try:
        params = parameters.load_parameters(_resolve_config_path(cli.config), overrides)
        logging.info(
            "Parameters: radius=%.3f divisions=%d hex_size=%.2f",
            params.radius,
            params.num_divisions,
            params.hex_size,
        )
        sphere = tessellation.generate(
            params.radius,
            params.num_divisions,
            params.hex_size,
            strict=params.strict,
        )
    except HexasphereError as exc:
        logging.error("Generation failed: %s", exc)
        return 1

    report = tessellation.validate_structure(sphere)
    _log_validation_report(report)

    out_dir = Path(cli.out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    if not cli.skip_json:
        export.export_json(sphere, out_dir / cli.json_name)
    if not cli.skip_obj:
        export.export_obj(sphere, out_dir / cli.obj_name)

    if sphere.defects:
        logging.error("%d mesh defects were reported during generation", len(sphere.defects))
        return 1
    return 0


def _sanitized_args(raw: Sequence[str]) -> List[str]:
    return [arg for arg in raw if arg not in {"--", "-"}]


def _default_config_path() -> str | None:
    candidate = REPO_ROOT / "configs" / "base.json"
    if candidate.exists():
        return str(candidate)
    return None


def _resolve_config_path(cli_config: str | None) -> str | None:
    if cli_config:
        path = Path(cli_config)
        if path.exists():
            return str(path)
        logging.warning("Config file %s not found; trying project default", path)
    default = _default_config_path()
    if default is None:
        logging.info("No configuration file available; using built-in defaults")
    return default


def _log_validation_report(report) -> None:
    logging.info(
        "Tiles: %d (expected %d), faces: %d (expected %d)",
        report["tile_count"],
        report["expected_tile_count"],
        report["face_count"],
        report["expected_face_count"],
    )
    asymmetric = report.get("asymmetric_neighbors", [])
    if asymmetric:
        logging.error("%d neighbor links are one-sided (sample: %s)", len(asymmetric), asymmetric[:5])
    non_manifold = report.get("non_manifold_edges", [])
    if non_manifold:
        logging.error("%d non-manifold edges detected", len(non_manifold))


if __name__ == "__main__":
    sys.exit(main())
