"""Command-line interface for nav2d path queries.

Usage examples:
  python -m nav2d --mesh-file level.json --start "1,1" --goal "14,6" --json
  python -m nav2d --mesh-json "[[[0,0],[0,12],[12,0]]]" --start "1,1" --goal "3,3"
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, List, Tuple

from .errors import Nav2dError
from .navmesh import NavMesh
from .options import DEFAULT_POINT_QUERY_SIZE, NavMeshOptions
from .path import PathResult

LOGGER = logging.getLogger(__name__)


def _parse_point(value: str) -> Tuple[float, float]:
    try:
        parts = [float(p.strip()) for p in value.split(",")]
        if len(parts) != 2:
            raise ValueError
        return (parts[0], parts[1])
    except ValueError as exc:
        raise argparse.ArgumentTypeError(
            f"Expected point in form 'x,y', got: {value!r}"
        ) from exc


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="nav2d",
        description="Shortest path query over a navigation mesh built from polygons",
    )

    # Mesh source
    src = p.add_mutually_exclusive_group(required=True)
    src.add_argument("--mesh-file", type=str, default=None, help="JSON file with an array of polygons, each an array of [x, y] points")
    src.add_argument("--mesh-json", type=str, default=None, help="JSON string with an array of polygons")

    # Required endpoints
    p.add_argument("--start", type=_parse_point, required=True, help="Start point: x,y")
    p.add_argument("--goal", type=_parse_point, required=True, help="Goal point: x,y")

    # Mesh options
    p.add_argument("--no-triangulate", dest="triangulate", action="store_false", help="Use input polygons as cells (must be convex)")
    p.add_argument("--point-query-size", type=float, default=DEFAULT_POINT_QUERY_SIZE, help="Side of the point location box")

    # Output
    p.add_argument("--json", action="store_true", help="Output result as JSON")
    p.add_argument("--out", "--output", dest="out_path", type=str, default=None, help="Write output to file instead of stdout")

    # Logging
    p.add_argument("--log-level", default="WARNING", choices=["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"], help="Logging level")

    p.set_defaults(triangulate=True)
    return p


def _load_polygons(args: argparse.Namespace) -> List[Any]:
    if args.mesh_file:
        try:
            text = Path(args.mesh_file).read_text(encoding="utf-8")
        except OSError as exc:
            raise ValueError(f"Failed to read --mesh-file {args.mesh_file!r}: {exc}") from exc
        source = f"--mesh-file {args.mesh_file}"
    else:
        text = args.mesh_json
        source = "--mesh-json"
    try:
        payload: Any = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {source}: {exc}") from exc
    if not isinstance(payload, list):
        raise ValueError(f"{source} must be a JSON array of polygons; got {type(payload).__name__}")
    return payload


def _format_human(result: PathResult) -> str:
    path_len = len(result.path) if result.path is not None else 0
    lines = [
        f"reason: {result.reason}",
        f"expanded: {result.expanded}",
        f"cells: {len(result.cells) if result.cells is not None else 0}",
        f"cost: {result.cost:.6g}",
        f"path_len: {path_len}",
    ]
    if result.path is not None:
        lines.append("path:")
        for point in result.path:
            lines.append(f"  - [{point.x:.6g}, {point.y:.6g}]")
    return "\n".join(lines) + "\n"


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level))

    try:
        polygons = _load_polygons(args)
        options = NavMeshOptions(triangulate=args.triangulate, point_query_size=args.point_query_size)
        mesh = NavMesh(polygons, options)
    except (ValueError, Nav2dError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2

    result = mesh.search(args.start, args.goal)
    LOGGER.info("query %s -> %s: reason=%s expanded=%d", args.start, args.goal, result.reason, result.expanded)

    if args.json:
        out_text = json.dumps(result.to_json_dict(), indent=2) + "\n"
    else:
        out_text = _format_human(result)

    if args.out_path:
        out_file = Path(args.out_path)
        out_file.parent.mkdir(parents=True, exist_ok=True)
        out_file.write_text(out_text, encoding="utf-8")
    else:
        print(out_text, end="")

    # Exit code 0 if path found or properly reported; non-zero only on input errors
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
