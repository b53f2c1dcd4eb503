# examples/main.py
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from meshbox.config import DEFAULT_CONFIG, load_config
from meshbox.errors import EmptyMeshError, InvalidMeshTopology
from meshbox.logging_config import setup_logging
from meshbox.pipeline import check_mesh_file

EXIT_INVALID_TOPOLOGY = 2
EXIT_EMPTY_MESH = 3


def mesh_triangles_path() -> Path:
    """Демо-файл лежить поруч зі скриптом."""
    return Path(__file__).resolve().parent / "mesh_triangles.txt"


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="meshbox-demo")
    parser.add_argument("mesh", nargs="?", default=None)
    parser.add_argument("-c", "--config", default=None)
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    setup_logging(logging.DEBUG if args.verbose else logging.INFO)
    config = load_config(Path(args.config)) if args.config else DEFAULT_CONFIG

    path = Path(args.mesh) if args.mesh else mesh_triangles_path()
    print(f"Mesh Triangles File Path: {path}")

    # --- пайплайн: завантаження, валідація, AABB, звірка з BVH ---
    try:
        report = check_mesh_file(path, config)
    except InvalidMeshTopology as e:
        print(f"Invalid mesh: {e}", file=sys.stderr)
        return EXIT_INVALID_TOPOLOGY
    except EmptyMeshError as e:
        print(f"Empty mesh: {e}", file=sys.stderr)
        return EXIT_EMPTY_MESH

    print(f"Вершини:     {len(report.mesh.vertices)}")
    print(f"Трикутники:  {report.mesh.triangle_count}")
    print(f"AABB min:    {report.local.min.as_tuple()}")
    print(f"AABB max:    {report.local.max.as_tuple()}")

    # розбіжність не зупиняє програму — лише повідомлення
    if not report.matches:
        o = report.oracle
        print(
            f"AABB mismatch: local ({report.local.min.as_tuple()}, {report.local.max.as_tuple()}) "
            f"vs {o.backend} ({o.aabb_min.as_tuple()}, {o.aabb_max.as_tuple()})",
            file=sys.stderr,
        )
    return 0


if __name__ == "__main__":
    sys.exit(main())
