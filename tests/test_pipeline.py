from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import pytest

from meshbox.config import CheckConfig
from meshbox.errors import EmptyMeshError, InvalidMeshTopology
from meshbox.geom import Vec3
from meshbox.mesh import MeshData
from meshbox.pipeline import check_mesh, check_mesh_file

ROOT = Path(__file__).resolve().parents[1]


@pytest.fixture
def demo():
    sys.path.insert(0, str(ROOT / "examples"))
    try:
        import main as module
    finally:
        sys.path.pop(0)
    yield module
    # setup_logging() чіпляє хендлер до перехопленого stderr
    logging.getLogger("meshbox").handlers.clear()


SHARED_EDGE = """shared edge
(0.0, 0.0, 0.0)
(2.0, 0.0, 0.0)
(2.0, 3.0, 0.0)
(0.0, 3.0, 1.5)
(100.0, 100.0, 100.0)
Indices:
0,1,2
0,2,3
"""


@pytest.mark.parametrize("backend", ["numpy", "scipy"])
def test_shared_edge_mesh_matches_oracle(tmp_path, backend):
    if backend == "scipy":
        pytest.importorskip("scipy")
    path = tmp_path / "mesh.txt"
    path.write_text(SHARED_EDGE, encoding="utf-8")

    report = check_mesh_file(path, CheckConfig(backend=backend))

    assert report.matches
    assert report.ok
    assert "W-AABB-MISMATCH" not in report.diagnostics.codes()
    assert report.local.min == Vec3(0.0, 0.0, 0.0)
    assert report.local.max == Vec3(2.0, 3.0, 1.5)
    assert report.source == str(path)


def test_all_vertices_policy_reports_mismatch(tmp_path, caplog):
    path = tmp_path / "mesh.txt"
    path.write_text(SHARED_EDGE, encoding="utf-8")

    with caplog.at_level(logging.WARNING, logger="meshbox"):
        report = check_mesh_file(path, CheckConfig(backend="numpy", policy="all"))

    assert not report.matches
    assert not report.ok
    mismatch = report.diagnostics.warnings()[0]
    assert mismatch.code == "W-AABB-MISMATCH"
    assert mismatch.data["local_max"] == (100.0, 100.0, 100.0)
    assert mismatch.data["oracle_max"] == (2.0, 3.0, 1.5)
    assert "AABB mismatch" in caplog.text
    # діагностика серіалізується
    json.dumps(report.diagnostics.to_list())


def test_invalid_topology_short_circuits():
    mesh = MeshData((Vec3(0, 0, 0), Vec3(1, 0, 0)), (0, 1, 2))
    with pytest.raises(InvalidMeshTopology):
        check_mesh(mesh, CheckConfig(backend="numpy"))


def test_missing_file_surfaces_empty_mesh(tmp_path):
    with pytest.raises(EmptyMeshError):
        check_mesh_file(tmp_path / "absent.txt", CheckConfig(backend="numpy"))


def test_relative_tolerance_config():
    mesh = MeshData((Vec3(1e8, 0, 0), Vec3(1e8 + 1, 0, 0), Vec3(1e8, 1, 0)), (0, 1, 2))
    report = check_mesh(mesh, CheckConfig(backend="numpy", tolerance="relative"))
    assert report.matches


def test_demo_driver(demo, capsys):
    assert demo.main(["--config", str(ROOT / "examples" / "meshbox.toml")]) == 0
    out = capsys.readouterr()
    assert "mesh_triangles.txt" in out.out
    assert "AABB mismatch" not in out.err


def test_demo_driver_invalid_mesh(demo, tmp_path, capsys):
    path = tmp_path / "bad.txt"
    path.write_text("bad\n(0,0,0)\n(1,0,0)\nIndices:\n0,1,2\n", encoding="utf-8")
    assert demo.main([str(path), "--config", str(ROOT / "examples" / "meshbox.toml")]) == demo.EXIT_INVALID_TOPOLOGY
    assert "Invalid mesh" in capsys.readouterr().err
