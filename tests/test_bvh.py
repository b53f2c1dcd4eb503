from __future__ import annotations

import numpy as np
import pytest

from meshbox.bvh import build_bvh
from meshbox.errors import EmptyMeshError, InvalidMeshTopology
from meshbox.geom import Vec3

VERTS = np.array(
    [
        [0.0, 0.0, 0.0],
        [1.0, 0.0, 0.0],
        [1.0, 1.0, 0.0],
        [0.0, 1.0, 0.5],
        [-9.0, 42.0, 3.0],  # ні в якому трикутнику
    ]
)
INDICES = [0, 1, 2, 0, 2, 3]


@pytest.mark.parametrize("backend", ["numpy", "scipy"])
def test_oracle_bounds_cover_only_indexed_triangles(backend):
    if backend == "scipy":
        pytest.importorskip("scipy")
    handle = build_bvh(VERTS, INDICES, 2, backend=backend)
    assert handle.backend == backend
    assert handle.triangle_count == 2
    assert handle.aabb_min == Vec3(0.0, 0.0, 0.0)
    assert handle.aabb_max == Vec3(1.0, 1.0, 0.5)


def test_scipy_handle_exposes_tree():
    pytest.importorskip("scipy")
    handle = build_bvh(VERTS, INDICES, 2, backend="scipy")
    assert handle.tree is not None
    assert handle.tree.n == 6


def test_padded_vertices_are_accepted():
    padded = np.hstack([VERTS, np.full((len(VERTS), 1), 123.0)])
    handle = build_bvh(padded, INDICES, 2, backend="numpy")
    assert handle.aabb_max == Vec3(1.0, 1.0, 0.5)


def test_triangle_count_must_match_indices():
    with pytest.raises(ValueError):
        build_bvh(VERTS, INDICES, 3, backend="numpy")


def test_zero_triangles():
    with pytest.raises(EmptyMeshError):
        build_bvh(VERTS, [], 0, backend="numpy")


def test_out_of_range_index():
    with pytest.raises(InvalidMeshTopology):
        build_bvh(VERTS, [0, 1, 5], 1, backend="numpy")


def test_unknown_backend():
    with pytest.raises(ValueError):
        build_bvh(VERTS, INDICES, 2, backend="embree")


def test_bad_vertex_shape():
    with pytest.raises(ValueError):
        build_bvh(np.zeros((4, 2)), [0, 1, 2], 1, backend="numpy")
