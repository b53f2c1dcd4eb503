from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Sequence, Union

import numpy as np

from .errors import EmptyMeshError, InvalidMeshTopology
from .geom import Vec3

logger = logging.getLogger(__name__)

BACKENDS = ("scipy", "numpy")

ArrayLike = Union[np.ndarray, Sequence]


@dataclass(frozen=True)
class BvhHandle:
    """
    Результат зовнішнього будівника: лише те, що нам треба для звірки —
    його власний AABB у тих самих координатах, що й вхідні вершини.
    """
    aabb_min: Vec3
    aabb_max: Vec3
    triangle_count: int
    backend: str
    tree: object = None


def _triangle_corners(vertices: ArrayLike, indices: ArrayLike, triangle_count: int) -> np.ndarray:
    """(triangle_count, 3, 3): координати кутів кожного трикутника."""
    verts = np.asarray(vertices, dtype=float)
    if verts.ndim != 2 or verts.shape[1] not in (3, 4):
        raise ValueError(f"vertices must have shape (n, 3) or (n, 4), got {verts.shape}")
    verts = verts[:, :3]  # padding-компонента w для нас нічого не значить
    ix = np.asarray(indices, dtype=np.int64).reshape(-1)
    if ix.size != 3 * triangle_count:
        raise ValueError(f"triangle_count={triangle_count} does not match {ix.size} indices")
    if triangle_count == 0:
        raise EmptyMeshError()
    bad = np.flatnonzero((ix < 0) | (ix >= verts.shape[0]))
    if bad.size:
        pos = int(bad[0])
        raise InvalidMeshTopology(int(ix[pos]), pos, verts.shape[0])
    return verts[ix].reshape(triangle_count, 3, 3)


def build_bvh(
    vertices: ArrayLike,
    indices: ArrayLike,
    triangle_count: int,
    backend: str = "scipy",
) -> BvhHandle:
    """
    Будує просторовий індекс над індексованими трикутниками зовнішньою
    бібліотекою і повертає його AABB.

    backend:
      - "scipy": scipy.spatial.cKDTree над кутами трикутників, межі — tree.mins / tree.maxes;
      - "numpy": векторизований min/max по масиву трикутників.
    """
    tris = _triangle_corners(vertices, indices, triangle_count)
    name = backend.lower()

    if name == "scipy":
        try:
            from scipy.spatial import cKDTree
        except ImportError as e:
            raise RuntimeError(
                "backend='scipy', але SciPy не встановлено. "
                "Встанови scipy або використай backend='numpy'."
            ) from e
        tree = cKDTree(tris.reshape(-1, 3))
        lo, hi = tree.mins, tree.maxes
    elif name == "numpy":
        tree = None
        lo, hi = tris.min(axis=(0, 1)), tris.max(axis=(0, 1))
    else:
        raise ValueError(f"Unknown backend: {backend!r} (expected one of {BACKENDS})")

    logger.debug("BVH oracle %s: %d triangles", name, triangle_count)
    return BvhHandle(
        aabb_min=Vec3.of(lo.tolist()),
        aabb_max=Vec3.of(hi.tolist()),
        triangle_count=triangle_count,
        backend=name,
        tree=tree,
    )
