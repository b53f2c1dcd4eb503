# meshbox/aabb.py
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from math import isclose
from typing import Iterable, List, Union

from .errors import EmptyMeshError, InvalidMeshTopology
from .geom import FLT_MAX, MACHINE_EPS, Vec3, add, le, scale, sub, vmax, vmin
from .mesh import MeshData


class AabbPolicy(str, Enum):
    """Які вершини входять у бокс."""
    REFERENCED = "referenced"   # лише ті, на які посилаються трикутники (за замовчуванням)
    ALL_VERTICES = "all"        # усі вершини, навіть «висячі»


@dataclass(frozen=True)
class AABB:
    min: Vec3
    max: Vec3

    def __post_init__(self):
        if not le(self.min, self.max):
            raise ValueError(f"AABB min {self.min} exceeds max {self.max}")

    @property
    def extent(self) -> Vec3:
        return sub(self.max, self.min)

    @property
    def center(self) -> Vec3:
        return scale(add(self.min, self.max), 0.5)

    def contains(self, p: Vec3) -> bool:
        return le(self.min, p) and le(p, self.max)

    def nearly_equal(self, other: "AABB", eps: float = MACHINE_EPS) -> bool:
        return nearly_equal(self.min, other.min, eps) and nearly_equal(self.max, other.max, eps)

    def nearly_equal_rel(self, other: "AABB", rel_tol: float = 1e-9, abs_tol: float = MACHINE_EPS) -> bool:
        return (nearly_equal_rel(self.min, other.min, rel_tol, abs_tol)
                and nearly_equal_rel(self.max, other.max, rel_tol, abs_tol))


# ---------- порівняння ----------
def nearly_equal(a: Vec3, b: Vec3, eps: float = MACHINE_EPS) -> bool:
    """|a[i] - b[i]| <= eps для кожної компоненти."""
    if eps < 0:
        raise ValueError("eps must be non-negative")
    return all(abs(x - y) <= eps for x, y in zip(a, b))


def nearly_equal_rel(a: Vec3, b: Vec3, rel_tol: float = 1e-9, abs_tol: float = MACHINE_EPS) -> bool:
    """Комбінований допуск: відносний для великих координат, абсолютний біля нуля."""
    if rel_tol < 0 or abs_tol < 0:
        raise ValueError("tolerances must be non-negative")
    return all(isclose(x, y, rel_tol=rel_tol, abs_tol=abs_tol) for x, y in zip(a, b))


# ---------- обчислення ----------
def referenced_vertices(mesh: MeshData) -> List[int]:
    """Індекси вершин, що трапляються в трикутниках (без повторів, у порядку появи)."""
    seen = set()
    out: List[int] = []
    for i in mesh.indices:
        if i not in seen:
            seen.add(i); out.append(i)
    return out


def _accumulate(points: Iterable[Vec3]) -> AABB:
    lo = Vec3(FLT_MAX, FLT_MAX, FLT_MAX)
    hi = Vec3(-FLT_MAX, -FLT_MAX, -FLT_MAX)
    for p in points:
        lo = vmin(lo, p)
        hi = vmax(hi, p)
    return AABB(lo, hi)


def aabb_referenced(mesh: MeshData) -> AABB:
    """Бокс по вершинах, які реально бачить BVH (індексовані трикутники)."""
    if mesh.triangle_count == 0:
        raise EmptyMeshError()
    n = len(mesh.vertices)
    ids = referenced_vertices(mesh)
    for i in ids:
        if i >= n:
            raise InvalidMeshTopology(i, mesh.indices.index(i), n)
    return _accumulate(mesh.vertices[i] for i in ids)


def aabb_all_vertices(mesh: MeshData) -> AABB:
    """Бокс по всіх вершинах, включно з тими, на які ніхто не посилається."""
    if mesh.triangle_count == 0:
        raise EmptyMeshError()
    mesh.validate()
    return _accumulate(mesh.vertices)


def compute_aabb(mesh: MeshData, policy: Union[AabbPolicy, str] = AabbPolicy.REFERENCED) -> AABB:
    policy = AabbPolicy(policy)
    if policy is AabbPolicy.REFERENCED:
        return aabb_referenced(mesh)
    return aabb_all_vertices(mesh)
