from __future__ import annotations
from dataclasses import dataclass
from sys import float_info
from typing import Iterable, Tuple

MACHINE_EPS = float_info.epsilon  # епсилон типу компоненти (double)
FLT_MAX = float_info.max

@dataclass(frozen=True)
class Vec3:
    x: float
    y: float
    z: float
    def __iter__(self):
        yield self.x; yield self.y; yield self.z

    def __getitem__(self, i: int) -> float:
        if i == 0: return self.x
        if i == 1: return self.y
        if i == 2: return self.z
        raise IndexError(f"Vec3 index out of range: {i}")

    def __len__(self) -> int:
        return 3

    def as_tuple(self) -> Tuple[float, float, float]:
        return (self.x, self.y, self.z)

    @classmethod
    def of(cls, xyz: Iterable[float]) -> "Vec3":
        x, y, z = xyz
        return cls(float(x), float(y), float(z))

def add(a: Vec3, b: Vec3) -> Vec3:
    return Vec3(a.x + b.x, a.y + b.y, a.z + b.z)

def sub(a: Vec3, b: Vec3) -> Vec3:
    return Vec3(a.x - b.x, a.y - b.y, a.z - b.z)

def scale(a: Vec3, s: float) -> Vec3:
    return Vec3(a.x*s, a.y*s, a.z*s)

def vmin(a: Vec3, b: Vec3) -> Vec3:
    """Покомпонентний мінімум (строге `<`, як в акумуляції AABB)."""
    return Vec3(b.x if b.x < a.x else a.x,
                b.y if b.y < a.y else a.y,
                b.z if b.z < a.z else a.z)

def vmax(a: Vec3, b: Vec3) -> Vec3:
    return Vec3(b.x if b.x > a.x else a.x,
                b.y if b.y > a.y else a.y,
                b.z if b.z > a.z else a.z)

def le(a: Vec3, b: Vec3) -> bool:
    """a <= b покомпонентно."""
    return a.x <= b.x and a.y <= b.y and a.z <= b.z
