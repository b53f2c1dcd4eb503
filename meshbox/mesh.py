# meshbox/mesh.py
from __future__ import annotations
import io
import logging
import operator
import os
from dataclasses import dataclass
from typing import IO, Iterable, Iterator, List, Optional, Tuple, Union

import numpy as np

from .diagnostics import Diagnostic, Diagnostics, ERROR, WARNING
from .errors import InvalidMeshTopology, ParseError, SourceUnavailable
from .geom import Vec3
from .parse import parse_index_line, parse_vec3

logger = logging.getLogger(__name__)

INDEX_MARKER = "Indices:"

Tri = Tuple[int, int, int]
Source = Union[str, "os.PathLike[str]", IO[str]]


@dataclass(frozen=True)
class MeshData:
    """
    Трикутна сітка:
      - vertices: позиції вершин (Vec3)
      - indices: плаский список індексів, по три на трикутник.
    Індекси можуть повторюватися і пропускати вершини.
    """
    vertices: Tuple[Vec3, ...] = ()
    indices: Tuple[int, ...] = ()

    def __post_init__(self):
        # приймаємо будь-які послідовності, зберігаємо кортежі
        object.__setattr__(self, "vertices", tuple(self.vertices))
        object.__setattr__(self, "indices", tuple(_as_index(i) for i in self.indices))
        if len(self.indices) % 3 != 0:
            raise ValueError(f"index count {len(self.indices)} is not a multiple of 3")
        if any(i < 0 for i in self.indices):
            raise ValueError("indices must be non-negative")

    @classmethod
    def empty(cls) -> "MeshData":
        return cls((), ())

    @property
    def triangle_count(self) -> int:
        return len(self.indices) // 3

    def is_empty(self) -> bool:
        return not self.vertices and not self.indices

    def triangles(self) -> Iterator[Tri]:
        ix = self.indices
        for t in range(0, len(ix), 3):
            yield (ix[t], ix[t + 1], ix[t + 2])

    def vertex_array(self, padded: bool = False) -> np.ndarray:
        """(n, 3) float64; з padded=True — (n, 4) з нульовим w для BVH-бібліотек."""
        arr = np.array([v.as_tuple() for v in self.vertices], dtype=float).reshape(-1, 3)
        if padded:
            arr = np.hstack([arr, np.zeros((arr.shape[0], 1), dtype=arr.dtype)])
        return arr

    def index_array(self) -> np.ndarray:
        return np.asarray(self.indices, dtype=np.int64)

    def validate(self) -> None:
        """Кидає InvalidMeshTopology на першому індексі поза межами."""
        n = len(self.vertices)
        for pos, i in enumerate(self.indices):
            if i >= n:
                raise InvalidMeshTopology(i, pos, n)


def _as_index(i) -> int:
    # 0.9 не має тихо ставати 0
    try:
        return operator.index(i)
    except TypeError:
        raise ValueError(f"index {i!r} is not an integer") from None


# ---------- валідація ----------
def is_valid_mesh(mesh: MeshData) -> bool:
    """Кожен індекс строго менший за кількість вершин. Порожня сітка — валідна."""
    n = len(mesh.vertices)
    return all(i < n for i in mesh.indices)


def validate_mesh(mesh: MeshData) -> Diagnostics:
    """
    Повна перевірка з діагностикою:
      - E-MESH-INDEX на кожну позицію з індексом поза межами;
      - W-MESH-EMPTY, якщо трикутників немає.
    """
    diags = Diagnostics()
    n = len(mesh.vertices)
    for pos, i in enumerate(mesh.indices):
        if i >= n:
            diags.add(Diagnostic(
                code=InvalidMeshTopology.code,
                message=f"index {i} at position {pos} is out of range for {n} vertices",
                severity=ERROR,
                location=f"triangle {pos // 3}",
                data={"index": i, "position": pos, "vertex_count": n},
            ))
    if mesh.triangle_count == 0:
        diags.add(Diagnostic(
            code="W-MESH-EMPTY",
            message="mesh has no triangles",
            severity=WARNING,
            data={"vertex_count": n},
        ))
    return diags


# ---------- завантаження ----------
def load_mesh(
    source: Source,
    *,
    strict: bool = False,
    diagnostics: Optional[Diagnostics] = None,
) -> MeshData:
    """
    Читає сітку з файлу або текстового потоку.

    Недоступне джерело — не аварія: логуємо помилку й повертаємо порожню
    сітку (з strict=True кидаємо SourceUnavailable). Зіпсований рядок
    вершини валить усе завантаження з ParseError.
    """
    if hasattr(source, "read"):
        return _read_mesh(source, diagnostics)

    path = os.fspath(source)
    try:
        f = open(path, "r", encoding="utf-8")
    except OSError as e:
        if strict:
            raise SourceUnavailable(path, e.strerror or str(e)) from e
        logger.error("Cannot open mesh source %s: %s", path, e)
        if diagnostics is not None:
            diagnostics.add(Diagnostic("W-SOURCE-UNAVAILABLE", f"cannot open {path}", WARNING, path))
        return MeshData.empty()
    with f:
        logger.debug("Loading mesh from %s", path)
        return _read_mesh(f, diagnostics)


def load_mesh_text(text: str, diagnostics: Optional[Diagnostics] = None) -> MeshData:
    return _read_mesh(io.StringIO(text), diagnostics)


def _read_mesh(lines: Iterable[str], diagnostics: Optional[Diagnostics]) -> MeshData:
    vertices: List[Vec3] = []
    indices: List[int] = []
    in_indices = False
    lineno = 0
    for lineno, raw in _numbered(lines):
        if lineno == 1:
            continue  # заголовок ігноруємо
        line = raw.strip()
        if not in_indices:
            if line == INDEX_MARKER:
                in_indices = True
            elif line:
                vertices.append(parse_vec3(line, lineno))
            continue
        if not line:
            continue
        ids, warn = parse_index_line(line, lineno)
        indices.extend(ids)
        if warn is not None:
            logger.warning("%s (%s)", warn.message, warn.location)
            if diagnostics is not None:
                diagnostics.add(warn)

    if not in_indices:
        logger.warning("No %r marker found: mesh has no triangles", INDEX_MARKER)
    if len(indices) % 3 != 0:
        raise ParseError(f"index count {len(indices)} is not a multiple of 3")
    logger.info("Loaded mesh: %d vertices, %d triangles", len(vertices), len(indices) // 3)
    return MeshData(tuple(vertices), tuple(indices))


def _numbered(lines: Iterable[str]) -> Iterator[Tuple[int, str]]:
    """Нумерує рядки; зіпсоване кодування — ParseError з номером рядка."""
    it = iter(lines)
    lineno = 0
    while True:
        try:
            raw = next(it)
        except StopIteration:
            return
        except UnicodeDecodeError as e:
            raise ParseError(f"source is not valid UTF-8: {e.reason}", lineno + 1) from e
        lineno += 1
        yield lineno, raw
