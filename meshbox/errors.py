# meshbox/errors.py
from __future__ import annotations
from typing import Optional


class MeshBoxError(Exception):
    """Базова помилка пакета; `code` — стабільний код для діагностики."""
    code = "E-MESHBOX"


class ParseError(MeshBoxError, ValueError):
    code = "E-PARSE"

    def __init__(self, message: str, lineno: Optional[int] = None, text: Optional[str] = None):
        if lineno is not None:
            message = f"line {lineno}: {message}"
        super().__init__(message)
        self.lineno = lineno
        self.text = text


class SourceUnavailable(MeshBoxError, OSError):
    code = "E-SOURCE"

    def __init__(self, source: str, reason: str = ""):
        msg = f"cannot open mesh source {source!r}"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)
        self.source = source


class InvalidMeshTopology(MeshBoxError):
    """Індекс посилається на неіснуючу вершину."""
    code = "E-MESH-INDEX"

    def __init__(self, index: int, position: int, vertex_count: int):
        super().__init__(
            f"index {index} at position {position} is out of range "
            f"for {vertex_count} vertices"
        )
        self.index = index
        self.position = position
        self.vertex_count = vertex_count


class EmptyMeshError(MeshBoxError):
    code = "E-MESH-EMPTY"

    def __init__(self, message: str = "mesh has no triangles: AABB is undefined"):
        super().__init__(message)
