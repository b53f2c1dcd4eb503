from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional

from .errors import InvalidMeshTopology, MeshBoxError

ERROR = "ERROR"
WARNING = "WARNING"


@dataclass
class Diagnostic:
    code: str
    message: str
    severity: str = ERROR
    location: Optional[str] = None
    data: Optional[dict] = None

    def to_dict(self) -> dict:
        return {
            "code": self.code,
            "message": self.message,
            "severity": self.severity,
            "location": self.location,
            "data": self.data,
        }


class Diagnostics:
    def __init__(self) -> None:
        self.items: List[Diagnostic] = []

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)

    def add(self, diagnostic: Diagnostic) -> None:
        self.items.append(diagnostic)

    def extend(self, diagnostics: Iterable[Diagnostic] | "Diagnostics") -> None:
        if isinstance(diagnostics, Diagnostics):
            self.items.extend(diagnostics.items)
        else:
            self.items.extend(diagnostics)

    def has_errors(self) -> bool:
        return any(d.severity == ERROR for d in self.items)

    def errors(self) -> List[Diagnostic]:
        return [d for d in self.items if d.severity == ERROR]

    def warnings(self) -> List[Diagnostic]:
        return [d for d in self.items if d.severity == WARNING]

    def codes(self) -> List[str]:
        return [d.code for d in self.items]

    def raise_for_errors(self) -> None:
        if not self.has_errors():
            return
        first = self.errors()[0]
        data = first.data or {}
        if first.code == InvalidMeshTopology.code:
            raise InvalidMeshTopology(data["index"], data["position"], data["vertex_count"])
        err = MeshBoxError(first.message)
        err.code = first.code
        raise err

    def to_list(self) -> List[dict]:
        return [d.to_dict() for d in self.items]
