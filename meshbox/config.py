from __future__ import annotations

import json
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict

from .aabb import AabbPolicy
from .bvh import BACKENDS
from .geom import MACHINE_EPS

TOLERANCES = ("absolute", "relative")


@dataclass(frozen=True)
class CheckConfig:
    backend: str = "scipy"
    policy: str = AabbPolicy.REFERENCED.value
    epsilon: float = MACHINE_EPS
    tolerance: str = "absolute"  # "absolute" або "relative"
    rel_tol: float = 1e-9

    def __post_init__(self):
        if self.backend not in BACKENDS:
            raise ValueError(f"Unknown backend {self.backend!r}, expected one of {BACKENDS}")
        object.__setattr__(self, "policy", AabbPolicy(self.policy).value)
        if self.tolerance not in TOLERANCES:
            raise ValueError(f"Unknown tolerance {self.tolerance!r}, expected one of {TOLERANCES}")
        if self.epsilon < 0 or self.rel_tol < 0:
            raise ValueError("epsilon and rel_tol must be non-negative")

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


DEFAULT_CONFIG = CheckConfig()


def config_from_dict(data: Dict[str, Any], base: CheckConfig = DEFAULT_CONFIG) -> CheckConfig:
    if "meshbox" in data and isinstance(data["meshbox"], dict):
        data = data["meshbox"]
    known = {f.name for f in fields(CheckConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"Unknown config keys: {', '.join(unknown)}")
    values = dict(data)
    for key in ("epsilon", "rel_tol"):
        if key in values:
            try:
                values[key] = float(values[key])
            except (TypeError, ValueError):
                raise ValueError(f"{key} must be a number, got {values[key]!r}") from None
    return replace(base, **values)


def load_config(path: Path) -> CheckConfig:
    data = _load_data(Path(path))
    if not isinstance(data, dict):
        raise ValueError("Config must be a mapping")
    return config_from_dict(data)


def _load_data(path: Path) -> Any:
    if path.suffix in {".yaml", ".yml"}:
        import yaml  # type: ignore

        with path.open("r", encoding="utf-8") as handle:
            return yaml.safe_load(handle) or {}
    if path.suffix == ".toml":
        import tomllib

        with path.open("rb") as handle:
            return tomllib.load(handle)
    with path.open("r", encoding="utf-8") as handle:
        return json.load(handle)
