from __future__ import annotations
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

from .aabb import AABB, compute_aabb
from .bvh import BvhHandle, build_bvh
from .config import DEFAULT_CONFIG, CheckConfig
from .diagnostics import Diagnostic, Diagnostics, WARNING
from .mesh import MeshData, load_mesh, validate_mesh

logger = logging.getLogger(__name__)


@dataclass
class CheckReport:
    mesh: MeshData
    local: AABB
    oracle: BvhHandle
    matches: bool
    diagnostics: Diagnostics = field(default_factory=Diagnostics)
    source: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.matches and not self.diagnostics.has_errors()


def check_mesh(
    mesh: MeshData,
    config: CheckConfig = DEFAULT_CONFIG,
    diagnostics: Optional[Diagnostics] = None,
) -> CheckReport:
    """
    Повний пайплайн над уже завантаженою сіткою:
      - валідація індексів (InvalidMeshTopology — до будь-якого AABB);
      - локальний AABB за політикою з config;
      - AABB зовнішнього будівника над тими самими трикутниками;
      - звірка з допуском. Розбіжність — лише діагностика, не помилка.
    """
    diags = diagnostics if diagnostics is not None else Diagnostics()
    topo = validate_mesh(mesh)
    diags.extend(topo)
    topo.raise_for_errors()

    local = compute_aabb(mesh, config.policy)  # EmptyMeshError на 0 трикутників
    oracle = build_bvh(mesh.vertex_array(), mesh.index_array(), mesh.triangle_count, config.backend)
    remote = AABB(oracle.aabb_min, oracle.aabb_max)

    if config.tolerance == "relative":
        matches = local.nearly_equal_rel(remote, config.rel_tol, config.epsilon)
    else:
        matches = local.nearly_equal(remote, config.epsilon)

    if not matches:
        logger.warning(
            "AABB mismatch: local min=%s max=%s, %s min=%s max=%s",
            local.min.as_tuple(), local.max.as_tuple(),
            oracle.backend, oracle.aabb_min.as_tuple(), oracle.aabb_max.as_tuple(),
        )
        diags.add(Diagnostic(
            code="W-AABB-MISMATCH",
            message="locally computed AABB differs from the BVH builder's AABB",
            severity=WARNING,
            data={
                "local_min": local.min.as_tuple(), "local_max": local.max.as_tuple(),
                "oracle_min": oracle.aabb_min.as_tuple(), "oracle_max": oracle.aabb_max.as_tuple(),
                "backend": oracle.backend, "policy": config.policy,
            },
        ))
    else:
        logger.info("AABB matches %s oracle: min=%s max=%s",
                    oracle.backend, local.min.as_tuple(), local.max.as_tuple())

    return CheckReport(mesh=mesh, local=local, oracle=oracle, matches=matches, diagnostics=diags)


def check_mesh_file(path: Union[str, Path], config: CheckConfig = DEFAULT_CONFIG) -> CheckReport:
    """Завантажити з файлу й перевірити. Недоступний файл дає порожню сітку -> EmptyMeshError."""
    diags = Diagnostics()
    mesh = load_mesh(path, diagnostics=diags)
    report = check_mesh(mesh, config, diags)
    report.source = str(path)
    return report
