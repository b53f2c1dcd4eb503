"""
meshbox — перевірка трикутної сітки з текстового опису (Py 3.11+).
Зараз: парсер сітки, валідація індексів, AABB і звірка з AABB зовнішнього BVH-будівника.
"""

__version__ = "0.1.0"

from meshbox.geom import Vec3, MACHINE_EPS
from meshbox.errors import MeshBoxError, ParseError, SourceUnavailable, InvalidMeshTopology, EmptyMeshError
from meshbox.parse import parse_vec3, parse_index_line
from meshbox.mesh import MeshData, INDEX_MARKER, load_mesh, load_mesh_text, is_valid_mesh, validate_mesh
from meshbox.aabb import (
    AABB, AabbPolicy, compute_aabb, aabb_referenced, aabb_all_vertices,
    referenced_vertices, nearly_equal, nearly_equal_rel,
)
from meshbox.bvh import BvhHandle, build_bvh
from meshbox.config import CheckConfig, load_config
from meshbox.pipeline import CheckReport, check_mesh, check_mesh_file

__all__ = [
    "Vec3", "MACHINE_EPS",
    "MeshBoxError", "ParseError", "SourceUnavailable", "InvalidMeshTopology", "EmptyMeshError",
    "parse_vec3", "parse_index_line",
    "MeshData", "INDEX_MARKER", "load_mesh", "load_mesh_text", "is_valid_mesh", "validate_mesh",
    "AABB", "AabbPolicy", "compute_aabb", "aabb_referenced", "aabb_all_vertices",
    "referenced_vertices", "nearly_equal", "nearly_equal_rel",
    "BvhHandle", "build_bvh",
    "CheckConfig", "load_config",
    "CheckReport", "check_mesh", "check_mesh_file", "__version__",
]
