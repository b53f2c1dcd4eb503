from __future__ import annotations

import json
import logging

import pytest

from meshbox.config import DEFAULT_CONFIG, CheckConfig, config_from_dict, load_config
from meshbox.diagnostics import Diagnostic, Diagnostics, WARNING
from meshbox.errors import MeshBoxError
from meshbox.geom import MACHINE_EPS
from meshbox.logging_config import setup_logging


def test_defaults():
    cfg = CheckConfig()
    assert cfg.backend == "scipy"
    assert cfg.policy == "referenced"
    assert cfg.epsilon == MACHINE_EPS
    assert cfg.tolerance == "absolute"


def test_load_toml(tmp_path):
    path = tmp_path / "cfg.toml"
    path.write_text('[meshbox]\nbackend = "numpy"\npolicy = "all"\nepsilon = 1e-6\n', encoding="utf-8")
    cfg = load_config(path)
    assert cfg.backend == "numpy"
    assert cfg.policy == "all"
    assert cfg.epsilon == 1e-6
    assert cfg.tolerance == DEFAULT_CONFIG.tolerance


def test_load_json(tmp_path):
    path = tmp_path / "cfg.json"
    path.write_text(json.dumps({"tolerance": "relative", "rel_tol": "1e-7"}), encoding="utf-8")
    cfg = load_config(path)
    assert cfg.tolerance == "relative"
    assert cfg.rel_tol == 1e-7


def test_load_yaml(tmp_path):
    pytest.importorskip("yaml")
    path = tmp_path / "cfg.yaml"
    path.write_text("meshbox:\n  backend: numpy\n", encoding="utf-8")
    assert load_config(path).backend == "numpy"


@pytest.mark.parametrize(
    "data",
    [
        {"backend": "embree"},
        {"policy": "some"},
        {"tolerance": "fuzzy"},
        {"epsilon": -1},
        {"epsilon": None},
        {"rel_tol": "tight"},
        {"colour": "red"},
    ],
)
def test_rejects_bad_values(data):
    with pytest.raises(ValueError):
        config_from_dict(data)


def test_diagnostics_collection():
    diags = Diagnostics()
    diags.add(Diagnostic("W-X", "just a warning", WARNING))
    assert not diags.has_errors()
    diags.raise_for_errors()

    other = Diagnostics()
    other.add(Diagnostic("E-OTHER", "broken"))
    diags.extend(other)
    assert diags.has_errors()
    assert diags.codes() == ["W-X", "E-OTHER"]
    assert len(diags.to_list()) == 2
    with pytest.raises(MeshBoxError) as exc:
        diags.raise_for_errors()
    assert exc.value.code == "E-OTHER"


def test_setup_logging_replaces_handlers(tmp_path):
    log_file = tmp_path / "meshbox.log"
    setup_logging(logging.DEBUG)
    logger = setup_logging(logging.INFO, str(log_file))
    try:
        assert len(logger.handlers) == 2
        logging.getLogger("meshbox.mesh").info("hello")
        for h in logger.handlers:
            h.flush()
        assert "hello" in log_file.read_text(encoding="utf-8")
    finally:
        for h in logger.handlers:
            h.close()
        logger.handlers.clear()
