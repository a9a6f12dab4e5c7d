from __future__ import annotations

import json
import logging
from dataclasses import replace
from pathlib import Path

import pytest

from lumenplan.config import Settings, load_settings
from lumenplan.core.logging import setup_logging
from lumenplan.project.presets import default_requirements, default_room
from lumenplan.results.store import hash_calculation_inputs


def test_defaults_without_file_or_env() -> None:
    s = load_settings(environ={})
    assert s == Settings()
    assert s.grid_size == 20
    assert s.mount_clearance_m == 0.1
    assert s.calculations_path.name == "calculations.json"


def test_file_then_env_overrides(tmp_path) -> None:
    cfg = tmp_path / "settings.json"
    cfg.write_text(json.dumps({"grid_size": 30, "log_level": "info", "unknown": 1}), encoding="utf-8")
    s = load_settings(cfg, environ={"LUMENPLAN_GRID_SIZE": "12", "LUMENPLAN_DATA_DIR": str(tmp_path / "d")})
    assert s.grid_size == 12
    assert s.log_level == "INFO"
    assert s.data_dir == Path(tmp_path / "d")


def test_missing_settings_file_uses_defaults(tmp_path) -> None:
    assert load_settings(tmp_path / "absent.json", environ={}) == Settings()


@pytest.mark.parametrize(
    "env",
    [
        {"LUMENPLAN_GRID_SIZE": "1"},
        {"LUMENPLAN_GRID_SIZE": "many"},
        {"LUMENPLAN_LOG_LEVEL": "LOUD"},
        {"LUMENPLAN_FALLBACK_EFFICACY_LM_PER_W": "0"},
        {"LUMENPLAN_MOUNT_CLEARANCE_M": "-0.2"},
    ],
)
def test_bad_values_rejected(env) -> None:
    with pytest.raises(ValueError):
        load_settings(environ=env)


def test_setup_logging_file_handler(tmp_path) -> None:
    log_file = tmp_path / "logs" / "lumenplan.log"
    logger = setup_logging("DEBUG", log_file=log_file)
    try:
        assert logger.level == logging.DEBUG
        logging.getLogger("lumenplan.runner").debug("hello from runner")
        for h in logger.handlers:
            h.flush()
        assert "hello from runner" in log_file.read_text(encoding="utf-8")
    finally:
        for h in list(logger.handlers):
            h.close()
            logger.removeHandler(h)


def test_setup_logging_rejects_unknown_level() -> None:
    with pytest.raises(ValueError):
        setup_logging("CHATTY")


def test_input_hash_is_stable_and_sensitive() -> None:
    room = default_room()
    req = default_requirements()
    assert hash_calculation_inputs(room, req) == hash_calculation_inputs(default_room(), default_requirements())
    other = hash_calculation_inputs(room, replace(req, target_illuminance=501.0))
    assert other != hash_calculation_inputs(room, req)


def test_input_hash_rejects_nan() -> None:
    with pytest.raises(ValueError):
        hash_calculation_inputs(replace(default_room(), length=float("nan")), default_requirements())
