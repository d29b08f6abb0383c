from __future__ import annotations

# activities_api/config.py
import logging
import os

import yaml

logger = logging.getLogger(__name__)

PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

DEFAULTS = {
    "db_path": None,
    "test_db_path": None,
    "log_level": "INFO",
    "cors_origins": [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ],
}


def config_path() -> str:
    return os.environ.get("ACTIVITIES_CONFIG") or os.path.join(PROJECT_ROOT, "config.yaml")


def read_config_yaml(path: str | None = None) -> dict:
    """
    Read config.yaml and merge it over DEFAULTS.
    A missing file yields the defaults; an unreadable one is logged and ignored.
    """
    cfg = dict(DEFAULTS)
    cfg_path = path or config_path()
    if not os.path.exists(cfg_path):
        return cfg
    try:
        with open(cfg_path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.warning("config_unreadable path=%s err=%s", cfg_path, e)
        return cfg
    if not isinstance(raw, dict):
        logger.warning("config_ignored path=%s reason=not a mapping", cfg_path)
        return cfg

    for k in ("db_path", "test_db_path", "log_level"):
        v = raw.get(k)
        if isinstance(v, str) and v.strip():
            cfg[k] = v.strip()
    origins = raw.get("cors_origins")
    if isinstance(origins, list):
        cfg["cors_origins"] = [str(o) for o in origins if o]
    return cfg


def is_test_env() -> bool:
    return (os.environ.get("APP_ENV") == "test") or (os.environ.get("PYTEST_CURRENT_TEST") is not None)


def get_log_level() -> str:
    return (os.environ.get("ACTIVITIES_LOG_LEVEL") or read_config_yaml()["log_level"]).upper()
