import copy
import os
from pathlib import Path
from typing import Any, Dict

import yaml


DEFAULT_CONFIG: Dict[str, Any] = {
    "retries": 10,  # per-call retry budget for retryable remote errors
    "backoff_base_s": 0.75,
    "log_level": "INFO",
    "data_paths": {
        "logs": "logs",
    },
}


def _defaults() -> Dict[str, Any]:
    return copy.deepcopy(DEFAULT_CONFIG)


def _apply_env(cfg: Dict[str, Any]) -> Dict[str, Any]:
    raw = os.environ.get("S3BATCH_RETRIES", "").strip()
    if raw.isdigit():
        cfg["retries"] = int(raw)
    return cfg


def load_config(path: Path = Path("config/local.yaml")) -> Dict[str, Any]:
    if not path.exists():
        return _apply_env(_defaults())
    try:
        with path.open("r", encoding="utf-8") as f:
            loaded = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError):
        return _apply_env(_defaults())
    if not isinstance(loaded, dict):
        return _apply_env(_defaults())
    cfg = _defaults()
    cfg.update(loaded)
    return _apply_env(cfg)


def logs_dir(cfg: Dict[str, Any]) -> Path:
    return Path((cfg.get("data_paths") or {}).get("logs", "logs"))
