"""Config loading: YAML file layered over built-in defaults, with .env for secrets."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from dotenv import find_dotenv, load_dotenv
from loguru import logger


def _deep_update(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Merge override into a copy of base. ``None`` values in override are skipped."""
    merged = dict(base)
    for key, value in override.items():
        if value is None:
            continue
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = _deep_update(current, value)
        else:
            merged[key] = value
    return merged


def load_config(path: str | Path) -> dict[str, Any]:
    """Read a YAML mapping with ``safe_load``.

    A missing file or a non-mapping document yields ``{}``; a parse error
    is logged and re-raised.
    """
    path = Path(path)
    if not path.is_file():
        logger.warning("Config file not found: {}", path)
        return {}

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        logger.error("Failed to parse config {}: {}", path, exc)
        raise

    if data is None:
        return {}
    if not isinstance(data, dict):
        logger.warning("Config file {} must contain a mapping, got {}", path, type(data).__name__)
        return {}
    return data


def load_config_with_env(path: str | Path, defaults: dict[str, Any] | None = None) -> dict[str, Any]:
    """Load .env (searched from the working directory), then the YAML file over ``defaults``.

    Env overrides themselves are applied by ``Config`` properties.
    """
    dotenv_path = find_dotenv(usecwd=True)
    if dotenv_path:
        load_dotenv(dotenv_path)
        logger.debug("Loaded environment from {}", dotenv_path)

    data = _deep_update(defaults or {}, load_config(path))
    logger.debug("Config keys: {}", ", ".join(sorted(data)) or "(none)")
    return data
