"""Config schema and accessor."""

from __future__ import annotations

import os
from typing import Any

from loguru import logger

from lounge.core.constants import (
    CHAT_MODES,
    DEFAULT_CHAT_BASE_URL,
    DISPLAY_MODES,
    THEMES,
    ChatMode,
    DisplayMode,
    Theme,
)
from lounge.core.errors import LoungeConfigurationError

# Env keys that override config (loaded once per reload)
_ENV_OVERRIDE_KEYS = (
    "LOUNGE_CHAT_BASE_URL",
    "LOUNGE_API_BASE_URL",
    "LOUNGE_API_TOKEN",
    "LOUNGE_NOFOCUS",
)


# Values used when neither the config file nor the environment sets a key
DEFAULTS: dict[str, Any] = {
    "chat_base_url": DEFAULT_CHAT_BASE_URL,
    "provision_timeout_seconds": 10.0,
    "credential_cache_ttl_seconds": 300,
    "theme": "light",
    "display_mode": "modal",
    "nofocus": True,
}


def _load_env_overrides() -> dict[str, str]:
    return {k: os.environ.get(k, "") for k in _ENV_OVERRIDE_KEYS}


def _parse_bool_env(val: str) -> bool | None:
    """Parse env string to bool; None if not a recognized bool."""
    v = val.lower()
    if v in ("1", "true", "yes"):
        return True
    if v in ("0", "false", "no"):
        return False
    return None


def _clean_str(val: Any) -> str | None:
    if val and isinstance(val, str) and val.strip():
        return val.strip()
    return None


class Config:
    """Config accessor with attribute-style access for nested keys."""

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self._data = data or {}
        self._env: dict[str, str] = _load_env_overrides()

    def reload(self, data: dict[str, Any], *, validate: bool = True) -> None:
        """Replace config data and re-read env overrides."""
        self._data = data or {}
        self._env = _load_env_overrides()
        if validate:
            self._validate()
        logger.debug("Config reloaded: chat_base_url={}", self.chat_base_url)

    def _validate(self) -> None:
        """Validate config values; raise LoungeConfigurationError on failure."""
        theme = self._data.get("theme")
        if theme is not None and theme not in THEMES:
            raise LoungeConfigurationError(
                f"theme must be one of {', '.join(THEMES)}",
                code="invalid_theme",
                details={"theme": theme},
            )
        mode = self._data.get("mode")
        if mode is not None and mode not in CHAT_MODES:
            raise LoungeConfigurationError(
                f"mode must be one of {', '.join(CHAT_MODES)}",
                code="invalid_mode",
                details={"mode": mode},
            )
        display_mode = self._data.get("display_mode")
        if display_mode is not None and display_mode not in DISPLAY_MODES:
            raise LoungeConfigurationError(
                f"display_mode must be one of {', '.join(DISPLAY_MODES)}",
                code="invalid_display_mode",
                details={"display_mode": display_mode},
            )
        for key in ("provision_timeout_seconds", "credential_cache_ttl_seconds"):
            val = self._data.get(key)
            if val is None:
                continue
            try:
                ok = float(val) > 0
            except (TypeError, ValueError):
                ok = False
            if not ok:
                raise LoungeConfigurationError(
                    f"{key} must be a positive number",
                    code="invalid_number",
                    details={"key": key, "value": val},
                )
        for key in ("chat_base_url", "api_base_url"):
            url = self._data.get(key)
            if url is not None and not (
                isinstance(url, str) and url.startswith(("http://", "https://"))
            ):
                raise LoungeConfigurationError(
                    f"{key} must be an http(s) URL",
                    code="invalid_url",
                    details={"key": key, "value": url},
                )

    @property
    def raw(self) -> dict[str, Any]:
        return self._data

    def get(self, key: str, default: Any = None) -> Any:
        """Get value by dot-separated path."""
        parts = key.split(".")
        obj: Any = self._data
        for part in parts:
            if isinstance(obj, dict) and part in obj:
                obj = obj[part]
            else:
                return default
        return obj

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __contains__(self, key: str) -> bool:
        return key in self._data

    @property
    def chat_base_url(self) -> str:
        """Base URL of The Lounge instance."""
        return (
            _clean_str(self._env.get("LOUNGE_CHAT_BASE_URL"))
            or _clean_str(self._data.get("chat_base_url"))
            or DEFAULT_CHAT_BASE_URL
        )

    @property
    def api_base_url(self) -> str | None:
        """Base URL of the host API serving the provisioning endpoint."""
        return _clean_str(self._env.get("LOUNGE_API_BASE_URL")) or _clean_str(
            self._data.get("api_base_url")
        )

    @property
    def api_token(self) -> str | None:
        return _clean_str(self._env.get("LOUNGE_API_TOKEN")) or _clean_str(
            self._data.get("api_token")
        )

    @property
    def provision_timeout_seconds(self) -> float:
        return float(self._data.get("provision_timeout_seconds", 10.0))

    @property
    def credential_cache_ttl_seconds(self) -> float:
        return float(self._data.get("credential_cache_ttl_seconds", 300))

    @property
    def theme(self) -> Theme:
        return self._data.get("theme") or "light"

    @property
    def mode(self) -> ChatMode | None:
        return self._data.get("mode")

    @property
    def display_mode(self) -> DisplayMode:
        return self._data.get("display_mode") or "modal"

    @property
    def nofocus(self) -> bool:
        parsed = _parse_bool_env(self._env.get("LOUNGE_NOFOCUS", ""))
        if parsed is not None:
            return parsed
        return bool(self._data.get("nofocus", True))


# Global config instance (set by __main__)
cfg: Config = Config({})
