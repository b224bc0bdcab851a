"""Configuration: YAML + env overlay."""

from lounge.config.loader import _deep_update, load_config, load_config_with_env
from lounge.config.schema import DEFAULTS, Config, cfg

__all__ = ["DEFAULTS", "Config", "_deep_update", "cfg", "load_config", "load_config_with_env"]
