"""Configuration module - exports Settings and the YAML/env loader."""

from mlmonitor.config.loader import load_config, settings_from_config
from mlmonitor.config.settings import Settings

__all__ = ["Settings", "load_config", "settings_from_config"]
