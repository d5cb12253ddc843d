"""YAML configuration loader with environment variable overrides.

# ─── CONFIGURATION HIERARCHY ───────────────────────────────────────────
#
# Configuration is loaded in layers (later layers override earlier):
#
#   1. config/config.yaml  - Static defaults checked into the repo
#   2. .env file           - Local developer overrides (not committed)
#   3. Environment vars    - Set at deploy time
#
# Only values explicitly set in the environment (or .env) override the
# YAML file; a Settings default never masks a YAML value.
# ──────────────────────────────────────────────────────────────────────
"""

from pathlib import Path

import yaml

from mlmonitor.config.settings import Settings

# YAML section/key for every Settings field.
_FIELD_LOCATIONS: dict[str, tuple[str, str]] = {
    "store_backend": ("store", "backend"),
    "db_path": ("store", "db_path"),
    "flag_update_attempts": ("feedback", "flag_update_attempts"),
    "app_host": ("app", "host"),
    "app_port": ("app", "port"),
    "app_env": ("app", "env"),
    "log_level": ("logging", "level"),
}


def load_config(path: str = "config/config.yaml", settings: Settings | None = None) -> dict:
    """Load YAML config and merge with environment-based Settings.

    Args:
        path: Path to the YAML configuration file.
        settings: Pre-built settings; read from the environment when omitted.

    Returns:
        Fully resolved configuration dictionary.
    """
    config_path = Path(path)
    if config_path.exists():
        with open(config_path) as f:
            yaml_config = yaml.safe_load(f) or {}
    else:
        yaml_config = {}

    settings = settings or Settings()
    explicit = settings.model_fields_set
    values = settings.model_dump()

    defaults: dict = {}
    env_overrides: dict = {}
    for field, (section, key) in _FIELD_LOCATIONS.items():
        target = env_overrides if field in explicit else defaults
        target.setdefault(section, {})[key] = values[field]

    resolved: dict = {}
    _deep_merge(resolved, defaults)
    _deep_merge(resolved, yaml_config)
    _deep_merge(resolved, env_overrides)
    return resolved


def settings_from_config(config: dict) -> Settings:
    """Build a Settings object from a resolved configuration dictionary."""
    kwargs = {}
    for field, (section, key) in _FIELD_LOCATIONS.items():
        section_values = config.get(section) or {}
        if key in section_values:
            kwargs[field] = section_values[key]
    return Settings(**kwargs)


def _deep_merge(base: dict, overrides: dict) -> None:
    """Recursively merge overrides into base dict, mutating base in place."""
    for key, value in overrides.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value
