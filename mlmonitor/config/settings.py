"""Application settings loaded from environment variables via pydantic-settings.

# ─── HOW SETTINGS WORK ────────────────────────────────────────────────
#
# Values are read from TWO sources (in priority order):
#
#   1. **Environment variables** - e.g., STORE_BACKEND=memory
#   2. **.env file** - key=value lines in the project root .env file
#
# Field name `db_path` maps to env var `DB_PATH` (pydantic-settings
# uppercases and matches).  Defaults apply when neither is set.
# ──────────────────────────────────────────────────────────────────────
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """mlmonitor application settings.

    Environment variables override defaults. Loaded from .env file when present.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # === Persistence ===
    # "sqlite" (default, file at db_path) or "memory" (process-local, lost on exit).
    store_backend: str = "sqlite"
    db_path: str = "data/mlmonitor.db"

    # === Feedback write sequence ===
    # Total attempts at flagging the inference after a feedback insert.
    flag_update_attempts: int = 2

    # === App Config ===
    app_host: str = "0.0.0.0"
    app_port: int = 8080
    app_env: str = "development"
    log_level: str = "INFO"
