"""SQLite database handle shared by the inference and feedback stores.

# ─── ARCHITECTURE ROLE ───────────────────────────────────────────────
#
# Layer: Providers.
# Pattern: One explicit handle, created by the composition root
#          (mlmonitor.main) and injected into both SQLite stores.  There is
#          no module-level connection or singleton.
#
# Database: ``data/mlmonitor.db`` by default.
#
# Each store operation opens its own ``aiosqlite`` connection through
# :meth:`SQLiteDatabase.connect`, which turns on foreign-key enforcement
# (off by default in SQLite) so that feedback rows cannot reference a
# missing inference.  ``PRAGMA journal_mode=WAL`` is set once at
# initialisation for concurrent read safety.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator

import aiosqlite
import structlog

from mlmonitor.utils.errors import (
    ConflictError,
    MLMonitorError,
    ReferentialViolationError,
    StoreUnavailableError,
)

logger = structlog.get_logger(logger_name=__name__)

_DEFAULT_DB_PATH = Path("data/mlmonitor.db")

# ── Schema DDL ────────────────────────────────────────────────────────

_CREATE_INFERENCES_TABLE = """\
CREATE TABLE IF NOT EXISTS inferences (
    id            TEXT    PRIMARY KEY,
    model_name    TEXT    NOT NULL,
    model_version TEXT    NOT NULL,
    input_data    TEXT    NOT NULL,
    output_data   TEXT    NOT NULL,
    created_at    TEXT    NOT NULL,
    has_feedback  INTEGER NOT NULL DEFAULT 0
);
"""

_CREATE_FEEDBACK_TABLE = """\
CREATE TABLE IF NOT EXISTS feedback (
    id            TEXT PRIMARY KEY,
    inference_id  TEXT NOT NULL REFERENCES inferences(id),
    feedback_data TEXT NOT NULL,
    created_at    TEXT NOT NULL
);
"""

_CREATE_INDICES = [
    "CREATE INDEX IF NOT EXISTS idx_feedback_inference ON feedback(inference_id);",
    "CREATE INDEX IF NOT EXISTS idx_inferences_model ON inferences(model_name, model_version);",
]


class SQLiteDatabase:
    """Handle to the SQLite file holding the ``inferences`` and ``feedback`` tables."""

    def __init__(self, db_path: str | Path = _DEFAULT_DB_PATH) -> None:
        self._db_path = Path(db_path)

    @property
    def db_path(self) -> Path:
        return self._db_path

    async def initialize(self) -> None:
        """Create both tables and their indices if they don't exist."""
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        try:
            async with aiosqlite.connect(str(self._db_path)) as db:
                await db.execute("PRAGMA journal_mode=WAL;")
                await db.execute(_CREATE_INFERENCES_TABLE)
                await db.execute(_CREATE_FEEDBACK_TABLE)
                for idx_sql in _CREATE_INDICES:
                    await db.execute(idx_sql)
                await db.commit()
        except aiosqlite.Error as exc:
            raise StoreUnavailableError(
                message=f"Could not initialise database at {self._db_path}: {exc}",
                store_name="sqlite",
            ) from exc
        logger.info("database_initialized", path=str(self._db_path))

    @asynccontextmanager
    async def connect(self) -> AsyncIterator[aiosqlite.Connection]:
        """Open a connection with foreign keys enforced and ``Row`` results."""
        async with aiosqlite.connect(str(self._db_path)) as db:
            db.row_factory = aiosqlite.Row
            await db.execute("PRAGMA foreign_keys = ON;")
            yield db

    async def ping(self) -> bool:
        """Return ``True`` if the database answers ``SELECT 1``."""
        try:
            async with self.connect() as db:
                cursor = await db.execute("SELECT 1;")
                await cursor.fetchone()
        except aiosqlite.Error as exc:
            logger.warning("database_ping_failed", path=str(self._db_path), error=str(exc))
            return False
        return True


def translate_error(exc: aiosqlite.Error, *, store_name: str, record_id: str) -> MLMonitorError:
    """Map a sqlite3 exception onto the store error taxonomy."""
    text = str(exc)
    if isinstance(exc, aiosqlite.IntegrityError):
        if "FOREIGN KEY" in text:
            return ReferentialViolationError(
                message=f"Record {record_id} references a missing inference",
                store_name=store_name,
            )
        if "UNIQUE" in text or "PRIMARY KEY" in text:
            return ConflictError(
                message=f"Record {record_id} already exists",
                store_name=store_name,
            )
    return StoreUnavailableError(message=text, store_name=store_name)
