"""SQLite-backed feedback store.

Persists feedback to the ``feedback`` table of the shared
:class:`SQLiteDatabase`.  The ``inference_id`` column is a foreign key to
``inferences(id)``; the store does not look the inference up itself, it
relies on the constraint and maps its failure to
``ReferentialViolationError``.
"""

from __future__ import annotations

from typing import Any

import aiosqlite
import structlog

from mlmonitor.interfaces.feedback_store import IFeedbackStore
from mlmonitor.models.feedback import Feedback
from mlmonitor.providers.documents import dump_document, load_document, to_timestamp, utc_now
from mlmonitor.providers.sqlite.database import SQLiteDatabase, translate_error
from mlmonitor.utils.errors import PayloadValidationError, StoreUnavailableError

logger = structlog.get_logger(logger_name=__name__)

_STORE_NAME = "sqlite_feedback"

_INSERT_SQL = """\
INSERT INTO feedback (id, inference_id, feedback_data, created_at)
VALUES (?, ?, ?, ?);
"""

# rowid breaks ties between rows written within the same microsecond.
_SELECT_BY_INFERENCE_SQL = """\
SELECT id, inference_id, feedback_data, created_at
FROM feedback
WHERE inference_id = ?
ORDER BY created_at ASC, rowid ASC;
"""

_COUNT_BY_INFERENCE_SQL = "SELECT COUNT(*) FROM feedback WHERE inference_id = ?;"


class SQLiteFeedbackStore(IFeedbackStore):
    """Feedback persistence on top of a shared :class:`SQLiteDatabase`."""

    def __init__(self, database: SQLiteDatabase) -> None:
        self._database = database

    async def initialize(self) -> None:
        await self._database.initialize()

    def get_provider_name(self) -> str:
        return _STORE_NAME

    async def insert(self, feedback: Feedback) -> Feedback:
        if not feedback.inference_id:
            raise PayloadValidationError(
                message="Feedback must reference an inference_id",
                store_name=_STORE_NAME,
            )

        created_at = utc_now()
        params = (
            feedback.id,
            feedback.inference_id,
            dump_document(feedback.feedback_data, field="feedback_data", store_name=_STORE_NAME),
            to_timestamp(created_at),
        )
        try:
            async with self._database.connect() as db:
                await db.execute(_INSERT_SQL, params)
                await db.commit()
        except aiosqlite.Error as exc:
            raise translate_error(exc, store_name=_STORE_NAME, record_id=feedback.id) from exc

        logger.info(
            "feedback_inserted",
            feedback_id=feedback.id,
            inference_id=feedback.inference_id,
        )
        return feedback.model_copy(update={"created_at": created_at})

    async def list_by_inference_id(self, inference_id: str) -> list[Feedback]:
        """Return feedback for an inference in creation order (empty if none or unknown)."""
        try:
            async with self._database.connect() as db:
                cursor = await db.execute(_SELECT_BY_INFERENCE_SQL, (inference_id,))
                rows = await cursor.fetchall()
        except aiosqlite.Error as exc:
            raise StoreUnavailableError(message=str(exc), store_name=_STORE_NAME) from exc
        return [self._row_to_feedback(dict(r)) for r in rows]

    async def count_by_inference_id(self, inference_id: str) -> int:
        try:
            async with self._database.connect() as db:
                cursor = await db.execute(_COUNT_BY_INFERENCE_SQL, (inference_id,))
                row = await cursor.fetchone()
        except aiosqlite.Error as exc:
            raise StoreUnavailableError(message=str(exc), store_name=_STORE_NAME) from exc
        return int(row[0]) if row else 0

    @staticmethod
    def _row_to_feedback(row: dict[str, Any]) -> Feedback:
        return Feedback(
            id=row["id"],
            inference_id=row["inference_id"],
            feedback_data=load_document(row["feedback_data"], store_name=_STORE_NAME),
            created_at=row["created_at"],
        )
