"""SQLite-backed inference store.

Persists model predictions to the ``inferences`` table of the shared
:class:`SQLiteDatabase`.  Documents are stored as JSON text and decoded on
read.
"""

from __future__ import annotations

from typing import Any

import aiosqlite
import structlog

from mlmonitor.interfaces.inference_store import IInferenceStore
from mlmonitor.models.inference import Inference
from mlmonitor.providers.documents import dump_document, load_document, to_timestamp, utc_now
from mlmonitor.providers.sqlite.database import SQLiteDatabase, translate_error
from mlmonitor.utils.errors import NotFoundError, StoreUnavailableError

logger = structlog.get_logger(logger_name=__name__)

_STORE_NAME = "sqlite_inference"

_INSERT_SQL = """\
INSERT INTO inferences (id, model_name, model_version, input_data, output_data, created_at, has_feedback)
VALUES (?, ?, ?, ?, ?, ?, 0);
"""

_SELECT_SQL = """\
SELECT id, model_name, model_version, input_data, output_data, created_at, has_feedback
FROM inferences
WHERE id = ?;
"""

_UPDATE_FLAG_SQL = """\
UPDATE inferences
SET has_feedback = ?
WHERE id = ?;
"""


class SQLiteInferenceStore(IInferenceStore):
    """Inference persistence on top of a shared :class:`SQLiteDatabase`."""

    def __init__(self, database: SQLiteDatabase) -> None:
        self._database = database

    async def initialize(self) -> None:
        await self._database.initialize()

    def get_provider_name(self) -> str:
        return _STORE_NAME

    async def insert(self, inference: Inference) -> Inference:
        """Insert a new inference with ``has_feedback=False``."""
        created_at = utc_now()
        params = (
            inference.id,
            inference.model_name,
            inference.model_version,
            dump_document(inference.input_data, field="input_data", store_name=_STORE_NAME),
            dump_document(inference.output_data, field="output_data", store_name=_STORE_NAME),
            to_timestamp(created_at),
        )
        try:
            async with self._database.connect() as db:
                await db.execute(_INSERT_SQL, params)
                await db.commit()
        except aiosqlite.Error as exc:
            raise translate_error(exc, store_name=_STORE_NAME, record_id=inference.id) from exc

        logger.info(
            "inference_inserted",
            inference_id=inference.id,
            model_name=inference.model_name,
            model_version=inference.model_version,
        )
        return inference.model_copy(update={"created_at": created_at, "has_feedback": False})

    async def get_by_id(self, inference_id: str) -> Inference:
        try:
            async with self._database.connect() as db:
                cursor = await db.execute(_SELECT_SQL, (inference_id,))
                row = await cursor.fetchone()
        except aiosqlite.Error as exc:
            raise StoreUnavailableError(message=str(exc), store_name=_STORE_NAME) from exc

        if row is None:
            raise NotFoundError(
                message=f"Inference {inference_id} not found",
                store_name=_STORE_NAME,
            )
        return self._row_to_inference(dict(row))

    async def update_has_feedback(self, inference_id: str, has_feedback: bool) -> None:
        """Set the flag; a zero affected-row count means the inference is missing."""
        try:
            async with self._database.connect() as db:
                cursor = await db.execute(_UPDATE_FLAG_SQL, (int(has_feedback), inference_id))
                await db.commit()
                affected = cursor.rowcount
        except aiosqlite.Error as exc:
            raise StoreUnavailableError(message=str(exc), store_name=_STORE_NAME) from exc

        if affected == 0:
            raise NotFoundError(
                message=f"No rows updated for inference {inference_id}",
                store_name=_STORE_NAME,
            )
        logger.debug("inference_flag_updated", inference_id=inference_id, has_feedback=has_feedback)

    @staticmethod
    def _row_to_inference(row: dict[str, Any]) -> Inference:
        return Inference(
            id=row["id"],
            model_name=row["model_name"],
            model_version=row["model_version"],
            input_data=load_document(row["input_data"], store_name=_STORE_NAME),
            output_data=load_document(row["output_data"], store_name=_STORE_NAME),
            created_at=row["created_at"],
            has_feedback=bool(row["has_feedback"]),
        )
