"""In-memory feedback store.

Mirrors :class:`SQLiteFeedbackStore`, including the referential rule: the
referenced inference must exist in the shared :class:`MemoryDatabase` at
the moment of the write, checked under the same lock as the write.
"""

from __future__ import annotations

import structlog

from mlmonitor.interfaces.feedback_store import IFeedbackStore
from mlmonitor.models.feedback import Feedback
from mlmonitor.providers.documents import dump_document, load_document, utc_now
from mlmonitor.providers.memory.database import MemoryDatabase
from mlmonitor.utils.errors import (
    ConflictError,
    PayloadValidationError,
    ReferentialViolationError,
)

logger = structlog.get_logger(logger_name=__name__)

_STORE_NAME = "memory_feedback"


class MemoryFeedbackStore(IFeedbackStore):
    """Feedback persistence in a :class:`MemoryDatabase`."""

    def __init__(self, database: MemoryDatabase) -> None:
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

        stored = feedback.model_copy(
            update={
                "feedback_data": load_document(
                    dump_document(feedback.feedback_data, field="feedback_data", store_name=_STORE_NAME)
                ),
                "created_at": utc_now(),
            }
        )
        with self._database.lock:
            if stored.id in self._database.feedback:
                raise ConflictError(
                    message=f"Record {stored.id} already exists",
                    store_name=_STORE_NAME,
                )
            if stored.inference_id not in self._database.inferences:
                raise ReferentialViolationError(
                    message=f"Record {stored.id} references a missing inference",
                    store_name=_STORE_NAME,
                )
            self._database.feedback[stored.id] = stored

        logger.info(
            "feedback_inserted",
            feedback_id=stored.id,
            inference_id=stored.inference_id,
        )
        return stored.model_copy(deep=True)

    async def list_by_inference_id(self, inference_id: str) -> list[Feedback]:
        with self._database.lock:
            matches = [
                fb for fb in self._database.feedback.values()
                if fb.inference_id == inference_id
            ]
        return [fb.model_copy(deep=True) for fb in matches]

    async def count_by_inference_id(self, inference_id: str) -> int:
        with self._database.lock:
            return sum(
                1 for fb in self._database.feedback.values()
                if fb.inference_id == inference_id
            )
