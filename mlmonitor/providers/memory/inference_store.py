"""In-memory inference store.

Same error-kind contract as :class:`SQLiteInferenceStore`: ``ConflictError``
on duplicate ids, ``NotFoundError`` on unknown ids, and documents encoded
through JSON so non-serialisable values fail the same way.
"""

from __future__ import annotations

import structlog

from mlmonitor.interfaces.inference_store import IInferenceStore
from mlmonitor.models.inference import Inference
from mlmonitor.providers.documents import dump_document, load_document, utc_now
from mlmonitor.providers.memory.database import MemoryDatabase
from mlmonitor.utils.errors import ConflictError, NotFoundError

logger = structlog.get_logger(logger_name=__name__)

_STORE_NAME = "memory_inference"


class MemoryInferenceStore(IInferenceStore):
    """Inference persistence in a :class:`MemoryDatabase`."""

    def __init__(self, database: MemoryDatabase) -> None:
        self._database = database

    async def initialize(self) -> None:
        await self._database.initialize()

    def get_provider_name(self) -> str:
        return _STORE_NAME

    async def insert(self, inference: Inference) -> Inference:
        stored = inference.model_copy(
            update={
                "input_data": load_document(
                    dump_document(inference.input_data, field="input_data", store_name=_STORE_NAME)
                ),
                "output_data": load_document(
                    dump_document(inference.output_data, field="output_data", store_name=_STORE_NAME)
                ),
                "created_at": utc_now(),
                "has_feedback": False,
            }
        )
        with self._database.lock:
            if stored.id in self._database.inferences:
                raise ConflictError(
                    message=f"Record {stored.id} already exists",
                    store_name=_STORE_NAME,
                )
            self._database.inferences[stored.id] = stored

        logger.info(
            "inference_inserted",
            inference_id=stored.id,
            model_name=stored.model_name,
            model_version=stored.model_version,
        )
        return stored.model_copy(deep=True)

    async def get_by_id(self, inference_id: str) -> Inference:
        with self._database.lock:
            found = self._database.inferences.get(inference_id)
        if found is None:
            raise NotFoundError(
                message=f"Inference {inference_id} not found",
                store_name=_STORE_NAME,
            )
        return found.model_copy(deep=True)

    async def update_has_feedback(self, inference_id: str, has_feedback: bool) -> None:
        with self._database.lock:
            current = self._database.inferences.get(inference_id)
            if current is None:
                raise NotFoundError(
                    message=f"No rows updated for inference {inference_id}",
                    store_name=_STORE_NAME,
                )
            self._database.inferences[inference_id] = current.model_copy(
                update={"has_feedback": has_feedback}
            )
        logger.debug("inference_flag_updated", inference_id=inference_id, has_feedback=has_feedback)
