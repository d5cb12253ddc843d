"""Inference recording service.

Layer: Services.  Depends on: IInferenceStore.

Generates identities for new inferences and delegates persistence to the
injected store.  Stores raise typed errors; this service lets them
propagate unchanged.
"""

from __future__ import annotations

from typing import Any
from uuid import uuid4

import structlog

from mlmonitor.interfaces.inference_store import IInferenceStore
from mlmonitor.models.inference import Inference

logger = structlog.get_logger(logger_name=__name__)


class InferenceService:
    """Records and retrieves model predictions."""

    def __init__(self, inference_store: IInferenceStore) -> None:
        self._inference_store = inference_store

    async def record_inference(
        self,
        model_name: str,
        model_version: str,
        input_data: Any,
        output_data: Any,
        inference_id: str | None = None,
    ) -> Inference:
        """Store a new inference under a fresh UUID (or the given id)."""
        inference = Inference(
            id=inference_id or str(uuid4()),
            model_name=model_name,
            model_version=model_version,
            input_data=input_data,
            output_data=output_data,
        )
        stored = await self._inference_store.insert(inference)
        logger.info("inference_recorded", inference_id=stored.id, model_name=model_name)
        return stored

    async def get_inference(self, inference_id: str) -> Inference:
        return await self._inference_store.get_by_id(inference_id)
