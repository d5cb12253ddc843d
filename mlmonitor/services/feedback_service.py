"""Feedback orchestration - the two-step feedback write and its repair.

# ─── ARCHITECTURE ROLE ───────────────────────────────────────────────
#
# Layer: Services (business logic orchestration).
# Depends on: IInferenceStore, IFeedbackStore.
#
# An inference's ``has_feedback`` flag must be true iff feedback rows
# exist for it.  The two stores are independent, so recording feedback is
# two separate writes:
#
#   1. INSERT - feedback row via IFeedbackStore.insert.  A failure here
#      means nothing was written; the error propagates unchanged.
#   2. FLAG - IInferenceStore.update_has_feedback(id, True), attempted up
#      to ``flag_update_attempts`` times while the store reports
#      StoreUnavailableError.  NotFoundError is final.
#
# If step 2 never succeeds the feedback row stays (no rollback) and
# FlagUpdateError is raised carrying the stored ``feedback_id``.
# ``reconcile_has_feedback`` recomputes the flag from row existence and
# repairs any inference left in that state.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

from typing import Any
from uuid import uuid4

import structlog

from mlmonitor.interfaces.feedback_store import IFeedbackStore
from mlmonitor.interfaces.inference_store import IInferenceStore
from mlmonitor.models.feedback import Feedback
from mlmonitor.utils.errors import (
    ConfigurationError,
    FlagUpdateError,
    MLMonitorError,
    StoreUnavailableError,
)

logger = structlog.get_logger(logger_name=__name__)

_DEFAULT_FLAG_UPDATE_ATTEMPTS = 2


class FeedbackService:
    """Records feedback and keeps the inference feedback flag in step with it.

    All dependencies are constructor-injected; the service never builds
    its own stores.
    """

    def __init__(
        self,
        inference_store: IInferenceStore,
        feedback_store: IFeedbackStore,
        flag_update_attempts: int = _DEFAULT_FLAG_UPDATE_ATTEMPTS,
    ) -> None:
        if flag_update_attempts < 1:
            raise ConfigurationError(
                f"flag_update_attempts must be at least 1, got {flag_update_attempts}"
            )
        self._inference_store = inference_store
        self._feedback_store = feedback_store
        self._flag_update_attempts = flag_update_attempts

    # ── Public API ─────────────────────────────────────────────────────

    async def submit_feedback(
        self,
        inference_id: str,
        feedback_data: Any,
        feedback_id: str | None = None,
    ) -> Feedback:
        """Store feedback for an inference, then flag the inference.

        Raises
        ------
        PayloadValidationError, ReferentialViolationError, ConflictError, StoreUnavailableError
            From the insert step; nothing was written.
        FlagUpdateError
            The feedback row was written but the inference flag was not set.
        """
        feedback = Feedback(
            id=feedback_id or str(uuid4()),
            inference_id=inference_id,
            feedback_data=feedback_data,
        )
        stored = await self._feedback_store.insert(feedback)
        await self._flag_inference(stored)

        logger.info("feedback_recorded", feedback_id=stored.id, inference_id=inference_id)
        return stored

    async def list_feedback(self, inference_id: str) -> list[Feedback]:
        """Return all feedback for an inference; empty for unknown ids too."""
        return await self._feedback_store.list_by_inference_id(inference_id)

    async def reconcile_has_feedback(self, inference_id: str) -> bool:
        """Recompute ``has_feedback`` from feedback existence and persist it.

        Returns the flag value now stored.  Raises ``NotFoundError`` for an
        unknown inference.
        """
        inference = await self._inference_store.get_by_id(inference_id)
        count = await self._feedback_store.count_by_inference_id(inference_id)
        expected = count > 0

        if inference.has_feedback != expected:
            await self._inference_store.update_has_feedback(inference_id, expected)
            logger.info(
                "inference_flag_reconciled",
                inference_id=inference_id,
                previous=inference.has_feedback,
                has_feedback=expected,
                feedback_count=count,
            )
        return expected

    # ── Internals ──────────────────────────────────────────────────────

    async def _flag_inference(self, feedback: Feedback) -> None:
        last_error: MLMonitorError | None = None

        for attempt in range(1, self._flag_update_attempts + 1):
            try:
                await self._inference_store.update_has_feedback(feedback.inference_id, True)
                return
            except StoreUnavailableError as exc:
                last_error = exc
                logger.warning(
                    "feedback_flag_update_retry",
                    inference_id=feedback.inference_id,
                    feedback_id=feedback.id,
                    attempt=attempt,
                    error=str(exc),
                )
            except MLMonitorError as exc:
                last_error = exc
                break

        logger.error(
            "feedback_flag_update_failed",
            inference_id=feedback.inference_id,
            feedback_id=feedback.id,
            error_type=type(last_error).__name__,
            error=str(last_error),
        )
        raise FlagUpdateError(
            message=(
                f"Feedback {feedback.id} recorded but inference "
                f"{feedback.inference_id} could not be flagged: {last_error}"
            ),
            store_name=self._inference_store.get_provider_name(),
            feedback_id=feedback.id,
            inference_id=feedback.inference_id,
        ) from last_error
