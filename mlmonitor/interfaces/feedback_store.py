"""Abstract base class for feedback persistence stores.

Defines the contract for recording human feedback against stored
inferences.  Implementations may use SQLite, an in-memory map, or any
other backend.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from mlmonitor.models.feedback import Feedback


class IFeedbackStore(ABC):
    """Contract for feedback persistence.

    The store itself does not look up the referenced inference before
    writing; the referential rule is enforced by the backend (a foreign key
    for SQLite, a check under the shared lock for the in-memory store).
    """

    @abstractmethod
    async def insert(self, feedback: Feedback) -> Feedback:
        """Persist a new feedback record.

        Parameters
        ----------
        feedback:
            The record to store.  ``created_at`` on the input is ignored.

        Returns
        -------
        Feedback
            The record as persisted.

        Raises
        ------
        PayloadValidationError
            If ``inference_id`` is empty.
        ReferentialViolationError
            If ``inference_id`` does not denote an existing inference.
        ConflictError
            If a feedback record with the same ``id`` already exists.
        StoreUnavailableError
            On any other storage failure.
        """

    @abstractmethod
    async def list_by_inference_id(self, inference_id: str) -> list[Feedback]:
        """Return all feedback for an inference, oldest first.

        Returns an empty list both when the inference has no feedback and
        when the inference id is unknown; the two cases are not
        distinguished.
        """

    @abstractmethod
    async def count_by_inference_id(self, inference_id: str) -> int:
        """Return how many feedback records reference the inference."""

    @abstractmethod
    async def initialize(self) -> None:
        """Prepare backing storage (create tables, etc.).  Called at startup."""

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier for this store."""
