"""Abstract base class for inference persistence stores.

Defines the contract for recording model predictions and flipping their
feedback-presence flag.  Implementations may use SQLite, an in-memory map,
or any other backend.  The adapter pattern allows the store to be swapped
without touching the services or the API layer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from mlmonitor.models.inference import Inference


class IInferenceStore(ABC):
    """Contract for inference persistence.

    All operations are async.  Implementations must be safe for concurrent
    use by multiple request handlers and must raise the typed errors from
    :mod:`mlmonitor.utils.errors` rather than backend-specific exceptions.
    """

    @abstractmethod
    async def insert(self, inference: Inference) -> Inference:
        """Persist a new inference.

        Parameters
        ----------
        inference:
            The record to store.  ``has_feedback`` and ``created_at`` on the
            input are ignored: the stored record always starts with
            ``has_feedback=False`` and a store-assigned timestamp.

        Returns
        -------
        Inference
            The record as persisted.

        Raises
        ------
        ConflictError
            If a record with the same ``id`` already exists.  The existing
            record is left untouched.
        StoreUnavailableError
            On any other storage failure.
        """

    @abstractmethod
    async def get_by_id(self, inference_id: str) -> Inference:
        """Return the inference with the given id.

        Raises
        ------
        NotFoundError
            If no record has that id.
        """

    @abstractmethod
    async def update_has_feedback(self, inference_id: str, has_feedback: bool) -> None:
        """Set the feedback-presence flag on an inference.

        Existence is checked through the affected-row count of the write
        itself, not a preceding read.

        Raises
        ------
        NotFoundError
            If no record has that id.
        """

    @abstractmethod
    async def initialize(self) -> None:
        """Prepare backing storage (create tables, etc.).  Called at startup."""

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier for this store."""
