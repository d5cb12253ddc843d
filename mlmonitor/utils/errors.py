"""Custom exception hierarchy for mlmonitor.

All application exceptions inherit from :class:`MLMonitorError`, which
carries an optional ``store_name`` so error handlers can identify which
store backend (e.g. "sqlite_inference", "memory_feedback") raised it.

The hierarchy follows the failure kinds a store or request can produce:

    MLMonitorError  (base -- catch-all for any mlmonitor error)
    +-- PayloadValidationError    (malformed input document)       -> 400
    +-- NotFoundError             (no matching record)             -> 404
    +-- ConflictError             (duplicate identity)             -> 500
    +-- ReferentialViolationError (feedback for unknown inference) -> 500
    +-- StoreUnavailableError     (underlying storage failure)     -> 500
    +-- FlagUpdateError           (feedback stored, flag not set)  -> 500
    +-- ConfigurationError        (startup / invalid config)

``http_status`` is read by the API error middleware; nothing in the store
layer depends on HTTP.
"""


class MLMonitorError(Exception):
    """Base exception for all mlmonitor errors.

    Every subclass carries a human-readable ``message`` and an optional
    ``store_name`` identifying which store backend raised it.  ``__str__``
    prefixes the store name in brackets, e.g.
    ``[sqlite_inference] Inference abc not found``.
    """

    http_status: int = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        store_name: str | None = None,
    ) -> None:
        self._message = message
        self._store_name = store_name
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def store_name(self) -> str | None:
        return self._store_name

    def __str__(self) -> str:
        if self._store_name:
            return f"[{self._store_name}] {self._message}"
        return self._message


# ---------------------------------------------------------------------------
# Input errors
# ---------------------------------------------------------------------------

class PayloadValidationError(MLMonitorError):
    """Raised when an input document is malformed or missing required fields."""

    http_status = 400

    def __init__(
        self,
        message: str = "Invalid request payload",
        store_name: str | None = None,
    ) -> None:
        super().__init__(message=message, store_name=store_name)


# ---------------------------------------------------------------------------
# Store errors
# ---------------------------------------------------------------------------

class NotFoundError(MLMonitorError):
    """Raised when no record matches the requested identity."""

    http_status = 404

    def __init__(
        self,
        message: str = "Record not found",
        store_name: str | None = None,
    ) -> None:
        super().__init__(message=message, store_name=store_name)


class ConflictError(MLMonitorError):
    """Raised when inserting a record whose ``id`` already exists.

    The existing record is never overwritten.
    """

    def __init__(
        self,
        message: str = "Record already exists",
        store_name: str | None = None,
    ) -> None:
        super().__init__(message=message, store_name=store_name)


class ReferentialViolationError(MLMonitorError):
    """Raised when a feedback record references an inference that does not exist."""

    def __init__(
        self,
        message: str = "Referenced inference does not exist",
        store_name: str | None = None,
    ) -> None:
        super().__init__(message=message, store_name=store_name)


class StoreUnavailableError(MLMonitorError):
    """Raised when the underlying storage engine fails or is unreachable."""

    def __init__(
        self,
        message: str = "Storage backend is unavailable",
        store_name: str | None = None,
    ) -> None:
        super().__init__(message=message, store_name=store_name)


class FlagUpdateError(MLMonitorError):
    """Raised when feedback was stored but the inference flag could not be set.

    The feedback row is not rolled back.  ``feedback_id`` names the record
    that was written so callers can reconcile the inference later.
    """

    def __init__(
        self,
        message: str = "Feedback recorded but inference flag not updated",
        store_name: str | None = None,
        feedback_id: str | None = None,
        inference_id: str | None = None,
    ) -> None:
        self._feedback_id = feedback_id
        self._inference_id = inference_id
        super().__init__(message=message, store_name=store_name)

    @property
    def feedback_id(self) -> str | None:
        return self._feedback_id

    @property
    def inference_id(self) -> str | None:
        return self._inference_id


# ---------------------------------------------------------------------------
# Configuration errors
# ---------------------------------------------------------------------------

class ConfigurationError(MLMonitorError):
    """Raised when configuration is invalid or missing at startup."""

    def __init__(
        self,
        message: str = "Invalid or missing configuration",
        store_name: str | None = None,
    ) -> None:
        super().__init__(message=message, store_name=store_name)
