"""JSON document helpers shared by every store implementation.

Both the SQLite and in-memory stores pass documents through the same
encode/decode step so that non-serializable values fail identically and
stored documents never alias the caller's objects.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any

from mlmonitor.utils.errors import PayloadValidationError, StoreUnavailableError


def dump_document(value: Any, *, field: str, store_name: str | None = None) -> str:
    """Serialise a document to strict JSON text.

    Values JSON cannot carry (sets, objects, ``NaN``, ``Infinity``) raise
    ``PayloadValidationError``.
    """
    try:
        return json.dumps(value, allow_nan=False)
    except (TypeError, ValueError) as exc:
        raise PayloadValidationError(
            message=f"{field} is not a JSON document: {exc}",
            store_name=store_name,
        ) from exc


def load_document(text: str | None, *, store_name: str | None = None) -> Any:
    """Decode JSON text written by :func:`dump_document`.

    Text that does not decode means the stored row is corrupt and raises
    ``StoreUnavailableError``.
    """
    if text is None:
        return None
    try:
        return json.loads(text)
    except ValueError as exc:
        raise StoreUnavailableError(
            message=f"Stored document is not valid JSON: {exc}",
            store_name=store_name,
        ) from exc


def utc_now() -> datetime:
    return datetime.now(tz=timezone.utc)


def to_timestamp(value: datetime) -> str:
    # Fixed-width ISO-8601 so lexical order equals chronological order.
    return value.astimezone(timezone.utc).isoformat(timespec="microseconds")
