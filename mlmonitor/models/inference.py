"""Inference domain model - one recorded model prediction event.

# ─── ARCHITECTURE ROLE ───────────────────────────────────────────────
#
# Layer: Models (bottom of the dependency graph - no imports from upper layers).
#
# Frozen Pydantic v2 model.  ``has_feedback`` is the only field that ever
# changes after insertion; stores return a fresh copy via
# ``model_copy(update={...})`` rather than mutating in place.
#
# ``input_data`` / ``output_data`` hold arbitrary JSON values (objects,
# arrays, scalars, null) and are round-tripped verbatim.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Inference(BaseModel):
    """A single recorded model prediction.

    ``created_at`` is assigned by the store at insertion; a value supplied
    by the caller is ignored.  ``has_feedback`` is forced to ``False`` on
    insert and only flipped by the feedback write sequence.
    """

    model_config = ConfigDict(frozen=True, protected_namespaces=())

    id: str = Field(min_length=1, description="Opaque unique identifier.")
    model_name: str = Field(description="Free-text model label.")
    model_version: str = Field(description="Free-text model version label.")
    input_data: Any = Field(default=None, description="Model input document, stored verbatim.")
    output_data: Any = Field(default=None, description="Model output document, stored verbatim.")
    created_at: datetime | None = Field(default=None, description="Set by the store at insertion.")
    has_feedback: bool = Field(default=False, description="True once feedback exists for this inference.")
