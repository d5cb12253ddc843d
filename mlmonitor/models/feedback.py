"""Feedback domain model - a human correction or annotation on an inference."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Feedback(BaseModel):
    """One feedback record tied to exactly one :class:`Inference`.

    Many feedback records may reference the same inference.  Records are
    never mutated or deleted once stored.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1, description="Opaque unique identifier.")
    inference_id: str = Field(description="Identifier of the referenced inference.")
    feedback_data: Any = Field(default=None, description="Feedback document, stored verbatim.")
    created_at: datetime | None = Field(default=None, description="Set by the store at insertion.")
