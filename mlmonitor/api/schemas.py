"""Pydantic request/response schemas for the mlmonitor API.

Defines the public contract for every REST endpoint.  FastAPI validates
request bodies against these models; a body that is not valid JSON, or whose
fields have the wrong type, is answered with 400 (see
``mlmonitor.api.middleware.validation_exception_handler``).  Absent fields
take their defaults (empty label, ``null`` document), so ``{}`` is accepted.

Convention: Request schemas end with "Request", response schemas end with
"Response".
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Inferences
# ---------------------------------------------------------------------------


class CreateInferenceRequest(BaseModel):
    """A model prediction to record.  Documents may be any JSON value."""

    model_config = ConfigDict(protected_namespaces=())

    model_name: str = ""
    model_version: str = ""
    input_data: Any = Field(default=None, description="Model input, stored verbatim.")
    output_data: Any = Field(default=None, description="Model output, stored verbatim.")


class CreateInferenceResponse(BaseModel):
    inference_id: str


class InferenceResponse(BaseModel):
    """Full inference record as stored."""

    model_config = ConfigDict(protected_namespaces=())

    id: str
    model_name: str
    model_version: str
    input_data: Any = None
    output_data: Any = None
    created_at: datetime | None = None
    has_feedback: bool


class ReconcileResponse(BaseModel):
    """Result of recomputing an inference's feedback flag."""

    inference_id: str
    has_feedback: bool


# ---------------------------------------------------------------------------
# Feedback
# ---------------------------------------------------------------------------


class CreateFeedbackRequest(BaseModel):
    feedback_data: Any = Field(default=None, description="Feedback document, stored verbatim.")


class CreateFeedbackResponse(BaseModel):
    feedback_id: str


class FeedbackResponse(BaseModel):
    id: str
    inference_id: str
    feedback_data: Any = None
    created_at: datetime | None = None


# ---------------------------------------------------------------------------
# Health / errors
# ---------------------------------------------------------------------------


class HealthResponse(BaseModel):
    status: str = "ok"


class ErrorResponse(BaseModel):
    """Sanitized error body; stack traces stay in the server logs.

    ``feedback_id`` is set when feedback was stored but its inference could
    not be flagged.
    """

    error: str
    detail: str
    feedback_id: str | None = None
