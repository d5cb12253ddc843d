"""REST API routes for inferences and feedback.

# ─── ARCHITECTURE ROLE ───────────────────────────────────────────────
#
# Layer: API (FastAPI route handlers).
# Pattern: Routes access services via ``request.app.state`` - no
#          ``Depends()`` for singleton services; direct ``getattr``.
#
# Endpoints:
#   GET  /health                          - liveness
#   POST /inferences                      - record an inference
#   GET  /inferences/{inference_id}       - fetch one inference
#   POST /inferences/{inference_id}/feedback  - record feedback + flag
#   GET  /inferences/{inference_id}/feedback  - list feedback
#   POST /inferences/{inference_id}/reconcile - recompute the flag
#
# Handlers let ``MLMonitorError`` propagate; ErrorHandlingMiddleware maps
# it to a status code and JSON body.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request, status

from mlmonitor.api.schemas import (
    CreateFeedbackRequest,
    CreateFeedbackResponse,
    CreateInferenceRequest,
    CreateInferenceResponse,
    FeedbackResponse,
    HealthResponse,
    InferenceResponse,
    ReconcileResponse,
)
from mlmonitor.services.feedback_service import FeedbackService
from mlmonitor.services.inference_service import InferenceService

router = APIRouter(tags=["inferences"])


# ── Service accessors ─────────────────────────────────────────────────
def _get_inference_service(request: Request) -> InferenceService:
    """Retrieve InferenceService from app state; raise 503 if unavailable."""
    svc = getattr(request.app.state, "inference_service", None)
    if svc is None:
        raise HTTPException(status_code=503, detail="Inference service unavailable")
    return svc


def _get_feedback_service(request: Request) -> FeedbackService:
    """Retrieve FeedbackService from app state; raise 503 if unavailable."""
    svc = getattr(request.app.state, "feedback_service", None)
    if svc is None:
        raise HTTPException(status_code=503, detail="Feedback service unavailable")
    return svc


# ── Health ────────────────────────────────────────────────────────────
@router.get("/health", response_model=HealthResponse, tags=["health"])
async def health() -> HealthResponse:
    return HealthResponse(status="ok")


# ── Inferences ────────────────────────────────────────────────────────
@router.post(
    "/inferences",
    response_model=CreateInferenceResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_inference(request: Request, body: CreateInferenceRequest) -> CreateInferenceResponse:
    """Record a model prediction under a freshly generated id."""
    svc = _get_inference_service(request)
    inference = await svc.record_inference(
        model_name=body.model_name,
        model_version=body.model_version,
        input_data=body.input_data,
        output_data=body.output_data,
    )
    return CreateInferenceResponse(inference_id=inference.id)


@router.get("/inferences/{inference_id}", response_model=InferenceResponse)
async def get_inference(request: Request, inference_id: str) -> InferenceResponse:
    svc = _get_inference_service(request)
    inference = await svc.get_inference(inference_id)
    return InferenceResponse(**inference.model_dump())


@router.post("/inferences/{inference_id}/reconcile", response_model=ReconcileResponse)
async def reconcile_inference(request: Request, inference_id: str) -> ReconcileResponse:
    """Recompute ``has_feedback`` from the feedback rows that exist."""
    svc = _get_feedback_service(request)
    has_feedback = await svc.reconcile_has_feedback(inference_id)
    return ReconcileResponse(inference_id=inference_id, has_feedback=has_feedback)


# ── Feedback ──────────────────────────────────────────────────────────
@router.post(
    "/inferences/{inference_id}/feedback",
    response_model=CreateFeedbackResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_feedback(
    request: Request,
    inference_id: str,
    body: CreateFeedbackRequest,
) -> CreateFeedbackResponse:
    """Store feedback, then flag the inference.

    Any failure in either step answers 500; a flag failure after the
    feedback row was written carries its ``feedback_id`` in the error body.
    """
    svc = _get_feedback_service(request)
    feedback = await svc.submit_feedback(inference_id, body.feedback_data)
    return CreateFeedbackResponse(feedback_id=feedback.id)


@router.get("/inferences/{inference_id}/feedback", response_model=list[FeedbackResponse])
async def list_feedback(request: Request, inference_id: str) -> list[FeedbackResponse]:
    """List feedback oldest first; an unknown inference yields ``[]``."""
    svc = _get_feedback_service(request)
    feedback = await svc.list_feedback(inference_id)
    return [FeedbackResponse(**fb.model_dump()) for fb in feedback]
