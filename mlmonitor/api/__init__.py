"""mlmonitor API layer - routes, schemas, and middleware."""

from mlmonitor.api.middleware import (
    ErrorHandlingMiddleware,
    RequestLoggingMiddleware,
    configure_cors,
    configure_error_handlers,
)
from mlmonitor.api.routes import router
from mlmonitor.api.schemas import (
    CreateFeedbackRequest,
    CreateFeedbackResponse,
    CreateInferenceRequest,
    CreateInferenceResponse,
    ErrorResponse,
    FeedbackResponse,
    HealthResponse,
    InferenceResponse,
    ReconcileResponse,
)

__all__ = [
    "ErrorHandlingMiddleware",
    "RequestLoggingMiddleware",
    "configure_cors",
    "configure_error_handlers",
    "router",
    "CreateFeedbackRequest",
    "CreateFeedbackResponse",
    "CreateInferenceRequest",
    "CreateInferenceResponse",
    "ErrorResponse",
    "FeedbackResponse",
    "HealthResponse",
    "InferenceResponse",
    "ReconcileResponse",
]
