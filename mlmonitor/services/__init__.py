"""Business logic services sitting between the API and the stores."""

from mlmonitor.services.feedback_service import FeedbackService
from mlmonitor.services.inference_service import InferenceService

__all__ = [
    "FeedbackService",
    "InferenceService",
]
