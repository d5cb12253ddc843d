"""In-memory persistence, used by tests and ``STORE_BACKEND=memory``."""

from mlmonitor.providers.memory.database import MemoryDatabase
from mlmonitor.providers.memory.feedback_store import MemoryFeedbackStore
from mlmonitor.providers.memory.inference_store import MemoryInferenceStore

__all__ = [
    "MemoryDatabase",
    "MemoryFeedbackStore",
    "MemoryInferenceStore",
]
