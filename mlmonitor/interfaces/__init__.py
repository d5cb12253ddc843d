"""Public interface definitions for the persistence layer.

Services and API handlers access storage exclusively through the abstract
base classes defined in this package.  Concrete adapters implement these
interfaces and are injected at runtime by the composition root
(``mlmonitor.main``).

CONCRETE STORE MAP:
    Interface          →  Concrete implementations (in mlmonitor/providers/)
    ─────────────────────────────────────────────────────────────────────
    IInferenceStore    →  SQLiteInferenceStore, MemoryInferenceStore
    IFeedbackStore     →  SQLiteFeedbackStore, MemoryFeedbackStore
"""

from mlmonitor.interfaces.feedback_store import IFeedbackStore
from mlmonitor.interfaces.inference_store import IInferenceStore

__all__ = [
    "IFeedbackStore",
    "IInferenceStore",
]
