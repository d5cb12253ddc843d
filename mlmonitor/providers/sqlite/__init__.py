"""SQLite persistence (aiosqlite).

SQLiteDatabase owns the schema and hands out connections; the inference and
feedback stores share one handle so the foreign key between them holds.
"""

from mlmonitor.providers.sqlite.database import SQLiteDatabase
from mlmonitor.providers.sqlite.feedback_store import SQLiteFeedbackStore
from mlmonitor.providers.sqlite.inference_store import SQLiteInferenceStore

__all__ = [
    "SQLiteDatabase",
    "SQLiteFeedbackStore",
    "SQLiteInferenceStore",
]
