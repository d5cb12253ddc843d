"""In-memory database handle shared by the in-memory stores.

Holds both tables and a single ``threading.Lock``.  Each store operation
takes the lock for exactly one read or one write; nothing holds it across
the two-step feedback sequence.  Keeping both tables behind one handle lets
the feedback store enforce the same referential rule as the SQLite foreign
key.
"""

from __future__ import annotations

import threading

from mlmonitor.models.feedback import Feedback
from mlmonitor.models.inference import Inference


class MemoryDatabase:
    """Process-local tables for tests and ephemeral deployments."""

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.inferences: dict[str, Inference] = {}
        # Dicts preserve insertion order, which is the listing order.
        self.feedback: dict[str, Feedback] = {}

    async def initialize(self) -> None:
        """No schema to create; present for parity with ``SQLiteDatabase``."""

    async def ping(self) -> bool:
        return True
