"""Thread races against the in-memory stores.

Each worker runs its own event loop in a separate thread, so the stores'
shared ``threading.Lock`` is the only thing serialising the writes.
"""

from __future__ import annotations

import asyncio
import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from conftest import make_feedback, make_inference
from mlmonitor.providers.memory import MemoryDatabase, MemoryFeedbackStore, MemoryInferenceStore
from mlmonitor.utils.errors import ConflictError

_WORKERS = 16


@pytest.fixture
def database():
    return MemoryDatabase()


def _race(insert, records) -> list[str]:
    """Release every insert at once; return "ok"/"conflict" per record."""
    barrier = threading.Barrier(len(records))

    def worker(record) -> str:
        barrier.wait()
        try:
            asyncio.run(insert(record))
        except ConflictError:
            return "conflict"
        return "ok"

    with ThreadPoolExecutor(max_workers=len(records)) as pool:
        return list(pool.map(worker, records))


# ─── Inferences ───────────────────────────────────────────────────

def test_duplicate_inference_ids_race(database):
    store = MemoryInferenceStore(database)
    records = [make_inference("inf-race", model_name=f"model-{i}") for i in range(_WORKERS)]

    outcomes = _race(store.insert, records)

    assert outcomes.count("ok") == 1
    assert outcomes.count("conflict") == _WORKERS - 1
    assert list(database.inferences) == ["inf-race"]

    winner = records[outcomes.index("ok")]
    assert database.inferences["inf-race"].model_name == winner.model_name


def test_distinct_inference_ids_race(database):
    store = MemoryInferenceStore(database)
    records = [make_inference(f"inf-{i}") for i in range(_WORKERS)]

    assert _race(store.insert, records) == ["ok"] * _WORKERS
    assert sorted(database.inferences) == sorted(r.id for r in records)


# ─── Feedback ─────────────────────────────────────────────────────

def test_duplicate_feedback_ids_race(database):
    asyncio.run(MemoryInferenceStore(database).insert(make_inference("inf-001")))
    store = MemoryFeedbackStore(database)
    records = [
        make_feedback("fb-race", feedback_data={"worker": i}) for i in range(_WORKERS)
    ]

    outcomes = _race(store.insert, records)

    assert outcomes.count("ok") == 1
    assert outcomes.count("conflict") == _WORKERS - 1
    assert asyncio.run(store.count_by_inference_id("inf-001")) == 1

    winner = records[outcomes.index("ok")]
    assert database.feedback["fb-race"].feedback_data == winner.feedback_data


def test_feedback_races_keep_every_distinct_row(database):
    asyncio.run(MemoryInferenceStore(database).insert(make_inference("inf-001")))
    store = MemoryFeedbackStore(database)
    records = [make_feedback(f"fb-{i}") for i in range(_WORKERS)]

    assert _race(store.insert, records) == ["ok"] * _WORKERS
    listed = asyncio.run(store.list_by_inference_id("inf-001"))
    assert sorted(fb.id for fb in listed) == sorted(r.id for r in records)
    assert all(fb.inference_id == "inf-001" for fb in listed)
