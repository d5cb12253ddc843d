"""Shared pytest fixtures for the mlmonitor test suite."""

from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from mlmonitor.config.settings import Settings
from mlmonitor.main import build_components, create_app
from mlmonitor.models.feedback import Feedback
from mlmonitor.models.inference import Inference
from mlmonitor.providers.memory import MemoryDatabase, MemoryFeedbackStore, MemoryInferenceStore
from mlmonitor.providers.sqlite import SQLiteDatabase, SQLiteFeedbackStore, SQLiteInferenceStore

# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------


def make_inference(inference_id: str = "inf-001", **overrides) -> Inference:
    fields = {
        "id": inference_id,
        "model_name": "example_model",
        "model_version": "1.0.0",
        "input_data": {"input": "some input data"},
        "output_data": {"output": "some output data"},
    }
    fields.update(overrides)
    return Inference(**fields)


def make_feedback(
    feedback_id: str = "fb-001",
    inference_id: str = "inf-001",
    feedback_data=None,
) -> Feedback:
    return Feedback(
        id=feedback_id,
        inference_id=inference_id,
        feedback_data=feedback_data if feedback_data is not None else {"corrected_output": "the correct output"},
    )


# ---------------------------------------------------------------------------
# Store fixtures (every store test runs against both backends)
# ---------------------------------------------------------------------------


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    return tmp_path / "mlmonitor.db"


@pytest.fixture(params=["sqlite", "memory"])
async def stores(request, db_path: Path):
    """Yield ``(inference_store, feedback_store)`` sharing one initialised database."""
    if request.param == "sqlite":
        database = SQLiteDatabase(db_path=db_path)
        inference_store = SQLiteInferenceStore(database)
        feedback_store = SQLiteFeedbackStore(database)
    else:
        database = MemoryDatabase()
        inference_store = MemoryInferenceStore(database)
        feedback_store = MemoryFeedbackStore(database)
    await database.initialize()
    yield inference_store, feedback_store


@pytest.fixture
def inference_store(stores):
    return stores[0]


@pytest.fixture
def feedback_store(stores):
    return stores[1]


# ---------------------------------------------------------------------------
# HTTP client
# ---------------------------------------------------------------------------


@pytest.fixture
def components(db_path: Path):
    return build_components(Settings(store_backend="sqlite", db_path=str(db_path)))


@pytest.fixture
def client(components):
    """TestClient over an app wired to a temporary SQLite database."""
    app = create_app(components=components)
    with TestClient(app) as c:
        yield c
