"""Contract tests for the inference stores.

Every test runs against both SQLiteInferenceStore and MemoryInferenceStore
through the parametrized ``stores`` fixture in conftest.
"""

from __future__ import annotations

from datetime import datetime

import pytest

from conftest import make_inference
from mlmonitor.providers.sqlite import SQLiteDatabase, SQLiteInferenceStore
from mlmonitor.utils.errors import (
    ConflictError,
    NotFoundError,
    PayloadValidationError,
    StoreUnavailableError,
)


# ─── Insert + Get ─────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_insert_and_get(inference_store):
    stored = await inference_store.insert(make_inference())

    assert stored.has_feedback is False
    assert isinstance(stored.created_at, datetime)

    fetched = await inference_store.get_by_id("inf-001")
    assert fetched.model_name == "example_model"
    assert fetched.model_version == "1.0.0"
    assert fetched.input_data == {"input": "some input data"}
    assert fetched.output_data == {"output": "some output data"}
    assert fetched.has_feedback is False
    assert fetched.created_at == stored.created_at


@pytest.mark.asyncio
async def test_insert_ignores_caller_flag(inference_store):
    await inference_store.insert(make_inference(has_feedback=True))
    fetched = await inference_store.get_by_id("inf-001")
    assert fetched.has_feedback is False


@pytest.mark.asyncio
async def test_documents_of_any_json_shape(inference_store):
    await inference_store.insert(make_inference("a", input_data=[1, 2, 3], output_data="text"))
    await inference_store.insert(make_inference("b", input_data=None, output_data=4.5))

    a = await inference_store.get_by_id("a")
    b = await inference_store.get_by_id("b")
    assert a.input_data == [1, 2, 3]
    assert a.output_data == "text"
    assert b.input_data is None
    assert b.output_data == 4.5


@pytest.mark.asyncio
async def test_stored_document_is_not_aliased(inference_store):
    payload = {"input": "original"}
    await inference_store.insert(make_inference(input_data=payload))
    payload["input"] = "mutated"

    fetched = await inference_store.get_by_id("inf-001")
    assert fetched.input_data == {"input": "original"}


@pytest.mark.asyncio
async def test_non_json_document_rejected(inference_store):
    with pytest.raises(PayloadValidationError):
        await inference_store.insert(make_inference(input_data={"when": object()}))

    with pytest.raises(NotFoundError):
        await inference_store.get_by_id("inf-001")


@pytest.mark.asyncio
@pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
async def test_non_finite_number_rejected(inference_store, value):
    with pytest.raises(PayloadValidationError):
        await inference_store.insert(make_inference(output_data={"score": value}))

    with pytest.raises(NotFoundError):
        await inference_store.get_by_id("inf-001")


# ─── Conflicts / missing rows ─────────────────────────────────────

@pytest.mark.asyncio
async def test_duplicate_id_conflicts_without_overwrite(inference_store):
    await inference_store.insert(make_inference())

    with pytest.raises(ConflictError):
        await inference_store.insert(make_inference(model_name="other_model"))

    fetched = await inference_store.get_by_id("inf-001")
    assert fetched.model_name == "example_model"


@pytest.mark.asyncio
async def test_get_unknown_id(inference_store):
    with pytest.raises(NotFoundError) as excinfo:
        await inference_store.get_by_id("missing")
    assert excinfo.value.store_name == inference_store.get_provider_name()


# ─── Flag updates ─────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_update_has_feedback(inference_store):
    await inference_store.insert(make_inference())

    await inference_store.update_has_feedback("inf-001", True)
    assert (await inference_store.get_by_id("inf-001")).has_feedback is True

    await inference_store.update_has_feedback("inf-001", False)
    assert (await inference_store.get_by_id("inf-001")).has_feedback is False


@pytest.mark.asyncio
async def test_update_has_feedback_is_idempotent(inference_store):
    await inference_store.insert(make_inference())
    await inference_store.update_has_feedback("inf-001", True)
    await inference_store.update_has_feedback("inf-001", True)
    assert (await inference_store.get_by_id("inf-001")).has_feedback is True


@pytest.mark.asyncio
async def test_update_unknown_id(inference_store):
    with pytest.raises(NotFoundError):
        await inference_store.update_has_feedback("missing", True)


# ─── SQLite-specific ──────────────────────────────────────────────

@pytest.mark.asyncio
async def test_sqlite_uninitialised_database_is_unavailable(tmp_path):
    store = SQLiteInferenceStore(SQLiteDatabase(db_path=tmp_path / "empty.db"))

    with pytest.raises(StoreUnavailableError):
        await store.insert(make_inference())
    with pytest.raises(StoreUnavailableError):
        await store.get_by_id("inf-001")


@pytest.mark.asyncio
async def test_sqlite_data_survives_new_handle(tmp_path):
    path = tmp_path / "persist.db"
    first = SQLiteDatabase(db_path=path)
    await first.initialize()
    await SQLiteInferenceStore(first).insert(make_inference())

    second = SQLiteDatabase(db_path=path)
    await second.initialize()
    fetched = await SQLiteInferenceStore(second).get_by_id("inf-001")
    assert fetched.model_name == "example_model"


@pytest.mark.asyncio
async def test_sqlite_ping(tmp_path):
    database = SQLiteDatabase(db_path=tmp_path / "ping.db")
    await database.initialize()
    assert await database.ping() is True


@pytest.mark.asyncio
async def test_sqlite_corrupt_stored_document_is_unavailable(tmp_path):
    database = SQLiteDatabase(db_path=tmp_path / "corrupt.db")
    await database.initialize()
    async with database.connect() as db:
        await db.execute(
            "INSERT INTO inferences (id, model_name, model_version, input_data, output_data, created_at) "
            "VALUES (?, ?, ?, ?, ?, ?);",
            ("inf-bad", "m", "1", "{truncated", "null", "2026-01-01T00:00:00.000000+00:00"),
        )
        await db.commit()

    with pytest.raises(StoreUnavailableError) as excinfo:
        await SQLiteInferenceStore(database).get_by_id("inf-bad")
    assert excinfo.value.store_name == "sqlite_inference"
