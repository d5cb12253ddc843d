"""Tests for the exception hierarchy and its HTTP error rendering."""

from __future__ import annotations

import json

import pytest

from mlmonitor.api.middleware import error_response
from mlmonitor.utils.errors import (
    ConflictError,
    FlagUpdateError,
    MLMonitorError,
    NotFoundError,
    PayloadValidationError,
    ReferentialViolationError,
    StoreUnavailableError,
)


def test_str_includes_store_name():
    err = NotFoundError("Inference abc not found", store_name="sqlite_inference")
    assert str(err) == "[sqlite_inference] Inference abc not found"
    assert err.message == "Inference abc not found"


def test_str_without_store_name():
    assert str(ConflictError("dup")) == "dup"


@pytest.mark.parametrize(
    ("error", "status"),
    [
        (PayloadValidationError(), 400),
        (NotFoundError(), 404),
        (ConflictError(), 500),
        (ReferentialViolationError(), 500),
        (StoreUnavailableError(), 500),
        (FlagUpdateError(), 500),
        (MLMonitorError(), 500),
    ],
)
def test_status_mapping(error, status):
    response = error_response(error)
    assert response.status_code == status
    body = json.loads(response.body)
    assert body["error"] == type(error).__name__
    assert body["feedback_id"] is None or isinstance(error, FlagUpdateError)


def test_flag_update_error_body_carries_feedback_id():
    err = FlagUpdateError("flag not set", feedback_id="fb-1", inference_id="inf-1")
    body = json.loads(error_response(err).body)
    assert body == {"error": "FlagUpdateError", "detail": "flag not set", "feedback_id": "fb-1"}
