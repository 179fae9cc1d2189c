"""Error Hierarchy — tests for codes, HTTP statuses and the response envelope."""

import pytest

from homekitchen.core.errors import (
    AlreadyProcessedError, ConcurrencyError, DatabaseError, ErrorContext,
    HomeKitchenError, InvalidCoordinateError, InvalidTransitionError,
    NotCancellableError, NotFoundError, ReasonRequiredError,
)


@pytest.mark.parametrize("error,code,status", [
    (InvalidCoordinateError("latitude", 91.0), "INVALID_COORDINATE", 400),
    (NotFoundError("Order", "abc"), "NOT_FOUND", 404),
    (ReasonRequiredError(), "REASON_REQUIRED", 400),
    (NotCancellableError("PREPARING"), "NOT_CANCELLABLE", 409),
    (InvalidTransitionError("PENDING", "COMPLETED"), "INVALID_TRANSITION", 409),
    (AlreadyProcessedError("ACTIVE"), "ALREADY_PROCESSED", 409),
    (DatabaseError("boom", "commit"), "DATABASE_ERROR", 503),
    (ConcurrencyError("gone"), "CONCURRENCY_CONFLICT", 409),
])
def test_error_codes_and_statuses(error, code, status):
    assert isinstance(error, HomeKitchenError)
    assert error.code == code
    assert error.http_status == status


def test_to_response_envelope():
    error = NotCancellableError("DELIVERING", ErrorContext(order_id="o-1", kitchen_id="k-1"))
    body = error.to_response()["error"]
    assert body["code"] == "NOT_CANCELLABLE"
    assert body["category"] == "business_rule"
    assert body["context"] == {
        "order_id": "o-1",
        "kitchen_id": "k-1",
        "request_id": None,
        "current_status": "DELIVERING",
    }
    assert "timestamp" in body


def test_not_found_does_not_leak_owner():
    error = NotFoundError("Order", "abc")
    assert error.message == "Order 'abc' not found"
