from __future__ import annotations

from fastapi import FastAPI
from fastapi.testclient import TestClient
from pydantic import BaseModel, ConfigDict

from apps.api.common import register_api_error_handlers
from otp_manager.contexts.accounts.application import AccountNotFoundError, StorageFailureError


class _ValidationPayload(BaseModel):
    """
    Validation payload model with deliberately non-lexicographic field order for sorting test.
    """

    model_config = ConfigDict(extra="forbid")

    b: int
    a: int


def test_account_operation_error_handler_maps_error_to_status_and_flat_payload() -> None:
    """
    Verify AccountOperationError subclasses render as `{"error": message}` with own status.

    Args:
        None.
    Returns:
        None.
    Assumptions:
        Status code carried by the error is final.
    Raises:
        AssertionError: If payload shape or HTTP status mapping is broken.
    Side Effects:
        None.
    """
    app = FastAPI()
    register_api_error_handlers(app=app)

    @app.get("/missing")
    def missing() -> None:
        raise AccountNotFoundError()

    @app.get("/broken")
    def broken() -> None:
        raise StorageFailureError(cause="")

    client = TestClient(app)

    missing_response = client.get("/missing")
    broken_response = client.get("/broken")

    assert missing_response.status_code == 404
    assert missing_response.json() == {"error": "Account not found"}
    assert broken_response.status_code == 500
    assert broken_response.json() == {"error": "Storage failure"}


def test_request_validation_error_handler_returns_first_sorted_error_as_400() -> None:
    """
    Verify validation handler returns 400 with first validation message sorted by path.

    Args:
        None.
    Returns:
        None.
    Assumptions:
        Messages are rendered as `path: message`.
    Raises:
        AssertionError: If response payload differs from deterministic contract.
    Side Effects:
        None.
    """
    app = FastAPI()
    register_api_error_handlers(app=app)

    @app.post("/validate")
    def validate(payload: _ValidationPayload) -> dict[str, int]:
        return {"a": payload.a, "b": payload.b}

    client = TestClient(app)
    response = client.post("/validate", json={"z": 1})

    assert response.status_code == 400
    assert response.json() == {"error": "body.a: Field required"}
