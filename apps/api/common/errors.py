"""
Shared API error handlers for account operation errors and request validation errors.

Docs:
  - docs/architecture/accounts/accounts-otp-lifecycle-v1.md
"""

from __future__ import annotations

from typing import Any, Sequence, cast

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.requests import Request
from starlette.responses import JSONResponse

from otp_manager.contexts.accounts.application.services import AccountOperationError


def register_api_error_handlers(*, app: FastAPI) -> None:
    """
    Register global API handlers for account errors and request validation errors.

    Args:
        app: FastAPI application instance.
    Returns:
        None.
    Assumptions:
        Handlers are installed once during application startup.
    Raises:
        ValueError: If `app` dependency is missing.
    Side Effects:
        Mutates FastAPI exception-handler registry.
    """
    if app is None:  # type: ignore[truthy-bool]
        raise ValueError("register_api_error_handlers requires app")

    app.add_exception_handler(AccountOperationError, account_operation_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)


def account_operation_error_handler(_request: Request, error: Exception) -> JSONResponse:
    """
    Convert AccountOperationError into `{"error": ...}` JSON response.

    Args:
        _request: Starlette request object (unused).
        error: Raised AccountOperationError instance.
    Returns:
        JSONResponse: Response with status code carried by the error.
    Assumptions:
        Error status code is final.
    Raises:
        None.
    Side Effects:
        None.
    """
    operation_error = cast(AccountOperationError, error)
    return JSONResponse(
        status_code=operation_error.status_code,
        content=operation_error.payload(),
    )


def request_validation_error_handler(_request: Request, error: Exception) -> JSONResponse:
    """
    Convert FastAPI RequestValidationError into 400 `{"error": ...}` payload.

    Args:
        _request: Starlette request object (unused).
        error: Raised validation exception from FastAPI/Pydantic.
    Returns:
        JSONResponse: HTTP 400 payload with first validation message by sorted path.
    Assumptions:
        Validation errors include `loc` and `msg` attributes.
    Raises:
        None.
    Side Effects:
        None.
    """
    validation_error = cast(RequestValidationError, error)
    message = _first_validation_message(raw_errors=validation_error.errors())
    return account_operation_error_handler(
        _request,
        AccountOperationError(code="validation_error", message=message, status_code=400),
    )


def _first_validation_message(*, raw_errors: Any) -> str:
    """
    Pick deterministic human-readable message from raw validation errors.

    Args:
        raw_errors: Raw iterable from FastAPI validation subsystem.
    Returns:
        str: `path: message` of the first error sorted by path, or generic message.
    Assumptions:
        Unknown raw shapes are stringified.
    Raises:
        None.
    Side Effects:
        None.
    """
    if not isinstance(raw_errors, Sequence) or isinstance(raw_errors, (str, bytes, bytearray)):
        return "Validation failed"

    messages: list[str] = []
    for raw_error in raw_errors:
        if not isinstance(raw_error, dict):
            messages.append(str(raw_error))
            continue
        path = _normalize_error_path(loc=raw_error.get("loc"))
        messages.append(f"{path}: {raw_error.get('msg', 'Validation error')}")
    if not messages:
        return "Validation failed"
    return sorted(messages)[0]


def _normalize_error_path(*, loc: Any) -> str:
    """
    Convert FastAPI/Pydantic `loc` tuple into dot-delimited path string.

    Args:
        loc: Raw location object from validation error.
    Returns:
        str: Dot-delimited path, for example `path.code`.
    Assumptions:
        Location may be tuple/list of path segments and integer indices.
    Raises:
        None.
    Side Effects:
        None.
    """
    if isinstance(loc, Sequence) and not isinstance(loc, (str, bytes, bytearray)):
        path_parts = [str(part) for part in loc]
        if path_parts:
            return ".".join(path_parts)
    if loc is None:
        return "unknown"
    return str(loc)
