from __future__ import annotations

from fastapi import APIRouter
from pydantic import BaseModel
from starlette.responses import Response

from otp_manager.contexts.accounts.application.ports import ProvisioningQrRenderer
from otp_manager.contexts.accounts.application.services import (
    AccountService,
    InvalidAccountNameError,
    QrRenderingError,
)
from otp_manager.contexts.accounts.domain import AccountName


class AccountValidatedResponse(BaseModel):
    """
    AccountValidatedResponse — API response payload for successful code validation.

    Docs:
      - docs/architecture/accounts/accounts-otp-lifecycle-v1.md
    Related:
      - src/otp_manager/contexts/accounts/application/services/account_service.py
      - apps/api/routes/accounts.py
    """

    status: str = "validated"


def build_accounts_router(
    *,
    account_service: AccountService,
    qr_renderer: ProvisioningQrRenderer,
) -> APIRouter:
    """
    Build router exposing account secret creation and code validation endpoints.

    Args:
        account_service: Account lifecycle service.
        qr_renderer: Renderer encoding provisioning URI as PNG.
    Returns:
        APIRouter: Router with `POST /account/{account_name}` and
        `POST /account/{account_name}/validate/{code}`.
    Assumptions:
        `AccountOperationError` raised by handlers is rendered by API error handlers.
    Raises:
        ValueError: If required dependencies are missing.
    Side Effects:
        None.
    """
    if account_service is None:  # type: ignore[truthy-bool]
        raise ValueError("build_accounts_router requires account_service")
    if qr_renderer is None:  # type: ignore[truthy-bool]
        raise ValueError("build_accounts_router requires qr_renderer")

    router = APIRouter(prefix="/account", tags=["accounts"])

    @router.post(
        "/{account_name}",
        response_class=Response,
        responses={200: {"content": {"image/png": {}}}},
    )
    def post_account(account_name: str) -> Response:
        """
        Create account secret once and return its provisioning URI as PNG QR code.

        Args:
            account_name: Email-shaped account identifier from URI path.
        Returns:
            Response: `image/png` body.
        Assumptions:
            Secret is persisted before the image is rendered.
        Raises:
            AccountOperationError: Validation, duplicate, storage, generation or rendering errors.
        Side Effects:
            Persists a new secret in the secret store.
        """
        parsed_name = _parse_account_name(raw_value=account_name)
        key = account_service.create_secret(account_name=parsed_name)
        try:
            image = qr_renderer.render_png(provisioning_uri=key.provisioning_uri)
        except ValueError as error:
            raise QrRenderingError(cause=str(error)) from error
        return Response(content=image, media_type="image/png")

    @router.post("/{account_name}/validate/{code}", response_model=AccountValidatedResponse)
    def post_account_validate(account_name: str, code: str) -> AccountValidatedResponse:
        """
        Validate submitted code against stored account secret.

        Args:
            account_name: Email-shaped account identifier from URI path.
            code: Numeric TOTP code from URI path.
        Returns:
            AccountValidatedResponse: `{"status": "validated"}` payload.
        Assumptions:
            Validation is read-only against the secret store.
        Raises:
            AccountOperationError: Validation, not-found, invalid-code or storage errors.
        Side Effects:
            None.
        """
        parsed_name = _parse_account_name(raw_value=account_name)
        account_service.validate_account_code(account_name=parsed_name, code=code)
        return AccountValidatedResponse()

    return router


def _parse_account_name(*, raw_value: str) -> AccountName:
    """
    Convert raw path segment into validated account name.

    Args:
        raw_value: Raw path segment.
    Returns:
        AccountName: Validated account name.
    Assumptions:
        Validation failures are client errors.
    Raises:
        InvalidAccountNameError: If value is not a valid email address.
    Side Effects:
        None.
    """
    try:
        return AccountName.from_string(raw_value)
    except ValueError as error:
        raise InvalidAccountNameError(reason=str(error)) from error
