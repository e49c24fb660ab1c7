from __future__ import annotations


class AccountOperationError(ValueError):
    """
    AccountOperationError — base deterministic application error for OTP account flows.

    Docs:
      - docs/architecture/accounts/accounts-otp-lifecycle-v1.md
    Related:
      - src/otp_manager/contexts/accounts/application/services/account_service.py
      - src/otp_manager/contexts/accounts/adapters/inbound/api/routes/accounts.py
      - apps/api/common/errors.py
    """

    def __init__(self, *, code: str, message: str, status_code: int) -> None:
        """
        Initialize stable operation error attributes for HTTP mapping.

        Args:
            code: Machine-readable deterministic error code.
            message: Human-readable message rendered to API clients.
            status_code: HTTP status expected by inbound adapter.
        Returns:
            None.
        Assumptions:
            Status code is final and does not require additional adapter mapping logic.
        Raises:
            None.
        Side Effects:
            None.
        """
        super().__init__(message)
        self.code = code
        self.message = message
        self.status_code = status_code

    def payload(self) -> dict[str, str]:
        """
        Build HTTP error payload.

        Args:
            None.
        Returns:
            dict[str, str]: `{"error": "..."}` payload.
        Assumptions:
            Payload is rendered as JSON body by API error handler.
        Raises:
            None.
        Side Effects:
            None.
        """
        return {"error": self.message}


class InvalidAccountNameError(AccountOperationError):
    """
    InvalidAccountNameError — account identifier is not a valid email address.
    """

    def __init__(self, *, reason: str) -> None:
        super().__init__(code="validation_error", message=reason, status_code=400)


class AccountAlreadyExistsError(AccountOperationError):
    """
    AccountAlreadyExistsError — secret creation requested for account that already has one.

    Docs:
      - docs/architecture/accounts/accounts-otp-lifecycle-v1.md
    Related:
      - src/otp_manager/contexts/accounts/application/services/account_service.py
      - src/otp_manager/contexts/accounts/application/ports/secret_store.py
    """

    def __init__(self) -> None:
        super().__init__(
            code="already_exists",
            message="OTP already created",
            status_code=400,
        )


class AccountNotFoundError(AccountOperationError):
    """
    AccountNotFoundError — no secret is stored for requested account.
    """

    def __init__(self) -> None:
        super().__init__(
            code="not_found",
            message="Account not found",
            status_code=404,
        )


class InvalidCodeError(AccountOperationError):
    """
    InvalidCodeError — submitted code is malformed, wrong, or outside the time window.
    """

    def __init__(self) -> None:
        super().__init__(
            code="invalid_code",
            message="Invalid code",
            status_code=403,
        )


class StorageFailureError(AccountOperationError):
    """
    StorageFailureError — secret store failed; underlying cause is surfaced to the caller.

    Docs:
      - docs/architecture/accounts/accounts-otp-lifecycle-v1.md
    Related:
      - src/otp_manager/contexts/accounts/application/ports/secret_store.py
      - src/otp_manager/contexts/accounts/application/services/account_service.py
    """

    def __init__(self, *, cause: str) -> None:
        """
        Initialize 500 error with storage cause text.

        Args:
            cause: Storage engine error text.
        Returns:
            None.
        Assumptions:
            Storage error text contains no secret material.
        Raises:
            None.
        Side Effects:
            None.
        """
        super().__init__(
            code="storage_failure",
            message=cause or "Storage failure",
            status_code=500,
        )


class SecretGenerationError(AccountOperationError):
    """
    SecretGenerationError — TOTP engine could not produce a secret or provisioning URI.
    """

    def __init__(self, *, cause: str) -> None:
        super().__init__(
            code="generation_failure",
            message=cause or "Secret generation failed",
            status_code=500,
        )


class QrRenderingError(AccountOperationError):
    """
    QrRenderingError — provisioning URI could not be encoded as PNG image.
    """

    def __init__(self, *, cause: str) -> None:
        super().__init__(
            code="qr_rendering_failure",
            message=cause or "QR rendering failed",
            status_code=400,
        )
