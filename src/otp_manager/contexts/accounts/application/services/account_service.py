from __future__ import annotations

import logging
from datetime import datetime

from otp_manager.contexts.accounts.application.ports import (
    AccountClock,
    SecretStore,
    SecretStoreError,
    TotpEngine,
)
from otp_manager.contexts.accounts.application.services.account_errors import (
    AccountAlreadyExistsError,
    AccountNotFoundError,
    InvalidCodeError,
    SecretGenerationError,
    StorageFailureError,
)
from otp_manager.contexts.accounts.domain import AccountName, OtpKey

log = logging.getLogger(__name__)

_TOTP_CODE_DIGITS = 6


class AccountService:
    """
    AccountService — create-once / validate-many lifecycle of account TOTP secrets.

    Docs:
      - docs/architecture/accounts/accounts-otp-lifecycle-v1.md
    Related:
      - src/otp_manager/contexts/accounts/application/ports/secret_store.py
      - src/otp_manager/contexts/accounts/application/ports/totp_engine.py
      - src/otp_manager/contexts/accounts/adapters/inbound/api/routes/accounts.py
    """

    def __init__(
        self,
        *,
        secret_store: SecretStore,
        totp_engine: TotpEngine,
        clock: AccountClock,
        issuer: str,
    ) -> None:
        """
        Initialize service with explicitly owned collaborators and issuer label.

        Args:
            secret_store: Durable account to secret storage port.
            totp_engine: TOTP secret generation and verification port.
            clock: UTC time source for code validation.
            issuer: Issuer label bound into every generated secret.
        Returns:
            None.
        Assumptions:
            Storage handle lifecycle is owned by the composition root, not by the service.
        Raises:
            ValueError: If dependencies are missing or issuer is empty.
        Side Effects:
            None.
        """
        normalized_issuer = issuer.strip()
        if secret_store is None:  # type: ignore[truthy-bool]
            raise ValueError("AccountService requires secret_store")
        if totp_engine is None:  # type: ignore[truthy-bool]
            raise ValueError("AccountService requires totp_engine")
        if clock is None:  # type: ignore[truthy-bool]
            raise ValueError("AccountService requires clock")
        if not normalized_issuer:
            raise ValueError("AccountService requires non-empty issuer")

        self._secret_store = secret_store
        self._totp_engine = totp_engine
        self._clock = clock
        self._issuer = normalized_issuer

    @property
    def issuer(self) -> str:
        return self._issuer

    def create_secret(self, *, account_name: AccountName) -> OtpKey:
        """
        Generate, persist and return a new secret for an account without one.

        Args:
            account_name: Validated account identifier.
        Returns:
            OtpKey: Generated key material including provisioning URI.
        Assumptions:
            Persisting uses atomic insert-if-absent, so concurrent creators cannot
            overwrite each other; the loser gets `AccountAlreadyExistsError`.
        Raises:
            AccountAlreadyExistsError: If account already has a secret.
            SecretGenerationError: If TOTP engine fails to produce key material.
            StorageFailureError: If secret store fails to read or write.
        Side Effects:
            Writes one storage record on success.
        """
        key = str(account_name)
        if self._read_secret(account_name=key) is not None:
            raise AccountAlreadyExistsError()

        try:
            secret = self._totp_engine.generate_secret()
            provisioning_uri = self._totp_engine.build_provisioning_uri(
                secret=secret,
                account_name=key,
                issuer=self._issuer,
            )
        except ValueError as error:
            log.error("otp secret generation failed account=%s reason=%s", key, error)
            raise SecretGenerationError(cause=str(error)) from error

        try:
            inserted = self._secret_store.save_secret_if_absent(account_name=key, secret=secret)
        except SecretStoreError as error:
            log.error("otp secret write failed account=%s reason=%s", key, error)
            raise StorageFailureError(cause=str(error)) from error
        if not inserted:
            log.warning("otp secret create lost concurrent insert account=%s", key)
            raise AccountAlreadyExistsError()

        log.info("otp secret created account=%s issuer=%s", key, self._issuer)
        return OtpKey(
            account_name=account_name,
            issuer=self._issuer,
            secret=secret,
            provisioning_uri=provisioning_uri,
        )

    def get_secret(self, *, account_name: AccountName) -> str:
        """
        Return stored secret for account.

        Args:
            account_name: Validated account identifier.
        Returns:
            str: Stored secret, byte-for-byte as persisted.
        Assumptions:
            None.
        Raises:
            AccountNotFoundError: If account has no secret.
            StorageFailureError: If secret store fails.
        Side Effects:
            Reads one storage record.
        """
        secret = self._read_secret(account_name=str(account_name))
        if secret is None:
            raise AccountNotFoundError()
        return secret

    def validate_code(self, *, secret: str, code: str) -> bool:
        """
        Check code against secret at current wall-clock time.

        Args:
            secret: Stored base32 secret.
            code: Caller-supplied numeric code.
        Returns:
            bool: `True` for a valid code, `False` for wrong, expired or malformed codes.
        Assumptions:
            Wrong codes are reported as `False` and never raised.
        Raises:
            ValueError: If secret is empty.
        Side Effects:
            None.
        """
        if not secret.strip():
            raise ValueError("AccountService.validate_code requires non-empty secret")
        normalized_code = code.strip()
        if len(normalized_code) != _TOTP_CODE_DIGITS or not normalized_code.isdigit():
            return False
        now = _ensure_utc_datetime(value=self._clock.now(), field_name="clock.now")
        return self._totp_engine.verify_code(secret=secret, code=normalized_code, at_time=now)

    def validate_account_code(self, *, account_name: AccountName, code: str) -> None:
        """
        Validate code for account in one step.

        Args:
            account_name: Validated account identifier.
            code: Caller-supplied numeric code.
        Returns:
            None.
        Assumptions:
            Read-only against secret store.
        Raises:
            AccountNotFoundError: If account has no secret.
            InvalidCodeError: If code does not validate.
            StorageFailureError: If secret store fails.
        Side Effects:
            Reads one storage record.
        """
        secret = self.get_secret(account_name=account_name)
        if not self.validate_code(secret=secret, code=code):
            log.info("otp code rejected account=%s", account_name)
            raise InvalidCodeError()

    def _read_secret(self, *, account_name: str) -> str | None:
        try:
            return self._secret_store.get_secret(account_name=account_name)
        except SecretStoreError as error:
            log.error("otp secret read failed account=%s reason=%s", account_name, error)
            raise StorageFailureError(cause=str(error)) from error


def _ensure_utc_datetime(*, value: datetime, field_name: str) -> datetime:
    """
    Validate datetime is timezone-aware UTC and return same value.

    Args:
        value: Datetime value to validate.
        field_name: Field label for deterministic error message.
    Returns:
        datetime: Same validated datetime.
    Assumptions:
        UTC datetimes have zero offset.
    Raises:
        ValueError: If datetime is naive or non-UTC.
    Side Effects:
        None.
    """
    offset = value.utcoffset()
    if value.tzinfo is None or offset is None:
        raise ValueError(f"{field_name} must be timezone-aware UTC datetime")
    if offset.total_seconds() != 0:
        raise ValueError(f"{field_name} must be UTC datetime")
    return value
