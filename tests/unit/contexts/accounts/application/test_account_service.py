from __future__ import annotations

from datetime import datetime, timedelta, timezone
from urllib.parse import parse_qs, urlparse

import pyotp
import pytest

from otp_manager.contexts.accounts.adapters.outbound import (
    InMemorySecretStore,
    PyOtpTotpEngine,
)
from otp_manager.contexts.accounts.application import (
    AccountAlreadyExistsError,
    AccountNotFoundError,
    AccountService,
    InvalidCodeError,
    SecretGenerationError,
    SecretStoreError,
    StorageFailureError,
)
from otp_manager.contexts.accounts.application.ports.clock import AccountClock
from otp_manager.contexts.accounts.domain import AccountName

_ISSUER = "OTP Manager"
_NOW = datetime(2026, 3, 1, 12, 0, 0, tzinfo=timezone.utc)


class _FixedClock(AccountClock):
    """
    Deterministic UTC clock returning one configurable instant.
    """

    def __init__(self, *, now_value: datetime) -> None:
        self._now_value = now_value

    def set_now(self, *, now_value: datetime) -> None:
        self._now_value = now_value

    def now(self) -> datetime:
        return self._now_value


class _FlakySecretStore(InMemorySecretStore):
    """
    In-memory store that fails the next N writes with SecretStoreError.
    """

    def __init__(self, *, failing_writes: int) -> None:
        super().__init__()
        self._failing_writes = failing_writes

    def save_secret_if_absent(self, *, account_name: str, secret: str) -> bool:
        if self._failing_writes > 0:
            self._failing_writes -= 1
            raise SecretStoreError("disk I/O error")
        return super().save_secret_if_absent(account_name=account_name, secret=secret)


class _BrokenReadSecretStore(InMemorySecretStore):
    """
    In-memory store whose reads always fail.
    """

    def get_secret(self, *, account_name: str) -> str | None:
        raise SecretStoreError("database is locked")


class _RacingSecretStore(InMemorySecretStore):
    """
    Store that reports absent on read but loses insert race to another writer.
    """

    def get_secret(self, *, account_name: str) -> str | None:
        return None

    def save_secret_if_absent(self, *, account_name: str, secret: str) -> bool:
        return False


class _FailingTotpEngine(PyOtpTotpEngine):
    """
    Engine whose secret generation fails.
    """

    def generate_secret(self) -> str:
        raise ValueError("entropy source unavailable")


def _build_service(
    *,
    secret_store: InMemorySecretStore | None = None,
    totp_engine: PyOtpTotpEngine | None = None,
    clock: _FixedClock | None = None,
) -> AccountService:
    return AccountService(
        secret_store=secret_store if secret_store is not None else InMemorySecretStore(),
        totp_engine=totp_engine if totp_engine is not None else PyOtpTotpEngine(),
        clock=clock if clock is not None else _FixedClock(now_value=_NOW),
        issuer=_ISSUER,
    )


def _wrong_code(*, correct_code: str) -> str:
    return "111111" if correct_code != "111111" else "222222"


def test_create_secret_returns_key_and_persists_secret() -> None:
    """
    Verify first creation returns provisioning URI bound to issuer and account.

    Args:
        None.
    Returns:
        None.
    Assumptions:
        Provisioning URI carries secret and issuer as query parameters.
    Raises:
        AssertionError: If key material or stored secret is inconsistent.
    Side Effects:
        None.
    """
    store = InMemorySecretStore()
    service = _build_service(secret_store=store)
    account_name = AccountName("alice@example.com")

    key = service.create_secret(account_name=account_name)

    assert key.account_name == account_name
    assert key.issuer == _ISSUER
    assert key.provisioning_uri.startswith("otpauth://totp/")
    query = parse_qs(urlparse(key.provisioning_uri).query)
    assert query["secret"] == [key.secret]
    assert query["issuer"] == [_ISSUER]
    assert store.get_secret(account_name="alice@example.com") == key.secret


def test_create_secret_twice_raises_already_exists_and_keeps_first_secret() -> None:
    """
    Verify second creation for same account fails and stored secret is unchanged.

    Args:
        None.
    Returns:
        None.
    Assumptions:
        Account lifecycle moves NoSecret to HasSecret exactly once.
    Raises:
        AssertionError: If second create succeeds or overwrites secret.
    Side Effects:
        None.
    """
    service = _build_service()
    account_name = AccountName("alice@example.com")
    first = service.create_secret(account_name=account_name)

    with pytest.raises(AccountAlreadyExistsError) as error_info:
        service.create_secret(account_name=account_name)

    assert error_info.value.status_code == 400
    assert error_info.value.payload() == {"error": "OTP already created"}
    assert service.get_secret(account_name=account_name) == first.secret


def test_create_secret_lost_insert_race_raises_already_exists() -> None:
    service = _build_service(secret_store=_RacingSecretStore())

    with pytest.raises(AccountAlreadyExistsError):
        service.create_secret(account_name=AccountName("alice@example.com"))


def test_get_secret_round_trips_stored_value_exactly() -> None:
    """
    Verify stored secret is returned byte-for-byte.

    Args:
        None.
    Returns:
        None.
    Assumptions:
        Store does not transform values.
    Raises:
        AssertionError: If returned secret differs.
    Side Effects:
        None.
    """
    store = InMemorySecretStore()
    store.save_secret_if_absent(account_name="bob@example.com", secret="JBSWY3DPEHPK3PXP")
    service = _build_service(secret_store=store)

    assert service.get_secret(account_name=AccountName("bob@example.com")) == "JBSWY3DPEHPK3PXP"


def test_get_secret_for_unknown_account_raises_not_found() -> None:
    service = _build_service()

    with pytest.raises(AccountNotFoundError) as error_info:
        service.get_secret(account_name=AccountName("nobody@example.com"))

    assert error_info.value.status_code == 404


def test_validate_code_accepts_current_code_and_rejects_wrong_code() -> None:
    """
    Verify current code validates and a different code does not.

    Args:
        None.
    Returns:
        None.
    Assumptions:
        Test-generated code follows RFC 6238 defaults used by engine.
    Raises:
        AssertionError: If validation result is wrong.
    Side Effects:
        None.
    """
    service = _build_service()
    key = service.create_secret(account_name=AccountName("alice@example.com"))
    correct_code = pyotp.TOTP(key.secret).at(_NOW)

    assert service.validate_code(secret=key.secret, code=correct_code) is True
    assert service.validate_code(secret=key.secret, code=_wrong_code(correct_code=correct_code)) is False


def test_validate_code_tolerates_one_step_skew_but_not_more() -> None:
    """
    Verify previous step code is accepted and code from two steps ago is rejected.

    Args:
        None.
    Returns:
        None.
    Assumptions:
        Default engine valid_window is one step of 30 seconds.
    Raises:
        AssertionError: If window tolerance differs from one step.
    Side Effects:
        None.
    """
    clock = _FixedClock(now_value=_NOW)
    service = _build_service(clock=clock)
    secret = pyotp.random_base32()
    code = pyotp.TOTP(secret).at(_NOW)

    clock.set_now(now_value=_NOW + timedelta(seconds=30))
    assert service.validate_code(secret=secret, code=code) is True

    clock.set_now(now_value=_NOW + timedelta(seconds=90))
    assert service.validate_code(secret=secret, code=code) is False


@pytest.mark.parametrize("code", ["", "12345", "1234567", "12a456", "abcdef"])
def test_validate_code_returns_false_for_malformed_code(code: str) -> None:
    service = _build_service()

    assert service.validate_code(secret=pyotp.random_base32(), code=code) is False


def test_validate_code_requires_secret() -> None:
    service = _build_service()

    with pytest.raises(ValueError):
        service.validate_code(secret="", code="123456")


def test_validate_account_code_flow() -> None:
    """
    Verify composite flow raises not-found, invalid-code and succeeds for correct code.

    Args:
        None.
    Returns:
        None.
    Assumptions:
        Validation does not mutate stored state.
    Raises:
        AssertionError: If composite flow maps outcomes incorrectly.
    Side Effects:
        None.
    """
    service = _build_service()
    account_name = AccountName("alice@example.com")

    with pytest.raises(AccountNotFoundError):
        service.validate_account_code(account_name=account_name, code="123456")

    key = service.create_secret(account_name=account_name)
    correct_code = pyotp.TOTP(key.secret).at(_NOW)

    with pytest.raises(InvalidCodeError) as error_info:
        service.validate_account_code(
            account_name=account_name,
            code=_wrong_code(correct_code=correct_code),
        )
    assert error_info.value.status_code == 403

    service.validate_account_code(account_name=account_name, code=correct_code)
    assert service.get_secret(account_name=account_name) == key.secret


def test_create_secret_storage_fault_surfaces_cause_and_retry_succeeds() -> None:
    """
    Verify write failure maps to StorageFailureError and next attempt creates secret.

    Args:
        None.
    Returns:
        None.
    Assumptions:
        Failed write leaves account without secret.
    Raises:
        AssertionError: If failure is not surfaced or retry does not succeed.
    Side Effects:
        None.
    """
    store = _FlakySecretStore(failing_writes=1)
    service = _build_service(secret_store=store)
    account_name = AccountName("alice@example.com")

    with pytest.raises(StorageFailureError) as error_info:
        service.create_secret(account_name=account_name)

    assert error_info.value.status_code == 500
    assert error_info.value.payload() == {"error": "disk I/O error"}
    assert store.get_secret(account_name="alice@example.com") is None

    key = service.create_secret(account_name=account_name)
    assert store.get_secret(account_name="alice@example.com") == key.secret


def test_read_fault_maps_to_storage_failure() -> None:
    service = _build_service(secret_store=_BrokenReadSecretStore())

    with pytest.raises(StorageFailureError):
        service.get_secret(account_name=AccountName("alice@example.com"))
    with pytest.raises(StorageFailureError):
        service.create_secret(account_name=AccountName("alice@example.com"))


def test_create_secret_generation_failure_writes_nothing() -> None:
    store = InMemorySecretStore()
    service = _build_service(secret_store=store, totp_engine=_FailingTotpEngine())

    with pytest.raises(SecretGenerationError) as error_info:
        service.create_secret(account_name=AccountName("alice@example.com"))

    assert error_info.value.status_code == 500
    assert store.get_secret(account_name="alice@example.com") is None


def test_service_requires_non_empty_issuer() -> None:
    with pytest.raises(ValueError):
        AccountService(
            secret_store=InMemorySecretStore(),
            totp_engine=PyOtpTotpEngine(),
            clock=_FixedClock(now_value=_NOW),
            issuer="  ",
        )
