"""
Composition helpers for accounts API module.

Docs: docs/architecture/accounts/accounts-otp-lifecycle-v1.md
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Mapping

from fastapi import APIRouter

from apps.api.routes import build_accounts_router as build_accounts_api_router
from otp_manager.contexts.accounts.adapters.outbound import (
    InMemorySecretStore,
    PostgresSecretStore,
    PsycopgAccountsPostgresGateway,
    PyOtpTotpEngine,
    QrCodePngRenderer,
    SqliteSecretStore,
    SystemAccountClock,
)
from otp_manager.contexts.accounts.application import AccountService, SecretStore

log = logging.getLogger(__name__)

_ENV_NAME_KEY = "OTP_MANAGER_ENV"
_FAIL_FAST_KEY = "OTP_MANAGER_FAIL_FAST"
_ISSUER_KEY = "OTP_ISSUER"
_DB_PATH_KEY = "DB_PATH"
_PG_DSN_KEY = "OTP_PG_DSN"
_VALID_WINDOW_KEY = "OTP_TOTP_VALID_WINDOW"
_QR_BOX_SIZE_KEY = "OTP_QR_BOX_SIZE"
_DEFAULT_ISSUER = "OTP Manager"
_ALLOWED_ENVS = ("dev", "prod", "test")


@dataclass(frozen=True, slots=True)
class AccountsRuntimeSettings:
    """
    AccountsRuntimeSettings — runtime policy for accounts API wiring.

    Docs:
      - docs/architecture/accounts/accounts-otp-lifecycle-v1.md
    Related:
      - apps/api/wiring/modules/accounts.py
      - apps/api/main/app.py
      - src/otp_manager/contexts/accounts/application/services/account_service.py
    """

    env_name: str
    fail_fast: bool
    issuer: str
    db_path: str
    postgres_dsn: str
    valid_window: int
    qr_box_size: int

    def __post_init__(self) -> None:
        """
        Validate accounts runtime settings invariants.

        Args:
            None.
        Returns:
            None.
        Assumptions:
            Values are normalized by resolver before dataclass construction.
        Raises:
            ValueError: If one of invariants is violated.
        Side Effects:
            None.
        """
        if self.env_name not in _ALLOWED_ENVS:
            raise ValueError(
                f"AccountsRuntimeSettings.env_name must be one of {_ALLOWED_ENVS}, "
                f"got {self.env_name!r}"
            )
        if not self.issuer:
            raise ValueError("AccountsRuntimeSettings.issuer must be non-empty")
        if self.valid_window < 0:
            raise ValueError("AccountsRuntimeSettings.valid_window must be >= 0")
        if self.qr_box_size <= 0:
            raise ValueError("AccountsRuntimeSettings.qr_box_size must be > 0")


@dataclass(frozen=True, slots=True)
class AccountsApiModule:
    """
    AccountsApiModule — wired accounts router plus the storage handle it owns.

    Docs:
      - docs/architecture/accounts/accounts-otp-lifecycle-v1.md
    Related:
      - apps/api/main/app.py
      - src/otp_manager/contexts/accounts/application/ports/secret_store.py
    """

    router: APIRouter
    account_service: AccountService
    secret_store: SecretStore

    def close(self) -> None:
        """
        Release storage handle owned by module.

        Args:
            None.
        Returns:
            None.
        Assumptions:
            Called once from application lifespan shutdown.
        Raises:
            None.
        Side Effects:
            Closes storage connections.
        """
        self.secret_store.close()


def build_accounts_api_module(*, environ: Mapping[str, str]) -> AccountsApiModule:
    """
    Build fully wired accounts module from environment settings.

    Docs: docs/architecture/accounts/accounts-otp-lifecycle-v1.md
    Related: apps.api.routes.accounts,
      otp_manager.contexts.accounts.adapters.outbound,
      apps.api.main.app

    Args:
        environ: Runtime environment mapping.
    Returns:
        AccountsApiModule: Router, service and owned storage handle.
    Assumptions:
        Fail-fast policy is resolved by `_resolve_accounts_runtime_settings`.
    Raises:
        ValueError: If settings are invalid or fail-fast requires missing values.
        SecretStoreError: If embedded storage cannot be opened.
    Side Effects:
        Opens storage handle.
    """
    settings = _resolve_accounts_runtime_settings(environ=environ)
    secret_store = _build_secret_store(settings=settings)
    account_service = AccountService(
        secret_store=secret_store,
        totp_engine=PyOtpTotpEngine(valid_window=settings.valid_window),
        clock=SystemAccountClock(),
        issuer=settings.issuer,
    )
    router = build_accounts_api_router(
        account_service=account_service,
        qr_renderer=QrCodePngRenderer(box_size=settings.qr_box_size),
    )
    return AccountsApiModule(
        router=router,
        account_service=account_service,
        secret_store=secret_store,
    )


def _build_secret_store(*, settings: AccountsRuntimeSettings) -> SecretStore:
    """
    Build secret store adapter based on configured storage location.

    Args:
        settings: Resolved runtime settings.
    Returns:
        SecretStore: Postgres, SQLite or in-memory adapter.
    Assumptions:
        Postgres DSN takes precedence over SQLite path; in-memory is acceptable for local runs.
    Raises:
        ValueError: If storage settings are malformed.
        SecretStoreError: If SQLite file cannot be opened.
    Side Effects:
        Opens SQLite database file when configured.
    """
    if settings.postgres_dsn:
        gateway = PsycopgAccountsPostgresGateway(dsn=settings.postgres_dsn)
        log.info("accounts secret store backend=postgres")
        return PostgresSecretStore(gateway=gateway)
    if settings.db_path:
        log.info("accounts secret store backend=sqlite")
        return SqliteSecretStore(db_path=settings.db_path)
    log.warning("accounts secret store backend=in_memory; secrets are lost on restart")
    return InMemorySecretStore()


def _resolve_accounts_runtime_settings(*, environ: Mapping[str, str]) -> AccountsRuntimeSettings:
    """
    Resolve accounts runtime settings with fail-fast policy and defaults.

    Args:
        environ: Runtime environment mapping.
    Returns:
        AccountsRuntimeSettings: Validated normalized settings.
    Assumptions:
        Missing `OTP_MANAGER_ENV` defaults to `dev`.
    Raises:
        ValueError: If env values are invalid or fail-fast policy requires missing values.
    Side Effects:
        None.
    """
    env_name = _resolve_env_name(environ=environ)
    fail_fast = _resolve_fail_fast(environ=environ, env_name=env_name)

    issuer = environ.get(_ISSUER_KEY, "").strip()
    db_path = environ.get(_DB_PATH_KEY, "").strip()
    postgres_dsn = environ.get(_PG_DSN_KEY, "").strip()

    if fail_fast:
        if not issuer:
            raise ValueError(f"{_ISSUER_KEY} must be set when {_FAIL_FAST_KEY}=true")
        if not db_path and not postgres_dsn:
            raise ValueError(
                f"{_DB_PATH_KEY} or {_PG_DSN_KEY} must be set when {_FAIL_FAST_KEY}=true"
            )

    return AccountsRuntimeSettings(
        env_name=env_name,
        fail_fast=fail_fast,
        issuer=issuer or _DEFAULT_ISSUER,
        db_path=db_path,
        postgres_dsn=postgres_dsn,
        valid_window=_resolve_int(environ=environ, key=_VALID_WINDOW_KEY, default=1, minimum=0),
        qr_box_size=_resolve_int(environ=environ, key=_QR_BOX_SIZE_KEY, default=10, minimum=1),
    )


def _resolve_env_name(*, environ: Mapping[str, str]) -> str:
    """
    Resolve normalized runtime env name.

    Args:
        environ: Runtime environment mapping.
    Returns:
        str: One of `dev`, `prod`, or `test`.
    Assumptions:
        Missing value defaults to `dev`.
    Raises:
        ValueError: If value is outside allowed list.
    Side Effects:
        None.
    """
    raw_env_name = environ.get(_ENV_NAME_KEY, "dev").strip().lower()
    if raw_env_name not in _ALLOWED_ENVS:
        raise ValueError(
            f"{_ENV_NAME_KEY} must be one of {_ALLOWED_ENVS}, got {raw_env_name!r}"
        )
    return raw_env_name


def _resolve_fail_fast(*, environ: Mapping[str, str], env_name: str) -> bool:
    """
    Resolve fail-fast policy for startup validation.

    Args:
        environ: Runtime environment mapping.
        env_name: Normalized environment name.
    Returns:
        bool: Effective fail-fast flag.
    Assumptions:
        Default is enabled for `prod` and disabled for `dev`/`test`.
    Raises:
        ValueError: If override value is not parseable as boolean.
    Side Effects:
        None.
    """
    raw_override = environ.get(_FAIL_FAST_KEY, "").strip()
    if not raw_override:
        return env_name == "prod"
    return _parse_bool(raw_value=raw_override, key=_FAIL_FAST_KEY)


def _resolve_int(*, environ: Mapping[str, str], key: str, default: int, minimum: int) -> int:
    """
    Resolve bounded integer env setting with fallback default.

    Args:
        environ: Runtime environment mapping.
        key: Environment variable key.
        default: Fallback integer.
        minimum: Smallest accepted value.
    Returns:
        int: Parsed integer value.
    Assumptions:
        Empty env value means default should be used.
    Raises:
        ValueError: If value is not parseable or below minimum.
    Side Effects:
        None.
    """
    raw_value = environ.get(key, "").strip()
    if not raw_value:
        return default
    try:
        parsed = int(raw_value)
    except ValueError as error:
        raise ValueError(f"{key} must be integer, got {raw_value!r}") from error
    if parsed < minimum:
        raise ValueError(f"{key} must be >= {minimum}, got {parsed}")
    return parsed


def _parse_bool(*, raw_value: str, key: str) -> bool:
    """
    Parse strict boolean env value from known textual literals.

    Args:
        raw_value: Raw env string value.
        key: Env key used in error messages.
    Returns:
        bool: Parsed boolean value.
    Assumptions:
        Accepted true values: `1,true,yes,on`; false values: `0,false,no,off`.
    Raises:
        ValueError: If value is not recognized.
    Side Effects:
        None.
    """
    normalized = raw_value.strip().lower()
    if normalized in {"1", "true", "yes", "on"}:
        return True
    if normalized in {"0", "false", "no", "off"}:
        return False
    raise ValueError(
        f"{key} must be a boolean literal (1/0/true/false/yes/no/on/off), got {raw_value!r}"
    )
