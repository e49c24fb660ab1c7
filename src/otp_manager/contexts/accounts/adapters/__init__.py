"""
Adapters package for accounts bounded context.
"""

from .inbound import build_accounts_router, build_health_check_router
from .outbound import (
    InMemorySecretStore,
    PostgresSecretStore,
    PsycopgAccountsPostgresGateway,
    PyOtpTotpEngine,
    QrCodePngRenderer,
    SqliteSecretStore,
    SystemAccountClock,
)

__all__ = [
    "InMemorySecretStore",
    "PostgresSecretStore",
    "PsycopgAccountsPostgresGateway",
    "PyOtpTotpEngine",
    "QrCodePngRenderer",
    "SqliteSecretStore",
    "SystemAccountClock",
    "build_accounts_router",
    "build_health_check_router",
]
