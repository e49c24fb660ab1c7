from .persistence import (
    AccountsPostgresGateway,
    InMemorySecretStore,
    PostgresSecretStore,
    PsycopgAccountsPostgresGateway,
    SqliteSecretStore,
)
from .security import PyOtpTotpEngine, QrCodePngRenderer
from .time import SystemAccountClock

__all__ = [
    "AccountsPostgresGateway",
    "InMemorySecretStore",
    "PostgresSecretStore",
    "PsycopgAccountsPostgresGateway",
    "PyOtpTotpEngine",
    "QrCodePngRenderer",
    "SqliteSecretStore",
    "SystemAccountClock",
]
