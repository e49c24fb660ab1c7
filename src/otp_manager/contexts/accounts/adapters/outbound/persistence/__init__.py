from .in_memory import InMemorySecretStore
from .postgres import AccountsPostgresGateway, PostgresSecretStore, PsycopgAccountsPostgresGateway
from .sqlite import SqliteSecretStore

__all__ = [
    "AccountsPostgresGateway",
    "InMemorySecretStore",
    "PostgresSecretStore",
    "PsycopgAccountsPostgresGateway",
    "SqliteSecretStore",
]
