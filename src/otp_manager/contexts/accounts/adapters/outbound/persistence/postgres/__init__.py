from .gateway import AccountsPostgresGateway, PsycopgAccountsPostgresGateway
from .secret_store import PostgresSecretStore

__all__ = [
    "AccountsPostgresGateway",
    "PostgresSecretStore",
    "PsycopgAccountsPostgresGateway",
]
