from .secret_store import SqliteSecretStore

__all__ = [
    "SqliteSecretStore",
]
