from .secret_store import InMemorySecretStore

__all__ = [
    "InMemorySecretStore",
]
