from .application import (
    AccountOperationError,
    AccountService,
    SecretStore,
    SecretStoreError,
    TotpEngine,
)
from .domain import AccountName, OtpKey

__all__ = [
    "AccountName",
    "AccountOperationError",
    "AccountService",
    "OtpKey",
    "SecretStore",
    "SecretStoreError",
    "TotpEngine",
]
