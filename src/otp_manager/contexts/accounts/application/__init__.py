from .ports import (
    AccountClock,
    ProvisioningQrRenderer,
    SecretStore,
    SecretStoreError,
    TotpEngine,
)
from .services import (
    AccountAlreadyExistsError,
    AccountNotFoundError,
    AccountOperationError,
    AccountService,
    InvalidAccountNameError,
    InvalidCodeError,
    QrRenderingError,
    SecretGenerationError,
    StorageFailureError,
)

__all__ = [
    "AccountAlreadyExistsError",
    "AccountClock",
    "AccountNotFoundError",
    "AccountOperationError",
    "AccountService",
    "InvalidAccountNameError",
    "InvalidCodeError",
    "ProvisioningQrRenderer",
    "QrRenderingError",
    "SecretGenerationError",
    "SecretStore",
    "SecretStoreError",
    "StorageFailureError",
    "TotpEngine",
]
