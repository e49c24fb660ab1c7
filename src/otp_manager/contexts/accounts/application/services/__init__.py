from .account_errors import (
    AccountAlreadyExistsError,
    AccountNotFoundError,
    AccountOperationError,
    InvalidAccountNameError,
    InvalidCodeError,
    QrRenderingError,
    SecretGenerationError,
    StorageFailureError,
)
from .account_service import AccountService

__all__ = [
    "AccountAlreadyExistsError",
    "AccountNotFoundError",
    "AccountOperationError",
    "AccountService",
    "InvalidAccountNameError",
    "InvalidCodeError",
    "QrRenderingError",
    "SecretGenerationError",
    "StorageFailureError",
]
