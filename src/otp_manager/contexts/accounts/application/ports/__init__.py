from .clock import AccountClock
from .qr_renderer import ProvisioningQrRenderer
from .secret_store import SecretStore, SecretStoreError
from .totp_engine import TotpEngine

__all__ = [
    "AccountClock",
    "ProvisioningQrRenderer",
    "SecretStore",
    "SecretStoreError",
    "TotpEngine",
]
