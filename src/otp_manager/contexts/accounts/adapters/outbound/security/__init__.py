from .qr import QrCodePngRenderer
from .totp import PyOtpTotpEngine

__all__ = [
    "PyOtpTotpEngine",
    "QrCodePngRenderer",
]
