from .pyotp_totp_engine import PyOtpTotpEngine

__all__ = [
    "PyOtpTotpEngine",
]
