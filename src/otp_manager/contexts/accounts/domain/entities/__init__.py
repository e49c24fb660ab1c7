from .otp_key import OtpKey

__all__ = [
    "OtpKey",
]
