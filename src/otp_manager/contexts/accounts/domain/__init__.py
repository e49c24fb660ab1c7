from .entities import OtpKey
from .value_objects import AccountName

__all__ = [
    "AccountName",
    "OtpKey",
]
