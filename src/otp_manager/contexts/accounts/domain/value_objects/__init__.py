from .account_name import AccountName

__all__ = [
    "AccountName",
]
