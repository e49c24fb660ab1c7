from .accounts import build_accounts_router

__all__ = [
    "build_accounts_router",
]
