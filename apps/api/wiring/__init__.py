from .modules import AccountsApiModule, AccountsRuntimeSettings, build_accounts_api_module

__all__ = [
    "AccountsApiModule",
    "AccountsRuntimeSettings",
    "build_accounts_api_module",
]
