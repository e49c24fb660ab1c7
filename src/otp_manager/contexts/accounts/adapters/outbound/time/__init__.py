from .system_account_clock import SystemAccountClock

__all__ = [
    "SystemAccountClock",
]
