from .accounts import AccountValidatedResponse, build_accounts_router
from .health_check import HealthCheckResponse, build_health_check_router

__all__ = [
    "AccountValidatedResponse",
    "HealthCheckResponse",
    "build_accounts_router",
    "build_health_check_router",
]
