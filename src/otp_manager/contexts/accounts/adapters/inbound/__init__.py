from .api import (
    AccountValidatedResponse,
    HealthCheckResponse,
    build_accounts_router,
    build_health_check_router,
)

__all__ = [
    "AccountValidatedResponse",
    "HealthCheckResponse",
    "build_accounts_router",
    "build_health_check_router",
]
