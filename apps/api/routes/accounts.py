"""
Accounts API routes.

Docs:
  - docs/architecture/accounts/accounts-otp-lifecycle-v1.md
"""

from __future__ import annotations

from fastapi import APIRouter

from otp_manager.contexts.accounts.adapters.inbound.api.routes import (
    build_accounts_router as build_account_secrets_router,
)
from otp_manager.contexts.accounts.adapters.inbound.api.routes import (
    build_health_check_router,
)
from otp_manager.contexts.accounts.application.ports import ProvisioningQrRenderer
from otp_manager.contexts.accounts.application.services import AccountService


def build_accounts_router(
    *,
    account_service: AccountService,
    qr_renderer: ProvisioningQrRenderer,
) -> APIRouter:
    """
    Build accounts router facade for FastAPI app composition root.

    Docs:
      - docs/architecture/accounts/accounts-otp-lifecycle-v1.md
    Related:
      - src/otp_manager/contexts/accounts/adapters/inbound/api/routes/accounts.py
      - src/otp_manager/contexts/accounts/adapters/inbound/api/routes/health_check.py
      - apps/api/wiring/modules/accounts.py

    Args:
        account_service: Account lifecycle service.
        qr_renderer: Provisioning QR renderer.
    Returns:
        APIRouter: Router with health check and account endpoints.
    Assumptions:
        None.
    Raises:
        ValueError: If dependencies are missing.
    Side Effects:
        None.
    """
    router = APIRouter()
    router.include_router(build_health_check_router())
    router.include_router(
        build_account_secrets_router(
            account_service=account_service,
            qr_renderer=qr_renderer,
        )
    )
    return router
