"""
FastAPI application factory for OTP Manager API.
"""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from typing import AsyncIterator, Mapping

from fastapi import FastAPI

from apps.api.common import register_api_error_handlers
from apps.api.wiring.modules import AccountsApiModule, build_accounts_api_module

log = logging.getLogger(__name__)


def create_app(
    *,
    environ: Mapping[str, str] | None = None,
    accounts_module: AccountsApiModule | None = None,
) -> FastAPI:
    """
    Build FastAPI app with accounts module wired at startup.

    Docs: docs/architecture/accounts/accounts-otp-lifecycle-v1.md
    Related: apps.api.routes.accounts,
      apps.api.wiring.modules.accounts,
      apps.api.common.errors

    Args:
        environ: Optional environment mapping override.
        accounts_module: Optional pre-wired accounts module (tests inject their own store).
    Returns:
        FastAPI: Application instance with registered routers.
    Assumptions:
        Module wiring performs fail-fast validation before first request.
    Raises:
        ValueError: If accounts settings are invalid.
        SecretStoreError: If storage cannot be opened.
    Side Effects:
        Opens storage handle; it is closed when application lifespan ends.
    """
    effective_environ = os.environ if environ is None else environ
    module = (
        accounts_module
        if accounts_module is not None
        else build_accounts_api_module(environ=effective_environ)
    )

    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
        log.info("otp manager api started issuer=%s", module.account_service.issuer)
        try:
            yield
        finally:
            module.close()
            log.info("otp manager api stopped")

    app = FastAPI(
        title="OTP Manager API",
        version="1.0.0",
        lifespan=lifespan,
    )
    register_api_error_handlers(app=app)
    app.include_router(module.router)
    return app


app = create_app()
