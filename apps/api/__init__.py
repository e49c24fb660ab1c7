"""
OTP Manager HTTP API package.

`create_app` and the module-level `app` are resolved lazily: importing
`apps.api.main.app` wires storage from the process environment, which tests
and tooling importing `apps.api.common` or `apps.api.wiring` must not trigger.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .main import app, create_app

__all__ = ["app", "create_app"]

_LAZY_EXPORTS = frozenset(__all__)


def __getattr__(name: str) -> Any:
    if name not in _LAZY_EXPORTS:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
    from . import main

    return getattr(main, name)
