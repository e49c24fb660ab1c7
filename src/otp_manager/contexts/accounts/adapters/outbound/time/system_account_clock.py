from __future__ import annotations

from datetime import datetime, timezone

from otp_manager.contexts.accounts.application.ports.clock import AccountClock


class SystemAccountClock(AccountClock):
    """
    SystemAccountClock — `AccountClock` implementation on system UTC time.

    Docs:
      - docs/architecture/accounts/accounts-otp-lifecycle-v1.md
    Related:
      - src/otp_manager/contexts/accounts/application/ports/clock.py
      - apps/api/wiring/modules/accounts.py
    """

    def now(self) -> datetime:
        return datetime.now(timezone.utc)
