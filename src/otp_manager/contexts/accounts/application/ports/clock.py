from __future__ import annotations

from datetime import datetime
from typing import Protocol


class AccountClock(Protocol):
    """
    AccountClock — port of current wall-clock time for code validation.

    Docs:
      - docs/architecture/accounts/accounts-otp-lifecycle-v1.md
    Related:
      - src/otp_manager/contexts/accounts/application/services/account_service.py
      - src/otp_manager/contexts/accounts/adapters/outbound/time/system_account_clock.py
    """

    def now(self) -> datetime:
        """
        Return current UTC timestamp.

        Args:
            None.
        Returns:
            datetime: Timezone-aware UTC datetime.
        Assumptions:
            None.
        Raises:
            None.
        Side Effects:
            None.
        """
        ...
