from __future__ import annotations

import threading

from otp_manager.contexts.accounts.application.ports.secret_store import SecretStore


class InMemorySecretStore(SecretStore):
    """
    InMemorySecretStore — process-local account secret storage for dev and tests.

    Docs:
      - docs/architecture/accounts/accounts-otp-lifecycle-v1.md
    Related:
      - src/otp_manager/contexts/accounts/application/ports/secret_store.py
      - src/otp_manager/contexts/accounts/adapters/outbound/persistence/sqlite/secret_store.py
      - tests/unit/contexts/accounts/application/test_account_service.py
    """

    def __init__(self) -> None:
        """
        Initialize empty storage.

        Args:
            None.
        Returns:
            None.
        Assumptions:
            Repository instance is process-local and lost on restart.
        Raises:
            None.
        Side Effects:
            None.
        """
        self._rows: dict[str, str] = {}
        self._lock = threading.Lock()

    def get_secret(self, *, account_name: str) -> str | None:
        with self._lock:
            return self._rows.get(account_name)

    def save_secret_if_absent(self, *, account_name: str, secret: str) -> bool:
        """
        Insert secret under lock when account key is absent.

        Args:
            account_name: Account storage key.
            secret: Secret value.
        Returns:
            bool: `True` when inserted, `False` when key already present.
        Assumptions:
            Lock makes check and write one atomic step across request threads.
        Raises:
            None.
        Side Effects:
            Mutates in-memory dictionary.
        """
        with self._lock:
            if account_name in self._rows:
                return False
            self._rows[account_name] = secret
            return True

    def close(self) -> None:
        with self._lock:
            self._rows.clear()
