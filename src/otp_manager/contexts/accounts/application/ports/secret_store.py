from __future__ import annotations

from typing import Protocol


class SecretStoreError(Exception):
    """
    SecretStoreError — storage engine failure raised by `SecretStore` adapters.

    Docs:
      - docs/architecture/accounts/accounts-otp-lifecycle-v1.md
    Related:
      - src/otp_manager/contexts/accounts/application/services/account_service.py
      - src/otp_manager/contexts/accounts/adapters/outbound/persistence/sqlite/secret_store.py
      - src/otp_manager/contexts/accounts/adapters/outbound/persistence/postgres/secret_store.py
    """


class SecretStore(Protocol):
    """
    SecretStore — durable account name to TOTP secret mapping.

    Docs:
      - docs/architecture/accounts/accounts-otp-lifecycle-v1.md
    Related:
      - src/otp_manager/contexts/accounts/application/services/account_service.py
      - src/otp_manager/contexts/accounts/adapters/outbound/persistence/in_memory/secret_store.py
      - src/otp_manager/contexts/accounts/adapters/outbound/persistence/sqlite/secret_store.py
    """

    def get_secret(self, *, account_name: str) -> str | None:
        """
        Read stored secret for account.

        Args:
            account_name: UTF-8 account identifier used as storage key.
        Returns:
            str | None: Stored secret or `None` when account has no secret.
        Assumptions:
            Read runs in its own transaction and never mutates storage.
        Raises:
            SecretStoreError: If storage engine fails.
        Side Effects:
            Reads one storage record.
        """
        ...

    def save_secret_if_absent(self, *, account_name: str, secret: str) -> bool:
        """
        Atomically insert secret only when account has no secret yet.

        Args:
            account_name: UTF-8 account identifier used as storage key.
            secret: UTF-8 secret value.
        Returns:
            bool: `True` when the secret was written, `False` when a secret already existed.
        Assumptions:
            Existence check and write happen in one transaction or one atomic statement.
        Raises:
            SecretStoreError: If storage engine fails; nothing is persisted in that case.
        Side Effects:
            Writes at most one storage record.
        """
        ...

    def close(self) -> None:
        """
        Release storage handle.

        Args:
            None.
        Returns:
            None.
        Assumptions:
            Called once at process shutdown; store is unusable afterwards.
        Raises:
            None.
        Side Effects:
            Closes connections or files held by the adapter.
        """
        ...
