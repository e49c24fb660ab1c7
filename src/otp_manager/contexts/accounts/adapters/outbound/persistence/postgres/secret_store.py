from __future__ import annotations

from otp_manager.contexts.accounts.adapters.outbound.persistence.postgres.gateway import (
    AccountsPostgresGateway,
)
from otp_manager.contexts.accounts.application.ports.secret_store import (
    SecretStore,
    SecretStoreError,
)


class PostgresSecretStore(SecretStore):
    """
    PostgresSecretStore — Postgres adapter for account secret storage port.

    Docs:
      - docs/architecture/accounts/accounts-otp-lifecycle-v1.md
    Related:
      - src/otp_manager/contexts/accounts/application/ports/secret_store.py
      - migrations/postgres/0001_otp_secrets_v1.sql
      - src/otp_manager/contexts/accounts/adapters/outbound/persistence/postgres/gateway.py
    """

    def __init__(
        self,
        *,
        gateway: AccountsPostgresGateway,
        secrets_table: str = "otp_secrets",
    ) -> None:
        """
        Initialize store with SQL gateway and target table name.

        Args:
            gateway: SQL gateway abstraction.
            secrets_table: Target secrets table name.
        Returns:
            None.
        Assumptions:
            Table schema follows migration `0001_otp_secrets_v1.sql`.
        Raises:
            ValueError: If dependencies are invalid.
        Side Effects:
            None.
        """
        if gateway is None:  # type: ignore[truthy-bool]
            raise ValueError("PostgresSecretStore requires gateway")
        normalized_table = secrets_table.strip()
        if not normalized_table:
            raise ValueError("PostgresSecretStore requires non-empty table name")

        self._gateway = gateway
        self._table = normalized_table

    def get_secret(self, *, account_name: str) -> str | None:
        """
        Find secret row by account name.

        Args:
            account_name: Account storage key.
        Returns:
            str | None: Stored secret or `None`.
        Assumptions:
            `account_name` is primary key of the secrets table.
        Raises:
            SecretStoreError: If query fails or row is malformed.
        Side Effects:
            Executes one SQL SELECT statement.
        """
        query = f"""
        SELECT
            secret
        FROM {self._table}
        WHERE account_name = %(account_name)s
        """
        row = self._gateway.fetch_one(
            query=query,
            parameters={"account_name": account_name},
        )
        if row is None:
            return None
        try:
            return str(row["secret"])
        except KeyError as error:
            raise SecretStoreError("PostgresSecretStore cannot map secret row") from error

    def save_secret_if_absent(self, *, account_name: str, secret: str) -> bool:
        """
        Insert secret unless a row already exists, in one atomic statement.

        Args:
            account_name: Account storage key.
            secret: Secret value.
        Returns:
            bool: `True` when inserted, `False` on conflict with existing row.
        Assumptions:
            `ON CONFLICT DO NOTHING` returns no row for the losing writer.
        Raises:
            SecretStoreError: If statement fails.
        Side Effects:
            Executes one SQL INSERT statement.
        """
        query = f"""
        INSERT INTO {self._table}
        (
            account_name,
            secret
        )
        VALUES
        (
            %(account_name)s,
            %(secret)s
        )
        ON CONFLICT (account_name)
        DO NOTHING
        RETURNING
            account_name
        """
        row = self._gateway.fetch_one(
            query=query,
            parameters={
                "account_name": account_name,
                "secret": secret,
            },
        )
        return row is not None

    def close(self) -> None:
        self._gateway.close()
