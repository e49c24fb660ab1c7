from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Mapping, Protocol, cast

import psycopg
from psycopg.rows import dict_row

from otp_manager.contexts.accounts.application.ports.secret_store import SecretStoreError

log = logging.getLogger(__name__)


class AccountsPostgresGateway(Protocol):
    """
    AccountsPostgresGateway — minimal SQL gateway for accounts Postgres adapters.

    Docs:
      - docs/architecture/accounts/accounts-otp-lifecycle-v1.md
    Related:
      - src/otp_manager/contexts/accounts/adapters/outbound/persistence/postgres/secret_store.py
      - migrations/postgres/0001_otp_secrets_v1.sql
      - apps/api/wiring/modules/accounts.py
    """

    def fetch_one(self, *, query: str, parameters: Mapping[str, Any]) -> Mapping[str, Any] | None:
        """
        Execute one SQL statement atomically and return one row as mapping.

        Args:
            query: SQL text.
            parameters: Bind parameters mapping.
        Returns:
            Mapping[str, Any] | None: One row or `None`.
        Assumptions:
            Query may include `RETURNING` clause.
        Raises:
            SecretStoreError: If driver or database fails.
        Side Effects:
            Executes one SQL statement.
        """
        ...

    def close(self) -> None:
        """
        Close underlying connection.

        Args:
            None.
        Returns:
            None.
        Assumptions:
            Called once at process shutdown.
        Raises:
            None.
        Side Effects:
            Closes database connection.
        """
        ...


ConnectionFactory = Callable[[str], "psycopg.Connection[Any]"]


def _connect_autocommit(dsn: str) -> psycopg.Connection[Any]:
    return psycopg.connect(
        dsn,
        autocommit=True,
        row_factory=cast(Any, dict_row),
    )


class PsycopgAccountsPostgresGateway(AccountsPostgresGateway):
    """
    PsycopgAccountsPostgresGateway — psycopg3 gateway sharing one connection per process.

    Docs:
      - docs/architecture/accounts/accounts-otp-lifecycle-v1.md
    Related:
      - src/otp_manager/contexts/accounts/adapters/outbound/persistence/postgres/gateway.py
      - src/otp_manager/contexts/accounts/adapters/outbound/persistence/postgres/secret_store.py
      - migrations/postgres/0001_otp_secrets_v1.sql
    """

    def __init__(
        self,
        *,
        dsn: str,
        connection_factory: ConnectionFactory | None = None,
    ) -> None:
        """
        Initialize gateway with DSN connection string.

        Args:
            dsn: PostgreSQL DSN.
            connection_factory: Optional override of autocommit `psycopg.connect`.
        Returns:
            None.
        Assumptions:
            DSN points to database with `otp_secrets` schema migrated.
        Raises:
            ValueError: If DSN is blank.
        Side Effects:
            None.
        """
        normalized_dsn = dsn.strip()
        if not normalized_dsn:
            raise ValueError("PsycopgAccountsPostgresGateway requires non-empty dsn")
        self._dsn = normalized_dsn
        self._connection_factory = (
            connection_factory if connection_factory is not None else _connect_autocommit
        )
        self._connection: psycopg.Connection[Any] | None = None
        self._lock = threading.Lock()

    def fetch_one(self, *, query: str, parameters: Mapping[str, Any]) -> Mapping[str, Any] | None:
        """
        Execute one autocommit statement and return first row mapped by column names.

        Args:
            query: SQL text.
            parameters: Bind parameters mapping.
        Returns:
            Mapping[str, Any] | None: Query row or `None`.
        Assumptions:
            Each statement is atomic on its own; the lock is held from execute
            to fetch so request threads never interleave on the shared connection.
        Raises:
            SecretStoreError: When database operation fails.
        Side Effects:
            Opens shared connection on first call and executes one query.
        """
        with self._lock:
            try:
                connection = self._ensure_connection()
                with connection.cursor() as cursor:
                    cursor.execute(cast(Any, query), parameters)
                    row = cursor.fetchone()
            except psycopg.Error as error:
                raise SecretStoreError(str(error)) from error
        if row is None:
            return None
        return dict(row)

    def close(self) -> None:
        with self._lock:
            if self._connection is not None:
                self._connection.close()
                self._connection = None
                log.info("postgres accounts gateway closed")

    def _ensure_connection(self) -> psycopg.Connection[Any]:
        # caller holds self._lock
        if self._connection is None or self._connection.closed:
            self._connection = self._connection_factory(self._dsn)
            log.info("postgres accounts gateway connected")
        return self._connection
