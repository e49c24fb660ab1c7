from __future__ import annotations

import logging
from pathlib import Path

from sqlalchemy import Column, MetaData, String, Table, create_engine, insert, select
from sqlalchemy.engine import URL
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from otp_manager.contexts.accounts.application.ports.secret_store import (
    SecretStore,
    SecretStoreError,
)

log = logging.getLogger(__name__)


class SqliteSecretStore(SecretStore):
    """
    SqliteSecretStore — durable embedded account secret storage on one SQLite file.

    Docs:
      - docs/architecture/accounts/accounts-otp-lifecycle-v1.md
    Related:
      - src/otp_manager/contexts/accounts/application/ports/secret_store.py
      - apps/api/wiring/modules/accounts.py
      - tests/unit/contexts/accounts/adapters/test_sqlite_secret_store.py
    """

    def __init__(self, *, db_path: str, table_name: str = "otp_secrets") -> None:
        """
        Open database file, creating parent directory and table when missing.

        Args:
            db_path: Filesystem path of SQLite database file.
            table_name: Target table name.
        Returns:
            None.
        Assumptions:
            One store instance owns the engine for the whole process lifetime.
        Raises:
            ValueError: If path or table name is blank.
            SecretStoreError: If database cannot be opened or schema cannot be created.
        Side Effects:
            Creates directory, database file and table on first start.
        """
        normalized_path = db_path.strip()
        normalized_table = table_name.strip()
        if not normalized_path:
            raise ValueError("SqliteSecretStore requires non-empty db_path")
        if not normalized_table:
            raise ValueError("SqliteSecretStore requires non-empty table name")

        path = Path(normalized_path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as error:
            raise SecretStoreError(f"cannot create storage directory: {error}") from error

        metadata = MetaData()
        self._table = Table(
            normalized_table,
            metadata,
            Column("account_name", String, primary_key=True),
            Column("secret", String, nullable=False),
        )
        self._engine = create_engine(
            URL.create("sqlite", database=str(path)),
            connect_args={"check_same_thread": False},
        )
        try:
            metadata.create_all(self._engine)
        except SQLAlchemyError as error:
            self._engine.dispose()
            raise SecretStoreError(str(error)) from error
        log.info("sqlite secret store opened path=%s table=%s", path, normalized_table)

    def get_secret(self, *, account_name: str) -> str | None:
        """
        Select secret by primary key.

        Args:
            account_name: Account storage key.
        Returns:
            str | None: Stored secret or `None`.
        Assumptions:
            None.
        Raises:
            SecretStoreError: If query fails.
        Side Effects:
            Executes one SELECT statement.
        """
        query = select(self._table.c.secret).where(self._table.c.account_name == account_name)
        try:
            with self._engine.connect() as connection:
                row = connection.execute(query).first()
        except SQLAlchemyError as error:
            raise SecretStoreError(str(error)) from error
        if row is None:
            return None
        return str(row.secret)

    def save_secret_if_absent(self, *, account_name: str, secret: str) -> bool:
        """
        Insert secret in one transaction; primary key violation means secret exists.

        Args:
            account_name: Account storage key.
            secret: Secret value.
        Returns:
            bool: `True` when inserted, `False` when account already has a secret.
        Assumptions:
            Failed transaction is rolled back and leaves no partial row.
        Raises:
            SecretStoreError: If statement fails for any reason other than duplicate key.
        Side Effects:
            Executes one INSERT statement.
        """
        statement = insert(self._table).values(account_name=account_name, secret=secret)
        try:
            with self._engine.begin() as connection:
                connection.execute(statement)
        except IntegrityError:
            return False
        except SQLAlchemyError as error:
            raise SecretStoreError(str(error)) from error
        return True

    def close(self) -> None:
        self._engine.dispose()
        log.info("sqlite secret store closed")
