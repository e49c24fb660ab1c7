from __future__ import annotations

from pathlib import Path

import pytest

from otp_manager.contexts.accounts.adapters.outbound import SqliteSecretStore


def test_sqlite_store_inserts_once_and_reads_back(tmp_path: Path) -> None:
    """
    Verify insert-if-absent semantics and exact value round-trip.

    Args:
        tmp_path: Pytest temporary directory.
    Returns:
        None.
    Assumptions:
        Primary key violation is reported as `False`, not as error.
    Raises:
        AssertionError: If duplicate insert overwrites value.
    Side Effects:
        Creates SQLite file in temporary directory.
    """
    store = SqliteSecretStore(db_path=str(tmp_path / "otp.db"))
    try:
        assert store.get_secret(account_name="alice@example.com") is None
        assert store.save_secret_if_absent(account_name="alice@example.com", secret="AAAA") is True
        assert store.save_secret_if_absent(account_name="alice@example.com", secret="BBBB") is False
        assert store.get_secret(account_name="alice@example.com") == "AAAA"
    finally:
        store.close()


def test_sqlite_store_survives_reopen(tmp_path: Path) -> None:
    """
    Verify secrets persist across store instances on same file.

    Args:
        tmp_path: Pytest temporary directory.
    Returns:
        None.
    Assumptions:
        Each write is committed before call returns.
    Raises:
        AssertionError: If secret is lost after reopen.
    Side Effects:
        Creates nested directory and SQLite file.
    """
    db_path = str(tmp_path / "nested" / "data" / "otp.db")
    first = SqliteSecretStore(db_path=db_path)
    first.save_secret_if_absent(account_name="bob@example.com", secret="JBSWY3DPEHPK3PXP")
    first.close()

    second = SqliteSecretStore(db_path=db_path)
    try:
        assert second.get_secret(account_name="bob@example.com") == "JBSWY3DPEHPK3PXP"
    finally:
        second.close()


def test_sqlite_store_requires_path() -> None:
    with pytest.raises(ValueError):
        SqliteSecretStore(db_path="  ")
