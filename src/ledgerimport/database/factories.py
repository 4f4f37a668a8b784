"""Factory functions for creating ledger store instances."""

import os
from pathlib import Path
from typing import Optional

from ledgerimport.database.sqlalchemy_db import SQLAlchemyLedgerStore

DEFAULT_LEDGER_PATH = "~/.ledgerimport/ledger.db"


def resolve_ledger_path(database_path: Optional[str] = None) -> Path:
    """Pick the ledger file: explicit path, then LEDGERIMPORT_DB_PATH, then the default.

    Missing parent directories are created so a fresh ``--db-path`` works.
    """
    path = Path(database_path or os.environ.get("LEDGERIMPORT_DB_PATH") or DEFAULT_LEDGER_PATH)
    path = path.expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def create_sqlite_ledger(database_path: Optional[str] = None) -> SQLAlchemyLedgerStore:
    """Create a SQLite ledger store instance.

    Args:
        database_path: Path to SQLite database file. If None, checks LEDGERIMPORT_DB_PATH
            environment variable, then defaults to ~/.ledgerimport/ledger.db

    Returns:
        SQLAlchemyLedgerStore instance configured for SQLite
    """
    return SQLAlchemyLedgerStore(f"sqlite:///{resolve_ledger_path(database_path)}")
