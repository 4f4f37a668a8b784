"""Ledger store layer for ledgerimport."""

from ledgerimport.database.base import LedgerStore
from ledgerimport.database.factories import create_sqlite_ledger

__all__ = ["LedgerStore", "create_sqlite_ledger"]
