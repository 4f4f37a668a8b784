"""Abstract ledger store interface."""

from abc import ABC, abstractmethod
from typing import Optional
from datetime import date

# Import entities directly to avoid circular import through domain/__init__.py
from ledgerimport.domain.entities import (
    AccountAssociation,
    JournalEntry,
    JournalLine,
    LedgerAccount,
)


class LedgerStore(ABC):
    """Abstract ledger store: accepts journal entries, keeps accounts and label associations."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the store."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the store."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize store schema (create tables)."""
        pass

    # Journal entry operations
    @abstractmethod
    def create_entry(
        self,
        company_id: int,
        fiscal_year_id: int,
        date: date,
        piece_reference: str,
        label: str,
        lines: list[JournalLine],
    ) -> int:
        """Create a journal entry with its lines. Returns entry ID."""
        pass

    @abstractmethod
    def get_entry(self, entry_id: int) -> Optional[JournalEntry]:
        """Get journal entry by ID."""
        pass

    @abstractmethod
    def list_entries(
        self,
        company_id: int,
        fiscal_year_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[JournalEntry]:
        """List journal entries of a company with optional filters."""
        pass

    # Account operations
    @abstractmethod
    def create_account(self, company_id: int, number: str, name: str) -> int:
        """Create a ledger account. Returns account ID."""
        pass

    @abstractmethod
    def list_accounts(self, company_id: int) -> list[LedgerAccount]:
        """List the chart of accounts of a company."""
        pass

    # Label association operations
    @abstractmethod
    def find_associations(self, company_id: int) -> list[AccountAssociation]:
        """List all label associations of a company."""
        pass

    @abstractmethod
    def get_association(self, company_id: int, label: str) -> Optional[AccountAssociation]:
        """Get the association of an exact label."""
        pass

    @abstractmethod
    def upsert_association(self, company_id: int, label: str, account_number: str) -> int:
        """Create or replace the association of a label. Returns association ID."""
        pass

    @abstractmethod
    def delete_association(self, association_id: int) -> None:
        """Delete an association by ID."""
        pass
