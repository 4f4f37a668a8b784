"""Persistence of learned label -> account associations."""

import logging
from typing import Iterable, Optional

from ledgerimport.database.base import LedgerStore
from ledgerimport.domain.entities import AccountAssociation, AssociationWrite, ImportSession
from ledgerimport.domain.errors import (
    NotFoundError,
    ValidationError,
    association_not_found,
)

logger = logging.getLogger(__name__)


def collect_association_writes(session: ImportSession) -> tuple[AssociationWrite, ...]:
    """Distinct (label, account) pairs currently assigned to real records.

    When records sharing a label carry different accounts, the last one wins.
    """
    pairs: dict[str, str] = {}
    for record in session.real_records:
        if record.is_resolved:
            pairs[record.label] = record.assigned_account
    return tuple(AssociationWrite(label=label, account_number=account) for label, account in pairs.items())


class AssociationSyncService:
    """Service for reading and writing label associations in the ledger store."""

    def __init__(self, store: LedgerStore):
        """Initialize association sync service.

        Args:
            store: Ledger store instance
        """
        self.store = store

    def load_associations(self, company_id: int) -> dict[str, str]:
        """Load a company's associations as a label -> account mapping."""
        return {a.label: a.account_number for a in self.store.find_associations(company_id)}

    def list_associations(self, company_id: int, search: Optional[str] = None) -> list[AccountAssociation]:
        """List associations, optionally keeping only labels or accounts containing a search term.

        Args:
            company_id: Company ID
            search: Case-insensitive substring matched against label and account

        Returns:
            List of association entities ordered by label
        """
        associations = self.store.find_associations(company_id)
        if not search:
            return associations
        needle = search.lower()
        return [
            a for a in associations
            if needle in a.label.lower() or needle in a.account_number.lower()
        ]

    def upsert(self, company_id: int, label: str, account_number: str) -> int:
        """Create or replace the association for a label (last write wins).

        Returns:
            Association ID

        Raises:
            ValidationError: If label or account number is empty
        """
        if not label or not label.strip():
            raise ValidationError("Association label must not be empty")
        if not account_number or not account_number.strip():
            raise ValidationError("Account number must not be empty")
        return self.store.upsert_association(company_id, label, account_number.strip())

    def flush(self, company_id: int, writes: Iterable[AssociationWrite]) -> tuple[int, int]:
        """Persist queued association writes one after another.

        A failing write is logged and skipped; in-memory assignments are left
        as they are.

        Returns:
            Tuple of (saved, failed) counts
        """
        saved = 0
        failed = 0
        for write in writes:
            try:
                self.upsert(company_id, write.label, write.account_number)
                saved += 1
            except Exception as e:
                failed += 1
                logger.error(
                    "Could not save association '%s' -> %s: %s",
                    write.label,
                    write.account_number,
                    e,
                )
        return saved, failed

    def save_all_associations(self, company_id: int, session: ImportSession) -> int:
        """Save every distinct label -> account pair assigned in a session.

        Returns:
            Number of associations saved
        """
        saved, _ = self.flush(company_id, collect_association_writes(session))
        return saved

    def rename(self, company_id: int, old_label: str, new_label: str) -> int:
        """Move an association to a new label, keeping its account.

        Raises:
            NotFoundError: If no association exists for old_label
        """
        existing = self.store.get_association(company_id, old_label)
        if existing is None:
            raise NotFoundError(association_not_found(company_id, old_label))
        if new_label == old_label:
            return existing.id

        association_id = self.upsert(company_id, new_label, existing.account_number)
        self.store.delete_association(existing.id)
        return association_id

    def reassign(self, company_id: int, labels: Iterable[str], account_number: str) -> int:
        """Point several existing labels at one account.

        Returns:
            Number of associations updated

        Raises:
            NotFoundError: If any label has no association (nothing is changed)
        """
        labels = list(dict.fromkeys(labels))
        missing = [label for label in labels if self.store.get_association(company_id, label) is None]
        if missing:
            raise NotFoundError(association_not_found(company_id, missing[0]))

        for label in labels:
            self.upsert(company_id, label, account_number)
        return len(labels)

    def delete(self, company_id: int, label: str) -> None:
        """Forget the association of a label.

        Raises:
            NotFoundError: If no association exists for label
        """
        existing = self.store.get_association(company_id, label)
        if existing is None:
            raise NotFoundError(association_not_found(company_id, label))
        self.store.delete_association(existing.id)
