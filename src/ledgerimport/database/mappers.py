"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, making it easy to change when
the database schema changes.
"""

from decimal import Decimal

from ledgerimport.domain import entities as domain
from ledgerimport.database.models import (
    LedgerAccount as ORMLedgerAccount,
    LabelAccountMap as ORMLabelAccountMap,
    JournalEntry as ORMJournalEntry,
    JournalLine as ORMJournalLine,
)

CENT = Decimal("0.01")


def ledger_account_to_domain(orm_account: ORMLedgerAccount) -> domain.LedgerAccount:
    """Convert SQLAlchemy LedgerAccount model to domain LedgerAccount entity."""
    return domain.LedgerAccount(
        id=orm_account.id,
        company_id=orm_account.company_id,
        number=orm_account.number,
        name=orm_account.name,
        created_at=orm_account.created_at,
    )


def association_to_domain(orm_map: ORMLabelAccountMap) -> domain.AccountAssociation:
    """Convert SQLAlchemy LabelAccountMap model to domain AccountAssociation entity."""
    return domain.AccountAssociation(
        id=orm_map.id,
        company_id=orm_map.company_id,
        label=orm_map.label,
        account_number=orm_map.account_number,
        updated_at=orm_map.updated_at,
    )


def journal_line_to_domain(orm_line: ORMJournalLine) -> domain.JournalLine:
    """Convert SQLAlchemy JournalLine model to domain JournalLine entity."""
    return domain.JournalLine(
        account_number=orm_line.account_number,
        label=orm_line.label,
        debit=Decimal(orm_line.debit).quantize(CENT),
        credit=Decimal(orm_line.credit).quantize(CENT),
    )


def journal_entry_to_domain(orm_entry: ORMJournalEntry) -> domain.JournalEntry:
    """Convert SQLAlchemy JournalEntry model to domain JournalEntry entity."""
    return domain.JournalEntry(
        id=orm_entry.id,
        company_id=orm_entry.company_id,
        fiscal_year_id=orm_entry.fiscal_year_id,
        date=orm_entry.date,
        piece_reference=orm_entry.piece_reference,
        label=orm_entry.label,
        lines=tuple(journal_line_to_domain(line) for line in orm_entry.lines),
        created_at=orm_entry.created_at,
    )


def journal_line_to_orm(line: domain.JournalLine, position: int) -> ORMJournalLine:
    """Convert a domain JournalLine into a new SQLAlchemy JournalLine row."""
    return ORMJournalLine(
        position=position,
        account_number=line.account_number,
        label=line.label,
        debit=line.debit,
        credit=line.credit,
    )
