"""Tests for database mappers."""

from datetime import datetime, date, UTC
from decimal import Decimal

from ledgerimport.database.models import (
    LedgerAccount as ORMLedgerAccount,
    LabelAccountMap as ORMLabelAccountMap,
    JournalEntry as ORMJournalEntry,
    JournalLine as ORMJournalLine,
)
from ledgerimport.database.mappers import (
    ledger_account_to_domain,
    association_to_domain,
    journal_entry_to_domain,
    journal_line_to_domain,
    journal_line_to_orm,
)
from ledgerimport.domain.entities import (
    AccountAssociation,
    JournalEntry,
    JournalLine,
    LedgerAccount,
)


class TestLedgerAccountMapper:
    """Tests for LedgerAccount mapper."""

    def test_ledger_account_to_domain(self):
        """Test converting ORM LedgerAccount to domain LedgerAccount."""
        created = datetime.now(UTC)
        orm_account = ORMLedgerAccount(id=3, company_id=1, number="512", name="Bank", created_at=created)

        account = ledger_account_to_domain(orm_account)

        assert isinstance(account, LedgerAccount)
        assert account == LedgerAccount(id=3, company_id=1, number="512", name="Bank", created_at=created)


class TestAssociationMapper:
    """Tests for AccountAssociation mapper."""

    def test_association_to_domain(self):
        """Test converting ORM LabelAccountMap to domain AccountAssociation."""
        updated = datetime.now(UTC)
        orm_map = ORMLabelAccountMap(
            id=7, company_id=1, label="BOLT.EU", account_number="6256", updated_at=updated
        )

        association = association_to_domain(orm_map)

        assert isinstance(association, AccountAssociation)
        assert association.id == 7
        assert association.label == "BOLT.EU"
        assert association.account_number == "6256"
        assert association.updated_at == updated


class TestJournalMappers:
    """Tests for journal entry and line mappers."""

    def test_line_to_domain_quantizes(self):
        """Test that stored amounts come back with two decimals."""
        orm_line = ORMJournalLine(
            position=0, account_number="601", label="A", debit=Decimal("50"), credit=Decimal("0")
        )

        line = journal_line_to_domain(orm_line)

        assert line == JournalLine("601", "A", Decimal("50.00"), Decimal("0.00"))
        assert line.debit.as_tuple().exponent == -2

    def test_line_to_orm(self):
        """Test converting a domain line into a new row."""
        line = JournalLine("512", "Balance 2025-01", Decimal("0.00"), Decimal("30.00"))

        orm_line = journal_line_to_orm(line, position=2)

        assert orm_line.id is None
        assert orm_line.position == 2
        assert orm_line.account_number == "512"
        assert orm_line.credit == Decimal("30.00")

    def test_entry_to_domain(self):
        """Test converting an ORM entry with its lines."""
        created = datetime.now(UTC)
        line = JournalLine("601", "A", Decimal("50.00"), Decimal("0.00"))
        orm_entry = ORMJournalEntry(
            id=1,
            company_id=1,
            fiscal_year_id=2025,
            date=date(2025, 1, 31),
            piece_reference="Relevé 01/2025",
            label="Relevé du mois de 01/2025",
            created_at=created,
            lines=[journal_line_to_orm(line, 0), journal_line_to_orm(line.opposite("512"), 1)],
        )

        entry = journal_entry_to_domain(orm_entry)

        assert isinstance(entry, JournalEntry)
        assert entry.piece_reference == "Relevé 01/2025"
        assert entry.lines == (line, line.opposite("512"))
        assert entry.created_at == created
