"""Tests for period grouping, balance records and piece numbering."""

from datetime import date
from decimal import Decimal

import pytest

from ledgerimport.domain.entities import BalancingMode
from ledgerimport.domain.entry_builder import build_import_plan
from ledgerimport.domain.errors import NotFoundError, ValidationError
from ledgerimport.domain.periods import group_by_period, with_balance_records
from ledgerimport.domain.piece_numbering import (
    monthly_entry_label,
    monthly_piece_reference,
    number_pieces,
    set_piece_reference,
)
from ledgerimport.domain.statement_import import open_session
from ledgerimport.domain.statement_parser import parse_statement

STATEMENT = (
    "Date;Libellé;Montant\n"
    "28-01-2025;JAN LATE;-5,00\n"
    "02-01-2025;JAN EARLY;-50,00\n"
    "15-01-2025;JAN MID;20,00\n"
    "01-02-2025;FEB ONE;-7,00\n"
    "10-03-2025;MAR ONE;3,00\n"
    "11-03-2025;MAR TWO;-3,00\n"
)


@pytest.fixture
def records():
    return parse_statement(STATEMENT).records


class TestGrouping:
    """Tests for group_by_period."""

    def test_periods_in_order(self, records):
        """Test chronological period keys."""
        assert [a.period_key for a in group_by_period(records)] == ["2025-01", "2025-02", "2025-03"]

    def test_net_and_latest_date(self, records):
        """Test period aggregates."""
        january = group_by_period(records)[0]

        assert january.net == Decimal("-35.00")
        assert january.latest_date == date(2025, 1, 28)
        assert (january.year, january.month) == (2025, 1)

    def test_grouping_loses_nothing(self, records):
        """Test that flattening the groups gives back every record exactly once."""
        flattened = [r for a in group_by_period(records) for r in a.records]

        assert sorted(r.id for r in flattened) == sorted(r.id for r in records)
        assert len(flattened) == len(records)

    def test_synthetic_records_ignored(self, records):
        """Test that balance records are not grouped as statement lines."""
        with_balances = with_balance_records(records, "512")

        flattened = [r for a in group_by_period(with_balances) for r in a.records]

        assert len(flattened) == len(records)


class TestBalanceRecords:
    """Tests for monthly balance records."""

    def test_one_balance_record_per_period(self, records):
        """Test that each period is followed by its balance record."""
        result = with_balance_records(records, "512")

        assert [r.label for r in result] == [
            "JAN EARLY",
            "JAN MID",
            "JAN LATE",
            "Balance 2025-01",
            "FEB ONE",
            "Balance 2025-02",
            "MAR ONE",
            "MAR TWO",
            "Balance 2025-03",
        ]

    def test_balance_record_zeroes_the_period(self, records):
        """Test that real plus synthetic amounts sum to zero in every period."""
        result = with_balance_records(records, "512")

        totals: dict[str, Decimal] = {}
        for record in result:
            totals[record.period_key] = totals.get(record.period_key, Decimal("0")) + record.amount

        assert set(totals.values()) == {Decimal("0")}

    def test_balance_record_fields(self, records):
        """Test date, account and synthetic flag of a balance record."""
        balance = with_balance_records(records, "512")[3]

        assert balance.is_synthetic is True
        assert balance.amount == Decimal("35.00")
        assert balance.normalized_date == date(2025, 1, 28)
        assert balance.assigned_account == "512"
        assert balance.id == "balance-2025-01"

    def test_zero_net_period_still_gets_balance_record(self, records, caplog):
        """Test that a period netting to zero keeps a zero balance record."""
        result = with_balance_records(records, "512")

        march = [r for r in result if r.id == "balance-2025-03"][0]
        assert march.amount == Decimal("0")
        assert not march.amount.is_signed()
        assert "nets to zero" in caplog.text


class TestPieceNumbering:
    """Tests for number_pieces."""

    def test_reference_formats(self):
        """Test monthly reference and label strings."""
        assert monthly_piece_reference("2025-01") == "Relevé 01/2025"
        assert monthly_entry_label("2025-01") == "Relevé du mois de 01/2025"

    def test_monthly_mode_shares_reference(self, records):
        """Test that real and synthetic records of a month share one reference."""
        numbered = number_pieces(with_balance_records(records, "512"), BalancingMode.MONTHLY)

        january = [r for r in numbered if r.period_key == "2025-01"]
        assert len(january) == 4
        assert {r.piece_reference for r in january} == {"Relevé 01/2025"}
        assert numbered[-1].piece_reference == "Relevé 03/2025"

    def test_per_line_counter_strictly_increasing(self, records):
        """Test one number per real record, +1 each time, across months."""
        numbered = number_pieces(records, BalancingMode.PER_LINE)

        assert [int(r.piece_reference) for r in numbered] == list(range(1, len(records) + 1))

    def test_per_line_counter_skips_synthetic_records(self, records):
        """Test that synthetic records consume no number."""
        numbered = number_pieces(with_balance_records(records, "512"), BalancingMode.PER_LINE)

        real = [r for r in numbered if not r.is_synthetic]
        assert [r.piece_reference for r in real] == ["1", "2", "3", "4", "5", "6"]
        assert all(r.piece_reference is None for r in numbered if r.is_synthetic)


class TestPieceOverride:
    """Tests for set_piece_reference."""

    def test_per_line_override_reaches_draft(self, scenario_statement, per_line_config):
        """Test that an overridden line keeps its reference and the others keep the counter."""
        session = open_session(scenario_statement, per_line_config, {"A": "601", "B": "706"})

        updated = set_piece_reference(session, "line-2", " FAC-0042 ")

        plan = build_import_plan(updated)
        assert [d.piece_reference for d in plan.drafts] == ["FAC-0042", "2"]
        assert session.get_record("line-2").piece_reference == "1"

    def test_monthly_override_applies_to_period(self, monthly_config):
        """Test that a monthly override renames the whole month's entry only."""
        text = "h\n05-01-2025;A;-10,00\n06-01-2025;A;-5,00\n07-02-2025;A;-20,00\n"
        session = open_session(text, monthly_config, {"A": "601"})

        updated = set_piece_reference(session, "line-3", "RB-2025-01")

        january = [r for r in updated.records if r.period_key == "2025-01"]
        assert {r.piece_reference for r in january} == {"RB-2025-01"}
        plan = build_import_plan(updated)
        assert [d.piece_reference for d in plan.drafts] == ["RB-2025-01", "Relevé 02/2025"]

    def test_blank_reference_rejected(self, scenario_statement, per_line_config):
        """Test that a piece reference cannot be blank."""
        session = open_session(scenario_statement, per_line_config, {})

        with pytest.raises(ValidationError):
            set_piece_reference(session, "line-2", "  ")

    def test_unknown_record(self, scenario_statement, per_line_config):
        """Test overriding a record that doesn't exist."""
        session = open_session(scenario_statement, per_line_config, {})

        with pytest.raises(NotFoundError, match="line-99"):
            set_piece_reference(session, "line-99", "FAC-1")
