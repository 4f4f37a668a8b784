"""Shared pytest fixtures for ledgerimport tests."""

import tempfile
import os
from pathlib import Path
import pytest

from ledgerimport.database.factories import create_sqlite_ledger
from ledgerimport.domain.association_sync import AssociationSyncService
from ledgerimport.domain.entities import BalancingMode, FiscalContext, ImportConfig
from ledgerimport.domain.statement_import import StatementImportService


@pytest.fixture
def temp_db():
    """Create a temporary ledger database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create ledger store
    store = create_sqlite_ledger(database_path=db_path)
    # Store the path for tests that need it
    store.database_path = db_path
    store.connect()
    store.initialize_schema()

    yield store

    # Cleanup
    store.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def fiscal_context():
    """Company 1, fiscal year 2025."""
    return FiscalContext(company_id=1, fiscal_year_id=2025)


@pytest.fixture
def monthly_config():
    """Monthly balancing against bank account 512."""
    return ImportConfig(counterpart_account="512", mode=BalancingMode.MONTHLY)


@pytest.fixture
def per_line_config():
    """Per-line balancing against bank account 512."""
    return ImportConfig(counterpart_account="512", mode=BalancingMode.PER_LINE)


@pytest.fixture
def import_service(temp_db):
    """Create a StatementImportService with a temporary database."""
    return StatementImportService(temp_db)


@pytest.fixture
def association_service(temp_db):
    """Create an AssociationSyncService with a temporary database."""
    return AssociationSyncService(temp_db)


@pytest.fixture
def sample_chart(temp_db, fiscal_context):
    """Create a small chart of accounts for company 1."""
    for number, name in [
        ("512", "Bank"),
        ("601", "Purchases"),
        ("6251", "Travel"),
        ("6256", "Taxis"),
        ("706", "Services sold"),
    ]:
        temp_db.create_account(company_id=fiscal_context.company_id, number=number, name=name)
    return temp_db.list_accounts(fiscal_context.company_id)


@pytest.fixture
def scenario_statement():
    """Two January lines: -50.00 labeled A and +20.00 labeled B."""
    return "Date;Libellé;Montant\n10-01-2025;A;-50,00\n12-01-2025 09:15:00;B;20,00\n"


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def fixtures_dir():
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"
