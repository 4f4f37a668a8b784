"""SQLAlchemy models for the ledger database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


class LedgerAccount(Base):
    """Chart-of-accounts model."""

    __tablename__ = "ledger_accounts"

    id = Column(Integer, primary_key=True)
    company_id = Column(Integer, nullable=False, index=True)
    number = Column(String, nullable=False)
    name = Column(String, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    __table_args__ = (UniqueConstraint("company_id", "number", name="uq_company_account_number"),)


class LabelAccountMap(Base):
    """Learned label -> account association model."""

    __tablename__ = "label_account_maps"

    id = Column(Integer, primary_key=True)
    company_id = Column(Integer, nullable=False, index=True)
    label = Column(String, nullable=False)
    account_number = Column(String, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)
    updated_at = Column(
        DateTime,
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
        nullable=False,
    )

    __table_args__ = (UniqueConstraint("company_id", "label", name="uq_company_label"),)


class JournalEntry(Base):
    """Journal entry model."""

    __tablename__ = "journal_entries"

    id = Column(Integer, primary_key=True)
    company_id = Column(Integer, nullable=False, index=True)
    fiscal_year_id = Column(Integer, nullable=False)
    date = Column(Date, nullable=False)
    piece_reference = Column(String, nullable=False)
    label = Column(String, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    lines = relationship(
        "JournalLine",
        back_populates="entry",
        cascade="all, delete-orphan",
        order_by="JournalLine.position",
    )


class JournalLine(Base):
    """Journal line model."""

    __tablename__ = "journal_lines"

    id = Column(Integer, primary_key=True)
    entry_id = Column(Integer, ForeignKey("journal_entries.id"), nullable=False)
    position = Column(Integer, nullable=False)
    account_number = Column(String, nullable=False)
    label = Column(String, nullable=False)
    debit = Column(Numeric(12, 2), nullable=False)
    credit = Column(Numeric(12, 2), nullable=False)

    # Relationships
    entry = relationship("JournalEntry", back_populates="lines")


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
