"""Domain model entities for ledgerimport.

These are pure data classes representing bookkeeping concepts, independent of
the ledger store schema. Records and sessions are immutable: every change in
an import session produces a new value instead of mutating the old one.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional

from ledgerimport.domain.errors import ValidationError

CENT = Decimal("0.01")
BALANCE_TOLERANCE = Decimal("0.01")


class BalancingMode(str, Enum):
    """How statement lines are balanced against the counterpart account."""

    MONTHLY = "monthly"
    PER_LINE = "per-line"


@dataclass(frozen=True)
class LedgerAccount:
    """Chart-of-accounts entry for a company."""

    id: int
    company_id: int
    number: str
    name: str
    created_at: datetime


@dataclass(frozen=True)
class AccountAssociation:
    """Learned mapping from an exact transaction label to an account number."""

    company_id: int
    label: str
    account_number: str
    id: Optional[int] = None
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class TransactionRecord:
    """One statement line, or a synthetic balance line generated for a period."""

    id: str
    raw_date: str
    label: str
    amount: Decimal
    normalized_date: date
    line_number: Optional[int] = None
    assigned_account: Optional[str] = None
    piece_reference: Optional[str] = None
    is_synthetic: bool = False

    @property
    def period_key(self) -> str:
        """Year-month key, e.g. '2025-01'."""
        return self.normalized_date.strftime("%Y-%m")

    @property
    def is_resolved(self) -> bool:
        return self.assigned_account is not None


@dataclass(frozen=True)
class ParseDiagnostic:
    """A data line that was skipped during parsing, and why."""

    line_number: int
    line: str
    reason: str


@dataclass(frozen=True)
class ParseResult:
    """Valid records plus diagnostics for every skipped line."""

    records: tuple[TransactionRecord, ...]
    diagnostics: tuple[ParseDiagnostic, ...] = ()

    @property
    def skipped_count(self) -> int:
        return len(self.diagnostics)


@dataclass(frozen=True)
class PeriodAggregate:
    """Real records of one calendar month and their net signed sum."""

    period_key: str
    records: tuple[TransactionRecord, ...]

    @property
    def net(self) -> Decimal:
        return sum((r.amount for r in self.records), Decimal("0.00"))

    @property
    def latest_date(self) -> date:
        return max(r.normalized_date for r in self.records)

    @property
    def year(self) -> int:
        return int(self.period_key[:4])

    @property
    def month(self) -> int:
        return int(self.period_key[5:7])


@dataclass(frozen=True)
class JournalLine:
    """One debit or credit posting.

    Exactly one of debit/credit is positive, the other is zero.
    """

    account_number: str
    label: str
    debit: Decimal
    credit: Decimal

    def __post_init__(self):
        if self.debit < 0 or self.credit < 0:
            raise ValidationError(
                f"Journal line on {self.account_number} has a negative amount"
            )
        if (self.debit > 0) == (self.credit > 0):
            raise ValidationError(
                f"Journal line on {self.account_number} must carry exactly one of debit "
                f"or credit (got debit={self.debit}, credit={self.credit})"
            )

    @classmethod
    def from_amount(cls, account_number: str, label: str, amount: Decimal) -> "JournalLine":
        """Post a signed statement amount.

        Negative amounts are debits on the account, others are credits.
        """
        value = abs(amount).quantize(CENT)
        if amount < 0:
            return cls(account_number=account_number, label=label, debit=value, credit=Decimal("0.00"))
        return cls(account_number=account_number, label=label, debit=Decimal("0.00"), credit=value)

    def opposite(self, account_number: str) -> "JournalLine":
        """Return the mirrored posting on another account."""
        return JournalLine(
            account_number=account_number,
            label=self.label,
            debit=self.credit,
            credit=self.debit,
        )


@dataclass(frozen=True)
class JournalEntryDraft:
    """A dated, referenced group of lines ready for the ledger store."""

    date: date
    piece_reference: str
    label: str
    lines: tuple[JournalLine, ...]
    period_key: Optional[str] = None

    @property
    def total_debit(self) -> Decimal:
        return sum((line.debit for line in self.lines), Decimal("0.00"))

    @property
    def total_credit(self) -> Decimal:
        return sum((line.credit for line in self.lines), Decimal("0.00"))

    @property
    def is_balanced(self) -> bool:
        return abs(self.total_debit - self.total_credit) <= BALANCE_TOLERANCE


@dataclass(frozen=True)
class JournalEntry:
    """A journal entry as stored in the ledger."""

    id: int
    company_id: int
    fiscal_year_id: int
    date: date
    piece_reference: str
    label: str
    lines: tuple[JournalLine, ...]
    created_at: datetime


@dataclass(frozen=True)
class ImportConfig:
    """Settings for one statement import session."""

    counterpart_account: str
    mode: BalancingMode = BalancingMode.MONTHLY
    delimiter: str = ";"

    def __post_init__(self):
        if not self.counterpart_account or not self.counterpart_account.strip():
            raise ValidationError("A counterpart account is required")
        if len(self.delimiter) != 1:
            raise ValidationError("Field delimiter must be a single character")
        # Accept plain strings such as "per-line" from the CLI
        object.__setattr__(self, "mode", BalancingMode(self.mode))
        object.__setattr__(self, "counterpart_account", self.counterpart_account.strip())


@dataclass(frozen=True)
class FiscalContext:
    """Company and fiscal year every created entry belongs to."""

    company_id: int
    fiscal_year_id: int


@dataclass(frozen=True)
class AssociationWrite:
    """A label -> account mapping waiting to be persisted."""

    label: str
    account_number: str


@dataclass(frozen=True)
class ImportSession:
    """State of one statement import, from parsing to confirmation."""

    records: tuple[TransactionRecord, ...]
    config: ImportConfig
    associations: dict[str, str] = field(default_factory=dict)
    pending_writes: tuple[AssociationWrite, ...] = ()
    diagnostics: tuple[ParseDiagnostic, ...] = ()

    @property
    def real_records(self) -> list[TransactionRecord]:
        return [r for r in self.records if not r.is_synthetic]

    @property
    def balance_records(self) -> list[TransactionRecord]:
        return [r for r in self.records if r.is_synthetic]

    @property
    def unresolved_labels(self) -> list[str]:
        """Distinct labels of real records without an account, in input order."""
        labels: list[str] = []
        for record in self.real_records:
            if not record.is_resolved and record.label not in labels:
                labels.append(record.label)
        return labels

    def get_record(self, record_id: str) -> Optional[TransactionRecord]:
        for record in self.records:
            if record.id == record_id:
                return record
        return None


@dataclass(frozen=True)
class RejectedDraft:
    """A built draft that failed the balance check and will not be submitted."""

    draft: JournalEntryDraft
    reason: str


@dataclass(frozen=True)
class ImportPlan:
    """Everything a confirmed session will do to the ledger store."""

    drafts: tuple[JournalEntryDraft, ...]
    rejected: tuple[RejectedDraft, ...] = ()
    skipped: tuple[str, ...] = ()
    association_writes: tuple[AssociationWrite, ...] = ()
    unknown_accounts: tuple[str, ...] = ()


@dataclass(frozen=True)
class SubmissionReport:
    """Outcome of sequentially submitting an import plan."""

    entry_ids: tuple[int, ...]
    total: int
    failed_draft: Optional[JournalEntryDraft] = None
    error: Optional[str] = None

    @property
    def submitted(self) -> int:
        return len(self.entry_ids)

    @property
    def not_attempted(self) -> int:
        """Drafts never sent because an earlier submission failed."""
        if self.failed_draft is None:
            return 0
        return self.total - self.submitted - 1

    @property
    def succeeded(self) -> bool:
        return self.failed_draft is None and self.submitted == self.total
