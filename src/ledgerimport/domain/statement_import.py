"""Bank statement import domain service."""

import logging
from dataclasses import replace
from pathlib import Path
from typing import Mapping, Optional

from ledgerimport.database.base import LedgerStore
from ledgerimport.domain.account_resolution import prefill_accounts
from ledgerimport.domain.association_sync import AssociationSyncService
from ledgerimport.domain.entities import (
    BalancingMode,
    FiscalContext,
    ImportConfig,
    ImportPlan,
    ImportSession,
    SubmissionReport,
)
from ledgerimport.domain.entry_builder import build_import_plan
from ledgerimport.domain.periods import with_balance_records
from ledgerimport.domain.piece_numbering import number_pieces
from ledgerimport.domain.statement_parser import parse_statement

logger = logging.getLogger(__name__)


def open_session(
    text: str, config: ImportConfig, associations: Optional[Mapping[str, str]] = None
) -> ImportSession:
    """Parse a statement and prepare it for review.

    Accounts are pre-filled from the learned associations, monthly balance
    records are appended in monthly mode, and piece references are assigned.
    """
    associations = dict(associations or {})
    parsed = parse_statement(text, delimiter=config.delimiter)
    records = prefill_accounts(parsed.records, associations)

    if config.mode == BalancingMode.MONTHLY:
        records = with_balance_records(records, config.counterpart_account)

    return ImportSession(
        records=number_pieces(records, config.mode),
        config=config,
        associations=associations,
        diagnostics=parsed.diagnostics,
    )


class StatementImportService:
    """Service for turning bank statements into journal entries."""

    def __init__(self, store: LedgerStore):
        """Initialize statement import service.

        Args:
            store: Ledger store instance
        """
        self.store = store
        self.association_service = AssociationSyncService(store)

    def load_session(self, text: str, config: ImportConfig, context: FiscalContext) -> ImportSession:
        """Open a session pre-filled with the company's stored associations."""
        associations = self.association_service.load_associations(context.company_id)
        return open_session(text, config, associations)

    def load_session_from_file(
        self, statement_path: str, config: ImportConfig, context: FiscalContext
    ) -> ImportSession:
        """Open a session from a statement file.

        Raises:
            FileNotFoundError: If statement file doesn't exist
        """
        path = Path(statement_path)
        if not path.exists():
            raise FileNotFoundError(f"Statement file not found: {statement_path}")

        with open(path, "r", encoding="utf-8-sig") as f:
            text = f.read()
        return self.load_session(text, config, context)

    def prepare(self, session: ImportSession, context: FiscalContext) -> ImportPlan:
        """Build the import plan, checking accounts against the company's chart.

        Raises:
            UnresolvedAccountsError: If any statement line has no account
        """
        chart = [account.number for account in self.store.list_accounts(context.company_id)]
        # An empty chart means accounts are not managed here; skip the check
        return build_import_plan(session, known_accounts=chart or None)

    def submit(self, plan: ImportPlan, context: FiscalContext) -> SubmissionReport:
        """Submit drafts one at a time, in plan order.

        Stops at the first failure. Entries created before the failure stay
        in the ledger.
        """
        entry_ids: list[int] = []
        total = len(plan.drafts)

        for draft in plan.drafts:
            try:
                entry_id = self.store.create_entry(
                    company_id=context.company_id,
                    fiscal_year_id=context.fiscal_year_id,
                    date=draft.date,
                    piece_reference=draft.piece_reference,
                    label=draft.label,
                    lines=list(draft.lines),
                )
            except Exception as e:
                report = SubmissionReport(
                    entry_ids=tuple(entry_ids), total=total, failed_draft=draft, error=str(e)
                )
                logger.error(
                    "Submission of '%s' failed after %d of %d entries: %s",
                    draft.piece_reference,
                    report.submitted,
                    total,
                    e,
                )
                return report

            entry_ids.append(entry_id)
            logger.info("Created entry %d '%s' (%d/%d)", entry_id, draft.piece_reference, len(entry_ids), total)

        return SubmissionReport(entry_ids=tuple(entry_ids), total=total)

    def sync_pending(self, session: ImportSession, context: FiscalContext) -> ImportSession:
        """Persist associations queued by assignments and clear the queue."""
        if session.pending_writes:
            self.association_service.flush(context.company_id, session.pending_writes)
        return replace(session, pending_writes=())

    def confirm(
        self, session: ImportSession, context: FiscalContext
    ) -> tuple[ImportPlan, SubmissionReport]:
        """Validate, submit, then persist queued associations.

        Nothing is submitted when a statement line has no account.

        Raises:
            UnresolvedAccountsError: If any statement line has no account
        """
        plan = self.prepare(session, context)
        report = self.submit(plan, context)
        self.sync_pending(session, context)
        return plan, report
