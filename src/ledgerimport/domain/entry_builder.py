"""Assembly of balanced journal entry drafts from an import session."""

import logging
from typing import Iterable, Optional

from ledgerimport.domain.entities import (
    BalancingMode,
    ImportPlan,
    ImportSession,
    JournalEntryDraft,
    JournalLine,
    RejectedDraft,
    TransactionRecord,
)
from ledgerimport.domain.association_sync import collect_association_writes
from ledgerimport.domain.errors import UnresolvedAccountsError, unbalanced_entry
from ledgerimport.domain.periods import balance_record, balance_records_by_period, group_by_period
from ledgerimport.domain.piece_numbering import monthly_entry_label, monthly_piece_reference

logger = logging.getLogger(__name__)


def ensure_resolved(session: ImportSession) -> None:
    """Raise if any real record still has no account.

    Raises:
        UnresolvedAccountsError: Listing the distinct offending labels
    """
    labels = session.unresolved_labels
    if labels:
        raise UnresolvedAccountsError(labels)


def _record_line(record: TransactionRecord, account_number: str) -> Optional[JournalLine]:
    if record.amount == 0:
        logger.warning(
            "Dropping zero-amount line '%s' (%s) from entry", record.label, record.id
        )
        return None
    return JournalLine.from_amount(account_number, record.label, record.amount)


def build_monthly_drafts(session: ImportSession) -> tuple[list[JournalEntryDraft], list[str]]:
    """Build one draft per period: its statement lines plus the balance line.

    Returns:
        Tuple of (drafts, skipped reasons)
    """
    drafts: list[JournalEntryDraft] = []
    skipped: list[str] = []
    balances = balance_records_by_period(session.records)

    for aggregate in group_by_period(session.records):
        balance = balances.get(aggregate.period_key)
        if balance is None:
            balance = balance_record(aggregate, session.config.counterpart_account)

        lines = [_record_line(r, r.assigned_account) for r in aggregate.records]
        lines.append(
            _record_line(balance, balance.assigned_account or session.config.counterpart_account)
        )
        lines = [line for line in lines if line is not None]

        if len(lines) < 2:
            reason = f"Period {aggregate.period_key}: no non-zero amounts to post"
            logger.warning(reason)
            skipped.append(reason)
            continue

        drafts.append(
            JournalEntryDraft(
                date=aggregate.latest_date,
                piece_reference=balance.piece_reference or monthly_piece_reference(aggregate.period_key),
                label=monthly_entry_label(aggregate.period_key),
                lines=tuple(lines),
                period_key=aggregate.period_key,
            )
        )

    return drafts, skipped


def build_per_line_drafts(session: ImportSession) -> tuple[list[JournalEntryDraft], list[str]]:
    """Build one two-line draft per statement line against the counterpart account.

    Returns:
        Tuple of (drafts, skipped reasons)
    """
    drafts: list[JournalEntryDraft] = []
    skipped: list[str] = []
    counterpart = session.config.counterpart_account

    for record in session.real_records:
        line = _record_line(record, record.assigned_account)
        if line is None:
            skipped.append(f"Line {record.line_number} '{record.label}': zero amount")
            continue

        drafts.append(
            JournalEntryDraft(
                date=record.normalized_date,
                piece_reference=record.piece_reference or "",
                label=record.label,
                lines=(line, line.opposite(counterpart)),
                period_key=record.period_key,
            )
        )

    return drafts, skipped


def build_import_plan(
    session: ImportSession, known_accounts: Optional[Iterable[str]] = None
) -> ImportPlan:
    """Validate a session and build everything a confirmed import will submit.

    Args:
        session: Import session with accounts assigned
        known_accounts: Optional chart-of-accounts numbers; accounts used by the
            drafts but missing from it are reported, not rejected

    Returns:
        ImportPlan with balanced drafts, rejected drafts and skipped periods/lines

    Raises:
        UnresolvedAccountsError: If any real record has no account
    """
    ensure_resolved(session)

    if session.config.mode == BalancingMode.MONTHLY:
        drafts, skipped = build_monthly_drafts(session)
    else:
        drafts, skipped = build_per_line_drafts(session)

    accepted: list[JournalEntryDraft] = []
    rejected: list[RejectedDraft] = []
    for draft in drafts:
        if draft.is_balanced:
            accepted.append(draft)
            continue
        reason = unbalanced_entry(draft.piece_reference, draft.total_debit, draft.total_credit)
        logger.error(reason)
        rejected.append(RejectedDraft(draft=draft, reason=reason))

    unknown_accounts: list[str] = []
    if known_accounts is not None:
        known = set(known_accounts)
        for draft in accepted:
            for line in draft.lines:
                if line.account_number not in known and line.account_number not in unknown_accounts:
                    unknown_accounts.append(line.account_number)
        for number in unknown_accounts:
            logger.warning("Account %s is not in the chart of accounts", number)

    return ImportPlan(
        drafts=tuple(accepted),
        rejected=tuple(rejected),
        skipped=tuple(skipped),
        association_writes=collect_association_writes(session),
        unknown_accounts=tuple(unknown_accounts),
    )
