"""Piece references for produced journal entries."""

from dataclasses import replace
from typing import Iterable

from ledgerimport.domain.entities import BalancingMode, ImportSession, TransactionRecord
from ledgerimport.domain.errors import NotFoundError, ValidationError, record_not_found


def monthly_piece_reference(period_key: str) -> str:
    """Return the statement reference shared by a whole month, e.g. 'Relevé 01/2025'."""
    year, month = period_key.split("-")
    return f"Relevé {month}/{year}"


def monthly_entry_label(period_key: str) -> str:
    """Return the label of a month's journal entry."""
    year, month = period_key.split("-")
    return f"Relevé du mois de {month}/{year}"


def number_pieces(
    records: Iterable[TransactionRecord], mode: BalancingMode, start: int = 1
) -> tuple[TransactionRecord, ...]:
    """Assign a piece reference to every record.

    In monthly mode every record of a period, synthetic or not, shares the
    period's statement reference. In per-line mode real records are numbered
    with a single counter in the given order, one value per record, so the
    sequence never restarts at month boundaries. Synthetic records take no
    number in that mode.
    """
    numbered: list[TransactionRecord] = []
    counter = start

    for record in records:
        if mode == BalancingMode.MONTHLY:
            numbered.append(replace(record, piece_reference=monthly_piece_reference(record.period_key)))
        elif record.is_synthetic:
            numbered.append(record)
        else:
            numbered.append(replace(record, piece_reference=str(counter)))
            counter += 1

    return tuple(numbered)


def set_piece_reference(session: ImportSession, record_id: str, piece_reference: str) -> ImportSession:
    """Override the piece reference of a record before import.

    In per-line mode only that record changes. In monthly mode every record
    of the record's period changes, since they share the month's entry.

    Raises:
        NotFoundError: If no record has this id
        ValidationError: If piece reference is empty
    """
    record = session.get_record(record_id)
    if record is None:
        raise NotFoundError(record_not_found(record_id))
    if piece_reference is None or not piece_reference.strip():
        raise ValidationError("Piece reference must not be empty")
    piece_reference = piece_reference.strip()

    monthly = session.config.mode == BalancingMode.MONTHLY
    records = []
    for r in session.records:
        if r.id == record_id or (monthly and r.period_key == record.period_key):
            r = replace(r, piece_reference=piece_reference)
        records.append(r)
    return replace(session, records=tuple(records))
