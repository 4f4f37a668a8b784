"""Mapping of transaction labels to ledger accounts.

Associations are learned per company from explicit user assignments. A label
resolves to the account of an identical learned label, or failing that to the
account of the longest learned label it starts with: merchant labels often
carry a stable code followed by a variable suffix (city, transaction id).
"""

import logging
from dataclasses import replace
from typing import Mapping, Optional

from ledgerimport.domain.entities import AssociationWrite, ImportSession, TransactionRecord
from ledgerimport.domain.errors import NotFoundError, ValidationError, record_not_found

logger = logging.getLogger(__name__)


def resolve_account(associations: Mapping[str, str], label: str) -> Optional[str]:
    """Resolve a transaction label to an account number.

    Args:
        associations: Learned label -> account number mapping
        label: Transaction label as it appears in the statement

    Returns:
        Account number, or None if no learned label matches
    """
    if label in associations:
        return associations[label]

    best_key: Optional[str] = None
    for key in associations:
        if key and label.startswith(key) and (best_key is None or len(key) > len(best_key)):
            best_key = key

    if best_key is None:
        return None

    logger.debug("Label '%s' resolved by prefix '%s'", label, best_key)
    return associations[best_key]


def prefill_accounts(
    records: tuple[TransactionRecord, ...], associations: Mapping[str, str]
) -> tuple[TransactionRecord, ...]:
    """Fill in accounts for real records that don't have one yet."""
    result = []
    for record in records:
        if record.is_synthetic or record.is_resolved:
            result.append(record)
            continue
        result.append(replace(record, assigned_account=resolve_account(associations, record.label)))
    return tuple(result)


def _clean_account(account_number: str) -> str:
    if account_number is None or not str(account_number).strip():
        raise ValidationError("Account number must not be empty")
    return str(account_number).strip()


def assign_label(session: ImportSession, label: str, account_number: str) -> ImportSession:
    """Assign an account to every real record carrying exactly this label.

    The association is learned for future resolution and queued for
    persistence. Synthetic balance records are never touched.

    Args:
        session: Current import session
        label: Exact transaction label
        account_number: Account to assign

    Returns:
        New session with the assignment applied

    Raises:
        ValidationError: If account number is empty
    """
    account_number = _clean_account(account_number)

    records = tuple(
        replace(r, assigned_account=account_number)
        if not r.is_synthetic and r.label == label
        else r
        for r in session.records
    )
    associations = {**session.associations, label: account_number}
    write = AssociationWrite(label=label, account_number=account_number)

    return replace(
        session,
        records=records,
        associations=associations,
        pending_writes=session.pending_writes + (write,),
    )


def assign_record(session: ImportSession, record_id: str, account_number: str) -> ImportSession:
    """Assign an account starting from one record of the session.

    For a real record this behaves like :func:`assign_label` with its label.
    For a synthetic balance record only that record changes, and nothing is
    learned.

    Raises:
        NotFoundError: If no record has this id
        ValidationError: If account number is empty
    """
    record = session.get_record(record_id)
    if record is None:
        raise NotFoundError(record_not_found(record_id))

    if not record.is_synthetic:
        return assign_label(session, record.label, account_number)

    account_number = _clean_account(account_number)
    records = tuple(
        replace(r, assigned_account=account_number) if r.id == record_id else r
        for r in session.records
    )
    return replace(session, records=records)
