"""Grouping of statement records into monthly periods and period balancing."""

import logging
from collections import defaultdict
from typing import Iterable, Optional

from ledgerimport.domain.entities import PeriodAggregate, TransactionRecord

logger = logging.getLogger(__name__)

BALANCE_LABEL = "Balance {period_key}"


def group_by_period(records: Iterable[TransactionRecord]) -> list[PeriodAggregate]:
    """Group real records by year-month.

    Synthetic records are ignored. Periods are returned in chronological order
    and each keeps its records in the order they were given.
    """
    groups: dict[str, list[TransactionRecord]] = defaultdict(list)
    for record in records:
        if record.is_synthetic:
            continue
        groups[record.period_key].append(record)

    return [
        PeriodAggregate(period_key=key, records=tuple(groups[key]))
        for key in sorted(groups)
    ]


def balance_record(aggregate: PeriodAggregate, counterpart_account: Optional[str]) -> TransactionRecord:
    """Build the synthetic record that brings a period's net to zero.

    The record is dated at the latest date in the period and pre-filled with
    the counterpart account.
    """
    net = aggregate.net
    latest = aggregate.latest_date
    if net == 0:
        # Kept so the period still shows up in the preview; dropped at build time.
        logger.warning("Period %s nets to zero; balance line has no amount", aggregate.period_key)

    return TransactionRecord(
        id=f"balance-{aggregate.period_key}",
        raw_date=latest.strftime("%d-%m-%Y"),
        label=BALANCE_LABEL.format(period_key=aggregate.period_key),
        amount=-net if net else abs(net),
        normalized_date=latest,
        assigned_account=counterpart_account,
        is_synthetic=True,
    )


def with_balance_records(
    records: Iterable[TransactionRecord], counterpart_account: Optional[str]
) -> tuple[TransactionRecord, ...]:
    """Return real records period by period, each period followed by its balance record."""
    result: list[TransactionRecord] = []
    for aggregate in group_by_period(records):
        result.extend(aggregate.records)
        result.append(balance_record(aggregate, counterpart_account))
    return tuple(result)


def balance_records_by_period(records: Iterable[TransactionRecord]) -> dict[str, TransactionRecord]:
    """Index synthetic balance records by their period key."""
    return {r.period_key: r for r in records if r.is_synthetic}
