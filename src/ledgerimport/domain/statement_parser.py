"""Bank statement text parsing.

A statement export is delimited text: one header line, then ``date;label;amount``
rows with dates as ``DD-MM-YYYY[ HH:MM:SS]`` and decimal-comma amounts. Fields
follow CSV quoting, so a quoted label may contain the delimiter.
"""

import csv
import logging

from ledgerimport.domain.entities import ParseDiagnostic, ParseResult, TransactionRecord
from ledgerimport.utils.amount_parser import parse_statement_amount
from ledgerimport.utils.date_parser import parse_statement_date

logger = logging.getLogger(__name__)

EXPECTED_FIELDS = 3


def parse_statement(text: str, delimiter: str = ";") -> ParseResult:
    """Parse statement text into transaction records.

    The first non-blank line is the header and is ignored. Rows that cannot be
    turned into a record (too few fields, bad date, bad amount) are skipped and
    reported as diagnostics instead of failing the whole statement.

    Args:
        text: Raw statement contents
        delimiter: Field delimiter

    Returns:
        ParseResult with records sorted by date (input order kept on ties)
    """
    records: list[TransactionRecord] = []
    diagnostics: list[ParseDiagnostic] = []
    header_seen = False

    for line_number, line in enumerate(text.splitlines(), start=1):
        if not line.strip():
            continue
        if not header_seen:
            header_seen = True
            continue

        try:
            fields = next(csv.reader([line], delimiter=delimiter))
        except csv.Error as e:
            diagnostics.append(ParseDiagnostic(line_number=line_number, line=line, reason=str(e)))
            continue

        if len(fields) < EXPECTED_FIELDS:
            diagnostics.append(
                ParseDiagnostic(
                    line_number=line_number,
                    line=line,
                    reason=f"Expected {EXPECTED_FIELDS} fields, found {len(fields)}",
                )
            )
            continue

        raw_date, label, raw_amount = (f.strip() for f in fields[:EXPECTED_FIELDS])

        try:
            normalized_date = parse_statement_date(raw_date)
            amount = parse_statement_amount(raw_amount)
        except ValueError as e:
            diagnostics.append(ParseDiagnostic(line_number=line_number, line=line, reason=str(e)))
            continue

        records.append(
            TransactionRecord(
                id=f"line-{line_number}",
                raw_date=raw_date,
                label=label,
                amount=amount,
                normalized_date=normalized_date,
                line_number=line_number,
            )
        )

    # sorted() is stable, so same-day rows keep their statement order
    records = sorted(records, key=lambda r: r.normalized_date)

    for diagnostic in diagnostics:
        logger.warning("Skipped statement line %d: %s", diagnostic.line_number, diagnostic.reason)

    return ParseResult(records=tuple(records), diagnostics=tuple(diagnostics))
