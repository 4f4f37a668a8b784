"""Date parsing utilities."""

import re
from datetime import date, timedelta
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

# DD-MM-YYYY, optionally followed by a time of day
STATEMENT_DATE_RE = re.compile(r"^(\d{1,2})-(\d{1,2})-(\d{4})(?:[ T]\d{1,2}:\d{2}(?::\d{2})?)?$")
PERIOD_KEY_RE = re.compile(r"^(\d{4})-(\d{2})$")


def parse_statement_date(date_str: str) -> date:
    """Parse a bank statement date into a date object.

    Supports:
    - "15-01-2025"
    - "15-01-2025 14:32:07"
    - "15-01-2025 14:32"

    The time of day, when present, is discarded.

    Args:
        date_str: Date string as exported by the bank

    Returns:
        Date object

    Raises:
        ValueError: If date string is not in DD-MM-YYYY form or is not a real date
    """
    date_str = date_str.strip()
    match = STATEMENT_DATE_RE.match(date_str)
    if not match:
        raise ValueError(f"Could not parse date '{date_str}': expected DD-MM-YYYY")

    try:
        dt = date_parser.parse(date_str, dayfirst=True)
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")

    # dateutil swaps day and month when the month is out of range
    day, month = int(match.group(1)), int(match.group(2))
    if (dt.day, dt.month) != (day, month):
        raise ValueError(f"Could not parse date '{date_str}': month must be 01-12")
    return dt.date()


def period_bounds(period_key: str) -> tuple[date, date]:
    """Get first and last day of a 'YYYY-MM' period.

    Args:
        period_key: Period string such as "2025-01"

    Returns:
        Tuple of (start_date, end_date) for the month

    Raises:
        ValueError: If period string is not recognized
    """
    match = PERIOD_KEY_RE.match(period_key.strip())
    if not match:
        raise ValueError(f"Unknown period: '{period_key}'. Expected YYYY-MM")

    year, month = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12:
        raise ValueError(f"Unknown period: '{period_key}'. Month must be 01-12")

    start_date = date(year, month, 1)
    # Last day of the month (day before first day of next month)
    end_date = start_date + relativedelta(months=1) - timedelta(days=1)
    return (start_date, end_date)
