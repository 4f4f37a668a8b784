"""Utility functions for ledgerimport."""

from ledgerimport.utils.date_parser import parse_statement_date, period_bounds
from ledgerimport.utils.amount_parser import parse_statement_amount

__all__ = ["parse_statement_date", "period_bounds", "parse_statement_amount"]
