"""Shared CLI options."""

import click

company_option = click.option(
    "--company",
    "company_id",
    type=int,
    required=True,
    envvar="LEDGERIMPORT_COMPANY_ID",
    help="Company ID (or LEDGERIMPORT_COMPANY_ID)",
)

fiscal_year_option = click.option(
    "--fiscal-year",
    "fiscal_year_id",
    type=int,
    required=True,
    envvar="LEDGERIMPORT_FISCAL_YEAR_ID",
    help="Fiscal year ID (or LEDGERIMPORT_FISCAL_YEAR_ID)",
)
