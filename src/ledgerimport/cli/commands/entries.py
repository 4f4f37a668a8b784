"""Journal entry viewing commands."""

import click
from ledgerimport.cli.options import company_option
from ledgerimport.utils.date_parser import period_bounds


@click.group()
def entries_group():
    """View journal entries."""
    pass


@entries_group.command("list")
@company_option
@click.option("--fiscal-year", "fiscal_year_id", type=int, help="Only entries of this fiscal year")
@click.option("--period", help="Only entries of this month (YYYY-MM)")
@click.option("--lines", "show_lines", is_flag=True, help="Show the debit/credit lines of each entry")
@click.pass_context
def list_entries(ctx, company_id: int, fiscal_year_id: int | None, period: str | None, show_lines: bool):
    """List journal entries."""
    store = ctx.obj["store"]

    start_date = end_date = None
    if period:
        try:
            start_date, end_date = period_bounds(period)
        except ValueError as e:
            raise click.BadParameter(str(e), param_hint="--period")

    entries = store.list_entries(
        company_id, fiscal_year_id=fiscal_year_id, start_date=start_date, end_date=end_date
    )
    if not entries:
        click.echo("No entries found.")
        return

    click.echo(f"\nEntries ({len(entries)}):")
    click.echo("-" * 80)
    for entry in entries:
        total = sum(line.debit for line in entry.lines)
        click.echo(
            f"ID: {entry.id:4d} | {entry.date.isoformat()} | {entry.piece_reference:15s} | "
            f"{entry.label[:30]:30s} | {total:>10}"
        )
        if show_lines:
            for line in entry.lines:
                click.echo(f"        {line.account_number:10s} {line.debit:>10} {line.credit:>10}  {line.label}")


def register_commands(cli):
    """Register entry commands with main CLI."""
    cli.add_command(entries_group, name="entries")
