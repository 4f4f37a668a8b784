"""Bank statement import command."""

import click
from ledgerimport.cli.error_handling import handle_domain_error
from ledgerimport.cli.options import company_option, fiscal_year_option
from ledgerimport.domain.account_resolution import assign_label
from ledgerimport.domain.entities import BalancingMode, FiscalContext, ImportConfig
from ledgerimport.domain.errors import DomainError, SubmissionError, UnresolvedAccountsError
from ledgerimport.domain.piece_numbering import set_piece_reference
from ledgerimport.domain.statement_import import StatementImportService


def parse_assignment(value: str) -> tuple[str, str]:
    """Split 'LABEL=ACCOUNT' on its last '='."""
    label, sep, account_number = value.rpartition("=")
    if not sep or not label or not account_number.strip():
        raise click.BadParameter(f"expected LABEL=ACCOUNT, got '{value}'", param_hint="--assign")
    return label, account_number.strip()


def parse_piece_override(value: str) -> tuple[str, str]:
    """Split 'RECORD_ID=REF' on its first '='."""
    record_id, sep, piece_reference = value.partition("=")
    if not sep or not record_id.strip() or not piece_reference.strip():
        raise click.BadParameter(f"expected RECORD_ID=REF, got '{value}'", param_hint="--piece")
    return record_id.strip(), piece_reference.strip()


def echo_preview(session) -> None:
    """Print statement lines with their ID, piece and account."""
    click.echo("\nStatement lines:")
    click.echo("-" * 80)
    for record in session.records:
        account = record.assigned_account or "??"
        marker = "*" if record.is_synthetic else " "
        click.echo(
            f"{marker}{record.id:16s} | {record.normalized_date.isoformat()} | {record.piece_reference or '':15s} | "
            f"{record.label[:30]:30s} | {record.amount:>10} | {account}"
        )


@click.command("import")
@click.argument("csv_file", type=click.Path(exists=True))
@company_option
@fiscal_year_option
@click.option(
    "--counterpart",
    required=True,
    envvar="LEDGERIMPORT_COUNTERPART",
    help="Account the statement lines are balanced against, e.g. 512",
)
@click.option(
    "--mode",
    type=click.Choice([m.value for m in BalancingMode]),
    default=BalancingMode.MONTHLY.value,
    show_default=True,
    help="One entry per month, or one entry per statement line",
)
@click.option("--delimiter", default=";", show_default=True, help="Field delimiter")
@click.option(
    "--assign",
    "assignments",
    multiple=True,
    help="Assign an account to a label before importing (LABEL=ACCOUNT, repeatable)",
)
@click.option(
    "--piece",
    "piece_overrides",
    multiple=True,
    help="Override the piece reference of a statement line (RECORD_ID=REF, repeatable)",
)
@click.option("--dry-run", is_flag=True, help="Show the entries without submitting them")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.option(
    "--save-associations",
    is_flag=True,
    help="After importing, remember the account of every imported label",
)
@click.pass_context
def import_statement(
    ctx,
    csv_file: str,
    company_id: int,
    fiscal_year_id: int,
    counterpart: str,
    mode: str,
    delimiter: str,
    assignments: tuple[str, ...],
    piece_overrides: tuple[str, ...],
    dry_run: bool,
    yes: bool,
    save_associations: bool,
):
    """Import a bank statement as journal entries.

    The statement is a delimited file with a header line followed by
    date;label;amount rows (DD-MM-YYYY dates, decimal-comma amounts).

    Examples:
        ledgerimport import releve.csv --company 1 --fiscal-year 3 --counterpart 512
        ledgerimport import releve.csv --company 1 --fiscal-year 3 --counterpart 512 \\
            --mode per-line --assign "BOLT.EU=6256"
        ledgerimport import releve.csv --company 1 --fiscal-year 3 --counterpart 512 \\
            --mode per-line --piece line-2=FAC-0042
    """
    store = ctx.obj["store"]
    service = StatementImportService(store)
    context = FiscalContext(company_id=company_id, fiscal_year_id=fiscal_year_id)
    parsed_assignments = [parse_assignment(value) for value in assignments]
    parsed_pieces = [parse_piece_override(value) for value in piece_overrides]

    try:
        config = ImportConfig(counterpart_account=counterpart, mode=mode, delimiter=delimiter)
        session = service.load_session_from_file(csv_file, config, context)
        for label, account_number in parsed_assignments:
            session = assign_label(session, label, account_number)
        for record_id, piece_reference in parsed_pieces:
            session = set_piece_reference(session, record_id, piece_reference)
    except (DomainError, FileNotFoundError) as e:
        handle_domain_error(ctx, e)

    if session.diagnostics:
        click.echo(f"Skipped {len(session.diagnostics)} line{'s' if len(session.diagnostics) != 1 else ''}:", err=True)
        for diagnostic in session.diagnostics:
            click.echo(f"  Line {diagnostic.line_number}: {diagnostic.reason}", err=True)

    echo_preview(session)

    try:
        plan = service.prepare(session, context)
    except UnresolvedAccountsError as e:
        # Assignments given on the command line are still worth keeping
        service.sync_pending(session, context)
        handle_domain_error(ctx, e)

    click.echo(f"\n{len(plan.drafts)} entr{'ies' if len(plan.drafts) != 1 else 'y'} ready ({config.mode.value} mode)")
    for reason in plan.skipped:
        click.echo(f"  Skipped: {reason}")
    for account_number in plan.unknown_accounts:
        click.echo(f"  Warning: account {account_number} is not in the chart of accounts")
    for rejected in plan.rejected:
        click.echo(f"  Rejected: {rejected.reason}", err=True)

    if dry_run:
        click.echo("Dry run: nothing submitted.")
        return

    if not plan.drafts:
        click.echo("Nothing to import.")
        return

    if not yes and not click.confirm(f"Import {len(plan.drafts)} entries?"):
        click.echo("Import cancelled.")
        return

    report = service.submit(plan, context)
    service.sync_pending(session, context)
    if save_associations:
        saved = service.association_service.save_all_associations(company_id, session)
        click.echo(f"Saved {saved} association{'s' if saved != 1 else ''}")

    if not report.succeeded:
        handle_domain_error(ctx, SubmissionError(report))

    click.echo("\nImport complete:")
    click.echo(f"  Created: {report.submitted} entries")
    if plan.rejected:
        click.echo(f"  Rejected: {len(plan.rejected)} unbalanced entries", err=True)
        ctx.exit(1)


def register_commands(cli):
    """Register import command with main CLI."""
    cli.add_command(import_statement)
