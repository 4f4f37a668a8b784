"""CLI error handling helpers."""

import click

from ledgerimport.domain.errors import DomainError, SubmissionError, UnresolvedAccountsError


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error on stderr and exit with status 1.

    Unresolved labels are followed by a ready-to-edit ``--assign`` hint per
    label; a halted submission lists the IDs of the entries already created.
    """
    click.echo(f"Error: {error}", err=True)

    if isinstance(error, UnresolvedAccountsError):
        click.echo("Assign them with:", err=True)
        for label in error.labels:
            click.echo(f"  --assign '{label}=ACCOUNT'", err=True)
    elif isinstance(error, SubmissionError) and error.report.entry_ids:
        created = ", ".join(str(entry_id) for entry_id in error.report.entry_ids)
        click.echo(f"Entries already created: {created}", err=True)

    ctx.exit(1)
