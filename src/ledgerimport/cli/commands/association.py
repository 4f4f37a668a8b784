"""Label association commands."""

import click
from ledgerimport.cli.error_handling import handle_domain_error
from ledgerimport.cli.options import company_option
from ledgerimport.domain.association_sync import AssociationSyncService
from ledgerimport.domain.errors import DomainError


@click.group()
def association_group():
    """Manage learned label -> account associations."""
    pass


@association_group.command("list")
@company_option
@click.option("--search", help="Only show labels or accounts containing this text")
@click.pass_context
def list_associations(ctx, company_id: int, search: str | None):
    """List associations."""
    service = AssociationSyncService(ctx.obj["store"])

    associations = service.list_associations(company_id, search=search)
    if not associations:
        click.echo("No associations found.")
        return

    click.echo(f"\nAssociations ({len(associations)}):")
    click.echo("-" * 60)
    for assoc in associations:
        click.echo(f"{assoc.account_number:10s} | {assoc.label}")


@association_group.command("set")
@click.argument("label")
@click.argument("account_number", metavar="ACCOUNT")
@company_option
@click.pass_context
def set_association(ctx, label: str, account_number: str, company_id: int):
    """Map LABEL to ACCOUNT, replacing any previous mapping.

    Labels that start with LABEL also resolve to ACCOUNT unless a longer
    learned label matches them.

    Examples:
        ledgerimport association set "BOLT.EU" 6256 --company 1
    """
    service = AssociationSyncService(ctx.obj["store"])

    try:
        service.upsert(company_id, label, account_number)
        click.echo(f"'{label}' -> {account_number}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@association_group.command("rename")
@click.argument("old_label")
@click.argument("new_label")
@company_option
@click.pass_context
def rename_association(ctx, old_label: str, new_label: str, company_id: int):
    """Change the label of an association, keeping its account."""
    service = AssociationSyncService(ctx.obj["store"])

    try:
        service.rename(company_id, old_label, new_label)
        click.echo(f"Renamed '{old_label}' to '{new_label}'")
    except DomainError as e:
        handle_domain_error(ctx, e)


@association_group.command("reassign")
@click.argument("labels", nargs=-1, required=True)
@click.option("--account", "account_number", required=True, help="Account to map the labels to")
@company_option
@click.pass_context
def reassign_associations(ctx, labels: tuple[str, ...], account_number: str, company_id: int):
    """Map several existing labels to one account.

    Examples:
        ledgerimport association reassign "UBER" "BOLT.EU" --account 6251 --company 1
    """
    service = AssociationSyncService(ctx.obj["store"])

    try:
        count = service.reassign(company_id, labels, account_number)
        click.echo(f"{count} association{'s' if count != 1 else ''} now point to {account_number}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@association_group.command("delete")
@click.argument("label")
@company_option
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_association(ctx, label: str, company_id: int, yes: bool):
    """Forget the association of LABEL."""
    service = AssociationSyncService(ctx.obj["store"])

    if not yes and not click.confirm(f"Delete association for '{label}'?"):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete(company_id, label)
        click.echo(f"Deleted association for '{label}'")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register association commands with main CLI."""
    cli.add_command(association_group, name="association")
