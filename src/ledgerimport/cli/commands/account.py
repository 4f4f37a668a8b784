"""Chart of accounts commands."""

import click
from ledgerimport.cli.error_handling import handle_domain_error
from ledgerimport.cli.options import company_option
from ledgerimport.domain.errors import DomainError


@click.group()
def account_group():
    """Manage the chart of accounts."""
    pass


@account_group.command("create")
@click.argument("number", metavar="NUMBER")
@click.argument("name", metavar="NAME")
@company_option
@click.pass_context
def create_account(ctx, number: str, name: str, company_id: int):
    """Add an account to a company's chart of accounts.

    Examples:
        ledgerimport account create 512 "Bank" --company 1
        ledgerimport account create 6251 "Travel" --company 1
    """
    store = ctx.obj["store"]

    try:
        account_id = store.create_account(company_id=company_id, number=number, name=name)
        click.echo(f"Created account {number} '{name}' (ID: {account_id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@account_group.command("list")
@company_option
@click.pass_context
def list_accounts(ctx, company_id: int):
    """List a company's accounts."""
    store = ctx.obj["store"]

    accounts = store.list_accounts(company_id)
    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 60)
    for acc in accounts:
        click.echo(f"{acc.number:10s} | {acc.name}")


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
