"""Accounts command - list connected accounts."""

import rich_click as click
from rich.markup import escape
from rich.table import Table

from beepctl.cli.common import api_errors, console, print_json
from beepctl.cli.main import Context, pass_context


@click.command()
@click.option("--json", "as_json", is_flag=True, help="Print raw JSON")
@pass_context
def accounts(ctx: Context, as_json: bool) -> None:
    """List connected accounts."""
    with api_errors():
        items = ctx.client.list_accounts()

    if as_json:
        print_json(items)
        return

    if not items:
        console.print("[yellow]No accounts connected.[/yellow]")
        console.print("[dim]Make sure Beeper Desktop is running with API enabled.[/dim]")
        return

    table = Table(title=f"Connected Accounts ({len(items)})")
    table.add_column("Network", style="cyan")
    table.add_column("Name", style="bold")
    table.add_column("Account ID", style="dim")

    for account in items:
        user = account.get("user") or {}
        name = user.get("fullName") or user.get("displayText") or account.get("accountID", "")
        table.add_row(
            escape(account.get("network") or ""),
            escape(name),
            escape(account.get("accountID", "")),
        )

    console.print(table)
