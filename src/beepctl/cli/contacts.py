"""Contacts command - search contacts on an account."""

import rich_click as click
from rich.markup import escape

from beepctl.cli.common import SEPARATOR, api_errors, console, print_json
from beepctl.cli.main import Context, pass_context


@click.group()
def contacts() -> None:
    """Search contacts."""
    pass


@contacts.command("search")
@click.argument("account_id")
@click.argument("query")
@click.option("--json", "as_json", is_flag=True, help="Print raw JSON")
@pass_context
def search_contacts(ctx: Context, account_id: str, query: str, as_json: bool) -> None:
    """Search contacts on a specific account.

    ACCOUNT_ID comes from 'beepctl accounts'.
    """
    with api_errors():
        users = ctx.client.search_contacts(account_id, query)

    if as_json:
        print_json(users)
        return

    if not users:
        console.print(f'[yellow]No contacts found for "{escape(query)}"[/yellow]')
        return

    console.print(f'\n[bold]Contacts matching "{escape(query)}" ({len(users)})[/bold]')
    console.print(SEPARATOR)

    for i, user in enumerate(users):
        name = user.get("fullName") or user.get("username") or user.get("id", "")
        you = " [cyan](you)[/cyan]" if user.get("isSelf") else ""
        blocked = " [red]\\[cannot message][/red]" if user.get("cannotMessage") else ""

        console.print(f"[dim]{i + 1}.[/dim] [bold]{escape(name)}[/bold]{you}{blocked}")
        console.print(f"[dim]   ID: {escape(user.get('id', ''))}[/dim]")
        if user.get("username"):
            console.print(f"[dim]   @{escape(user['username'])}[/dim]")
        if user.get("phoneNumber"):
            console.print(f"[dim]   {escape(user['phoneNumber'])}[/dim]")
        if user.get("email"):
            console.print(f"[dim]   {escape(user['email'])}[/dim]")

        if i < len(users) - 1:
            console.print(SEPARATOR)
    console.print()
