"""Alias command - manage chat aliases."""

import rich_click as click
from rich.markup import escape
from rich.table import Table

from beepctl.cli.common import console, fail
from beepctl.cli.main import Context, pass_context
from beepctl.core.aliases import is_valid_alias_name, is_valid_chat_id
from beepctl.core.config import BeeperConfig, save_config
from beepctl.core.exceptions import ConfigError


def _load(ctx: Context) -> BeeperConfig:
    try:
        return ctx.config
    except ConfigError as e:
        fail(f"Error: {e}")


@click.group(invoke_without_command=True)
@click.pass_context
def alias(click_ctx: click.Context) -> None:
    """Manage chat aliases.

    Aliases are short names for chat IDs and can be used anywhere a chat
    ID is expected. Without a subcommand, lists all aliases.
    """
    if click_ctx.invoked_subcommand is None:
        click_ctx.invoke(list_aliases)


@alias.command("list")
@pass_context
def list_aliases(ctx: Context) -> None:
    """List all aliases."""
    aliases = _load(ctx).aliases

    if not aliases:
        console.print("[dim]No aliases configured.[/dim]")
        console.print("[dim]Add one with: beepctl alias add <name> <chat-id>[/dim]")
        return

    table = Table(title="Configured Aliases")
    table.add_column("Alias", style="green")
    table.add_column("Chat ID", style="cyan")

    for name, chat_id in aliases.items():
        table.add_row(escape(name), escape(chat_id))

    console.print(table)


@alias.command("add")
@click.argument("name")
@click.argument("chat_id")
@pass_context
def add(ctx: Context, name: str, chat_id: str) -> None:
    """Add or update an alias.

    NAME may contain letters, digits and underscores. CHAT_ID must start
    with '!'.
    """
    if not is_valid_alias_name(name):
        fail("Alias name must be alphanumeric (underscores allowed, no spaces)")

    if not is_valid_chat_id(chat_id):
        fail("Chat ID must start with '!' (e.g., !abc123:beeper.local)")

    config = _load(ctx)

    if name in config.aliases:
        console.print(
            f"[yellow]Alias '{name}' already exists ({escape(config.aliases[name])}). "
            "Overwriting...[/yellow]"
        )

    config.aliases[name] = chat_id
    save_config(config)
    console.print(f"[green]Alias '{name}' -> '{escape(chat_id)}' saved[/green]")


@alias.command("remove")
@click.argument("name")
@pass_context
def remove(ctx: Context, name: str) -> None:
    """Remove an alias."""
    config = _load(ctx)

    if name not in config.aliases:
        fail(f"Alias '{name}' not found")

    del config.aliases[name]
    save_config(config)
    console.print(f"[yellow]Alias '{escape(name)}' removed[/yellow]")


@alias.command("show")
@click.argument("name")
@pass_context
def show(ctx: Context, name: str) -> None:
    """Show a specific alias."""
    config = _load(ctx)

    if name not in config.aliases:
        fail(f"Alias '{name}' not found")

    console.print(f"\n[bold]Alias: {escape(name)}[/bold]\n")
    console.print(f"  Chat ID: [cyan]{escape(config.aliases[name])}[/cyan]")
