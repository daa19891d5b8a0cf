"""Chats command - list or search recent chats."""

from typing import Any, Optional

import rich_click as click
from rich.markup import escape

from beepctl.cli.common import (
    SEPARATOR,
    api_errors,
    console,
    parse_date_or_exit,
    print_json,
    take,
    truncate,
    validate_date_range_or_exit,
)
from beepctl.cli.main import Context, pass_context
from beepctl.core.filters import in_window


@click.command()
@click.option("--limit", "-l", type=int, default=20, show_default=True, help="Number of chats to show")
@click.option("--search", "-s", "query", help="Search chats by name")
@click.option("--after", help="Chats active after date (e.g., '1d ago', 'yesterday')")
@click.option("--before", help="Chats active before date (e.g., '1h ago', 'today')")
@click.option("--json", "as_json", is_flag=True, help="Print raw JSON")
@pass_context
def chats(
    ctx: Context,
    limit: int,
    query: Optional[str],
    after: Optional[str],
    before: Optional[str],
    as_json: bool,
) -> None:
    """List recent chats.

    With --search, list chats whose name matches QUERY instead.
    """
    date_after = parse_date_or_exit(after, "--after")
    date_before = parse_date_or_exit(before, "--before")
    validate_date_range_or_exit(date_after, date_before)

    with api_errors():
        source = ctx.client.search_chats(query) if query else ctx.client.list_chats()
        found = take(
            (c for c in source if in_window(c.get("lastActivity"), date_after, date_before)),
            limit,
        )

    if as_json:
        print_json(found)
        return

    if not found:
        console.print("[yellow]No chats found.[/yellow]")
        return

    title = f'Chats matching "{escape(query)}"' if query else "Recent Chats"
    console.print(f"\n[bold]{title} ({len(found)})[/bold]")
    console.print(SEPARATOR)

    for i, chat in enumerate(found):
        _print_chat(chat, i)
        if i < len(found) - 1:
            console.print(SEPARATOR)
    console.print()


def _print_chat(chat: dict[str, Any], index: int) -> None:
    name = chat.get("title") or chat.get("description") or "Unknown"
    network = chat.get("network") or chat.get("accountID") or "?"
    unread = chat.get("unreadCount")
    unread_str = f" [red]({unread} unread)[/red]" if unread else ""

    console.print(
        f"[dim]{index + 1}.[/dim] [bold]{escape(name)}[/bold] [dim]\\[{escape(network)}][/dim]{unread_str}"
    )
    console.print(f"[dim]   ID: {escape(chat.get('id', ''))}[/dim]")

    preview = (chat.get("preview") or {}).get("text")
    if preview:
        console.print(f"[dim]   > {escape(truncate(preview, 50))}[/dim]")
