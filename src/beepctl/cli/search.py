"""Search command - search chats and messages."""

from typing import Optional, Tuple

import rich_click as click
from rich.markup import escape
from rich.text import Text

from beepctl.cli.common import (
    SEPARATOR,
    THIN_SEP,
    api_errors,
    console,
    fail,
    format_timestamp,
    highlight_query,
    network_map,
    parse_date_or_exit,
    print_json,
    take,
)
from beepctl.cli.main import Context, pass_context
from beepctl.core.filters import CHAT_TYPES, MEDIA_TYPES, build_search_filters

# Matching chats shown above the message results
CHAT_RESULTS = 5


@click.command()
@click.argument("query", required=False, default="")
@click.option("--limit", "-l", type=int, default=20, show_default=True, help="Maximum messages to show")
@click.option("--chat", "-c", "chats", multiple=True, help="Only these chats (ID or alias, repeatable or comma-separated)")
@click.option("--account", "-a", "accounts", multiple=True, help="Only these account IDs (repeatable or comma-separated)")
@click.option("--after", help="Messages after date (e.g., '1d ago', 'yesterday')")
@click.option("--before", help="Messages before date (e.g., '1h ago', 'today')")
@click.option("--sender", help="'me', 'others', or a user ID")
@click.option("--media", "-m", multiple=True, type=click.Choice(MEDIA_TYPES), help="Require a media type (repeatable)")
@click.option("--chat-type", type=click.Choice(CHAT_TYPES), help="Only single or group chats")
@click.option("--include-muted", is_flag=True, help="Include muted chats")
@click.option("--exclude-low-priority", is_flag=True, help="Skip low-priority chats")
@click.option("--json", "as_json", is_flag=True, help="Print raw JSON")
@pass_context
def search(
    ctx: Context,
    query: str,
    limit: int,
    chats: Tuple[str, ...],
    accounts: Tuple[str, ...],
    after: Optional[str],
    before: Optional[str],
    sender: Optional[str],
    media: Tuple[str, ...],
    chat_type: Optional[str],
    include_muted: bool,
    exclude_low_priority: bool,
    as_json: bool,
) -> None:
    """Search messages across all chats.

    QUERY is matched against message text. It may be omitted when at least
    one filter is given:

        beepctl search invoice --after "1w ago" --chat work

        beepctl search --media image --sender me
    """
    date_after = parse_date_or_exit(after, "--after")
    date_before = parse_date_or_exit(before, "--before")

    with api_errors():
        params = build_search_filters(
            query,
            aliases=ctx.config.aliases,
            chats=chats,
            accounts=accounts,
            date_after=date_after,
            date_before=date_before,
            sender=sender,
            media=media,
            chat_type=chat_type,
            include_muted=include_muted,
            exclude_low_priority=exclude_low_priority,
        )

    if not params:
        fail("Provide a search query or at least one filter", "Example: beepctl search 'lunch' --after '1w ago'")

    if not as_json:
        console.print(f'[dim]Searching for "{escape(query)}"...[/dim]')

    with api_errors():
        found_messages = take(ctx.client.search_messages(params), limit)
        found_chats = (
            take(ctx.client.search_chats(params["query"]), CHAT_RESULTS)
            if "query" in params
            else []
        )
        networks = network_map(ctx.client.list_accounts()) if found_messages and not as_json else {}

    if as_json:
        print_json({"chats": found_chats, "messages": found_messages})
        return

    if not found_messages and not found_chats:
        console.print(f'[yellow]\nNo results found for "{escape(query)}"[/yellow]')
        return

    if found_chats:
        console.print(f"\n[bold]Matching Chats ({len(found_chats)})[/bold]")
        console.print(SEPARATOR)
        for i, chat in enumerate(found_chats):
            name = chat.get("title") or chat.get("description") or "Unknown"
            console.print(f"[dim]{i + 1}.[/dim] [bold]{escape(name)}[/bold]")
            console.print(f"[dim]   ID: {escape(chat.get('id', ''))}[/dim]")
            if i < len(found_chats) - 1:
                console.print(THIN_SEP)
        console.print()

    if found_messages:
        console.print(f"\n[bold]Matching Messages ({len(found_messages)})[/bold]")
        console.print(SEPARATOR)
        for i, message in enumerate(found_messages):
            sender_name = message.get("senderName") or message.get("senderID") or "unknown"
            account_id = message.get("accountID", "")
            network = networks.get(account_id) or account_id
            time = format_timestamp(message.get("timestamp"))

            console.print(
                f"[dim]{i + 1}.[/dim] [cyan]{escape(sender_name)}[/cyan] "
                f"[dim]\\[{escape(network)}] • {time}[/dim]"
            )
            console.print(Text("   ") + highlight_query(message.get("text") or "", query))
            console.print(f"[dim]   in {escape(message.get('chatID', ''))}[/dim]")
            if i < len(found_messages) - 1:
                console.print(SEPARATOR)
        console.print()
