"""Messages command - list messages from a chat."""

from typing import Any, Optional

import rich_click as click
from rich.markup import escape

from beepctl.cli.common import (
    SEPARATOR,
    api_errors,
    console,
    format_size,
    format_timestamp,
    network_map,
    parse_date_or_exit,
    print_json,
    resolve_chat_id_or_exit,
    take,
    validate_date_range_or_exit,
)
from beepctl.cli.main import Context, pass_context
from beepctl.core.filters import in_window

_ATTACHMENT_LABELS = {"img": "img", "video": "vid", "audio": "aud"}


@click.command()
@click.argument("chat")
@click.option("--limit", "-l", type=int, default=20, show_default=True, help="Maximum messages to show")
@click.option("--after", help="Messages after date (e.g., '1d ago', 'yesterday')")
@click.option("--before", help="Messages before date (e.g., '1h ago', 'today')")
@click.option("--json", "as_json", is_flag=True, help="Print raw JSON")
@pass_context
def messages(
    ctx: Context,
    chat: str,
    limit: int,
    after: Optional[str],
    before: Optional[str],
    as_json: bool,
) -> None:
    """List messages from a specific chat.

    CHAT is a chat ID or alias.
    """
    with api_errors():
        chat_id = resolve_chat_id_or_exit(chat, ctx.config.aliases)

    date_after = parse_date_or_exit(after, "--after")
    date_before = parse_date_or_exit(before, "--before")
    validate_date_range_or_exit(date_after, date_before)

    if not as_json:
        filters = []
        if after:
            filters.append(f"after: {after}")
        if before:
            filters.append(f"before: {before}")
        suffix = f" [dim]\\[{escape(', '.join(filters))}][/dim]" if filters else ""
        console.print(f"[dim]Listing messages from chat {escape(chat_id)}[/dim]{suffix}")

    with api_errors():
        networks = {} if as_json else network_map(ctx.client.list_accounts())
        found = take(
            (
                m
                for m in ctx.client.list_messages(chat_id)
                if in_window(m.get("timestamp"), date_after, date_before)
            ),
            limit,
        )

    if as_json:
        print_json(found)
        return

    if not found:
        console.print(f"[yellow]\nNo messages found in chat {escape(chat_id)}[/yellow]")
        if after or before:
            console.print("[dim]   Try adjusting the date filters[/dim]")
        return

    console.print(f"\n[bold]Messages ({len(found)})[/bold]")
    console.print(SEPARATOR)

    for i, message in enumerate(found):
        print_message(message, i, networks)
        if i < len(found) - 1:
            console.print(SEPARATOR)
    console.print()


def print_message(message: dict[str, Any], index: int, networks: dict[str, str]) -> None:
    """Print one message with its attachments and reactions."""
    sender = message.get("senderName") or message.get("senderID") or "unknown"
    account_id = message.get("accountID", "")
    network = networks.get(account_id) or account_id
    time = format_timestamp(message.get("timestamp"))

    console.print(
        f"[dim]{index + 1}.[/dim] [cyan]{escape(sender)}[/cyan] "
        f"[dim]\\[{escape(network)}] • {time}[/dim]"
    )
    text = message.get("text")
    console.print(f"   {escape(text)}" if text else "   [dim]\\[no text][/dim]")

    for attachment in message.get("attachments") or []:
        kind = attachment.get("type")
        label = _ATTACHMENT_LABELS.get(kind, "att")
        size = attachment.get("fileSize")
        size_str = f" ({format_size(size)})" if size else ""
        name = attachment.get("fileName") or kind or "attachment"
        console.print(f"[dim]   {label} {escape(name)}{size_str}[/dim]")

    reactions = message.get("reactions") or []
    if reactions:
        keys = " ".join(r.get("reactionKey", "") for r in reactions)
        console.print(f"[dim]   {escape(keys)}[/dim]")
