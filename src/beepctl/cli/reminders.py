"""Reminders command - set and clear chat reminders."""

from datetime import datetime

import rich_click as click
from rich.markup import escape

from beepctl.cli.common import ErrorHint, api_errors, console, fail, resolve_chat_id_or_exit
from beepctl.cli.main import Context, pass_context
from beepctl.core.exceptions import InvalidTimeFormatError
from beepctl.core.timeutil import parse_future_time

TIME_EXAMPLES = "Examples: '30m', '1h', '2d', '1w', 'tomorrow', '2026-03-01T09:00'"


@click.group()
def reminders() -> None:
    """Manage chat reminders."""
    pass


@reminders.command("set")
@click.argument("chat")
@click.argument("time")
@click.option("--dismiss-on-message", "-d", is_flag=True, help="Cancel if someone messages in the chat")
@pass_context
def set_reminder(ctx: Context, chat: str, time: str, dismiss_on_message: bool) -> None:
    """Set a reminder for a chat.

    CHAT is a chat ID or alias. TIME is when to remind: 30m, 1h, 2d, 1w,
    tomorrow (9am), or an ISO date.
    """
    with api_errors():
        chat_id = resolve_chat_id_or_exit(chat, ctx.config.aliases)

    try:
        remind_at_ms = parse_future_time(time)
    except InvalidTimeFormatError as e:
        fail(str(e), TIME_EXAMPLES)

    with api_errors(ErrorHint(404, "Chat not found")):
        ctx.client.set_reminder(chat_id, remind_at_ms, dismiss_on_incoming_message=dismiss_on_message)

    remind_at = datetime.fromtimestamp(remind_at_ms / 1000)
    console.print("[green]Reminder set successfully[/green]")
    console.print(f"[dim]   Chat: {escape(chat_id)}[/dim]")
    console.print(f"[dim]   Remind at: {remind_at:%Y-%m-%d %H:%M}[/dim]")
    if dismiss_on_message:
        console.print("[dim]   Will dismiss if someone messages[/dim]")


@reminders.command("clear")
@click.argument("chat")
@pass_context
def clear_reminder(ctx: Context, chat: str) -> None:
    """Clear a reminder from a chat.

    CHAT is a chat ID or alias.
    """
    with api_errors():
        chat_id = resolve_chat_id_or_exit(chat, ctx.config.aliases)

    with api_errors(ErrorHint(404, "Chat not found")):
        ctx.client.clear_reminder(chat_id)

    console.print("[green]Reminder cleared[/green]")
    console.print(f"[dim]   Chat: {escape(chat_id)}[/dim]")
