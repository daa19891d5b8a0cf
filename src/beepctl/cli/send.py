"""Send command - send a message to a chat."""

from typing import Optional

import rich_click as click
from rich.markup import escape
from rich.panel import Panel

from beepctl.cli.common import api_errors, console, resolve_chat_id_or_exit
from beepctl.cli.main import Context, pass_context


@click.command()
@click.argument("chat")
@click.argument("message")
@click.option("--reply-to", "-r", help="Message ID to reply to")
@click.option("--dry-run", "-d", is_flag=True, help="Show what would be sent without sending")
@pass_context
def send(
    ctx: Context,
    chat: str,
    message: str,
    reply_to: Optional[str],
    dry_run: bool,
) -> None:
    """Send a message to a chat.

    CHAT is a chat ID or alias. MESSAGE is the text to send; quote it:

        beepctl send work "on my way"
    """
    with api_errors():
        chat_id = resolve_chat_id_or_exit(chat, ctx.config.aliases)

    if dry_run:
        console.print(Panel.fit("[bold]Dry Run[/bold] - message NOT sent", border_style="yellow"))
        console.print(f"[bold]Chat ID:[/bold] [cyan]{escape(chat_id)}[/cyan]")
        if reply_to:
            console.print(f"[bold]Reply to:[/bold] {escape(reply_to)}")
        console.print(f"[bold]Message:[/bold] [green]{escape(message)}[/green]")
        return

    console.print("[dim]Sending message...[/dim]")

    with api_errors():
        sent = ctx.client.send_message(chat_id, message, reply_to=reply_to)

    message_id = sent.get("pendingMessageID") or sent.get("messageID") or sent.get("id")
    console.print("\n[green]Message sent![/green]\n")
    if message_id:
        console.print(f"  ID:   [dim]{escape(str(message_id))}[/dim]")
    console.print(f"  To:   [cyan]{escape(chat_id)}[/cyan]")
    console.print(f"  Text: {escape(message)}")
