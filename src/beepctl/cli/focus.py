"""Focus command - bring Beeper Desktop to the foreground."""

from typing import Optional

import rich_click as click
from rich.markup import escape

from beepctl.cli.common import api_errors, console, fail, resolve_chat_id_or_exit
from beepctl.cli.main import Context, pass_context


@click.command()
@click.argument("chat", required=False)
@click.option("--message", "-m", "message_id", help="Jump to specific message")
@click.option("--draft", "-d", help="Pre-fill draft text")
@click.option("--attachment", "-a", help="Pre-fill draft attachment")
@pass_context
def focus(
    ctx: Context,
    chat: Optional[str],
    message_id: Optional[str],
    draft: Optional[str],
    attachment: Optional[str],
) -> None:
    """Bring Beeper Desktop to foreground.

    If CHAT (chat ID or alias) is given, that chat is opened.
    """
    chat_id = None
    if chat:
        with api_errors():
            chat_id = resolve_chat_id_or_exit(chat, ctx.config.aliases)

    with api_errors():
        result = ctx.client.focus(
            chat_id=chat_id,
            message_id=message_id,
            draft_text=draft,
            draft_attachment_path=attachment,
        )

    if not result.get("success"):
        fail("Failed to focus Beeper Desktop")

    console.print("[green]Beeper Desktop focused[/green]")
    if chat_id:
        console.print(f"[dim]   Chat: {escape(chat_id)}[/dim]")
