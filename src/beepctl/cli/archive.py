"""Archive command - archive or unarchive a chat."""

import rich_click as click
from rich.markup import escape

from beepctl.cli.common import ErrorHint, api_errors, console, resolve_chat_id_or_exit
from beepctl.cli.main import Context, pass_context


@click.command()
@click.argument("chat")
@click.option("--unarchive", "-u", is_flag=True, help="Unarchive the chat instead of archiving")
@click.option("--quiet", "-q", is_flag=True, help="Don't show confirmation message")
@pass_context
def archive(ctx: Context, chat: str, unarchive: bool, quiet: bool) -> None:
    """Archive or unarchive a chat.

    CHAT is a chat ID or alias.
    """
    with api_errors():
        chat_id = resolve_chat_id_or_exit(chat, ctx.config.aliases)

    archived = not unarchive
    with api_errors(ErrorHint(404, "Chat not found")):
        ctx.client.archive_chat(chat_id, archived=archived)

    if not quiet:
        action = "archived" if archived else "unarchived"
        console.print(f"[green]Chat {action} successfully![/green]")
        console.print(f"[dim]  Chat: {escape(chat_id)}[/dim]")
