"""Auth command - manage the API token."""

import rich_click as click

from beepctl.cli.common import console, fail
from beepctl.cli.main import Context, pass_context
from beepctl.core.config import (
    TOKEN_ENV,
    URL_ENV,
    BeeperConfig,
    get_config_path,
    save_config,
)
from beepctl.core.exceptions import ConfigError


@click.group()
def auth() -> None:
    """Configure authentication."""
    pass


@auth.command("set")
@click.argument("token")
@pass_context
def set_token(ctx: Context, token: str) -> None:
    """Save your Beeper API token.

    TOKEN is the access token from Beeper Desktop (Settings -> Developers).
    """
    try:
        config = ctx.config
    except ConfigError as e:
        fail(f"Error: {e}")

    config.token = token
    path = save_config(config)
    console.print("[green]Token saved![/green]")
    console.print(f"[dim]   Config: {path}[/dim]")


def _mask(token: str) -> str:
    if len(token) <= 12:
        return "*" * len(token)
    return f"{token[:8]}...{token[-4:]}"


@auth.command("show")
@pass_context
def show(ctx: Context) -> None:
    """Show current configuration."""
    try:
        config = ctx.config
    except ConfigError as e:
        fail(f"Error: {e}")

    console.print("\n[bold]Beeper CLI Configuration[/bold]\n")

    if config.env_token:
        console.print(f"  Token: [green]set[/green] [dim](from {TOKEN_ENV} env)[/dim]")
    elif config.token:
        console.print(f"  Token: [green]{_mask(config.token)}[/green]")
    else:
        console.print("  Token: [red]not set[/red]")

    if config.env_url:
        source = f"(from {URL_ENV} env)"
    elif config.base_url:
        source = ""
    else:
        source = "(default)"
    console.print(f"  URL:   [cyan]{config.resolved_base_url}[/cyan] [dim]{source}[/dim]")

    console.print(f"\n[dim]  Config file: {get_config_path(ctx.config_path)}[/dim]")


@auth.command("clear")
@pass_context
def clear(ctx: Context) -> None:
    """Clear saved token and URL (aliases are kept)."""
    path = get_config_path(ctx.config_path)
    try:
        config = ctx.config
    except ConfigError:
        # Unreadable file: start over rather than refuse to clear
        config = BeeperConfig()

    config.token = None
    config.base_url = None
    save_config(config, path)
    console.print("[yellow]Token cleared[/yellow]")
