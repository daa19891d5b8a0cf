"""Main CLI entry point using rich-click."""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING, Optional

import rich_click as click
from rich.console import Console
from rich.logging import RichHandler

if TYPE_CHECKING:
    from beepctl.api.client import BeeperClient
    from beepctl.core.config import BeeperConfig

# Configure rich-click
click.rich_click.SHOW_ARGUMENTS = True

# Global console for Rich output
console = Console()


# Context object to pass state between commands
class Context:
    """Per-invocation state shared by all commands.

    The config is loaded and the API client built on first use, once per
    invocation. Tests pass ``client_factory`` to swap in a client with a
    mock transport.
    """

    def __init__(
        self,
        config_path: Optional[Path] = None,
        client_factory: Optional[Callable[["BeeperConfig"], "BeeperClient"]] = None,
    ) -> None:
        self.config_path = config_path
        self.verbose: bool = False
        self.client_factory = client_factory
        self._config: Optional["BeeperConfig"] = None
        self._client: Optional["BeeperClient"] = None

    @property
    def config(self) -> "BeeperConfig":
        if self._config is None:
            from beepctl.core.config import load_config

            self._config = load_config(self.config_path)
        return self._config

    @property
    def client(self) -> "BeeperClient":
        if self._client is None:
            factory = self.client_factory
            if factory is None:
                from beepctl.api.client import BeeperClient

                factory = BeeperClient.from_config
            self._client = factory(self.config)
        return self._client

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None


pass_context = click.make_pass_decorator(Context, ensure=True)


def _configure_logging(verbose: bool) -> None:
    """Send beepctl log records to stderr; DEBUG with --verbose."""
    handler = RichHandler(console=Console(stderr=True), show_path=False)
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))

    logger = logging.getLogger("beepctl")
    logger.handlers = [handler]
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False


@click.group()
@click.option(
    "--config", "-c",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Path to configuration file (default: ~/.config/beepctl/config.json)",
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Enable verbose output",
)
@click.version_option(package_name="beepctl")
@click.pass_context
def cli(click_ctx: click.Context, config: Optional[Path], verbose: bool) -> None:
    """CLI for Beeper Desktop API - unified messaging from terminal.

    Talks to the local Beeper Desktop API (Settings -> Developers) to list
    chats and messages, send messages, search, archive and set reminders.
    """
    ctx = click_ctx.ensure_object(Context)
    if config is not None:
        ctx.config_path = config
    ctx.verbose = verbose
    click_ctx.call_on_close(ctx.close)
    _configure_logging(verbose)


# Import and register subcommands
from beepctl.cli.accounts import accounts
from beepctl.cli.alias import alias
from beepctl.cli.archive import archive
from beepctl.cli.auth import auth
from beepctl.cli.chats import chats
from beepctl.cli.contacts import contacts
from beepctl.cli.download import download
from beepctl.cli.focus import focus
from beepctl.cli.messages import messages
from beepctl.cli.reminders import reminders
from beepctl.cli.search import search
from beepctl.cli.send import send

cli.add_command(auth)
cli.add_command(alias)
cli.add_command(accounts)
cli.add_command(archive)
cli.add_command(chats)
cli.add_command(contacts)
cli.add_command(download)
cli.add_command(focus)
cli.add_command(messages)
cli.add_command(reminders)
cli.add_command(send)
cli.add_command(search)


def main() -> None:
    """Entry point for console script."""
    cli()


if __name__ == "__main__":
    main()
