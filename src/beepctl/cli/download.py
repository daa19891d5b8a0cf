"""Download command - fetch a message attachment."""

import shutil
from pathlib import Path
from typing import Optional
from urllib.parse import unquote, urlparse

import rich_click as click
from rich.markup import escape

from beepctl.cli.common import ErrorHint, api_errors, console, fail
from beepctl.cli.main import Context, pass_context


def _local_path(src_url: str) -> Path:
    """Turn a ``file://`` URL from the API into a filesystem path."""
    if src_url.startswith("file://"):
        return Path(unquote(urlparse(src_url).path))
    return Path(src_url)


@click.command()
@click.argument("url")
@click.option("--output", "-o", type=click.Path(dir_okay=False, path_type=Path), help="Save to specific file path")
@pass_context
def download(ctx: Context, url: str, output: Optional[Path]) -> None:
    """Download a message attachment.

    URL is a Matrix content URL (mxc:// or localmxc://) taken from a
    message's attachments.
    """
    if not url.startswith(("mxc://", "localmxc://")):
        fail(f"Invalid URL format: {url}", "URL should be mxc:// or localmxc://")

    with api_errors(ErrorHint(404, "Attachment not found")):
        result = ctx.client.download_asset(url)

    if result.get("error"):
        fail(f"Download failed: {result['error']}")

    src_url = result.get("srcURL")
    if not src_url:
        fail("No source URL returned")

    local_path = _local_path(src_url)

    if output:
        try:
            shutil.copyfile(local_path, output)
        except OSError as e:
            fail(f"Could not save attachment: {e}")
        console.print("[green]Downloaded successfully[/green]")
        console.print(f"[dim]   Saved to: {escape(str(output))}[/dim]")
    else:
        console.print("[green]Asset available locally[/green]")
        console.print(f"[dim]   Path: {escape(str(local_path))}[/dim]")
        console.print(f"[dim]   Filename: {escape(local_path.name)}[/dim]")
