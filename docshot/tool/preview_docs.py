"""
Preview capture command.

Renders one markdown document in the doc-preview tool and writes
screenshots/<name>.png. Exit status 1 when the capture fails.
"""

import logging
from typing import Annotated, Optional

import typer

from ..config import ConfigError, get_capture_settings
from ..util.logs import configure_logging
from ..util.renderer import capture_preview

logger = logging.getLogger(__name__)

USAGE = "Usage: docshot-preview <markdown-file-path>"

app = typer.Typer(add_completion=False, help="Screenshot a markdown document rendered in the doc-preview tool.")


@app.command()
def preview(
    markdown_path: Annotated[
        Optional[str], typer.Argument(help="Markdown file to render.", show_default=False)
    ] = None,
    output_dir: Annotated[
        Optional[str], typer.Option("--output-dir", help="Directory for the PNG (default: screenshots).")
    ] = None,
) -> None:
    """Capture a full-page screenshot of MARKDOWN_PATH as rendered by the preview tool."""
    if not markdown_path:
        typer.echo(USAGE, err=True)
        raise typer.Exit(1)

    try:
        settings = get_capture_settings()
    except ConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    configure_logging(settings.log_level)
    if output_dir:
        settings = settings.model_copy(update={"output_dir": output_dir})

    result = capture_preview(markdown_path, settings)
    if result["status"] != "success":
        typer.echo(f"✗ {markdown_path}: {result['error']}", err=True)
        raise typer.Exit(1)

    typer.echo(f"✓ {markdown_path}", err=True)


if __name__ == "__main__":
    app()
