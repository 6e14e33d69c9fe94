"""
Screenshot publisher command.

Uploads every PNG under SCREENSHOTS_DIR to S3 and prints the resulting URLs
as a single-line JSON array on stdout (for a GitHub Actions step output).
Everything else goes to stderr.
"""

import os
import json
import logging

import typer

from ..config import ConfigError, load_publish_settings
from ..util.files import find_png_files
from ..util.logs import configure_logging
from ..util.uploader import create_s3_client, publish_screenshots

logger = logging.getLogger(__name__)

app = typer.Typer(add_completion=False, help="Upload screenshots to S3 and print their URLs as JSON.")


def _report(file_path: str, outcome: dict) -> None:
    if outcome["status"] == "success":
        typer.echo(f"✓ Uploaded: {outcome['relative_path']}", err=True)
    else:
        typer.echo(f"✗ Failed to upload {file_path}: {outcome['error']}", err=True)


@app.command()
def upload() -> None:
    """Upload screenshots; configured entirely through environment variables."""
    try:
        settings = load_publish_settings()
    except ConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    configure_logging(settings.log_level)

    if not os.path.isdir(settings.screenshots_dir):
        typer.echo(f"Error: Screenshots directory not found: {settings.screenshots_dir}", err=True)
        raise typer.Exit(1)

    try:
        client = create_s3_client(settings)

        files = find_png_files(settings.screenshots_dir)
        if not files:
            logger.info("[upload] No PNG files found in %s", settings.screenshots_dir)
            typer.echo("[]")
            return

        logger.info("[upload] Found %d PNG file(s) to upload", len(files))
        result = publish_screenshots(client, settings, files, on_result=_report)
    except Exception as e:
        logger.error("[upload] Fatal error: %s", e, exc_info=True)
        typer.echo(f"Fatal error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"\nGenerated {settings.url_mode} URLs:", err=True)
    for url in result.urls:
        typer.echo(f"  {url}", err=True)
    typer.echo(json.dumps(result.urls))

    if not result.ok:
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
