"""
Command-line entry point for docshot.

    docshot preview docs/resources/bucket.md
    docshot upload
"""

import typer

from .tool.preview_docs import preview
from .tool.upload_screenshots import upload

app = typer.Typer(
    name="docshot",
    add_completion=False,
    help="Capture documentation previews and publish the screenshots to S3.",
)

app.command("preview")(preview)
app.command("upload")(upload)


if __name__ == "__main__":
    app()
