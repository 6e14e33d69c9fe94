"""
Command-line tools: preview capture and screenshot publisher.
"""

from .preview_docs import preview
from .upload_screenshots import upload

__all__ = [
    "preview",
    "upload",
]
