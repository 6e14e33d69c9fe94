"""
Utility functions: Playwright preview capture, screenshot discovery and S3 uploader.
"""

from .files import find_png_files
from .renderer import capture_preview, screenshot_path
from .uploader import (
    PublishResult,
    build_object_key,
    create_s3_client,
    public_url,
    publish_screenshots,
    upload_screenshot,
)

__all__ = [
    "find_png_files",
    "capture_preview",
    "screenshot_path",
    "PublishResult",
    "build_object_key",
    "create_s3_client",
    "public_url",
    "publish_screenshots",
    "upload_screenshot",
]
