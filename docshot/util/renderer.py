"""
Playwright preview capture.

Renders a markdown document through the hosted doc-preview tool and saves a
full-page PNG screenshot:
- one headless Chromium session per document, always closed;
- the optional consent overlay and the rendered-content wait are best effort;
- anything else (read, navigation, screenshot) fails the capture.

Uses headless Chromium, Docker-compatible.
"""

import os
import logging

from playwright.sync_api import (
    Error as PlaywrightError,
    TimeoutError as PlaywrightTimeoutError,
    sync_playwright,
)

from ..config import CaptureSettings, get_capture_settings

logger = logging.getLogger(__name__)

CLOSE_BUTTON_SELECTOR = 'button[aria-label="Close"]'
# English and Japanese variants of the consent banner
ACCEPT_ALL_SELECTOR = 'button:has-text("Accept All"), button:has-text("すべて承認")'
EDITOR_SELECTOR = "textarea"
RENDERED_CONTENT_SELECTOR = ".g-type-display-1, h1, .markdown-body"

_CHROMIUM_ARGS = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-gpu",
]


def screenshot_path(markdown_path: str, output_dir: str) -> str:
    """Return <output_dir>/<basename without extension>.png for a document."""
    stem, _ = os.path.splitext(os.path.basename(markdown_path))
    return os.path.join(output_dir, f"{stem}.png")


def _read_document(markdown_path: str) -> str:
    with open(markdown_path, "r", encoding="utf-8") as f:
        return f.read()


def _dismiss_consent_overlay(page, settings: CaptureSettings) -> bool:
    """
    Close the privacy/consent overlay if one shows up.

    Tries the close icon first, then the "accept all" button, each with its
    own bounded wait, then pauses for the overlay to go away. Playwright
    errors here are logged and never fail the capture. Returns True when
    something was clicked.
    """
    candidates = (
        ("close", CLOSE_BUTTON_SELECTOR),
        ("accept-all", ACCEPT_ALL_SELECTOR),
    )
    dismissed = False
    for name, selector in candidates:
        locator = page.locator(selector).first
        try:
            locator.wait_for(state="visible", timeout=settings.overlay_timeout_ms)
        except PlaywrightTimeoutError:
            continue
        except PlaywrightError as e:
            logger.info("[renderer] Overlay %s button lookup failed: %s", name, e)
            continue
        try:
            locator.click()
        except PlaywrightError as e:
            logger.info("[renderer] Overlay %s button not clickable: %s", name, e)
            continue
        logger.debug("[renderer] Overlay dismissed via %s button", name)
        dismissed = True
        break

    if not dismissed:
        logger.info("[renderer] Privacy modal not found or already closed")
    page.wait_for_timeout(settings.overlay_settle_ms)
    return dismissed


def _wait_for_preview(page, settings: CaptureSettings) -> bool:
    """Wait for rendered output. Returns False when the fixed fallback wait was used."""
    try:
        page.wait_for_selector(RENDERED_CONTENT_SELECTOR, timeout=settings.render_timeout_ms)
        page.wait_for_timeout(settings.render_settle_ms)
        return True
    except PlaywrightTimeoutError:
        logger.info(
            "[renderer] Preview content not detected within %dms, using fallback wait time",
            settings.render_timeout_ms,
        )
        page.wait_for_timeout(settings.fallback_wait_ms)
        return False


def capture_preview(markdown_path: str, settings: CaptureSettings | None = None) -> dict:
    """
    Render a markdown document in the preview tool and screenshot it.

    Args:
        markdown_path: Path to the markdown document.
        settings: Capture settings; defaults to the cached environment settings.

    Returns:
        dict with {status, local_path, rendered} or {status, error}.
    """
    settings = settings or get_capture_settings()
    local_path = screenshot_path(markdown_path, settings.output_dir)

    try:
        with sync_playwright() as p:
            browser = p.chromium.launch(headless=settings.headless, args=_CHROMIUM_ARGS)
            try:
                page = browser.new_page(
                    viewport={"width": settings.viewport_width, "height": settings.viewport_height},
                    locale=settings.locale,
                    extra_http_headers={"Accept-Language": settings.accept_language},
                )
                page.set_default_timeout(settings.default_timeout_ms)

                markdown = _read_document(markdown_path)
                logger.info("[renderer] Loaded %s (%d chars)", markdown_path, len(markdown))

                page.goto(settings.preview_url)
                _dismiss_consent_overlay(page, settings)

                page.fill(EDITOR_SELECTOR, markdown)
                rendered = _wait_for_preview(page, settings)

                os.makedirs(settings.output_dir, exist_ok=True)
                page.screenshot(path=local_path, full_page=True)
            finally:
                browser.close()

    except Exception as e:
        logger.error("[renderer] Capture failed for %s: %s", markdown_path, e, exc_info=True)
        return {"status": "error", "error": str(e)}

    logger.info("[renderer] Screenshot saved: %s -> %s", markdown_path, local_path)
    return {"status": "success", "local_path": local_path, "rendered": rendered}
