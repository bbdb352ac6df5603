"""Captures a page's DOM with Playwright for use as prompt input."""

from __future__ import annotations

import logging
import re
from typing import Optional

from playwright.async_api import Page, async_playwright

logger = logging.getLogger(__name__)

_NOISE_PATTERN = re.compile(r"<(script|style|noscript)\b[^>]*>.*?</\1\s*>", re.DOTALL | re.IGNORECASE)


class DomCaptureError(RuntimeError):
    """Raised when the requested page or element cannot be captured."""


def strip_noise(html: str) -> str:
    """Drop script, style and noscript elements, which only waste prompt space."""
    return _NOISE_PATTERN.sub("", html)


async def read_dom(page: Page, selector: Optional[str] = None) -> str:
    """Return the page HTML, or the outer HTML of the first ``selector`` match."""
    if not selector:
        return await page.content()
    element = await page.query_selector(selector)
    if element is None:
        raise DomCaptureError(f"No element matches selector {selector!r} on {page.url}")
    return await element.evaluate("el => el.outerHTML")


async def capture_dom(
    url: str,
    selector: Optional[str] = None,
    wait_until: str = "networkidle",
    timeout_ms: int = 30000,
    keep_scripts: bool = False,
) -> str:
    """Open ``url`` in headless Chromium and return its DOM."""
    logger.info("Capturing DOM from %s%s", url, f" ({selector})" if selector else "")
    async with async_playwright() as p:
        browser = await p.chromium.launch(headless=True)
        try:
            page = await browser.new_page()
            resp = await page.goto(url, wait_until=wait_until, timeout=timeout_ms)
            if resp is not None and resp.status >= 400:
                logger.warning("Page %s returned HTTP %d", url, resp.status)
            html = await read_dom(page, selector)
        finally:
            await browser.close()

    if not keep_scripts:
        html = strip_noise(html)
    logger.info("Captured %d chars of DOM", len(html))
    return html
