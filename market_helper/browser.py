"""
Playwright-backed live document for the market page.
"""
import logging

from .config import config

logger = logging.getLogger(__name__)

SCROLL_JS = "window.scrollTo(0, document.body.scrollHeight)"
# offsetParent is null for detached or display:none elements
RENDERED_JS = """(sel) => {
    const el = document.querySelector(sel);
    return !!el && el.offsetParent !== null;
}"""


class PageDocument:
    """Live-document interface over a Playwright page."""

    def __init__(self, page):
        self.page = page

    async def count(self, selector: str) -> int:
        return await self.page.locator(selector).count()

    async def scroll_to_bottom(self) -> None:
        await self.page.evaluate(SCROLL_JS)

    async def is_rendered(self, selector: str) -> bool:
        return bool(await self.page.evaluate(RENDERED_JS, selector))

    async def content(self) -> str:
        return await self.page.content()


async def ensure_listing_ready(page, selector: str = config.CONTAINER_SELECTOR, timeout_ms: int = 15000) -> bool:
    """Wait for the listing container to be attached to the page."""
    try:
        await page.wait_for_selector(selector, timeout=timeout_ms, state="attached")
        return True
    except Exception:
        logger.warning(f">>> Listing container {selector!r} did not appear within {timeout_ms} ms")
        return False
