"""
Core run orchestration and browser management.
"""
import logging
import os
from typing import Optional

from playwright.async_api import async_playwright

from .browser import PageDocument, ensure_listing_ready
from .config import Config, config
from .dom import HtmlDocument
from .exceptions import MarketHelperError
from .extractor import extract_modules
from .models import ExtractionResult
from .watcher import wait_until_stable

logger = logging.getLogger(__name__)


async def run_market_helper(document, settings: Config = config) -> ExtractionResult:
    """
    Scroll a live document until its listing settles, then parse it.

    Any failure of the whole run is reported through ``ExtractionResult.error``
    instead of a partial module list.
    """
    try:
        await wait_until_stable(
            document,
            item_selector=settings.ITEM_SELECTOR,
            loader_selector=settings.LOADER_SELECTOR,
            interval_ms=settings.POLL_INTERVAL_MS,
            required_stable_ticks=settings.REQUIRED_STABLE_TICKS,
            max_ticks=settings.max_ticks_or_none,
        )
        html = await document.content()
        modules = extract_modules(
            HtmlDocument.from_html(html),
            container_selector=settings.CONTAINER_SELECTOR,
            item_selector=settings.ITEM_SELECTOR,
        )
    except Exception as e:
        logger.exception(f"Market page could not be parsed: {e}")
        return ExtractionResult(error=str(e) or e.__class__.__name__)

    return ExtractionResult(modules=modules)


def pick_open_tab(browser):
    """Most recently opened tab across all contexts of an attached browser."""
    pages = [pg for ctx in browser.contexts for pg in ctx.pages]
    if not pages:
        raise MarketHelperError("No open tab found in the attached browser")
    return pages[-1]


async def run_scrape(
    url: Optional[str] = None,
    cdp_url: Optional[str] = None,
    headless: bool = False,
    storage_state_path: Optional[str] = None,
    settings: Config = config,
) -> ExtractionResult:
    """
    Run Market Helper against a browser tab.

    With ``cdp_url`` the run attaches to an already open Chrome and uses its
    most recent tab; otherwise a browser is launched and ``url`` is opened.
    """
    if not url and not cdp_url:
        raise MarketHelperError("Either a page URL or a CDP endpoint is required")

    is_headless = bool(headless) or settings.HEADLESS

    async with async_playwright() as p:
        if cdp_url:
            logger.info(f">>> Attaching to browser at {cdp_url}")
            browser = await p.chromium.connect_over_cdp(cdp_url)
            page = pick_open_tab(browser)
            logger.info(f">>> Using open tab: {page.url}")
            return await run_market_helper(PageDocument(page), settings)

        launch_args = ["--disable-blink-features=AutomationControlled"]
        if is_headless:
            launch_args += ["--disable-dev-shm-usage", "--no-sandbox", "--disable-gpu"]
        browser = await p.chromium.launch(headless=is_headless, args=launch_args)
        logger.info(f">>> Headless mode: {is_headless}")

        ctx_kwargs = {}
        if storage_state_path and os.path.exists(storage_state_path):
            ctx_kwargs["storage_state"] = storage_state_path
            logger.info(f">>> Using existing storage state: {storage_state_path}")

        context = await browser.new_context(
            **ctx_kwargs,
            viewport={"width": 1280, "height": 900},
            user_agent=(
                "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
                "AppleWebKit/537.36 (KHTML, like Gecko) "
                "Chrome/124.0.0.0 Safari/537.36"
            ),
            locale="en-US",
        )
        context.set_default_timeout(30_000)
        context.set_default_navigation_timeout(45_000)

        try:
            page = await context.new_page()
            logger.info(f">>> Opening market page: {url}")
            await page.goto(url, timeout=120_000, wait_until="domcontentloaded")
            await ensure_listing_ready(page, selector=settings.CONTAINER_SELECTOR)
            return await run_market_helper(PageDocument(page), settings)
        finally:
            await context.close()
            await browser.close()
