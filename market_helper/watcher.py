"""
Scroll-driven stabilization for lazily loaded listing pages.
"""
import asyncio
import logging
from typing import Optional

from .config import config
from .exceptions import StabilityTimeout

logger = logging.getLogger(__name__)

SCROLL_TIMEOUT_MS = 1000


async def wait_until_stable(
    document,
    item_selector: str = config.ITEM_SELECTOR,
    loader_selector: str = config.LOADER_SELECTOR,
    interval_ms: int = config.POLL_INTERVAL_MS,
    required_stable_ticks: int = config.REQUIRED_STABLE_TICKS,
    max_ticks: Optional[int] = None,
    scroll_timeout_ms: int = SCROLL_TIMEOUT_MS,
) -> None:
    """
    Scroll the page until the listing stops growing and no loader is shown.

    Every tick counts the items, scrolls to the bottom and checks the
    loader. The list is complete once the count has held for
    ``required_stable_ticks`` consecutive ticks while no loader is rendered.

    ``document`` provides async ``count``, ``scroll_to_bottom`` and
    ``is_rendered``. With ``max_ticks`` unset the loop has no upper bound;
    otherwise StabilityTimeout is raised when the bound is reached.

    The scroll is fire-and-forget: it is given at most ``scroll_timeout_ms``
    and a failed or slow scroll is logged without ending the tick.
    """
    last_item_count = 0
    stable_ticks = 0
    tick = 0

    while True:
        tick += 1
        current_count = await document.count(item_selector)

        try:
            await asyncio.wait_for(document.scroll_to_bottom(), timeout=scroll_timeout_ms / 1000)
        except Exception as e:
            logger.debug(f"Scroll failed on tick {tick}: {e!r}")

        loader_visible = await document.is_rendered(loader_selector)

        if current_count == last_item_count:
            stable_ticks += 1
        else:
            stable_ticks = 0
            last_item_count = current_count

        logger.debug(
            f"Tick {tick}: items={current_count} stable={stable_ticks} loader={loader_visible}"
        )

        if stable_ticks >= required_stable_ticks and not loader_visible:
            logger.info(f">>> List stabilized at {current_count} items after {tick} ticks")
            return

        if max_ticks and tick >= max_ticks:
            raise StabilityTimeout(tick, last_item_count, loader_visible)

        await asyncio.sleep(interval_ms / 1000)
