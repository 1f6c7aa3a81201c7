"""
Tests for the scroll stabilization loop.
"""
import asyncio

import pytest

from market_helper.exceptions import StabilityTimeout
from market_helper.watcher import wait_until_stable


class ScriptedDocument:
    """Live document whose item count and loader follow a script, one step per tick."""

    def __init__(self, counts, loader_until=0, fail_scroll=False):
        self.counts = counts
        self.loader_until = loader_until
        self.fail_scroll = fail_scroll
        self.ticks = 0
        self.scrolls = 0

    async def count(self, selector):
        self.ticks += 1
        return self.counts[min(self.ticks, len(self.counts)) - 1]

    async def scroll_to_bottom(self):
        self.scrolls += 1
        if self.fail_scroll:
            raise RuntimeError("page crashed")

    async def is_rendered(self, selector):
        # Loader visible on every tick before loader_until
        return self.ticks < self.loader_until


def run(doc, **kwargs):
    kwargs.setdefault("interval_ms", 0)
    return asyncio.run(wait_until_stable(doc, ".items .item", ".spinner", **kwargs))


def test_resolves_after_three_stable_ticks():
    doc = ScriptedDocument([5, 5, 5, 5])
    assert run(doc) is None
    assert doc.ticks == 4


def test_waits_for_loader_to_disappear():
    doc = ScriptedDocument([5, 5, 5, 5], loader_until=6)
    run(doc)
    assert doc.ticks == 6


def test_growth_resets_stable_ticks():
    doc = ScriptedDocument([1, 2, 3, 3, 3, 3])
    run(doc)
    assert doc.ticks == 6


def test_plateau_while_loading_then_growth():
    doc = ScriptedDocument([5, 5, 5, 8, 8, 8, 8], loader_until=4)
    run(doc)
    assert doc.ticks == 7


def test_empty_page_settles():
    doc = ScriptedDocument([0])
    run(doc)
    assert doc.ticks == 3


def test_scrolls_every_tick():
    doc = ScriptedDocument([2, 4, 4, 4, 4])
    run(doc)
    assert doc.scrolls == doc.ticks == 5


def test_scroll_failure_does_not_stop_watching():
    doc = ScriptedDocument([5, 5, 5, 5], fail_scroll=True)
    run(doc)
    assert doc.ticks == 4


def test_custom_stable_tick_requirement():
    doc = ScriptedDocument([5, 5])
    run(doc, required_stable_ticks=1)
    assert doc.ticks == 2


def test_max_ticks_bounds_growing_page():
    doc = ScriptedDocument(list(range(1, 100)))
    with pytest.raises(StabilityTimeout) as exc:
        run(doc, max_ticks=5)
    assert doc.ticks == 5
    assert exc.value.last_count == 5
    assert exc.value.loader_visible is False


def test_max_ticks_bounds_permanent_loader():
    doc = ScriptedDocument([3], loader_until=10_000)
    with pytest.raises(StabilityTimeout) as exc:
        run(doc, max_ticks=8)
    assert exc.value.loader_visible is True
    assert "8 ticks" in str(exc.value)


def test_bound_not_hit_when_stable_in_time():
    doc = ScriptedDocument([5, 5, 5, 5])
    run(doc, max_ticks=4)
    assert doc.ticks == 4


class StuckScrollDocument(ScriptedDocument):
    """Scrolling never returns, as with a navigation that hangs."""

    async def scroll_to_bottom(self):
        self.scrolls += 1
        await asyncio.sleep(3600)


def test_stuck_scroll_does_not_stall_ticks():
    doc = StuckScrollDocument([5, 5, 5, 5])
    run(doc, scroll_timeout_ms=10)
    assert doc.ticks == 4
    assert doc.scrolls == 4
