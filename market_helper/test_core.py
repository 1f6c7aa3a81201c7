"""
Tests for run orchestration and the error result.
"""
import asyncio

import pytest

from market_helper.config import Config
from market_helper.core import pick_open_tab, run_market_helper, run_scrape
from market_helper.dom import StaticDocument
from market_helper.exceptions import MarketHelperError

PAGE = """
<html><body><div class="items">
  <div class="item">
    <div class="row-wrapper"><span class="name">Boots</span><span class="type">Ancestor Boots</span></div>
    <div class="ancestor-info"><span class="socket-type">Red</span></div>
    <div class="item__details"><span class="option-name">(+)Power [10-20]</span></div>
  </div>
  <div class="item">
    <div class="row-wrapper"><span class="name">Spark</span><span class="type">Trigger Module</span></div>
  </div>
</div>{extra}</body></html>
"""


def fast_settings(max_ticks=20) -> Config:
    settings = Config()
    settings.POLL_INTERVAL_MS = 0
    settings.MAX_TICKS = max_ticks
    return settings


def run(document, settings=None):
    return asyncio.run(run_market_helper(document, settings or fast_settings()))


def test_successful_run_returns_modules():
    result = run(StaticDocument(PAGE.format(extra="")))
    assert result.ok
    assert [m.name for m in result.modules] == ["Boots", "Spark"]
    payload = result.to_payload()
    assert isinstance(payload, list)
    assert payload[0]["socketType"] == "Red"
    assert payload[0]["stats"] == [{"raw": "(+)Power [10-20]", "positive": True, "negative": False}]
    assert payload[1]["socketType"] == ""


def test_missing_container_is_an_error_result():
    result = run(StaticDocument("<html><body><p>Nothing here</p></body></html>"))
    assert not result.ok
    assert result.modules == []
    assert "Listing container not found" in result.error
    assert result.to_payload() == {"error": result.error}


def test_snapshot_loader_hidden_by_stylesheet_does_not_block():
    extra = '<style>.hidden{display:none}</style><div class="loader hidden"></div>'
    result = run(StaticDocument(PAGE.format(extra=extra)), fast_settings(max_ticks=50))
    assert result.ok
    assert len(result.modules) == 2


def test_snapshot_settles_without_tick_bound():
    extra = '<div class="page-loader"></div>'
    result = run(StaticDocument(PAGE.format(extra=extra)), fast_settings(max_ticks=0))
    assert result.ok
    assert len(result.modules) == 2


class LoadingDocument(StaticDocument):
    """A page whose loader never goes away."""

    async def is_rendered(self, selector):
        return True


def test_visible_loader_hits_tick_bound():
    result = run(LoadingDocument(PAGE.format(extra="")), fast_settings(max_ticks=6))
    assert not result.ok
    assert "did not stabilize" in result.error


class BrokenDocument(StaticDocument):
    async def content(self):
        raise RuntimeError("tab was closed")


def test_unexpected_failure_is_an_error_result():
    result = run(BrokenDocument(PAGE.format(extra="")))
    assert result.error == "tab was closed"
    assert result.to_payload() == {"error": "tab was closed"}


def test_run_scrape_requires_a_source():
    with pytest.raises(MarketHelperError):
        asyncio.run(run_scrape())


class FakeContext:
    def __init__(self, *pages):
        self.pages = list(pages)


class FakeBrowser:
    def __init__(self, *contexts):
        self.contexts = list(contexts)


def test_pick_open_tab_uses_most_recent_tab_across_contexts():
    browser = FakeBrowser(FakeContext("first", "second"), FakeContext(), FakeContext("newest"))
    assert pick_open_tab(browser) == "newest"
    assert pick_open_tab(FakeBrowser(FakeContext("only"), FakeContext())) == "only"


def test_pick_open_tab_without_tabs():
    with pytest.raises(MarketHelperError):
        pick_open_tab(FakeBrowser(FakeContext()))
