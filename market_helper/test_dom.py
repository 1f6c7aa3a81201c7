"""
Tests for the selectolax DOM wrappers.
"""
import asyncio

from market_helper.dom import HtmlDocument, StaticDocument

HTML = """
<html><head><style>.hidden { display: none }</style></head><body>
  <div class="items">
    <div class="item"><span class="price">10<b>x</b>20</span></div>
    <div class="item"><span class="nick"><i>away</i>Dan</span></div>
  </div>
  <div class="loader hidden"></div>
</body></html>
"""


def test_select_and_count():
    doc = HtmlDocument.from_html(HTML)
    assert doc.count(".items .item") == 2
    assert len(doc.select_all(".item")) == 2
    assert doc.select_one(".missing") is None


def test_direct_texts_skip_nested_elements():
    doc = HtmlDocument.from_html(HTML)
    price = doc.select_one(".price")
    assert price.direct_texts() == ["10", "20"]
    assert price.text() == "10x20"


def test_first_child_text():
    doc = HtmlDocument.from_html(HTML)
    assert doc.select_one(".price").first_child_text() == "10"
    assert doc.select_one(".nick").first_child_text() is None


def test_static_document_interface():
    static = StaticDocument(HTML)

    async def exercise():
        await static.scroll_to_bottom()
        return (
            await static.count(".items .item"),
            await static.content(),
        )

    count, content = asyncio.run(exercise())
    assert count == 2
    assert content == HTML


def test_static_document_never_reports_a_loader():
    """Snapshot loaders hidden by a stylesheet class are still present in the HTML."""
    static = StaticDocument(HTML)
    assert static.document.select_one(".loader") is not None
    assert asyncio.run(static.is_rendered(".loader")) is False
    assert asyncio.run(static.is_rendered('[class*="loader"]')) is False
