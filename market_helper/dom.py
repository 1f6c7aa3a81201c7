"""Read-only DOM access over selectolax for listing pages."""
import logging
from typing import List, Optional

from selectolax.parser import HTMLParser, Node

logger = logging.getLogger(__name__)

TEXT_TAG = "-text"


class HtmlNode:
    """A single element of a parsed page."""

    def __init__(self, node: Node):
        self._node = node

    def select_one(self, selector: str) -> Optional["HtmlNode"]:
        found = self._node.css_first(selector)
        return HtmlNode(found) if found is not None else None

    def select_all(self, selector: str) -> List["HtmlNode"]:
        return [HtmlNode(n) for n in self._node.css(selector)]

    def text(self) -> str:
        """Full text content of the element, nested elements included."""
        return self._node.text(deep=True) or ""

    def direct_texts(self) -> List[str]:
        """Text segments that are direct children of the element, in order."""
        return [
            child.text(deep=False) or ""
            for child in self._node.iter(include_text=True)
            if child.tag == TEXT_TAG
        ]

    def first_child_text(self) -> Optional[str]:
        """Text of the first child node if that child is a text node, else None."""
        child = self._node.child
        if child is None or child.tag != TEXT_TAG:
            return None
        return child.text(deep=False) or ""


class HtmlDocument(HtmlNode):
    """A parsed page snapshot."""

    def __init__(self, parser: HTMLParser):
        self.parser = parser
        super().__init__(parser.root)

    @classmethod
    def from_html(cls, html: str) -> "HtmlDocument":
        return cls(HTMLParser(html or ""))

    def select_one(self, selector: str) -> Optional[HtmlNode]:
        found = self.parser.css_first(selector)
        return HtmlNode(found) if found is not None else None

    def select_all(self, selector: str) -> List[HtmlNode]:
        return [HtmlNode(n) for n in self.parser.css(selector)]

    def count(self, selector: str) -> int:
        return len(self.parser.css(selector))


class StaticDocument:
    """
    Live-document interface over a saved snapshot.

    Nothing changes between ticks and scrolling does nothing. A snapshot is
    never mid-fetch, so no loader counts as rendered, whatever CSS the
    saved page uses to hide it.
    """

    def __init__(self, html: str):
        self.html = html
        self.document = HtmlDocument.from_html(html)

    async def count(self, selector: str) -> int:
        return self.document.count(selector)

    async def scroll_to_bottom(self) -> None:
        logger.debug("Static document: scroll ignored")

    async def is_rendered(self, selector: str) -> bool:
        return False

    async def content(self) -> str:
        return self.html
