"""
================================================================================
Live Document Providers
================================================================================

The seam between the toolkit and whatever renders the page. StructureValidator
and DomTree only ever talk to a LiveDocumentProvider, never to the browser.

Implementations:
    - PlaywrightDocument: backed by a ``playwright.sync_api.Page``
    - SoupDocument: backed by a BeautifulSoup snapshot of static markup

Provider errors (timeouts, detached elements, driver crashes) are not caught
here and propagate to the caller unchanged.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Protocol, runtime_checkable

from bs4 import BeautifulSoup, Tag
from loguru import logger
from playwright.sync_api import ElementHandle, Page

from ..common import get_config


@runtime_checkable
class LiveDocumentProvider(Protocol):
    """Read-only view over a (possibly re-rendering) document."""

    def find_elements_matching(self, query: str) -> List[Any]:
        """Every element matching a CSS query, in document order."""
        ...

    def find_elements_within(self, element: Any, query: str) -> List[Any]:
        """Descendants of `element` matching a CSS query, in document order."""
        ...

    def get_attribute(self, element: Any, name: str) -> Optional[str]:
        ...

    def get_attributes(self, element: Any) -> Dict[str, str]:
        ...

    def get_text(self, element: Any) -> str:
        """Rendered text of the element and its descendants."""
        ...

    def get_tag_name(self, element: Any) -> str:
        """Lower-cased tag name."""
        ...

    def get_children(self, element: Any) -> List[Any]:
        """Direct element children, in document order."""
        ...

    def raw_markup(self) -> str:
        """Serialized markup of the whole document, suitable for HtmlTree."""
        ...


_ATTRIBUTES_SCRIPT = """
element => {
    const items = {};
    for (const attribute of element.attributes) {
        items[attribute.name] = attribute.value;
    }
    return items;
}
"""


class PlaywrightDocument:
    """
    LiveDocumentProvider over a Playwright page.

    Every call goes back to the browser, so results always reflect the page
    as currently rendered.

    Usage:
        >>> with sync_playwright() as p:
        ...     page = p.chromium.launch().new_page()
        ...     page.goto("https://example.com")
        ...     validator = StructureValidator(PlaywrightDocument(page))
    """

    def __init__(self, page: Page, timeout: Optional[int] = None):
        """
        Args:
            page: Playwright page to read from
            timeout: Default timeout in milliseconds, falls back to ``browser.timeout``
        """
        self.page = page
        self.timeout = int(timeout if timeout is not None else get_config("browser.timeout", 5000))
        self.page.set_default_timeout(self.timeout)

    def find_elements_matching(self, query: str) -> List[ElementHandle]:
        elements = self.page.query_selector_all(query)
        logger.debug(f"Query '{query}' matched {len(elements)} element(s)")
        return elements

    def find_elements_within(self, element: ElementHandle, query: str) -> List[ElementHandle]:
        return element.query_selector_all(query)

    def get_attribute(self, element: ElementHandle, name: str) -> Optional[str]:
        return element.get_attribute(name)

    def get_attributes(self, element: ElementHandle) -> Dict[str, str]:
        return element.evaluate(_ATTRIBUTES_SCRIPT)

    def get_text(self, element: ElementHandle) -> str:
        return element.inner_text()

    def get_tag_name(self, element: ElementHandle) -> str:
        return element.evaluate("element => element.tagName.toLowerCase()")

    def get_children(self, element: ElementHandle) -> List[ElementHandle]:
        return element.query_selector_all(":scope > *")

    def raw_markup(self) -> str:
        return self.page.content()


class SoupDocument:
    """
    LiveDocumentProvider over a static markup snapshot.

    Useful for offline checks of saved pages and for exercising navigation
    code without a browser. ``load`` replaces the snapshot, which is how a
    page re-render is emulated.
    """

    def __init__(self, markup: str = ""):
        self.load(markup)

    def load(self, markup: str) -> None:
        """Replace the current snapshot with `markup`."""
        self._markup = markup or ""
        self.soup = BeautifulSoup(self._markup, "html.parser")
        logger.debug(f"Loaded document snapshot ({len(self._markup)} characters)")

    def find_elements_matching(self, query: str) -> List[Tag]:
        return self.soup.select(query)

    def find_elements_within(self, element: Tag, query: str) -> List[Tag]:
        return element.select(query)

    def get_attribute(self, element: Tag, name: str) -> Optional[str]:
        value = element.get(name)
        if isinstance(value, list):
            return " ".join(value)
        return value

    def get_attributes(self, element: Tag) -> Dict[str, str]:
        return {
            name: " ".join(value) if isinstance(value, list) else value
            for name, value in element.attrs.items()
        }

    def get_text(self, element: Tag) -> str:
        return " ".join(element.get_text().split())

    def get_tag_name(self, element: Tag) -> str:
        return element.name.lower()

    def get_children(self, element: Tag) -> List[Tag]:
        return [child for child in element.children if isinstance(child, Tag)]

    def raw_markup(self) -> str:
        return str(self.soup)


__all__ = [
    "LiveDocumentProvider",
    "PlaywrightDocument",
    "SoupDocument",
]
