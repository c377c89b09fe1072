"""Small query interface over parsed HTML used by the festival scrapers."""
from typing import List, Optional, Union

from bs4 import BeautifulSoup, Tag


class HtmlDocument:
    """
    Parsed HTML document or fragment.

    Scrapers only use the selector and label lookups defined here, so they
    do not depend on BeautifulSoup's object model directly.
    """

    def __init__(self, root: Union[BeautifulSoup, Tag]):
        self._root = root

    @classmethod
    def parse(cls, html: str) -> 'HtmlDocument':
        return cls(BeautifulSoup(html, 'html.parser'))

    def select(self, selector: str) -> List['HtmlDocument']:
        """Return every element matching a CSS selector as a fragment."""
        return [HtmlDocument(element) for element in self._root.select(selector)]

    def select_first(self, selector: str) -> Optional['HtmlDocument']:
        element = self._root.select_one(selector)
        return HtmlDocument(element) if element is not None else None

    def text(self) -> str:
        return self._root.get_text().strip()

    def attr(self, name: str) -> str:
        value = self._root.get(name) if isinstance(self._root, Tag) else None
        if isinstance(value, list):
            value = ' '.join(value)
        return (value or '').strip()

    def first_text(self, selector: str) -> str:
        """Trimmed text of the first match, or '' when nothing matches."""
        element = self.select_first(selector)
        return element.text() if element else ''

    def first_attr(self, selector: str, name: str) -> str:
        """Attribute of the first match, or '' when nothing matches."""
        element = self.select_first(selector)
        return element.attr(name) if element else ''

    def texts(self, selector: str) -> List[str]:
        return [element.text() for element in self.select(selector)]

    def value_for_label(self, label: str, label_selector: str = 'dl.board dt') -> Optional['HtmlDocument']:
        """
        Find the value element paired with a label.

        The label is the first element matching label_selector whose trimmed
        text equals label; the value is its immediately following <dd>.

        Args:
            label: Exact label text (e.g., "개최기간")
            label_selector: CSS selector for label elements

        Returns:
            Value fragment, or None when the label or its value is missing
        """
        for term in self._root.select(label_selector):
            if term.get_text().strip() != label:
                continue
            value = term.find_next_sibling()
            if value is None or value.name != 'dd':
                return None
            return HtmlDocument(value)
        return None

    def text_for_label(self, label: str) -> str:
        value = self.value_for_label(label)
        return value.text() if value else ''

    def link_for_label(self, label: str) -> str:
        """href of the first link inside a label's value, or ''."""
        value = self.value_for_label(label)
        return value.first_attr('a[href]', 'href') if value else ''
