from __future__ import annotations

import logging
import re
from typing import Iterable, List, Optional, Union

from bs4 import BeautifulSoup, Tag
from soupsieve import SelectorSyntaxError

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")


def compact_html(html: str) -> str:
    """Collapse every whitespace run to a single space and trim."""
    return _WHITESPACE.sub(" ", html or "").strip()


class Document:
    """Read-only CSS query facade over a parsed HTML tree."""

    def __init__(self, soup: BeautifulSoup) -> None:
        self._soup = soup

    def select(self, selectors: Union[str, Iterable[str]]) -> List[Tag]:
        """Return matching elements in document order.

        A sequence of selectors is joined into one selector group so the
        result is a single document-ordered union. Selectors the CSS engine
        rejects match nothing.
        """
        if isinstance(selectors, str):
            query = selectors
        else:
            query = ", ".join(selectors)
        if not query.strip():
            return []
        try:
            return self._soup.select(query)
        except SelectorSyntaxError as exc:
            logger.debug("Ignoring invalid selector %r: %s", query, exc)
            return []

    @staticmethod
    def attr(element: Tag, name: str) -> Optional[str]:
        value = element.get(name)
        if value is None:
            return None
        if isinstance(value, list):
            return " ".join(value)
        return value

    @staticmethod
    def text(element: Tag) -> str:
        return element.get_text()

    @staticmethod
    def inner_html(element: Tag) -> str:
        return element.decode_contents()


def load_document(html: str, parser: str = "html.parser") -> Document:
    return Document(BeautifulSoup(html or "", parser))
