from __future__ import annotations

import re
from typing import Optional, Sequence, Union

from .document import Document

_NOISE = re.compile(r"(Sale price|Price:|Price\s*\w+|Limited Time Offer)", re.IGNORECASE)


def strip_noise(text: str) -> str:
    """Drop promotional labels such as "Sale price" from visible text."""
    return _NOISE.sub("", text).strip()


def extract_first(
    document: Document,
    selectors: Union[str, Sequence[str]],
    attribute: str = "content",
) -> Optional[str]:
    """Return the first non-empty value produced by ``selectors``, tried in order.

    For each selector with matches, the first element's ``attribute`` wins
    when it is present and non-blank. Otherwise the text of every matched
    element is joined, trimmed and stripped of price labels. Selectors whose
    value ends up empty are skipped.
    """
    if isinstance(selectors, str):
        selectors = [selectors]

    for selector in selectors:
        elements = document.select(selector)
        if not elements:
            continue
        value = document.attr(elements[0], attribute)
        if value is not None and value.strip():
            return value.strip()
        text = "".join(document.text(element) for element in elements).strip()
        if text:
            cleaned = strip_noise(text)
            if cleaned:
                return cleaned
    return None
