from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Iterator, Optional

from .document import Document
from .profiles import SelectorProfile
from .resolver import extract_first

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")
_REPEATED = re.compile(r"(?<!\S)(\S.*?)\s+\1(?!\S)")

JSON_LD_SELECTOR = 'script[type="application/ld+json"]'


@dataclass(frozen=True)
class ParseResult:
    """Outcome of decoding one structured-data block."""

    data: Any = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def clean_brand(brand: str) -> str:
    """Collapse whitespace and the first whole-word repeated run ("Nike Nike" -> "Nike")."""
    collapsed = _WHITESPACE.sub(" ", brand).strip()
    return _REPEATED.sub(r"\1", collapsed, count=1)


def parse_structured_data(raw: Optional[str]) -> ParseResult:
    if raw is None or not raw.strip():
        return ParseResult(error="empty block")
    try:
        return ParseResult(data=json.loads(raw.strip()))
    except (ValueError, RecursionError) as exc:
        return ParseResult(error=f"invalid JSON-LD: {exc}")


def _iter_items(data: Any) -> Iterator[dict]:
    items = data if isinstance(data, list) else [data]
    for item in items:
        if not isinstance(item, dict):
            continue
        yield item
        graph = item.get("@graph")
        if isinstance(graph, list):
            yield from (node for node in graph if isinstance(node, dict))


def _is_product(item: dict) -> bool:
    item_type = item.get("@type")
    if isinstance(item_type, list):
        return "Product" in item_type
    return item_type == "Product"


def brand_from_item(item: dict) -> Optional[str]:
    if not _is_product(item):
        return None
    brand = item.get("brand")
    if isinstance(brand, dict):
        brand = brand.get("name")
    if isinstance(brand, str) and brand.strip():
        return brand.strip()
    return None


def extract_structured_brand(document: Document) -> Optional[str]:
    """Brand name declared by the first JSON-LD Product that carries one."""
    for script in document.select(JSON_LD_SELECTOR):
        raw = script.string if script.string is not None else document.text(script)
        result = parse_structured_data(raw)
        if not result.ok:
            logger.warning("Skipping structured data block: %s", result.error)
            continue
        for item in _iter_items(result.data):
            brand = brand_from_item(item)
            if brand:
                return brand
    return None


def resolve_brand(
    document: Document,
    profile: SelectorProfile,
    generic: SelectorProfile,
) -> Optional[str]:
    brand = (
        extract_first(document, profile.brand)
        or extract_first(document, generic.brand)
        or extract_structured_brand(document)
    )
    if not brand:
        return None
    return clean_brand(brand) or None
