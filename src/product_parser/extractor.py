from __future__ import annotations

import json
import logging
from typing import List, Optional

from .brand import resolve_brand
from .currency import CurrencyTable
from .document import Document, compact_html, load_document
from .pricing import extract_price_currency
from .profiles import ProfileRegistry, SelectorProfile
from .resolver import extract_first
from .utils import ProductRecord, Settings

logger = logging.getLogger(__name__)


class ExtractionPipeline:
    def __init__(
        self,
        profiles: Optional[ProfileRegistry] = None,
        currencies: Optional[CurrencyTable] = None,
        html_parser: str = "html.parser",
        debug: bool = False,
    ) -> None:
        self._profiles = profiles or ProfileRegistry()
        self._currencies = currencies or CurrencyTable()
        self._html_parser = html_parser
        self._debug = debug

    @classmethod
    def from_settings(cls, settings: Settings) -> "ExtractionPipeline":
        return cls(html_parser=settings.html_parser, debug=settings.debug)

    def extract(self, html: str, url: Optional[str] = None) -> ProductRecord:
        document = load_document(compact_html(html), self._html_parser)
        profile = self._profiles.select(url)
        generic = self._profiles.generic
        logger.info("Extracting product from %s using %s profile", url or "<inline html>", profile.name)

        title = self._first(document, profile.title, generic.title)
        description = self._first(document, profile.description, generic.description)
        brand = resolve_brand(document, profile, generic)
        price, currency = extract_price_currency(document, profile, generic, self._currencies)
        images = self._images(document, profile, generic)

        product = ProductRecord(
            title=title,
            description=description,
            brand=brand,
            price=price,
            currency=currency,
            images=images,
        )
        logger.info(
            "Extraction finished: title=%s, brand=%s, price=%s %s, images=%d",
            product.title, product.brand, product.price, product.currency, len(product.images),
        )
        if self._debug:
            logger.info("Extraction payload: %s", json.dumps(product.as_dict(), ensure_ascii=False))
        return product

    def _first(self, document: Document, *selector_lists) -> Optional[str]:
        for selectors in selector_lists:
            value = extract_first(document, selectors)
            if value:
                return value
        return None

    def _images(self, document: Document, profile: SelectorProfile, generic: SelectorProfile) -> List[str]:
        selectors = list(profile.images)
        if profile is not generic:
            selectors.extend(generic.images)
        images = []
        for element in document.select(selectors):
            url = document.attr(element, "content") or document.attr(element, "src")
            if url:
                images.append(url)
        return images


_default_pipeline: Optional[ExtractionPipeline] = None


def parse_html(html: str, url: Optional[str] = None) -> ProductRecord:
    """Extract a product record with the built-in profiles and currency table."""
    global _default_pipeline
    if _default_pipeline is None:
        _default_pipeline = ExtractionPipeline()
    return _default_pipeline.extract(html, url)
