from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional, Tuple
from urllib.parse import urlparse

logger = logging.getLogger(__name__)

GENERIC = "generic"


@dataclass(frozen=True)
class SelectorProfile:
    """Ordered CSS selector candidates for each product field of one site family."""

    name: str
    title: Tuple[str, ...] = ()
    description: Tuple[str, ...] = ()
    brand: Tuple[str, ...] = ()
    price: Tuple[str, ...] = ()
    currency: Tuple[str, ...] = ()
    images: Tuple[str, ...] = ()


AMAZON_PROFILE = SelectorProfile(
    name="amazon",
    title=("#productTitle",),
    description=("#productDescription", ".a-section .a-size-base"),
    brand=(".po-brand span.a-size-base.po-break-word",),
    price=("#tp_price_block_total_price_ww span.a-offscreen",),
    currency=("#price_block_currency_symbol_ww",),
    images=("#imgTagWrapperId img",),
)

SMALLABLE_PROFILE = SelectorProfile(
    name="smallable",
    title=("#productTitle",),
    description=("#description-attr-0 li",),
    brand=(".po-brand span.a-size-base.po-break-word",),
    price=(".PriceLine_price__g_kMA",),
    currency=(".PriceLine_price__g_kMA",),
)

GENERIC_PROFILE = SelectorProfile(
    name=GENERIC,
    title=(
        'meta[property="og:title"]',
        "h1",
        "title",
    ),
    description=(
        'meta[name="description"]',
        'meta[property="og:description"]',
        "p.product-description",
    ),
    brand=(
        'meta[property="og:brand"]',
        'meta[name="brand"]',
        'meta[itemprop="brand"]',
        '[itemprop="brand"]',
        ".manufacturer",
        ".brand",
        ".brand-name",
        ".brand-class",
        ".product-brand-name",
        ".product-brand",
    ),
    price=(
        'meta[property="og:price:amount"]',
        '[itemprop="price"]',
        ".price",
    ),
    currency=(
        'meta[property="og:price:currency"]',
        '[itemprop="priceCurrency"]',
    ),
    images=(
        'meta[property="og:image"]',
        '[itemprop="image"]',
        "img.main-image",
    ),
)

DEFAULT_DOMAINS = {
    "amazon.com": "amazon",
    "smallable.com": "smallable",
}


def hostname_of(url: Optional[str]) -> Optional[str]:
    """Lower-cased hostname of ``url`` without a leading ``www.``; None when unusable."""
    if not url:
        return None
    try:
        hostname = urlparse(url).hostname
    except ValueError as exc:
        logger.warning("Could not parse URL %r: %s", url, exc)
        return None
    if not hostname:
        return None
    if hostname.startswith("www."):
        hostname = hostname[4:]
    return hostname


class ProfileRegistry:
    """Immutable domain -> selector profile lookup with a generic fallback."""

    def __init__(
        self,
        profiles: Tuple[SelectorProfile, ...] = (AMAZON_PROFILE, SMALLABLE_PROFILE, GENERIC_PROFILE),
        domains: Optional[Mapping[str, str]] = None,
    ) -> None:
        by_name = {profile.name: profile for profile in profiles}
        if GENERIC not in by_name:
            raise ValueError("profile registry needs a generic profile")
        self._profiles = MappingProxyType(by_name)
        self._domains = MappingProxyType(dict(DEFAULT_DOMAINS if domains is None else domains))

    @property
    def generic(self) -> SelectorProfile:
        return self._profiles[GENERIC]

    def get(self, name: str) -> SelectorProfile:
        return self._profiles.get(name, self.generic)

    def select(self, url: Optional[str]) -> SelectorProfile:
        domain = hostname_of(url)
        name = self._domains.get(domain, GENERIC) if domain else GENERIC
        profile = self.get(name)
        logger.debug("Selected %s profile for %s", profile.name, domain or "<no domain>")
        return profile
