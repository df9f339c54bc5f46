"""
Price and currency extraction.

The regex classifiers at the top are pure functions over strings so price
shapes can be checked without building a document. ``extract_price_currency``
layers them over the DOM: selector-driven text first, then a scan of
``h2``/``p``/``span`` elements ranked by tag.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import List, Optional, Tuple

from .currency import CurrencyTable, map_dollar_currency
from .document import Document
from .profiles import SelectorProfile
from .resolver import extract_first

logger = logging.getLogger(__name__)

SCAN_TAGS = ("h2", "p", "span")

_SYMBOLS = "A-Za-z₱$£¥₣₤₹€"

# "€15500", "15500€", "$ 1,299.00 USD"
_RE_SPLIT = re.compile(r"([^\d]+)?([\d.,]+)([^\d]+)?")

# Whole text must look like a price: optional short prefix, digits, optional cents.
_RE_PRICE_SHAPE = re.compile(
    rf"^\s*([{_SYMBOLS}]{{1,3}})?\s?\d+(?:,\d{{3}})*(?:\.\d{{1,2}})?\s*$"
)

_RE_PRICE = re.compile(rf"([{_SYMBOLS}]{{1,3}})\s?(\d+(?:,\d{{3}})*(?:\.\d{{1,2}})?)")

_RE_AMOUNT = re.compile(r"\d+(?:\.\d+)?|\.\d+")

_TWO_PLACES = Decimal("0.01")


@dataclass(frozen=True)
class PriceCandidate:
    currency: str
    amount: Decimal
    tag: str
    html: str


# =====================================================================
# Pattern classifier
# =====================================================================


def parse_amount(raw: Optional[str]) -> Optional[Decimal]:
    """Parse a digit run like ``1,299.00`` into a Decimal.

    Thousands separators are dropped; a malformed run keeps its leading
    numeric part (``1.2.3`` -> ``1.2``).
    """
    if not raw:
        return None
    match = _RE_AMOUNT.match(raw.replace(",", ""))
    if not match:
        return None
    try:
        return Decimal(match.group())
    except InvalidOperation:
        return None


def split_price_text(text: str) -> Tuple[Optional[str], Optional[Decimal]]:
    """Split free text into ``(currency, amount)``.

    The non-digit run before the number is preferred as currency, then the
    one after it.
    """
    match = _RE_SPLIT.search(text)
    if not match:
        return None, None
    leading, digits, trailing = match.groups()
    currency = (leading or "").strip() or (trailing or "").strip() or None
    return currency, parse_amount(digits)


def looks_like_price(text: str) -> bool:
    return bool(text) and _RE_PRICE_SHAPE.match(text) is not None


def match_price(text: str) -> Optional[Tuple[str, Decimal]]:
    """Currency symbol and amount from price-shaped text, or None without a symbol."""
    match = _RE_PRICE.search(text)
    if not match:
        return None
    amount = parse_amount(match.group(2))
    if amount is None:
        return None
    return match.group(1), amount


def format_price(amount: Optional[Decimal]) -> Optional[str]:
    if amount is None:
        return None
    try:
        quantized = amount.quantize(_TWO_PLACES, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        logger.warning("Discarding price %s: too many digits to format", amount)
        return None
    return f"{quantized:.2f}"


def strip_undefined(value: Optional[str]) -> Optional[str]:
    if value is None or "undefined" not in value:
        return value
    return value.replace("undefined", "").strip()


# =====================================================================
# Document scanning
# =====================================================================


def scan_prices(document: Document) -> List[PriceCandidate]:
    """Price candidates from ``h2``/``p``/``span`` elements, best first.

    Ranking is by tag only; equal tags keep document order.
    """
    candidates: List[PriceCandidate] = []
    for element in document.select(SCAN_TAGS):
        text = document.text(element).strip().replace("\u00a0", " ")
        if not looks_like_price(text):
            continue
        found = match_price(text)
        if not found:
            continue
        symbol, amount = found
        candidates.append(
            PriceCandidate(
                currency=symbol,
                amount=amount,
                tag=element.name.lower(),
                html=document.inner_html(element).strip(),
            )
        )
    candidates.sort(key=lambda candidate: SCAN_TAGS.index(candidate.tag))
    return candidates


def best_price_candidate(document: Document) -> Optional[PriceCandidate]:
    candidates = scan_prices(document)
    if not candidates:
        return None
    logger.debug("Found %d price candidates, best: %s", len(candidates), candidates[0])
    return candidates[0]


def extract_price_currency(
    document: Document,
    profile: SelectorProfile,
    generic: SelectorProfile,
    currencies: CurrencyTable,
) -> Tuple[Optional[str], Optional[str]]:
    """Return ``(price, currency)`` with price as a two-decimal string."""
    price: Optional[Decimal] = None
    currency: Optional[str] = None

    price_text = extract_first(document, profile.price) or extract_first(document, generic.price)
    price_text = strip_undefined(price_text)
    if price_text:
        currency, price = split_price_text(price_text)
        logger.debug("Selector price text %r -> %s %s", price_text, currency, price)

    if price is None and currency is None:
        candidate = best_price_candidate(document)
        if candidate:
            price = candidate.amount
            currency = map_dollar_currency(candidate.currency)

    if not currency:
        currency = extract_first(document, profile.currency) or extract_first(document, generic.currency)

    currency = strip_undefined(currency) or None
    return format_price(price), currencies.normalize(currency)
