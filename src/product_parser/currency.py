from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)

# Ordered; the first entry for a symbol wins.
CURRENCY_ENTRIES: Tuple[Tuple[str, str], ...] = (
    ("$", "USD"),
    ("€", "EUR"),
    ("£", "GBP"),
    ("¥", "JPY"),
    ("₹", "INR"),
    ("₣", "FRF"),  # historical French franc
    ("₤", "ITL"),  # historical Italian lira
    ("₽", "RUB"),
    ("kr", "SEK"),
    ("Fr", "CHF"),
    ("A$", "AUD"),
    ("B$", "BND"),
    ("R$", "BRL"),
    ("₣", "XOF"),
    ("د.إ", "AED"),
    ("KSh", "KES"),
    ("₱", "PHP"),
    ("RM", "MYR"),
    ("₣", "XAF"),
    ("฿", "THB"),
    ("₴", "UAH"),
    ("R", "ZAR"),
    ("Rp", "IDR"),
    ("د.ك", "KWD"),
    ("﷼", "SAR"),
    ("﷼", "OMR"),
    ("QAR", "QAR"),
    ("Bdt", "BDT"),
    ("Ft", "HUF"),
    ("₪", "ILS"),
    ("₡", "CRC"),
    ("Gs", "PYG"),
    ("TSh", "TZS"),
    ("₴", "UAH"),
    ("Kc", "CZK"),
    ("د.ب", "BHD"),
)

_DOLLAR_VARIANTS = {
    "A$": "AUD",
    "C$": "CAD",
    "S$": "SGD",
    "$": "USD",
}


def map_dollar_currency(symbol: str) -> str:
    """Map dollar-sign variants to their currency code; anything else is returned as-is."""
    return _DOLLAR_VARIANTS.get(symbol, symbol)


class CurrencyTable:
    """Exact-match symbol -> currency code lookup.

    Built once from an ordered list of ``(symbol, code)`` pairs. When a
    symbol appears more than once the first pair wins; symbols seen with
    conflicting codes are kept in :attr:`ambiguous`.
    """

    def __init__(self, entries: Sequence[Tuple[str, str]] = CURRENCY_ENTRIES) -> None:
        mapping: Dict[str, str] = {}
        seen: Dict[str, List[str]] = {}
        for symbol, code in entries:
            codes = seen.setdefault(symbol, [])
            if code not in codes:
                codes.append(code)
            mapping.setdefault(symbol, code)
        self._mapping = MappingProxyType(mapping)
        self._ambiguous = MappingProxyType(
            {symbol: tuple(codes) for symbol, codes in seen.items() if len(codes) > 1}
        )
        for symbol, codes in self._ambiguous.items():
            logger.debug("Currency symbol %s is ambiguous (%s); using %s", symbol, ", ".join(codes), codes[0])

    @property
    def ambiguous(self) -> Mapping[str, Tuple[str, ...]]:
        return self._ambiguous

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._mapping

    def __len__(self) -> int:
        return len(self._mapping)

    def normalize(self, symbol: Optional[str]) -> Optional[str]:
        if symbol is None:
            return None
        return self._mapping.get(symbol, symbol)
