"""Structured product data (title, brand, price, images) from e-commerce HTML."""

from .currency import CurrencyTable
from .extractor import ExtractionPipeline, parse_html
from .profiles import ProfileRegistry, SelectorProfile
from .utils import ProductRecord, Settings, configure_logging, load_settings

__all__ = [
    "CurrencyTable",
    "ExtractionPipeline",
    "ProductRecord",
    "ProfileRegistry",
    "SelectorProfile",
    "Settings",
    "configure_logging",
    "load_settings",
    "parse_html",
]
