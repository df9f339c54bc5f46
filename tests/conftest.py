"""Shared fixtures for the product parser test suite."""

from __future__ import annotations

import pytest

from product_parser import CurrencyTable, ExtractionPipeline, ProfileRegistry
from product_parser.document import compact_html, load_document


@pytest.fixture
def pipeline():
    return ExtractionPipeline(profiles=ProfileRegistry(), currencies=CurrencyTable())


@pytest.fixture
def registry():
    return ProfileRegistry()


@pytest.fixture
def currencies():
    return CurrencyTable()


@pytest.fixture
def make_doc():
    """Build a Document from an HTML body fragment."""

    def _make(body: str, head: str = ""):
        html = f"<html><head>{head}</head><body>{body}</body></html>"
        return load_document(compact_html(html))

    return _make
