"""Tests for brand.py: selector and JSON-LD brand resolution."""

from __future__ import annotations

import logging

import pytest

from product_parser.brand import (
    clean_brand,
    extract_structured_brand,
    parse_structured_data,
    resolve_brand,
)


def _ld(payload: str) -> str:
    return f'<script type="application/ld+json">{payload}</script>'


class TestCleanBrand:

    def test_repeated_brand_collapsed(self):
        assert clean_brand("Nike Nike") == "Nike"

    def test_distinct_words_kept(self):
        assert clean_brand("Nike Air") == "Nike Air"

    def test_whitespace_collapsed(self):
        assert clean_brand("  Nike \n  Nike ") == "Nike"

    def test_repeated_tail(self):
        assert clean_brand("Under Armour Armour") == "Under Armour"

    def test_multi_word_repeat(self):
        assert clean_brand("Acme Co Acme Co") == "Acme Co"

    def test_partial_word_repeat_kept(self):
        assert clean_brand("Lee Leeds") == "Lee Leeds"
        assert clean_brand("Nike Nikes") == "Nike Nikes"


class TestParseStructuredData:

    def test_valid(self):
        result = parse_structured_data('{"@type": "Product"}')
        assert result.ok
        assert result.data == {"@type": "Product"}

    def test_invalid(self):
        result = parse_structured_data("{broken")
        assert not result.ok
        assert result.error.startswith("invalid JSON-LD")

    def test_empty(self):
        assert not parse_structured_data("   ").ok
        assert not parse_structured_data(None).ok

    def test_deeply_nested_block(self):
        result = parse_structured_data("[" * 100000 + "]" * 100000)
        assert not result.ok
        assert result.error.startswith("invalid JSON-LD")


class TestStructuredBrand:

    def test_product_brand_object(self, make_doc):
        doc = make_doc("", head=_ld('{"@type": "Product", "brand": {"@type": "Brand", "name": " Acme "}}'))
        assert extract_structured_brand(doc) == "Acme"

    def test_brand_as_string(self, make_doc):
        doc = make_doc("", head=_ld('{"@type": "Product", "brand": "Acme"}'))
        assert extract_structured_brand(doc) == "Acme"

    def test_type_list(self, make_doc):
        doc = make_doc("", head=_ld('{"@type": ["Product", "Thing"], "brand": {"name": "Acme"}}'))
        assert extract_structured_brand(doc) == "Acme"

    def test_graph(self, make_doc):
        payload = '{"@graph": [{"@type": "WebPage"}, {"@type": "Product", "brand": {"name": "Acme"}}]}'
        doc = make_doc("", head=_ld(payload))
        assert extract_structured_brand(doc) == "Acme"

    def test_non_product_ignored(self, make_doc):
        doc = make_doc("", head=_ld('{"@type": "Organization", "brand": {"name": "Acme"}}'))
        assert extract_structured_brand(doc) is None

    def test_malformed_block_logged_and_skipped(self, make_doc, caplog):
        head = _ld("{not json") + _ld('{"@type": "Product", "brand": {"name": "Acme"}}')
        doc = make_doc("", head=head)
        with caplog.at_level(logging.WARNING, logger="product_parser.brand"):
            assert extract_structured_brand(doc) == "Acme"
        assert "invalid JSON-LD" in caplog.text

    def test_only_malformed_block(self, make_doc):
        doc = make_doc("", head=_ld("{not json"))
        assert extract_structured_brand(doc) is None


class TestResolveBrand:

    def test_selector_brand_cleaned(self, make_doc, registry):
        doc = make_doc("", head='<meta name="brand" content="Nike Nike">')
        assert resolve_brand(doc, registry.generic, registry.generic) == "Nike"

    def test_selector_wins_over_structured_data(self, make_doc, registry):
        doc = make_doc('<span class="brand">Puma</span>', head=_ld('{"@type": "Product", "brand": {"name": "Acme"}}'))
        assert resolve_brand(doc, registry.generic, registry.generic) == "Puma"

    def test_structured_data_fallback(self, make_doc, registry):
        doc = make_doc("<p>Nothing</p>", head=_ld('{"@type": "Product", "brand": {"name": "Acme"}}'))
        assert resolve_brand(doc, registry.generic, registry.generic) == "Acme"

    def test_site_profile_brand(self, make_doc, registry):
        doc = make_doc('<div class="po-brand"><span class="a-size-base po-break-word">Lego</span></div>')
        assert resolve_brand(doc, registry.get("amazon"), registry.generic) == "Lego"

    def test_no_brand(self, make_doc, registry):
        assert resolve_brand(make_doc("<p>x</p>"), registry.generic, registry.generic) is None
