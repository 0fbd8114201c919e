from __future__ import annotations

from datetime import datetime, timezone
from types import SimpleNamespace

from invoicedesk.core.search import (
    CLIENT_SEARCH_FIELDS,
    PRODUCT_SEARCH_FIELDS,
    filter_records,
    sort_newest_first,
)

PRODUCTS = [
    {"code": "A1", "name": "Widget", "description": "x"},
    {"code": "B2", "name": "Gadget", "description": "widget-like"},
    {"code": "C3", "name": "Sprocket", "description": None},
]


def test_empty_term_returns_same_collection():
    assert filter_records(PRODUCTS, "", PRODUCT_SEARCH_FIELDS) is PRODUCTS


def test_loading_collection_yields_empty_list():
    assert filter_records(None, "widget", PRODUCT_SEARCH_FIELDS) == []
    assert filter_records(None, "", PRODUCT_SEARCH_FIELDS) == []


def test_case_insensitive_match_on_name_and_description():
    result = filter_records(PRODUCTS, "widget", PRODUCT_SEARCH_FIELDS)
    assert [p["code"] for p in result] == ["A1", "B2"]


def test_every_result_contains_the_term():
    for term in ("a", "GET", "c3", "zzz"):
        result = filter_records(PRODUCTS, term, PRODUCT_SEARCH_FIELDS)
        for p in result:
            assert any(term.lower() in str(p[f] or "").lower() for f in PRODUCT_SEARCH_FIELDS)
        missing = [p for p in PRODUCTS if p not in result]
        for p in missing:
            assert not any(term.lower() in str(p[f] or "").lower() for f in PRODUCT_SEARCH_FIELDS)


def test_client_search_covers_nip_and_email():
    clients = [
        SimpleNamespace(name="Acme", email="a@acme.pl", vat_number="", nip_number="5260250274"),
        SimpleNamespace(name="Beta", email="info@beta.nl", vat_number="NL001", nip_number=None),
    ]
    assert filter_records(clients, "5260", CLIENT_SEARCH_FIELDS) == [clients[0]]
    assert filter_records(clients, "BETA.NL", CLIENT_SEARCH_FIELDS) == [clients[1]]
    assert filter_records(clients, "nl0", CLIENT_SEARCH_FIELDS) == [clients[1]]


def test_sort_newest_first_puts_missing_timestamps_last():
    old = SimpleNamespace(created_at=datetime(2025, 1, 1))
    new = SimpleNamespace(created_at=datetime(2026, 1, 1))
    none = SimpleNamespace(created_at=None)
    assert sort_newest_first([old, none, new]) == [new, old, none]
    assert sort_newest_first(None) == []


def test_sort_newest_first_mixes_naive_and_aware_timestamps():
    stored = SimpleNamespace(created_at=datetime(2026, 3, 1, 8, 0))
    fresh = SimpleNamespace(created_at=datetime(2026, 3, 2, 8, 0, tzinfo=timezone.utc))
    none = SimpleNamespace(created_at=None)
    assert sort_newest_first([stored, none, fresh]) == [fresh, stored, none]
