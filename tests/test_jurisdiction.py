from __future__ import annotations

from types import SimpleNamespace

from invoicedesk.core.jurisdiction import (
    DutchTaxIds,
    GenericTaxIds,
    PolishTaxIds,
    display_tax_id,
    tax_fields_for,
    tax_ids_for,
)


def test_polish_client_shows_nip_not_vat():
    client = {"country": "PL", "nip_number": "123-456-78-90", "vat_number": ""}
    assert display_tax_id(client) == "123-456-78-90"


def test_polish_client_without_nip_falls_back_to_vat():
    client = SimpleNamespace(country="PL", nip_number="", vat_number="PL999")
    assert display_tax_id(client) == "PL999"


def test_other_countries_show_vat():
    client = SimpleNamespace(country="NL", nip_number="123", kvk_number="555", vat_number="NL001B01")
    assert display_tax_id(client) == "NL001B01"


def test_field_sets_per_country():
    assert tax_fields_for("PL") == ("nip_number",)
    assert tax_fields_for("nl") == ("kvk_number", "vat_number")
    assert tax_fields_for("DE") == ("vat_number",)
    assert tax_fields_for(None) == ("vat_number",)


def test_variant_carries_only_its_fields():
    ids = tax_ids_for({"country": "NL", "kvk_number": "555", "vat_number": "NL1", "nip_number": "x"})
    assert ids == DutchTaxIds(kvk_number="555", vat_number="NL1")
    assert isinstance(tax_ids_for({"country": "PL"}), PolishTaxIds)
    assert isinstance(tax_ids_for({"country": "FR"}), GenericTaxIds)
