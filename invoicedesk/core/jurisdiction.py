"""Country-dependent tax identifiers for clients.

Poland uses the NIP number, the Netherlands a KVK registration plus a BTW
(VAT) number, and every other country a plain VAT number. Each variant
carries exactly the fields it needs; forms and lists match on the variant.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Tuple, Union

DEFAULT_COUNTRY = "PL"

COUNTRIES: Dict[str, str] = {
    "PL": "Poland",
    "NL": "Netherlands",
    "DE": "Germany",
    "BE": "Belgium",
    "FR": "France",
    "ES": "Spain",
    "IT": "Italy",
    "GB": "United Kingdom",
    "US": "United States",
    "CA": "Canada",
    "AU": "Australia",
    "Other": "Other",
}


@dataclass(frozen=True)
class PolishTaxIds:
    nip_number: str = ""

    fields = ("nip_number",)
    labels = ("NIP",)

    def primary(self) -> str:
        return self.nip_number


@dataclass(frozen=True)
class DutchTaxIds:
    kvk_number: str = ""
    vat_number: str = ""

    fields = ("kvk_number", "vat_number")
    labels = ("KVK", "BTW")

    def primary(self) -> str:
        return self.vat_number


@dataclass(frozen=True)
class GenericTaxIds:
    vat_number: str = ""

    fields = ("vat_number",)
    labels = ("VAT",)

    def primary(self) -> str:
        return self.vat_number


TaxIds = Union[PolishTaxIds, DutchTaxIds, GenericTaxIds]


def _get(record: Any, name: str) -> str:
    val = record.get(name) if isinstance(record, dict) else getattr(record, name, None)
    return str(val or "")


def variant_for(country: str | None) -> type:
    code = (country or "").upper()
    if code == "PL":
        return PolishTaxIds
    if code == "NL":
        return DutchTaxIds
    return GenericTaxIds


def tax_fields_for(country: str | None) -> Tuple[str, ...]:
    """Names of the identifier fields editable for a country."""
    return variant_for(country).fields


def tax_ids_for(record: Any) -> TaxIds:
    cls = variant_for(_get(record, "country"))
    return cls(**{f: _get(record, f) for f in cls.fields})


def display_tax_id(record: Any) -> str:
    """Identifier shown in client lists.

    A Polish client with a NIP shows the NIP; everyone else shows the VAT number.
    """
    ids = tax_ids_for(record)
    if isinstance(ids, PolishTaxIds) and ids.nip_number:
        return ids.nip_number
    return _get(record, "vat_number")
