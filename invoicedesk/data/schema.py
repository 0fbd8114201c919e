"""Versioned client record schema.

Version 1 rows predate per-country tax identifiers and client types. They are
upgraded once when the database is opened (see data.db), never at read time.
"""
from __future__ import annotations

from typing import Any, Dict

CLIENT_SCHEMA_VERSION = 2

# Columns introduced by version 2 and their SQLite declarations
CLIENT_V2_COLUMNS: Dict[str, str] = {
	"country": "VARCHAR NOT NULL DEFAULT 'PL'",
	"client_type": "VARCHAR NOT NULL DEFAULT 'company'",
	"kvk_number": "VARCHAR NOT NULL DEFAULT ''",
	"nip_number": "VARCHAR NOT NULL DEFAULT ''",
	"schema_version": "INTEGER NOT NULL DEFAULT 1",
	"created_at": "DATETIME",
	"updated_at": "DATETIME",
}

CLIENT_DEFAULTS: Dict[str, Any] = {
	"country": "PL",
	"client_type": "company",
	"kvk_number": "",
	"nip_number": "",
}


def upgrade_client_row(row: Dict[str, Any]) -> Dict[str, Any]:
	"""Return a canonical copy of a client row at CLIENT_SCHEMA_VERSION.

	Empty or missing country/client_type/kvk/nip take their defaults; other
	text fields that are NULL become empty strings. Idempotent.
	"""
	out = dict(row)
	for key, default in CLIENT_DEFAULTS.items():
		if not out.get(key):
			out[key] = default
	for key in ("address", "vat_number", "email", "phone", "notes"):
		if out.get(key) is None:
			out[key] = ""
	out["schema_version"] = CLIENT_SCHEMA_VERSION
	return out
