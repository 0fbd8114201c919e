from __future__ import annotations

import sqlite3

from invoicedesk.data import db, repo
from invoicedesk.data.schema import CLIENT_SCHEMA_VERSION, upgrade_client_row


def test_upgrade_fills_defaults():
    row = {"id": 1, "name": "Old Client", "vat_number": None, "email": "a@b.c"}
    new = upgrade_client_row(row)
    assert new["country"] == "PL"
    assert new["client_type"] == "company"
    assert new["nip_number"] == ""
    assert new["kvk_number"] == ""
    assert new["vat_number"] == ""
    assert new["email"] == "a@b.c"
    assert new["schema_version"] == CLIENT_SCHEMA_VERSION
    assert row.get("country") is None


def test_upgrade_keeps_existing_values_and_is_idempotent():
    row = {"id": 2, "name": "NL", "country": "NL", "client_type": "individual", "kvk_number": "555"}
    once = upgrade_client_row(row)
    assert once["country"] == "NL"
    assert once["client_type"] == "individual"
    assert once["kvk_number"] == "555"
    assert upgrade_client_row(once) == once


def test_legacy_client_table_is_migrated_once(tmp_path):
    path = tmp_path / "legacy.db"
    con = sqlite3.connect(path)
    con.execute(
        "CREATE TABLE client (id INTEGER PRIMARY KEY, name VARCHAR NOT NULL, address VARCHAR, "
        "vat_number VARCHAR, email VARCHAR, phone VARCHAR, notes VARCHAR)"
    )
    con.execute("INSERT INTO client (id, name, vat_number, email) VALUES (1, 'Legacy', NULL, 'x@y.z')")
    con.commit()
    con.close()

    db.configure(path)
    db.create_db_and_tables()
    try:
        clients = repo.list_clients()
        assert len(clients) == 1
        c = clients[0]
        assert (c.name, c.country, c.client_type, c.nip_number, c.kvk_number) == ("Legacy", "PL", "company", "", "")
        assert c.vat_number == ""
        assert c.schema_version == CLIENT_SCHEMA_VERSION

        # Opening again finds nothing left to upgrade
        assert db._upgrade_client_rows(db.get_engine()) == 0
    finally:
        db.get_engine().dispose()
