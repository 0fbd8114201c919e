from __future__ import annotations

import json

from invoicedesk.core import paths
from invoicedesk.core.settings import Settings, load_settings, save_settings


def test_missing_file_writes_defaults(tmp_path):
    p = tmp_path / "settings.json"
    s = load_settings(p)
    assert s == Settings()
    assert json.loads(p.read_text(encoding="utf-8"))["invoice_prefix"] == "FV/"


def test_roundtrip_and_unknown_keys(tmp_path):
    p = tmp_path / "settings.json"
    save_settings(Settings(currency="PLN", payment_days=30), p)
    data = json.loads(p.read_text(encoding="utf-8"))
    data["legacy_option"] = True
    del data["date_format"]
    p.write_text(json.dumps(data), encoding="utf-8")
    s = load_settings(p)
    assert s.currency == "PLN"
    assert s.payment_days == 30
    assert s.date_format == Settings().date_format
    assert not (tmp_path / "settings.json.tmp").exists()


def test_corrupt_file_falls_back_to_defaults(tmp_path):
    p = tmp_path / "settings.json"
    p.write_text("{not json", encoding="utf-8")
    assert load_settings(p) == Settings()
    assert p.read_text(encoding="utf-8") == "{not json"


def test_home_override(tmp_path, monkeypatch):
    monkeypatch.setenv(paths.HOME_ENV, str(tmp_path / "profile"))
    assert paths.settings_path() == tmp_path / "profile" / "settings.json"
    assert paths.db_path().name == "invoicedesk.db"
    assert paths.log_path().parent == tmp_path / "profile"


def test_export_path(tmp_path):
    assert Settings(export_dir=str(tmp_path)).export_path() == tmp_path
    assert Settings().export_path() == paths.default_export_dir()
