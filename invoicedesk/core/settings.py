from __future__ import annotations

from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any, Dict, Optional, Union
import json
import logging

from invoicedesk.core.paths import settings_path, default_export_dir

logger = logging.getLogger(__name__)


@dataclass
class Settings:
	# Invoice numbers look like "FV/2026/0001" with the default prefix
	invoice_prefix: str = "FV/"
	# Days between issue date and due date for new invoices
	payment_days: int = 14
	currency: str = "EUR"
	date_format: str = "%d-%m-%Y"
	# Defaults for new drafts
	default_country: str = "PL"
	default_vat_rate: float = 21.0
	# Where exported files land; None means Documents/InvoiceDesk
	export_dir: Optional[str] = None
	# Template supports {number}, {client}, {date}
	file_name_template: str = "{number} - {client}"
	dark_mode: bool = False
	log_level: str = "INFO"

	@classmethod
	def from_dict(cls, data: Dict[str, Any]) -> "Settings":
		# Merge provided values over defaults, ignore unknown keys
		defaults = asdict(cls())
		merged: Dict[str, Any] = {**defaults, **{k: v for k, v in data.items() if k in defaults}}
		return cls(**merged)

	def to_dict(self) -> Dict[str, Any]:
		return asdict(self)

	def export_path(self) -> Path:
		return Path(self.export_dir).expanduser() if self.export_dir else default_export_dir()


def _coerce_path(path: Optional[Union[str, Path]]) -> Path:
	return Path(path) if path is not None else settings_path()


def load_settings(path: Optional[Union[str, Path]] = None) -> Settings:
	"""
	Load settings from JSON (UTF-8). If the file is missing, write defaults and return them.
	"""
	p = _coerce_path(path)
	if not p.exists():
		settings = Settings()
		save_settings(settings, p)
		return settings

	try:
		with p.open("r", encoding="utf-8") as f:
			raw: Dict[str, Any] = json.load(f)
	except (json.JSONDecodeError, OSError):
		# If unreadable/corrupt, fall back to defaults (do not overwrite automatically)
		logger.warning("Could not read settings from %s; using defaults", p)
		return Settings()

	return Settings.from_dict(raw if isinstance(raw, dict) else {})


def save_settings(settings: Settings, path: Optional[Union[str, Path]] = None) -> None:
	"""Save settings to JSON (UTF-8), creating parent dirs if needed."""
	p = _coerce_path(path)
	p.parent.mkdir(parents=True, exist_ok=True)
	tmp = p.with_suffix(p.suffix + ".tmp")
	with tmp.open("w", encoding="utf-8", newline="\n") as f:
		json.dump(settings.to_dict(), f, indent=2, ensure_ascii=False)
		f.write("\n")
	tmp.replace(p)
