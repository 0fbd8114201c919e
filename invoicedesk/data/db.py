from __future__ import annotations

from pathlib import Path
from typing import Generator, Union
from contextlib import contextmanager
import logging

from sqlmodel import SQLModel, Session, create_engine
from sqlalchemy import text

from invoicedesk.core.numbering import ensure_sequence_table
from invoicedesk.core.paths import db_path
from invoicedesk.data.schema import CLIENT_SCHEMA_VERSION, CLIENT_V2_COLUMNS, upgrade_client_row

logger = logging.getLogger(__name__)

DB_PATH: Path = db_path()

_ENGINE = None


def configure(path: Union[str, Path], echo: bool = False) -> None:
	"""Point the data layer at another SQLite file (tests, alternate profiles)."""
	global DB_PATH, _ENGINE
	if _ENGINE is not None:
		_ENGINE.dispose()
	DB_PATH = Path(path)
	_ENGINE = None
	get_engine(echo=echo)


def get_engine(echo: bool = False):
	"""Return a singleton SQLAlchemy engine for the configured SQLite DB."""
	global _ENGINE
	if _ENGINE is None:
		# Use posix path for SQLAlchemy URL compatibility on Windows
		url = f"sqlite:///{DB_PATH.as_posix()}"
		_ENGINE = create_engine(url, echo=echo, connect_args={"check_same_thread": False})
	return _ENGINE


def create_db_and_tables(echo: bool = False) -> None:
	"""Create the SQLite database file and all SQLModel tables, then upgrade old rows."""
	# Ensure models are imported so metadata has all tables
	import invoicedesk.data.models  # noqa: F401

	DB_PATH.parent.mkdir(parents=True, exist_ok=True)
	engine = get_engine(echo=echo)
	SQLModel.metadata.create_all(engine)
	_migrate_client_columns(engine)
	_upgrade_client_rows(engine)
	with session_scope(echo=echo) as s:
		ensure_sequence_table(s)


def _migrate_client_columns(engine) -> None:
	"""Add the columns introduced by client schema version 2 to an older table."""
	with engine.begin() as conn:
		cols = conn.exec_driver_sql("PRAGMA table_info('client')").all()
		col_names = {row[1] for row in cols}
		for name, decl in CLIENT_V2_COLUMNS.items():
			if name in col_names:
				continue
			logger.info("Adding column client.%s", name)
			conn.exec_driver_sql(f"ALTER TABLE client ADD COLUMN {name} {decl}")


_UPGRADE_COLUMNS = (
	"country", "client_type", "kvk_number", "nip_number", "address",
	"vat_number", "email", "phone", "notes", "schema_version",
)


def _upgrade_client_rows(engine) -> int:
	"""Rewrite every client row below CLIENT_SCHEMA_VERSION through upgrade_client_row.

	Returns the number of upgraded rows.
	"""
	upgraded = 0
	with engine.begin() as conn:
		rows = conn.execute(
			text("SELECT * FROM client WHERE schema_version IS NULL OR schema_version < :v"),
			{"v": CLIENT_SCHEMA_VERSION},
		).mappings().all()
		for row in rows:
			new = upgrade_client_row(dict(row))
			params = {k: new.get(k) for k in _UPGRADE_COLUMNS}
			params["id"] = new["id"]
			conn.execute(
				text(
					"UPDATE client SET country = :country, client_type = :client_type, "
					"kvk_number = :kvk_number, nip_number = :nip_number, address = :address, "
					"vat_number = :vat_number, email = :email, phone = :phone, notes = :notes, "
					"schema_version = :schema_version WHERE id = :id"
				),
				params,
			)
			upgraded += 1
	if upgraded:
		logger.info("Upgraded %d client row(s) to schema version %d", upgraded, CLIENT_SCHEMA_VERSION)
	return upgraded


def get_session(echo: bool = False) -> Session:
	"""Create a new SQLModel Session bound to the project engine.

	expire_on_commit=False so returned instances keep attribute values after commit
	(avoids refresh on closed sessions when callers use detached instances).
	"""
	return Session(get_engine(echo=echo), expire_on_commit=False)


@contextmanager
def session_scope(echo: bool = False) -> Generator[Session, None, None]:
	"""Context manager-style generator for sessions.

	Usage:
		with session_scope() as s:
			... use s ...
	"""
	session = get_session(echo=echo)
	try:
		yield session
		session.commit()
	except Exception:
		session.rollback()
		raise
	finally:
		session.close()
