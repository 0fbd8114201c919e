"""Sequential invoice numbers like 'FV/2026/0001', one sequence per prefix and year."""
from __future__ import annotations

import re
from typing import Any, Optional

from sqlalchemy import text

WIDTH = 4


def _exec(db_session: Any, sql: str, params: dict | None = None):
	return db_session.exec(text(sql), params=params or {})


def ensure_sequence_table(db_session: Any) -> None:
	"""Create the sequences table if it doesn't exist (SQLite-safe)."""
	# Raw SQL keeps this independent of ORM models.
	_exec(
		db_session,
		"CREATE TABLE IF NOT EXISTS invoice_sequences ("
		" prefix TEXT PRIMARY KEY,"
		" last INTEGER NOT NULL"
		")",
	)


def sequence_key(prefix: str, year: int) -> str:
	return f"{prefix}{year}/"


def format_number(prefix: str, year: int, n: int) -> str:
	return f"{sequence_key(prefix, year)}{n:0{WIDTH}d}"


def parse_sequence(number: str, prefix: str, year: int) -> Optional[int]:
	"""Numeric suffix of an invoice number in this prefix/year sequence, else None."""
	key = sequence_key(prefix, year)
	if not number.startswith(key):
		return None
	m = re.fullmatch(r"\d+", number[len(key):])
	return int(m.group(0)) if m else None


def _stored_last(db_session: Any, key: str) -> Optional[int]:
	row = _exec(db_session, "SELECT last FROM invoice_sequences WHERE prefix = :p", {"p": key}).first()
	if row is None or row[0] is None:
		return None
	return int(row[0])


def _taken(db_session: Any, number: str) -> bool:
	row = _exec(db_session, "SELECT 1 FROM invoice WHERE invoice_number = :n", {"n": number}).first()
	return row is not None


def _derived_last(db_session: Any, key: str) -> int:
	# SQLite-friendly: SUBSTR(number, len(key)+1) -> cast to integer -> MAX
	row = _exec(
		db_session,
		(
			"SELECT MAX(CAST(SUBSTR(invoice_number, :ofs) AS INTEGER)) "
			"FROM invoice WHERE SUBSTR(invoice_number, 1, :n) = :p"
		),
		{"ofs": len(key) + 1, "n": len(key), "p": key},
	).first()
	return int(row[0]) if (row and row[0] is not None) else 0


def next_invoice_number(prefix: str, year: int, db_session: Any) -> str:
	"""Reserve and return the next number. The caller owns the transaction."""
	key = sequence_key(prefix, year)
	last = _stored_last(db_session, key)
	current = (_derived_last(db_session, key) if last is None else last) + 1
	# Numbers typed in by hand may already sit ahead of the sequence
	while _taken(db_session, format_number(prefix, year, current)):
		current += 1
	if last is None:
		_exec(
			db_session,
			"INSERT INTO invoice_sequences(prefix, last) VALUES (:p, :val)",
			{"p": key, "val": current},
		)
	else:
		_exec(
			db_session,
			"UPDATE invoice_sequences SET last = :val WHERE prefix = :p",
			{"p": key, "val": current},
		)
	return format_number(prefix, year, current)


def peek_next_invoice_number(prefix: str, year: int, db_session: Any) -> str:
	"""
	Return the next invoice number without mutating the sequence.

	Strategy:
	- If a row exists in invoice_sequences for the key, start from last+1.
	- Else derive last from existing invoice numbers with the same key.
	- Skip numbers that are already in use.
	"""
	key = sequence_key(prefix, year)
	last = _stored_last(db_session, key)
	if last is None:
		last = _derived_last(db_session, key)
	current = last + 1
	while _taken(db_session, format_number(prefix, year, current)):
		current += 1
	return format_number(prefix, year, current)


def bump_sequence_to_at_least(prefix: str, year: int, n: int, db_session: Any) -> None:
	"""
	Ensure the stored sequence for prefix/year is at least `n`.
	- If no row exists, insert with last=n.
	- If last < n, update to n.
	- Otherwise, do nothing.
	"""
	key = sequence_key(prefix, year)
	last = _stored_last(db_session, key)
	if last is None:
		_exec(
			db_session,
			"INSERT INTO invoice_sequences(prefix, last) VALUES (:p, :val)",
			{"p": key, "val": int(n)},
		)
	elif last < n:
		_exec(
			db_session,
			"UPDATE invoice_sequences SET last = :val WHERE prefix = :p",
			{"p": key, "val": int(n)},
		)
