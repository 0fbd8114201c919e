from __future__ import annotations

from datetime import date
from typing import Any, Dict, Iterable, List, Optional
import logging

from sqlmodel import select
from sqlalchemy import func, delete
from sqlalchemy.orm import selectinload

from invoicedesk.core.currency import compute_totals, round_money
from invoicedesk.core.numbering import (
	bump_sequence_to_at_least,
	next_invoice_number,
	parse_sequence,
	peek_next_invoice_number,
)
from invoicedesk.data.db import session_scope, get_session
from invoicedesk.data.models import Client, Company, Invoice, InvoiceLine, InvoiceStatus, Product, utc_now
from invoicedesk.errors import RecordNotFound, ValidationError

logger = logging.getLogger(__name__)

PRODUCT_FIELDS = ("code", "name", "description", "unit_price", "vat_rate")
CLIENT_FIELDS = (
	"name", "address", "country", "client_type", "vat_number",
	"kvk_number", "nip_number", "email", "phone", "notes",
)
COMPANY_FIELDS = (
	"name", "address", "country", "vat_number", "kvk_number",
	"nip_number", "email", "phone", "iban", "bic",
)
INVOICE_FIELDS = ("invoice_number", "client_id", "issue_date", "due_date", "status", "notes")
LINE_FIELDS = ("description", "quantity", "unit_price", "vat_rate")


def _require_name(data: Dict[str, Any], kind: str) -> None:
	if not str(data.get("name") or "").strip():
		raise ValidationError("name", f"{kind} name is required")


def _apply(record: Any, data: Dict[str, Any], fields: Iterable[str]) -> None:
	for f in fields:
		if f in data:
			val = data[f]
			setattr(record, f, val.strip() if isinstance(val, str) else val)


def _money_fields(data: Dict[str, Any]) -> Dict[str, Any]:
	out = dict(data)
	if "unit_price" in out:
		out["unit_price"] = round_money(out["unit_price"] or 0)
	if "vat_rate" in out:
		out["vat_rate"] = float(out["vat_rate"] or 0)
	return out


# ---------------------------------------------------------------- products

def list_products() -> List[Product]:
	"""All products in insertion order."""
	with get_session() as s:
		return list(s.exec(select(Product).order_by(Product.id.asc())).all())


def create_product(data: Dict[str, Any]) -> Product:
	_require_name(data, "Product")
	with session_scope() as s:
		product = Product()
		_apply(product, _money_fields(data), PRODUCT_FIELDS)
		s.add(product)
		# Ensure PK is populated before leaving the session
		s.flush()
		s.refresh(product)
	logger.info("Created product %s (%s)", product.id, product.name)
	return product


def update_product(product_id: int, data: Dict[str, Any]) -> Product:
	if "name" in data:
		_require_name(data, "Product")
	with session_scope() as s:
		product = s.get(Product, product_id)
		if product is None:
			raise RecordNotFound("Product", product_id)
		_apply(product, _money_fields(data), PRODUCT_FIELDS)
		product.updated_at = utc_now()
		s.add(product)
	logger.info("Updated product %s", product_id)
	return product


def delete_product(product_id: int) -> int:
	"""Delete a product. Returns 1 if deleted, 0 if not found."""
	with session_scope() as s:
		product = s.get(Product, product_id)
		if not product:
			return 0
		s.delete(product)
		s.flush()
	logger.info("Deleted product %s", product_id)
	return 1


# ----------------------------------------------------------------- clients

def list_clients() -> List[Client]:
	with get_session() as s:
		return list(s.exec(select(Client).order_by(Client.id.asc())).all())


def create_client(data: Dict[str, Any]) -> Client:
	_require_name(data, "Client")
	with session_scope() as s:
		client = Client()
		_apply(client, data, CLIENT_FIELDS)
		s.add(client)
		s.flush()
		s.refresh(client)
	logger.info("Created client %s (%s)", client.id, client.name)
	return client


def update_client(client_id: int, data: Dict[str, Any]) -> Client:
	if "name" in data:
		_require_name(data, "Client")
	with session_scope() as s:
		client = s.get(Client, client_id)
		if client is None:
			raise RecordNotFound("Client", client_id)
		_apply(client, data, CLIENT_FIELDS)
		client.updated_at = utc_now()
		s.add(client)
	logger.info("Updated client %s", client_id)
	return client


def invoices_count_for_client(client_id: int) -> int:
	"""Return number of invoices associated with a client."""
	with get_session() as s:
		return int(s.exec(select(func.count(Invoice.id)).where(Invoice.client_id == client_id)).one())


def delete_client(client_id: int) -> int:
	"""Delete a client by id.

	Refuses (ValidationError) while invoices still reference the client.
	Returns 1 if deleted, 0 if not found.
	"""
	with session_scope() as s:
		client = s.get(Client, client_id)
		if not client:
			return 0
		inv_count = s.exec(select(func.count(Invoice.id)).where(Invoice.client_id == client_id)).one()
		if inv_count:
			raise ValidationError("client_id", f"Cannot delete: client has {inv_count} invoice(s).")
		s.delete(client)
		s.flush()
	logger.info("Deleted client %s", client_id)
	return 1


# ----------------------------------------------------------------- company

def get_company() -> Optional[Company]:
	with get_session() as s:
		return s.exec(select(Company).order_by(Company.id.asc())).first()


def save_company(data: Dict[str, Any]) -> Company:
	"""Create or update the single issuing-company row."""
	_require_name(data, "Company")
	with session_scope() as s:
		company = s.exec(select(Company).order_by(Company.id.asc())).first()
		if company is None:
			company = Company()
		_apply(company, data, COMPANY_FIELDS)
		s.add(company)
		s.flush()
		s.refresh(company)
	logger.info("Saved company %s", company.name)
	return company


# ---------------------------------------------------------------- invoices

def _load_invoice(s, invoice_id: int) -> Optional[Invoice]:
	stmt = select(Invoice).where(Invoice.id == invoice_id).options(selectinload(Invoice.lines))
	return s.exec(stmt).first()


def list_invoices() -> List[Invoice]:
	"""Invoices with their lines, newest first (created_at DESC, id DESC)."""
	with get_session() as s:
		stmt = (
			select(Invoice)
			.options(selectinload(Invoice.lines))
			.order_by(Invoice.created_at.desc(), Invoice.id.desc())
		)
		return list(s.exec(stmt).all())


def get_invoice(invoice_id: int) -> Invoice:
	with get_session() as s:
		inv = _load_invoice(s, invoice_id)
	if inv is None:
		raise RecordNotFound("Invoice", invoice_id)
	return inv


def _line_dicts(lines: Iterable[Any]) -> List[Dict[str, Any]]:
	out: List[Dict[str, Any]] = []
	for line in lines:
		src = line if isinstance(line, dict) else {f: getattr(line, f, None) for f in LINE_FIELDS}
		desc = str(src.get("description") or "").strip()
		if not desc:
			continue
		out.append({
			"description": desc,
			"quantity": float(src.get("quantity") or 0),
			"unit_price": round_money(src.get("unit_price") or 0),
			"vat_rate": float(src.get("vat_rate") or 0),
		})
	return out


def _write_lines(s, invoice: Invoice, lines: List[Dict[str, Any]]) -> None:
	s.exec(delete(InvoiceLine).where(InvoiceLine.invoice_id == invoice.id))
	for pos, line in enumerate(lines, 1):
		s.add(InvoiceLine(invoice_id=invoice.id, position=pos, **line))  # type: ignore[arg-type]


def _set_totals(invoice: Invoice, lines: List[Dict[str, Any]]) -> None:
	totals = compute_totals(lines)
	invoice.total_net = float(totals.net)
	invoice.total_vat = float(totals.vat)
	invoice.total_gross = float(totals.gross)


def _check_number_free(s, number: str, invoice_id: Optional[int] = None) -> None:
	stmt = select(Invoice).where(Invoice.invoice_number == number)
	dup = s.exec(stmt).first()
	if dup and dup.id != invoice_id:
		raise ValidationError("invoice_number", f"Invoice number already exists: {number}")


def create_invoice(invoice_dto: Dict[str, Any], prefix: str = "FV/") -> Invoice:
	"""
	Create an invoice and its lines.

	invoice_dto structure:
	  {
		'invoice_number': str | None,  # generated from the prefix/year sequence when empty
		'client_id': int,  # required
		'issue_date': datetime.date,  # required
		'due_date': datetime.date,  # defaults to issue_date
		'status': str,  # optional, defaults to 'unpaid'
		'notes': str,  # optional
		'lines': [
		   {'description': str, 'quantity': float, 'unit_price': float, 'vat_rate': float}, ...
		]
	  }
	Totals are computed from the lines; lines without a description are dropped.
	"""
	client_id = invoice_dto.get("client_id")
	issue_date: date = invoice_dto.get("issue_date")
	if not (isinstance(client_id, int) and isinstance(issue_date, date)):
		raise ValidationError("client_id", "Missing required fields: client_id, issue_date")
	lines = _line_dicts(invoice_dto.get("lines") or [])

	with session_scope() as s:
		if s.get(Client, client_id) is None:
			raise RecordNotFound("Client", client_id)
		number = str(invoice_dto.get("invoice_number") or "").strip()
		if number:
			_check_number_free(s, number)
			n = parse_sequence(number, prefix, issue_date.year)
			if n is not None:
				bump_sequence_to_at_least(prefix, issue_date.year, n, s)
		else:
			number = next_invoice_number(prefix, issue_date.year, s)

		inv = Invoice(
			invoice_number=number,
			client_id=client_id,
			issue_date=issue_date,
			due_date=invoice_dto.get("due_date") or issue_date,
			status=str(invoice_dto.get("status") or InvoiceStatus.UNPAID.value),
			notes=str(invoice_dto.get("notes") or ""),
		)
		_set_totals(inv, lines)
		s.add(inv)
		s.flush()
		s.refresh(inv)
		_write_lines(s, inv, lines)
		inv_id = inv.id

	logger.info("Created invoice %s (%s lines)", number, len(lines))
	return get_invoice(int(inv_id))  # type: ignore[arg-type]


def update_invoice(invoice_id: int, data: Dict[str, Any], prefix: str = "FV/") -> Invoice:
	"""Update invoice fields; replaces all lines when data has a 'lines' key.

	A changed number in the prefix/year series moves that sequence forward.
	updated_at is taken from data when given, else stamped now.
	"""
	with session_scope() as s:
		inv = s.get(Invoice, invoice_id)
		if inv is None:
			raise RecordNotFound("Invoice", invoice_id)
		previous = inv.invoice_number
		number = str(data.get("invoice_number") or "").strip()
		if not number:
			# An empty number keeps the current one
			data = {k: v for k, v in data.items() if k != "invoice_number"}
		elif number != inv.invoice_number:
			_check_number_free(s, number, invoice_id)
		if "status" in data:
			InvoiceStatus(str(data["status"]))
		_apply(inv, data, INVOICE_FIELDS)
		if number and number != previous:
			n = parse_sequence(number, prefix, inv.issue_date.year)
			if n is not None:
				bump_sequence_to_at_least(prefix, inv.issue_date.year, n, s)
		if "lines" in data:
			lines = _line_dicts(data.get("lines") or [])
			_write_lines(s, inv, lines)
		else:
			current = s.exec(
				select(InvoiceLine).where(InvoiceLine.invoice_id == invoice_id).order_by(InvoiceLine.position)
			).all()
			lines = _line_dicts(current)
		_set_totals(inv, lines)
		inv.updated_at = data.get("updated_at") or utc_now()
		s.add(inv)
	logger.info("Updated invoice %s", invoice_id)
	return get_invoice(invoice_id)


def delete_invoice(invoice_id: int) -> int:
	"""Delete a single invoice and all of its lines. Returns 1 if deleted, 0 if not found."""
	with session_scope() as s:
		inv = s.get(Invoice, invoice_id)
		if not inv:
			return 0
		# Remove dependent lines first for compatibility across SQLite versions
		s.exec(delete(InvoiceLine).where(InvoiceLine.invoice_id == invoice_id))
		s.delete(inv)
		s.flush()
	logger.info("Deleted invoice %s", invoice_id)
	return 1


def invoice_fields(invoice: Invoice) -> Dict[str, Any]:
	"""Column values of an invoice (without lines), for full-record updates."""
	return {f: getattr(invoice, f) for f in INVOICE_FIELDS}


def peek_invoice_number(prefix: str, year: int) -> str:
	"""Number the next new invoice of `year` would get (nothing is reserved)."""
	with get_session() as s:
		return peek_next_invoice_number(prefix, year, s)
