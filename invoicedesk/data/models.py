from __future__ import annotations

from datetime import date, datetime, timezone
from enum import Enum
from typing import Optional, List

from sqlmodel import Field, SQLModel, Relationship
from sqlalchemy.orm import relationship
from sqlalchemy import event

from invoicedesk.core.currency import line_total
from invoicedesk.data.schema import CLIENT_SCHEMA_VERSION


def utc_now() -> datetime:
	"""Timezone-aware timestamp for created_at/updated_at columns."""
	return datetime.now(timezone.utc)


class InvoiceStatus(str, Enum):
	UNPAID = "unpaid"
	PAID = "paid"
	PARTIAL = "partial"
	CANCELLED = "cancelled"


class ClientType(str, Enum):
	INDIVIDUAL = "individual"
	COMPANY = "company"


class Product(SQLModel, table=True):
	id: Optional[int] = Field(default=None, primary_key=True)
	code: str = ""
	name: str
	description: str = ""
	unit_price: float = 0.0
	# Percent, e.g. 21.0
	vat_rate: float = 21.0
	created_at: datetime = Field(default_factory=utc_now)
	updated_at: datetime = Field(default_factory=utc_now)


class Client(SQLModel, table=True):
	id: Optional[int] = Field(default=None, primary_key=True)
	name: str = Field(index=True)
	address: str = ""
	country: str = "PL"
	client_type: str = ClientType.COMPANY.value
	vat_number: str = ""
	kvk_number: str = ""
	nip_number: str = ""
	email: str = ""
	phone: str = ""
	notes: str = ""
	schema_version: int = CLIENT_SCHEMA_VERSION
	created_at: datetime = Field(default_factory=utc_now)
	updated_at: datetime = Field(default_factory=utc_now)


class Company(SQLModel, table=True):
	"""The issuing company; a single row."""

	id: Optional[int] = Field(default=None, primary_key=True)
	name: str = ""
	address: str = ""
	country: str = "PL"
	vat_number: str = ""
	kvk_number: str = ""
	nip_number: str = ""
	email: str = ""
	phone: str = ""
	iban: str = ""
	bic: str = ""


class Invoice(SQLModel, table=True):
	id: Optional[int] = Field(default=None, primary_key=True)
	invoice_number: str = Field(
		index=True,
		sa_column_kwargs={"unique": True},
	)
	client_id: int = Field(foreign_key="client.id", index=True)
	issue_date: date
	due_date: date
	status: str = InvoiceStatus.UNPAID.value
	notes: str = ""
	# Computed from lines by the repository
	total_net: float = 0.0
	total_vat: float = 0.0
	total_gross: float = 0.0
	created_at: datetime = Field(default_factory=utc_now)
	updated_at: datetime = Field(default_factory=utc_now)

	lines: List["InvoiceLine"] = Relationship(
		sa_relationship=relationship(
			"InvoiceLine",
			back_populates="invoice",
			order_by="InvoiceLine.position",
		)
	)


class InvoiceLine(SQLModel, table=True):
	id: Optional[int] = Field(default=None, primary_key=True)
	invoice_id: int = Field(foreign_key="invoice.id", index=True)
	position: int = 0
	description: str
	quantity: float = 0.0
	unit_price: float = 0.0
	vat_rate: float = 0.0
	# Stored line_total = quantity * unit_price (computed on insert/update)
	line_total: float = 0.0

	invoice: Optional["Invoice"] = Relationship(sa_relationship=relationship("Invoice", back_populates="lines"))


@event.listens_for(InvoiceLine, "before_insert")
@event.listens_for(InvoiceLine, "before_update")
def _compute_line_total(mapper, connection, target: InvoiceLine):  # type: ignore[no-redef]
	target.line_total = float(line_total(target.quantity or 0, target.unit_price or 0))
