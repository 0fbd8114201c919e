from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_EVEN, InvalidOperation
from typing import Any, Iterable, Optional

CENT = Decimal("0.01")


def to_decimal(x: object) -> Decimal:
	"""Best-effort conversion to Decimal via str to avoid binary float artifacts."""
	try:
		return Decimal(str(x))
	except (InvalidOperation, ValueError, TypeError):
		return Decimal("0")


def round_money(x: float | Decimal) -> float:
	"""Round to 2 decimals using banker's rounding (round-half-to-even) and return float."""
	return float(round_money_dec(x))


def round_money_dec(x: float | Decimal) -> Decimal:
	"""Round to 2 decimals and return Decimal for high-precision internal math."""
	return to_decimal(x).quantize(CENT, rounding=ROUND_HALF_EVEN)


def fmt_money(x: float | Decimal, width: Optional[int] = None) -> str:
	"""
	Format monetary value with two decimals. If width is provided, return a right-aligned string.
	"""
	s = f"{round_money_dec(x):.2f}"
	return s.rjust(width) if isinstance(width, int) and width > 0 else s


def format_currency(x: float | Decimal, currency: str = "EUR") -> str:
	"""'1234.5' -> '1 234.50 EUR'."""
	q = round_money_dec(x)
	s = f"{q:,.2f}".replace(",", " ")
	return f"{s} {currency}".strip()


def line_total(quantity: object, unit_price: object) -> Decimal:
	return round_money_dec(to_decimal(quantity) * to_decimal(unit_price))


def vat_amount(net: object, vat_rate: object) -> Decimal:
	return round_money_dec(to_decimal(net) * to_decimal(vat_rate) / Decimal("100"))


@dataclass(frozen=True)
class Totals:
	net: Decimal
	vat: Decimal
	gross: Decimal


def _field(line: Any, name: str) -> Any:
	if isinstance(line, dict):
		return line.get(name, 0)
	return getattr(line, name, 0)


def compute_totals(lines: Iterable[Any]) -> Totals:
	"""Net, VAT and gross for invoice lines (dicts or objects).

	VAT is added on top of each line: line VAT is rounded per line, then summed.
	"""
	net = Decimal("0")
	vat = Decimal("0")
	for line in lines:
		amount = line_total(_field(line, "quantity"), _field(line, "unit_price"))
		net += amount
		vat += vat_amount(amount, _field(line, "vat_rate") or 0)
	net = round_money_dec(net)
	vat = round_money_dec(vat)
	return Totals(net=net, vat=vat, gross=net + vat)
