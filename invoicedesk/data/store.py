"""In-memory entity stores backing the list views.

Each store owns a cached list of records read from the repository. Views read
`items`; every mutation goes through the store, which writes to the database
and then reloads the cache.
"""
from __future__ import annotations

from typing import Any, Callable, ClassVar, Dict, List, Optional
import logging

from invoicedesk.data import repo
from invoicedesk.data.models import Company
from invoicedesk.errors import RecordNotFound

logger = logging.getLogger(__name__)


class EntityStore:
    kind: ClassVar[str] = "Record"
    _load: ClassVar[Callable[[], List[Any]]]
    _create: ClassVar[Callable[[Dict[str, Any]], Any]]
    _update: ClassVar[Callable[[int, Dict[str, Any]], Any]]
    _delete: ClassVar[Callable[[int], int]]

    def __init__(self) -> None:
        self.items: List[Any] = []
        self.loaded = False

    def refresh(self) -> List[Any]:
        self.items = list(type(self)._load())
        self.loaded = True
        logger.debug("Loaded %d %s record(s)", len(self.items), self.kind.lower())
        return self.items

    def get(self, record_id: Optional[int]) -> Optional[Any]:
        """Look a record up in the cached list (no database read)."""
        if record_id is None:
            return None
        return next((r for r in self.items if r.id == record_id), None)

    def create(self, data: Dict[str, Any]) -> Any:
        record = type(self)._create(data)
        self.refresh()
        return record

    def update(self, record_id: int, data: Dict[str, Any]) -> Any:
        record = type(self)._update(record_id, data)
        self.refresh()
        return record

    def delete(self, record_id: int) -> None:
        if type(self)._delete(record_id) == 0:
            raise RecordNotFound(self.kind, record_id)
        self.refresh()


class ProductStore(EntityStore):
    kind = "Product"
    _load = staticmethod(repo.list_products)
    _create = staticmethod(repo.create_product)
    _update = staticmethod(repo.update_product)
    _delete = staticmethod(repo.delete_product)


class ClientStore(EntityStore):
    kind = "Client"
    _load = staticmethod(repo.list_clients)
    _create = staticmethod(repo.create_client)
    _update = staticmethod(repo.update_client)
    _delete = staticmethod(repo.delete_client)


class InvoiceStore(EntityStore):
    kind = "Invoice"
    _load = staticmethod(repo.list_invoices)
    _delete = staticmethod(repo.delete_invoice)

    def __init__(self, prefix: str = "FV/") -> None:
        super().__init__()
        self.prefix = prefix

    def create(self, data: Dict[str, Any]) -> Any:
        record = repo.create_invoice(data, prefix=self.prefix)
        self.refresh()
        return record

    def update(self, record_id: int, data: Dict[str, Any]) -> Any:
        record = repo.update_invoice(record_id, data, prefix=self.prefix)
        self.refresh()
        return record

    def peek_number(self, year: int) -> str:
        return repo.peek_invoice_number(self.prefix, year)


class CompanyStore:
    """The single issuing company."""

    def __init__(self) -> None:
        self.company: Optional[Company] = None

    def refresh(self) -> Optional[Company]:
        self.company = repo.get_company()
        return self.company

    def save(self, data: Dict[str, Any]) -> Company:
        self.company = repo.save_company(data)
        return self.company
