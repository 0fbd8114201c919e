from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Iterable, List, Optional, Sequence, TypeVar

T = TypeVar("T")

PRODUCT_SEARCH_FIELDS = ("name", "code", "description")
CLIENT_SEARCH_FIELDS = ("name", "email", "vat_number", "nip_number")
OLDEST = datetime.min.replace(tzinfo=timezone.utc)


def _value(record: Any, field: str) -> Any:
    if isinstance(record, dict):
        return record.get(field)
    return getattr(record, field, None)


def matches(record: Any, term: str, fields: Iterable[str]) -> bool:
    """True if any of `fields` contains `term` (case-insensitive substring)."""
    needle = term.lower()
    for field in fields:
        val = _value(record, field)
        if val is None:
            continue
        if needle in str(val).lower():
            return True
    return False


def filter_records(records: Optional[Sequence[T]], term: str, fields: Iterable[str]) -> Sequence[T]:
    """Filter a collection for a list view.

    An empty term returns the collection itself; a collection that is still
    loading (None) yields an empty list.
    """
    if records is None:
        return []
    if not term:
        return records
    fields = tuple(fields)
    return [r for r in records if matches(r, term, fields)]


def sort_newest_first(records: Optional[Iterable[T]]) -> List[T]:
    """Sort by created_at descending; records without a timestamp go last."""
    def key(r: Any) -> datetime:
        stamp = _value(r, "created_at") or OLDEST
        # SQLite hands back naive values; treat them as UTC
        return stamp if stamp.tzinfo else stamp.replace(tzinfo=timezone.utc)

    return sorted(records or [], key=key, reverse=True)
