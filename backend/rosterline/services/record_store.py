"""Boundary to the external record store.

Only the four capabilities the scheduling layer needs are modelled. Writes take
an ``expected_updated`` revision so a decision made on a stale read is refused
by the store instead of silently applied.
"""
import logging
import threading
import uuid
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Union

logger = logging.getLogger(__name__)

Record = Dict[str, Any]
RecordFilter = Union[Dict[str, Any], Callable[[Record], bool], None]


class RecordStoreError(Exception):
    pass


class RecordNotFoundError(RecordStoreError):
    def __init__(self, kind: str, record_id: str):
        super().__init__(f"{kind} record '{record_id}' not found")
        self.kind = kind
        self.record_id = record_id


class StaleRecordError(RecordStoreError):
    def __init__(self, kind: str, record_id: str, expected: str, actual: str):
        super().__init__(
            f"{kind} record '{record_id}' changed since it was read "
            f"(expected revision {expected}, found {actual})"
        )
        self.kind = kind
        self.record_id = record_id


def _matches(record: Record, record_filter: RecordFilter) -> bool:
    if record_filter is None:
        return True
    if callable(record_filter):
        return bool(record_filter(record))
    return all(str(record.get(field)) == str(value) for field, value in record_filter.items())


def sort_records(records: List[Record], sort: Optional[str]) -> List[Record]:
    """Sort by "field,-other" expressions; a leading "-" means descending."""
    if not sort:
        return list(records)
    result = list(records)
    fields = [f.strip() for f in sort.split(",") if f.strip()]
    # Stable sorts applied from the least significant key
    for field in reversed(fields):
        descending = field.startswith("-")
        name = field.lstrip("-+")
        present = [r for r in result if r.get(name) is not None]
        missing = [r for r in result if r.get(name) is None]
        try:
            present = sorted(present, key=lambda r: r[name], reverse=descending)
        except TypeError:
            # Mixed value types fall back to their text form
            present = sorted(present, key=lambda r: str(r[name]), reverse=descending)
        # Records without the field always come last
        result = present + missing
    return result


class RecordStore(ABC):
    """Collection based create / read / update / list capability."""

    @abstractmethod
    def list(self, kind: str, record_filter: RecordFilter = None, sort: Optional[str] = None) -> List[Record]:
        pass

    @abstractmethod
    def get(self, kind: str, record_id: str) -> Record:
        pass

    @abstractmethod
    def create(self, kind: str, fields: Record) -> Record:
        pass

    @abstractmethod
    def update(
        self,
        kind: str,
        record_id: str,
        fields: Record,
        expected_updated: Optional[str] = None,
    ) -> Record:
        pass


class InMemoryRecordStore(RecordStore):
    """Thread-safe in-process store, used for local runs and tests."""

    def __init__(self):
        self._collections: Dict[str, Dict[str, Record]] = {}
        self._revision = 0
        self._lock = threading.Lock()

    def _next_revision(self) -> str:
        self._revision += 1
        stamp = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S")
        return f"{stamp}.{self._revision:06d}"

    def list(self, kind: str, record_filter: RecordFilter = None, sort: Optional[str] = None) -> List[Record]:
        with self._lock:
            records = [dict(r) for r in self._collections.get(kind, {}).values()]
        return sort_records([r for r in records if _matches(r, record_filter)], sort)

    def get(self, kind: str, record_id: str) -> Record:
        with self._lock:
            record = self._collections.get(kind, {}).get(record_id)
            if record is None:
                raise RecordNotFoundError(kind, record_id)
            return dict(record)

    def create(self, kind: str, fields: Record) -> Record:
        with self._lock:
            revision = self._next_revision()
            record = dict(fields)
            record["id"] = uuid.uuid4().hex[:15]
            record["created"] = revision
            record["updated"] = revision
            self._collections.setdefault(kind, {})[record["id"]] = record
            logger.debug("Created %s record %s", kind, record["id"])
            return dict(record)

    def update(
        self,
        kind: str,
        record_id: str,
        fields: Record,
        expected_updated: Optional[str] = None,
    ) -> Record:
        with self._lock:
            record = self._collections.get(kind, {}).get(record_id)
            if record is None:
                raise RecordNotFoundError(kind, record_id)
            if expected_updated is not None and record["updated"] != expected_updated:
                raise StaleRecordError(kind, record_id, expected_updated, record["updated"])
            record.update({k: v for k, v in fields.items() if k not in ("id", "created", "updated")})
            record["updated"] = self._next_revision()
            logger.debug("Updated %s record %s", kind, record_id)
            return dict(record)
