from __future__ import annotations

import logging
import threading
from typing import Any, Iterable, Optional, Union

from sane_permalinks.app.infra.db.base import RecordFinder

logger = logging.getLogger(__name__)


def _read_attr(record: Any, name: str) -> Any:
    value = getattr(record, name, None)
    return value() if callable(value) else value


class InMemoryRecordFinder(RecordFinder):
    """Keeps records in a dict keyed by the string form of their primary key."""

    def __init__(self, records: Iterable[Any] = (), primary_key: str = "id"):
        self.primary_key = primary_key
        self._records: dict[str, Any] = {}
        self._lock = threading.Lock()
        for record in records:
            self.add(record)

    def add(self, record: Any) -> Any:
        key = str(_read_attr(record, self.primary_key))
        with self._lock:
            self._records[key] = record
        return record

    def remove(self, record_id: Union[int, str]) -> bool:
        with self._lock:
            return self._records.pop(str(record_id), None) is not None

    def __len__(self) -> int:
        return len(self._records)

    def find_by_id(self, record_id: Union[int, str]) -> Optional[Any]:
        return self._records.get(str(record_id))

    def find_by_field(self, field_name: str, value: str) -> Optional[Any]:
        with self._lock:
            records = list(self._records.values())

        for record in records:
            if _read_attr(record, field_name) == value:
                return record
        logger.debug("No record with %s=%r", field_name, value)
        return None
