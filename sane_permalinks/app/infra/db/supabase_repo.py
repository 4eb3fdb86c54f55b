from __future__ import annotations

import logging
from types import SimpleNamespace
from typing import Any, Callable, Optional, Union

from postgrest.exceptions import APIError
from supabase import Client, create_client

from sane_permalinks.app.config import get_settings
from sane_permalinks.app.domain.errors import RecordLookupError
from sane_permalinks.app.infra.db.base import RecordFinder

logger = logging.getLogger(__name__)

RowFactory = Callable[[dict[str, Any]], Any]

# invalid_text_representation: the value cannot be cast to the column type
INVALID_TEXT_REPRESENTATION = "22P02"


def _row_to_namespace(row: dict[str, Any]) -> SimpleNamespace:
    return SimpleNamespace(**row)


def _create_supabase_client() -> Client:
    settings = get_settings()
    if not settings.SUPABASE_URL or not settings.SUPABASE_SERVICE_ROLE_KEY:
        raise ValueError("SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY required")
    return create_client(str(settings.SUPABASE_URL), settings.SUPABASE_SERVICE_ROLE_KEY)


class SupabaseRecordFinder(RecordFinder):
    """Looks records up in one PostgREST table, one row at a time."""

    def __init__(
        self,
        table_name: str,
        client: Client | None = None,
        row_factory: RowFactory = _row_to_namespace,
        primary_key: str = "id",
    ):
        self.table_name = table_name
        self.primary_key = primary_key
        self._row_factory = row_factory
        self._client = client or _create_supabase_client()
        logger.info("SupabaseRecordFinder initialized for table %s", table_name)

    def find_by_id(self, record_id: Union[int, str]) -> Optional[Any]:
        return self._find_one("find_by_id", self.primary_key, record_id)

    def find_by_field(self, field_name: str, value: str) -> Optional[Any]:
        return self._find_one("find_by_field", field_name, value)

    def _find_one(self, operation: str, column: str, value: object) -> Optional[Any]:
        try:
            result = (
                self._client.table(self.table_name)
                .select("*")
                .eq(column, value)
                .limit(1)
                .execute()
            )
        except APIError as error:
            if error.code == INVALID_TEXT_REPRESENTATION:
                logger.debug("%s on %s: %r is not a valid %s", operation, self.table_name, value, column)
                return None
            logger.error("API error in %s on %s: %s", operation, self.table_name, error.message)
            raise RecordLookupError(operation, str(error.message)) from error
        except (ConnectionError, TimeoutError) as error:
            logger.error("Network error in %s on %s: %s", operation, self.table_name, error)
            raise RecordLookupError(operation, str(error)) from error

        rows = result.data or []
        if not rows:
            return None
        return self._row_factory(rows[0])
