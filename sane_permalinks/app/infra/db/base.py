# sane_permalinks/app/infra/db/base.py
"""
Abstract base class for record lookups.
The permalink resolver only ever reads through this interface, so any store
(Postgres via Supabase, an ORM, a plain dict) can back it.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional, Union


class RecordFinder(ABC):
    """
    Abstract interface for finding records of one type.

    Implementations:
    - InMemoryRecordFinder: dict backed, for tests and small hosts
    - SupabaseRecordFinder: PostgREST table lookups
    """

    @abstractmethod
    def find_by_id(self, record_id: Union[int, str]) -> Optional[Any]:
        """
        Get a record by its primary key.

        Args:
            record_id: The identifier, usually an int

        Returns:
            The record, or None if not found
        """
        pass

    @abstractmethod
    def find_by_field(self, field_name: str, value: str) -> Optional[Any]:
        """
        Get the first record whose ``field_name`` equals ``value``.

        Args:
            field_name: Column / attribute name
            value: Value to match exactly

        Returns:
            The record, or None if not found
        """
        pass
