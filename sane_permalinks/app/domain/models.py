# sane_permalinks/app/domain/models.py
"""
Domain models for permalink encoding and lookup.
These are pure data structures with no infrastructure dependencies.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Protocol, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class Record(Protocol):
    """
    What the resolver expects from a record.

    The identity lives in the attribute named by ``PermalinkConfig.primary_key``
    (``id`` by default). The source field named by ``PermalinkConfig.source_field``
    may be a plain attribute or a zero-argument method.
    """
    id: Any


class PermalinkConfig(BaseModel):
    """
    Permalink options for one record type. Immutable once built.

    Accepts the classic option names, so ``PermalinkConfig(**{"with": "title"})``
    and ``PermalinkConfig(source_field="title")`` are equivalent.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    source_field: Optional[str] = Field(default=None, alias="with")
    prepend_id: bool = False
    raise_on_wrong_permalink: bool = False
    primary_key: str = "id"

    @field_validator("source_field", "primary_key")
    @classmethod
    def _not_blank(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value.strip():
            raise ValueError("field name must not be blank")
        return value

    @model_validator(mode="after")
    def _options_need_source_field(self) -> "PermalinkConfig":
        if self.source_field is None and (self.prepend_id or self.raise_on_wrong_permalink):
            raise ValueError("prepend_id and raise_on_wrong_permalink require 'with'")
        return self

    @property
    def uses_permalink(self) -> bool:
        """False means the type keeps its plain id as param."""
        return self.source_field is not None

    @property
    def validates_permalink(self) -> bool:
        # without a prepended id there is nothing to compare against
        return self.uses_permalink and self.prepend_id and self.raise_on_wrong_permalink


@dataclass(frozen=True)
class PureId:
    """Param is just an identifier ("23" or 23)."""
    id: Union[int, str]


@dataclass(frozen=True)
class PrefixedId:
    """Param looks like "<id>-<slug>"."""
    id: int
    slug_hint: str


@dataclass(frozen=True)
class OpaqueField:
    """Param has no id structure and is used verbatim."""
    value: str


DecodedParam = Union[PureId, PrefixedId, OpaqueField]


class LookupOutcome(str, Enum):
    NOT_FOUND = "NOT_FOUND"
    FOUND = "FOUND"
    MISMATCH = "MISMATCH"


@dataclass
class LookupResult:
    """Result of resolving a param without raising."""
    outcome: LookupOutcome
    param: str
    record: Any = None
    canonical_param: Optional[str] = None

    @property
    def found(self) -> bool:
        return self.outcome is not LookupOutcome.NOT_FOUND

    @property
    def is_mismatch(self) -> bool:
        return self.outcome is LookupOutcome.MISMATCH
