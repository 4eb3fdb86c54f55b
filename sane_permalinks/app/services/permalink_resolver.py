# sane_permalinks/app/services/permalink_resolver.py
"""
Permalink encoding and lookup for one record type.
Turns records into URL params and URL params back into records.
"""
from __future__ import annotations

import logging
import re
from typing import Any, Callable, Optional, Union

from sane_permalinks.app.domain.errors import RecordNotFoundError, WrongPermalinkError
from sane_permalinks.app.domain.models import (
    DecodedParam,
    LookupOutcome,
    LookupResult,
    OpaqueField,
    PermalinkConfig,
    PrefixedId,
    PureId,
    Record,
)
from sane_permalinks.app.infra.db.base import RecordFinder
from sane_permalinks.services.slugify import sanitize_param

logger = logging.getLogger(__name__)

Sanitizer = Callable[[Optional[str]], Optional[str]]

_PREFIXED_ID_RE = re.compile(r"([0-9]+)-(.*)", re.DOTALL)
_DIGITS_RE = re.compile(r"[0-9]+")


def _coerce_id(param: object) -> Union[int, str]:
    if isinstance(param, int) and not isinstance(param, bool):
        return param
    text = str(param)
    return int(text) if _DIGITS_RE.fullmatch(text) else text


class PermalinkResolver:
    """
    Encodes records of one type as params and finds them again.

    Responsibilities:
    - Build the canonical param of a record (``to_param``)
    - Decode an incoming param into an id or field lookup (``decode_param``)
    - Look the record up through the ``RecordFinder`` and check the permalink
    """

    def __init__(
        self,
        config: Optional[PermalinkConfig] = None,
        finder: Optional[RecordFinder] = None,
        sanitizer: Optional[Sanitizer] = None,
        record_type: Optional[type] = None,
    ):
        self.config = config or PermalinkConfig()
        self.finder = finder
        self.record_type = record_type
        self._sanitizer = sanitizer or sanitize_param

    # ------------------------------------------------------------------
    # Encoding
    # ------------------------------------------------------------------

    def native_param(self, record: Record) -> str:
        """The record's own identifier, rendered as a string."""
        return str(getattr(record, self.config.primary_key))

    def read_source(self, record: Record) -> Optional[str]:
        """Read the source field now; zero-argument methods are called."""
        value = getattr(record, self.config.source_field, None)
        if callable(value):
            value = value()
        return value

    def sanitize(self, text: Optional[str]) -> Optional[str]:
        return self._sanitizer(text)

    def to_param(self, record: Record) -> Optional[str]:
        """
        Canonical param of ``record``.

        Returns:
            The plain id without a source field, the slug in field mode
            (None when the field is empty), "<id>-<slug>" with ``prepend_id``
        """
        if not self.config.uses_permalink:
            return self.native_param(record)

        slug = self.sanitize(self.read_source(record))
        if not self.config.prepend_id:
            return slug

        return f"{self.native_param(record)}-{slug or ''}"

    # ------------------------------------------------------------------
    # Decoding
    # ------------------------------------------------------------------

    def decode_param(self, param: object) -> DecodedParam:
        """
        Work out how ``param`` should be looked up. Pure, no storage access.

        - no source field: the param is an id
        - source field only: the param is the slug itself
        - prepend_id: "<digits>-..." gives the id, bare digits are an id,
          anything else is handed to the id lookup verbatim
        """
        if not self.config.uses_permalink:
            return PureId(_coerce_id(param))

        text = str(param)
        if not self.config.prepend_id:
            return OpaqueField(text)

        match = _PREFIXED_ID_RE.match(text)
        if match:
            return PrefixedId(int(match.group(1)), match.group(2))
        if _DIGITS_RE.fullmatch(text):
            return PureId(int(text))
        return OpaqueField(text)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def _fetch(self, decoded: DecodedParam) -> Optional[Any]:
        if self.finder is None:
            raise RuntimeError("PermalinkResolver has no RecordFinder bound")

        if isinstance(decoded, OpaqueField):
            if self.config.prepend_id:
                return self.finder.find_by_id(decoded.value)
            return self.finder.find_by_field(self.config.source_field, decoded.value)
        return self.finder.find_by_id(decoded.id)

    def resolve(self, param: object) -> LookupResult:
        """
        Look ``param`` up without raising domain errors.

        MISMATCH is only reported when ``raise_on_wrong_permalink`` is set
        together with ``prepend_id``. Bare numeric params are never checked.
        """
        text = str(param)
        decoded = self.decode_param(param)
        record = self._fetch(decoded)
        logger.debug("Lookup %r decoded as %r: %s", text, decoded, "hit" if record is not None else "miss")

        if record is None:
            return LookupResult(outcome=LookupOutcome.NOT_FOUND, param=text)

        if self.config.validates_permalink and not isinstance(decoded, PureId):
            canonical = self.to_param(record)
            if canonical != text:
                logger.info("Permalink %r does not match canonical %r", text, canonical)
                return LookupResult(
                    outcome=LookupOutcome.MISMATCH,
                    param=text,
                    record=record,
                    canonical_param=canonical,
                )

        return LookupResult(outcome=LookupOutcome.FOUND, param=text, record=record)

    def find_by_param(self, param: object) -> Optional[Any]:
        """
        Find the record for ``param``.

        Returns:
            The record, or None if not found

        Raises:
            WrongPermalinkError: If the record's canonical param differs and
                ``raise_on_wrong_permalink`` is enabled
        """
        result = self.resolve(param)
        if result.is_mismatch:
            raise WrongPermalinkError(result.record, result.param, result.canonical_param)
        return result.record

    def get_by_param(self, param: object) -> Any:
        """
        Same as ``find_by_param`` but a missing record is an error.

        Raises:
            RecordNotFoundError: If nothing matches ``param``
            WrongPermalinkError: See ``find_by_param``
        """
        record = self.find_by_param(param)
        if record is None:
            raise RecordNotFoundError(param, self.record_type)
        return record
