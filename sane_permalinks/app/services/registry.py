# sane_permalinks/app/services/registry.py
"""
Registry of permalink resolvers, one per record type.
Filled once at startup; read-only afterwards.
"""
from __future__ import annotations

import logging
from typing import Any, Optional

from pydantic import ValidationError

from sane_permalinks.app.config import get_settings
from sane_permalinks.app.domain.errors import PermalinkConfigurationError
from sane_permalinks.app.domain.models import PermalinkConfig
from sane_permalinks.app.infra.db.base import RecordFinder
from sane_permalinks.app.services.permalink_resolver import PermalinkResolver, Sanitizer

logger = logging.getLogger(__name__)


def _build_config(options: dict[str, Any]) -> PermalinkConfig:
    options.setdefault("primary_key", get_settings().PERMALINK_DEFAULT_PRIMARY_KEY)
    try:
        return PermalinkConfig(**options)
    except ValidationError as error:
        messages = [
            f"{'.'.join(str(part) for part in err['loc']) or 'options'}: {err['msg']}"
            for err in error.errors()
        ]
        raise PermalinkConfigurationError(messages) from error


class PermalinkRegistry:
    """Maps record types to their bound ``PermalinkResolver``."""

    def __init__(self) -> None:
        self._resolvers: dict[type, PermalinkResolver] = {}

    def register(
        self,
        record_type: type,
        finder: RecordFinder,
        config: Optional[PermalinkConfig] = None,
        *,
        sanitizer: Optional[Sanitizer] = None,
        **options: Any,
    ) -> PermalinkResolver:
        """
        Register permalink behaviour for ``record_type``.

        Args:
            record_type: The class whose instances get permalinks
            finder: Storage lookups for that class
            config: Ready-made config; mutually exclusive with ``options``
            sanitizer: Replacement for ``sanitize_param``
            **options: ``with`` / ``source_field``, ``prepend_id``,
                ``raise_on_wrong_permalink``, ``primary_key``

        Returns:
            The resolver bound to ``record_type``

        Raises:
            PermalinkConfigurationError: Duplicate registration or bad options
        """
        if record_type in self._resolvers:
            raise PermalinkConfigurationError([f"{record_type.__name__} is already registered"])
        if config is not None and options:
            raise PermalinkConfigurationError(["pass either config or options, not both"])

        if config is None:
            config = _build_config(dict(options))

        resolver = PermalinkResolver(
            config=config,
            finder=finder,
            sanitizer=sanitizer,
            record_type=record_type,
        )
        self._resolvers[record_type] = resolver
        logger.info(
            "Registered permalinks for %s (with=%s, prepend_id=%s, raise_on_wrong_permalink=%s)",
            record_type.__name__,
            config.source_field,
            config.prepend_id,
            config.raise_on_wrong_permalink,
        )
        return resolver

    def resolver_for(self, record_type: type) -> PermalinkResolver:
        # subclasses share the closest registered ancestor
        for klass in record_type.__mro__:
            resolver = self._resolvers.get(klass)
            if resolver is not None:
                return resolver
        raise KeyError(f"No permalink registration for {record_type.__name__}")

    def __contains__(self, record_type: object) -> bool:
        if not isinstance(record_type, type):
            return False
        return any(klass in self._resolvers for klass in record_type.__mro__)

    def registered_types(self) -> list[type]:
        return list(self._resolvers)

    def to_param(self, record: Any) -> Optional[str]:
        """Canonical param; unregistered types fall back to their plain id."""
        record_type = type(record)
        if record_type in self:
            return self.resolver_for(record_type).to_param(record)
        return PermalinkResolver(_build_config({})).native_param(record)

    def find_by_param(self, record_type: type, param: object) -> Optional[Any]:
        return self.resolver_for(record_type).find_by_param(param)

    def get_by_param(self, record_type: type, param: object) -> Any:
        return self.resolver_for(record_type).get_by_param(param)


default_registry = PermalinkRegistry()


def make_permalink(
    record_type: type,
    finder: RecordFinder,
    *,
    sanitizer: Optional[Sanitizer] = None,
    **options: Any,
) -> PermalinkResolver:
    """Register ``record_type`` on the process-wide ``default_registry``."""
    return default_registry.register(record_type, finder, sanitizer=sanitizer, **options)
