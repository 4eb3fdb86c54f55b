from sane_permalinks.app.domain.errors import (
    PermalinkConfigurationError,
    PermalinkError,
    RecordLookupError,
    RecordNotFoundError,
    WrongPermalinkError,
)
from sane_permalinks.app.domain.models import (
    LookupOutcome,
    LookupResult,
    OpaqueField,
    PermalinkConfig,
    PrefixedId,
    PureId,
)
from sane_permalinks.app.infra.db.base import RecordFinder
from sane_permalinks.app.infra.db.memory_repo import InMemoryRecordFinder
from sane_permalinks.app.services.permalink_resolver import PermalinkResolver
from sane_permalinks.app.services.registry import PermalinkRegistry, default_registry, make_permalink
from sane_permalinks.services.slugify import sanitize_param, slugify

__all__ = [
    "InMemoryRecordFinder",
    "LookupOutcome",
    "LookupResult",
    "OpaqueField",
    "PermalinkConfig",
    "PermalinkConfigurationError",
    "PermalinkError",
    "PermalinkRegistry",
    "PermalinkResolver",
    "PrefixedId",
    "PureId",
    "RecordFinder",
    "RecordLookupError",
    "RecordNotFoundError",
    "WrongPermalinkError",
    "default_registry",
    "make_permalink",
    "sanitize_param",
    "slugify",
]
