from __future__ import annotations

from typing import Any, Optional


class PermalinkError(Exception):
    pass


class WrongPermalinkError(PermalinkError):
    """A record was found by id, but the param is not its canonical permalink.

    The caller usually answers with a redirect to ``canonical_param``.
    """

    def __init__(self, record: Any, param: str, canonical_param: Optional[str] = None):
        super().__init__(f"Wrong permalink {param!r}, canonical is {canonical_param!r}")
        self.record = record
        self.param = param
        self.canonical_param = canonical_param

    @property
    def obj(self) -> Any:
        return self.record


class RecordNotFoundError(PermalinkError):
    def __init__(self, param: object, record_type: Optional[type] = None):
        target = record_type.__name__ if record_type is not None else "record"
        super().__init__(f"Couldn't find {target} with param {param!r}")
        self.param = param
        self.record_type = record_type


class RecordLookupError(PermalinkError):
    def __init__(self, operation: str, reason: str):
        super().__init__(f"Record lookup error during {operation}: {reason}")
        self.operation = operation
        self.reason = reason


class PermalinkConfigurationError(PermalinkError):
    def __init__(self, errors: list[str]):
        super().__init__(f"Permalink configuration errors: {', '.join(errors)}")
        self.errors = errors
