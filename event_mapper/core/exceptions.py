"""
Custom exception classes.

Represent errors raised while mapping an invocation event.
Missing containers, missing path segments and unauthenticated events are not
errors; they resolve to MISSING and are pruned by the engine.
"""

from typing import Any, List


class EventMapperError(Exception):
    """Base exception class for event mapping."""

    pass


class MalformedBodyError(EventMapperError, ValueError):
    """Raised when the event body is present but cannot be decoded as JSON."""

    def __init__(self, cause: Exception):
        self.cause = cause
        super().__init__(f"Malformed event body: {cause}")


class InvalidBindingError(EventMapperError, ValueError):
    """Raised when a binding names an unknown source."""

    def __init__(self, source: Any):
        self.source = source
        super().__init__(f"Unknown binding source: {source!r}")


class EventValidationError(EventMapperError):
    """Raised when extracted data does not validate against the target model."""

    def __init__(self, model_name: str, errors: List[dict]):
        self.model_name = model_name
        self.errors = errors
        super().__init__(f"Extracted event does not match {model_name}: {len(errors)} error(s)")
