"""
Core logic package.

Provides bindings, source resolvers and the extraction engine.
"""

from .binding import (
    Binding,
    BindingRegistry,
    FromBody,
    FromJwtClaims,
    FromParams,
    FromQuery,
    Source,
    attach,
    default_registry,
    get_binding,
    has_binding,
)
from .engine import EventMapper, extract, parse
from .exceptions import (
    EventMapperError,
    EventValidationError,
    InvalidBindingError,
    MalformedBodyError,
)
from .paths import MISSING, get_path

__all__ = [
    "Binding",
    "BindingRegistry",
    "FromBody",
    "FromJwtClaims",
    "FromParams",
    "FromQuery",
    "Source",
    "attach",
    "default_registry",
    "get_binding",
    "has_binding",
    "EventMapper",
    "extract",
    "parse",
    "EventMapperError",
    "EventValidationError",
    "InvalidBindingError",
    "MalformedBodyError",
    "MISSING",
    "get_path",
]
