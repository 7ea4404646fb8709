"""
Declarative extraction of API Gateway invocation events into pydantic-shaped data.
"""

from .core import (
    MISSING,
    Binding,
    BindingRegistry,
    EventMapper,
    EventMapperError,
    EventValidationError,
    FromBody,
    FromJwtClaims,
    FromParams,
    FromQuery,
    InvalidBindingError,
    MalformedBodyError,
    Source,
    attach,
    extract,
    get_binding,
    has_binding,
    parse,
)

__all__ = [
    "MISSING",
    "Binding",
    "BindingRegistry",
    "EventMapper",
    "EventMapperError",
    "EventValidationError",
    "FromBody",
    "FromJwtClaims",
    "FromParams",
    "FromQuery",
    "InvalidBindingError",
    "MalformedBodyError",
    "Source",
    "attach",
    "extract",
    "get_binding",
    "has_binding",
    "parse",
]
