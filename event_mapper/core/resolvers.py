"""
Source resolvers.

One function per event container. Each takes the raw event dict and an
optional dotted path and returns the located value or MISSING. Only the body
resolver can fail, and only when the body is not valid JSON.
"""

import base64
import json
import logging
from typing import Any, Callable, Dict, Mapping, Optional

from .binding import Binding, Source
from .exceptions import MalformedBodyError
from .paths import MISSING, get_path

logger = logging.getLogger("event_mapper.resolvers")


def _container(event: Mapping[str, Any], key: str) -> Any:
    value = event.get(key)
    return MISSING if value is None else value


def _lookup(container: Any, path: Optional[str]) -> Any:
    if container is MISSING:
        return MISSING
    if path:
        return get_path(container, path)
    return container


def decode_body(event: Mapping[str, Any], decode_base64: bool = True) -> Any:
    """
    JSON-decode the event body.

    Returns MISSING for an absent or empty body without parsing.
    Raises MalformedBodyError when the body cannot be decoded.
    """
    body = event.get("body")
    if not body:
        return MISSING

    try:
        if decode_base64 and event.get("isBase64Encoded"):
            body = base64.b64decode(body, validate=True).decode("utf-8")
        return json.loads(body)
    # JSON, base64 and UTF-8 failures are all ValueErrors.
    except ValueError as e:
        logger.warning(
            "Failed to decode event body as JSON",
            extra={"snippet": body[:200] if isinstance(body, str) else "", "error": str(e)},
        )
        raise MalformedBodyError(e) from e


class ParsedBody:
    """
    Per-call memo of the decoded body.

    Decoding is pure, so sharing the result between body-bound nodes of one
    extraction does not change what they see.
    """

    def __init__(self, event: Mapping[str, Any], memoize: bool = True, decode_base64: bool = True):
        self.event = event
        self.memoize = memoize
        self.decode_base64 = decode_base64
        self._value: Any = MISSING
        self._decoded = False

    def get(self) -> Any:
        if not self.memoize:
            return decode_body(self.event, self.decode_base64)
        if not self._decoded:
            self._value = decode_body(self.event, self.decode_base64)
            self._decoded = True
        return self._value


def resolve_body(
    event: Mapping[str, Any], path: Optional[str] = None, body: Optional[ParsedBody] = None
) -> Any:
    """Resolve from the JSON body; the whole document when no path is given."""
    parsed = (body or ParsedBody(event)).get()
    return _lookup(parsed, path)


def resolve_query(event: Mapping[str, Any], path: Optional[str] = None, **_: Any) -> Any:
    """Resolve from queryStringParameters."""
    return _lookup(_container(event, "queryStringParameters"), path)


def resolve_path(event: Mapping[str, Any], path: Optional[str] = None, **_: Any) -> Any:
    """Resolve from pathParameters."""
    return _lookup(_container(event, "pathParameters"), path)


def get_claims(event: Mapping[str, Any]) -> Any:
    """
    Claims of an authenticated invocation, or MISSING.

    HTTP API (v2) JWT authorizers put them under authorizer.jwt.claims;
    REST API (v1) Cognito authorizers under authorizer.claims.
    """
    authorizer = get_path(event, "requestContext.authorizer")
    if not isinstance(authorizer, Mapping):
        return MISSING

    jwt = authorizer.get("jwt")
    if isinstance(jwt, Mapping) and jwt.get("claims") is not None:
        return jwt["claims"]
    if authorizer.get("claims") is not None:
        return authorizer["claims"]
    return MISSING


def resolve_claims(event: Mapping[str, Any], path: Optional[str] = None, **_: Any) -> Any:
    """Resolve from the authorizer claims; MISSING for unauthenticated events."""
    return _lookup(get_claims(event), path)


RESOLVERS: Dict[Source, Callable[..., Any]] = {
    Source.BODY: resolve_body,
    Source.QUERY: resolve_query,
    Source.PATH: resolve_path,
    Source.JWT_CLAIMS: resolve_claims,
}


def resolve(event: Mapping[str, Any], binding: Binding, body: Optional[ParsedBody] = None) -> Any:
    """Dispatch a binding to the resolver of its source."""
    return RESOLVERS[binding.source](event, binding.path, body=body)
