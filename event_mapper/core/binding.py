"""
Binding model.

A Binding tells the engine which event container a schema node is read from
and, optionally, where inside that container. Bindings are kept in a
side-table keyed by node identity, so pydantic's own types are never patched.

Two ways to declare one:

    class Request(BaseModel):
        user_id: Annotated[str, FromParams("id")]
        body: Annotated[Body, FromBody()]

    attach(Request.model_fields["user_id"], Source.PATH, "id")

Attachment is a setup step expected to run once per schema definition
(typically at import time); it is not synchronized.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple, TypeVar, Union

from .exceptions import InvalidBindingError

logger = logging.getLogger("event_mapper.binding")

NodeT = TypeVar("NodeT")


class Source(str, Enum):
    """Event containers a node can be bound to."""

    BODY = "body"
    QUERY = "query"
    PATH = "path"
    JWT_CLAIMS = "jwtClaims"

    @classmethod
    def coerce(cls, value: Union["Source", str]) -> "Source":
        try:
            return cls(value)
        except ValueError:
            raise InvalidBindingError(value) from None


@dataclass(frozen=True)
class Binding:
    source: Source
    path: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "source", Source.coerce(self.source))

    def merged(self, newer: "Binding") -> "Binding":
        """
        Apply a later attachment on top of this one.

        The newer source always wins; the newer path wins only when given.
        """
        path = newer.path if newer.path is not None else self.path
        return Binding(source=newer.source, path=path)

    def __call__(self, node: NodeT) -> NodeT:
        """Attach this binding to `node` in the default registry."""
        return default_registry.attach(node, self.source, self.path)


def FromBody(path: Optional[str] = None) -> Binding:
    """Read from the JSON-decoded request body."""
    return Binding(Source.BODY, path)


def FromQuery(name: Optional[str] = None) -> Binding:
    """Read from queryStringParameters."""
    return Binding(Source.QUERY, name)


def FromParams(name: Optional[str] = None) -> Binding:
    """Read from pathParameters."""
    return Binding(Source.PATH, name)


def FromJwtClaims(name: Optional[str] = None) -> Binding:
    """Read from the JWT authorizer claims."""
    return Binding(Source.JWT_CLAIMS, name)


class BindingRegistry:
    """
    Side-table from schema node identity to Binding.

    Nodes are held by strong reference alongside their binding so that an
    id() is never reused while its entry is alive.
    """

    def __init__(self):
        self._bindings: Dict[int, Tuple[Any, Binding]] = {}

    def attach(
        self, node: NodeT, source: Union[Source, str], path: Optional[str] = None
    ) -> NodeT:
        """
        Set or merge the binding of `node` and return the same node.
        """
        binding = Binding(Source.coerce(source), path)
        current = self.get(node)
        if current is not None:
            binding = current.merged(binding)
        self._bindings[id(node)] = (node, binding)
        logger.debug(f"Attached {binding} to {_describe(node)}")
        return node

    def get(self, node: Any) -> Optional[Binding]:
        entry = self._bindings.get(id(node))
        if entry is None or entry[0] is not node:
            return None
        return entry[1]

    def has_binding(self, node: Any) -> bool:
        return self.get(node) is not None

    def detach(self, node: Any) -> None:
        if self.has_binding(node):
            del self._bindings[id(node)]

    def clear(self) -> None:
        self._bindings.clear()

    def __len__(self) -> int:
        return len(self._bindings)


def _describe(node: Any) -> str:
    return getattr(node, "__name__", None) or type(node).__name__


default_registry = BindingRegistry()


def attach(node: NodeT, source: Union[Source, str], path: Optional[str] = None) -> NodeT:
    """Attach a binding to `node` in the default registry."""
    return default_registry.attach(node, source, path)


def has_binding(node: Any) -> bool:
    """Whether `node` has a binding in the default registry."""
    return default_registry.has_binding(node)


def get_binding(node: Any) -> Optional[Binding]:
    return default_registry.get(node)
