"""
Extraction engine.

Walks a pydantic schema top-down and assembles a value tree from an
invocation event:

1. A node with a binding is resolved from its event container and returned
   as-is. Its children, if any, are not visited.
2. An unbound object node becomes a dict of its children's values, each
   child resolved against the same event. Children resolving to MISSING
   are left out; the dict itself is returned even when empty.
3. An unbound leaf resolves to MISSING.

No validation or type coercion happens here; see EventMapper.parse for that.
"""

import logging
from typing import Any, Dict, Mapping, Optional, Tuple, Type, TypeVar

from pydantic import BaseModel, ValidationError

from ..config import config
from .binding import BindingRegistry, default_registry
from .exceptions import EventValidationError
from .paths import MISSING
from .resolvers import ParsedBody, resolve
from .schema import binding_of, fields_of, object_model

logger = logging.getLogger("event_mapper.engine")

ModelT = TypeVar("ModelT", bound=BaseModel)


def _as_event_dict(event: Any) -> Mapping[str, Any]:
    if isinstance(event, BaseModel):
        return event.model_dump(by_alias=True, exclude_none=True)
    return event


class EventMapper:
    """
    Maps invocation events onto schema-shaped values.

    Safe to share between concurrent extractions once bindings are attached.
    """

    def __init__(
        self,
        registry: Optional[BindingRegistry] = None,
        memoize_body: Optional[bool] = None,
        decode_base64_body: Optional[bool] = None,
    ):
        self.registry = registry if registry is not None else default_registry
        self.memoize_body = (
            config.EVENT_MAPPER_MEMOIZE_BODY if memoize_body is None else memoize_body
        )
        self.decode_base64_body = (
            config.EVENT_MAPPER_DECODE_BASE64_BODY
            if decode_base64_body is None
            else decode_base64_body
        )

    def extract(self, event: Any, node: Any) -> Any:
        """
        Extract the value described by `node` from `event`.

        Returns MISSING when the root itself resolves to nothing.
        Raises MalformedBodyError when a body-bound node meets a non-JSON body.
        """
        event = _as_event_dict(event)
        body = ParsedBody(
            event, memoize=self.memoize_body, decode_base64=self.decode_base64_body
        )
        return self._extract_node(event, node, body, ())

    def _extract_node(
        self,
        event: Mapping[str, Any],
        node: Any,
        body: ParsedBody,
        ancestors: Tuple[type, ...],
        owner: Optional[type] = None,
        name: Optional[str] = None,
    ) -> Any:
        binding = binding_of(node, self.registry, owner, name)
        if binding is not None:
            value = resolve(event, binding, body)
            logger.debug(
                f"Resolved {binding.source.value} binding",
                extra={"path": binding.path, "found": value is not MISSING},
            )
            return value

        model = object_model(node)
        if model is None:
            return MISSING
        # Self-referencing models stop at the first repeat.
        if model in ancestors:
            return MISSING
        return self._extract_children(event, model, body, ancestors + (model,))

    def _extract_children(
        self,
        event: Mapping[str, Any],
        model: type,
        body: ParsedBody,
        ancestors: Tuple[type, ...],
    ) -> Dict[str, Any]:
        extracted: Dict[str, Any] = {}
        for name, child in fields_of(model).items():
            value = self._extract_node(event, child, body, ancestors, model, name)
            if value is not MISSING:
                extracted[name] = value
        return extracted

    def parse(self, event: Any, model: Type[ModelT]) -> ModelT:
        """
        Extract `model` from `event` and validate the result into an instance.
        """
        data = self.extract(event, model)
        if data is MISSING:
            data = {}
        try:
            return model.model_validate(data)
        except ValidationError as e:
            logger.info(
                f"Event does not validate against {model.__name__}",
                extra={"error_count": e.error_count()},
            )
            raise EventValidationError(model.__name__, e.errors()) from e


default_mapper = EventMapper()


def extract(event: Any, node: Any) -> Any:
    """Extract with the default mapper and registry."""
    return default_mapper.extract(event, node)


def parse(event: Any, model: Type[ModelT]) -> ModelT:
    """Extract and validate with the default mapper and registry."""
    return default_mapper.parse(event, model)
