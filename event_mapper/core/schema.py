"""
Schema node adapter.

Reads the two things the engine needs from pydantic schema nodes: the
effective Binding of a node and, for object nodes, its ordered children.
Nothing here validates or instantiates models.

Node kinds:
- BaseModel subclass: object node, children are its model_fields.
- FieldInfo whose annotation is a BaseModel subclass (Optional and Annotated
  are unwrapped): object node, children are that model's fields.
- Anything else: leaf.
"""

import inspect
import types
from typing import Annotated, Any, Dict, Optional, Union, get_args, get_origin

from pydantic import BaseModel
from pydantic.fields import FieldInfo

from .binding import Binding, BindingRegistry

_UNION_TYPES = (Union, types.UnionType)


def is_model_class(node: Any) -> bool:
    return inspect.isclass(node) and issubclass(node, BaseModel)


def model_of(annotation: Any) -> Optional[type]:
    """
    Return the BaseModel subclass an annotation points at, if any.

    `Model`, `Optional[Model]`, `Model | None` and `Annotated[Model, ...]`
    all resolve to `Model`; lists, dicts and multi-type unions do not.
    """
    if is_model_class(annotation):
        return annotation

    origin = get_origin(annotation)
    if origin is Annotated:
        return model_of(get_args(annotation)[0])
    if origin in _UNION_TYPES:
        members = [arg for arg in get_args(annotation) if arg is not type(None)]
        if len(members) == 1:
            return model_of(members[0])
    return None


def object_model(node: Any) -> Optional[type]:
    """The model class behind an object node, or None for leaf nodes."""
    if is_model_class(node):
        return node
    if isinstance(node, FieldInfo):
        return model_of(node.annotation)
    return None


def fields_of(model: type) -> Dict[str, FieldInfo]:
    """
    Fields of a model class, resolving pending forward references first.

    A model whose annotations could not be resolved at class creation would
    otherwise expose its model-typed fields as unresolved leaves.
    """
    if not getattr(model, "__pydantic_complete__", True):
        model.model_rebuild(raise_errors=False)
    return model.model_fields


def children_of(node: Any) -> Optional[Dict[str, FieldInfo]]:
    """
    Ordered field name -> child node mapping, or None for leaf nodes.
    """
    model = object_model(node)
    if model is None:
        return None
    return dict(fields_of(model))


def _declared_binding(node: Any) -> Optional[Binding]:
    """Fold Annotated[...] binding markers left to right."""
    binding = None
    for item in getattr(node, "metadata", None) or ():
        if isinstance(item, Binding):
            binding = item if binding is None else binding.merged(item)
    return binding


def _inherited_attachment(
    registry: BindingRegistry, owner: Optional[type], name: Optional[str]
) -> Optional[Binding]:
    """
    Registry binding of the same-named field on the nearest model base.

    pydantic gives a subclass its own copies of inherited FieldInfo objects,
    so an attachment made on the base field is looked up by name here.
    """
    if owner is None or name is None:
        return None
    for base in owner.__mro__[1:]:
        if not is_model_class(base) or base is BaseModel:
            continue
        base_field = base.model_fields.get(name)
        if base_field is None:
            continue
        attached = registry.get(base_field)
        if attached is not None:
            return attached
    return None


def binding_of(
    node: Any,
    registry: BindingRegistry,
    owner: Optional[type] = None,
    name: Optional[str] = None,
) -> Optional[Binding]:
    """
    Effective binding of a node.

    Declared markers come first, then registry attachments are merged on
    top. `owner` and `name` locate a field within its model so attachments
    made on a base class field apply to subclasses too. A field with none of
    these inherits the binding attached to its model class, since the class
    is the node it points at.
    """
    binding = _declared_binding(node) if isinstance(node, FieldInfo) else None
    attached = registry.get(node)
    if attached is None and isinstance(node, FieldInfo):
        attached = _inherited_attachment(registry, owner, name)
    if attached is not None:
        binding = attached if binding is None else binding.merged(attached)

    if binding is None and isinstance(node, FieldInfo):
        model = model_of(node.annotation)
        if model is not None:
            binding = registry.get(model)
    return binding
