"""Describe Python classes as schema type descriptors.

Composite types are any annotated classes: dataclasses, NamedTuples,
TypedDicts or plain classes with field annotations. Enums are ``enum.Enum``
subclasses. Field shapes are derived from the resolved annotations.
"""

import collections
import collections.abc
import dataclasses
import enum
import types
from typing import Annotated, Any, ClassVar, Union, get_args, get_origin, get_type_hints

from .errors import InvalidInputError, UnsupportedShapeError
from .scalars import is_scalar
from .types import FieldDescriptor, FieldShape, TypeDescriptor, qualified_name, type_name

LIST_TYPES = frozenset(
    [
        list,
        collections.abc.Sequence,
        collections.abc.MutableSequence,
    ]
)

ARRAY_TYPES = frozenset([tuple])

COLLECTION_TYPES = frozenset(
    [
        set,
        frozenset,
        collections.deque,
        collections.abc.Set,
        collections.abc.MutableSet,
        collections.abc.Collection,
        collections.abc.Iterable,
    ]
)

MAP_TYPES = frozenset(
    [
        dict,
        collections.OrderedDict,
        collections.defaultdict,
        collections.abc.Mapping,
        collections.abc.MutableMapping,
    ]
)

_CONTAINER_SHAPES: dict[Any, FieldShape] = {
    **{t: FieldShape.LIST for t in LIST_TYPES},
    **{t: FieldShape.ARRAY for t in ARRAY_TYPES},
    **{t: FieldShape.COLLECTION for t in COLLECTION_TYPES},
    **{t: FieldShape.MAP for t in MAP_TYPES},
}


def is_enum(t: Any) -> bool:
    """Check if a type is an enum class."""
    return isinstance(t, type) and issubclass(t, enum.Enum)


def container_shape(t: Any) -> FieldShape | None:
    """Return the container shape of an annotation, or None if it is not a container."""
    origin = get_origin(t) or t
    try:
        return _CONTAINER_SHAPES.get(origin)
    except TypeError:
        return None


def unwrap(t: Any) -> Any:
    """Strip Annotated, Optional and NewType wrappers from an annotation."""
    while True:
        origin = get_origin(t)
        if origin is Annotated:
            t = get_args(t)[0]
            continue

        if origin is Union or origin is types.UnionType:
            members = [a for a in get_args(t) if a is not type(None)]
            if len(members) != 1:
                raise UnsupportedShapeError(f"Union types are not supported: {t!r}")
            t = members[0]
            continue

        if hasattr(t, "__supertype__") and not is_scalar(t):
            t = t.__supertype__
            continue

        return t


def _shape_of(t: Any) -> tuple[FieldShape, Any, Any]:
    """Classify an unwrapped annotation as (shape, element type, key type)."""
    if t is Any or is_scalar(t):
        return FieldShape.SCALAR, None, None

    if is_enum(t):
        return FieldShape.ENUM, None, None

    shape = container_shape(t)
    args = get_args(t)

    if shape == FieldShape.MAP:
        if not args:
            return shape, None, None
        if len(args) != 2:
            raise UnsupportedShapeError(f"Mapping needs a key and a value type: {t!r}")
        key, value = args
        return shape, value, key

    if shape == FieldShape.ARRAY:
        if not args:
            return shape, None, None
        if len(args) != 2 or args[1] is not Ellipsis:
            raise UnsupportedShapeError(
                f"Fixed-length tuples are not supported, use tuple[X, ...]: {t!r}"
            )
        return shape, args[0], None

    if shape is not None:
        if len(args) > 1:
            raise UnsupportedShapeError(f"Container has more than one type parameter: {t!r}")
        return shape, args[0] if args else None, None

    if isinstance(t, type):
        return FieldShape.COMPOSITE, None, None

    raise UnsupportedShapeError(f"Unsupported annotation: {t!r}")


def describe_field(owner: type, name: str, annotation: Any) -> FieldDescriptor:
    """Describe one declared field of a composite type."""
    try:
        declared = unwrap(annotation)
        shape, element, key = _shape_of(declared)
    except UnsupportedShapeError as e:
        raise UnsupportedShapeError(f"{owner.__name__}.{name}: {e}") from e

    return FieldDescriptor(
        declaring_type=owner,
        name=name,
        declared_type=declared,
        shape=shape,
        element_type=element,
        key_type=key,
    )


def _field_names(t: type, hints: dict[str, Any]) -> list[str]:
    if dataclasses.is_dataclass(t):
        return [f.name for f in dataclasses.fields(t)]

    names = []
    for name, hint in hints.items():
        if hint is ClassVar or get_origin(hint) is ClassVar:
            continue
        names.append(name)
    return names


def describe_type(t: type) -> TypeDescriptor:
    """Describe a composite or enum class.

    Raises:
        InvalidInputError: If ``t`` is not a class or its annotations
            cannot be resolved.
        UnsupportedShapeError: If a field has no schema representation.
    """
    if not isinstance(t, type):
        raise InvalidInputError(f"Expected a class, got {type_name(t)}")

    if is_enum(t):
        return TypeDescriptor(
            type=t,
            name=t.__name__,
            qualified_name=qualified_name(t),
            is_enum=True,
            constants=[member.name for member in t],
        )

    try:
        hints = get_type_hints(t, include_extras=True)
    except (NameError, TypeError) as e:
        raise InvalidInputError(f"Cannot resolve annotations of {qualified_name(t)}: {e}") from e

    fields = [describe_field(t, name, hints[name]) for name in _field_names(t, hints)]

    return TypeDescriptor(
        type=t,
        name=t.__name__,
        qualified_name=qualified_name(t),
        is_enum=False,
        fields=fields,
    )
