"""Field classification: pick how each declared field is emitted."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .builder import OPTIONAL, REPEATED
from .errors import CyclicTypeError, NestedContainerError, UnsupportedShapeError
from .introspect import container_shape, is_enum, unwrap
from .naming import sanitize, to_pascal_case
from .scalars import scalar_keyword
from .types import FieldDescriptor, FieldShape, type_name

if TYPE_CHECKING:
    from .compiler import CompilerContext


def classify_field(ctx: CompilerContext, field: FieldDescriptor, ordinal: int) -> None:
    """Emit one field of the message currently being built."""
    builder = ctx.builder
    declared = field.declared_type

    if field.shape == FieldShape.COMPOSITE:
        _check_cycle(ctx, field, declared)

    # Primitives or types we have come across before
    if field.shape == FieldShape.SCALAR or ctx.registry.is_registered(declared):
        builder.emit_field(OPTIONAL, _known_type_name(ctx, declared), field.name, ordinal)
        return

    if field.shape == FieldShape.ENUM:
        builder.emit_field(OPTIONAL, ctx.ensure_enum(declared), field.name, ordinal)
        return

    if field.shape in (FieldShape.LIST, FieldShape.ARRAY, FieldShape.COLLECTION):
        element = resolve_element(ctx, field, field.element_type)
        builder.emit_field(REPEATED, element, field.name, ordinal)
        return

    if field.shape == FieldShape.MAP:
        builder.emit_field(REPEATED, build_entry(ctx, field), field.name, ordinal)
        return

    # Not a scalar, enum or container and not seen yet, so it is another composite
    ctx.compile_nested(declared)
    builder.emit_field(REPEATED, declared.__name__, field.name, ordinal)


def _known_type_name(ctx: CompilerContext, t: Any) -> str | None:
    if ctx.registry.is_registered(t):
        return ctx.registry.name_of(t)
    return scalar_keyword(t)


def _check_cycle(ctx: CompilerContext, field: FieldDescriptor, t: Any) -> None:
    if t in ctx.paths:
        raise CyclicTypeError(
            f"{field.declaring_type.__name__}.{field.name} refers back to "
            f"{t.__name__} ({ctx.paths.chain(t)})"
        )


def resolve_element(ctx: CompilerContext, field: FieldDescriptor, element: Any) -> str | None:
    """Return the schema type name for a container's element, compiling it if needed."""
    if element is None:
        raise UnsupportedShapeError(
            f"{field.declaring_type.__name__}.{field.name}: container has no element type, "
            f"declare it as e.g. list[int]"
        )

    try:
        element = unwrap(element)
    except UnsupportedShapeError as e:
        raise UnsupportedShapeError(f"{field.declaring_type.__name__}.{field.name}: {e}") from e

    if container_shape(element) is not None:
        raise NestedContainerError(
            f"{field.declaring_type.__name__}.{field.name}: nested containers are not "
            f"supported ({type_name(field.declared_type)})"
        )

    if element is Any:
        return None

    keyword = scalar_keyword(element)
    if keyword is not None:
        return keyword

    if is_enum(element):
        return ctx.ensure_enum(element)

    if not isinstance(element, type):
        raise UnsupportedShapeError(
            f"{field.declaring_type.__name__}.{field.name}: unsupported element type "
            f"{type_name(element)}"
        )

    _check_cycle(ctx, field, element)
    if not ctx.registry.is_registered(element):
        ctx.compile_nested(element)
    return ctx.registry.name_of(element)


def build_entry(ctx: CompilerContext, field: FieldDescriptor) -> str:
    """Emit the key/value entry message for a map field and return its name."""
    if field.key_type is None:
        raise UnsupportedShapeError(
            f"{field.declaring_type.__name__}.{field.name}: mapping has no key and value "
            f"types, declare it as e.g. dict[str, int]"
        )

    key = resolve_element(ctx, field, field.key_type)
    value = resolve_element(ctx, field, field.element_type)

    owner = ctx.registry.name_of(field.declaring_type)
    name = f"{owner}{to_pascal_case(sanitize(field.name))}Entry"
    ctx.builder.emit_entry(name, key, value)
    return name
