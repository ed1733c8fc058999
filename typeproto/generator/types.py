"""Type descriptors for the host type model."""

from dataclasses import dataclass, field
from enum import StrEnum, auto
from typing import Any

from dataclasses_json import DataClassJsonMixin, config


def type_name(t: Any) -> str | None:
    """Return a printable name for a type or annotation."""
    if t is None:
        return None
    if isinstance(t, type):
        return qualified_name(t)
    if hasattr(t, "__supertype__"):
        # NewType
        return t.__name__
    return repr(t)


def qualified_name(t: type) -> str:
    """Return the fully qualified name of a class (``module.QualName``)."""
    return f"{t.__module__}.{t.__qualname__}"


def _type_field(**kwargs: Any) -> Any:
    return field(metadata=config(encoder=type_name), **kwargs)


class FieldShape(StrEnum):
    """How a field's declared type is laid out."""

    SCALAR = auto()
    ENUM = auto()
    LIST = auto()
    ARRAY = auto()
    COLLECTION = auto()
    MAP = auto()
    COMPOSITE = auto()

    @property
    def is_container(self) -> bool:
        return self in (FieldShape.LIST, FieldShape.ARRAY, FieldShape.COLLECTION, FieldShape.MAP)


@dataclass
class FieldDescriptor(DataClassJsonMixin):
    """Represents one declared field of a composite type.

    For containers:
    - element_type: the single type parameter (the value type for maps),
      None when the container is unparameterized
    - key_type: the key type of a map, None otherwise
    """

    declaring_type: type = _type_field()
    name: str
    declared_type: Any = _type_field()
    shape: FieldShape
    element_type: Any | None = _type_field(default=None)
    key_type: Any | None = _type_field(default=None)


@dataclass
class TypeDescriptor(DataClassJsonMixin):
    """Represents a composite or enum type of the host model."""

    type: type = _type_field()
    name: str
    qualified_name: str
    is_enum: bool
    fields: list[FieldDescriptor] = field(default_factory=list)
    constants: list[str] = field(default_factory=list)
