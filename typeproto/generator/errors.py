"""Errors raised while compiling a type model into a schema."""


class SchemaError(RuntimeError):
    """Base class for all schema compilation failures."""


class InvalidInputError(SchemaError):
    """Raised when the compiler is given something it cannot compile at all."""


class UnsupportedShapeError(SchemaError):
    """Raised when a field's declared type has no schema representation."""


class NestedContainerError(UnsupportedShapeError):
    """Raised when a container's element type is itself a container."""


class CyclicTypeError(SchemaError):
    """Raised when a composite type contains itself, directly or transitively."""


class DuplicateRegistrationError(SchemaError):
    """Raised when a type is registered twice in one compilation."""


class TypeNotFoundError(SchemaError):
    """Raised when a type name cannot be resolved to a class."""


class NameCollisionError(SchemaError):
    """Raised when two different blocks would be emitted under the same name."""
