"""Compile a Python type model into a .proto schema document."""

import re
from dataclasses import dataclass, field
from typing import Any

from .builder import SchemaBuilder, render
from .classifier import classify_field
from .errors import InvalidInputError
from .introspect import container_shape, describe_type, is_enum
from .naming import NamingPolicy, enum_name
from .registry import PathTracker, TypeRegistry
from .scalars import is_scalar
from .types import type_name

_IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
_PACKAGE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)*")


@dataclass(frozen=True)
class CompilerOptions:
    """Settings for one compilation.

    Attributes:
        prefix: Prepended to the root message name and every enum name.
        syntax: Schema version written in the header.
        package: Package declared in the header, if any.
        indent: Indentation unit for block bodies.
        header: Write the syntax/package/import header. Without it the
            document starts with a bare blank line.
    """

    prefix: str = "Grpc"
    syntax: str = "proto2"
    package: str | None = None
    indent: str = "\t"
    header: bool = True

    def __post_init__(self) -> None:
        if self.prefix and not _IDENTIFIER.fullmatch(self.prefix):
            raise InvalidInputError(f"Prefix {self.prefix!r} is not a valid identifier")
        if self.package is not None and not _PACKAGE.fullmatch(self.package):
            raise InvalidInputError(f"Package {self.package!r} is not a valid package name")
        if not self.syntax:
            raise InvalidInputError("Syntax must not be empty")


@dataclass(frozen=True)
class SchemaDocument:
    """A compiled schema and the names of the blocks it contains."""

    text: str
    messages: list[str]
    enums: list[str]
    imports: list[str]


@dataclass
class CompilerContext:
    """All state for one compilation, created fresh for every root type."""

    options: CompilerOptions
    registry: TypeRegistry = field(default_factory=TypeRegistry)
    paths: PathTracker = field(default_factory=PathTracker)
    builder: SchemaBuilder = field(init=False)

    def __post_init__(self) -> None:
        self.builder = SchemaBuilder(indent=self.options.indent)

    def build_message(self, t: type, naming: NamingPolicy) -> str:
        """Emit the message for a composite type and its collection wrapper."""
        descriptor = describe_type(t)
        name = naming.message_name(descriptor.name, self.options.prefix)

        with self.paths.enter(t):
            self.registry.register(t, self.paths.qualified_path(), name)
            self.builder.begin_message(name)
            for ordinal, f in enumerate(descriptor.fields, start=1):
                classify_field(self, f, ordinal)
            self.builder.end_message()

        return name

    def compile_nested(self, t: type) -> str:
        """Emit a composite type reached through a field."""
        return self.build_message(t, NamingPolicy.NESTED)

    def ensure_enum(self, t: type) -> str:
        """Emit an enum block the first time an enum is referenced."""
        if self.registry.is_registered(t):
            return self.registry.name_of(t)

        descriptor = describe_type(t)
        name = enum_name(descriptor.name, self.options.prefix)
        with self.paths.enter(t):
            self.registry.register(t, self.paths.qualified_path(), name)
        self.builder.emit_enum(name, descriptor.constants)
        return name


def _check_root(root: Any) -> None:
    if root is None:
        raise InvalidInputError("No type given to compile")
    if (
        root is Any
        or not isinstance(root, type)
        or is_scalar(root)
        or is_enum(root)
        or container_shape(root)
    ):
        raise InvalidInputError(f"{type_name(root)} is not a composite type")


def compile_schema(root: type, options: CompilerOptions | None = None) -> SchemaDocument:
    """Compile a root type and everything it references into a schema document.

    Raises:
        SchemaError: If any reachable type cannot be compiled. Nothing is
            returned in that case, not even the blocks that did compile.
    """
    _check_root(root)
    ctx = CompilerContext(options or CompilerOptions())

    ctx.build_message(root, NamingPolicy.ROOT)

    builder = ctx.builder
    text = render(
        builder.getvalue(),
        syntax=ctx.options.syntax,
        package=ctx.options.package,
        imports=builder.imports,
        header=ctx.options.header,
    )
    return SchemaDocument(
        text=text,
        messages=list(builder.messages),
        enums=list(builder.enums),
        imports=list(builder.imports),
    )


def generate_schema(root: type, options: CompilerOptions | None = None) -> str:
    """Compile a root type and return the schema text."""
    return compile_schema(root, options).text
