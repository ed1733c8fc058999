"""Text emission for schema messages, enums and fields."""

from dataclasses import dataclass, field

from jinja2 import Environment, PackageLoader

from .errors import InvalidInputError, NameCollisionError, UnsupportedShapeError
from .naming import lower_first, sanitize, wrapper_name
from .scalars import WELL_KNOWN_IMPORTS

OPTIONAL = "optional"
REQUIRED = "required"
REPEATED = "repeated"

DEFAULT_TYPE = "string"

MESSAGE = "message"
ENTRY = "entry"
ENUM = "enum"

env = Environment(
    loader=PackageLoader("typeproto.generator", "templates"),
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=True,
)

template = env.get_template("schema.proto.j2")


@dataclass
class _Block:
    name: str
    wrapper: bool
    kind: str = MESSAGE
    lines: list[str] = field(default_factory=list)


class SchemaBuilder:
    """Accumulate schema blocks as text.

    Messages are built on a stack: a message opened while another is still
    open (a nested type discovered through a field) is written out as soon
    as it closes, so every block lands at the top level of the document
    ahead of the blocks that reference it. Enums have no fields to collect
    and are written immediately.

    Every block name is claimed when it is written. Compiled messages may
    share a name (distinct classes with the same simple name), but an enum
    or entry message never shares its name with another block.
    """

    def __init__(self, indent: str = "\t") -> None:
        self.indent = indent
        self.messages: list[str] = []
        self.enums: list[str] = []
        self.imports: list[str] = []
        self._out: list[str] = []
        self._kinds: dict[str, str] = {}
        self._open: list[_Block] = []

    @property
    def depth(self) -> int:
        """Number of messages currently open."""
        return len(self._open)

    def begin_message(self, name: str, wrapper: bool = True) -> None:
        self._open.append(_Block(name, wrapper))

    def end_message(self) -> str:
        block = self._open.pop()
        self._claim(block.name, block.kind)
        self._write_block("message", block.name, block.lines)
        self.messages.append(block.name)

        if block.wrapper:
            name = wrapper_name(block.name)
            self._claim(name, MESSAGE)
            line = self._field_line(REPEATED, block.name, lower_first(block.name), 1)
            self._write_block("message", name, [line])
            self.messages.append(name)
        return block.name

    def emit_field(self, multiplicity: str, type_name: str | None, name: str, ordinal: int) -> None:
        if not self._open:
            raise RuntimeError(f"Field {name} emitted outside of a message")
        self._open[-1].lines.append(self._field_line(multiplicity, type_name, name, ordinal))

    def emit_enum(self, name: str, constants: list[str]) -> None:
        if not constants:
            raise UnsupportedShapeError(f"Enum {name} has no members")
        self._claim(name, ENUM)
        lines = [f"{self.indent}{constant} = {i};\n" for i, constant in enumerate(constants)]
        self._write_block("enum", name, lines)
        self.enums.append(name)

    def emit_entry(self, name: str, key_type: str | None, value_type: str | None) -> None:
        """Emit a key/value entry message for a map field."""
        self._open.append(_Block(name, wrapper=False, kind=ENTRY))
        self.emit_field(REQUIRED, key_type, "key", 1)
        self.emit_field(REQUIRED, value_type, "value", 2)
        self.end_message()

    def _field_line(self, multiplicity: str, type_name: str | None, name: str, ordinal: int) -> str:
        if type_name is None:
            type_name = DEFAULT_TYPE
        if type_name in WELL_KNOWN_IMPORTS and WELL_KNOWN_IMPORTS[type_name] not in self.imports:
            self.imports.append(WELL_KNOWN_IMPORTS[type_name])

        field_name = sanitize(name)
        if not field_name:
            raise InvalidInputError(f"Field name {name!r} has no characters legal in a schema")
        return f"{self.indent}{multiplicity} {type_name} {field_name} = {ordinal};\n"

    def _claim(self, name: str, kind: str) -> None:
        previous = self._kinds.get(name)
        if previous is not None and not (previous == kind == MESSAGE):
            raise NameCollisionError(
                f"{kind} {name} clashes with an earlier {previous} of the same name"
            )
        self._kinds[name] = kind

    def _write_block(self, kind: str, name: str, lines: list[str]) -> None:
        self._out.append(f"{kind} {name} {{\n")
        self._out.extend(lines)
        self._out.append("}\n")
        self._out.append("\n")

    def getvalue(self) -> str:
        """Return the blocks written so far."""
        return "".join(self._out)


def render(
    body: str,
    syntax: str = "proto2",
    package: str | None = None,
    imports: list[str] | None = None,
    header: bool = True,
) -> str:
    """Render a complete schema document around the emitted blocks."""
    return template.render(
        body=body,
        syntax=syntax,
        package=package,
        imports=imports or [],
        header=header,
    )
