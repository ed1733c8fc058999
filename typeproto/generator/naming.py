"""Identifier handling for generated schema names."""

import re
from enum import StrEnum, auto

_ILLEGAL_CHARS = re.compile(r"[^A-Za-z0-9_-]")
_SEPARATORS = re.compile(r"[_-]+")


def sanitize(name: str) -> str:
    """Remove characters that are not legal in a schema field identifier."""
    if not name:
        return name
    return _ILLEGAL_CHARS.sub("", name)


def lower_first(name: str) -> str:
    """Lowercase the first letter of a name, leaving the rest untouched."""
    if not name:
        return name
    return name[0].lower() + name[1:]


def to_pascal_case(name: str) -> str:
    """Convert a snake_case or kebab-case field name to PascalCase.

    Only the first letter of each part is raised, so ``stock_levelsByDay``
    becomes ``StockLevelsByDay`` and ``by-day`` becomes ``ByDay``.
    """
    return "".join(part[0].upper() + part[1:] for part in _SEPARATORS.split(name) if part)


class NamingPolicy(StrEnum):
    """How a compiled composite type is named in the schema.

    The root type carries the configured prefix so the generated service
    types cannot collide with the host model's own names. Types reached
    through fields keep their bare simple name.
    """

    ROOT = auto()
    NESTED = auto()

    def message_name(self, simple_name: str, prefix: str) -> str:
        if self is NamingPolicy.ROOT:
            return prefix + simple_name
        return simple_name


def enum_name(simple_name: str, prefix: str) -> str:
    """Name of the schema enum generated for a host enum."""
    return prefix + simple_name


def wrapper_name(message_name: str) -> str:
    """Name of the collection wrapper message generated for a message."""
    return message_name + "s"
