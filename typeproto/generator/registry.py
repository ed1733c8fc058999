"""Bookkeeping for types already compiled into the schema."""

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any

from .errors import DuplicateRegistrationError
from .types import type_name

PATH_SEPARATOR = "."


@dataclass(frozen=True)
class RegistryEntry:
    """Where a type was first registered and the schema name it was given."""

    path: str
    name: str


class TypeRegistry:
    """Map type identities to the schema names already assigned to them.

    A type is registered exactly once per compilation. Registering it again
    would rename a block that earlier fields already reference, so it is
    rejected.
    """

    def __init__(self) -> None:
        self._entries: dict[Any, RegistryEntry] = {}

    def register(self, t: Any, path: str, name: str) -> str:
        """Register a type under a qualified path and schema name."""
        if t in self._entries:
            raise DuplicateRegistrationError(
                f"{type_name(t)} is already registered as {self._entries[t].path}"
            )
        self._entries[t] = RegistryEntry(path, name)
        return path

    def is_registered(self, t: Any) -> bool:
        try:
            return t in self._entries
        except TypeError:
            return False

    def entry(self, t: Any) -> RegistryEntry:
        return self._entries[t]

    def name_of(self, t: Any) -> str:
        """Schema name to use when a field refers to a registered type."""
        return self._entries[t].name

    def path_of(self, t: Any) -> str:
        return self._entries[t].path

    def __contains__(self, t: Any) -> bool:
        return self.is_registered(t)

    def __len__(self) -> int:
        return len(self._entries)


class PathTracker:
    """Stack of the types currently being compiled, root first."""

    def __init__(self) -> None:
        self._stack: list[type] = []
        self._active: set[type] = set()

    def push(self, t: type) -> None:
        self._stack.append(t)
        self._active.add(t)

    def pop(self) -> type:
        t = self._stack.pop()
        if t not in self._stack:
            self._active.discard(t)
        return t

    @contextmanager
    def enter(self, t: type) -> Iterator[None]:
        """Push a type for the duration of a block."""
        self.push(t)
        try:
            yield
        finally:
            self.pop()

    @property
    def current(self) -> type | None:
        return self._stack[-1] if self._stack else None

    def qualified_path(self) -> str:
        """Dot-joined simple names from the root to the innermost type."""
        return PATH_SEPARATOR.join(t.__name__ for t in self._stack)

    def chain(self, t: type) -> str:
        """Describe the path from the first enclosing occurrence of ``t`` back to ``t``."""
        start = self._stack.index(t)
        return " -> ".join(s.__name__ for s in [*self._stack[start:], t])

    def __contains__(self, t: Any) -> bool:
        try:
            return t in self._active
        except TypeError:
            return False

    def __len__(self) -> int:
        return len(self._stack)
