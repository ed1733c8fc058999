"""Resolve a user-supplied type name to a class."""

import importlib
import sys
from collections.abc import Sequence

from .errors import TypeNotFoundError


def _split(name: str) -> tuple[str, str]:
    if ":" in name:
        module_name, _, attr = name.partition(":")
    else:
        module_name, _, attr = name.rpartition(".")
    if not module_name or not attr:
        raise TypeNotFoundError(f"Expected 'module:Class' or 'module.Class', got {name!r}")
    return module_name, attr


def load_type(name: str, search_path: Sequence[str] = ()) -> type:
    """Load a class given as ``pkg.module:Class`` or ``pkg.module.Class``.

    Entries of ``search_path`` are put ahead of ``sys.path`` while the module
    is imported. Nested classes are reached with dots after the colon, as in
    ``pkg.module:Outer.Inner``.

    Raises:
        TypeNotFoundError: If the module cannot be imported or does not
            define a class under that name.
    """
    module_name, attr = _split(name)

    added = [p for p in search_path if p not in sys.path]
    sys.path[:0] = added
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise TypeNotFoundError(f"Could not import module {module_name!r}: {e}") from e
    finally:
        for p in added:
            sys.path.remove(p)

    obj: object = module
    for part in attr.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as e:
            raise TypeNotFoundError(f"{module_name} has no type named {attr!r}") from e

    if not isinstance(obj, type):
        raise TypeNotFoundError(f"{name} is not a class")
    return obj
