"""Typeproto - .proto schema compiler for Python type models."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("typeproto")
except PackageNotFoundError:
    __version__ = "(local)"
