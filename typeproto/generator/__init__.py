"""Typeproto schema compiler."""

from .compiler import CompilerContext as CompilerContext
from .compiler import CompilerOptions as CompilerOptions
from .compiler import SchemaDocument as SchemaDocument
from .compiler import compile_schema as compile_schema
from .compiler import generate_schema as generate_schema
from .errors import *
from .introspect import describe_type as describe_type
from .loader import load_type as load_type
from .naming import NamingPolicy as NamingPolicy
from .types import *
