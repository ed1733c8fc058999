"""Types for use in models compiled by typeproto."""

from .types import byte as byte
from .types import float32 as float32
from .types import float64 as float64
from .types import int16 as int16
from .types import int32 as int32
from .types import int64 as int64
