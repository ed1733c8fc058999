"""Scalar marker types for annotating models with explicit wire widths.

Plain ``int`` and ``float`` compile to 64-bit schema types. Annotate a field
with one of these markers to pick a narrower or different encoding:

Example:
    @dataclass
    class Reading:
        sensor: int32
        level: float32
        raw: list[byte]
"""

from typing import NewType

int16 = NewType("int16", int)
int32 = NewType("int32", int)
int64 = NewType("int64", int)

float32 = NewType("float32", float)
float64 = NewType("float64", float)

byte = NewType("byte", int)
