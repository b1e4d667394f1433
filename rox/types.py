"""Runtime values for Rox.

Rox has four kinds of runtime value: numbers (Python `float`), strings
(`str`), booleans (`bool`) and `nil`. Parsed literals use Python `None`
for nil; at run time nil is the `NIL` marker so that the two
representations never get confused.
"""

from __future__ import annotations

import math
from decimal import Decimal
from typing import Any, Union

from rox.tokens import LiteralValue


class NilVal:
    """Marker object for the Rox `nil` value."""
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return 'nil'

    def __eq__(self, other: object) -> bool:
        return isinstance(other, NilVal)

    def __hash__(self) -> int:
        return hash(NilVal)


NIL = NilVal()

Value = Union[float, str, bool, NilVal]


def from_literal(literal: LiteralValue) -> Value:
    """Convert a parsed literal into a runtime value."""
    if literal is None:
        return NIL
    if isinstance(literal, bool) or isinstance(literal, str):
        return literal
    return float(literal)


def is_number(value: Any) -> bool:
    # bool is not a float subclass, so booleans never pass
    return isinstance(value, float)


def type_name(value: Any) -> str:
    """Return the Rox type name of a runtime value."""
    if isinstance(value, bool):
        return 'Bool'
    if isinstance(value, float):
        return 'Number'
    if isinstance(value, str):
        return 'String'
    if isinstance(value, NilVal):
        return 'Nil'
    return type(value).__name__


def format_number(value: float) -> str:
    """Render a number the way `print` shows it.

    Integral values print without a fractional part (`3`, not `3.0`) and
    negative zero keeps its sign. Other values use the shortest
    round-trip digits written out in plain decimal, never in exponent
    form (`0.00001`, not `1e-05`).
    """
    if math.isnan(value):
        return 'NaN'
    if math.isinf(value):
        return 'inf' if value > 0 else '-inf'
    if value == 0:
        return '-0' if math.copysign(1.0, value) < 0 else '0'
    if value.is_integer():
        return str(int(value))
    return format(Decimal(repr(value)), 'f')


def to_string(value: Any) -> str:
    """Convert a runtime value to its canonical text form."""
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, float):
        return format_number(value)
    if isinstance(value, str):
        return value
    if isinstance(value, NilVal) or value is None:
        return 'nil'
    return str(value)
