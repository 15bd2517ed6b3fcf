"""Operand representation for the comparison engine.

Operands are tagged values: a closed set of runtime type tags plus the
payload the comparator works on. Host Python values are boxed into
operands with `box`.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from typing import Any


class TypeTag(Enum):
    """Runtime type tags of operands."""

    INTEGER = "integer"
    FLOAT = "float"
    COMPLEX = "complex"
    DECIMAL = "decimal"
    RATIONAL = "rational"
    STRING = "string"
    BYTES = "bytes"
    SEQUENCE = "sequence"
    SET = "set"
    MAPPING = "mapping"
    SINGLETON = "identity-singleton"
    NAN = "not-a-number"


NUMERIC_TAGS = frozenset({
    TypeTag.INTEGER,
    TypeTag.FLOAT,
    TypeTag.COMPLEX,
    TypeTag.DECIMAL,
    TypeTag.RATIONAL,
    TypeTag.NAN,
})

CONTAINER_TAGS = frozenset({TypeTag.SEQUENCE, TypeTag.SET, TypeTag.MAPPING})


@dataclass(frozen=True, eq=False)
class Operand:
    """A tagged value.

    Attributes:
        tag: Runtime type tag.
        value: Scalar payload, a tuple of operands (sequence, set) or a
            tuple of (key, value) operand pairs (mapping).
        kind: Runtime type name, e.g. "list" or "frozenset".
        ref: Storage identity token; operands sharing a ref are identical.
    """

    tag: TypeTag
    value: Any
    kind: str = ""
    ref: Any = field(default_factory=object)

    def is_same(self, other: Operand) -> bool:
        """Check reference identity."""
        return self is other or self.ref is other.ref

    @property
    def is_numeric(self) -> bool:
        return self.tag in NUMERIC_TAGS

    @property
    def is_container(self) -> bool:
        return self.tag in CONTAINER_TAGS

    def __repr__(self) -> str:
        return f"Operand({self.tag.value}:{self.kind}, {self.value!r})"


# Singleton instances for the host's identity singletons
NONE = Operand(TypeTag.SINGLETON, None, "NoneType", ref=None)
ELLIPSIS = Operand(TypeTag.SINGLETON, Ellipsis, "ellipsis", ref=Ellipsis)
NOT_IMPLEMENTED = Operand(
    TypeTag.SINGLETON, NotImplemented, "NotImplementedType", ref=NotImplemented
)

_SINGLETONS = (NONE, ELLIPSIS, NOT_IMPLEMENTED)


def box(value: Any) -> Operand:
    """Box a host Python value into an operand.

    Containers are copied eagerly and recursively, so boxing a huge range or
    collection costs memory proportional to its size.

    Args:
        value: Host value. Already-boxed operands are returned unchanged.

    Returns:
        Operand carrying the value's tag, kind and identity.

    Raises:
        TypeError: If the value's type has no operand representation, or a
            container contains itself.
    """
    return _box(value, frozenset())


def _box(value: Any, enclosing: frozenset[int]) -> Operand:
    if isinstance(value, Operand):
        return value

    for singleton in _SINGLETONS:
        if value is singleton.value:
            return singleton

    kind = type(value).__name__

    match value:
        case bool() | int():
            return Operand(TypeTag.INTEGER, value, kind, ref=value)
        case float():
            tag = TypeTag.NAN if math.isnan(value) else TypeTag.FLOAT
            return Operand(tag, value, kind, ref=value)
        case complex():
            return Operand(TypeTag.COMPLEX, value, kind, ref=value)
        case Decimal():
            tag = TypeTag.NAN if value.is_nan() else TypeTag.DECIMAL
            return Operand(tag, value, kind, ref=value)
        case Fraction():
            return Operand(TypeTag.RATIONAL, value, kind, ref=value)
        case str():
            return Operand(TypeTag.STRING, value, kind, ref=value)
        case bytes() | bytearray():
            return Operand(TypeTag.BYTES, bytes(value), kind, ref=value)
        case list() | tuple() | range():
            inner = _enter(value, kind, enclosing)
            elements = tuple(_box(item, inner) for item in value)
            return Operand(TypeTag.SEQUENCE, elements, kind, ref=value)
        case set() | frozenset():
            inner = _enter(value, kind, enclosing)
            elements = tuple(_box(item, inner) for item in value)
            return Operand(TypeTag.SET, elements, kind, ref=value)
        case Mapping():
            inner = _enter(value, kind, enclosing)
            items = tuple((_box(k, inner), _box(v, inner)) for k, v in value.items())
            return Operand(TypeTag.MAPPING, items, kind, ref=value)

    msg = f"Cannot box value of type '{kind}'"
    raise TypeError(msg)


def _enter(container: Any, kind: str, enclosing: frozenset[int]) -> frozenset[int]:
    """Ids of the containers being boxed, including `container`."""
    if id(container) in enclosing:
        msg = f"Cannot box self-referencing '{kind}'"
        raise TypeError(msg)
    return enclosing | {id(container)}


def unbox(operand: Operand) -> Any:
    """Rebuild a host value from an operand.

    Containers are rebuilt as new objects of their recorded kind
    (unknown mapping kinds become dicts).
    """
    match operand.tag:
        case TypeTag.SEQUENCE:
            items = [unbox(item) for item in operand.value]
            if operand.kind == "tuple":
                return tuple(items)
            return items
        case TypeTag.SET:
            items = [unbox(item) for item in operand.value]
            if operand.kind == "frozenset":
                return frozenset(items)
            return set(items)
        case TypeTag.MAPPING:
            return {unbox(k): unbox(v) for k, v in operand.value}
        case _:
            return operand.value


def is_infinite(operand: Operand) -> bool:
    """Check if a real numeric operand holds an infinity."""
    match operand.tag:
        case TypeTag.FLOAT:
            return math.isinf(operand.value)
        case TypeTag.DECIMAL:
            return operand.value.is_infinite()
    return False


def describe(operand: Operand) -> str:
    """Short type description used in error messages."""
    return operand.kind or operand.tag.value
