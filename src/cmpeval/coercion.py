"""Type coercion for comparisons.

Decides whether two operands are comparable and, for numeric operands,
which canonical type they are compared in. Numeric types form a lattice:

    integer  float  rational     -> joined pairwise in rational
    decimal                      -> absorbs integer, float and rational
    complex                      -> absorbs everything (equality only)

Conversions into the canonical type must be exact. A conversion that would
lose precision fails instead of approximating.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from typing import Any

from cmpeval.operands import NUMERIC_TAGS, Operand, TypeTag

logger = logging.getLogger(__name__)


class ResolutionKind(Enum):
    """Outcome classes of type resolution."""

    CANONICAL = "canonical"
    INCOMPARABLE = "incomparable"
    NAN = "not-a-number"
    CONVERSION_ERROR = "conversion-error"


@dataclass(frozen=True)
class Resolution:
    """Result of resolving a pair of operand types.

    Attributes:
        kind: Outcome class.
        canonical: Comparison type when comparable (or the type whose
            conversion failed).
    """

    kind: ResolutionKind
    canonical: TypeTag | None = None

    @property
    def comparable(self) -> bool:
        return self.kind is ResolutionKind.CANONICAL


INCOMPARABLE = Resolution(ResolutionKind.INCOMPARABLE)
UNORDERED = Resolution(ResolutionKind.NAN)


@dataclass(frozen=True)
class Conversion:
    """Result of converting a value to a canonical type.

    Attributes:
        ok: Whether the conversion is exact.
        value: Converted value (None on failure).
        reason: Why the conversion failed.
    """

    ok: bool
    value: Any = None
    reason: str = ""


@dataclass(frozen=True)
class Coercion:
    """Both operands normalized for comparison."""

    resolution: Resolution
    left: Any = None
    right: Any = None
    reason: str = ""


def join_numeric(left: TypeTag, right: TypeTag) -> TypeTag:
    """Least common comparison type of two non-NaN numeric tags."""
    if left is right:
        return left
    match (left, right):
        case (TypeTag.COMPLEX, _) | (_, TypeTag.COMPLEX):
            return TypeTag.COMPLEX
        case (TypeTag.DECIMAL, _) | (_, TypeTag.DECIMAL):
            return TypeTag.DECIMAL
    # Any mix of integer, float and rational is exact in rationals
    return TypeTag.RATIONAL


def resolve(left: TypeTag, right: TypeTag) -> Resolution:
    """Resolve a pair of type tags.

    Args:
        left: Tag of the left operand.
        right: Tag of the right operand.

    Returns:
        Canonical comparison type, UNORDERED when a not-a-number meets
        another numeric, or INCOMPARABLE for unrelated types.
    """
    both_numeric = left in NUMERIC_TAGS and right in NUMERIC_TAGS

    if TypeTag.NAN in (left, right):
        return UNORDERED if both_numeric else INCOMPARABLE

    if both_numeric:
        return Resolution(ResolutionKind.CANONICAL, join_numeric(left, right))

    if left is right:
        return Resolution(ResolutionKind.CANONICAL, left)

    return INCOMPARABLE


def resolve_operands(left: Operand, right: Operand) -> Resolution:
    """Resolve two operands, taking sequence kinds into account.

    Sequences of different kinds (list and tuple) are unrelated types.
    """
    resolution = resolve(left.tag, right.tag)
    if (
        resolution.canonical is TypeTag.SEQUENCE
        and left.kind
        and right.kind
        and left.kind != right.kind
    ):
        return INCOMPARABLE
    return resolution


def convert(operand: Operand, target: TypeTag) -> Conversion:
    """Convert a numeric operand's value exactly to the target type.

    Total: every input yields either an exact value or a failure. The
    integer to float path is only reached by direct calls, since mixed
    integer/float pairs join in rational.
    """
    value = operand.value
    source = operand.tag

    if source is target:
        return Conversion(True, value)

    match (source, target):
        case (TypeTag.INTEGER, TypeTag.RATIONAL):
            return Conversion(True, Fraction(int(value)))
        case (TypeTag.INTEGER, TypeTag.DECIMAL):
            return Conversion(True, Decimal(int(value)))
        case (TypeTag.INTEGER, TypeTag.FLOAT):
            return _int_to_float(int(value))
        case (TypeTag.FLOAT, TypeTag.RATIONAL):
            if math.isinf(value):
                return Conversion(False, reason=f"{value} has no rational value")
            return Conversion(True, Fraction(value))
        case (TypeTag.FLOAT, TypeTag.DECIMAL):
            # Every binary float is a finite decimal
            return Conversion(True, Decimal(value))
        case (TypeTag.RATIONAL, TypeTag.DECIMAL):
            return _fraction_to_decimal(value)
        case (TypeTag.DECIMAL, TypeTag.RATIONAL):
            if value.is_infinite():
                return Conversion(False, reason=f"{value} has no rational value")
            return Conversion(True, Fraction(value))

    return Conversion(
        False, reason=f"no exact conversion from {source.value} to {target.value}"
    )


def coerce(left: Operand, right: Operand) -> Coercion:
    """Resolve two operands and normalize numeric values to the canonical type.

    Non-numeric and complex pairs keep their values; complex comparison
    works on components.
    """
    resolution = resolve_operands(left, right)
    if not resolution.comparable:
        return Coercion(resolution)

    target = resolution.canonical
    if target not in NUMERIC_TAGS or target is TypeTag.COMPLEX:
        return Coercion(resolution, left.value, right.value)

    left_conv = convert(left, target)
    right_conv = convert(right, target)
    for conv in (left_conv, right_conv):
        if not conv.ok:
            logger.debug("Conversion to %s failed: %s", target.value, conv.reason)
            return Coercion(
                Resolution(ResolutionKind.CONVERSION_ERROR, target),
                reason=conv.reason,
            )

    return Coercion(resolution, left_conv.value, right_conv.value)


def _int_to_float(value: int) -> Conversion:
    try:
        result = float(value)
    except OverflowError:
        return Conversion(False, reason=f"integer {value} is too large for float")
    if int(result) != value:
        return Conversion(False, reason=f"integer {value} is not exact as float")
    return Conversion(True, result)


def _fraction_to_decimal(value: Fraction) -> Conversion:
    """Exact decimal for a rational whose denominator is 2**a * 5**b."""
    denominator = value.denominator
    twos = fives = 0
    while denominator % 2 == 0:
        denominator //= 2
        twos += 1
    while denominator % 5 == 0:
        denominator //= 5
        fives += 1
    if denominator != 1:
        return Conversion(False, reason=f"{value} has no exact decimal value")

    # n / d == n * (10**k // d) * 10**-k, with k = max(a, b)
    exponent = max(twos, fives)
    scaled = abs(value.numerator) * (10**exponent // value.denominator)
    sign = 1 if value.numerator < 0 else 0
    digits = tuple(int(d) for d in str(scaled))
    return Conversion(True, Decimal((sign, digits, -exponent)))
