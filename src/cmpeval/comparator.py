"""Value comparison.

Implements every comparison operator over operands:

- Numbers compare mathematically in their canonical type (see coercion);
  not-a-number is unordered and unequal to everything.
- Strings and bytes compare lexicographically by code point / byte value.
- Sequences compare lexicographically by element; a strict prefix precedes.
- Sets compare by inclusion; mappings and singletons only by equality.
- `is` compares storage identity; `in` delegates to membership.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from cmpeval.coercion import ResolutionKind, coerce, resolve_operands
from cmpeval.errors import ConversionError, NotSupportedError
from cmpeval.operands import Operand, TypeTag, box, describe, is_infinite
from cmpeval.operators import CompareOp, apply_order

_REAL_TAGS = frozenset({
    TypeTag.INTEGER,
    TypeTag.FLOAT,
    TypeTag.RATIONAL,
    TypeTag.DECIMAL,
})

_ZERO = box(0)

# Sequence kinds that support equality but not ordering
_UNORDERED_SEQUENCE_KINDS = frozenset({"range"})


def compare(left: Any, right: Any, op: CompareOp | str) -> bool:
    """Apply a comparison operator.

    Args:
        left: Left operand (Operand or host value).
        right: Right operand (Operand or host value).
        op: Operator or its symbol.

    Returns:
        The comparison result.

    Raises:
        NotSupportedError: Ordering between incomparable types.
        ConversionError: Numeric operand without an exact canonical value.
    """
    op = CompareOp.from_symbol(op)
    left = box(left)
    right = box(right)

    match op:
        case CompareOp.IS:
            return left.is_same(right)
        case CompareOp.IS_NOT:
            return not left.is_same(right)
        case CompareOp.IN | CompareOp.NOT_IN:
            from cmpeval.membership import contains

            found = contains(left, right)
            return found if op is CompareOp.IN else not found
        case CompareOp.EQ:
            return equals(left, right)
        case CompareOp.NE:
            return not equals(left, right)

    return order(left, right, op)


def equals(left: Operand, right: Operand) -> bool:
    """Value equality. Unrelated types are unequal, never an error."""
    resolution = resolve_operands(left, right)
    if not resolution.comparable:
        return False

    match resolution.canonical:
        case TypeTag.COMPLEX:
            return _complex_equals(left, right)
        case TypeTag.INTEGER | TypeTag.FLOAT | TypeTag.RATIONAL | TypeTag.DECIMAL:
            return _real_sign(left, right) == 0
        case TypeTag.STRING | TypeTag.BYTES:
            return _scalar_sequence_sign(left, right) == 0
        case TypeTag.SEQUENCE:
            return len(left.value) == len(right.value) and all(
                element_equals(a, b) for a, b in zip(left.value, right.value)
            )
        case TypeTag.SET:
            return _is_subset(left, right) and _is_subset(right, left)
        case TypeTag.MAPPING:
            return _mapping_equals(left, right)

    return left.is_same(right)


def element_equals(left: Operand, right: Operand) -> bool:
    """Equality as used inside containers: identical objects are equal."""
    return left.is_same(right) or equals(left, right)


def order(left: Operand, right: Operand, op: CompareOp) -> bool:
    """Ordering comparison (<, <=, >, >=)."""
    # complex refuses ordering even against not-a-number
    if TypeTag.COMPLEX in (left.tag, right.tag):
        raise NotSupportedError(op.value, describe(left), describe(right))

    resolution = resolve_operands(left, right)

    match resolution.kind:
        case ResolutionKind.NAN:
            return False
        case ResolutionKind.INCOMPARABLE:
            raise NotSupportedError(op.value, describe(left), describe(right))

    match resolution.canonical:
        case TypeTag.INTEGER | TypeTag.FLOAT | TypeTag.RATIONAL | TypeTag.DECIMAL:
            return apply_order(op, _real_sign(left, right))
        case TypeTag.STRING | TypeTag.BYTES:
            return apply_order(op, _scalar_sequence_sign(left, right))
        case TypeTag.SEQUENCE if left.kind not in _UNORDERED_SEQUENCE_KINDS:
            return _sequence_order(left, right, op)
        case TypeTag.SET:
            return _set_order(left, right, op)

    # mapping, identity-singleton and range have no ordering
    raise NotSupportedError(op.value, describe(left), describe(right))


def lexicographic_sign(left: Sequence[int], right: Sequence[int]) -> int:
    """Three-way lexicographic comparison of integer sequences.

    The first differing position decides; otherwise the shorter precedes.
    """
    for a, b in zip(left, right):
        if a != b:
            return -1 if a < b else 1
    return _sign(len(left) - len(right))


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def _code_points(operand: Operand) -> Sequence[int]:
    if operand.tag is TypeTag.STRING:
        return [ord(ch) for ch in operand.value]
    # iterating bytes yields byte values
    return operand.value


def _scalar_sequence_sign(left: Operand, right: Operand) -> int:
    return lexicographic_sign(_code_points(left), _code_points(right))


def _extended_rank(operand: Operand) -> int:
    """Position on the extended real line: -1 (-inf), 0 (finite), 1 (+inf)."""
    if not is_infinite(operand):
        return 0
    return 1 if operand.value > 0 else -1


def _real_sign(left: Operand, right: Operand) -> int:
    """Three-way comparison of two non-NaN real numbers."""
    if is_infinite(left) or is_infinite(right):
        return _sign(_extended_rank(left) - _extended_rank(right))

    coercion = coerce(left, right)
    if coercion.resolution.kind is ResolutionKind.CONVERSION_ERROR:
        msg = (
            f"cannot compare '{describe(left)}' and '{describe(right)}' "
            f"exactly: {coercion.reason}"
        )
        raise ConversionError(msg)

    a, b = coercion.left, coercion.right
    return (a > b) - (a < b)


def _complex_equals(left: Operand, right: Operand) -> bool:
    if left.tag is not TypeTag.COMPLEX:
        left, right = right, left

    if right.tag is TypeTag.COMPLEX:
        right_real = box(right.value.real)
        right_imag = box(right.value.imag)
    else:
        right_real = right
        right_imag = _ZERO

    return equals(box(left.value.real), right_real) and equals(
        box(left.value.imag), right_imag
    )


def _sequence_order(left: Operand, right: Operand, op: CompareOp) -> bool:
    for a, b in zip(left.value, right.value):
        if not element_equals(a, b):
            return compare(a, b, op)
    return apply_order(op, _sign(len(left.value) - len(right.value)))


def _has_element(container: Operand, item: Operand) -> bool:
    return any(element_equals(item, element) for element in container.value)


def _is_subset(left: Operand, right: Operand) -> bool:
    return all(_has_element(right, item) for item in left.value)


def _set_order(left: Operand, right: Operand, op: CompareOp) -> bool:
    match op:
        case CompareOp.LE:
            return _is_subset(left, right)
        case CompareOp.GE:
            return _is_subset(right, left)
        case CompareOp.LT:
            return _is_subset(left, right) and not _is_subset(right, left)
        case CompareOp.GT:
            return _is_subset(right, left) and not _is_subset(left, right)
    msg = f"Operator '{op.value}' is not a set ordering"
    raise ValueError(msg)


def _mapping_equals(left: Operand, right: Operand) -> bool:
    """Same keys with pairwise-equal values; insertion order is irrelevant.

    Mapping keys are distinct, so equal sizes plus a full match of the left
    keys cover both directions.
    """
    if len(left.value) != len(right.value):
        return False
    for key, value in left.value:
        for other_key, other_value in right.value:
            if element_equals(key, other_key):
                if not element_equals(value, other_value):
                    return False
                break
        else:
            return False
    return True
