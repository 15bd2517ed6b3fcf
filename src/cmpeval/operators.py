"""Comparison operators."""

from __future__ import annotations

from enum import Enum


class CompareOp(Enum):
    """The ten comparison operators, valued by their source symbol."""

    LT = "<"
    LE = "<="
    GT = ">"
    GE = ">="
    EQ = "=="
    NE = "!="
    IS = "is"
    IS_NOT = "is not"
    IN = "in"
    NOT_IN = "not in"

    @classmethod
    def from_symbol(cls, symbol: str | CompareOp) -> CompareOp:
        """Look up an operator by symbol ("<", "not in", ...).

        Raises ValueError for unknown symbols.
        """
        if isinstance(symbol, CompareOp):
            return symbol
        normalized = " ".join(symbol.split())
        try:
            return cls(normalized)
        except ValueError:
            msg = f"Unknown comparison operator: {symbol!r}"
            raise ValueError(msg) from None

    @property
    def is_ordering(self) -> bool:
        return self in _ORDERING

    @property
    def is_equality(self) -> bool:
        return self in (CompareOp.EQ, CompareOp.NE)

    def negate(self) -> CompareOp:
        """Operator with the opposite outcome (only for non-ordering operators).

        Ordering operators have no negation: `not a < b` differs from
        `a >= b` for not-a-number and for sets.
        """
        match self:
            case CompareOp.EQ:
                return CompareOp.NE
            case CompareOp.NE:
                return CompareOp.EQ
            case CompareOp.IS:
                return CompareOp.IS_NOT
            case CompareOp.IS_NOT:
                return CompareOp.IS
            case CompareOp.IN:
                return CompareOp.NOT_IN
            case CompareOp.NOT_IN:
                return CompareOp.IN
        msg = f"Ordering operator '{self.value}' has no negation"
        raise ValueError(msg)

    def reflect(self) -> CompareOp:
        """Operator for swapped operands: `a < b` iff `b > a`."""
        match self:
            case CompareOp.LT:
                return CompareOp.GT
            case CompareOp.GT:
                return CompareOp.LT
            case CompareOp.LE:
                return CompareOp.GE
            case CompareOp.GE:
                return CompareOp.LE
            case CompareOp.EQ | CompareOp.NE | CompareOp.IS | CompareOp.IS_NOT:
                return self
        msg = f"Membership operator '{self.value}' cannot be reflected"
        raise ValueError(msg)


_ORDERING = frozenset({CompareOp.LT, CompareOp.LE, CompareOp.GT, CompareOp.GE})


def apply_order(op: CompareOp, sign: int) -> bool:
    """Apply an ordering or equality operator to a three-way result.

    Args:
        op: Ordering or equality operator.
        sign: Negative if left < right, zero if equal, positive if greater.
    """
    match op:
        case CompareOp.LT:
            return sign < 0
        case CompareOp.LE:
            return sign <= 0
        case CompareOp.GT:
            return sign > 0
        case CompareOp.GE:
            return sign >= 0
        case CompareOp.EQ:
            return sign == 0
        case CompareOp.NE:
            return sign != 0
    msg = f"Operator '{op.value}' is not an ordering operator"
    raise ValueError(msg)
