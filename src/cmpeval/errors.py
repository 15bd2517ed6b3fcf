"""Exceptions raised by the comparison engine."""

from __future__ import annotations


class ComparisonError(TypeError):
    """Base class for comparisons that cannot produce a result."""


class NotSupportedError(ComparisonError):
    """Operator not supported between the operand types."""

    def __init__(self, op: str, left: str, right: str) -> None:
        self.op = op
        self.left = left
        self.right = right
        super().__init__(
            f"'{op}' not supported between instances of '{left}' and '{right}'"
        )


class ConversionError(ComparisonError):
    """Numeric operand has no exact representation in the comparison type."""


class MalformedChainError(ValueError):
    """Chain token stream does not alternate operands and operators."""
