"""cmpeval: value-comparison semantics engine.

Evaluates ordering, equality, identity and membership operators, and
chained comparisons, over tagged operands with exact numeric coercion.
"""

from __future__ import annotations

from cmpeval.chain import ChainEvaluator, ChainExpression, chain_evaluate
from cmpeval.coercion import coerce, convert, resolve
from cmpeval.comparator import compare, equals
from cmpeval.errors import (
    ComparisonError,
    ConversionError,
    MalformedChainError,
    NotSupportedError,
)
from cmpeval.membership import contains, not_contains
from cmpeval.operands import Operand, TypeTag, box
from cmpeval.operators import CompareOp

__all__ = [
    "ChainEvaluator",
    "ChainExpression",
    "CompareOp",
    "ComparisonError",
    "ConversionError",
    "MalformedChainError",
    "NotSupportedError",
    "Operand",
    "TypeTag",
    "box",
    "chain_evaluate",
    "coerce",
    "compare",
    "contains",
    "convert",
    "equals",
    "not_contains",
    "resolve",
]
