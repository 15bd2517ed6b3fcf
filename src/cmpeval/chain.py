"""Chained comparison evaluation.

`a < b <= c` means `a < b and b <= c` with `b` evaluated once and `c`
not evaluated at all when `a < b` is false. The evaluator is a small state
machine fed one token at a time:

    EXPECT_OPERAND --operand--> EXPECT_OPERATOR --operator--> EXPECT_OPERAND
           |                                                       |
           +---- comparison false ----> DONE <---------------------+

Operand tokens are Operands, host values, or zero-argument callables that
produce one (deferred operands, called at most once).
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from cmpeval.comparator import compare
from cmpeval.errors import MalformedChainError
from cmpeval.operands import Operand, box
from cmpeval.operators import CompareOp

logger = logging.getLogger(__name__)


class ChainState(Enum):
    """States of the chain evaluator."""

    EXPECT_OPERAND = "expect-operand"
    EXPECT_OPERATOR = "expect-operator"
    DONE = "done"


def evaluate_operand(token: Any) -> Operand:
    """Produce the operand for a token, calling deferred operands."""
    if callable(token) and not isinstance(token, (Operand, type)):
        token = token()
    return box(token)


def _to_operator(token: Any) -> CompareOp:
    if not isinstance(token, (CompareOp, str)):
        msg = f"Expected comparison operator, got {type(token).__name__}"
        raise MalformedChainError(msg)
    try:
        return CompareOp.from_symbol(token)
    except ValueError as e:
        raise MalformedChainError(str(e)) from None


@dataclass
class ChainEvaluator:
    """State machine evaluating a chained comparison token by token.

    Attributes:
        state: Current state.
        left: Current left operand (the last evaluated operand).
        truth: Accumulated truth of the comparisons so far.
        pending: Operator waiting for its right operand.
        evaluated: Number of operands evaluated.
        comparisons: Number of operator applications.
    """

    state: ChainState = ChainState.EXPECT_OPERAND
    left: Operand | None = None
    truth: bool = True
    pending: CompareOp | None = None
    evaluated: int = 0
    comparisons: int = 0

    def feed(self, token: Any) -> ChainState:
        """Consume one token and return the new state.

        Tokens fed after the chain is DONE are ignored (never evaluated).
        """
        match self.state:
            case ChainState.DONE:
                pass

            case ChainState.EXPECT_OPERATOR:
                self.pending = _to_operator(token)
                self.state = ChainState.EXPECT_OPERAND

            case ChainState.EXPECT_OPERAND:
                if isinstance(token, CompareOp):
                    msg = f"Expected operand, got operator '{token.value}'"
                    raise MalformedChainError(msg)
                right = evaluate_operand(token)
                self.evaluated += 1

                if self.pending is None:
                    self.left = right
                    self.state = ChainState.EXPECT_OPERATOR
                    return self.state

                result = compare(self.left, right, self.pending)
                self.comparisons += 1
                self.truth = self.truth and result
                self.left = right
                self.pending = None

                if self.truth:
                    self.state = ChainState.EXPECT_OPERATOR
                else:
                    logger.debug(
                        "Chain short-circuited after %d comparison(s)",
                        self.comparisons,
                    )
                    self.state = ChainState.DONE

        return self.state

    def result(self) -> bool:
        """Final truth of the chain.

        Raises:
            MalformedChainError: The chain is empty, has no operator, or
                ends with an operator.
        """
        if self.state is ChainState.DONE:
            return self.truth
        if self.state is ChainState.EXPECT_OPERAND:
            msg = (
                "Empty comparison chain"
                if self.left is None
                else f"Chain ends with operator '{self.pending.value}'"
            )
            raise MalformedChainError(msg)
        if self.comparisons == 0:
            msg = "Comparison chain needs at least one operator"
            raise MalformedChainError(msg)
        return self.truth


def chain_evaluate(tokens: Iterable[Any]) -> bool:
    """Evaluate an alternating operand/operator token stream.

    Stops consuming `tokens` as soon as a comparison is false.

    Args:
        tokens: operand, op, operand[, op, operand ...]. Operators are
            CompareOp values or symbols; operand positions accept any value.

    Returns:
        True iff every comparison in the chain holds.
    """
    evaluator = ChainEvaluator()
    for token in tokens:
        if evaluator.feed(token) is ChainState.DONE:
            break
    return evaluator.result()


@dataclass(frozen=True)
class ChainExpression:
    """A chained comparison: first operand followed by (operator, operand) links."""

    first: Any
    links: tuple[tuple[CompareOp, Any], ...] = field(default_factory=tuple)

    @classmethod
    def from_tokens(cls, tokens: Iterable[Any]) -> ChainExpression:
        """Build a chain from an alternating token list, validating its shape."""
        items = list(tokens)
        if not items:
            msg = "Empty comparison chain"
            raise MalformedChainError(msg)
        if len(items) < 3 or len(items) % 2 == 0:
            msg = f"Comparison chain needs operand (op operand)+, got {len(items)} tokens"
            raise MalformedChainError(msg)
        links = tuple(
            (_to_operator(items[i]), items[i + 1]) for i in range(1, len(items), 2)
        )
        return cls(items[0], links)

    @property
    def operators(self) -> tuple[CompareOp, ...]:
        return tuple(op for op, _ in self.links)

    def tokens(self) -> Iterator[Any]:
        yield self.first
        for op, operand in self.links:
            yield op
            yield operand

    def evaluate(self) -> bool:
        return chain_evaluate(self.tokens())

    def __str__(self) -> str:
        parts = [_token_repr(self.first)]
        for op, operand in self.links:
            parts.extend([op.value, _token_repr(operand)])
        return " ".join(parts)


def _token_repr(token: Any) -> str:
    if isinstance(token, Operand):
        return repr(token.value)
    if callable(token) and not isinstance(token, type):
        return "<deferred>"
    return repr(token)
