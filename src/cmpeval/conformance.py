"""Conformance suite for the comparison engine.

A suite is a YAML file listing comparison chains with their expected
outcome. Each case is evaluated by the engine and, unless disabled,
cross-checked against the host Python interpreter's own operators:

    name: comparisons
    cases:
      - name: prefix precedes
        chain: [[1, 2], "<", [1, 2, 3]]
        expect: true
      - name: decimal vs repeating rational
        chain: [!decimal "1", "<", !fraction "1/3"]
        expect: conversion_error
        host: false
"""

from __future__ import annotations

import logging
import operator
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from cmpeval.chain import ChainExpression
from cmpeval.errors import ConversionError, MalformedChainError, NotSupportedError
from cmpeval.literals import load_document
from cmpeval.operators import CompareOp

logger = logging.getLogger(__name__)

# Outcome labels
TRUE = "true"
FALSE = "false"
NOT_SUPPORTED = "not_supported"
CONVERSION_ERROR = "conversion_error"
MALFORMED = "malformed"
VALUE_ERROR = "value_error"
UNSUPPORTED_OPERAND = "unsupported_operand"
TYPE_ERROR = "type_error"
HOST_ERROR = "host_error"

OUTCOMES = frozenset({
    TRUE,
    FALSE,
    NOT_SUPPORTED,
    CONVERSION_ERROR,
    MALFORMED,
    VALUE_ERROR,
    UNSUPPORTED_OPERAND,
})

_HOST_OPS: dict[CompareOp, Callable[[Any, Any], Any]] = {
    CompareOp.LT: operator.lt,
    CompareOp.LE: operator.le,
    CompareOp.GT: operator.gt,
    CompareOp.GE: operator.ge,
    CompareOp.EQ: operator.eq,
    CompareOp.NE: operator.ne,
    CompareOp.IS: operator.is_,
    CompareOp.IS_NOT: operator.is_not,
    CompareOp.IN: lambda a, b: operator.contains(b, a),
    CompareOp.NOT_IN: lambda a, b: not operator.contains(b, a),
}


@dataclass
class ConformanceCase:
    """A single comparison case.

    Attributes:
        name: Case identifier.
        tokens: Alternating operand/operator tokens.
        expect: Expected outcome label.
        host: Whether to cross-check against the host interpreter.
    """

    name: str
    tokens: list[Any]
    expect: str
    host: bool = True


@dataclass
class ConformanceSuite:
    """Collection of conformance cases.

    Attributes:
        name: Suite name.
        cases: Cases in file order.
        path: Source file, if loaded from disk.
    """

    name: str
    cases: list[ConformanceCase] = field(default_factory=list)
    path: Path | None = None


@dataclass
class CaseResult:
    """Outcome of running one case.

    Attributes:
        case: The case.
        outcome: Engine outcome label.
        host_outcome: Host interpreter outcome label (None if not checked).
    """

    case: ConformanceCase
    outcome: str
    host_outcome: str | None = None

    @property
    def matches_expected(self) -> bool:
        return self.outcome == self.case.expect

    @property
    def matches_host(self) -> bool:
        if self.host_outcome is None:
            return True
        if self.outcome in (TRUE, FALSE, VALUE_ERROR):
            return self.host_outcome == self.outcome
        # Engine comparison errors are TypeErrors, as on the host
        return self.host_outcome == TYPE_ERROR

    @property
    def passed(self) -> bool:
        return self.matches_expected and self.matches_host


def _normalize_expect(value: Any, case_name: str) -> str:
    if isinstance(value, bool):
        return TRUE if value else FALSE
    label = str(value).strip().lower()
    if label not in OUTCOMES:
        msg = f"Case '{case_name}': unknown expected outcome {value!r}"
        raise ValueError(msg)
    return label


def load_suite(path: Path | str) -> ConformanceSuite:
    """Load a conformance suite from YAML.

    Args:
        path: Path to the suite file.

    Returns:
        ConformanceSuite with its cases.

    Raises:
        ValueError: If a case is missing fields or has an unknown outcome.
    """
    path = Path(path)
    with path.open(encoding="utf-8") as f:
        data = load_document(f)

    suite = parse_suite(data or {})
    suite.path = path
    return suite


def parse_suite(data: dict[str, Any]) -> ConformanceSuite:
    """Build a suite from already-loaded YAML data."""
    cases = []
    for index, case_data in enumerate(data.get("cases", [])):
        name = case_data.get("name") or f"case-{index + 1}"
        if "chain" not in case_data or "expect" not in case_data:
            msg = f"Case '{name}': 'chain' and 'expect' are required"
            raise ValueError(msg)
        cases.append(
            ConformanceCase(
                name=name,
                tokens=list(case_data["chain"]),
                expect=_normalize_expect(case_data["expect"], name),
                host=case_data.get("host", True),
            )
        )
    return ConformanceSuite(name=data.get("name", "conformance"), cases=cases)


def engine_outcome(chain: ChainExpression) -> str:
    """Evaluate a chain with the engine and label the outcome."""
    try:
        return TRUE if chain.evaluate() else FALSE
    except NotSupportedError:
        return NOT_SUPPORTED
    except ConversionError:
        return CONVERSION_ERROR
    except TypeError as e:
        # operand with no boxed representation
        logger.debug("Unsupported operand: %s", e)
        return UNSUPPORTED_OPERAND
    except ValueError:
        return VALUE_ERROR


def host_outcome(chain: ChainExpression) -> str:
    """Evaluate a chain with the host interpreter's operators.

    Mirrors the host's chained comparison: each operand once, stop at the
    first false comparison.
    """
    left = chain.first
    try:
        for op, right in chain.links:
            if not _HOST_OPS[op](left, right):
                return FALSE
            left = right
    except TypeError:
        return TYPE_ERROR
    except ValueError:
        return VALUE_ERROR
    except ArithmeticError:
        # decimal signals (e.g. InvalidOperation on NaN ordering)
        return HOST_ERROR
    return TRUE


def run_case(case: ConformanceCase, *, host: bool = True) -> CaseResult:
    """Run a single case."""
    try:
        chain = ChainExpression.from_tokens(case.tokens)
    except MalformedChainError as e:
        logger.debug("Case %s is malformed: %s", case.name, e)
        return CaseResult(case, MALFORMED)

    outcome = engine_outcome(chain)
    checked = host_outcome(chain) if host and case.host else None
    return CaseResult(case, outcome, checked)


def run_suite(
    suite: ConformanceSuite,
    *,
    host: bool = True,
    progress: Callable[[CaseResult], None] | None = None,
) -> list[CaseResult]:
    """Run every case of a suite.

    Args:
        suite: Suite to run.
        host: Cross-check against the host interpreter where cases allow.
        progress: Optional callback invoked after each case.

    Returns:
        Results in case order.
    """
    results = []
    for case in suite.cases:
        result = run_case(case, host=host)
        if not result.passed:
            logger.info(
                "Case %s failed: expected %s, got %s (host: %s)",
                case.name,
                case.expect,
                result.outcome,
                result.host_outcome,
            )
        results.append(result)
        if progress:
            progress(result)
    return results


def format_results_table(results: list[CaseResult]) -> str:
    """Format conformance results as a table.

    Args:
        results: Case results.

    Returns:
        Formatted table string.
    """
    lines = []

    lines.append("=" * 78)
    lines.append("CONFORMANCE RESULTS")
    lines.append("=" * 78)
    lines.append(
        f"{'Case':<40} {'Expected':<16} {'Engine':<16} {'Host':<12}"
    )
    lines.append("-" * 78)

    for result in results:
        marker = "" if result.passed else "  FAIL"
        host = result.host_outcome or "-"
        lines.append(
            f"{result.case.name[:40]:<40} {result.case.expect:<16} "
            f"{result.outcome:<16} {host:<12}{marker}"
        )

    passed = sum(1 for r in results if r.passed)
    lines.append("-" * 78)
    lines.append(f"Passed: {passed}/{len(results)}")
    return "\n".join(lines)
