"""Command-line interface.

Provides the `cmpeval` command with subcommands for:
- Running the conformance suite
- Evaluating a single comparison chain given as literals
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import yaml

from cmpeval.chain import chain_evaluate
from cmpeval.conformance import (
    CaseResult,
    format_results_table,
    load_suite,
    run_suite,
)
from cmpeval.errors import ComparisonError, MalformedChainError
from cmpeval.literals import load_literal
from cmpeval.operators import CompareOp

# Default paths
DEFAULT_SUITE_PATH = (
    Path(__file__).parent.parent.parent / "programs" / "conformance" / "suite.yaml"
)

# Two-word operators given as separate arguments
_OPERATOR_WORDS = {("is", "not"): "is not", ("not", "in"): "not in"}


def cmd_check(args: argparse.Namespace) -> int:
    """Run the conformance suite."""
    suite_path = Path(args.suite) if args.suite else DEFAULT_SUITE_PATH

    if not suite_path.exists():
        print(f"Error: Suite not found: {suite_path}")
        print("Create suite.yaml or specify --suite path")
        return 1

    try:
        suite = load_suite(suite_path)
    except (OSError, TypeError, ValueError, ArithmeticError, yaml.YAMLError) as e:
        print(f"Error loading suite: {e}")
        return 1

    print(f"cmpeval conformance: {suite.name} ({len(suite.cases)} cases)")

    def on_result(result: CaseResult) -> None:
        if not args.quiet:
            status = "ok" if result.passed else "FAIL"
            print(f"  {result.case.name}: {status}")

    results = run_suite(suite, host=not args.no_host, progress=on_result)
    print()
    print(format_results_table(results))

    return 0 if all(r.passed for r in results) else 1


def split_tokens(words: list[str]) -> list[object]:
    """Turn command-line words into chain tokens.

    Operand positions are YAML literals; operator positions are symbols,
    with "is not" / "not in" accepted as two words.
    """
    tokens: list[object] = []
    expect_operand = True
    i = 0
    while i < len(words):
        word = words[i]
        if expect_operand:
            tokens.append(load_literal(word))
        else:
            pair = (word, words[i + 1]) if i + 1 < len(words) else None
            if pair in _OPERATOR_WORDS:
                tokens.append(CompareOp.from_symbol(_OPERATOR_WORDS[pair]))
                i += 1
            else:
                tokens.append(word)
        expect_operand = not expect_operand
        i += 1
    return tokens


def cmd_eval(args: argparse.Namespace) -> int:
    """Evaluate a comparison chain."""
    try:
        tokens = split_tokens(args.tokens)
    except (ValueError, ArithmeticError, yaml.YAMLError) as e:
        # e.g. `!fraction 1/0` or `!decimal abc`
        print(f"Error: {e}")
        return 1

    try:
        result = chain_evaluate(tokens)
    except MalformedChainError as e:
        print(f"Error: {e}")
        return 1
    except (ComparisonError, ValueError) as e:
        print(f"{type(e).__name__}: {e}")
        return 2
    except TypeError as e:
        # operand with no boxed representation, e.g. a YAML date
        print(f"Error: {e}")
        return 1

    print(result)
    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="cmpeval",
        description="Value-comparison semantics engine",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # check command
    check_parser = subparsers.add_parser("check", help="Run the conformance suite")
    check_parser.add_argument(
        "--suite",
        help="Path to suite.yaml (default: programs/conformance/suite.yaml)",
    )
    check_parser.add_argument(
        "--no-host",
        action="store_true",
        help="Skip the cross-check against the host interpreter",
    )
    check_parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress per-case progress output",
    )
    check_parser.set_defaults(func=cmd_check)

    # eval command
    eval_parser = subparsers.add_parser(
        "eval", help="Evaluate a chain, e.g.: cmpeval eval 1 '<' 2.5 '<' '!fraction 7/2'"
    )
    eval_parser.add_argument(
        "tokens",
        nargs="+",
        help="Alternating YAML literals and operators",
    )
    eval_parser.set_defaults(func=cmd_eval)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if args.command is None:
        parser.print_help()
        return 0

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
