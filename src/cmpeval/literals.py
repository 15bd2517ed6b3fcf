"""YAML literals for comparison operands.

Plain YAML covers ints, floats (including .nan and .inf), strings, lists,
mappings and null. Custom tags cover the rest:

    !decimal "0.1"      !fraction "1/3"     !complex "1+2j"
    !tuple [1, 2]       !set [1, 2]         !frozenset [1, 2]
    !bytes "abc"        !ellipsis ""

Anchors and aliases (`&a [1]`, `*a`) load as the same object, which is
how identity is expressed in literal form.
"""

from __future__ import annotations

from decimal import Decimal
from fractions import Fraction
from typing import IO, Any

import yaml


class LiteralLoader(yaml.SafeLoader):
    """SafeLoader with constructors for operand literal tags."""


def _construct_decimal(loader: LiteralLoader, node: yaml.Node) -> Decimal:
    return Decimal(loader.construct_scalar(node))


def _construct_fraction(loader: LiteralLoader, node: yaml.Node) -> Fraction:
    return Fraction(loader.construct_scalar(node))


def _construct_complex(loader: LiteralLoader, node: yaml.Node) -> complex:
    return complex(loader.construct_scalar(node).replace(" ", ""))


def _construct_tuple(loader: LiteralLoader, node: yaml.Node) -> tuple:
    return tuple(loader.construct_sequence(node, deep=True))


def _construct_set(loader: LiteralLoader, node: yaml.Node) -> set:
    return set(loader.construct_sequence(node, deep=True))


def _construct_frozenset(loader: LiteralLoader, node: yaml.Node) -> frozenset:
    return frozenset(loader.construct_sequence(node, deep=True))


def _construct_bytes(loader: LiteralLoader, node: yaml.Node) -> bytes:
    return loader.construct_scalar(node).encode("utf-8")


def _construct_ellipsis(loader: LiteralLoader, node: yaml.Node) -> Any:
    return Ellipsis


LiteralLoader.add_constructor("!decimal", _construct_decimal)
LiteralLoader.add_constructor("!fraction", _construct_fraction)
LiteralLoader.add_constructor("!complex", _construct_complex)
LiteralLoader.add_constructor("!tuple", _construct_tuple)
LiteralLoader.add_constructor("!set", _construct_set)
LiteralLoader.add_constructor("!frozenset", _construct_frozenset)
LiteralLoader.add_constructor("!bytes", _construct_bytes)
LiteralLoader.add_constructor("!ellipsis", _construct_ellipsis)


def load_literal(text: str) -> Any:
    """Load a single operand literal.

    Args:
        text: YAML text, e.g. "[1, 2]" or "!fraction 1/3".

    Returns:
        Host value.

    Raises:
        yaml.YAMLError: If the text is not valid YAML.
    """
    return yaml.load(text, Loader=LiteralLoader)


def load_document(stream: str | IO[str]) -> Any:
    """Load a full YAML document (e.g. a conformance suite)."""
    return yaml.load(stream, Loader=LiteralLoader)
