"""Membership tests (`in` / `not in`)."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from cmpeval.comparator import element_equals
from cmpeval.errors import NotSupportedError
from cmpeval.operands import Operand, TypeTag, box, describe


def contains(item: Any, container: Any) -> bool:
    """Check whether `item` is in `container`.

    - str: item must be a str occurring as a contiguous substring.
    - bytes: item is a contiguous byte substring or a byte value (0..255).
    - sequence / set: some element is identical or equal to item.
    - mapping: some key (not value) is identical or equal to item.

    Raises:
        NotSupportedError: The container does not support membership, or a
            str/bytes container is given an unsupported item.
        ValueError: Integer item outside the byte range for a bytes container.
    """
    item = box(item)
    container = box(container)

    match container.tag:
        case TypeTag.STRING:
            if item.tag is not TypeTag.STRING:
                raise NotSupportedError("in", describe(item), describe(container))
            return is_subsequence(item.value, container.value)

        case TypeTag.BYTES:
            if item.tag is TypeTag.INTEGER:
                byte = int(item.value)
                if not 0 <= byte <= 255:
                    msg = "byte must be in range(0, 256)"
                    raise ValueError(msg)
                return byte in container.value
            if item.tag is not TypeTag.BYTES:
                raise NotSupportedError("in", describe(item), describe(container))
            return is_subsequence(item.value, container.value)

        case TypeTag.SEQUENCE | TypeTag.SET:
            return any(element_equals(item, element) for element in container.value)

        case TypeTag.MAPPING:
            return any(element_equals(item, key) for key, _ in container.value)

    raise NotSupportedError("in", describe(item), describe(container))


def not_contains(item: Any, container: Any) -> bool:
    """Negation of `contains`."""
    return not contains(item, container)


def is_subsequence(needle: Sequence, haystack: Sequence) -> bool:
    """Check whether `needle` occurs contiguously in `haystack`.

    The empty needle occurs in every haystack.
    """
    size = len(needle)
    for start in range(len(haystack) - size + 1):
        if haystack[start : start + size] == needle:
            return True
    return False
