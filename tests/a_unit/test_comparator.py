"""Unit tests for cmpeval.comparator module."""

from __future__ import annotations

from decimal import Decimal
from fractions import Fraction

import pytest

from cmpeval.comparator import compare, equals, lexicographic_sign
from cmpeval.errors import ComparisonError, ConversionError, NotSupportedError
from cmpeval.operands import NONE, Operand, TypeTag, box
from cmpeval.operators import CompareOp

NAN = float("nan")
INF = float("inf")

ORDERING = ["<", "<=", ">", ">="]


class TestNotANumber:
    """Not-a-number is unequal to everything and unordered."""

    @pytest.mark.parametrize("nan", [NAN, Decimal("NaN")])
    def test_never_equal_to_itself(self, nan: object) -> None:
        assert compare(nan, nan, "==") is False
        assert compare(nan, nan, "!=") is True

    @pytest.mark.parametrize("op", ORDERING)
    def test_never_ordered(self, op: str) -> None:
        assert compare(NAN, 3, op) is False
        assert compare(3, NAN, op) is False
        assert compare(NAN, NAN, op) is False
        assert compare(Decimal("NaN"), Fraction(1, 3), op) is False

    def test_never_equal_to_numbers(self) -> None:
        assert not compare(NAN, 0, "==")
        assert not compare(NAN, INF, "==")
        assert not compare(Decimal("NaN"), NAN, "==")

    def test_complex_with_nan_component(self) -> None:
        value = complex(NAN, 0)
        assert not compare(value, value, "==")

    def test_ordering_against_non_numeric(self) -> None:
        with pytest.raises(NotSupportedError):
            compare(NAN, "a", "<")
        assert compare(NAN, "a", "==") is False


class TestNumeric:
    """Cross-type numeric comparison."""

    def test_int_float(self) -> None:
        assert compare(1, 1.0, "==")
        assert compare(5, 5.5, "<")
        assert compare(5.0, 5, ">=")
        assert compare(-3, -3.0, "==")

    def test_bool_is_integer(self) -> None:
        assert compare(True, 1, "==")
        assert compare(False, 0.0, "==")
        assert compare(True, 0.5, ">")
        assert compare(True, False, ">")

    def test_large_ints_are_not_rounded(self) -> None:
        assert compare(2**53 + 1, float(2**53), "!=")
        assert compare(2**53 + 1, float(2**53), ">")
        assert compare(10**400, 1e308, ">")

    def test_infinities(self) -> None:
        assert compare(INF, 10**400, ">")
        assert compare(-INF, -(10**400), "<")
        assert compare(INF, INF, "==")
        assert compare(-INF, INF, "<")
        assert compare(Decimal("Infinity"), INF, "==")
        assert compare(Decimal("-Infinity"), Fraction(-1, 3), "<")
        assert compare(INF, Fraction(1, 3), ">")

    def test_decimal_and_rational(self) -> None:
        assert compare(Decimal("0.5"), Fraction(1, 2), "==")
        assert compare(Decimal("0.25"), Fraction(1, 2), "<")

    def test_repeating_rational_against_decimal(self) -> None:
        with pytest.raises(ConversionError, match="1/3"):
            compare(Decimal(1), Fraction(1, 3), "<")
        with pytest.raises(ConversionError):
            compare(Fraction(2, 3), Decimal("0.5"), "==")

    def test_conversion_error_is_type_error(self) -> None:
        with pytest.raises(TypeError):
            compare(Decimal(1), Fraction(1, 3), ">")

    def test_float_against_decimal_is_exact(self) -> None:
        assert not compare(0.1, Decimal("0.1"), "==")
        assert compare(0.1, Decimal("0.1"), ">")
        assert compare(0.5, Decimal("0.5"), "==")

    def test_float_against_rational_is_exact(self) -> None:
        assert not compare(0.1, Fraction(1, 10), "==")
        assert compare(0.5, Fraction(1, 2), "==")

    def test_complex_equality(self) -> None:
        assert compare(complex(1, 0), 1, "==")
        assert compare(1, complex(1, 0), "==")
        assert compare(complex(1, 2), complex(1.0, 2), "==")
        assert compare(complex(1, 2), 1, "!=")
        assert compare(complex(0.5, 0), Fraction(1, 2), "==")

    @pytest.mark.parametrize("op", ORDERING)
    def test_complex_has_no_ordering(self, op: str) -> None:
        with pytest.raises(NotSupportedError):
            compare(1j, 1, op)
        with pytest.raises(NotSupportedError):
            compare(2, 1j, op)

    @pytest.mark.parametrize("op", ORDERING)
    def test_complex_has_no_ordering_against_nan(self, op: str) -> None:
        with pytest.raises(NotSupportedError):
            compare(1j, NAN, op)
        with pytest.raises(NotSupportedError):
            compare(Decimal("NaN"), 1j, op)
        assert compare(1j, NAN, "!=")


class TestStrings:
    """Lexicographic code-point comparison."""

    def test_first_difference_decides(self) -> None:
        assert compare("abc", "abd", "<")
        assert compare("b", "abc", ">")
        assert compare("Z", "a", "<")
        assert compare("é", "z", ">")

    def test_prefix_precedes(self) -> None:
        assert compare("ab", "abc", "<")
        assert compare("", "a", "<")

    def test_equal_strings(self) -> None:
        assert compare("abc", "abc", "==")
        assert compare("abc", "abc", "<=")
        assert not compare("abc", "abc", "<")

    def test_bytes(self) -> None:
        assert compare(b"ab", b"b", "<")
        assert compare(b"ab", b"ab", "==")

    def test_string_and_bytes_are_unrelated(self) -> None:
        assert not compare("a", b"a", "==")
        with pytest.raises(NotSupportedError):
            compare("a", b"a", "<")

    def test_lexicographic_sign(self) -> None:
        assert lexicographic_sign([1, 2], [1, 3]) == -1
        assert lexicographic_sign([1, 2, 3], [1, 2]) == 1
        assert lexicographic_sign([], []) == 0


class TestSequences:
    """Lexicographic element comparison."""

    def test_prefix_rule(self) -> None:
        assert compare([1, 2], [1, 2, 3], "<")
        assert compare((1, 2, 3), (1, 2), ">")

    def test_order_sensitive(self) -> None:
        assert compare([2, 1], [1, 2], "!=")
        assert compare([2, 1], [1, 2], ">")

    def test_numeric_elements_coerce(self) -> None:
        assert compare([1, 2.0], [1.0, 2], "==")
        assert compare([1, 2], [1, 2.5], "<")

    def test_nested(self) -> None:
        assert compare([[1], [2]], [[1], [3]], "<")
        assert compare([(1, "a")], [(1, "a")], "==")

    def test_list_and_tuple_are_unrelated(self) -> None:
        assert not compare([1, 2], (1, 2), "==")
        with pytest.raises(NotSupportedError):
            compare([1, 2], (1, 2), "<")

    def test_mismatched_elements(self) -> None:
        with pytest.raises(NotSupportedError):
            compare([1, "a"], [1, 2], "<")
        assert not compare([1, "a"], [1, 2], "==")

    def test_mismatch_after_decisive_element_is_ignored(self) -> None:
        assert compare([1, "a"], [2, 3], "<")

    def test_identical_nan_elements(self) -> None:
        nan = float("nan")
        assert compare([nan], [nan], "==")
        assert not compare([float("nan")], [float("nan")], "==")

    def test_range_has_equality_only(self) -> None:
        assert compare(range(3), range(3), "==")
        assert compare(range(0, 4, 2), range(0, 3, 2), "==")
        assert not compare(range(3), [0, 1, 2], "==")
        with pytest.raises(NotSupportedError):
            compare(range(3), range(4), "<")

    def test_nan_element_is_unordered(self) -> None:
        assert not compare([NAN], [1], "<")
        assert not compare([NAN], [1], ">")


class TestSets:
    """Subset and superset ordering."""

    def test_equality(self) -> None:
        assert compare({1, 2}, {2, 1}, "==")
        assert compare({1, 2}, frozenset({1, 2}), "==")
        assert compare({1}, {1.0}, "==")
        assert not compare({1, 2}, {1, 3}, "==")

    def test_subset_ordering(self) -> None:
        assert compare({1, 2}, {1, 2, 3}, "<")
        assert compare({1, 2}, {1, 2}, "<=")
        assert not compare({1, 2}, {1, 2}, "<")
        assert compare({1, 2, 3}, {1, 2}, ">")
        assert compare({1, 2}, {1, 2}, ">=")

    def test_disjoint_sets_are_unordered(self) -> None:
        for op in ORDERING:
            assert not compare({1}, {2}, op)

    def test_set_and_list_are_unrelated(self) -> None:
        assert not compare({1}, [1], "==")
        with pytest.raises(NotSupportedError):
            compare({1}, [1], "<=")


class TestMappings:
    """Mapping equality without ordering."""

    def test_insertion_order_irrelevant(self) -> None:
        assert compare({"a": 1, "b": 2}, {"b": 2, "a": 1}, "==")

    def test_differing_value(self) -> None:
        assert not compare({"a": 1, "b": 2}, {"a": 1, "b": 3}, "==")
        assert compare({"a": 1, "b": 2}, {"a": 1, "b": 3}, "!=")

    def test_differing_keys(self) -> None:
        assert not compare({"a": 1}, {"b": 1}, "==")
        assert not compare({"a": 1}, {"a": 1, "b": 2}, "==")

    def test_numeric_keys_and_values_coerce(self) -> None:
        assert compare({1: 2.0}, {1.0: 2}, "==")

    def test_no_ordering(self) -> None:
        with pytest.raises(NotSupportedError):
            compare({"a": 1}, {"a": 2}, "<")


class TestIdentity:
    """Identity versus equality."""

    def test_distinct_equal_containers(self) -> None:
        a = [1, 2]
        b = [1, 2]
        assert compare(a, b, "==")
        assert not compare(a, b, "is")
        assert compare(a, b, "is not")

    def test_same_storage(self) -> None:
        a = [1, 2]
        assert compare(a, a, "is")
        boxed = box(a)
        assert compare(boxed, boxed, CompareOp.IS)

    def test_identity_independent_of_value(self) -> None:
        nan = float("nan")
        assert compare(nan, nan, "is")
        assert not compare(nan, nan, "==")

    def test_singletons(self) -> None:
        assert compare(None, None, "is")
        assert compare(None, None, "==")
        assert not compare(None, ..., "==")
        assert not compare(None, 0, "==")
        assert compare(NONE, None, "is")
        with pytest.raises(NotSupportedError):
            compare(None, None, "<")


class TestUnrelatedTypes:
    """Mixed non-numeric types."""

    @pytest.mark.parametrize(
        ("left", "right"),
        [("1", 1), ([], 0), ((), 0), ({}, []), (None, "")],
    )
    def test_equality_is_false(self, left: object, right: object) -> None:
        assert compare(left, right, "==") is False
        assert compare(left, right, "!=") is True

    @pytest.mark.parametrize(("left", "right"), [("1", 1), ([], 0), ((), 0)])
    @pytest.mark.parametrize("op", ORDERING)
    def test_ordering_is_not_supported(
        self, left: object, right: object, op: str
    ) -> None:
        with pytest.raises(NotSupportedError) as exc_info:
            compare(left, right, op)
        assert exc_info.value.op == op
        assert isinstance(exc_info.value, ComparisonError)


class TestDispatch:
    """Operator dispatch and operand forms."""

    def test_accepts_operator_enum(self) -> None:
        assert compare(1, 2, CompareOp.LT)

    def test_accepts_operands(self) -> None:
        left = Operand(TypeTag.INTEGER, 1, "int")
        right = Operand(TypeTag.FLOAT, 1.5, "float")
        assert compare(left, right, "<")

    def test_membership_operators(self) -> None:
        assert compare(1, [1, 2], "in")
        assert compare(3, [1, 2], "not in")

    def test_unknown_operator(self) -> None:
        with pytest.raises(ValueError, match="Unknown comparison operator"):
            compare(1, 2, "<>")

    def test_equals_on_operands(self) -> None:
        assert equals(box(1), box(Fraction(1)))
