"""Tests for rendering values as expression-language text."""

from __future__ import annotations

import pytest

from firetruck.values import (
    BooleanValue,
    ConstructorValue,
    FloatValue,
    InstantValue,
    IntValue,
    ListValue,
    PseudoValue,
    QualifiedName,
    RecordValue,
    StringValue,
    contract_id_value,
    qual,
    render_qualified_name,
    render_value,
)


class TestScalars:
    """Tests for integers, strings, floats, instants and booleans."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (IntValue(42), "42"),
            (IntValue(-3), "-3"),
            (IntValue(0), "0"),
            (IntValue(12345678901234567890), "12345678901234567890"),
        ],
    )
    def test_integers(self, value, expected):
        assert render_value(value) == expected

    def test_string_is_quoted_verbatim(self):
        assert render_value(StringValue('say "hi"')) == '"say "hi""'
        assert render_value(StringValue("")) == '""'

    @pytest.mark.parametrize(
        ("number", "expected"),
        [
            (2.0, "2.0"),
            (2.5, "2.5"),
            (-1.0, "-1.0"),
            (0.1, "0.1"),
            (0.0, "0.0"),
            (-0.0, "0.0"),
            (1e16, "10000000000000000.0"),
            (1e20, "100000000000000000000.0"),
            (123456789012345680000.0, "123456789012345680000.0"),
            (1e21, "1e+21.0"),
            (1.5e-5, "0.000015"),
            (1e-7, "1e-7"),
            (2.5e-10, "2.5e-10"),
        ],
    )
    def test_floats_always_show_a_decimal_point(self, number, expected):
        assert render_value(FloatValue(number)) == expected

    def test_instant_is_wrapped_in_hashes(self):
        assert render_value(InstantValue("2019-01-01T12:00:00Z")) == "#2019-01-01T12:00:00Z#"

    def test_booleans_are_capitalized(self):
        assert render_value(BooleanValue(True)) == "True"
        assert render_value(BooleanValue(False)) == "False"


class TestRecords:
    """Tests for record rendering."""

    def test_fields_in_given_order(self):
        record = RecordValue(qual("Ns::Tag"), {"a": IntValue(1), "b": BooleanValue(True)})
        assert render_value(record) == "Ns::Tag { a = 1, b = True }"

    def test_field_order_follows_mapping_not_alphabet(self):
        record = RecordValue(qual("Tag"), {"z": IntValue(1), "a": IntValue(2)})
        assert render_value(record) == "Tag { z = 1, a = 2 }"

    def test_empty_record_keeps_both_spaces(self):
        assert render_value(RecordValue(qual("Tag"), {})) == "Tag {  }"

    def test_nested_record(self):
        inner = RecordValue(qual("Inner"), {"x": StringValue("y")})
        outer = RecordValue(qual("Outer"), {"inner": inner})
        assert render_value(outer) == 'Outer { inner = Inner { x = "y" } }'


class TestLists:
    """Tests for the multi-line list layout."""

    def test_continuation_lines_are_indented(self):
        value = ListValue((IntValue(1), IntValue(2)))
        assert render_value(value) == "[\n1,\n  2\n]"

    def test_single_element(self):
        assert render_value(ListValue((StringValue("a"),))) == '[\n"a"\n]'

    def test_empty_list(self):
        assert render_value(ListValue(())) == "[\n\n]"


class TestConstructors:
    """Tests for constructor applications and argument parenthesization."""

    def test_no_arguments(self):
        assert render_value(ConstructorValue(qual("Prelude::None"))) == "Prelude::None"

    def test_scalar_arguments_are_space_separated(self):
        value = ConstructorValue(qual("Pair"), (IntValue(1), StringValue("b")))
        assert render_value(value) == 'Pair 1 "b"'

    def test_nested_constructor_with_arguments_is_parenthesized(self):
        value = ConstructorValue(qual("Some"), (ConstructorValue(qual("Some"), (IntValue(1),)),))
        assert render_value(value) == "Some (Some 1)"

    def test_nested_constructor_without_arguments_is_bare(self):
        value = ConstructorValue(qual("Some"), (ConstructorValue(qual("None")),))
        assert render_value(value) == "Some None"

    def test_record_argument_is_not_parenthesized(self):
        value = ConstructorValue(qual("Wrap"), (RecordValue(qual("R"), {"a": IntValue(1)}),))
        assert render_value(value) == "Wrap R { a = 1 }"


class TestNames:
    """Tests for qualified names and pseudo values."""

    def test_qualified_name_joins_segments(self):
        assert render_qualified_name(QualifiedName(("A", "B"), "c")) == "A::B::c"
        assert render_qualified_name(QualifiedName((), "c")) == "c"

    def test_pseudo_value_renders_bound_name_only(self):
        assert render_value(contract_id_value("abc")) == "self"
        assert render_value(PseudoValue(qual("Ns::thing"), {"opaque": True})) == "Ns::thing"

    def test_unknown_object_renders_empty(self, caplog):
        assert render_value(object()) == ""  # type: ignore[arg-type]
        assert "unrecognized value kind" in caplog.text
