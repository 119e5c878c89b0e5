from __future__ import annotations

import itertools

import pytest

from text_file_input.adapters import TextLineReader
from text_file_input.core.fields import (
    DEFAULT_DATE_FORMAT,
    massage_field_name,
    minimal_width,
    next_field_name,
    set_minimal_width,
    synthesize_csv_fields,
    synthesize_fixed_fields,
)
from text_file_input.models import BaseFileField, ContentConfig, FieldType, TrimType


def _layout(fields: list) -> list[tuple[str, int, int]]:
    return [(f.name, f.position, f.length) for f in fields]


class TestFieldNames:
    def test_next_field_name_skips_used(self) -> None:
        assert next_field_name([]) == "Field_000"
        assert next_field_name(["Field_000", "Field_002"]) == "Field_001"

    def test_massage_replaces_invalid_characters(self) -> None:
        assert massage_field_name("My- Field") == "My__Field"
        assert massage_field_name("año.2024") == "a_o_2024"

    def test_massage_is_idempotent(self) -> None:
        once = massage_field_name("a b/c")
        assert massage_field_name(once) == once

    def test_massage_empty_name(self) -> None:
        assert massage_field_name("", used=["Field_000"]) == "Field_001"


class TestSynthesizeFixedFields:
    def test_nothing_declared_spans_widest_row(self) -> None:
        fields = synthesize_fixed_fields([], ["abc", "abcdefg", ""])
        assert _layout(fields) == [("Field_000", 0, 7)]
        assert fields[0].type == "String"

    def test_gaps_are_filled(self) -> None:
        declared = [BaseFileField(name="A", position=0, length=3), BaseFileField(name="B", position=6, length=2)]
        fields = synthesize_fixed_fields(declared, ["x" * 10])
        assert _layout(fields) == [("A", 0, 3), ("Field_000", 3, 3), ("B", 6, 2), ("Field_001", 8, 2)]

    def test_gap_inside_short_sample(self) -> None:
        declared = [BaseFileField(name="A", position=0, length=2), BaseFileField(name="B", position=5, length=2)]
        fields = synthesize_fixed_fields(declared, ["abcdef"])
        assert _layout(fields) == [("A", 0, 2), ("Field_000", 2, 3), ("B", 5, 2)]
        assert len({f.name for f in fields}) == len(fields)

    def test_no_gaps_between_adjacent_fields(self) -> None:
        declared = [
            BaseFileField(name="B", position=4, length=4),
            BaseFileField(name="A", position=0, length=4),
        ]
        fields = synthesize_fixed_fields(declared, ["x" * 8])
        assert _layout(fields) == [("A", 0, 4), ("B", 4, 4)]

    def test_coverage_is_contiguous(self) -> None:
        declared = [
            BaseFileField(name="a", position=2, length=1),
            BaseFileField(name="b", position=5, length=2),
            BaseFileField(name="c", position=9, length=1),
        ]
        fields = synthesize_fixed_fields(declared, ["y" * 14])
        for left, right in itertools.pairwise(fields):
            assert left.position + left.length == right.position
        assert fields[-1].position + fields[-1].length == 14

    def test_nested_field_does_not_reopen_covered_range(self) -> None:
        declared = [
            BaseFileField(name="A", position=0, length=10),
            BaseFileField(name="B", position=2, length=2),
            BaseFileField(name="C", position=6, length=2),
        ]
        assert _layout(synthesize_fixed_fields(declared, ["x" * 10])) == [("A", 0, 10), ("B", 2, 2), ("C", 6, 2)]
        wider = synthesize_fixed_fields(declared, ["x" * 12])
        assert _layout(wider)[-1] == ("Field_000", 10, 2)

    def test_gap_names_avoid_declared_names(self) -> None:
        declared = [
            BaseFileField(name="Field_000", position=0, length=1),
            BaseFileField(name="x", position=3, length=1),
        ]
        names = [f.name for f in synthesize_fixed_fields(declared, ["1234"])]
        assert names == ["Field_000", "Field_001", "x"]

    def test_blank_and_duplicate_names_are_renamed(self) -> None:
        declared = [
            BaseFileField(name="", position=0, length=1),
            BaseFileField(name="dup", position=1, length=1),
            BaseFileField(name="dup", position=2, length=1),
        ]
        names = [f.name for f in synthesize_fixed_fields(declared, ["abc"])]
        assert len(set(names)) == 3
        assert names[1] == "dup"

    def test_declared_attributes_survive(self) -> None:
        declared = [
            BaseFileField(
                name="amount", position=0, length=5, type=FieldType.NUMBER, format="#.##", decimal_symbol=","
            )
        ]
        (field,) = synthesize_fixed_fields(declared, ["12,50"])
        assert (field.type, field.format, field.decimal) == ("Number", "#.##", ",")


class TestSynthesizeCsvFields:
    reader = TextLineReader()

    def test_header_names(self) -> None:
        content = ContentConfig(separator=",", enclosure='"')
        fields = synthesize_csv_fields('id,"last, first",amount', content, self.reader)
        assert [f.name for f in fields] == ["id", "last__first", "amount"]
        assert all(f.position == -1 and f.length == -1 for f in fields)
        assert all(f.trim_type == TrimType.BOTH.value for f in fields)

    def test_header_names_are_sanitised(self) -> None:
        fields = synthesize_csv_fields("My- Field;x y;x_y", ContentConfig(), self.reader)
        assert [f.name for f in fields] == ["My__Field", "x_y", "x_y_1"]

    def test_tab_separator(self) -> None:
        content = ContentConfig(separator="\\t")
        fields = synthesize_csv_fields("a\tb", content, self.reader)
        assert [f.name for f in fields] == ["a", "b"]

    def test_without_header_uses_generated_names(self) -> None:
        content = ContentConfig(separator=";", header=False)
        fields = synthesize_csv_fields("1;2", content, self.reader)
        assert [f.name for f in fields] == ["Field_000", "Field_001"]

    def test_no_line(self) -> None:
        assert synthesize_csv_fields(None, ContentConfig(), self.reader) == []


class TestMinimalWidth:
    @staticmethod
    def _field(type_: FieldType, **kwargs: object) -> BaseFileField:
        values: dict[str, object] = {
            "name": "f",
            "position": 0,
            "length": 10,
            "precision": 2,
            "format": "#,##0.00",
            "decimal_symbol": ",",
            "group_symbol": ".",
        }
        values.update(kwargs)
        return BaseFileField(type=type_, **values)

    def test_string(self) -> None:
        field = minimal_width(self._field(FieldType.STRING))
        assert (field.format, field.trim_type, field.length) == ("", TrimType.BOTH, 10)

    def test_string_with_rows_shrinks_to_content(self) -> None:
        field = minimal_width(self._field(FieldType.STRING, position=2, length=6), ["01abc   xyz", "01ab"])
        assert field.length == 3

    def test_integer(self) -> None:
        field = minimal_width(self._field(FieldType.INTEGER))
        assert (field.format, field.group_symbol, field.decimal_symbol) == ("0", "", "")
        assert (field.length, field.precision) == (-1, -1)

    def test_number(self) -> None:
        field = minimal_width(self._field(FieldType.NUMBER))
        assert (field.format, field.decimal_symbol, field.group_symbol) == ("0.#####", ".", "")

    def test_date_keeps_format(self) -> None:
        field = minimal_width(self._field(FieldType.DATE, format="dd-MM-yyyy"))
        assert (field.length, field.format) == (-1, "dd-MM-yyyy")

    def test_date_without_format_gets_default(self) -> None:
        assert minimal_width(self._field(FieldType.DATE, format="")).format == DEFAULT_DATE_FORMAT

    def test_boolean_is_unchanged(self) -> None:
        field = self._field(FieldType.BOOLEAN)
        assert minimal_width(field) == field

    @pytest.mark.parametrize("type_", list(FieldType))
    def test_idempotent(self, type_: FieldType) -> None:
        rows = ["abcdefghijklmnop  "]
        once = set_minimal_width([self._field(type_)], rows)
        assert set_minimal_width(once, rows) == once

    def test_does_not_mutate_input(self) -> None:
        field = self._field(FieldType.INTEGER)
        minimal_width(field)
        assert field.format == "#,##0.00"
