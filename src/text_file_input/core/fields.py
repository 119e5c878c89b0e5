"""Column inference for the text file step.

Fixed-width layouts reconcile the declared fields with sampled rows and fill
positional gaps; delimited layouts name columns from the header line.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence

from text_file_input.core.ports.line_reader import LineReader
from text_file_input.models import BaseFileField, ContentConfig, FieldType, SynthesizedField, TrimType

FIELD_NAME_PREFIX = "Field_"
DEFAULT_DATE_FORMAT = "yyyy/MM/dd HH:mm:ss.SSS"
DEFAULT_CURRENCY = "$"
DEFAULT_DECIMAL = "."
DEFAULT_GROUP = ","

_INVALID_NAME_CHARS = re.compile(r"[^A-Za-z0-9]")


def next_field_name(used: Iterable[str]) -> str:
    """Return ``Field_<k>`` for the smallest ``k`` whose name is not in ``used``."""
    taken = set(used)
    k = 0
    while f"{FIELD_NAME_PREFIX}{k:03d}" in taken:
        k += 1
    return f"{FIELD_NAME_PREFIX}{k:03d}"


def massage_field_name(name: str, used: Iterable[str] = ()) -> str:
    """Replace every character outside ``[A-Za-z0-9]`` with ``_``."""
    massaged = _INVALID_NAME_CHARS.sub("_", name)
    if not massaged:
        return next_field_name(used)
    return massaged


def max_line_width(rows: Sequence[str]) -> int:
    return max((len(row) for row in rows), default=0)


def _gap_field(name: str, start: int, length: int) -> SynthesizedField:
    return SynthesizedField(
        name=name,
        position=start,
        length=length,
        type=FieldType.STRING.value,
        trim_type=TrimType.NONE.value,
    )


def synthesize_fixed_fields(declared: Sequence[BaseFileField], rows: Sequence[str]) -> list[SynthesizedField]:
    """Build the ordered field list for a fixed-width layout.

    Declared fields keep their relative order; inferred String fields are
    inserted for ranges no earlier field covers and after the furthest end when the
    sample is wider. With nothing declared a single catch-all field spans the
    widest row.
    """
    width = max_line_width(rows)
    if not declared:
        return [_gap_field(next_field_name(()), 0, width)]

    ordered = sorted(declared, key=lambda f: f.position)
    reserved = {f.name for f in ordered if f.name.strip()}
    used: set[str] = set()
    result: list[SynthesizedField] = []
    covered: int | None = None
    for field in ordered:
        if covered is not None and field.position > covered:
            name = next_field_name(reserved | used)
            used.add(name)
            result.append(_gap_field(name, covered, field.position - covered))
        synthesized = SynthesizedField.from_field(field)
        if not synthesized.name.strip() or synthesized.name in used:
            synthesized = synthesized.model_copy(update={"name": next_field_name(reserved | used)})
        used.add(synthesized.name)
        result.append(synthesized)
        covered = field.end if covered is None else max(covered, field.end)

    if covered is not None and width > covered:
        name = next_field_name(reserved | used)
        result.append(_gap_field(name, covered, width - covered))
    return result


def synthesize_csv_fields(
    header_line: str | None, content: ContentConfig, line_reader: LineReader
) -> list[SynthesizedField]:
    """Name the columns of a delimited file from its first logical line."""
    if header_line is None:
        return []
    cells = line_reader.split_line(
        header_line,
        delimiter=content.separator,
        enclosure=content.enclosure,
        escape=content.escape_character,
    )
    used: set[str] = set()
    fields: list[SynthesizedField] = []
    for index, cell in enumerate(cells):
        header_name = cell.strip() if content.header else ""
        if header_name:
            name = massage_field_name(header_name)
        else:
            name = f"{FIELD_NAME_PREFIX}{index:03d}"
        if name in used:
            suffix = 1
            while f"{name}_{suffix}" in used:
                suffix += 1
            name = f"{name}_{suffix}"
        used.add(name)
        fields.append(
            SynthesizedField(
                name=name,
                position=-1,
                length=-1,
                type=FieldType.STRING.value,
                currency=DEFAULT_CURRENCY,
                decimal=DEFAULT_DECIMAL,
                group=DEFAULT_GROUP,
                trim_type=TrimType.BOTH.value,
            )
        )
    return fields


def _observed_width(field: BaseFileField, rows: Sequence[str]) -> int:
    if field.position < 0:
        return max((len(row.rstrip()) for row in rows), default=0)
    end = field.end if field.length >= 0 else None
    return max((len(row[field.position : end].rstrip()) for row in rows), default=0)


def minimal_width(field: BaseFileField, rows: Sequence[str] | None = None) -> BaseFileField:
    """Return a copy of ``field`` rewritten to its narrowest presentation."""
    if field.type is FieldType.STRING:
        update: dict[str, object] = {"format": "", "trim_type": TrimType.BOTH}
        if rows:
            update["length"] = _observed_width(field, rows)
        return field.model_copy(update=update)
    if field.type is FieldType.INTEGER:
        return field.model_copy(
            update={"format": "0", "group_symbol": "", "decimal_symbol": "", "length": -1, "precision": -1}
        )
    if field.type is FieldType.NUMBER:
        return field.model_copy(update={"format": "0.#####", "decimal_symbol": ".", "group_symbol": ""})
    if field.type is FieldType.DATE:
        return field.model_copy(update={"length": -1, "format": field.format or DEFAULT_DATE_FORMAT})
    return field.model_copy()


def set_minimal_width(fields: Sequence[BaseFileField], rows: Sequence[str] | None = None) -> list[BaseFileField]:
    return [minimal_width(field, rows) for field in fields]
