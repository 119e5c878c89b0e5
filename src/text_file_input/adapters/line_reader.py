"""Logical-line reading and cell splitting for delimited and fixed-width text.

Implements the ``LineReader`` protocol.
"""

from __future__ import annotations

from typing import TextIO

from text_file_input.models import FileFormat, FileType

_SPECIAL_SEPARATORS = {"\\t": "\t", "\\n": "\n", "\\r": "\r"}


def normalize_separator(separator: str) -> str:
    """Translate escaped separators such as ``\\t`` typed into the dialog."""
    return _SPECIAL_SEPARATORS.get(separator, separator)


def _strip_terminator(physical: str, file_format: FileFormat) -> tuple[str, bool]:
    """Return (content, terminated) for one physical chunk read with ``newline=""``."""
    if physical.endswith("\r\n"):
        return physical[:-2], True
    if physical.endswith("\n"):
        if file_format is FileFormat.DOS:
            return physical, False
        return physical[:-1], True
    if physical.endswith("\r"):
        if file_format is FileFormat.MIXED:
            return physical[:-1], True
        return physical, False
    return physical, False


def _enclosure_open(text: str, enclosure: str, escape: str, start_open: bool = False) -> bool:
    if not enclosure:
        return False
    open_ = start_open
    i = 0
    while i < len(text):
        if escape and escape != enclosure and text.startswith(escape, i):
            i += len(escape) + 1
            continue
        if text.startswith(enclosure, i):
            open_ = not open_
            i += len(enclosure)
            continue
        i += 1
    return open_


class TextLineReader:
    """Read one logical record at a time from a decoded text stream.

    The stream must be opened with ``newline=""`` so that terminators reach the
    reader untranslated. For CSV a record continues across physical lines while
    an enclosure is open; for FIXED every physical line is a record.
    """

    def get_line(
        self,
        stream: TextIO,
        *,
        file_type: FileType,
        file_format: FileFormat,
        enclosure: str,
        escape: str,
    ) -> str | None:
        parts: list[str] = []
        in_enclosure = False
        while True:
            physical = stream.readline()
            if physical == "":
                break
            content, terminated = _strip_terminator(physical, file_format)
            if file_type is FileType.CSV:
                in_enclosure = _enclosure_open(content, enclosure, escape, in_enclosure)
            if not terminated:
                # DOS/Unix mode met a foreign terminator; it belongs to the record
                parts.append(content)
                continue
            if in_enclosure:
                parts.append(physical)
                continue
            parts.append(content)
            return "".join(parts)
        if not parts:
            return None
        return "".join(parts)

    def split_line(self, line: str, *, delimiter: str, enclosure: str, escape: str) -> list[str]:
        """Split a logical line into cells, removing enclosures and escapes."""
        delimiter = normalize_separator(delimiter)
        if not delimiter:
            return [line]
        cells: list[str] = []
        current: list[str] = []
        in_enclosure = False
        i = 0
        while i < len(line):
            if escape and escape != enclosure and line.startswith(escape, i) and i + len(escape) < len(line):
                current.append(line[i + len(escape)])
                i += len(escape) + 1
                continue
            if enclosure and line.startswith(enclosure, i):
                if in_enclosure and line.startswith(enclosure, i + len(enclosure)):
                    current.append(enclosure)
                    i += 2 * len(enclosure)
                    continue
                in_enclosure = not in_enclosure
                i += len(enclosure)
                continue
            if not in_enclosure and line.startswith(delimiter, i):
                cells.append("".join(current))
                current = []
                i += len(delimiter)
                continue
            current.append(line[i])
            i += 1
        cells.append("".join(current))
        return cells
