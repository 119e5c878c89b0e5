from typing import Protocol, TextIO

from text_file_input.models import FileFormat, FileType


class LineReader(Protocol):
    def get_line(
        self,
        stream: TextIO,
        *,
        file_type: FileType,
        file_format: FileFormat,
        enclosure: str,
        escape: str,
    ) -> str | None: ...

    def split_line(self, line: str, *, delimiter: str, enclosure: str, escape: str) -> list[str]: ...
