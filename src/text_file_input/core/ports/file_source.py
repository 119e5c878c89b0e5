from typing import BinaryIO, Protocol


class FileSourceError(OSError):
    """Raised by a ``FileSource`` when a URI cannot be opened or listed."""

    def __init__(self, uri: str, message: str, not_found: bool = False) -> None:
        super().__init__(message)
        self.uri = uri
        self.not_found = not_found


class FileSource(Protocol):
    def open_stream(self, uri: str) -> BinaryIO: ...

    def exists(self, uri: str) -> bool: ...

    def is_directory(self, uri: str) -> bool: ...

    def list_directory(self, uri: str, recursive: bool = False) -> list[str]: ...
