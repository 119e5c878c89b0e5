import io
from collections.abc import Callable
from typing import BinaryIO

from text_file_input.core.ports.file_source import FileSourceError


class InMemoryFileSource:
    """A ``FileSource`` over a dict of URI -> bytes, with ``/``-separated directories."""

    def __init__(self, files: dict[str, bytes] | None = None) -> None:
        self.files: dict[str, bytes] = dict(files or {})
        self.opened: list[str] = []
        self.closed: list[str] = []

    def add(self, uri: str, content: bytes | str) -> None:
        self.files[uri] = content.encode("utf-8") if isinstance(content, str) else content

    def open_stream(self, uri: str) -> BinaryIO:
        if uri not in self.files:
            raise FileSourceError(uri, f"File not found: {uri}", not_found=True)
        self.opened.append(uri)
        return _TrackedBytesIO(self.files[uri], on_close=lambda: self.closed.append(uri))

    def exists(self, uri: str) -> bool:
        return uri in self.files or self.is_directory(uri)

    def is_directory(self, uri: str) -> bool:
        prefix = uri.rstrip("/") + "/"
        return any(name.startswith(prefix) for name in self.files)

    def list_directory(self, uri: str, recursive: bool = False) -> list[str]:
        if not self.is_directory(uri):
            raise FileSourceError(uri, f"Not a directory: {uri}", not_found=True)
        prefix = uri.rstrip("/") + "/"
        children = []
        for name in self.files:
            if not name.startswith(prefix):
                continue
            if not recursive and "/" in name[len(prefix) :]:
                continue
            children.append(name)
        return sorted(children)


class _TrackedBytesIO(io.BytesIO):
    def __init__(self, data: bytes, on_close: Callable[[], None]) -> None:
        super().__init__(data)
        self._on_close = on_close

    def close(self) -> None:
        if not self.closed:
            self._on_close()
        super().close()
