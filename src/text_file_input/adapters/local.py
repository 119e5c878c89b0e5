from __future__ import annotations

import logging
from pathlib import Path
from typing import BinaryIO
from urllib.parse import unquote, urlparse

from text_file_input.core.ports.file_source import FileSourceError

logger = logging.getLogger(__name__)


def uri_to_path(uri: str) -> Path:
    if uri.startswith("file:"):
        return Path(unquote(urlparse(uri).path))
    return Path(uri)


class LocalFileSource:
    """Serve plain paths and ``file://`` URIs from the local filesystem.

    Implements the ``FileSource`` protocol.
    """

    def __init__(self, base_dir: str | Path | None = None) -> None:
        self._base_dir = Path(base_dir) if base_dir is not None else None

    def _resolve(self, uri: str) -> Path:
        path = uri_to_path(uri)
        if self._base_dir is not None and not path.is_absolute():
            path = self._base_dir / path
        return path

    def open_stream(self, uri: str) -> BinaryIO:
        path = self._resolve(uri)
        try:
            return path.open("rb")
        except FileNotFoundError:
            raise FileSourceError(uri, f"File not found: {uri}", not_found=True) from None
        except OSError as exc:
            raise FileSourceError(uri, f"Unable to open {uri}: {exc.strerror or exc}") from exc

    def exists(self, uri: str) -> bool:
        return self._resolve(uri).exists()

    def is_directory(self, uri: str) -> bool:
        return self._resolve(uri).is_dir()

    def list_directory(self, uri: str, recursive: bool = False) -> list[str]:
        root = self._resolve(uri)
        if not root.is_dir():
            raise FileSourceError(uri, f"Not a directory: {uri}", not_found=not root.exists())
        children = root.rglob("*") if recursive else root.iterdir()
        files = sorted(str(p) for p in children if p.is_file())
        logger.debug("Listed %d file(s) under %s", len(files), root)
        return files
