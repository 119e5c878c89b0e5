"""Compression providers keyed by the names the step dialog offers.

Implements the ``CompressionRegistry`` protocol. ``None``, an empty name and
``"None"`` all resolve to the identity provider.
"""

from __future__ import annotations

import bz2
import gzip
import io
import logging
import zipfile
from dataclasses import dataclass, field
from typing import BinaryIO, cast

from text_file_input.core.ports.compression import CompressionProvider

logger = logging.getLogger(__name__)

NONE = "None"


class IdentityProvider:
    name = NONE

    def wrap(self, stream: BinaryIO) -> BinaryIO:
        return stream


class GzipProvider:
    name = "GZip"

    def wrap(self, stream: BinaryIO) -> BinaryIO:
        return cast(BinaryIO, gzip.GzipFile(fileobj=stream, mode="rb"))


class Bzip2Provider:
    name = "BZip2"

    def wrap(self, stream: BinaryIO) -> BinaryIO:
        return cast(BinaryIO, bz2.BZ2File(stream, mode="rb"))


class ZipProvider:
    """Read the first regular entry of a zip archive."""

    name = "Zip"

    def wrap(self, stream: BinaryIO) -> BinaryIO:
        if not stream.seekable():
            stream = io.BytesIO(stream.read())
        try:
            archive = zipfile.ZipFile(stream)
        except zipfile.BadZipFile as exc:
            raise OSError(f"Not a zip archive: {exc}") from exc
        entries = [info for info in archive.infolist() if not info.is_dir()]
        if not entries:
            archive.close()
            raise OSError("Zip archive contains no entries")
        logger.debug("Reading zip entry %s", entries[0].filename)
        return cast(BinaryIO, _ZipEntryStream(archive, archive.open(entries[0])))


class _ZipEntryStream(io.BufferedReader):
    """Entry stream that also closes its archive."""

    def __init__(self, archive: zipfile.ZipFile, raw: BinaryIO) -> None:
        super().__init__(cast(io.RawIOBase, raw))
        self._archive = archive

    def close(self) -> None:
        try:
            super().close()
        finally:
            self._archive.close()


@dataclass
class DefaultCompressionRegistry:
    providers: dict[str, CompressionProvider] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.providers:
            for provider in (IdentityProvider(), GzipProvider(), Bzip2Provider(), ZipProvider()):
                self.register(provider)

    def register(self, provider: CompressionProvider) -> None:
        self.providers[provider.name.lower()] = provider

    def lookup(self, name: str | None) -> CompressionProvider | None:
        key = (name or NONE).strip() or NONE
        return self.providers.get(key.lower())

    def names(self) -> list[str]:
        return [p.name for p in self.providers.values()]
