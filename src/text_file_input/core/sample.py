"""Sample the first logical lines of a step's first input file."""

from __future__ import annotations

import codecs
import contextlib
import contextvars
import io
import logging
import re
import zipfile
import zlib
from collections.abc import Mapping
from dataclasses import dataclass
from typing import BinaryIO, Protocol

from text_file_input.core.errors import Err, ErrorKind, Ok, Result
from text_file_input.core.files import resolve_file_list
from text_file_input.core.ports.compression import CompressionRegistry
from text_file_input.core.ports.file_source import FileSource, FileSourceError
from text_file_input.core.ports.line_reader import LineReader
from text_file_input.models import FileSample, ResolvedFile, StepConfig

logger = logging.getLogger(__name__)

_DECODE_ERROR_HANDLER = "text_file_input.escape"
# Undecodable bytes come back as lone surrogates U+DC00..U+DCFF, which no
# strict decode can produce, so an affected line can be told apart once the
# handler has counted a failure.
_ESCAPED_BYTES = re.compile("[\udc00-\udcff]")

# Failures a decompressing stream raises mid-read besides OSError.
_STREAM_ERRORS = (OSError, EOFError, zlib.error, zipfile.BadZipFile)


@dataclass
class _DecodeErrors:
    count: int = 0


_active_decode_errors: contextvars.ContextVar[_DecodeErrors | None] = contextvars.ContextVar(
    "text_file_input_decode_errors", default=None
)


def _escape_decode_error(exc: UnicodeError) -> tuple[str, int]:
    if not isinstance(exc, UnicodeDecodeError):
        raise exc
    errors = _active_decode_errors.get()
    if errors is not None:
        errors.count += 1
    return "".join(chr(0xDC00 + b) for b in exc.object[exc.start : exc.end]), exc.end


codecs.register_error(_DECODE_ERROR_HANDLER, _escape_decode_error)


class CancelSignal(Protocol):
    def is_set(self) -> bool: ...


def _python_encoding(name: str) -> str:
    """Map a dialog charset name (``UTF-8``, ``ISO-8859-1``, ``windows-1252``) to a codec."""
    return codecs.lookup(name.strip() or "utf-8").name


@dataclass
class SampleReader:
    file_source: FileSource
    compression_registry: CompressionRegistry
    line_reader: LineReader

    def read_first_file(
        self,
        step: StepConfig,
        nr_lines: int,
        skip_headers: bool = False,
        environment: Mapping[str, str] | None = None,
        cancel: CancelSignal | None = None,
    ) -> Result[FileSample]:
        resolved = resolve_file_list(step, self.file_source, environment or {})
        if isinstance(resolved, Err):
            return resolved
        if not resolved.value:
            return Err.of(ErrorKind.NO_FILES, "No files found for step")
        return self.read(step, resolved.value[0], nr_lines, skip_headers, cancel)

    def read(
        self,
        step: StepConfig,
        file: ResolvedFile,
        nr_lines: int,
        skip_headers: bool = False,
        cancel: CancelSignal | None = None,
    ) -> Result[FileSample]:
        """Read up to ``nr_lines`` logical lines from ``file``.

        Open failures are fatal. A decode failure mid-read ends the sample and
        the lines read so far are returned.
        """
        content = step.content
        compression = file.compression or content.file_compression
        provider = self.compression_registry.lookup(compression)
        if provider is None:
            return Err.of(ErrorKind.UNKNOWN_COMPRESSION, f"Unknown compression: {compression!r}")
        try:
            encoding = _python_encoding(content.encoding)
        except LookupError:
            return Err.of(ErrorKind.DECODE, f"Unknown encoding: {content.encoding!r}")

        lines: list[str] = []
        if nr_lines == 0:
            return Ok(FileSample(uri=file.uri, lines=lines))

        to_skip = content.nr_header_lines if skip_headers and content.header else 0

        with contextlib.ExitStack() as stack:
            try:
                raw: BinaryIO = stack.enter_context(self.file_source.open_stream(file.uri))
                wrapped = stack.enter_context(provider.wrap(raw))
            except FileSourceError as exc:
                return Err.of(ErrorKind.IO, str(exc))
            except _STREAM_ERRORS as exc:
                return Err.of(ErrorKind.IO, f"Unable to open {file.uri}: {exc}")
            decode_errors = _DecodeErrors()
            stack.callback(_active_decode_errors.reset, _active_decode_errors.set(decode_errors))
            text = io.TextIOWrapper(wrapped, encoding=encoding, errors=_DECODE_ERROR_HANDLER, newline="")
            stack.callback(text.detach)

            while len(lines) < nr_lines:
                if cancel is not None and cancel.is_set():
                    logger.info("Sampling of %s cancelled after %d line(s)", file.uri, len(lines))
                    return Err.of(ErrorKind.CANCELLED, "Sampling was cancelled")
                try:
                    line = self.line_reader.get_line(
                        text,
                        file_type=content.file_type,
                        file_format=content.file_format,
                        enclosure=content.enclosure,
                        escape=content.escape_character,
                    )
                except UnicodeDecodeError as exc:
                    logger.warning(
                        "Decoding %s as %s failed after %d line(s): %s", file.uri, encoding, len(lines), exc
                    )
                    break
                except _STREAM_ERRORS as exc:
                    return Err.of(ErrorKind.IO, f"Error reading {file.uri}: {exc}")
                if line is None:
                    break
                if decode_errors.count and _ESCAPED_BYTES.search(line):
                    logger.warning("Decoding %s as %s failed after %d line(s)", file.uri, encoding, len(lines))
                    break
                if to_skip > 0:
                    to_skip -= 1
                    continue
                lines.append(line)

        logger.debug("Sampled %d line(s) from %s", len(lines), file.uri)
        return Ok(FileSample(uri=file.uri, lines=lines))
