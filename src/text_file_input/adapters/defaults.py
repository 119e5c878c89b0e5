from pathlib import Path

from text_file_input.adapters.compression import DefaultCompressionRegistry
from text_file_input.adapters.line_reader import TextLineReader
from text_file_input.adapters.local import LocalFileSource
from text_file_input.core.helper import TextFileInputHelper


def create_default_helper(base_dir: str | Path | None = None) -> TextFileInputHelper:
    """Wire the helper to the local filesystem and the built-in codecs."""
    return TextFileInputHelper(
        LocalFileSource(base_dir),
        DefaultCompressionRegistry(),
        TextLineReader(),
    )
