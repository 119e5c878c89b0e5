from text_file_input.adapters.compression import DefaultCompressionRegistry
from text_file_input.adapters.defaults import create_default_helper
from text_file_input.adapters.line_reader import TextLineReader, normalize_separator
from text_file_input.adapters.local import LocalFileSource, uri_to_path
from text_file_input.adapters.memory import InMemoryFileSource

__all__ = [
    "DefaultCompressionRegistry",
    "InMemoryFileSource",
    "LocalFileSource",
    "TextLineReader",
    "normalize_separator",
    "create_default_helper",
    "uri_to_path",
]
