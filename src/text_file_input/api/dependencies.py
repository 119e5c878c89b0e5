from __future__ import annotations

from collections.abc import Iterator

from text_file_input.adapters.defaults import create_default_helper
from text_file_input.core.helper import TextFileInputHelper

_helper: TextFileInputHelper | None = None


def get_helper() -> Iterator[TextFileInputHelper]:
    """Yield a ``TextFileInputHelper``, creating it lazily on first call."""
    global _helper  # noqa: PLW0603
    if _helper is None:
        _helper = create_default_helper()
    yield _helper


def reset_helper() -> None:
    global _helper  # noqa: PLW0603
    _helper = None
