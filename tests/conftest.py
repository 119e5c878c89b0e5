"""Shared fixtures and helpers for tests."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any

import pytest

from text_file_input.adapters import DefaultCompressionRegistry, InMemoryFileSource, TextLineReader
from text_file_input.core.helper import TextFileInputHelper
from text_file_input.models import BaseFileField, ContentConfig, FileSelector, FileType, StepConfig

_REPO_ROOT = Path(__file__).parent.parent


# ---------------------------------------------------------------------------
# Auto-marker: tag tests as "unit" or "integration" based on directory
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        test_path = Path(str(item.fspath))
        rel = test_path.relative_to(_REPO_ROOT / "tests")
        parts = rel.parts
        if parts and parts[0] == "integration":
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# Shared unit-test fixtures
# ---------------------------------------------------------------------------

StepFactory = Callable[..., StepConfig]


def make_step(
    *names: str,
    file_type: FileType = FileType.CSV,
    fields: Sequence[BaseFileField] = (),
    **content: Any,
) -> StepConfig:
    """Build a step reading ``names`` as plain file selectors."""
    return StepConfig(
        name="testStep",
        files=[FileSelector(name=n) for n in names],
        content=ContentConfig(file_type=file_type, **content),
        input_fields=list(fields),
    )


@pytest.fixture
def step_factory() -> StepFactory:
    return make_step


@pytest.fixture
def memory_source() -> InMemoryFileSource:
    return InMemoryFileSource()


@pytest.fixture
def helper(memory_source: InMemoryFileSource) -> TextFileInputHelper:
    return TextFileInputHelper(memory_source, DefaultCompressionRegistry(), TextLineReader())


@pytest.fixture
def params() -> dict[str, str]:
    return {"stepName": "testStep"}
