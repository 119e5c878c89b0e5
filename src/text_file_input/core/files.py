"""Expand a step's file selectors into the ordered list of files it would read."""

from __future__ import annotations

import logging
import posixpath
import re
from collections.abc import Mapping

from text_file_input.core.errors import Err, ErrorKind, Ok, Result
from text_file_input.core.ports.file_source import FileSource, FileSourceError
from text_file_input.models import FileSelector, ResolvedFile, StepConfig

logger = logging.getLogger(__name__)

_VARIABLE_PATTERN = re.compile(r"\$\{([^}]+)\}|%%([^%]+)%%")


def substitute_variables(text: str, environment: Mapping[str, str]) -> str:
    """Replace ``${NAME}`` and ``%%NAME%%`` references; unknown names stay verbatim."""

    def _replace(match: re.Match[str]) -> str:
        name = match.group(1) or match.group(2)
        return environment.get(name, match.group(0))

    return _VARIABLE_PATTERN.sub(_replace, text)


def _compile(mask: str, label: str) -> re.Pattern[str] | None:
    if not mask:
        return None
    try:
        return re.compile(mask)
    except re.error as exc:
        raise ValueError(f"Invalid {label} {mask!r}: {exc}") from None


def _base_name(uri: str) -> str:
    return posixpath.basename(uri.replace("\\", "/").rstrip("/"))


def _expand_selector(
    selector: FileSelector, file_source: FileSource, environment: Mapping[str, str]
) -> list[ResolvedFile]:
    name = substitute_variables(selector.name, environment).strip()
    if not name:
        return []
    mask = _compile(substitute_variables(selector.mask, environment), "file mask")
    exclude = _compile(substitute_variables(selector.exclude_mask, environment), "exclude mask")

    if mask is None:
        if file_source.exists(name) and not file_source.is_directory(name):
            return [ResolvedFile(uri=name, compression=selector.compression)]
        if selector.required:
            logger.warning("Required file %s does not exist", name)
        return []

    if not file_source.is_directory(name):
        if selector.required:
            logger.warning("Required folder %s does not exist", name)
        return []

    resolved: list[ResolvedFile] = []
    for uri in file_source.list_directory(name, recursive=selector.include_subfolders):
        base = _base_name(uri)
        if not mask.fullmatch(base):
            continue
        if exclude is not None and exclude.fullmatch(base):
            continue
        resolved.append(ResolvedFile(uri=uri, compression=selector.compression))
    return resolved


def resolve_file_list(
    step: StepConfig, file_source: FileSource, environment: Mapping[str, str]
) -> Result[list[ResolvedFile]]:
    """Resolve every selector in order; duplicates across selectors are dropped."""
    files: list[ResolvedFile] = []
    seen: set[str] = set()
    try:
        for selector in step.files:
            for resolved in _expand_selector(selector, file_source, environment):
                if resolved.uri in seen:
                    continue
                seen.add(resolved.uri)
                files.append(resolved)
    except ValueError as exc:
        return Err.of(ErrorKind.PARAM, str(exc))
    except FileSourceError as exc:
        return Err.of(ErrorKind.IO, str(exc))
    logger.debug("Resolved %d file(s) for step %s", len(files), step.name or "<unnamed>")
    return Ok(files)
