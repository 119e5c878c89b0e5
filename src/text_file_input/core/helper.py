from __future__ import annotations

import logging
import os
import re
from collections.abc import Iterable, Mapping

from text_file_input.config import get_preview_lines
from text_file_input.core.envelope import (
    Action,
    ActionResponse,
    ContentPayload,
    FieldsPayload,
    FilesPayload,
    GetFields,
    MessagePayload,
    SetMinimalWidth,
    ShowContent,
    ShowFiles,
    UpdatedDataPayload,
    ValidateShowContent,
    decode_action,
    is_blank,
)
from text_file_input.core.errors import Err, ErrorKind, HelperError
from text_file_input.core.fields import (
    massage_field_name,
    set_minimal_width,
    synthesize_csv_fields,
    synthesize_fixed_fields,
)
from text_file_input.core.files import resolve_file_list
from text_file_input.core.ports.compression import CompressionRegistry
from text_file_input.core.ports.file_source import FileSource
from text_file_input.core.ports.line_reader import LineReader
from text_file_input.core.sample import CancelSignal, SampleReader
from text_file_input.models import FileType, StepConfig, SynthesizedField

logger = logging.getLogger(__name__)

NO_FILES_FOUND = "No files found"
NO_FILES_TO_DISPLAY = "No files to display"


def filter_paths(paths: Iterable[str], pattern: str | None, is_regex: bool) -> list[str]:
    """Keep paths fully matching ``pattern`` (regex) or containing it (substring)."""
    if not pattern:
        return list(paths)
    if is_regex:
        try:
            compiled = re.compile(pattern)
        except re.error as exc:
            raise HelperError(ErrorKind.PARAM, f"Invalid filter pattern {pattern!r}: {exc}") from None
        return [p for p in paths if compiled.fullmatch(p)]
    return [p for p in paths if pattern in p]


class TextFileInputHelper:
    """Answer the text file step dialog's actions for one step configuration.

    Stateless between calls: every action resolves files, opens and releases
    its own streams, and returns a fresh ``ActionResponse``.
    """

    def __init__(
        self,
        file_source: FileSource,
        compression_registry: CompressionRegistry,
        line_reader: LineReader,
    ) -> None:
        self.file_source = file_source
        self.compression_registry = compression_registry
        self.line_reader = line_reader
        self.sample_reader = SampleReader(file_source, compression_registry, line_reader)

    def handle_step_action(
        self,
        action: str,
        step: StepConfig,
        params: Mapping[str, str],
        environment: Mapping[str, str] | None = None,
        cancel: CancelSignal | None = None,
    ) -> ActionResponse:
        """Run ``action`` and wrap the outcome. Never raises."""
        if is_blank(params.get("stepName")):
            return ActionResponse.success()
        env: Mapping[str, str] = os.environ if environment is None else environment
        try:
            decoded = decode_action(action, params)
            if isinstance(decoded, Err):
                return ActionResponse.failure(decoded.error)
            logger.info("Handling %s for step %s", action, params.get("stepName"))
            return self._dispatch(decoded.value, step, env, cancel)
        except HelperError as exc:
            return ActionResponse.failure(exc)
        except Exception as exc:
            logger.exception("Action %s failed", action)
            return ActionResponse.failure(HelperError(ErrorKind.INTERNAL, str(exc) or type(exc).__name__))

    def _dispatch(
        self,
        action: Action,
        step: StepConfig,
        environment: Mapping[str, str],
        cancel: CancelSignal | None,
    ) -> ActionResponse:
        if isinstance(action, ShowFiles):
            return self.show_files_action(action, step, environment)
        if isinstance(action, ValidateShowContent):
            return self.validate_show_content_action(action, step, environment)
        if isinstance(action, ShowContent):
            return self.show_content_action(action, step, environment, cancel)
        if isinstance(action, GetFields):
            return self.get_fields_action(action, step, environment, cancel)
        return self.set_minimal_width_action(action, step)

    # -----------------------------------------------------------------------
    # Handlers
    # -----------------------------------------------------------------------

    def show_files_action(
        self, action: ShowFiles, step: StepConfig, environment: Mapping[str, str]
    ) -> ActionResponse:
        resolved = resolve_file_list(step, self.file_source, environment)
        if isinstance(resolved, Err):
            return ActionResponse.failure(resolved.error)
        paths = filter_paths((f.uri for f in resolved.value), action.filter, action.is_regex)
        if not paths:
            return ActionResponse.success(MessagePayload(message=NO_FILES_FOUND))
        return ActionResponse.success(FilesPayload(files=paths))

    def validate_show_content_action(
        self, action: ValidateShowContent, step: StepConfig, environment: Mapping[str, str]
    ) -> ActionResponse:
        resolved = resolve_file_list(step, self.file_source, environment)
        if isinstance(resolved, Err):
            return ActionResponse.failure(resolved.error)
        if not resolved.value:
            return ActionResponse.success(MessagePayload(message=NO_FILES_TO_DISPLAY))
        return ActionResponse.success()

    def show_content_action(
        self,
        action: ShowContent,
        step: StepConfig,
        environment: Mapping[str, str],
        cancel: CancelSignal | None = None,
    ) -> ActionResponse:
        sample = self.sample_reader.read_first_file(
            step, action.nr_lines, action.skip_headers, environment=environment, cancel=cancel
        )
        if isinstance(sample, Err):
            return ActionResponse.failure(sample.error)
        return ActionResponse.success(ContentPayload(first_file_content=sample.value.lines))

    def get_fields_action(
        self,
        action: GetFields,
        step: StepConfig,
        environment: Mapping[str, str],
        cancel: CancelSignal | None = None,
    ) -> ActionResponse:
        fixed = step.content.file_type is FileType.FIXED
        sample = self.sample_reader.read_first_file(
            step, get_preview_lines(), skip_headers=fixed, environment=environment, cancel=cancel
        )
        if isinstance(sample, Err):
            return ActionResponse.failure(sample.error)
        rows = sample.value.lines
        fields: list[SynthesizedField]
        if fixed:
            fields = synthesize_fixed_fields(step.input_fields, rows)
        else:
            fields = synthesize_csv_fields(rows[0] if rows else None, step.content, self.line_reader)
        return ActionResponse.success(FieldsPayload(fields=fields))

    def set_minimal_width_action(self, action: SetMinimalWidth, step: StepConfig) -> ActionResponse:
        # Only the declared fields are rewritten; no file is sampled.
        updated = set_minimal_width(step.input_fields)
        payload = UpdatedDataPayload(updated_data=[SynthesizedField.from_field(f) for f in updated])
        return ActionResponse.success(payload)

    def massage_field_name(self, name: str, used: Iterable[str] = ()) -> str:
        return massage_field_name(name, used)
