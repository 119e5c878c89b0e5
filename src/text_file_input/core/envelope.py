"""Request decoding and response envelopes for step actions.

The dialog talks to the helper with an action name and a flat string-to-string
parameter bag. ``decode_action`` turns that bag into one of the typed action
variants below so that handlers never re-parse strings, and ``ActionResponse``
flattens a per-action payload model into the ``{actionStatus, ...}`` object the
dialog reads.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel

from text_file_input.core.errors import Err, ErrorKind, HelperError, Ok, Result
from text_file_input.models import SynthesizedField

SUCCESS = "SUCCESS"
FAILURE = "FAILURE"
ACTION_STATUS = "actionStatus"

SHOW_FILES = "showFiles"
VALIDATE_SHOW_CONTENT = "validateShowContent"
SHOW_CONTENT = "showContent"
GET_FIELDS = "getFields"
SET_MINIMAL_WIDTH = "setMinimalWidth"

ACTION_NAMES = (SHOW_FILES, VALIDATE_SHOW_CONTENT, SHOW_CONTENT, GET_FIELDS, SET_MINIMAL_WIDTH)


# ---------------------------------------------------------------------------
# Action variants
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ShowFiles:
    step_name: str
    filter: str | None = None
    is_regex: bool = False


@dataclass(frozen=True)
class ValidateShowContent:
    step_name: str


@dataclass(frozen=True)
class ShowContent:
    step_name: str
    nr_lines: int
    skip_headers: bool = False


@dataclass(frozen=True)
class GetFields:
    step_name: str


@dataclass(frozen=True)
class SetMinimalWidth:
    step_name: str


Action = ShowFiles | ValidateShowContent | ShowContent | GetFields | SetMinimalWidth


def is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def parse_bool(value: str | None) -> bool:
    return value is not None and value.strip().lower() == "true"


def parse_nr_lines(value: str | None) -> int:
    if value is None or not value.strip():
        raise HelperError(ErrorKind.PARAM, "Missing required parameter 'nrlines'")
    try:
        nr_lines = int(value.strip())
    except ValueError:
        raise HelperError(ErrorKind.PARAM, f"Parameter 'nrlines' is not an integer: {value!r}") from None
    if nr_lines < 0:
        raise HelperError(ErrorKind.PARAM, f"Parameter 'nrlines' must not be negative: {nr_lines}")
    return nr_lines


def decode_action(name: str, params: Mapping[str, str]) -> Result[Action]:
    """Decode an action name and its parameter bag. Unknown keys are ignored."""
    step_name = (params.get("stepName") or "").strip()
    try:
        if name == SHOW_FILES:
            pattern = params.get("filter")
            return Ok(
                ShowFiles(
                    step_name,
                    filter=pattern if pattern else None,
                    is_regex=parse_bool(params.get("isRegex")),
                )
            )
        if name == VALIDATE_SHOW_CONTENT:
            return Ok(ValidateShowContent(step_name))
        if name == SHOW_CONTENT:
            return Ok(
                ShowContent(
                    step_name,
                    nr_lines=parse_nr_lines(params.get("nrlines")),
                    skip_headers=parse_bool(params.get("skipHeaders")),
                )
            )
        if name == GET_FIELDS:
            return Ok(GetFields(step_name))
        if name == SET_MINIMAL_WIDTH:
            return Ok(SetMinimalWidth(step_name))
    except HelperError as exc:
        return Err(exc)
    return Err.of(ErrorKind.PARAM, f"Unsupported action: {name!r}")


# ---------------------------------------------------------------------------
# Payloads
# ---------------------------------------------------------------------------


class FilesPayload(BaseModel):
    files: list[str]


class MessagePayload(BaseModel):
    message: str


class ContentPayload(BaseModel):
    first_file_content: list[str]

    def to_wire(self) -> dict[str, Any]:
        return {"firstFileContent": list(self.first_file_content)}


class FieldsPayload(BaseModel):
    fields: list[SynthesizedField]


class UpdatedDataPayload(BaseModel):
    updated_data: list[SynthesizedField]

    def to_wire(self) -> dict[str, Any]:
        return {"updatedData": [f.model_dump(by_alias=True) for f in self.updated_data]}


class FailurePayload(BaseModel):
    error: str
    detail: str


Payload = FilesPayload | MessagePayload | ContentPayload | FieldsPayload | UpdatedDataPayload | FailurePayload


class ActionResponse(BaseModel):
    status: str = SUCCESS
    payload: Payload | None = None

    @classmethod
    def success(cls, payload: Payload | None = None) -> ActionResponse:
        return cls(status=SUCCESS, payload=payload)

    @classmethod
    def failure(cls, error: HelperError) -> ActionResponse:
        return cls(status=FAILURE, payload=FailurePayload(error=error.kind.value, detail=error.detail))

    @property
    def ok(self) -> bool:
        return self.status == SUCCESS

    def to_json(self) -> dict[str, Any]:
        """Flatten into the single object the dialog expects."""
        body: dict[str, Any] = {ACTION_STATUS: self.status}
        if self.payload is None:
            return body
        to_wire = getattr(self.payload, "to_wire", None)
        if to_wire is not None:
            body.update(to_wire())
        else:
            body.update(self.payload.model_dump(by_alias=True))
        return body
