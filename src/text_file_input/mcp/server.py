"""FastMCP server exposing the text file step dialog actions as tools."""

from __future__ import annotations

from typing import Any

from fastmcp import FastMCP

from text_file_input.core.envelope import (
    GET_FIELDS,
    SET_MINIMAL_WIDTH,
    SHOW_CONTENT,
    SHOW_FILES,
    VALIDATE_SHOW_CONTENT,
)
from text_file_input.core.helper import TextFileInputHelper
from text_file_input.models import StepConfig


def _params(step: StepConfig, **extra: str) -> dict[str, str]:
    return {"stepName": step.name or "step", **extra}


def create_mcp_server(helper: TextFileInputHelper) -> FastMCP:
    """Create a FastMCP server wired to the given helper."""

    mcp = FastMCP(
        "text-file-input",
        instructions="Preview files, sample content, and infer fields for a text file input step.",
    )

    @mcp.tool()
    def show_files(step: StepConfig, filter: str | None = None, is_regex: bool = False) -> dict[str, Any]:
        """List the files a step configuration resolves to."""
        extra = {"isRegex": str(is_regex).lower()}
        if filter:
            extra["filter"] = filter
        return helper.handle_step_action(SHOW_FILES, step, _params(step, **extra)).to_json()

    @mcp.tool()
    def validate_show_content(step: StepConfig) -> dict[str, Any]:
        """Check that a step configuration resolves to at least one file."""
        return helper.handle_step_action(VALIDATE_SHOW_CONTENT, step, _params(step)).to_json()

    @mcp.tool()
    def show_content(step: StepConfig, nr_lines: int = 10, skip_headers: bool = False) -> dict[str, Any]:
        """Return the first lines of the step's first file."""
        params = _params(step, nrlines=str(nr_lines), skipHeaders=str(skip_headers).lower())
        return helper.handle_step_action(SHOW_CONTENT, step, params).to_json()

    @mcp.tool()
    def get_fields(step: StepConfig) -> dict[str, Any]:
        """Infer column definitions from the step's first file."""
        return helper.handle_step_action(GET_FIELDS, step, _params(step)).to_json()

    @mcp.tool()
    def set_minimal_width(step: StepConfig) -> dict[str, Any]:
        """Rewrite the declared fields to their narrowest presentation."""
        return helper.handle_step_action(SET_MINIMAL_WIDTH, step, _params(step)).to_json()

    @mcp.tool()
    def massage_field_name(name: str) -> str:
        """Sanitize a column name to letters, digits and underscores."""
        return helper.massage_field_name(name)

    return mcp
