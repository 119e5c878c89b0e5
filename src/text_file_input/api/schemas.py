from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from text_file_input.models import StepConfig


class StepActionRequest(BaseModel):
    """POST /actions/{action} body: the step configuration and optional variables."""

    model_config = ConfigDict(populate_by_name=True)

    step: StepConfig
    environment: dict[str, str] | None = None


class HealthResponse(BaseModel):
    status: str = "ok"


class ReadinessResponse(BaseModel):
    status: str = "ok"
    compressions: list[str] = Field(default_factory=list)
