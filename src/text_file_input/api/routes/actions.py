from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Request

from text_file_input.api.dependencies import get_helper
from text_file_input.api.schemas import StepActionRequest
from text_file_input.core.helper import TextFileInputHelper

router = APIRouter(prefix="/actions", tags=["actions"])


@router.post("/{action}")
def step_action(
    action: str,
    body: StepActionRequest,
    request: Request,
    helper: TextFileInputHelper = Depends(get_helper),
) -> dict[str, Any]:
    """Run a dialog action. The query string is the action's parameter bag.

    Always answers 200; failures are reported through ``actionStatus``.
    """
    params = dict(request.query_params)
    response = helper.handle_step_action(action, body.step, params, environment=body.environment)
    return response.to_json()
