from fastapi import APIRouter, Depends, Response, status

from text_file_input.api.dependencies import get_helper
from text_file_input.api.schemas import HealthResponse, ReadinessResponse
from text_file_input.core.helper import TextFileInputHelper

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    return HealthResponse()


@router.get("/healthz/live", response_model=HealthResponse)
def liveness() -> HealthResponse:
    """Liveness probe: is the process alive?"""
    return HealthResponse()


@router.get("/healthz/ready", response_model=ReadinessResponse)
def readiness(
    response: Response,
    helper: TextFileInputHelper = Depends(get_helper),
) -> ReadinessResponse:
    """Readiness probe: checks that the identity compression is registered."""
    if helper.compression_registry.lookup(None) is not None:
        return ReadinessResponse(status="ok", compressions=helper.compression_registry.names())
    response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return ReadinessResponse(status="degraded")
