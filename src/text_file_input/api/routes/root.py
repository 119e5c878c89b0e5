from __future__ import annotations

from typing import Any

from fastapi import APIRouter

from text_file_input.core.envelope import ACTION_NAMES

router = APIRouter()


@router.get("/")
def root() -> dict[str, Any]:
    """Root discovery endpoint: API directory for programmatic and human clients."""
    return {
        "meta": {
            "title": "Text File Input Helper API",
            "description": "Preview files, sample content, and infer fields for the text file input step.",
            "version": "0.1.0",
        },
        "links": {
            "self": "/",
            **{name: f"/actions/{name}" for name in ACTION_NAMES},
            "openapi": "/openapi.json",
            "docs": "/docs",
        },
    }
