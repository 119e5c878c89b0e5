from __future__ import annotations

from fastapi import FastAPI

from text_file_input.api.lifespan import lifespan
from text_file_input.api.routes.actions import router as actions_router
from text_file_input.api.routes.health import router as health_router
from text_file_input.api.routes.root import router as root_router


def create_app() -> FastAPI:
    app = FastAPI(
        title="Text File Input Helper API",
        description="Preview files, sample content, and infer fields for the text file input step.",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.include_router(root_router, include_in_schema=False)
    app.include_router(health_router, include_in_schema=False)
    app.include_router(actions_router)

    return app
