from __future__ import annotations

import logging
import os

from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from api.routes import analysis as analysis_routes

LOG_LEVEL = os.getenv("REPCOACH_LOG_LEVEL", "INFO")


def create_app() -> FastAPI:
    logging.getLogger("repcoach").setLevel(LOG_LEVEL.upper())
    app = FastAPI(
        title="Exercise Form API",
        description="REST API wrapping repcoach form validation and rep detection.",
        version="0.1.0",
    )
    app.include_router(analysis_routes.router)

    @app.get("/", include_in_schema=False)
    async def redirect_to_docs() -> RedirectResponse:
        return RedirectResponse(url="/docs")

    return app


app = create_app()
