"""FastAPI application wiring for Hex Wizards."""

from __future__ import annotations

import logging
from collections.abc import Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from hexwizards import __version__
from hexwizards.api import routes
from hexwizards.api.runtime import ApiState, GameNotFound, build_state
from hexwizards.config import get_settings

logger = logging.getLogger(__name__)


async def _game_not_found(request: Request, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})


def create_app(*, state_factory: Callable[[], ApiState] = build_state) -> FastAPI:
    """Build the API app; ``state_factory`` runs once per lifespan to create the games store."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.api_state = state_factory()
        logger.info("hex wizards api %s ready", __version__)
        try:
            yield
        finally:
            await app.state.api_state.shutdown()
            logger.info("hex wizards api stopped")

    app = FastAPI(title="Hex Wizards API", version=__version__, lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_settings().cors_origins,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )
    app.add_exception_handler(GameNotFound, _game_not_found)
    app.include_router(routes.router)
    return app


app = create_app()
