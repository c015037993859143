"""ASGI entrypoint: builds the FastAPI app around one simulation session."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from worldsim.api import routes
from worldsim.api.runtime import ApiState, build_state
from worldsim.config import Settings, get_settings

logger = logging.getLogger(__name__)

StateFactory = Callable[[], ApiState]


def create_app(
    *,
    settings: Settings | None = None,
    state_factory: StateFactory | None = None,
) -> FastAPI:
    """Return an app whose lifespan owns the session state.

    ``state_factory`` wins over ``settings``; with neither, the cached
    environment settings are used.
    """

    settings = settings or get_settings()
    factory = state_factory or (lambda: build_state(settings))

    @asynccontextmanager
    async def session_lifespan(app: FastAPI) -> AsyncIterator[None]:
        app.state.api_state = state = factory()
        logger.info("session ready at turn %d", state.simulation.turn)
        try:
            yield
        finally:
            await state.shutdown()
            logger.info("session shut down")

    app = FastAPI(title="World Simulation API", version="0.1.0", lifespan=session_lifespan)
    if settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins,
            allow_methods=["GET", "POST"],
            allow_headers=["*"],
        )
    app.include_router(routes.router)
    return app


app = create_app()
