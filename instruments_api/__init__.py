"""Application factory and top-level wiring for the Instruments API.

This module is the glue that brings together configuration, database setup,
the instrument routes, and error handling. The goal is to give a new developer
a bird's-eye view of *what* pieces exist, *when* they are initialised, and
*how* they interact to serve a request.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI

from .core.config import AppSettings, get_settings
from .core.errors import register_exception_handlers
from .crud.instruments import InstrumentStore
from .db.session import build_engine, build_session_factory
from .middlewares import RequestIdMiddleware
from .routers.instruments import build_router
from .services.instruments import InstrumentService

logger = logging.getLogger(__name__)


def create_app(settings: AppSettings | None = None, store: InstrumentStore | None = None) -> FastAPI:
    """Build the FastAPI application.

    ``store`` lets callers (tests mostly) hand in a store bound to a database
    of their choosing; otherwise one is built from ``settings.DB_URL``.
    """

    settings = settings or get_settings()
    if store is None:
        store = InstrumentStore(build_session_factory(build_engine(settings.DB_URL)))

    app = FastAPI(title=settings.APP_NAME)
    # The service is the only shared object; handlers reach it via app.state.
    app.state.instrument_service = InstrumentService(store)
    app.state.settings = settings

    app.add_middleware(RequestIdMiddleware)
    register_exception_handlers(app)
    app.include_router(build_router())

    logger.info("app.created", extra={"extra_data": {"env": settings.APP_ENV}})
    return app


__all__ = ["create_app"]
