"""
Main entrypoint for the Money Transfer API.

``create_app`` configures logging, builds the store selected by the
settings (flat JSON files or MongoDB), installs the error handlers and
mounts the v1 routes.  A module-level ``app`` is created on import so
the server can be started with::

    uvicorn money_transfer_api.app.main:app
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .api.v1.router import router as v1_router
from .core.config import Settings, settings as default_settings
from .core.errors import ApiError
from .core.logging_config import setup_logging
from .core.middleware import BodySizeLimitMiddleware
from .core.storage import Store, build_store
from .services.business_notifier import BusinessNotifier

logger = logging.getLogger(__name__)


def create_app(
    app_settings: Optional[Settings] = None,
    store: Optional[Store] = None,
    notifier: Optional[BusinessNotifier] = None,
) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    app_settings : Optional[Settings]
        Settings to use instead of the environment-derived defaults.
    store : Optional[Store]
        Pre-built store.  When omitted one is built from the settings.
    notifier : Optional[BusinessNotifier]
        Business-partner notifier.  When omitted one is built from the
        settings.

    Returns
    -------
    FastAPI
        A configured application instance.
    """
    cfg = app_settings or default_settings
    setup_logging(cfg.log_level, cfg.log_file)

    app = FastAPI(title=cfg.project_name, version=cfg.api_version)
    app.state.settings = cfg
    app.state.store = store or build_store(cfg)
    app.state.notifier = notifier or BusinessNotifier(cfg.business_service_url, cfg.business_service_timeout)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_middleware(BodySizeLimitMiddleware, max_body_bytes=cfg.max_body_bytes)

    @app.exception_handler(ApiError)
    async def handle_api_error(request: Request, exc: ApiError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.debug("Rejected %s %s: %s", request.method, request.url.path, exc.errors())
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": "Invalid request body"})

    app.include_router(v1_router, prefix=cfg.api_prefix)

    @app.on_event("shutdown")
    async def shutdown_event() -> None:
        app.state.store.close()

    logger.info("%s ready with %s storage", cfg.project_name, cfg.storage_backend)
    return app


app = create_app()
