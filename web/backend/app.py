#!/usr/bin/env python3
"""
Mentorship API - FastAPI Application

Mentor directory, matching and coaching session lifecycle over HTTP.

Usage:
    python -m web.backend.app

Then open:
    - http://localhost:8080/docs - API Documentation (Swagger UI)
    - http://localhost:8080/redoc - Alternative API Documentation
"""

import logging
from typing import Optional

from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError

from core.app_context import AppContext
from core.config_loader import load_config
from core.exceptions import ServiceException
from .exceptions import (
    service_exception_handler,
    http_exception_handler,
    request_validation_handler,
    general_exception_handler
)
from .routers import mentors_router, matches_router, sessions_router, notifications_router

logger = logging.getLogger(__name__)


def create_app(context: Optional[AppContext] = None) -> FastAPI:
    """
    Build the FastAPI app.

    Args:
        context: Pre-wired AppContext (tests inject one); built from
            config.yaml and the environment when omitted
    """
    if context is None:
        context = AppContext.build(load_config())

    app = FastAPI(
        title="Mentorship API",
        description="Mentor matching and coaching session lifecycle",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc"
    )
    app.state.context = context

    # Register exception handlers
    app.add_exception_handler(ServiceException, service_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    # Include routers
    app.include_router(mentors_router)
    app.include_router(matches_router)
    app.include_router(sessions_router)
    app.include_router(notifications_router)

    @app.get("/health")
    def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "service": "mentorship-api"}

    return app


def main():
    """Run the web server."""
    import uvicorn

    config = load_config()
    logging.basicConfig(
        level=config.logging.level,
        format=config.logging.format
    )

    logger.info(f"Starting Mentorship API on {config.web.host}:{config.web.port}")
    logger.info(f"API Docs: http://{config.web.host}:{config.web.port}/docs")

    uvicorn.run(
        create_app(AppContext.build(config)),
        host=config.web.host,
        port=config.web.port,
        log_level="info"
    )


if __name__ == "__main__":
    main()
