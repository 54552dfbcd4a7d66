# =============================================================================
# File: app_routing.py
# Date: 2026-10-18
# Copyright (c) 2024 Goutam Malakar. All rights reserved.
# =============================================================================

"""Centralized router and middleware setup for the FastAPI app."""

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.app_init import APP_SETTINGS
from app.middleware.auth import AuthMiddleware, security
from app.routers import compat, health, models, monitor, translation

# Documents the bearer scheme on endpoints that need a key when one is set.
SECURITY_DEPS = [Depends(security)]


def setup_routing(app: FastAPI) -> None:
    """Register middleware and API routers on the provided FastAPI app."""

    app.add_middleware(AuthMiddleware, api_key=APP_SETTINGS.security.api_key)

    # CORS is outermost so preflight and 401 responses carry the headers.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=APP_SETTINGS.app.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(
        translation.router, tags=["Translation"], dependencies=SECURITY_DEPS
    )
    app.include_router(
        compat.router, tags=["Compatibility APIs"], dependencies=SECURITY_DEPS
    )
    app.include_router(models.router, tags=["Models"])
    app.include_router(health.router, tags=["Health & Monitoring"])
    app.include_router(monitor.router, tags=["Health & Monitoring"])
