# =============================================================================
# File: auth.py
# Date: 2026-10-18
# Copyright (c) 2024 Goutam Malakar. All rights reserved.
# =============================================================================

import hmac
from typing import Iterable, Optional

from fastapi import Request, status
from fastapi.security import HTTPBearer
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse, Response
from starlette.types import ASGIApp

from app.logger import get_logger
from app.utils.log_sanitizer import sanitize_for_log
from app.utils.performance_tracker import perf_tracker

logger = get_logger("auth")

# Standard HTTPBearer so the OpenAPI docs expose the Authorize button.
security = HTTPBearer(auto_error=False)

PUBLIC_ENDPOINTS = frozenset(
    [
        "/",
        "/health",
        "/docs",
        "/redoc",
        "/openapi.json",
        "/favicon.ico",
    ]
)
PUBLIC_PREFIXES = ("/monitor/", "/docs/")
# Listing models is public; registering one is not.
PUBLIC_GET_ENDPOINTS = frozenset(["/models"])


class AuthMiddleware(BaseHTTPMiddleware):
    """Optional API key authentication.

    Disabled unless an API key is configured. The key is accepted from an
    ``Authorization: Bearer`` header or a ``token`` query parameter.
    """

    def __init__(
        self,
        app: ASGIApp,
        api_key: Optional[str] = None,
        public_endpoints: Iterable[str] = PUBLIC_ENDPOINTS,
    ):
        super().__init__(app)
        self.api_key = api_key or None
        self.enabled = self.api_key is not None
        self.public_endpoints = frozenset(public_endpoints)

        if self.enabled:
            logger.info("API authentication enabled")
        else:
            logger.info("API authentication disabled")

    def is_public(self, request: Request) -> bool:
        path = request.url.path
        if path in self.public_endpoints or path.startswith(PUBLIC_PREFIXES):
            return True
        return request.method in ("GET", "HEAD") and path in PUBLIC_GET_ENDPOINTS

    @staticmethod
    def extract_token(request: Request) -> Optional[str]:
        auth_header = request.headers.get("Authorization")
        if auth_header and auth_header.startswith("Bearer ") and len(auth_header) > 7:
            return auth_header[7:].strip()
        return request.query_params.get("token")

    def is_valid(self, token: Optional[str]) -> bool:
        if not token:
            return False
        with perf_tracker.track("auth_key_check"):
            return hmac.compare_digest(token.encode("utf-8"), self.api_key.encode("utf-8"))

    async def dispatch(self, request: Request, call_next) -> Response:
        """Process request with API key authentication."""
        if not self.enabled or request.method == "OPTIONS" or self.is_public(request):
            return await call_next(request)

        if not self.is_valid(self.extract_token(request)):
            logger.warning("Rejected unauthenticated request to %s", sanitize_for_log(request.url.path))
            return JSONResponse(
                status_code=status.HTTP_401_UNAUTHORIZED,
                content={"error": "Invalid or missing API key"},
            )

        return await call_next(request)
