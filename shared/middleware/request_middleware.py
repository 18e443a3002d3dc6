import logging
import time
import uuid

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

logger = logging.getLogger("tour_service.requests")

ADMIN_PREFIX = "/api/admin"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-Id") or str(uuid.uuid4())
        request.state.request_id = request_id

        start = time.perf_counter()
        try:
            response: Response = await call_next(request)
        except Exception:
            duration_ms = (time.perf_counter() - start) * 1000
            logger.error("%s %s 500 in %.2fms [%s]", request.method,
                         request.url.path, duration_ms, request_id)
            raise

        duration_ms = (time.perf_counter() - start) * 1000
        response.headers["X-Request-Id"] = request_id

        if request.url.path.startswith("/api"):
            logger.info("%s %s %s in %.2fms [%s]", request.method, request.url.path,
                        response.status_code, duration_ms, request_id)

        if request.url.path.startswith(ADMIN_PREFIX) and request.method != "GET":
            session_user = getattr(request.state, "session_user", None)
            username = session_user.username if session_user else "anonymous"
            role = session_user.role if session_user else "-"
            client = request.client.host if request.client else "unknown"
            logger.info("[ADMIN AUDIT] %s %s by %s (%s) from %s -> %s",
                        request.method, request.url.path, username, role,
                        client, response.status_code)
        return response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, hsts: bool = False):
        super().__init__(app)
        self.hsts = hsts

    async def dispatch(self, request: Request, call_next):
        response: Response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["X-XSS-Protection"] = "0"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        if self.hsts:
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        return response


class HttpsEnforcementMiddleware(BaseHTTPMiddleware):
    """Rejects plain http requests arriving through the proxy in production."""

    exempt_paths = ("/api/health",)

    async def dispatch(self, request: Request, call_next):
        if request.url.path in self.exempt_paths:
            return await call_next(request)

        proto = request.headers.get("X-Forwarded-Proto", request.url.scheme)
        if proto.split(",")[0].strip() != "https":
            return JSONResponse(
                status_code=400,
                content={"error": "HTTPS Required",
                         "message": "This API must be accessed over HTTPS"})
        return await call_next(request)
