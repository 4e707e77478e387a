# ================================
# MIDDLEWARE (core/middleware.py)
# ================================

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from societyhub.core.database import SessionLocal
import time
import uuid
import logging

logger = logging.getLogger(__name__)

class DatabaseSessionMiddleware(BaseHTTPMiddleware):
    """Opens one database session per request and tags the request with an ID"""

    async def dispatch(self, request: Request, call_next):
        start_time = time.time()

        request_id = str(uuid.uuid4())
        request.state.request_id = request_id

        db = SessionLocal()
        request.state.db = db

        try:
            response = await call_next(request)

            process_time = time.time() - start_time
            response.headers["X-Process-Time"] = str(process_time)
            response.headers["X-Request-ID"] = request_id

            return response

        except Exception as e:
            db.rollback()
            raise e
        finally:
            db.close()

class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs every request line and its response status"""

    async def dispatch(self, request: Request, call_next):
        await self._log_request(request)

        response = await call_next(request)

        await self._log_response(request, response)

        return response

    async def _log_request(self, request: Request):
        logger.info(
            f"Request: {request.method} {request.url.path}",
            extra={
                "request_id": getattr(request.state, "request_id", None),
                "method": request.method,
                "path": request.url.path,
                "query_params": str(request.query_params),
                "user_agent": request.headers.get("User-Agent"),
                "ip_address": request.client.host if request.client else None
            }
        )

    async def _log_response(self, request: Request, response: Response):
        logger.info(
            f"Response: {response.status_code} {request.method} {request.url.path}",
            extra={
                "request_id": getattr(request.state, "request_id", None),
                "status_code": response.status_code,
                "process_time": response.headers.get("X-Process-Time")
            }
        )

class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Adds standard security headers"""

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["X-XSS-Protection"] = "1; mode=block"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"

        # HSTS for HTTPS only
        if request.url.scheme == "https":
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"

        return response
