"""
Lokasi API - Unhandled Error Middleware
=========================================

What:  Turns exceptions that no exception handler claimed into the generic
       500 body `{"error": "Terjadi kesalahan pada server", "request_id": ...}`.
How:   Sits innermost in the middleware chain, so the 500 response still flows
       back out through CORS, logging and request-ID middleware and carries
       their headers. FastAPI's own `Exception` handler only runs in the
       outermost ServerErrorMiddleware, which a browser would see as a CORS
       failure.
"""

import logging
from typing import Optional

from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from lokasi.middleware.request_id import request_id_var

logger = logging.getLogger(__name__)

SERVER_ERROR_MESSAGE = "Terjadi kesalahan pada server"


def error_response(status_code: int, message: str, headers: Optional[dict] = None) -> JSONResponse:
    """Build the shared `{"error": ..., "request_id": ...}` body."""
    return JSONResponse(
        status_code=status_code,
        content={"error": message, "request_id": request_id_var.get("")},
        headers=headers,
    )


class UnhandledErrorMiddleware(BaseHTTPMiddleware):
    """Recovery barrier: unexpected faults become a generic 500."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        try:
            return await call_next(request)
        except Exception as e:
            logger.error(
                "[%s] Unexpected error: %s",
                request_id_var.get(""),
                str(e),
                exc_info=True,
            )
            return error_response(500, SERVER_ERROR_MESSAGE)
