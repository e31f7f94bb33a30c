"""
Product Catalog Backend — Unhandled Error Middleware
======================================================

What:  Turns exceptions that no registered handler claimed into the generic
       500 response.
How:   Sits innermost in the user middleware stack. Starlette runs the
       `Exception` handler from ServerErrorMiddleware, outside every user
       middleware; catching here instead keeps the 500 inside the stack, so
       it still gets an X-Request-ID header and an access-log line.
"""

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from catalog.errors import translate_error


class UnhandledErrorMiddleware(BaseHTTPMiddleware):
    """Answers any escaped exception through the translation table."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            return translate_error(exc)
