import logging

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse

logger = logging.getLogger(__name__)


class CatchAllExceptionMiddleware(BaseHTTPMiddleware):
    """Anything a handler lets escape becomes a logged 500 with a small JSON body."""

    async def dispatch(self, request, call_next):
        try:
            return await call_next(request)
        except Exception as exc:
            logger.error(
                "%s on %s %s (500): %s",
                type(exc).__name__,
                request.method,
                request.url.path,
                exc,
                exc_info=True,
                extra={"http_method": request.method, "path": request.url.path, "status_code": 500},
            )
            return JSONResponse(
                status_code=500,
                content={"error": type(exc).__name__, "detail": str(exc)},
            )
