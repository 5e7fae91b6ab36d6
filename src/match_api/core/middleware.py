import logging
import uuid
from time import perf_counter

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response
from starlette.types import ASGIApp

from match_api.core.errors import unhandled_exception_handler
from match_api.core.logging import request_id_ctx

logger = logging.getLogger(__name__)


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Attach and propagate a correlation ID via headers and contextvars."""

    def __init__(self, app: ASGIApp, header_name: str = "X-Request-ID") -> None:
        super().__init__(app)
        self.header_name = header_name

    async def dispatch(  # type: ignore[override]
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = request.headers.get(self.header_name, str(uuid.uuid4()))
        token = request_id_ctx.set(request_id)
        request.state.request_id = request_id

        try:
            response = await call_next(request)
        finally:
            request_id_ctx.reset(token)

        response.headers[self.header_name] = request_id
        return response


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log every request on the way in and its outcome on the way out."""

    async def dispatch(  # type: ignore[override]
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        uri = request.url.path
        if request.url.query:
            uri = f"{uri}?{request.url.query}"

        logger.debug(
            f">>> {request.method} {uri}",
            extra={"method": request.method, "path": uri, "headers": dict(request.headers)},
        )

        start = perf_counter()
        response: Response | None = None
        try:
            response = await call_next(request)
            return response
        finally:
            logger.debug(
                f"<<< {request.method} {uri}",
                extra={
                    "method": request.method,
                    "path": uri,
                    "status_code": response.status_code if response is not None else 500,
                    "latency_ms": round((perf_counter() - start) * 1000, 3),
                    "headers": dict(response.headers) if response is not None else None,
                },
            )


class RecoveryMiddleware(BaseHTTPMiddleware):
    """Turn exceptions raised by handlers into JSON 500 responses.

    Installed innermost so the recovered response still passes through the
    request-id and CORS layers.
    """

    async def dispatch(  # type: ignore[override]
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            return await unhandled_exception_handler(request, exc)
