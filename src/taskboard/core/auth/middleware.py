"""Request middleware.

This module provides middleware for:
- Request tracing with unique IDs
- HTML form method override (PUT, PATCH, DELETE over POST)
"""

import uuid

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint


logger = structlog.get_logger()

OVERRIDABLE_METHODS = frozenset({"PUT", "PATCH", "DELETE"})


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Middleware that adds a unique request ID to each request.

    The request ID is added to:
    - request.state.request_id
    - Response header X-Request-ID
    - Structlog context
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        """Process the request and add request ID.

        Args:
            request: The incoming request
            call_next: The next middleware/handler

        Returns:
            The response with X-Request-ID header
        """
        # Get request ID from header or generate new one
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())

        request.state.request_id = request_id
        request.state.trace_id = request_id  # Alias for error handler
        structlog.contextvars.bind_contextvars(request_id=request_id)

        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id

        structlog.contextvars.unbind_contextvars(
            "request_id", "tenant_id", "tenant_slug", "user_id"
        )

        return response


class MethodOverrideMiddleware(BaseHTTPMiddleware):
    """Let HTML forms reach PUT, PATCH and DELETE routes.

    Browsers only submit GET and POST, so edit and delete forms post to
    ``?_method=PUT`` (or ``PATCH``/``DELETE``). The override applies to
    POST requests only, and only for those three methods.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        if request.method == "POST":
            override = request.query_params.get("_method", "").upper()
            if override in OVERRIDABLE_METHODS:
                request.scope["method"] = override
                logger.debug("method_overridden", method=override, path=request.url.path)
        return await call_next(request)
