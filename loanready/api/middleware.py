"""FastAPI middleware for request tracing and metrics"""

import uuid
import time
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from loanready.infrastructure.observability.metrics import request_duration_histogram


def route_template(request: Request) -> str:
    """
    Full route template of the matched endpoint, e.g. /v1/businesses/{business_id}.

    Route templates keep label cardinality bounded. The matched route may only
    know its path relative to the router prefix, so the prefix is taken from
    the leading segments of the request path.
    """
    route = request.scope.get("route")
    path = request.url.path
    if route is None:
        return path

    template = route.path
    segments = path.split("/")
    prefix_length = len(segments) - len(template.split("/")) + 1
    prefix = "/".join(segments[:prefix_length]) if prefix_length > 1 else ""
    return prefix + template


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Attach a request ID, reusing the caller's X-Request-ID when given"""

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id

        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response


class MetricsMiddleware(BaseHTTPMiddleware):
    """Record HTTP request metrics"""

    async def dispatch(self, request: Request, call_next):
        start_time = time.time()

        response = await call_next(request)

        duration = time.time() - start_time
        request_duration_histogram.labels(
            method=request.method,
            endpoint=route_template(request),
            status=response.status_code,
        ).observe(duration)

        return response
