"""Request correlation for structured logs.

Every request gets an ``X-Request-ID``: the caller's value when supplied,
a fresh UUID4 otherwise.  The ID is bound into structlog's contextvars so
that every log line emitted while serving the request (service, repository,
accounts gateway) carries it, and is echoed back on the response.
"""

from __future__ import annotations

import uuid
from contextvars import ContextVar
from typing import Callable

import structlog
from django.http import HttpRequest, HttpResponse

REQUEST_ID_HEADER = "X-Request-ID"

correlation_id_var: ContextVar[str] = ContextVar("correlation_id", default="")

logger = structlog.get_logger(__name__)


class CorrelationIdMiddleware:
    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        cid = request.META.get("HTTP_X_REQUEST_ID") or str(uuid.uuid4())
        token = correlation_id_var.set(cid)

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            correlation_id=cid,
            method=request.method,
            path=request.path,
        )

        logger.info("request.started")
        try:
            response = self.get_response(request)
            logger.info("request.finished", status_code=response.status_code)
        finally:
            structlog.contextvars.clear_contextvars()
            correlation_id_var.reset(token)

        response[REQUEST_ID_HEADER] = cid
        return response
