"""Request logging middleware (pure ASGI)."""

from __future__ import annotations

import logging
import time

from starlette.types import ASGIApp, Message, Receive, Scope, Send

from sociomap.logging_config import new_request_id, request_id_var
from sociomap.services.metrics import metrics

logger = logging.getLogger("sociomap.access")

REQUEST_ID_HEADER = b"x-request-id"


class RequestLoggingMiddleware:
    """Log ``method path status latency`` once per HTTP request.

    Binds a request ID (the caller's ``X-Request-ID`` or a fresh one) for
    the duration of the request and returns it, along with
    ``X-Response-Time-Ms``, on every response. Request bodies are never
    logged since they hold free-text community descriptions.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        incoming_id = ""
        for header_name, header_value in scope.get("headers", []):
            if header_name == REQUEST_ID_HEADER:
                incoming_id = header_value.decode("latin-1")
                break

        rid = incoming_id or new_request_id()
        token = request_id_var.set(rid)

        start = time.perf_counter()
        status_code = 500  # if the app never starts a response

        async def send_wrapper(message: Message) -> None:
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message["status"]
                elapsed_ms = round((time.perf_counter() - start) * 1000, 2)
                headers = list(message.get("headers", []))
                headers.append((b"x-response-time-ms", str(elapsed_ms).encode()))
                headers.append((REQUEST_ID_HEADER, rid.encode("latin-1")))
                message = {**message, "headers": headers}
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        finally:
            elapsed_ms = round((time.perf_counter() - start) * 1000, 2)
            logger.info(
                "%s %s %s %.2fms",
                scope.get("method", ""),
                scope.get("path", ""),
                status_code,
                elapsed_ms,
            )
            metrics.inc_request(status_code)
            metrics.record_latency(elapsed_ms)
            request_id_var.reset(token)
