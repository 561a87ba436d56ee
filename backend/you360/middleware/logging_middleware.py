"""
Request logging middleware.

Pure ASGI (not BaseHTTPMiddleware), so uploads and streamed responses pass
through untouched. Logs method, path, session, status and duration; JSON
request bodies are logged at DEBUG with credentials masked. Upload bodies
(food photos) are never logged.
"""

import json
import logging
import time
from typing import Optional
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from ..core.logging_config import filter_sensitive_data, truncate_large_data

logger = logging.getLogger(__name__)


def _sanitize_body(body: bytes) -> str:
    """Mask credentials in a JSON body, fall back to truncated text."""
    text = body.decode("utf-8", errors="ignore")
    try:
        payload = filter_sensitive_data(json.loads(text))
        return truncate_large_data(json.dumps(payload, ensure_ascii=False), max_length=2000)
    except json.JSONDecodeError:
        return truncate_large_data(text, max_length=2000)


class RequestLoggingMiddleware:
    """Logs one line per API request."""

    def __init__(self, app: ASGIApp, exclude_paths: Optional[list] = None):
        """
        Args:
            app: The ASGI application
            exclude_paths: Paths that are not logged (e.g., ["/health"])
        """
        self.app = app
        self.exclude_paths = exclude_paths or ["/health", "/"]

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or scope.get("path", "") in self.exclude_paths:
            await self.app(scope, receive, send)
            return

        start_time = time.time()
        method = scope.get("method", "UNKNOWN")
        path = scope.get("path", "")
        headers = {
            k.decode("latin-1"): v.decode("latin-1", errors="ignore")
            for k, v in scope.get("headers", [])
        }
        is_json = headers.get("content-type", "").startswith("application/json")
        session_id = headers.get("x-session-id", "default")

        body_chunks = []
        status_code = 0

        async def logging_receive() -> Message:
            message = await receive()
            if is_json and message["type"] == "http.request":
                body_chunks.append(message.get("body", b""))
            return message

        async def logging_send(message: Message) -> None:
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message.get("status", 0)
            await send(message)

        try:
            await self.app(scope, logging_receive, logging_send)
        except Exception as e:
            logger.error(
                f"Request failed: {method} {path} - {str(e)}",
                exc_info=True,
                extra={"extra_fields": {
                    "method": method,
                    "path": path,
                    "session_id": session_id,
                    "duration_ms": round((time.time() - start_time) * 1000, 2),
                }}
            )
            raise

        duration_ms = round((time.time() - start_time) * 1000, 2)
        fields = {
            "method": method,
            "path": path,
            "session_id": session_id,
            "status_code": status_code,
            "duration_ms": duration_ms,
        }

        if body_chunks and logger.isEnabledFor(logging.DEBUG):
            body = b"".join(body_chunks)
            if body:
                logger.debug(f"Request body: {_sanitize_body(body)}", extra={"extra_fields": fields})

        if status_code < 400:
            log_level = logging.INFO
        elif status_code < 500:
            log_level = logging.WARNING
        else:
            log_level = logging.ERROR

        logger.log(
            log_level,
            f"Request completed: {method} {path} - {status_code} ({duration_ms:.2f}ms)",
            extra={"extra_fields": fields}
        )
