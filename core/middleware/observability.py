"""
Observability middleware.

Assigns every request a correlation id, writes one structured log
line when it starts and one when it finishes, and echoes the id (and
the OpenTelemetry trace id, when tracing is on) in response headers.
Probe traffic is only logged at DEBUG.
"""

import logging
import time
import uuid
from typing import Callable, Dict, Optional, Tuple

from django.http import HttpRequest, HttpResponse
from opentelemetry import trace
from opentelemetry.trace import format_span_id, format_trace_id

logger = logging.getLogger(__name__)

CORRELATION_HEADERS = ("X-Correlation-ID", "X-Request-ID")
PROBE_PREFIXES = ("/health", "/ready", "/metrics")


def current_trace_ids() -> Tuple[Optional[str], Optional[str]]:
    """Hex trace and span ids of the active span, or (None, None)."""
    context = trace.get_current_span().get_span_context()
    if not context.is_valid:
        return None, None
    return format_trace_id(context.trace_id), format_span_id(context.span_id)


def request_status(status_code: int) -> str:
    if status_code >= 500:
        return "server_error"
    if status_code >= 400:
        return "client_error"
    return "success"


class ObservabilityMiddleware:
    """Request logging, correlation ids and trace headers."""

    def __init__(self, get_response: Callable):
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        correlation_id = self._correlation_id(request)
        request.correlation_id = correlation_id  # type: ignore

        trace_id, span_id = current_trace_ids()
        if trace_id:
            request.trace_id = trace_id  # type: ignore

        is_probe = request.path.startswith(PROBE_PREFIXES)
        base_extra = {
            "correlation_id": correlation_id,
            "method": request.method,
            "path": request.path,
            "trace_id": trace_id,
            "span_id": span_id,
        }
        logger.log(
            logging.DEBUG if is_probe else logging.INFO,
            "Request started",
            extra={
                **base_extra,
                "remote_addr": request.META.get("REMOTE_ADDR"),
                "user_agent": request.META.get("HTTP_USER_AGENT", ""),
            },
        )

        start_time = time.monotonic()
        try:
            response = self.get_response(request)
        except Exception as e:
            logger.error(
                "Request failed",
                extra={
                    **base_extra,
                    "request_status": "exception",
                    "error_type": type(e).__name__,
                    "duration_ms": self._elapsed_ms(start_time),
                },
                exc_info=True,
            )
            raise

        duration_ms = self._elapsed_ms(start_time)
        status = request_status(response.status_code)
        self._log_completion(request, response, status, duration_ms, base_extra, is_probe)

        response["X-Correlation-ID"] = correlation_id
        response["X-Request-Status"] = status
        response["X-Request-Duration"] = f"{duration_ms / 1000:.3f}"
        if trace_id:
            response["X-Trace-ID"] = trace_id
        return response

    def _correlation_id(self, request: HttpRequest) -> str:
        for header in CORRELATION_HEADERS:
            value = request.headers.get(header)
            if value:
                return value
        return str(uuid.uuid4())

    def _elapsed_ms(self, start_time: float) -> float:
        return round((time.monotonic() - start_time) * 1000, 2)

    def _log_completion(
        self,
        request: HttpRequest,
        response: HttpResponse,
        status: str,
        duration_ms: float,
        base_extra: Dict,
        is_probe: bool,
    ) -> None:
        extra = {
            **base_extra,
            "request_status": status,
            "status_code": response.status_code,
            "duration_ms": duration_ms,
            "response_size": len(response.content) if not response.streaming else None,
        }
        account_id = getattr(request, "account_id", None)
        if account_id:
            extra["account_id"] = str(account_id)

        if response.status_code >= 500:
            logger.error("Request completed with server error", extra=extra)
        elif response.status_code >= 400:
            logger.warning("Request completed with client error", extra=extra)
        else:
            logger.log(
                logging.DEBUG if is_probe else logging.INFO,
                "Request completed successfully",
                extra=extra,
            )
