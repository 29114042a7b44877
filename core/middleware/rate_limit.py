"""
Rate limiting middleware.

Limits credential endpoints (login and signup) per client IP.
"""

import hashlib
import time
from typing import Callable, Tuple

from django.conf import settings
from django.core.cache import cache
from django.http import HttpRequest, HttpResponse, JsonResponse

from core.metrics import errors_total

RATE_LIMITED_PATHS = ("/api/login", "/api/signup")


class RateLimitMiddleware:
    """
    Fixed-window rate limiting per client IP.

    Counters live in the Django cache. Only POSTs to the
    credential endpoints are counted.
    """

    DEFAULT_RATE_LIMIT = 20  # requests per window
    RATE_LIMIT_WINDOW = 60  # seconds

    def __init__(self, get_response: Callable):
        """Initialize middleware."""
        self.get_response = get_response
        self.limit = getattr(settings, "AUTH_RATE_LIMIT", self.DEFAULT_RATE_LIMIT)

    def _get_client_ip(self, request: HttpRequest) -> str:
        forwarded = request.META.get("HTTP_X_FORWARDED_FOR")
        if forwarded:
            return forwarded.split(",")[0].strip()
        return request.META.get("REMOTE_ADDR", "unknown")

    def _get_rate_limit_key(self, path: str, client_ip: str) -> str:
        """
        Generate cache key for rate limiting.

        Args:
            path: Request path
            client_ip: Client address

        Returns:
            Cache key string
        """
        ip_hash = hashlib.sha256(client_ip.encode()).hexdigest()[:16]
        return f"rate_limit:{path}:{ip_hash}"

    def _check_rate_limit(self, cache_key: str) -> Tuple[bool, int, int]:
        """
        Check if request is within rate limit.

        Args:
            cache_key: Counter key for this client

        Returns:
            Tuple of (is_allowed, remaining, reset_time)
        """
        window_start = int(time.time() / self.RATE_LIMIT_WINDOW)
        reset_time = (window_start + 1) * self.RATE_LIMIT_WINDOW
        full_key = f"{cache_key}:{window_start}"

        current_count = cache.get(full_key, 0)
        if current_count >= self.limit:
            return False, 0, reset_time

        try:
            new_count = cache.incr(full_key, 1)
        except ValueError:
            cache.set(full_key, 1, timeout=self.RATE_LIMIT_WINDOW)
            new_count = 1

        return True, max(0, self.limit - new_count), reset_time

    def __call__(self, request: HttpRequest) -> HttpResponse:
        """
        Process request with rate limiting.

        Args:
            request: HTTP request

        Returns:
            HTTP response with rate limit headers
        """
        if request.method != "POST" or request.path not in RATE_LIMITED_PATHS:
            return self.get_response(request)

        cache_key = self._get_rate_limit_key(request.path, self._get_client_ip(request))
        is_allowed, remaining, reset_time = self._check_rate_limit(cache_key)

        if not is_allowed:
            errors_total.labels(error_type="rate_limit_exceeded", endpoint=request.path).inc()
            response = JsonResponse(
                {
                    "success": False,
                    "message": "Too many requests. Please try again later.",
                    "code": "RATE_LIMIT_EXCEEDED",
                },
                status=429,
            )
        else:
            response = self.get_response(request)

        response["X-RateLimit-Limit"] = str(self.limit)
        response["X-RateLimit-Remaining"] = str(remaining)
        response["X-RateLimit-Reset"] = str(reset_time)
        if not is_allowed:
            response["Retry-After"] = str(max(0, reset_time - int(time.time())))

        return response
