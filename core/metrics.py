"""
Prometheus metrics for the dashboard backend.

Custom metrics for business logic and performance monitoring.
"""

from prometheus_client import Counter, Histogram

# HTTP metrics
http_requests_total = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status_code"],
)

http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 2.0, 5.0, 10.0],
)

# Account metrics
users_registered_total = Counter(
    "users_registered_total",
    "Total users registered",
)

logins_total = Counter(
    "logins_total",
    "Total login attempts",
    ["outcome"],
)

# License metrics
licenses_claimed_total = Counter(
    "licenses_claimed_total",
    "Total license keys claimed",
    ["plan_type", "source"],
)

licenses_extended_total = Counter(
    "licenses_extended_total",
    "Total license extensions",
    ["plan_type"],
)

license_claim_conflicts_total = Counter(
    "license_claim_conflicts_total",
    "Total claims lost to a concurrent request",
    ["operation"],
)

# Task metrics
scan_tasks_total = Counter(
    "scan_tasks_total",
    "Total scan task mutations",
    ["action"],
)

# Webhook metrics
discord_notifications_total = Counter(
    "discord_notifications_total",
    "Total Discord notifications dispatched",
    ["outcome"],
)

# Error metrics
errors_total = Counter(
    "errors_total",
    "Total errors",
    ["error_type", "endpoint"],
)

event_handler_failures_total = Counter(
    "event_handler_failures_total",
    "Total domain event handler failures",
    ["event_type", "handler"],
)
