"""Prometheus metric definitions for the storefront payment handshake."""

from prometheus_client import Counter, Histogram, generate_latest
from starlette.responses import Response


http_requests_total = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["service", "route", "method", "status_code"],
)
http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration seconds",
    ["service", "route", "method"],
)
redirect_handoffs_total = Counter(
    "redirect_handoffs_total",
    "Checkout handoffs rendered as processor redirects",
    ["service", "currency"],
)
redirect_validation_failures_total = Counter(
    "redirect_validation_failures_total",
    "Checkout handoffs rejected before leaving the site",
    ["service"],
)
callbacks_received_total = Counter("callbacks_received_total", "Processor callbacks received", ["service"])
callback_outcomes_total = Counter(
    "callback_outcomes_total",
    "Terminal callback outcomes",
    ["service", "state", "reason"],
)
verification_latency_seconds = Histogram(
    "verification_latency_seconds",
    "Backend callback verification latency seconds",
    ["service"],
)
order_refresh_failures_total = Counter(
    "order_refresh_failures_total",
    "Best-effort order refresh calls that failed after a confirmed payment",
    ["service", "operation"],
)


def metrics_response() -> Response:
    """Expose all registered Prometheus metrics in text format."""

    return Response(content=generate_latest(), media_type="text/plain")
