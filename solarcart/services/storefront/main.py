"""Storefront web shell for the processor handshake.

Checkout posts the backend-issued handoff here and gets back a page that
forwards the browser to the processor. The processor sends the shopper back
to `/payment-callback`, which verifies through the backend and renders the
final state.
"""

import asyncio
from time import perf_counter
from uuid import uuid4

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import HTMLResponse

from solarcart.common.config import settings
from solarcart.common.errors import RedirectValidationError
from solarcart.common.logging import configure_logging, logger, trace_id_ctx
from solarcart.common.metrics import (
    http_request_duration_seconds,
    http_requests_total,
    metrics_response,
    redirect_handoffs_total,
    redirect_validation_failures_total,
)
from solarcart.common.startup import log_startup_config, report_config_problems
from solarcart.common.tracing import instrument_app, setup_tracing
from solarcart.services.callback.service import CallbackIngestor, CallbackSession, OrderReconciler
from solarcart.services.gateway.config import (
    is_production_environment,
    payment_callback_url,
    payment_gateway_url,
    validate_gateway_config,
)
from solarcart.services.gateway.schemas import CheckoutHandoff
from solarcart.services.gateway.service import GatewayRedirector, RedirectRequestBuilder
from solarcart.services.orders.client import OrderClient
from solarcart.services.storefront.views import render_callback_page, render_redirect_page

configure_logging()
setup_tracing(settings.service_name)
log_startup_config(
    settings.service_name,
    [
        "SERVICE_NAME",
        "APP_URL",
        "WEBXPAY_ENV",
        "BACKEND_URL",
        "ORDER_SERVICE_URL",
        "VERIFY_TIMEOUT_SECONDS",
    ],
)
report_config_problems("webxpay", validate_gateway_config())
logger.info(
    "webxpay_environment production=%s gateway_url=%s callback_url=%s",
    is_production_environment(),
    payment_gateway_url(),
    payment_callback_url(),
)

FORWARDED_HEADERS = ("authorization", "cookie")

builder = RedirectRequestBuilder()
redirector = GatewayRedirector()
ingestor = CallbackIngestor(
    settings.backend_url,
    verify_path=settings.verify_callback_path,
    timeout=settings.verify_timeout_seconds,
    service_name=settings.service_name,
)
orders = OrderClient(settings.orders_base_url, timeout=settings.order_refresh_timeout_seconds)

app = FastAPI(title="SolarCart Storefront")
instrument_app(app)


@app.middleware("http")
async def metrics_middleware(request: Request, call_next):
    """Record request count and latency, and tag logs with a trace id."""

    trace_id_ctx.set(request.headers.get("x-correlation-id") or str(uuid4()))
    start = perf_counter()
    route = request.url.path
    method = request.method
    status_code = 500
    try:
        response = await call_next(request)
        status_code = response.status_code
        route_obj = request.scope.get("route")
        if route_obj is not None and getattr(route_obj, "path", None):
            route = route_obj.path
        return response
    finally:
        elapsed = max(0.0, perf_counter() - start)
        http_request_duration_seconds.labels(
            service=settings.service_name,
            route=route,
            method=method,
        ).observe(elapsed)
        http_requests_total.labels(
            service=settings.service_name,
            route=route,
            method=method,
            status_code=str(status_code),
        ).inc()


def forwarded_headers(request: Request) -> dict[str, str]:
    """Shopper credentials the backend needs to attribute the call."""

    return {name: request.headers[name] for name in FORWARDED_HEADERS if name in request.headers}


@app.post("/checkout/redirect", response_class=HTMLResponse)
def checkout_redirect(handoff: CheckoutHandoff):
    """Validate the handoff and answer with the auto-submitting processor form.

    An invalid handoff means checkout reached this step with bad data; it is
    rejected here so the shopper never leaves the site.
    """

    validation = builder.validate(handoff.data)
    if not validation.is_valid:
        exc = RedirectValidationError(validation.errors)
        redirect_validation_failures_total.labels(service=settings.service_name).inc()
        logger.error("redirect_request_invalid errors=%s", exc.errors)
        raise HTTPException(status_code=422, detail={"message": exc.user_message, "errors": exc.errors})

    try:
        command = redirector.submit(handoff.url, handoff.data)
    except ValueError as exc:
        redirect_validation_failures_total.labels(service=settings.service_name).inc()
        logger.error("redirect_endpoint_invalid url=%s error=%s", handoff.url, exc)
        raise HTTPException(
            status_code=422,
            detail={"message": "Payment gateway URL is invalid", "errors": ["Invalid payment gateway URL"]},
        ) from exc

    redirect_handoffs_total.labels(
        service=settings.service_name,
        currency=handoff.data.process_currency or "",
    ).inc()
    logger.info(
        "redirect_handoff endpoint=%s fields=%s payment_type=%s",
        command.action_url,
        command.field_names(),
        handoff.payment_type,
    )
    return HTMLResponse(render_redirect_page(command))


@app.get("/payment-callback", response_class=HTMLResponse)
async def payment_callback(request: Request):
    """Verify the processor callback through the backend and render the outcome."""

    session = CallbackSession(
        ingestor,
        OrderReconciler(orders.with_headers(forwarded_headers(request)), service_name=settings.service_name),
        headers=forwarded_headers(request),
        service_name=settings.service_name,
    )
    try:
        outcome = await session.process(request.query_params)
    except asyncio.CancelledError:
        session.unmount()
        raise
    return HTMLResponse(render_callback_page(outcome))


@app.get("/metrics")
def metrics():
    """Prometheus scrape endpoint."""

    return metrics_response()


@app.get("/health")
def health():
    """Container health probe endpoint."""

    return {"ok": True}
