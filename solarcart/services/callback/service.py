"""Inbound half of the processor handshake.

The processor sends the shopper back with an encrypted `payment` blob and a
`signature`. Those are forwarded verbatim to the backend, which decrypts and
verifies them; the page state is decided only by the backend's answer.
"""

import asyncio
from collections.abc import Mapping
from time import perf_counter
from urllib.parse import quote

import httpx

from solarcart.common.errors import (
    GENERIC_FAILURE_MESSAGE,
    MalformedCallbackError,
    PaymentFlowError,
    VerificationFailedError,
)
from solarcart.common.logging import logger, order_id_ctx
from solarcart.common.metrics import (
    callback_outcomes_total,
    callbacks_received_total,
    order_refresh_failures_total,
    verification_latency_seconds,
)
from solarcart.common.state_machine import FAILED, PROCESSING, SUCCEEDED, is_terminal, validate_transition
from solarcart.services.callback.schemas import CallbackOutcome, CallbackPayload, VerificationResult
from solarcart.services.gateway import catalog
from solarcart.services.orders.client import OrderClient

CHECKOUT_URL = "/checkout"
ORDERS_URL = "/orders"
DECLINED_MESSAGE = "Payment was declined"

# Strong references for verification tasks; the event loop only holds weak ones.
_background_tasks: set[asyncio.Task] = set()


def order_confirmation_url(order_id: str) -> str:
    return f"/order-confirmation/{quote(order_id, safe='')}"


class CallbackIngestor:
    """Pulls the opaque callback fields off the URL and asks the backend to verify them."""

    def __init__(
        self,
        backend_url: str,
        verify_path: str = "/api/payment/verify-callback",
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
        service_name: str = "storefront",
    ) -> None:
        self.verify_url = f"{backend_url.rstrip('/')}{verify_path}"
        self.timeout = timeout
        self.transport = transport
        self.service_name = service_name

    @staticmethod
    def extract(query_params: Mapping[str, str]) -> CallbackPayload:
        """Read `payment`, `signature` and `custom_fields` without decoding them.

        Raises `MalformedCallbackError` when either required field is missing or
        empty, before any network traffic happens.
        """

        payment = query_params.get("payment")
        signature = query_params.get("signature")
        if not payment or not signature:
            raise MalformedCallbackError()
        return CallbackPayload(
            payment=payment,
            signature=signature,
            custom_fields=query_params.get("custom_fields"),
        )

    async def verify(self, payload: CallbackPayload, headers: dict[str, str] | None = None) -> VerificationResult:
        """Issue the single verification request for this callback. Never retried."""

        body = {
            "payment": payload.payment,
            "signature": payload.signature,
            "custom_fields": payload.custom_fields,
        }
        started = perf_counter()
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                # Bounds the whole call, not only each socket operation.
                resp = await asyncio.wait_for(
                    client.post(self.verify_url, json=body, headers=headers or {}),
                    timeout=self.timeout,
                )
        except (httpx.HTTPError, asyncio.TimeoutError) as exc:
            logger.error("verification_transport_error url=%s error=%s", self.verify_url, exc)
            raise VerificationFailedError() from exc
        finally:
            verification_latency_seconds.labels(service=self.service_name).observe(
                max(0.0, perf_counter() - started)
            )

        if not resp.is_success:
            logger.error("verification_rejected url=%s status=%s", self.verify_url, resp.status_code)
            raise VerificationFailedError()
        try:
            return VerificationResult.model_validate(resp.json())
        except ValueError as exc:
            logger.error("verification_body_invalid url=%s error=%s", self.verify_url, exc)
            raise VerificationFailedError(GENERIC_FAILURE_MESSAGE) from exc


class OrderReconciler:
    """Turns a backend verdict into the page's terminal outcome."""

    def __init__(self, orders: OrderClient, service_name: str = "storefront") -> None:
        self.orders = orders
        self.service_name = service_name

    @staticmethod
    def decline_message(result: VerificationResult) -> str:
        """Processor comment first, then the mapped status code, then a generic line."""

        if result.comment:
            return result.comment
        if result.status_code:
            return catalog.status_message(result.status_code)
        return DECLINED_MESSAGE

    async def resolve(self, result: VerificationResult) -> CallbackOutcome:
        if result.order_id:
            order_id_ctx.set(result.order_id)

        if not result.success:
            message = self.decline_message(result)
            logger.info("payment_declined status_code=%s message=%s", result.status_code, message)
            return CallbackOutcome(state=FAILED, message=message, result=result, continue_url=CHECKOUT_URL)

        logger.info("payment_verified reference=%s", result.order_reference_number)
        if not result.order_id:
            logger.warning("payment_verified_without_order_id")
            return CallbackOutcome(state=SUCCEEDED, result=result, continue_url=ORDERS_URL)

        payment_status = await self._best_effort("fetch_payment_status", result.order_id)
        order = await self._best_effort("fetch_order", result.order_id)
        return CallbackOutcome(
            state=SUCCEEDED,
            result=result,
            order=order,
            payment_status=payment_status,
            continue_url=order_confirmation_url(result.order_id),
        )

    async def _best_effort(self, operation: str, order_id: str) -> dict | None:
        # A confirmed payment stays confirmed even if this refresh fails.
        try:
            return await getattr(self.orders, operation)(order_id)
        except Exception as exc:
            logger.warning("order_refresh_failed operation=%s order_id=%s error=%s", operation, order_id, exc)
            order_refresh_failures_total.labels(service=self.service_name, operation=operation).inc()
            return None


class CallbackSession:
    """State of one callback page load: `processing` until exactly one terminal outcome.

    `process` triggers verification at most once no matter how often it is
    called. After `unmount`, a late completion leaves the state untouched.
    """

    def __init__(
        self,
        ingestor: CallbackIngestor,
        reconciler: OrderReconciler,
        headers: dict[str, str] | None = None,
        service_name: str = "storefront",
    ) -> None:
        self.ingestor = ingestor
        self.reconciler = reconciler
        self.headers = dict(headers or {})
        self.service_name = service_name
        self.mounted = True
        self._outcome = CallbackOutcome(state=PROCESSING)
        self._task: asyncio.Task | None = None

    @property
    def state(self) -> str:
        return self._outcome.state

    @property
    def outcome(self) -> CallbackOutcome:
        return self._outcome

    async def process(self, query_params: Mapping[str, str]) -> CallbackOutcome:
        if self._task is None:
            self._task = asyncio.create_task(self._run(dict(query_params)))
            _background_tasks.add(self._task)
            self._task.add_done_callback(_background_tasks.discard)
        await asyncio.shield(self._task)
        return self._outcome

    def unmount(self) -> None:
        self.mounted = False

    async def _run(self, query_params: dict[str, str]) -> None:
        callbacks_received_total.labels(service=self.service_name).inc()
        try:
            payload = self.ingestor.extract(query_params)
            logger.info(
                "callback_received payment_len=%s signature_len=%s has_custom_fields=%s",
                len(payload.payment),
                len(payload.signature),
                payload.custom_fields is not None,
            )
            result = await self.ingestor.verify(payload, headers=self.headers)
            outcome = await self.reconciler.resolve(result)
            reason = "verified" if outcome.state == SUCCEEDED else "declined"
        except PaymentFlowError as exc:
            logger.warning("callback_failed reason=%s", exc.reason)
            outcome = CallbackOutcome(state=FAILED, message=exc.user_message, continue_url=CHECKOUT_URL)
            reason = exc.reason
        except Exception as exc:
            logger.exception("callback_processing_error error=%s", exc)
            outcome = CallbackOutcome(state=FAILED, message=GENERIC_FAILURE_MESSAGE, continue_url=CHECKOUT_URL)
            reason = "error"
        self._finish(outcome, reason)

    def _finish(self, outcome: CallbackOutcome, reason: str) -> None:
        if not self.mounted:
            logger.info("callback_completed_after_unmount state=%s", outcome.state)
            return
        if is_terminal(self._outcome.state):
            logger.warning("callback_already_resolved state=%s ignored=%s", self._outcome.state, outcome.state)
            return
        validate_transition(self._outcome.state, outcome.state)
        self._outcome = outcome
        callback_outcomes_total.labels(service=self.service_name, state=outcome.state, reason=reason).inc()
