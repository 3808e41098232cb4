"""Tests for turning backend verdicts into terminal page outcomes."""

import asyncio

from solarcart.common.state_machine import FAILED, SUCCEEDED
from solarcart.services.callback.schemas import VerificationResult
from solarcart.services.callback.service import OrderReconciler
from solarcart.services.gateway import catalog

from fakes import FakeOrders


def resolve(orders: FakeOrders, body: dict):
    return asyncio.run(OrderReconciler(orders).resolve(VerificationResult.model_validate(body)))


def test_verified_success_refreshes_order_data(fake_orders):
    outcome = resolve(fake_orders, {"success": True, "orderId": "ORD-1"})

    assert outcome.state == SUCCEEDED
    assert outcome.message is None
    assert fake_orders.calls == [("fetch_payment_status", "ORD-1"), ("fetch_order", "ORD-1")]
    assert outcome.order == {"order_id": "ORD-1", "status": "confirmed"}
    assert outcome.payment_status["payment_success"] is True
    assert outcome.continue_url == "/order-confirmation/ORD-1"


def test_payment_status_refresh_failure_keeps_success():
    orders = FakeOrders(fail={"fetch_payment_status"})
    outcome = resolve(orders, {"success": True, "orderId": "ORD-1"})

    assert outcome.state == SUCCEEDED
    assert outcome.payment_status is None
    assert ("fetch_order", "ORD-1") in orders.calls


def test_order_refresh_failure_keeps_success():
    orders = FakeOrders(fail={"fetch_order"})
    outcome = resolve(orders, {"success": True, "orderId": "ORD-1"})

    assert outcome.state == SUCCEEDED
    assert outcome.order is None


def test_both_refreshes_failing_keeps_success():
    outcome = resolve(FakeOrders(fail={"fetch_order", "fetch_payment_status"}), {"success": True, "orderId": "ORD-1"})
    assert outcome.state == SUCCEEDED


def test_success_without_order_id_skips_refresh(fake_orders):
    outcome = resolve(fake_orders, {"success": True})

    assert outcome.state == SUCCEEDED
    assert fake_orders.calls == []
    assert outcome.continue_url == "/orders"


def test_decline_with_status_code_only_uses_mapped_message(fake_orders):
    outcome = resolve(fake_orders, {"success": False, "statusCode": "15"})

    assert outcome.state == FAILED
    assert outcome.message == catalog.status_message("15") == "Transaction Declined"
    assert outcome.continue_url == "/checkout"


def test_decline_without_details_uses_generic_message(fake_orders):
    outcome = resolve(fake_orders, {"success": False})

    assert outcome.state == FAILED
    assert outcome.message == "Payment was declined"


def test_processor_comment_wins(fake_orders):
    outcome = resolve(fake_orders, {"success": False, "statusCode": "15", "comment": "Card expired"})
    assert outcome.message == "Card expired"


def test_unknown_status_code_maps_to_unknown_message(fake_orders):
    outcome = resolve(fake_orders, {"success": False, "statusCode": "77"})
    assert outcome.message == "Unknown payment status"


def test_decline_never_touches_order_subsystem(fake_orders):
    resolve(fake_orders, {"success": False, "orderId": "ORD-2", "statusCode": "15"})
    assert fake_orders.calls == []


def test_backend_verdict_overrides_status_code(fake_orders):
    """Only `success` decides the state, even if the status code looks approved."""

    outcome = resolve(fake_orders, {"success": False, "orderId": "ORD-3", "statusCode": "00"})
    assert outcome.state == FAILED
