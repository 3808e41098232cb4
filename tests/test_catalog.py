"""Tests for processor status/error vocabulary and the gateway directory."""

import pytest

from solarcart.services.gateway import catalog


@pytest.mark.parametrize("code", ["0", "00"])
def test_approved_codes_are_success(code):
    result = catalog.classify_status(code)
    assert result.is_success
    assert not result.is_decline


@pytest.mark.parametrize("code", ["", "15", "000", "1", " 0", "0 ", "99", "abc", None, "success"])
def test_everything_else_fails_closed(code):
    """Unknown codes are never success."""

    assert not catalog.classify_status(code).is_success
    assert not catalog.is_payment_successful(code)


def test_decline_code_is_flagged():
    assert catalog.classify_status("15").is_decline
    assert catalog.status_message("15") == "Transaction Declined"


def test_status_messages():
    assert catalog.status_message("0") == "Transaction Successful"
    assert catalog.status_message("00") == "Transaction Successful"
    assert catalog.status_message("42") == "Unknown payment status"


@pytest.mark.parametrize("code", [None, "", 15, 3.5, object(), [], {"a": 1}])
def test_status_message_never_raises(code):
    assert isinstance(catalog.status_message(code), str)


def test_error_messages():
    assert catalog.error_message(401) == "Invalid access"
    assert catalog.error_message(416) == "Bank Response not received"
    assert catalog.error_message(421) == "Transaction Blocked for this merchant"
    assert catalog.error_message("424") == "Invalid Request URL"


@pytest.mark.parametrize("code", [404, 422, 0, -1, 10**30, "x", None, float("nan"), float("inf"), True, []])
def test_error_message_falls_back_without_raising(code):
    assert catalog.error_message(code) == "Unknown error occurred"


def test_lookups_are_idempotent():
    """Pure functions: same input, same output, every time."""

    for _ in range(3):
        assert catalog.classify_status("00") == catalog.classify_status("00")
        assert catalog.status_message("15") == "Transaction Declined"
        assert catalog.error_message(403) == "Invalid Secret Key"


def test_gateway_directory_lookups():
    assert catalog.gateway_by_id(96).name == "lanka_qr"
    assert catalog.gateway_by_id(1) is None
    assert all(g.currency == "USD" for g in catalog.gateways_by_currency("USD"))
    assert {g.name for g in catalog.gateways_by_type("qr")} == {"lanka_qr"}
    assert len(catalog.emi_gateways_by_bank("Seylan")) == 3
    assert catalog.emi_gateway_by_id(102).bank == "Union Bank"


@pytest.mark.parametrize("gateway_id,known", [(2, True), ("40", True), (23, True), (1, False), ("abc", False), (True, False)])
def test_is_known_gateway_id(gateway_id, known):
    assert catalog.is_known_gateway_id(gateway_id) is known
