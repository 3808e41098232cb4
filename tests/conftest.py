"""Shared fixtures for the storefront handshake tests."""

import pytest

from fakes import FakeOrders


@pytest.fixture
def valid_request() -> dict:
    return {
        "first_name": "Nimal",
        "last_name": "Perera",
        "email": "nimal@example.lk",
        "contact_number": "+94771234567",
        "address_line_one": "12 Galle Road",
        "city": "Colombo",
        "country": "Sri Lanka",
        "process_currency": "LKR",
        "payment": "qk3+/Zx9==",
        "secret_key": "sk-opaque-123",
        "cms": "Python",
    }


@pytest.fixture
def fake_orders() -> FakeOrders:
    return FakeOrders()
