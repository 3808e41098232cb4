"""WebXPay status/error vocabulary and gateway directory.

Everything here is a pure lookup: no I/O, no mutable module state, and no
function raises for unexpected input.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict

SUCCESS_STATUS_CODES = frozenset({"0", "00"})
DECLINED_STATUS_CODE = "15"

STATUS_MESSAGES: dict[str, str] = {
    "0": "Transaction Successful",
    "00": "Transaction Successful",
    DECLINED_STATUS_CODE: "Transaction Declined",
}
UNKNOWN_STATUS_MESSAGE = "Unknown payment status"

ERROR_MESSAGES: dict[int, str] = {
    401: "Invalid access",
    402: "Can't identify product",
    403: "Invalid Secret Key",
    405: "First name is required",
    406: "Last name is required",
    407: "Email Address is required",
    408: "Contact Number is required",
    409: "Total amount less than 1 USD/1 LKR",
    410: "LKR total amount exceed",
    411: "USD total amount exceed",
    412: "Not supported currency code",
    413: "Can't find the Gateways",
    414: "Selected gateway is not found",
    415: "Error gateway ID",
    416: "Bank Response not received",
    417: "Currency code not defined",
    418: "Return URL missing X Gateway",
    419: "Transaction Blocked for this IP Address",
    420: "Transaction Blocked for this E-mail address",
    421: "Transaction Blocked for this merchant",
    423: "An error has occurred while processing your payment",
    424: "Invalid Request URL",
}
UNKNOWN_ERROR_MESSAGE = "Unknown error occurred"

SUPPORTED_CURRENCIES = ("LKR", "USD", "GBP", "AUD")

# Request validation vocabulary, one message per rule.
FIRST_NAME_INVALID = "First name is required and must be at most 30 characters"
LAST_NAME_INVALID = "Last name is required and must be at most 30 characters"
EMAIL_INVALID = "Valid email address is required"
CONTACT_NUMBER_INVALID = "Valid contact number is required (9-20 characters, numbers and a leading + only)"
ADDRESS_LINE_ONE_MISSING = "Address line 1 is required"
SECRET_KEY_MISSING = "Secret key is required"
PAYMENT_MISSING = "Payment data is required (should be encrypted by backend)"
CURRENCY_MISSING = "Currency is required"
CURRENCY_INVALID = "Invalid currency code"
GATEWAY_ID_UNKNOWN = "Selected payment gateway is not supported"


class StatusClassification(BaseModel):
    """Outcome class of one processor status code."""

    model_config = ConfigDict(frozen=True)

    is_success: bool
    is_decline: bool


class Gateway(BaseModel):
    """One processor payment option."""

    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    display_name: str
    currency: str
    type: str


class EMIGateway(BaseModel):
    """Installment plan offered through a partner bank."""

    model_config = ConfigDict(frozen=True)

    id: int
    bank: str
    tenor: str
    currency: str = "LKR"


def _gw(id: int, name: str, display_name: str, currency: str, type: str) -> Gateway:
    return Gateway(id=id, name=name, display_name=display_name, currency=currency, type=type)


GATEWAYS: tuple[Gateway, ...] = (
    _gw(2, "ezcash", "eZ Cash (LKR)", "LKR", "wallet"),
    _gw(3, "mcash", "mCash (LKR)", "LKR", "wallet"),
    _gw(4, "ntb_amex_lkr", "AMEX (LKR)", "LKR", "card"),
    _gw(8, "ntb_amex_usd", "AMEX (USD)", "USD", "card"),
    _gw(5, "sampath_viswa", "Sampath Viswa (LKR)", "LKR", "card"),
    _gw(47, "hnb_usd", "HNB (USD)", "USD", "bank"),
    _gw(46, "hnb_lkr", "HNB (LKR)", "LKR", "bank"),
    _gw(16, "dfcc_wallet", "DFCC - Wallet (LKR)", "LKR", "wallet"),
    _gw(35, "frimi", "FriMi (LKR)", "LKR", "wallet"),
    _gw(36, "seylan_lkr", "Seylan Bank (LKR)", "LKR", "bank"),
    _gw(37, "seylan_usd", "Seylan Bank (USD)", "USD", "bank"),
    _gw(38, "commercial_token_lkr", "Commercial Token (LKR)", "LKR", "card"),
    _gw(39, "commercial_token_usd", "Commercial Token (USD)", "USD", "card"),
    _gw(40, "commercial_mpgs_lkr", "Commercial Bank MPGS (LKR)", "LKR", "card"),
    _gw(41, "commercial_mpgs_usd", "Commercial Bank MPGS (USD)", "USD", "card"),
    _gw(42, "genie", "Genie Visa Master (LKR)", "LKR", "card"),
    _gw(43, "cargills_visa_master", "Cargills Bank Visa Master (LKR)", "LKR", "card"),
    _gw(44, "cargills_token", "Cargills Bank Token (LKR)", "LKR", "card"),
    _gw(45, "upay", "UPay (LKR)", "LKR", "wallet"),
    _gw(52, "promotional", "Promotional (LKR)", "LKR", "card"),
    _gw(96, "lanka_qr", "Lanka QR", "LKR", "qr"),
)

_EMI_PLANS: dict[str, tuple[tuple[int, str], ...]] = {
    "NTB - AMEX": (
        (23, "03 Month (LKR)"),
        (24, "06 Month (LKR)"),
        (25, "12 Month (LKR)"),
        (26, "20 Month (LKR)"),
        (27, "24 Month (LKR)"),
        (28, "36 Month (LKR)"),
    ),
    "HNB": ((48, "3 Month (LKR)"), (49, "6 Month (LKR)"), (50, "12 Month (LKR)"), (51, "24 Month (LKR)")),
    "DFCC": (
        (53, "3 Month (LKR)"),
        (54, "6 Month (LKR)"),
        (66, "7 Month (LKR)"),
        (67, "9 Month (LKR)"),
        (55, "12 Month (LKR)"),
        (68, "15 Month (LKR)"),
        (69, "18 Month (LKR)"),
        (56, "24 Month (LKR)"),
        (70, "27 Month (LKR)"),
        (71, "36 Month (LKR)"),
        (72, "41 Month (LKR)"),
    ),
    "Commercial Bank": (
        (61, "3 Month (LKR)"),
        (57, "6 Month (LKR)"),
        (62, "9 Month (LKR)"),
        (58, "12 Month (LKR)"),
        (59, "18 Month (LKR)"),
        (60, "24 Month (LKR)"),
        (63, "36 Month (LKR)"),
        (64, "48 Month (LKR)"),
        (65, "60 Month (LKR)"),
    ),
    "NDB": (
        (75, "6 Month (LKR)"),
        (76, "9 Month (LKR)"),
        (77, "12 Month (LKR)"),
        (78, "18 Month (LKR)"),
        (79, "24 Month (LKR)"),
        (80, "36 Month (LKR)"),
        (81, "60 Month (LKR)"),
    ),
    "Seylan": ((90, "6 Month (LKR)"), (91, "12 Month (LKR)"), (92, "24 Month (LKR)")),
    "Union Bank": (
        (97, "3 Month (LKR)"),
        (98, "6 Month (LKR)"),
        (99, "12 Month (LKR)"),
        (100, "18 Month (LKR)"),
        (101, "24 Month (LKR)"),
        (102, "36 Month (LKR)"),
    ),
}

EMI_GATEWAYS: tuple[EMIGateway, ...] = tuple(
    EMIGateway(id=plan_id, bank=bank, tenor=tenor) for bank, plans in _EMI_PLANS.items() for plan_id, tenor in plans
)


def _as_code(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def classify_status(status_code: Any) -> StatusClassification:
    """Classify a processor status code; unknown codes are never success."""

    code = _as_code(status_code)
    return StatusClassification(
        is_success=code in SUCCESS_STATUS_CODES,
        is_decline=code == DECLINED_STATUS_CODE,
    )


def is_payment_successful(status_code: Any) -> bool:
    return classify_status(status_code).is_success


def status_message(status_code: Any) -> str:
    """Human-readable text for a processor status code."""

    return STATUS_MESSAGES.get(_as_code(status_code), UNKNOWN_STATUS_MESSAGE)


def error_message(error_code: Any) -> str:
    """Human-readable text for a numeric processor error code."""

    if isinstance(error_code, bool):
        return UNKNOWN_ERROR_MESSAGE
    try:
        code = int(error_code)
    except (TypeError, ValueError, OverflowError):
        return UNKNOWN_ERROR_MESSAGE
    return ERROR_MESSAGES.get(code, UNKNOWN_ERROR_MESSAGE)


def gateways_by_currency(currency: str) -> list[Gateway]:
    return [gateway for gateway in GATEWAYS if gateway.currency == currency]


def gateways_by_type(gateway_type: str) -> list[Gateway]:
    return [gateway for gateway in GATEWAYS if gateway.type == gateway_type]


def gateway_by_id(gateway_id: int) -> Gateway | None:
    return next((gateway for gateway in GATEWAYS if gateway.id == gateway_id), None)


def emi_gateways_by_bank(bank: str) -> list[EMIGateway]:
    return [plan for plan in EMI_GATEWAYS if plan.bank == bank]


def emi_gateway_by_id(gateway_id: int) -> EMIGateway | None:
    return next((plan for plan in EMI_GATEWAYS if plan.id == gateway_id), None)


def is_known_gateway_id(gateway_id: Any) -> bool:
    """True when the id names a regular gateway or an EMI plan."""

    if isinstance(gateway_id, bool):
        return False
    try:
        parsed = int(gateway_id)
    except (TypeError, ValueError, OverflowError):
        return False
    return gateway_by_id(parsed) is not None or emi_gateway_by_id(parsed) is not None
