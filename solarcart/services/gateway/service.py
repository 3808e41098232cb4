"""Outbound half of the processor handshake: validate, then hand off.

Neither class performs I/O. `GatewayRedirector` only describes the browser
navigation; the web shell executes it by rendering an auto-submitting form.
"""

import re
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel

from solarcart.services.gateway import catalog
from solarcart.services.gateway.schemas import RedirectCommand, ValidationResult

EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
CONTACT_NUMBER_PATTERN = re.compile(r"\+?[0-9]+")
MAX_NAME_LENGTH = 30
MIN_CONTACT_LENGTH = 9
MAX_CONTACT_LENGTH = 20


def _fields_of(request: BaseModel | Mapping[str, Any]) -> dict[str, Any]:
    if isinstance(request, BaseModel):
        return request.model_dump()
    return dict(request)


def _text(value: Any) -> str:
    # Checked exactly as it will be forwarded; no trimming.
    return "" if value is None else str(value)


def _blank(value: Any) -> bool:
    return not _text(value).strip()


def _present(value: Any) -> bool:
    # Opaque blobs: existence only, content is never looked at.
    return value is not None and str(value) != ""


class RedirectRequestBuilder:
    """Checks a backend-issued payment request before the browser leaves."""

    def validate(self, request: BaseModel | Mapping[str, Any]) -> ValidationResult:
        """Run every rule in fixed order; each failing rule adds one error."""

        data = _fields_of(request)
        errors: list[str] = []

        for key, message in (("first_name", catalog.FIRST_NAME_INVALID), ("last_name", catalog.LAST_NAME_INVALID)):
            name = _text(data.get(key))
            if _blank(name) or len(name) > MAX_NAME_LENGTH:
                errors.append(message)

        if not EMAIL_PATTERN.fullmatch(_text(data.get("email"))):
            errors.append(catalog.EMAIL_INVALID)

        if not self._valid_contact_number(_text(data.get("contact_number"))):
            errors.append(catalog.CONTACT_NUMBER_INVALID)

        if _blank(data.get("address_line_one")):
            errors.append(catalog.ADDRESS_LINE_ONE_MISSING)

        if not _present(data.get("secret_key")):
            errors.append(catalog.SECRET_KEY_MISSING)

        if not _present(data.get("payment")):
            errors.append(catalog.PAYMENT_MISSING)

        currency = data.get("process_currency")
        if not _present(currency):
            errors.append(catalog.CURRENCY_MISSING)
        elif str(currency) not in catalog.SUPPORTED_CURRENCIES:
            errors.append(catalog.CURRENCY_INVALID)

        gateway_id = data.get("payment_gateway_id")
        if _present(gateway_id) and not catalog.is_known_gateway_id(gateway_id):
            errors.append(catalog.GATEWAY_ID_UNKNOWN)

        return ValidationResult(is_valid=not errors, errors=errors)

    @staticmethod
    def _valid_contact_number(number: str) -> bool:
        return (
            MIN_CONTACT_LENGTH <= len(number) <= MAX_CONTACT_LENGTH
            and CONTACT_NUMBER_PATTERN.fullmatch(number) is not None
        )


class GatewayRedirector:
    """Builds the full-page multipart POST that hands the shopper to the processor.

    Callers validate first; this class does not re-check the payload.
    """

    def submit(self, endpoint_url: str, payload: BaseModel | Mapping[str, Any]) -> RedirectCommand:
        fields = tuple(
            (str(name), self._form_value(value))
            for name, value in _fields_of(payload).items()
            if value is not None and value != ""
        )
        return RedirectCommand(action_url=endpoint_url, fields=fields)

    @staticmethod
    def _form_value(value: Any) -> str:
        if isinstance(value, bool):
            return "true" if value else "false"
        return str(value)
