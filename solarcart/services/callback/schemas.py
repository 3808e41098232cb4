"""Inbound callback and verification schemas."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class CallbackPayload(BaseModel):
    """Raw processor callback fields, forwarded to the backend untouched."""

    model_config = ConfigDict(frozen=True)

    payment: str = Field(min_length=1)
    signature: str = Field(min_length=1)
    custom_fields: str | None = None


class VerificationResult(BaseModel):
    """Backend verdict on a callback; the only authority on payment success."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, coerce_numbers_to_str=True)

    success: bool
    order_id: str | None = Field(default=None, alias="orderId")
    order_reference_number: str | None = Field(default=None, alias="orderReferenceNumber")
    transaction_date_time: str | None = Field(default=None, alias="transactionDateTime")
    status_code: str | None = Field(default=None, alias="statusCode")
    comment: str | None = None
    payment_gateway_used: str | None = Field(default=None, alias="paymentGatewayUsed")


class CallbackOutcome(BaseModel):
    """Everything the callback page needs to render its current state."""

    state: str
    message: str | None = None
    result: VerificationResult | None = None
    order: dict[str, Any] | None = None
    payment_status: dict[str, Any] | None = None
    continue_url: str | None = None
