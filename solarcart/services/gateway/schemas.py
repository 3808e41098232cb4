"""Outbound checkout handoff schemas."""

from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PaymentRequest(BaseModel):
    """Processor request fields as issued by the backend at order creation.

    `payment` and `secret_key` are opaque: they are forwarded exactly as
    received and never inspected. Extra processor fields are kept as-is.
    """

    model_config = ConfigDict(extra="allow", frozen=True, coerce_numbers_to_str=True)

    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    contact_number: str | None = None
    address_line_one: str | None = None
    address_line_two: str | None = None
    city: str | None = None
    state: str | None = None
    postal_code: str | None = None
    country: str | None = None
    process_currency: str | None = None
    payment: str | None = None
    secret_key: str | None = None
    cms: str | None = None
    custom_fields: str | None = None
    payment_gateway_id: int | str | None = None
    multiple_payment_gateway_ids: str | None = None


class CheckoutHandoff(BaseModel):
    """Backend order-creation output that starts the processor redirect."""

    url: str = Field(min_length=1)
    data: PaymentRequest
    payment_type: str | None = None


class ValidationResult(BaseModel):
    """Result of local request validation; errors keep rule order."""

    is_valid: bool
    errors: list[str] = Field(default_factory=list)


class RedirectCommand(BaseModel):
    """Description of the browser handoff the web shell has to perform."""

    model_config = ConfigDict(frozen=True)

    action_url: str
    method: str = "POST"
    # Multipart keeps base64 `+`, `/` and `=` intact; urlencoded forms do not.
    enctype: str = "multipart/form-data"
    fields: tuple[tuple[str, str], ...] = ()

    @field_validator("action_url")
    @classmethod
    def _absolute_http_url(cls, value: str) -> str:
        parsed = urlparse(value)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"processor endpoint must be an absolute http(s) URL: {value!r}")
        return value

    def field_names(self) -> list[str]:
        return [name for name, _ in self.fields]
