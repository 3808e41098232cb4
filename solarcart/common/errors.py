"""Payment-flow error taxonomy.

Every error carries a `user_message` that is safe to render to shoppers. Raw
exception text and processor internals stay in the logs.
"""

GENERIC_FAILURE_MESSAGE = "An error occurred while processing your payment"


class PaymentFlowError(Exception):
    """Base class for recoverable failures in the checkout handshake."""

    user_message = GENERIC_FAILURE_MESSAGE
    reason = "error"

    def __init__(self, user_message: str | None = None) -> None:
        if user_message is not None:
            self.user_message = user_message
        super().__init__(self.user_message)


class MalformedCallbackError(PaymentFlowError):
    """Processor callback arrived without its required opaque fields."""

    user_message = "Invalid payment response - missing parameters"
    reason = "malformed_callback"


class VerificationFailedError(PaymentFlowError):
    """Backend verification call failed in transport or returned non-2xx."""

    user_message = "Failed to verify payment with backend"
    reason = "verification_failed"


class RedirectValidationError(PaymentFlowError):
    """Outbound request rejected before the browser leaves the site.

    This is a contract violation by the checkout flow, not a payment decline.
    """

    user_message = "Payment request is incomplete"
    reason = "invalid_request"

    def __init__(self, errors: list[str]) -> None:
        self.errors = list(errors)
        super().__init__()
