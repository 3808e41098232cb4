"""Server-rendered HTML for the processor redirect and the callback page."""

import html
from datetime import datetime

from solarcart.common.state_machine import FAILED, PROCESSING, SUCCEEDED
from solarcart.services.callback.schemas import CallbackOutcome
from solarcart.services.callback.service import CHECKOUT_URL, ORDERS_URL
from solarcart.services.gateway import catalog
from solarcart.services.gateway.schemas import RedirectCommand

PRIMARY = "#d97706"
PAGE_STYLE = (
    "font-family:system-ui,sans-serif;margin:0;min-height:100vh;display:flex;align-items:center;"
    "justify-content:center;background:linear-gradient(135deg,#fffbeb,#ffffff,#eff6ff);"
)
CARD_STYLE = "background:#fff;border-radius:16px;box-shadow:0 20px 40px rgba(0,0,0,.12);padding:32px;max-width:640px;width:100%;"


def _esc(value: object) -> str:
    return html.escape(str(value), quote=True)


def _document(title: str, body: str) -> str:
    return f"""<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <title>{_esc(title)}</title>
</head>
<body style="{PAGE_STYLE}">
<main style="{CARD_STYLE}">
{body}
</main>
</body>
</html>
"""


def render_redirect_page(command: RedirectCommand) -> str:
    """Hidden form that posts itself to the processor as soon as it loads."""

    inputs = "\n".join(
        f'  <input type="hidden" name="{_esc(name)}" value="{_esc(value)}">' for name, value in command.fields
    )
    body = f"""<h2>Redirecting to secure payment</h2>
<p>Please wait while we transfer you to the payment gateway...</p>
<form id="gateway-handoff" method="{_esc(command.method.lower())}" action="{_esc(command.action_url)}" enctype="{_esc(command.enctype)}" style="display:none">
{inputs}
  <noscript><button type="submit">Continue to payment</button></noscript>
</form>
<script>document.getElementById("gateway-handoff").submit();</script>"""
    return _document("Redirecting to payment", body)


def _detail_rows(rows: list[tuple[str, str]]) -> str:
    return "\n".join(
        f'<div style="display:flex;justify-content:space-between;padding:4px 0">'
        f'<span style="color:#4b5563">{_esc(label)}:</span><strong>{_esc(value)}</strong></div>'
        for label, value in rows
    )


def _link(href: str, label: str, primary: bool = False) -> str:
    style = (
        f"background:{PRIMARY};color:#fff;" if primary else f"border:2px solid {PRIMARY};color:{PRIMARY};"
    ) + "padding:12px 20px;border-radius:8px;text-decoration:none;font-weight:600;display:inline-block;margin:4px"
    return f'<a href="{_esc(href)}" style="{style}">{_esc(label)}</a>'


def _format_datetime(raw: str) -> str:
    try:
        return datetime.fromisoformat(raw.replace("Z", "+00:00")).strftime("%Y-%m-%d %H:%M:%S")
    except ValueError:
        return raw


def _render_processing() -> str:
    return """<div style="text-align:center">
<h2>Processing Payment</h2>
<p>Please wait while we confirm your payment...</p>
</div>"""


def _render_succeeded(outcome: CallbackOutcome) -> str:
    result = outcome.result
    rows: list[tuple[str, str]] = []
    if result is not None:
        if result.order_id:
            rows.append(("Order ID", result.order_id))
        if result.order_reference_number:
            rows.append(("Transaction Reference", result.order_reference_number))
        if result.transaction_date_time:
            rows.append(("Transaction Date", _format_datetime(result.transaction_date_time)))
        if result.payment_gateway_used:
            rows.append(("Payment Method", result.payment_gateway_used))
        if result.status_code:
            rows.append(("Status", catalog.status_message(result.status_code)))
    return f"""<div style="text-align:center">
<h1>Payment Successful!</h1>
<p>Your payment has been processed successfully.</p>
</div>
<section style="background:#fffbeb;border-radius:8px;padding:20px;margin:20px 0">
<h2>Payment Details</h2>
{_detail_rows(rows)}
</section>
<div>
{_link(outcome.continue_url or ORDERS_URL, "View Order Details", primary=True)}
{_link(ORDERS_URL, "View All Orders")}
</div>
<p style="text-align:center"><a href="/">Return to Home</a></p>"""


def _render_failed(outcome: CallbackOutcome) -> str:
    parts = [
        """<div style="text-align:center">
<h1>Payment Failed</h1>
<p>We couldn&#x27;t process your payment. Please try again.</p>
</div>"""
    ]
    if outcome.message:
        parts.append(
            '<section style="background:#fef2f2;border:1px solid #fecaca;border-radius:8px;padding:20px;margin:20px 0">'
            f'<h3 style="color:#7f1d1d">Error Details</h3><p style="color:#b91c1c">{_esc(outcome.message)}</p></section>'
        )
    result = outcome.result
    if result is not None:
        rows: list[tuple[str, str]] = []
        if result.order_id:
            rows.append(("Order ID", result.order_id))
        if result.order_reference_number:
            rows.append(("Transaction Reference", result.order_reference_number))
        rows.append(("Status", result.comment or "Transaction declined"))
        parts.append(
            '<section style="background:#f9fafb;border-radius:8px;padding:20px;margin:20px 0">'
            f"<h2>Transaction Details</h2>\n{_detail_rows(rows)}</section>"
        )
    parts.append(
        f"""<div>
{_link(outcome.continue_url or CHECKOUT_URL, "Try Again", primary=True)}
{_link("/", "Return to Home")}
</div>
<p style="text-align:center">Need help? Contact our support team <a href="/contact-us">Get Support</a></p>"""
    )
    return "\n".join(parts)


def render_callback_page(outcome: CallbackOutcome) -> str:
    if outcome.state == SUCCEEDED:
        return _document("Payment Successful", _render_succeeded(outcome))
    if outcome.state == FAILED:
        return _document("Payment Failed", _render_failed(outcome))
    if outcome.state == PROCESSING:
        return _document("Processing Payment", _render_processing())
    raise ValueError(f"unknown callback state: {outcome.state}")
