"""Tests for the processor handoff command and its rendered form."""

import pytest

from solarcart.services.gateway.schemas import PaymentRequest
from solarcart.services.gateway.service import GatewayRedirector
from solarcart.services.storefront.views import render_redirect_page

ENDPOINT = "https://stagingxpay.info/index.php?route=checkout/billing"

redirector = GatewayRedirector()


def test_command_is_multipart_post(valid_request):
    command = redirector.submit(ENDPOINT, valid_request)

    assert command.action_url == ENDPOINT
    assert command.method == "POST"
    assert command.enctype == "multipart/form-data"


def test_empty_and_null_entries_are_dropped():
    command = redirector.submit(ENDPOINT, {"payment": "abc", "custom_fields": "", "cms": None, "gateway": 0})
    assert command.fields == (("payment", "abc"), ("gateway", "0"))


def test_scalars_are_stringified():
    command = redirector.submit(ENDPOINT, {"payment_gateway_id": 96, "flag": True, "other": False})
    assert dict(command.fields) == {"payment_gateway_id": "96", "flag": "true", "other": "false"}


def test_opaque_blob_is_forwarded_byte_for_byte(valid_request):
    blob = "a+b/c==\nd+/="
    valid_request["payment"] = blob
    command = redirector.submit(ENDPOINT, PaymentRequest(**valid_request))
    assert dict(command.fields)["payment"] == blob


def test_extra_backend_fields_survive(valid_request):
    valid_request["multiple_payment_gateway_ids"] = "2|3"
    valid_request["enc_method"] = "JCs3J+6oSz4V0LgE0zi/Bg=="
    fields = dict(redirector.submit(ENDPOINT, PaymentRequest(**valid_request)).fields)
    assert fields["enc_method"] == "JCs3J+6oSz4V0LgE0zi/Bg=="
    assert fields["multiple_payment_gateway_ids"] == "2|3"


@pytest.mark.parametrize("url", ["javascript:alert(1)", "/relative/path", "ftp://x.lk/pay", ""])
def test_endpoint_must_be_absolute_http(url):
    with pytest.raises(ValueError):
        redirector.submit(url, {"payment": "abc"})


def test_rendered_form_posts_hidden_fields_and_submits_itself():
    command = redirector.submit(ENDPOINT, {"payment": "x+y/z==", "first_name": 'O"Brien <b>'})
    page = render_redirect_page(command)

    assert 'enctype="multipart/form-data"' in page
    assert 'method="post"' in page
    assert 'action="https://stagingxpay.info/index.php?route=checkout/billing"' in page
    assert '<input type="hidden" name="payment" value="x+y/z==">' in page
    assert "O&quot;Brien &lt;b&gt;" in page
    assert ".submit()" in page
