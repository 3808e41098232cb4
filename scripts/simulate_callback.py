"""Replay a processor callback against a running storefront.

Useful for checking the callback page against a staging backend without
going through the processor again.
"""

import argparse

import requests


def main() -> None:
    """Parse CLI args and request the callback page once."""

    parser = argparse.ArgumentParser(description="Send one processor callback to the storefront.")
    parser.add_argument("--base-url", default="http://localhost:3000")
    parser.add_argument("--payment", required=True, help="Encrypted payment blob as returned by the processor")
    parser.add_argument("--signature", required=True)
    parser.add_argument("--custom-fields", default=None)
    parser.add_argument("--cookie", default=None, help="Shopper session cookie to forward")
    args = parser.parse_args()

    params = {"payment": args.payment, "signature": args.signature}
    if args.custom_fields is not None:
        params["custom_fields"] = args.custom_fields
    headers = {"cookie": args.cookie} if args.cookie else {}

    resp = requests.get(f"{args.base_url.rstrip('/')}/payment-callback", params=params, headers=headers, timeout=60)
    outcome = "unknown"
    if "Payment Successful" in resp.text:
        outcome = "succeeded"
    elif "Payment Failed" in resp.text:
        outcome = "failed"
    print(f"status_code={resp.status_code} outcome={outcome}")


if __name__ == "__main__":
    main()
