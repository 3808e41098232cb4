"""Post a saved checkout handoff to the storefront and keep the redirect page.

The handoff JSON is what the backend returns from order creation
(`{"url": ..., "data": {...}}`). The rendered page and a timestamped request
record are written next to each other for inspection.
"""

import argparse
import json
from datetime import datetime, timezone
from pathlib import Path

import requests


def main() -> None:
    """Parse CLI args, submit one handoff, write the artifacts."""

    parser = argparse.ArgumentParser(description="Submit a checkout handoff to the storefront.")
    parser.add_argument("--base-url", default="http://localhost:3000")
    parser.add_argument("--file", required=True, help="Path to handoff JSON")
    parser.add_argument("--out-dir", default=".")
    args = parser.parse_args()

    handoff = json.loads(Path(args.file).read_text())
    resp = requests.post(f"{args.base_url.rstrip('/')}/checkout/redirect", json=handoff, timeout=10)

    stamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")
    out_dir = Path(args.out_dir)
    record = {
        "timestamp": stamp,
        "endpoint": handoff.get("url"),
        "fields": sorted(handoff.get("data", {})),
        "status_code": resp.status_code,
    }
    if resp.status_code >= 400:
        record["response"] = resp.json()
    else:
        (out_dir / f"webxpay-redirect-{stamp}.html").write_text(resp.text)
    (out_dir / f"webxpay-request-{stamp}.json").write_text(json.dumps(record, indent=2))
    print(f"status_code={resp.status_code} record=webxpay-request-{stamp}.json")


if __name__ == "__main__":
    main()
