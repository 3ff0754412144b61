#!/usr/bin/env python3
"""Walk the WhatsApp checkout flow against a running storefront API.

Flow:
1) List catalog products
2) Add the first N products to a fresh cart, picking the first size/color
3) Print the cart totals and the generated wa.me link
"""

from __future__ import annotations

import argparse
import sys
from typing import Any, Dict, List

import httpx


DEFAULT_BASE_URL = "http://127.0.0.1:8000"


class ApiError(RuntimeError):
    pass


def _json_or_text(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text


def _require_success(response: httpx.Response, context: str) -> Dict[str, Any]:
    payload = _json_or_text(response)
    if response.status_code >= 400:
        raise ApiError(f"{context} failed ({response.status_code}): {payload}")
    if not isinstance(payload, dict):
        raise ApiError(f"{context} returned non-JSON payload: {payload}")
    if payload.get("success") is False:
        raise ApiError(f"{context} returned success=false: {payload}")
    return payload


def list_products(client: httpx.Client, limit: int) -> List[Dict[str, Any]]:
    resp = client.get("/api/v1/products", params={"limit": limit})
    return _require_success(resp, "List products").get("data") or []


def add_product(client: httpx.Client, product: Dict[str, Any], quantity: int) -> Dict[str, Any]:
    body = {"product_id": product["id"], "quantity": quantity}
    if product.get("sizes"):
        body["selected_size"] = product["sizes"][0]
    if product.get("colors"):
        body["selected_color"] = product["colors"][0]

    resp = client.post("/api/v1/cart/items", json=body)
    return _require_success(resp, f"Add product {product['id']}")["data"]


def main() -> int:
    parser = argparse.ArgumentParser(description="Run a WhatsApp checkout against the API.")
    parser.add_argument("--base-url", default=DEFAULT_BASE_URL)
    parser.add_argument("--products", type=int, default=2, help="How many products to add")
    parser.add_argument("--quantity", type=int, default=1)
    args = parser.parse_args()

    with httpx.Client(base_url=args.base_url.rstrip("/"), timeout=30.0, follow_redirects=True) as client:
        products = list_products(client, args.products)
        if not products:
            raise ApiError("Catalog is empty; run scripts/seed_catalog.py first")

        for product in products:
            cart = add_product(client, product, args.quantity)
            print(f"- added {product['name']} (cart now {cart['total_items']} items)")

        resp = client.get("/api/v1/checkout/whatsapp")
        checkout = _require_success(resp, "WhatsApp checkout")["data"]

    totals = checkout["totals"]
    print(f"Subtotal: {totals['subtotal']}  Shipping: {totals['shipping_cost']}  Total: {totals['total']}")
    print()
    print(checkout["message"])
    print()
    print(checkout["whatsapp_url"])
    return 0


if __name__ == "__main__":
    try:
        raise SystemExit(main())
    except (ApiError, httpx.HTTPError) as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        raise SystemExit(1)
