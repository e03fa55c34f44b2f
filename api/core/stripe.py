"""
Stripe HTTP client helpers.

Used endpoints:
- POST /v1/charges  -> {"id": "ch_...", "status": "succeeded", ...}

Stripe expects form-encoded bodies and authenticates with the secret key as
a bearer token. Amounts are integers in the currency's smallest unit.
"""

from __future__ import annotations

import httpx

from core import settings


# Payment failures are explicit and separable from other runtime errors.
class StripeError(RuntimeError):
    pass


def _normalize_base_url(base_url: str) -> str:
    base_url = (base_url or "").strip()
    if not base_url:
        raise StripeError("STRIPE_API_BASE is empty.")
    return base_url.rstrip("/")


def _error_message(resp: httpx.Response) -> str:
    try:
        data = resp.json()
    except ValueError:
        return resp.text[:500]
    error = data.get("error") if isinstance(data, dict) else None
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    return resp.text[:500]


async def create_charge(
    *,
    amount: int,
    currency: str,
    description: str,
    source: str,
    api_key: str | None = None,
    base_url: str | None = None,
    timeout_s: float = 30.0,
    transport: httpx.AsyncBaseTransport | None = None,
) -> str:
    """
    Charge `source` (a Checkout token) and return the Stripe charge id.
    """
    api_key = (api_key if api_key is not None else settings.stripe_secret_key()).strip()
    if not api_key:
        raise StripeError("Stripe secret key is not configured.")
    if amount <= 0:
        raise StripeError(f"Invalid charge amount: {amount}")
    source = (source or "").strip()
    if not source:
        raise StripeError("Payment source token is empty.")

    base_url = _normalize_base_url(base_url if base_url is not None else settings.stripe_api_base())
    form = {
        "amount": str(amount),
        "currency": currency,
        "description": description,
        "source": source,
    }

    try:
        async with httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout_s,
            headers={"Authorization": f"Bearer {api_key}"},
            transport=transport,
        ) as client:
            resp = await client.post("/v1/charges", data=form)
    except httpx.HTTPError as exc:
        raise StripeError(f"Stripe request failed: {exc}") from exc

    if resp.status_code != 200:
        raise StripeError(f"Stripe charge failed: {resp.status_code} {_error_message(resp)}")

    try:
        data = resp.json()
    except ValueError as exc:
        raise StripeError("Stripe returned a non-JSON response.") from exc
    if not isinstance(data, dict):
        raise StripeError("Stripe returned an unexpected response.")
    charge_id = data.get("id")
    if not isinstance(charge_id, str) or not charge_id:
        raise StripeError("Stripe returned no charge id.")
    return charge_id
