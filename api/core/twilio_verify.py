"""
Twilio Verify HTTP client helpers.

Used endpoints:
- POST /v2/Services/{sid}/Verifications      -> {"sid": "...", "status": "pending", ...}
- POST /v2/Services/{sid}/VerificationCheck  -> {"status": "approved" | "pending", ...}

Both take form-encoded bodies and HTTP basic auth (account SID + auth token).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import httpx

DEFAULT_BASE_URL = "https://verify.twilio.com"


# Provider failures are explicit and separable from other runtime errors.
class TwilioVerifyError(RuntimeError):
    pass


@dataclass(frozen=True)
class VerifyCredentials:
    account_sid: str
    auth_token: str
    service_sid: str
    base_url: str = DEFAULT_BASE_URL


def _normalize_base_url(base_url: str) -> str:
    base_url = (base_url or "").strip()
    if not base_url:
        raise TwilioVerifyError("Verify base URL is empty.")
    return base_url.rstrip("/")


def _check_credentials(creds: VerifyCredentials) -> None:
    if not creds.account_sid or not creds.auth_token or not creds.service_sid:
        raise TwilioVerifyError("Twilio Verify credentials are not configured.")


async def _post(
    creds: VerifyCredentials,
    path: str,
    form: dict[str, str],
    *,
    timeout_s: float,
    transport: httpx.AsyncBaseTransport | None,
) -> dict[str, Any]:
    _check_credentials(creds)
    base_url = _normalize_base_url(creds.base_url)
    url = f"/v2/Services/{creds.service_sid}/{path}"

    try:
        async with httpx.AsyncClient(
            base_url=base_url,
            auth=(creds.account_sid, creds.auth_token),
            timeout=timeout_s,
            transport=transport,
        ) as client:
            resp = await client.post(url, data=form)
    except httpx.HTTPError as exc:
        raise TwilioVerifyError(f"Twilio Verify request failed: {exc}") from exc

    if resp.status_code not in (200, 201):
        # Avoid dumping huge bodies; include a small snippet.
        body = resp.text[:500]
        raise TwilioVerifyError(f"Twilio Verify {path} failed: {resp.status_code} {body}")

    try:
        data = resp.json()
    except ValueError as exc:
        raise TwilioVerifyError(f"Twilio Verify {path} returned a non-JSON body.") from exc
    if not isinstance(data, dict):
        raise TwilioVerifyError(f"Twilio Verify {path} returned an unexpected payload.")
    return data


async def start_verification(
    creds: VerifyCredentials,
    *,
    to: str,
    channel: str = "sms",
    timeout_s: float = 30.0,
    transport: httpx.AsyncBaseTransport | None = None,
) -> str:
    """
    Ask the provider to send a one-time code to `to`. Returns the verification status.
    """
    data = await _post(
        creds,
        "Verifications",
        {"To": to, "Channel": channel},
        timeout_s=timeout_s,
        transport=transport,
    )
    return str(data.get("status") or "")


async def check_verification(
    creds: VerifyCredentials,
    *,
    to: str,
    code: str,
    timeout_s: float = 30.0,
    transport: httpx.AsyncBaseTransport | None = None,
) -> bool:
    """
    Return True when the provider approves `code` for `to`.
    """
    data = await _post(
        creds,
        "VerificationCheck",
        {"To": to, "Code": code},
        timeout_s=timeout_s,
        transport=transport,
    )
    return str(data.get("status") or "").lower() == "approved"
