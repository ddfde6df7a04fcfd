"""Client for the external booking service that persists reservations.

Quotes are computed locally; only a valid quote is forwarded here, together with
the guest's contact details and the caller's bearer token.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from app.core.money import round_money
from app.core.session import SessionContext
from app.schemas.booking import BookingSubmission
from app.schemas.quote import BookingQuote

logger = logging.getLogger(__name__)


class BookingBackendError(RuntimeError):
    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


def build_booking_payload(
    quote: BookingQuote,
    submission: BookingSubmission,
    session: SessionContext,
) -> dict[str, Any]:
    guests = submission.guests
    return {
        "propertyId": quote.property_id,
        "guestId": session.user_id,
        "checkIn": quote.check_in.isoformat(),
        "checkOut": quote.check_out.isoformat(),
        "guests": guests.countable,
        "adults": guests.adults,
        "children": guests.children,
        "infants": guests.infants,
        "numberOfNights": quote.nights,
        "subtotal": float(round_money(quote.base_amount)),
        "cleaningFee": float(round_money(quote.cleaning_fee)),
        "serviceFee": float(round_money(quote.service_fee_amount)),
        "taxAmount": float(round_money(quote.tax_amount)),
        "totalPrice": float(round_money(quote.total_amount)),
        "currency": quote.currency_code,
        "guestFirstName": submission.guest.first_name,
        "guestLastName": submission.guest.last_name,
        "guestEmail": submission.guest.email,
        "guestPhone": submission.guest.phone,
        "specialRequests": submission.special_requests,
    }


class BookingBackendClient:
    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    async def submit(self, payload: dict[str, Any], session: SessionContext) -> dict[str, Any]:
        headers = {"Accept": "application/json", **session.auth_headers()}
        async with httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(self.timeout),
            transport=self._transport,
        ) as client:
            try:
                response = await client.post("/bookings", json=payload, headers=headers)
            except httpx.HTTPError as exc:
                logger.warning(f"Booking service request failed: {exc}")
                raise BookingBackendError(f"Booking service request failed: {exc}") from exc

        if response.status_code >= 400:
            raise BookingBackendError(
                f"Booking service rejected the booking (HTTP {response.status_code}).",
                status_code=response.status_code,
            )

        try:
            body = response.json()
        except ValueError as exc:
            raise BookingBackendError("Booking service returned a non-JSON response.") from exc

        # The service wraps payloads as {"success": ..., "data": {...}}.
        if isinstance(body, dict) and isinstance(body.get("data"), dict):
            body = body["data"]
        if not isinstance(body, dict):
            raise BookingBackendError("Booking service returned an unexpected payload.")

        logger.info(
            f"Submitted booking for property {payload.get('propertyId')} "
            f"as user {session.user_id}"
        )
        return body
