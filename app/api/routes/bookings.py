import logging
from datetime import date, datetime

from fastapi import APIRouter, Depends, HTTPException, status
from supabase import Client

from app.api import deps
from app.core.config import Settings, get_settings
from app.core.money import to_decimal
from app.core.session import SessionContext
from app.crud.booking import get_booked_ranges, get_booking_by_id
from app.crud.property import (
    PRICING_UNAVAILABLE,
    get_property_by_id,
    pricing_profile_from_row,
)
from app.db.base import get_supabase
from app.schemas.booking import (
    BookingSubmission,
    BookingSubmissionResponse,
    RefundEstimateResponse,
)
from app.schemas.quote import StayRequest
from app.services.booking_backend import (
    BookingBackendClient,
    BookingBackendError,
    build_booking_payload,
)
from app.services.quote import assemble_quote
from app.services.refunds import (
    CANCELLABLE_STATUSES,
    DEFAULT_POLICY,
    REFUND_TIERS,
    estimate_refund,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1.0", tags=["bookings"])


@router.post(
    "/properties/{property_id}/bookings",
    response_model=BookingSubmissionResponse,
    status_code=status.HTTP_201_CREATED,
)
async def submit_booking(
    payload: BookingSubmission,
    property_id: str = Depends(deps.validate_property_id),
    session: SessionContext = Depends(deps.get_session),
    today: date = Depends(deps.get_today),
    settings: Settings = Depends(get_settings),
    client: Client = Depends(get_supabase),
    backend: BookingBackendClient = Depends(deps.get_booking_backend),
):
    """Re-quote the stay and forward it to the booking service when valid."""
    row = await get_property_by_id(client, property_id)
    if not row:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Property not found")

    profile = pricing_profile_from_row(row, settings)
    if profile is None:
        raise HTTPException(status_code=422, detail=PRICING_UNAVAILABLE)

    stay = StayRequest(
        property_id=property_id,
        check_in=payload.check_in,
        check_out=payload.check_out,
        guests=payload.guests,
    )
    booked_ranges = []
    if payload.check_out > payload.check_in:
        booked_ranges = await get_booked_ranges(
            client, property_id, payload.check_in, payload.check_out
        )
    quote = assemble_quote(
        stay,
        profile,
        today=today,
        booked_ranges=booked_ranges,
    )
    if not quote.is_valid:
        raise HTTPException(
            status_code=422,
            detail={
                "message": "Booking request is not valid",
                "validation_errors": list(quote.validation_errors),
            },
        )

    try:
        booking = await backend.submit(build_booking_payload(quote, payload, session), session)
    except BookingBackendError as exc:
        logger.warning(f"Booking submission for property {property_id} failed: {exc}")
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc))

    return BookingSubmissionResponse(booking=booking, quote=quote)


@router.get("/bookings/{booking_id}/refund-estimate", response_model=RefundEstimateResponse)
async def get_refund_estimate(
    booking_id: str,
    session: SessionContext = Depends(deps.get_session),
    now: datetime = Depends(deps.get_now),
    client: Client = Depends(get_supabase),
):
    """Estimate the refund the caller would receive by cancelling now."""
    booking = await get_booking_by_id(client, booking_id)
    if not booking:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Booking not found")

    if booking.get("guest_id") == session.user_id:
        cancelled_by = "guest"
    elif booking.get("host_id") == session.user_id:
        cancelled_by = "host"
    else:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Access denied")

    booking_status = str(booking.get("status") or "").lower()
    if booking_status not in CANCELLABLE_STATUSES:
        raise HTTPException(
            status_code=422,
            detail=f"Booking cannot be cancelled in {booking_status or 'unknown'} status",
        )

    policy = str(booking.get("cancellation_policy") or DEFAULT_POLICY).lower()
    if policy not in REFUND_TIERS:
        policy = DEFAULT_POLICY

    check_in = datetime.fromisoformat(str(booking["check_in"]))
    estimate = estimate_refund(
        to_decimal(booking.get("total_price")),
        policy,
        cancelled_by,
        check_in,
        now,
    )
    return RefundEstimateResponse(
        booking_id=booking_id,
        policy=policy,
        cancelled_by=cancelled_by,
        days_until_check_in=estimate.days_until_check_in,
        refund_percentage=estimate.refund_percentage,
        refund_amount=estimate.refund_amount,
    )
