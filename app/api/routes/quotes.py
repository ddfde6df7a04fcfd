from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, status
from supabase import Client

from app.api import deps
from app.core.config import Settings, get_settings
from app.crud.booking import get_booked_ranges
from app.crud.property import (
    PRICING_UNAVAILABLE,
    get_property_by_id,
    listing_from_row,
    pricing_profile_from_row,
)
from app.db.base import get_supabase
from app.schemas.quote import (
    AvailabilityResponse,
    BookingQuote,
    PropertyQuoteRequest,
    PropertyQuoteResponse,
    QuotePreviewRequest,
    StayRequest,
)
from app.services.availability import find_conflicts
from app.services.date_range import CHECKOUT_BEFORE_CHECKIN
from app.services.pricing import split_payment
from app.services.quote import assemble_quote

router = APIRouter(prefix="/v1.0", tags=["quotes"])


@router.post("/quotes/preview", response_model=BookingQuote)
async def preview_quote(
    payload: QuotePreviewRequest,
    today: date = Depends(deps.get_today),
):
    """Quote a stay against a pricing profile supplied by the caller."""
    return assemble_quote(
        payload.stay,
        payload.profile,
        today=today,
        allow_past=payload.allow_past,
    )


@router.post("/properties/{property_id}/quote", response_model=PropertyQuoteResponse)
async def quote_property_stay(
    payload: PropertyQuoteRequest,
    property_id: str = Depends(deps.validate_property_id),
    today: date = Depends(deps.get_today),
    settings: Settings = Depends(get_settings),
    client: Client = Depends(get_supabase),
):
    """Quote a stay using the stored pricing profile and current bookings."""
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
        allow_past=payload.allow_past,
        booked_ranges=booked_ranges,
    )
    schedule = None
    if quote.is_valid:
        schedule = split_payment(
            quote.total_amount, quote.check_in, deposit_ratio=settings.deposit_ratio
        )
    return PropertyQuoteResponse(
        property=listing_from_row(row),
        quote=quote,
        payment_schedule=schedule,
    )


@router.get("/properties/{property_id}/availability", response_model=AvailabilityResponse)
async def get_property_availability(
    check_in: date = Query(...),
    check_out: date = Query(...),
    property_id: str = Depends(deps.validate_property_id),
    client: Client = Depends(get_supabase),
):
    """Report whether the property is free for the whole window."""
    if check_out <= check_in:
        raise HTTPException(
            status_code=422,
            detail=CHECKOUT_BEFORE_CHECKIN,
        )
    if not await get_property_by_id(client, property_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Property not found")

    booked_ranges = await get_booked_ranges(client, property_id, check_in, check_out)
    conflicts = find_conflicts(check_in, check_out, booked_ranges)
    return AvailabilityResponse(
        property_id=property_id,
        check_in=check_in,
        check_out=check_out,
        available=not conflicts,
        conflicts=conflicts,
    )
