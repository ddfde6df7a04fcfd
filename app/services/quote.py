"""Booking quote assembly.

A quote is the priced, validated preview of a prospective stay. Every problem
with the request is collected so the caller can show them together, and the
price breakdown is filled in whenever the dates allow it, even when the quote
is invalid for another reason.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date

from app.schemas.quote import (
    BookedRange,
    BookingQuote,
    PriceBreakdown,
    PropertyPricingProfile,
    StayRequest,
)
from app.services.availability import NOT_AVAILABLE, find_conflicts
from app.services.capacity import check_capacity
from app.services.date_range import validate_date_range, validate_stay_length
from app.services.pricing import compose_price


def assemble_quote(
    request: StayRequest,
    profile: PropertyPricingProfile,
    *,
    today: date,
    allow_past: bool = False,
    booked_ranges: Iterable[BookedRange] = (),
) -> BookingQuote:
    date_result = validate_date_range(
        request.check_in,
        request.check_out,
        today=today,
        allow_past=allow_past,
    )
    errors = list(date_result.errors)

    breakdown = PriceBreakdown()
    if date_result.nights > 0:
        breakdown = compose_price(date_result.nights, profile)
        errors.extend(
            validate_stay_length(
                date_result.nights, profile.minimum_stay, profile.maximum_stay
            )
        )
        if find_conflicts(request.check_in, request.check_out, booked_ranges):
            errors.append(NOT_AVAILABLE)

    errors.extend(check_capacity(request.guests, profile.max_guests))

    return BookingQuote(
        property_id=request.property_id,
        check_in=request.check_in,
        check_out=request.check_out,
        nights=date_result.nights,
        base_amount=breakdown.base_amount,
        cleaning_fee=breakdown.cleaning_fee,
        service_fee_amount=breakdown.service_fee_amount,
        tax_amount=breakdown.tax_amount,
        total_amount=breakdown.total_amount,
        currency_code=profile.currency_code,
        is_valid=not errors,
        validation_errors=tuple(errors),
    )
