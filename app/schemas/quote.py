from __future__ import annotations

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.core.money import ZERO, Money


class GuestCount(BaseModel):
    model_config = ConfigDict(frozen=True)

    adults: int = Field(..., ge=0)
    children: int = Field(0, ge=0)
    infants: int = Field(0, ge=0)

    @property
    def countable(self) -> int:
        """Occupancy measured against capacity; infants do not count."""
        return self.adults + self.children


class StayRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    property_id: str = Field(..., min_length=1)
    check_in: date
    check_out: date
    guests: GuestCount


class PropertyPricingProfile(BaseModel):
    model_config = ConfigDict(frozen=True)

    nightly_rate: Money = Field(..., ge=0)
    cleaning_fee: Money = Field(ZERO, ge=0)
    service_fee_rate: Decimal = Field(Decimal("0.10"), ge=0)
    tax_rate: Decimal = Field(Decimal("0.12"), ge=0)
    max_guests: int = Field(..., ge=1)
    minimum_stay: int = Field(1, ge=1)
    maximum_stay: int | None = Field(None, ge=1)
    currency_code: str = Field("QAR", min_length=3, max_length=3)

    @field_validator("currency_code")
    @classmethod
    def upper_currency(cls, value: str) -> str:
        return value.strip().upper()


class PriceBreakdown(BaseModel):
    model_config = ConfigDict(frozen=True)

    base_amount: Money = ZERO
    cleaning_fee: Money = ZERO
    service_fee_amount: Money = ZERO
    tax_amount: Money = ZERO
    total_amount: Money = ZERO


class BookedRange(BaseModel):
    model_config = ConfigDict(frozen=True)

    booking_id: str | None = None
    check_in: date
    check_out: date


class BookingQuote(BaseModel):
    model_config = ConfigDict(frozen=True)

    property_id: str
    check_in: date
    check_out: date
    nights: int = Field(0, ge=0)
    base_amount: Money = ZERO
    cleaning_fee: Money = ZERO
    service_fee_amount: Money = ZERO
    tax_amount: Money = ZERO
    total_amount: Money = ZERO
    currency_code: str
    is_valid: bool
    validation_errors: tuple[str, ...] = ()


class PaymentSchedule(BaseModel):
    model_config = ConfigDict(frozen=True)

    due_now: Money
    due_later: Money
    due_later_on: date


class QuotePreviewRequest(BaseModel):
    stay: StayRequest
    profile: PropertyPricingProfile
    allow_past: bool = False


class PropertyQuoteRequest(BaseModel):
    check_in: date
    check_out: date
    guests: GuestCount
    allow_past: bool = False


class PropertyListing(BaseModel):
    id: str
    title: str = ""
    city: str | None = None
    country: str | None = None
    amenities: list[str] = Field(default_factory=list)
    photos: list[str] = Field(default_factory=list)
    cover_photo: str | None = None


class PropertyQuoteResponse(BaseModel):
    property: PropertyListing
    quote: BookingQuote
    payment_schedule: PaymentSchedule | None = None


class AvailabilityResponse(BaseModel):
    property_id: str
    check_in: date
    check_out: date
    available: bool
    conflicts: list[BookedRange] = Field(default_factory=list)
