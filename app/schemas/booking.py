from __future__ import annotations

import re
from datetime import date
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

from app.core.money import Money
from app.schemas.quote import BookingQuote, GuestCount

CancellationPolicy = Literal["flexible", "moderate", "strict"]
CancelledBy = Literal["guest", "host"]

NAME_PATTERN = re.compile(r"^[^\W\d_]+(?:[ '\-][^\W\d_]+)*$")
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class GuestContact(BaseModel):
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., max_length=320)
    phone: str = Field(..., min_length=6, max_length=64)

    @field_validator("first_name", "last_name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        normalized = value.strip()
        if not NAME_PATTERN.match(normalized):
            raise ValueError("name must contain letters only")
        return normalized

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        normalized = value.strip().lower()
        if not EMAIL_PATTERN.match(normalized):
            raise ValueError("email address is not valid")
        return normalized

    @field_validator("phone")
    @classmethod
    def normalize_phone(cls, value: str) -> str:
        return value.strip()


class BookingSubmission(BaseModel):
    check_in: date
    check_out: date
    guests: GuestCount
    guest: GuestContact
    special_requests: str | None = Field(None, max_length=2000)

    @field_validator("special_requests")
    @classmethod
    def normalize_special_requests(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return value.strip() or None


class BookingSubmissionResponse(BaseModel):
    booking: dict[str, Any]
    quote: BookingQuote


class RefundEstimateResponse(BaseModel):
    booking_id: str
    policy: CancellationPolicy
    cancelled_by: CancelledBy
    days_until_check_in: int
    refund_percentage: int
    refund_amount: Money
