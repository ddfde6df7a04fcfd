from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, Field

from app.core.money import ZERO, Money


class Payout(BaseModel):
    id: str
    amount: Money = ZERO
    status: str
    date: datetime | None = None
    scheduled_date: datetime | None = None
    paid_date: datetime | None = None
    method: str
    currency_code: str
    period_start: datetime | None = None
    period_end: datetime | None = None


class UpcomingPayout(BaseModel):
    amount: Money
    date: datetime
    method: str


class EarningsResponse(BaseModel):
    period_start: date
    period_end: date
    total_bookings: int = 0
    total_nights: int = 0
    revenue: Money = ZERO
    adr: Money = ZERO
    occupancy_rate: float = 0
    upcoming_payout: UpcomingPayout | None = None
    payouts: list[Payout] = Field(default_factory=list)
