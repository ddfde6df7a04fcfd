import calendar
from datetime import date, datetime

from fastapi import APIRouter, Depends
from supabase import Client

from app.api import deps
from app.core.config import Settings, get_settings
from app.core.session import SessionContext
from app.crud.booking import get_host_bookings
from app.crud.payout import get_host_payouts
from app.crud.property import count_published_properties
from app.db.base import get_supabase
from app.schemas.earnings import EarningsResponse
from app.services.earnings import next_scheduled_payout, payout_from_row, summarize_earnings

router = APIRouter(prefix="/v1.0/host", tags=["earnings"])


@router.get("/earnings", response_model=EarningsResponse)
async def get_month_to_date_earnings(
    session: SessionContext = Depends(deps.get_session),
    today: date = Depends(deps.get_today),
    now: datetime = Depends(deps.get_now),
    settings: Settings = Depends(get_settings),
    client: Client = Depends(get_supabase),
):
    """Month-to-date revenue, ADR and occupancy for the calling host, with recent payouts."""
    period_start = today.replace(day=1)
    period_end = today.replace(day=calendar.monthrange(today.year, today.month)[1])

    bookings = await get_host_bookings(client, session.user_id, period_start, period_end)
    property_count = await count_published_properties(client, session.user_id)
    payouts = [
        payout_from_row(row, settings.default_currency_code)
        for row in await get_host_payouts(client, session.user_id)
    ]

    summary = summarize_earnings(bookings, property_count, days_elapsed=today.day)
    return EarningsResponse(
        period_start=period_start,
        period_end=period_end,
        upcoming_payout=next_scheduled_payout(payouts, now),
        payouts=payouts,
        **summary,
    )
