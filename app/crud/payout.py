from __future__ import annotations

from supabase import Client

RECENT_PAYOUT_LIMIT = 20


async def get_host_payouts(
    client: Client, host_id: str, limit: int = RECENT_PAYOUT_LIMIT
) -> list[dict]:
    """Most recent payouts for a host, latest scheduled date first."""
    response = (
        client.table("payouts")
        .select(
            "id, amount, status, scheduled_date, paid_date, created_at, "
            "method, currency, period_start, period_end"
        )
        .eq("host_id", host_id)
        .order("scheduled_date", desc=True)
        .limit(limit)
        .execute()
    )
    return response.data or []
