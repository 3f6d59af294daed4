"""
Customer aggregation for a cafe.

Customers are not stored per cafe: they are derived from the stamp events
collected there. Each call recomputes the summaries from the full stamp set.
"""
import logging
from datetime import datetime, timedelta
from typing import Iterable

from app.core.clock import Clock
from app.domain.schemas import CustomerStats, CustomerSummary, StampEvent
from app.repositories.stamp import StampRepository

logger = logging.getLogger(__name__)

UNKNOWN_PHONE = "Unknown"


def aggregate_customers(events: Iterable[StampEvent]) -> list[CustomerSummary]:
    """Reduce stamp events for one cafe to one summary per customer.

    Name and phone are taken from the first event seen for a customer.
    Summaries are ordered by most recent visit first.
    """
    summaries: dict[str, CustomerSummary] = {}

    for event in events:
        existing = summaries.get(event.user_id)
        if existing is None:
            summaries[event.user_id] = CustomerSummary(
                user_id=event.user_id,
                user_name=event.user_name or None,
                user_phone=event.user_phone or UNKNOWN_PHONE,
                stamp_count=1,
                last_visit=event.stamped_at,
            )
            continue

        existing.stamp_count += 1
        if event.stamped_at > existing.last_visit:
            existing.last_visit = event.stamped_at

    return sorted(summaries.values(), key=lambda s: s.last_visit, reverse=True)


def summarize_customers(
    summaries: list[CustomerSummary],
    now: datetime,
    window_days: int = 7,
) -> CustomerStats:
    """Dashboard totals over aggregated customers.

    A customer is active this week when their last visit is strictly after
    ``now - window_days``.
    """
    cutoff = now - timedelta(days=window_days)
    return CustomerStats(
        total_customers=len(summaries),
        total_stamps=sum(s.stamp_count for s in summaries),
        active_this_week=sum(1 for s in summaries if s.last_visit > cutoff),
    )


def load_customers(
    cafe_id: str,
    clock: Clock,
    window_days: int = 7,
    repository=StampRepository,
) -> tuple[list[CustomerSummary], CustomerStats]:
    """Fetch a cafe's stamps and return its customer summaries and totals."""
    rows = repository.list_for_cafe(cafe_id)
    events = [StampEvent(**row) for row in rows]

    customers = aggregate_customers(events)
    stats = summarize_customers(customers, clock.now(), window_days)
    logger.info(f"Aggregated {len(events)} stamps into {len(customers)} customers for cafe {cafe_id}")
    return customers, stats
