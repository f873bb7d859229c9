"""
Dashboard service computing ticket statistics over a date window.
"""
import datetime
from typing import Optional

from iot_ticketing.domains.dashboard import DashboardReport, DashboardStats
from iot_ticketing.domains.enums import Priority, TicketStatus
from iot_ticketing.repositories.ticket import TicketRepository

DEFAULT_WINDOW_DAYS = 30


class DashboardService:
    """Service for summarizing tickets for the dashboard."""

    def __init__(self, ticket_repository: TicketRepository):
        self.ticket_repository = ticket_repository

    def report(
        self,
        start: Optional[datetime.date] = None,
        end: Optional[datetime.date] = None,
        now: Optional[datetime.datetime] = None,
    ) -> DashboardReport:
        """Build the dashboard report.

        Args:
            start: First day of the window, defaults to 30 days before today
            end: Last day of the window, inclusive, defaults to today
            now: Reference time, defaults to the current local time

        Returns:
            Stats, status and priority breakdowns, and the window's tickets
        """
        now = now or datetime.datetime.now().astimezone()
        tz = now.tzinfo
        end = end or now.date()
        start = start or (now.date() - datetime.timedelta(days=DEFAULT_WINDOW_DAYS))

        window_start = datetime.datetime.combine(start, datetime.time.min, tzinfo=tz)
        window_end = datetime.datetime.combine(end, datetime.time.max, tzinfo=tz)
        today_start = datetime.datetime.combine(now.date(), datetime.time.min, tzinfo=tz)

        tickets = self.ticket_repository.list_all()
        in_window = [t for t in tickets if window_start <= t.created_at <= window_end]

        processing = [
            t for t in in_window
            if t.status in (TicketStatus.PROCESSING, TicketStatus.PENDING_CLOSURE)
        ]
        resolved = [t for t in in_window if t.status == TicketStatus.RESOLVED]
        rate = round(len(resolved) / len(in_window) * 100) if in_window else 0

        stats = DashboardStats(
            today_count=sum(1 for t in tickets if t.created_at >= today_start),
            total_in_period=len(in_window),
            processing_count=len(processing),
            resolved_count=len(resolved),
            resolution_rate=rate,
        )
        return DashboardReport(
            stats=stats,
            status_breakdown={
                s: sum(1 for t in in_window if t.status == s) for s in TicketStatus
            },
            priority_breakdown={
                p: sum(1 for t in in_window if t.priority == p) for p in Priority
            },
            recent_tickets=sorted(in_window, key=lambda t: t.created_at, reverse=True),
        )
