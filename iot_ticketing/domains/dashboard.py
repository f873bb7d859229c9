"""
Dashboard summary models.
"""
from typing import Dict, List

from pydantic import BaseModel, Field

from iot_ticketing.domains.enums import Priority, TicketStatus
from iot_ticketing.domains.tickets import Ticket


class DashboardStats(BaseModel):
    """Headline ticket counts for a reporting window."""
    today_count: int = 0
    total_in_period: int = 0
    processing_count: int = 0
    resolved_count: int = 0
    resolution_rate: int = Field(0, description="Resolved share of the window, in percent")


class DashboardReport(BaseModel):
    """Stats plus breakdowns and the window's tickets, newest first."""
    stats: DashboardStats
    status_breakdown: Dict[TicketStatus, int] = Field(default_factory=dict)
    priority_breakdown: Dict[Priority, int] = Field(default_factory=dict)
    recent_tickets: List[Ticket] = Field(default_factory=list)
