"""
Case library service.

Resolved tickets double as a library of historical cases that the analysis
report draws on. Cases can also be entered by hand.
"""
import logging
import time
from typing import List

from iot_ticketing.domains.enums import COORDINATING_ROLE, Priority, Role, TicketStatus
from iot_ticketing.domains.errors import ValidationError
from iot_ticketing.domains.tickets import Ticket, utc_now
from iot_ticketing.repositories.ticket import TicketRepository

# Setup logger for this module
logger = logging.getLogger(__name__)


class CaseLibraryService:
    """Service for browsing and recording historical cases."""

    def __init__(self, ticket_repository: TicketRepository):
        self.ticket_repository = ticket_repository

    def list_cases(self, limit: int = 10) -> List[Ticket]:
        return self.ticket_repository.get_resolved_cases(limit)

    def add_case(
        self,
        title: str,
        content: str,
        resolution: str,
        priority: Priority = Priority.MEDIUM,
        creator: Role = COORDINATING_ROLE,
    ) -> Ticket:
        """Record a resolved case that did not go through the workflow.

        Args:
            title: Case title
            content: Fault symptoms
            resolution: Final resolution, the part the analysis report quotes
            priority: Informational priority
            creator: Role recorded as the case author

        Returns:
            The stored case
        """
        for field, value in (("Title", title), ("Content", content), ("Resolution", resolution)):
            if not value or not value.strip():
                raise ValidationError(f"{field} must not be empty")

        stamp = int(time.time() * 1000)
        while self.ticket_repository.exists(f"CASE-{stamp}"):
            stamp += 1

        now = utc_now()
        case = Ticket(
            id=f"CASE-{stamp}",
            title=title,
            content=content,
            priority=priority,
            status=TicketStatus.RESOLVED,
            creator=creator,
            created_at=now,
            resolution=resolution,
            resolved_at=now,
        )
        self.ticket_repository.create(case)
        logger.info(f"Case {case.id} added to the case library")
        return case
