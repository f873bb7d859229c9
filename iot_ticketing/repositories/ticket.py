"""
Ticket repository over a record store.
"""
from typing import Dict, Iterable, List, Optional

from iot_ticketing.domains.enums import TicketStatus, TicketTab
from iot_ticketing.domains.errors import NotFoundError
from iot_ticketing.domains.tickets import Ticket
from iot_ticketing.interfaces.repositories.record_store import RecordStore


class TicketRepository:
    """Access to the ticket collection."""

    def __init__(self, store: RecordStore[Ticket]):
        """Initialize the repository.

        Args:
            store: Record store holding tickets
        """
        self.store = store

    def create(self, ticket: Ticket) -> str:
        """Insert a new ticket at the front of the collection and return its ID."""
        self.store.insert_front(ticket)
        return ticket.id

    def get_by_id(self, ticket_id: str) -> Ticket:
        """Get a ticket by ID.

        Raises:
            NotFoundError: If no ticket has this ID
        """
        ticket = self.store.get(ticket_id)
        if ticket is None:
            raise NotFoundError(f"Ticket {ticket_id} not found")
        return ticket

    def exists(self, ticket_id: str) -> bool:
        return self.store.get(ticket_id) is not None

    def save(self, ticket: Ticket) -> None:
        """Replace the stored ticket wholesale."""
        self.store.replace(ticket)

    def list_all(self) -> List[Ticket]:
        return self.store.list()

    def get_by_status(self, statuses: Iterable[TicketStatus]) -> List[Ticket]:
        wanted = set(statuses)
        return [t for t in self.store.list() if t.status in wanted]

    def search(
        self,
        tab: Optional[TicketTab] = None,
        text: str = "",
        newest_first: bool = True,
    ) -> List[Ticket]:
        """Filter tickets by list tab and free text, sorted by creation time.

        Args:
            tab: Optional tab whose statuses to include
            text: Case-insensitive text matched against title, ID and content
            newest_first: Sort direction on created_at

        Returns:
            Matching tickets
        """
        tickets = self.get_by_status(tab.statuses) if tab else self.store.list()

        needle = text.strip().lower()
        if needle:
            tickets = [
                t for t in tickets
                if needle in t.title.lower()
                or needle in t.id.lower()
                or needle in t.content.lower()
            ]

        tickets.sort(key=lambda t: t.created_at, reverse=newest_first)
        return tickets

    def count_by_tab(self) -> Dict[TicketTab, int]:
        tickets = self.store.list()
        return {
            tab: sum(1 for t in tickets if t.status in tab.statuses)
            for tab in TicketTab
        }

    def get_resolved_cases(self, limit: int = 10) -> List[Ticket]:
        """Resolved tickets in collection order, used as the case library."""
        return self.store.find({"status": TicketStatus.RESOLVED})[:limit]
