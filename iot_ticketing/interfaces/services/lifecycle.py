from abc import ABC, abstractmethod
from typing import Iterable, List, Optional

from iot_ticketing.domains.enums import Priority, Role
from iot_ticketing.domains.tickets import Ticket
from iot_ticketing.domains.workflow import TicketAction


class TicketLifecycleService(ABC):
    """Interface for the ticket lifecycle engine."""

    @abstractmethod
    def create_ticket(
        self, role: Role, title: str, content: str, priority: Priority = Priority.MEDIUM
    ) -> Ticket:
        """Open a new ticket."""
        pass

    @abstractmethod
    def available_actions(self, ticket_id: str, role: Role) -> List[TicketAction]:
        """Actions the role may perform on the ticket now."""
        pass

    @abstractmethod
    def dispatch(
        self, ticket_id: str, role: Role, preliminary_judgment: str, teams: Iterable[Role]
    ) -> Ticket:
        """Assign specialist teams and start processing."""
        pass

    @abstractmethod
    def reassign_teams(self, ticket_id: str, role: Role, teams: Iterable[Role]) -> Ticket:
        """Replace the assigned teams of a processing ticket."""
        pass

    @abstractmethod
    def submit_diagnosis(self, ticket_id: str, role: Role, content: str) -> Ticket:
        """Append a diagnosis from an assigned team."""
        pass

    @abstractmethod
    async def generate_analysis(
        self, ticket_id: str, role: Role, regenerate: bool = False
    ) -> Ticket:
        """Draft the consolidated analysis with the analysis collaborator."""
        pass

    @abstractmethod
    def save_analysis_draft(self, ticket_id: str, role: Role, text: str) -> Ticket:
        """Overwrite the analysis draft."""
        pass

    @abstractmethod
    def submit_for_closure(
        self, ticket_id: str, role: Role, text: Optional[str] = None
    ) -> Ticket:
        """Forward the analysis to the intake role for archiving."""
        pass

    @abstractmethod
    def archive(self, ticket_id: str, role: Role, resolution: str) -> Ticket:
        """Resolve the ticket with a final note."""
        pass

    @abstractmethod
    def return_for_rework(self, ticket_id: str, role: Role, reason: str) -> Ticket:
        """Send the ticket back to processing."""
        pass
