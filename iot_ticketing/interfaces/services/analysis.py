from abc import ABC, abstractmethod

from iot_ticketing.domains.tickets import Ticket


class AnalysisService(ABC):
    """Interface for the ticket analysis collaborator."""

    @abstractmethod
    async def analyze(self, ticket: Ticket) -> str:
        """Produce a narrative report for a ticket.

        Args:
            ticket: Ticket with its accumulated context

        Returns:
            Report text

        Raises:
            CollaboratorError: If the report could not be produced
        """
        pass
