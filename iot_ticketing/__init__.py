"""
IoT Ticketing - fault-complaint tickets worked through a multi-role workflow.

This package tracks IoT fault tickets from intake through specialist
diagnosis and analysis to archiving, and notifies the responsible roles
at every step.
"""

# Client interface (main entry point)
from iot_ticketing.client.ticket_desk import TicketDesk

# Factory for wiring the services
from iot_ticketing.factories.desk_factory import TicketDeskFactory, TicketDeskServices

# Domain types most callers need
from iot_ticketing.domains.enums import Role, TicketStatus, Priority, NotificationKind, TicketTab
from iot_ticketing.domains.workflow import TicketAction

# Package metadata
__all__ = [
    # Main client interface
    "TicketDesk",
    # Factories
    "TicketDeskFactory",
    "TicketDeskServices",
    # Domain
    "Role",
    "TicketStatus",
    "Priority",
    "NotificationKind",
    "TicketTab",
    "TicketAction",
]
