"""
Domain models for the IoT ticketing system.

This package contains the core domain models that represent the
business objects and value types in the system.
"""

from iot_ticketing.domains.enums import (
    Role,
    TicketStatus,
    Priority,
    NotificationKind,
    TicketTab,
    INTAKE_ROLE,
    COORDINATING_ROLE,
    SPECIALIST_TEAMS,
)

from iot_ticketing.domains.tickets import Diagnosis, Ticket

from iot_ticketing.domains.notifications import Notification

from iot_ticketing.domains.workflow import TicketAction

from iot_ticketing.domains.dashboard import DashboardStats, DashboardReport

from iot_ticketing.domains.errors import (
    TicketingError,
    ValidationError,
    AuthorizationError,
    NotFoundError,
    DuplicateIdError,
    CollaboratorError,
)

# Version of the domain model
__version__ = '0.1.0'
