from abc import ABC, abstractmethod
from typing import Iterable, List

from iot_ticketing.domains.enums import NotificationKind, Role
from iot_ticketing.domains.notifications import Notification


class NotificationService(ABC):
    """Interface for role-targeted notification dispatch."""

    @abstractmethod
    def notify(
        self,
        role: Role,
        message: str,
        ticket_id: str,
        ticket_title: str,
        kind: NotificationKind = NotificationKind.INFO,
    ) -> Notification:
        """Emit one unread notification to a role."""
        pass

    @abstractmethod
    def notify_many(
        self,
        roles: Iterable[Role],
        message: str,
        ticket_id: str,
        ticket_title: str,
        kind: NotificationKind = NotificationKind.INFO,
    ) -> List[Notification]:
        """Emit one notification to each role."""
        pass

    @abstractmethod
    def list_for(self, role: Role) -> List[Notification]:
        """All notifications for a role, newest first."""
        pass

    @abstractmethod
    def unread_count_for(self, role: Role) -> int:
        """Number of unread notifications for a role."""
        pass

    @abstractmethod
    def mark_all_read(self, role: Role) -> int:
        """Mark every notification for a role as read."""
        pass
