"""
Notification service implementation.

This service materializes role-targeted notifications as a side effect of
ticket transitions and answers read/unread queries per role.
"""
import logging
from typing import Iterable, List

from iot_ticketing.domains.enums import NotificationKind, Role
from iot_ticketing.domains.notifications import Notification
from iot_ticketing.interfaces.services.notification import (
    NotificationService as NotificationServiceInterface,
)
from iot_ticketing.repositories.notification import NotificationRepository

# Setup logger for this module
logger = logging.getLogger(__name__)


class NotificationService(NotificationServiceInterface):
    """Service for dispatching notifications to roles."""

    def __init__(self, notification_repository: NotificationRepository):
        """Initialize the notification service.

        Args:
            notification_repository: Repository for notification records
        """
        self.notification_repository = notification_repository

    def notify(
        self,
        role: Role,
        message: str,
        ticket_id: str,
        ticket_title: str,
        kind: NotificationKind = NotificationKind.INFO,
    ) -> Notification:
        notification = Notification(
            receiver_role=role,
            message=message,
            ticket_id=ticket_id,
            ticket_title=ticket_title,
            kind=kind,
        )
        self.notification_repository.add(notification)
        logger.debug(
            f"Notified {role.value} about ticket {ticket_id} ({kind.value})"
        )
        return notification

    def notify_many(
        self,
        roles: Iterable[Role],
        message: str,
        ticket_id: str,
        ticket_title: str,
        kind: NotificationKind = NotificationKind.INFO,
    ) -> List[Notification]:
        """Send the same notification to each role.

        Each role in the given collection receives exactly one record;
        repeated roles are notified once.
        """
        sent = []
        for role in dict.fromkeys(roles):
            sent.append(self.notify(role, message, ticket_id, ticket_title, kind))
        return sent

    def list_for(self, role: Role) -> List[Notification]:
        return self.notification_repository.get_for_receiver(role)

    def unread_count_for(self, role: Role) -> int:
        return self.notification_repository.count_unread(role)

    def mark_all_read(self, role: Role) -> int:
        updated = self.notification_repository.mark_read_for_receiver(role)
        logger.debug(f"Marked {updated} notifications read for {role.value}")
        return updated
