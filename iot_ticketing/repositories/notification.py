"""
Notification repository over a record store.
"""
from typing import List

from iot_ticketing.domains.enums import Role
from iot_ticketing.domains.notifications import Notification
from iot_ticketing.interfaces.repositories.record_store import RecordStore


class NotificationRepository:
    """Access to the notification collection."""

    def __init__(self, store: RecordStore[Notification]):
        self.store = store

    def add(self, notification: Notification) -> str:
        self.store.insert_front(notification)
        return notification.id

    def get_for_receiver(self, role: Role) -> List[Notification]:
        """All notifications addressed to a role, newest first."""
        notifications = self.store.find({"receiver_role": role})
        notifications.sort(key=lambda n: n.timestamp, reverse=True)
        return notifications

    def get_unread_for_receiver(self, role: Role) -> List[Notification]:
        return [n for n in self.get_for_receiver(role) if not n.is_read]

    def count_unread(self, role: Role) -> int:
        return self.store.count({"receiver_role": role, "is_read": False})

    def mark_read_for_receiver(self, role: Role) -> int:
        """Flip is_read on every notification for a role. Returns the matched count."""
        return self.store.update_many({"receiver_role": role}, {"is_read": True})
