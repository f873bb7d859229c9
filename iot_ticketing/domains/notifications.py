"""
Notification domain models.

A notification is addressed to a role rather than a user, and carries a
denormalized copy of the ticket title taken when it was emitted.
"""
import datetime
import uuid

from pydantic import BaseModel, Field

from iot_ticketing.domains.enums import NotificationKind, Role
from iot_ticketing.domains.tickets import utc_now


class Notification(BaseModel):
    """Role-targeted notification model."""
    id: str = Field(
        default_factory=lambda: f"NOTIF-{uuid.uuid4().hex}",
        description="Unique identifier")
    receiver_role: Role = Field(..., description="Role the notification is addressed to")
    message: str = Field(..., description="Notification message")
    ticket_id: str = Field(..., description="ID of the linked ticket")
    ticket_title: str = Field(..., description="Ticket title at emission time")
    timestamp: datetime.datetime = Field(
        default_factory=utc_now, description="When the notification was emitted")
    is_read: bool = Field(False, description="Whether the receiver has read it")
    kind: NotificationKind = Field(
        NotificationKind.INFO, description="Presentation tag")
