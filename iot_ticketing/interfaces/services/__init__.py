from iot_ticketing.interfaces.services.analysis import AnalysisService
from iot_ticketing.interfaces.services.lifecycle import TicketLifecycleService
from iot_ticketing.interfaces.services.notification import NotificationService

__all__ = ["AnalysisService", "TicketLifecycleService", "NotificationService"]
