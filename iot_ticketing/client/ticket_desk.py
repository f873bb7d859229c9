"""
Simplified client interface for the IoT ticketing system.

This module provides a session-style API: one role is logged in at a time,
and every workflow operation is performed as that role.
"""

import datetime
import importlib.util
import json
from typing import Any, Dict, Iterable, List, Optional, Union

from iot_ticketing.domains.dashboard import DashboardReport
from iot_ticketing.domains.enums import Priority, Role, TicketTab
from iot_ticketing.domains.errors import AuthorizationError
from iot_ticketing.domains.notifications import Notification
from iot_ticketing.domains.tickets import Ticket
from iot_ticketing.domains.workflow import TicketAction
from iot_ticketing.factories.desk_factory import TicketDeskFactory


def load_config(config_path: str) -> Dict[str, Any]:
    """Load a JSON config file, or a Python file defining ``config``."""
    if config_path.endswith(".json"):
        with open(config_path, "r") as f:
            return json.load(f)

    spec = importlib.util.spec_from_file_location("config", config_path)
    config_module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(config_module)
    return config_module.config


class TicketDesk:
    """Client for working tickets as a single active role."""

    def __init__(self, config_path: str = None, config: Dict[str, Any] = None):
        """Initialize the ticket desk from config file or dictionary.

        Args:
            config_path: Path to configuration file (JSON or Python)
            config: Configuration dictionary
        """
        if config is None and not config_path:
            raise ValueError("Either config or config_path must be provided")
        if config_path:
            config = load_config(config_path)

        self.services = TicketDeskFactory.create_from_config(config)
        self._role: Optional[Role] = None

    @property
    def active_role(self) -> Optional[Role]:
        return self._role

    def login(self, role: Union[Role, str]) -> Role:
        self._role = Role(role)
        return self._role

    def logout(self) -> None:
        self._role = None

    def _require_role(self) -> Role:
        if self._role is None:
            raise AuthorizationError("No role is logged in")
        return self._role

    # Reads

    def tickets(
        self, tab: Optional[TicketTab] = None, search: str = "", newest_first: bool = True
    ) -> List[Ticket]:
        return self.services.ticket_repository.search(tab, search, newest_first)

    def ticket(self, ticket_id: str) -> Ticket:
        return self.services.lifecycle_service.get_ticket(ticket_id)

    def tab_counts(self) -> Dict[TicketTab, int]:
        return self.services.ticket_repository.count_by_tab()

    def actions(self, ticket_id: str) -> List[TicketAction]:
        return self.services.lifecycle_service.available_actions(
            ticket_id, self._require_role()
        )

    def dashboard(
        self, start: Optional[datetime.date] = None, end: Optional[datetime.date] = None
    ) -> DashboardReport:
        return self.services.dashboard_service.report(start, end)

    def cases(self, limit: int = 10) -> List[Ticket]:
        return self.services.case_library_service.list_cases(limit)

    # Notifications

    def notifications(self) -> List[Notification]:
        return self.services.notification_service.list_for(self._require_role())

    def unread_count(self) -> int:
        return self.services.notification_service.unread_count_for(self._require_role())

    def mark_all_read(self) -> int:
        return self.services.notification_service.mark_all_read(self._require_role())

    # Workflow

    def create_ticket(
        self, title: str, content: str, priority: Priority = Priority.MEDIUM
    ) -> Ticket:
        return self.services.lifecycle_service.create_ticket(
            self._require_role(), title, content, priority
        )

    def add_case(
        self, title: str, content: str, resolution: str, priority: Priority = Priority.MEDIUM
    ) -> Ticket:
        return self.services.case_library_service.add_case(
            title, content, resolution, priority
        )

    def dispatch(
        self, ticket_id: str, preliminary_judgment: str, teams: Iterable[Role]
    ) -> Ticket:
        return self.services.lifecycle_service.dispatch(
            ticket_id, self._require_role(), preliminary_judgment, teams
        )

    def reassign_teams(self, ticket_id: str, teams: Iterable[Role]) -> Ticket:
        return self.services.lifecycle_service.reassign_teams(
            ticket_id, self._require_role(), teams
        )

    def submit_diagnosis(self, ticket_id: str, content: str) -> Ticket:
        return self.services.lifecycle_service.submit_diagnosis(
            ticket_id, self._require_role(), content
        )

    async def generate_analysis(self, ticket_id: str, regenerate: bool = False) -> Ticket:
        return await self.services.lifecycle_service.generate_analysis(
            ticket_id, self._require_role(), regenerate
        )

    def save_analysis_draft(self, ticket_id: str, text: str) -> Ticket:
        return self.services.lifecycle_service.save_analysis_draft(
            ticket_id, self._require_role(), text
        )

    def submit_for_closure(self, ticket_id: str, text: Optional[str] = None) -> Ticket:
        return self.services.lifecycle_service.submit_for_closure(
            ticket_id, self._require_role(), text
        )

    def archive(self, ticket_id: str, resolution: str) -> Ticket:
        return self.services.lifecycle_service.archive(
            ticket_id, self._require_role(), resolution
        )

    def return_for_rework(self, ticket_id: str, reason: str) -> Ticket:
        return self.services.lifecycle_service.return_for_rework(
            ticket_id, self._require_role(), reason
        )
