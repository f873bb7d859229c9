"""
Factory for creating and wiring components of the IoT ticketing system.

This module handles the creation and dependency injection for all
services and components used in the system.
"""

import logging
from typing import Any, Dict

# Service imports
from iot_ticketing.services.analysis import AnalysisService
from iot_ticketing.services.case_library import CaseLibraryService
from iot_ticketing.services.dashboard import DashboardService
from iot_ticketing.services.lifecycle import TicketLifecycleService
from iot_ticketing.services.notification import NotificationService

# Repository imports
from iot_ticketing.repositories.memory_store import InMemoryRecordStore
from iot_ticketing.repositories.mongo_store import MongoRecordStore
from iot_ticketing.repositories.notification import NotificationRepository
from iot_ticketing.repositories.ticket import TicketRepository

# Adapter imports
from iot_ticketing.adapters.mongodb_adapter import MongoDBAdapter
from iot_ticketing.adapters.openai_adapter import OpenAIAdapter

# Domain imports
from iot_ticketing.domains.notifications import Notification
from iot_ticketing.domains.seed import demo_tickets
from iot_ticketing.domains.tickets import Ticket

# Setup logger for this module
logger = logging.getLogger(__name__)

DEFAULT_CASE_LIBRARY_SIZE = 5


class TicketDeskServices:
    """The wired services of one ticket desk. Owns its stores."""

    def __init__(
        self,
        ticket_repository: TicketRepository,
        notification_service: NotificationService,
        lifecycle_service: TicketLifecycleService,
        case_library_service: CaseLibraryService,
        dashboard_service: DashboardService,
    ):
        self.ticket_repository = ticket_repository
        self.notification_service = notification_service
        self.lifecycle_service = lifecycle_service
        self.case_library_service = case_library_service
        self.dashboard_service = dashboard_service


class TicketDeskFactory:
    """Factory for creating and wiring components of the ticketing system."""

    @staticmethod
    def create_from_config(config: Dict[str, Any]) -> TicketDeskServices:
        """Create the ticket desk from configuration.

        Args:
            config: Configuration dictionary

        Returns:
            Wired services
        """
        # Create stores
        if "mongo" in config:
            if "connection_string" not in config["mongo"]:
                raise ValueError("MongoDB connection string is required.")
            if "database" not in config["mongo"]:
                raise ValueError("MongoDB database name is required.")
            db_adapter = MongoDBAdapter(
                connection_string=config["mongo"]["connection_string"],
                database_name=config["mongo"]["database"],
            )
            ticket_store = MongoRecordStore(db_adapter, "tickets", Ticket)
            notification_store = MongoRecordStore(db_adapter, "notifications", Notification)
            logger.info("Using MongoDB record stores")
        else:
            ticket_store = InMemoryRecordStore()
            notification_store = InMemoryRecordStore()
            logger.info("Using in-memory record stores")

        ticket_repository = TicketRepository(ticket_store)
        notification_repository = NotificationRepository(notification_store)

        if config.get("seed_demo_data") and not ticket_store.list():
            for ticket in reversed(demo_tickets()):
                ticket_repository.create(ticket)
            logger.info("Seeded demo tickets")

        # Create the LLM adapter; without one the analysis runs offline
        llm_adapter = None
        llm_model = None
        if "openai" in config:
            if "api_key" not in config["openai"]:
                raise ValueError("OpenAI API key is required in config.")
            llm_model = config["openai"].get("model")
            logfire_api_key = None
            if "logfire" in config:
                if "api_key" not in config["logfire"]:
                    raise ValueError("Pydantic Logfire API key is required.")
                logfire_api_key = config["logfire"]["api_key"]
            llm_adapter = OpenAIAdapter(
                api_key=config["openai"]["api_key"],
                model=llm_model,
                logfire_api_key=logfire_api_key,
            )
            logger.info("Using OpenAI as LLM provider")
        else:
            logger.warning("No OpenAI config found, analysis runs in offline mode")

        # Create services
        notification_service = NotificationService(notification_repository)
        analysis_service = AnalysisService(
            ticket_repository=ticket_repository,
            llm_provider=llm_adapter,
            case_library_size=config.get("case_library_size", DEFAULT_CASE_LIBRARY_SIZE),
            model=llm_model,
        )
        lifecycle_service = TicketLifecycleService(
            ticket_repository=ticket_repository,
            notification_service=notification_service,
            analysis_service=analysis_service,
        )

        return TicketDeskServices(
            ticket_repository=ticket_repository,
            notification_service=notification_service,
            lifecycle_service=lifecycle_service,
            case_library_service=CaseLibraryService(ticket_repository),
            dashboard_service=DashboardService(ticket_repository),
        )
