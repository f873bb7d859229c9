"""
Shared fixtures: a lifecycle service wired to fresh in-memory stores.
"""
import pytest
from unittest.mock import AsyncMock

from iot_ticketing.domains import Priority, Role, Ticket
from iot_ticketing.interfaces.services.analysis import AnalysisService
from iot_ticketing.repositories.memory_store import InMemoryRecordStore
from iot_ticketing.repositories.notification import NotificationRepository
from iot_ticketing.repositories.ticket import TicketRepository
from iot_ticketing.services.lifecycle import TicketLifecycleService
from iot_ticketing.services.notification import NotificationService


@pytest.fixture
def ticket_repository():
    return TicketRepository(InMemoryRecordStore())


@pytest.fixture
def notification_repository():
    return NotificationRepository(InMemoryRecordStore())


@pytest.fixture
def notification_service(notification_repository):
    return NotificationService(notification_repository)


@pytest.fixture
def mock_analysis_service():
    """Analysis collaborator returning a fixed report."""
    service = AsyncMock(spec=AnalysisService)
    service.analyze.return_value = "综合分析报告：DNN参数配置错误。"
    return service


@pytest.fixture
def lifecycle(ticket_repository, notification_service, mock_analysis_service):
    return TicketLifecycleService(
        ticket_repository=ticket_repository,
        notification_service=notification_service,
        analysis_service=mock_analysis_service,
    )


@pytest.fixture
def pending_ticket(ticket_repository):
    ticket = Ticket(
        id="TKT-20240301-001",
        title="智能水表批量掉线",
        content="高新园区智能水表大面积无法上报数据。",
        priority=Priority.HIGH,
        creator=Role.FRONT_SUPPORT,
    )
    ticket_repository.create(ticket)
    return ticket


@pytest.fixture
def processing_ticket(lifecycle, pending_ticket):
    """Ticket dispatched to core network and network optimization."""
    return lifecycle.dispatch(
        pending_ticket.id, Role.CRT, "怀疑核心网链路问题", [Role.CORE_NET, Role.NET_OPT]
    )


@pytest.fixture
def closure_ticket(lifecycle, processing_ticket):
    """Ticket with one diagnosis and a submitted analysis."""
    lifecycle.submit_diagnosis(processing_ticket.id, Role.CORE_NET, "HSS数据正常")
    return lifecycle.submit_for_closure(processing_ticket.id, Role.CRT, "建议核查PGW配置")
