"""
Common enumerations used across the IoT ticketing system.
"""
from enum import Enum
from typing import Dict, FrozenSet, List


class Role(str, Enum):
    """Identities that can act on a ticket. One is active per session."""
    FRONT_SUPPORT = "front_support"
    CRT = "crt"
    CORE_NET = "core_network"
    NET_OPT = "network_optimization"
    TRANS = "transport"
    CORP = "enterprise_line"

    @property
    def label(self) -> str:
        return _ROLE_LABELS[self]

    @property
    def is_specialist(self) -> bool:
        return self in SPECIALIST_TEAMS


class TicketStatus(str, Enum):
    """States of the ticket lifecycle."""
    PENDING = "pending"
    PROCESSING = "processing"
    PENDING_CLOSURE = "pending_closure"
    RESOLVED = "resolved"

    @property
    def label(self) -> str:
        return _STATUS_LABELS[self]


class Priority(str, Enum):
    """Priority levels for tickets. Informational only."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def label(self) -> str:
        return _PRIORITY_LABELS[self]


class NotificationKind(str, Enum):
    """Presentation tag of a notification."""
    INFO = "INFO"
    ALERT = "ALERT"
    SUCCESS = "SUCCESS"


class TicketTab(str, Enum):
    """Ticket list tabs, each grouping one or more statuses."""
    PENDING = "PENDING"
    PROCESSING = "PROCESSING"
    RESOLVED = "RESOLVED"

    @property
    def statuses(self) -> List[TicketStatus]:
        return TAB_STATUSES[self]


INTAKE_ROLE = Role.FRONT_SUPPORT
COORDINATING_ROLE = Role.CRT

SPECIALIST_TEAMS: FrozenSet[Role] = frozenset(
    {Role.CORE_NET, Role.NET_OPT, Role.TRANS, Role.CORP}
)

TAB_STATUSES: Dict[TicketTab, List[TicketStatus]] = {
    TicketTab.PENDING: [TicketStatus.PENDING],
    TicketTab.PROCESSING: [TicketStatus.PROCESSING, TicketStatus.PENDING_CLOSURE],
    TicketTab.RESOLVED: [TicketStatus.RESOLVED],
}

_ROLE_LABELS = {
    Role.FRONT_SUPPORT: "前台支撑人员",
    Role.CRT: "客响班",
    Role.CORE_NET: "核心网专业班",
    Role.NET_OPT: "网优专业班",
    Role.TRANS: "传输专业班",
    Role.CORP: "集客专业班",
}

_STATUS_LABELS = {
    TicketStatus.PENDING: "待处理",
    TicketStatus.PROCESSING: "处理中",
    TicketStatus.PENDING_CLOSURE: "待归档",
    TicketStatus.RESOLVED: "已处理",
}

_PRIORITY_LABELS = {
    Priority.HIGH: "高",
    Priority.MEDIUM: "中",
    Priority.LOW: "低",
}
