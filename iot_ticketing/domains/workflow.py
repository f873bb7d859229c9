"""
Authorization rules of the ticket lifecycle.

Each action is permitted for a fixed actor and a fixed source status. The
lifecycle service enforces these rules; callers may use them to decide which
actions to offer.
"""
from enum import Enum
from typing import Dict, FrozenSet, List, Tuple

from iot_ticketing.domains.enums import (
    COORDINATING_ROLE,
    INTAKE_ROLE,
    Role,
    SPECIALIST_TEAMS,
    TicketStatus,
)
from iot_ticketing.domains.tickets import Ticket


class TicketAction(str, Enum):
    """Operations the lifecycle service performs on an existing ticket."""
    DISPATCH = "dispatch"
    REASSIGN_TEAMS = "reassign_teams"
    SUBMIT_DIAGNOSIS = "submit_diagnosis"
    GENERATE_ANALYSIS = "generate_analysis"
    SAVE_ANALYSIS_DRAFT = "save_analysis_draft"
    SUBMIT_FOR_CLOSURE = "submit_for_closure"
    ARCHIVE = "archive"
    RETURN_FOR_REWORK = "return_for_rework"


_RULES: Dict[TicketAction, Tuple[FrozenSet[Role], TicketStatus]] = {
    TicketAction.DISPATCH: (frozenset({COORDINATING_ROLE}), TicketStatus.PENDING),
    TicketAction.REASSIGN_TEAMS: (frozenset({COORDINATING_ROLE}), TicketStatus.PROCESSING),
    TicketAction.SUBMIT_DIAGNOSIS: (SPECIALIST_TEAMS, TicketStatus.PROCESSING),
    TicketAction.GENERATE_ANALYSIS: (frozenset({COORDINATING_ROLE}), TicketStatus.PROCESSING),
    TicketAction.SAVE_ANALYSIS_DRAFT: (frozenset({COORDINATING_ROLE}), TicketStatus.PROCESSING),
    TicketAction.SUBMIT_FOR_CLOSURE: (frozenset({COORDINATING_ROLE}), TicketStatus.PROCESSING),
    TicketAction.ARCHIVE: (frozenset({INTAKE_ROLE}), TicketStatus.PENDING_CLOSURE),
    TicketAction.RETURN_FOR_REWORK: (frozenset({INTAKE_ROLE}), TicketStatus.PENDING_CLOSURE),
}


def source_status(action: TicketAction) -> TicketStatus:
    return _RULES[action][1]


def is_permitted(action: TicketAction, role: Role, ticket: Ticket) -> bool:
    """Check whether a role may perform an action on a ticket in its current state.

    Args:
        action: Requested action
        role: Acting role
        ticket: Ticket as currently stored

    Returns:
        True if the role and the ticket state allow the action
    """
    actors, status = _RULES[action]
    if role not in actors or ticket.status != status:
        return False
    if action == TicketAction.SUBMIT_DIAGNOSIS:
        return role in ticket.assigned_teams
    return True


def available_actions(role: Role, ticket: Ticket) -> List[TicketAction]:
    """List the actions a role can take on a ticket right now.

    The analysis draft is offered only while it is still empty and at least
    one diagnosis has been recorded.
    """
    actions = []
    for action in TicketAction:
        if not is_permitted(action, role, ticket):
            continue
        if action == TicketAction.GENERATE_ANALYSIS and (
            ticket.ai_analysis or not ticket.diagnoses
        ):
            continue
        actions.append(action)
    return actions
