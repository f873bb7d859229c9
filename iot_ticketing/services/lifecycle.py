"""
Ticket lifecycle service implementation.

This service owns the ticket state machine. Every operation loads the
ticket, checks the acting role against the ticket's current state, checks
the payload, and only then writes the new ticket and emits notifications
to the newly responsible roles. A failed check writes nothing.
"""
import datetime
import logging
import random
from typing import Iterable, List, Optional

from iot_ticketing.domains.enums import (
    COORDINATING_ROLE,
    INTAKE_ROLE,
    NotificationKind,
    Priority,
    Role,
    TicketStatus,
)
from iot_ticketing.domains.errors import (
    AuthorizationError,
    DuplicateIdError,
    ValidationError,
)
from iot_ticketing.domains.tickets import Ticket
from iot_ticketing.domains.workflow import TicketAction, available_actions, is_permitted
from iot_ticketing.interfaces.services.analysis import AnalysisService
from iot_ticketing.interfaces.services.lifecycle import (
    TicketLifecycleService as TicketLifecycleServiceInterface,
)
from iot_ticketing.interfaces.services.notification import NotificationService
from iot_ticketing.repositories.ticket import TicketRepository

# Setup logger for this module
logger = logging.getLogger(__name__)

RETURN_PREFIX = "【退回排查】"
MAX_ID_ATTEMPTS = 20


def _require_text(value: Optional[str], field: str) -> str:
    if value is None or not value.strip():
        raise ValidationError(f"{field} must not be empty")
    return value


def _require_teams(teams: Iterable[Role]) -> List[Role]:
    try:
        selected = list(dict.fromkeys(Role(t) for t in teams))
    except ValueError as e:
        raise ValidationError(f"Unknown team: {e}") from e
    if not selected:
        raise ValidationError("At least one specialist team must be selected")

    invalid = [t.value for t in selected if not t.is_specialist]
    if invalid:
        raise ValidationError(f"Not specialist teams: {', '.join(invalid)}")
    return selected


class TicketLifecycleService(TicketLifecycleServiceInterface):
    """Service for moving tickets through their resolution workflow."""

    def __init__(
        self,
        ticket_repository: TicketRepository,
        notification_service: NotificationService,
        analysis_service: AnalysisService,
    ):
        """Initialize the lifecycle service.

        Args:
            ticket_repository: Repository for ticket records
            notification_service: Dispatcher for role notifications
            analysis_service: Collaborator drafting analysis reports
        """
        self.ticket_repository = ticket_repository
        self.notification_service = notification_service
        self.analysis_service = analysis_service

    def _authorize(self, ticket_id: str, action: TicketAction, role: Role) -> Ticket:
        """Load a ticket and check the role may perform the action on it."""
        ticket = self.ticket_repository.get_by_id(ticket_id)
        if not is_permitted(action, role, ticket):
            logger.warning(
                f"Rejected {action.value} on ticket {ticket_id} by {role.value} "
                f"in status {ticket.status.value}"
            )
            raise AuthorizationError(
                f"{role.value} may not {action.value} ticket {ticket_id} "
                f"while it is {ticket.status.value}"
            )
        return ticket

    def _commit(self, before: Ticket, after: Ticket, role: Role, action: TicketAction) -> None:
        self.ticket_repository.save(after)
        logger.info(
            f"Ticket {after.id}: {action.value} by {role.value} "
            f"({before.status.value} -> {after.status.value})"
        )

    def _generate_ticket_id(self) -> str:
        today = datetime.date.today().strftime("%Y%m%d")
        for _ in range(MAX_ID_ATTEMPTS):
            ticket_id = f"TKT-{today}-{random.randint(0, 999):03d}"
            if not self.ticket_repository.exists(ticket_id):
                return ticket_id
        raise DuplicateIdError(f"No free ticket ID left for {today}")

    def get_ticket(self, ticket_id: str) -> Ticket:
        return self.ticket_repository.get_by_id(ticket_id)

    def create_ticket(
        self, role: Role, title: str, content: str, priority: Priority = Priority.MEDIUM
    ) -> Ticket:
        """Open a new ticket in the pending state.

        Args:
            role: Acting role, must be the intake role
            title: Ticket title
            content: Fault description
            priority: Informational priority

        Returns:
            The created ticket
        """
        if role != INTAKE_ROLE:
            raise AuthorizationError(f"{role.value} may not create tickets")
        _require_text(title, "Title")
        _require_text(content, "Content")

        ticket = Ticket(
            id=self._generate_ticket_id(),
            title=title,
            content=content,
            priority=priority,
            status=TicketStatus.PENDING,
            creator=role,
        )
        self.ticket_repository.create(ticket)
        logger.info(f"Ticket {ticket.id} created by {role.value}")
        return ticket

    def available_actions(self, ticket_id: str, role: Role) -> List[TicketAction]:
        return available_actions(role, self.ticket_repository.get_by_id(ticket_id))

    def dispatch(
        self, ticket_id: str, role: Role, preliminary_judgment: str, teams: Iterable[Role]
    ) -> Ticket:
        """Record the preliminary judgment, assign teams and start processing.

        Each selected team is notified with the preliminary judgment.
        """
        ticket = self._authorize(ticket_id, TicketAction.DISPATCH, role)
        selected = _require_teams(teams)
        judgment = _require_text(preliminary_judgment, "Preliminary judgment")

        updated = ticket.model_copy(deep=True)
        updated.preliminary_judgment = judgment
        updated.assigned_teams = selected
        updated.status = TicketStatus.PROCESSING
        self._commit(ticket, updated, role, TicketAction.DISPATCH)

        self.notification_service.notify_many(
            selected,
            f"收到新工单分派，请及时处理。初步判断：{judgment}",
            ticket.id,
            ticket.title,
        )
        return updated

    def reassign_teams(self, ticket_id: str, role: Role, teams: Iterable[Role]) -> Ticket:
        """Replace the assigned teams. Only newly added teams are notified.

        Diagnoses from teams that are removed stay in the ticket history.
        """
        ticket = self._authorize(ticket_id, TicketAction.REASSIGN_TEAMS, role)
        selected = _require_teams(teams)
        added = [t for t in selected if t not in ticket.assigned_teams]

        updated = ticket.model_copy(deep=True)
        updated.assigned_teams = selected
        self._commit(ticket, updated, role, TicketAction.REASSIGN_TEAMS)

        if added:
            self.notification_service.notify_many(
                added,
                "您所在的班组已被追加协同排查。",
                ticket.id,
                ticket.title,
            )
        return updated

    def submit_diagnosis(self, ticket_id: str, role: Role, content: str) -> Ticket:
        """Append a diagnosis from a currently assigned specialist team."""
        ticket = self._authorize(ticket_id, TicketAction.SUBMIT_DIAGNOSIS, role)
        text = _require_text(content, "Diagnosis")
        stage = ticket.diagnosis_stage(role)

        updated = ticket.model_copy(deep=True)
        updated.add_diagnosis(role, text)
        self._commit(ticket, updated, role, TicketAction.SUBMIT_DIAGNOSIS)
        logger.info(f"Ticket {ticket.id}: {stage} diagnosis from {role.value}")

        self.notification_service.notify(
            COORDINATING_ROLE,
            f"{role.label} 已提交诊断反馈，请查看。",
            ticket.id,
            ticket.title,
            NotificationKind.SUCCESS,
        )
        return updated

    async def generate_analysis(
        self, ticket_id: str, role: Role, regenerate: bool = False
    ) -> Ticket:
        """Draft the analysis with the collaborator and store it verbatim.

        The draft is generated only while it is empty, unless regenerate is
        set explicitly. If the collaborator fails the ticket is left as it was
        and the CollaboratorError propagates.
        """
        ticket = self._authorize(ticket_id, TicketAction.GENERATE_ANALYSIS, role)
        if ticket.ai_analysis and not regenerate:
            raise AuthorizationError(
                f"Ticket {ticket_id} already has an analysis draft; edit it instead"
            )
        if not ticket.diagnoses:
            raise ValidationError(
                f"Ticket {ticket_id} has no diagnoses to analyze yet"
            )

        report = await self.analysis_service.analyze(ticket)

        # The ticket may have moved on while the collaborator was running
        current = self._authorize(ticket_id, TicketAction.GENERATE_ANALYSIS, role)
        updated = current.model_copy(deep=True)
        updated.ai_analysis = report
        self._commit(current, updated, role, TicketAction.GENERATE_ANALYSIS)
        return updated

    def save_analysis_draft(self, ticket_id: str, role: Role, text: str) -> Ticket:
        ticket = self._authorize(ticket_id, TicketAction.SAVE_ANALYSIS_DRAFT, role)

        updated = ticket.model_copy(deep=True)
        updated.ai_analysis = text
        self._commit(ticket, updated, role, TicketAction.SAVE_ANALYSIS_DRAFT)
        return updated

    def submit_for_closure(
        self, ticket_id: str, role: Role, text: Optional[str] = None
    ) -> Ticket:
        """Forward the analysis to the intake role for archiving.

        Args:
            ticket_id: Ticket ID
            role: Acting role, must be the coordinating role
            text: Optional final draft saved in the same write

        Returns:
            The ticket in PENDING_CLOSURE
        """
        ticket = self._authorize(ticket_id, TicketAction.SUBMIT_FOR_CLOSURE, role)
        analysis = _require_text(
            text if text is not None else ticket.ai_analysis, "Analysis"
        )

        updated = ticket.model_copy(deep=True)
        updated.ai_analysis = analysis
        updated.status = TicketStatus.PENDING_CLOSURE
        self._commit(ticket, updated, role, TicketAction.SUBMIT_FOR_CLOSURE)

        self.notification_service.notify(
            INTAKE_ROLE,
            "客响班已提交综合处理意见，请进行归档确认或退回。",
            ticket.id,
            ticket.title,
            NotificationKind.INFO,
        )
        return updated

    def archive(self, ticket_id: str, role: Role, resolution: str) -> Ticket:
        ticket = self._authorize(ticket_id, TicketAction.ARCHIVE, role)
        note = _require_text(resolution, "Resolution")

        updated = ticket.model_copy(deep=True)
        updated.resolve(note)
        self._commit(ticket, updated, role, TicketAction.ARCHIVE)

        self.notification_service.notify(
            COORDINATING_ROLE,
            "工单已由前台支撑人员归档。",
            ticket.id,
            ticket.title,
            NotificationKind.SUCCESS,
        )
        return updated

    def return_for_rework(self, ticket_id: str, role: Role, reason: str) -> Ticket:
        """Send the ticket back to processing with the reason in its history.

        Assignments are cleared so the coordinating role has to re-evaluate
        which teams to involve.
        """
        ticket = self._authorize(ticket_id, TicketAction.RETURN_FOR_REWORK, role)
        note = _require_text(reason, "Return reason")

        updated = ticket.model_copy(deep=True)
        updated.add_diagnosis(role, f"{RETURN_PREFIX} {note}")
        updated.assigned_teams = []
        updated.status = TicketStatus.PROCESSING
        self._commit(ticket, updated, role, TicketAction.RETURN_FOR_REWORK)

        self.notification_service.notify(
            COORDINATING_ROLE,
            f"工单被前台退回！原因：{note}",
            ticket.id,
            ticket.title,
            NotificationKind.ALERT,
        )
        return updated
