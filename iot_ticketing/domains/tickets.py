"""
Ticket domain models representing fault complaints and their lifecycle.
"""
import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from iot_ticketing.domains.enums import Priority, Role, TicketStatus


def utc_now() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


class Diagnosis(BaseModel):
    """A timestamped diagnostic contribution from one role."""
    model_config = ConfigDict(frozen=True)

    role: Role
    content: str
    timestamp: datetime.datetime = Field(default_factory=utc_now)


class Ticket(BaseModel):
    """Model for an IoT fault complaint ticket."""
    id: str
    title: str
    content: str
    priority: Priority = Priority.MEDIUM
    status: TicketStatus = TicketStatus.PENDING
    creator: Role = Role.FRONT_SUPPORT
    created_at: datetime.datetime = Field(default_factory=utc_now)

    # Specialist teams currently tasked with diagnosis
    assigned_teams: List[Role] = Field(default_factory=list)
    diagnoses: List[Diagnosis] = Field(default_factory=list)

    preliminary_judgment: Optional[str] = None
    ai_analysis: Optional[str] = None
    resolution: Optional[str] = None
    resolved_at: Optional[datetime.datetime] = None

    @model_validator(mode="after")
    def _check_resolution_pairing(self) -> "Ticket":
        if (self.resolution is None) != (self.resolved_at is None):
            raise ValueError("resolution and resolved_at must be set together")
        return self

    def add_diagnosis(self, role: Role, content: str) -> Diagnosis:
        """Append a diagnosis to the ticket history."""
        diagnosis = Diagnosis(role=role, content=content)
        self.diagnoses.append(diagnosis)
        return diagnosis

    def has_diagnosis_from(self, role: Role) -> bool:
        return any(d.role == role for d in self.diagnoses)

    def diagnosis_stage(self, role: Role) -> Literal["initial", "supplementary"]:
        """Whether the next diagnosis from this role is its first or a follow-up."""
        return "supplementary" if self.has_diagnosis_from(role) else "initial"

    def resolve(self, resolution: str) -> None:
        """Archive the ticket with its final resolution note."""
        self.status = TicketStatus.RESOLVED
        self.assigned_teams = []
        self.resolution = resolution
        self.resolved_at = utc_now()

    @property
    def is_resolved(self) -> bool:
        return self.status == TicketStatus.RESOLVED
