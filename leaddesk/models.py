"""Data models for LeadDesk."""

import datetime as dt
from typing import Any, Optional
import enum
from pydantic import BaseModel, Field, field_validator


class LeadStatus(str, enum.Enum):
    """Pipeline stages plus the terminal rejection state, in board order."""
    NEW = "New"
    CONTACTED = "Contacted"
    QUALIFIED = "Qualified"
    PROPOSAL = "Proposal"
    NEGOTIATION = "Negotiation"
    DISQUALIFIED = "Disqualified"
    CLOSED = "Closed"


class ActivityType(str, enum.Enum):
    """Kinds of logged interactions."""
    EMAIL = "Email"
    CALL = "Call"
    MEETING = "Meeting"
    NOTE = "Note"
    TASK = "Task"


DEFAULT_SOURCE = "Website"


def parse_status(value: Any, strict: bool = False) -> Optional[LeadStatus]:
    """Resolve a raw status value to a LeadStatus, case-insensitively.

    Missing or blank values resolve to New. Unknown values resolve to New
    unless ``strict`` is set, in which case a ValueError is raised.
    """
    if isinstance(value, LeadStatus):
        return value
    if value is None or (isinstance(value, str) and not value.strip()):
        return LeadStatus.NEW
    text = str(value).strip().lower()
    for status in LeadStatus:
        if status.value.lower() == text:
            return status
    if strict:
        raise ValueError(f"Unknown lead status: {value!r}")
    return LeadStatus.NEW


class Activity(BaseModel):
    """A logged interaction with a lead."""
    id: int
    lead_id: int
    date: dt.date
    type: ActivityType
    description: str


class Lead(BaseModel):
    """Lead model representing a sales opportunity."""
    id: int
    name: str
    email: str
    budget: float = Field(default=0, ge=0)
    source: str = DEFAULT_SOURCE
    status: LeadStatus = LeadStatus.NEW
    score: int = Field(default=0, ge=0, le=100)
    company: Optional[str] = None
    notes: Optional[str] = None
    last_contact: Optional[dt.date] = None
    assignee: Optional[str] = None
    activities: list[Activity] = Field(default_factory=list)

    @field_validator("source", mode="before")
    @classmethod
    def _default_source(cls, value):
        if value is None or (isinstance(value, str) and not value.strip()):
            return DEFAULT_SOURCE
        return value

    @field_validator("status", mode="before")
    @classmethod
    def _default_status(cls, value):
        return parse_status(value)


class LeadDraft(BaseModel):
    """Input for creating a lead locally."""
    name: str
    email: str
    budget: float = Field(ge=0)
    status: Optional[LeadStatus] = None
    source: Optional[str] = None
    company: Optional[str] = None
    assignee: Optional[str] = None

    @field_validator("status", mode="before")
    @classmethod
    def _status(cls, value):
        if value is None:
            return None
        return parse_status(value, strict=True)


class LeadChanges(BaseModel):
    """Partial lead fields; only fields explicitly provided are applied."""
    name: Optional[str] = None
    email: Optional[str] = None
    budget: Optional[float] = Field(default=None, ge=0)
    source: Optional[str] = None
    status: Optional[LeadStatus] = None
    score: Optional[int] = Field(default=None, ge=0, le=100)
    company: Optional[str] = None
    notes: Optional[str] = None
    last_contact: Optional[dt.date] = None
    assignee: Optional[str] = None

    @field_validator("status", mode="before")
    @classmethod
    def _status(cls, value):
        if value is None:
            return None
        return parse_status(value, strict=True)


class LeadUpdate(LeadChanges):
    """Partial update addressed to an existing lead."""
    id: int


class ActivityDraft(BaseModel):
    """Input for logging an activity. Date defaults to the day of the call."""
    type: ActivityType
    description: str
    date: Optional[dt.date] = None


class NoteDraft(BaseModel):
    """Request body for adding a note."""
    text: str


class OperationResult(BaseModel):
    """Outcome of a store write. ``error`` may accompany ``success`` as an advisory."""
    success: bool = False
    error: Optional[str] = None


class SourceCount(BaseModel):
    name: str
    value: int


class MonthlyPerformance(BaseModel):
    month: str
    leads: int
    conversions: int
    rate: float


class PipelineColumn(BaseModel):
    """One kanban column of the pipeline board."""
    status: LeadStatus
    count: int
    total_budget: float
    leads: list[Lead]


class ScoreBucket(BaseModel):
    score: str  # e.g. "61-80"
    count: int


class DashboardSummary(BaseModel):
    total_leads: int
    conversion_rate: float
    average_score: float
    pipeline_value: float


class RemoteLeadRow(BaseModel):
    """A lead row as listed by the scoring backend's /all_leads/ endpoint."""
    id: int
    name: str
    email: str
    budget: float = Field(ge=0)


class LeadScoreResult(BaseModel):
    """AI score lookup outcome: a Hot/Warm/Cold label, or why there is none."""
    email: str
    lead_score: Optional[str] = None
    message: Optional[str] = None
    error: Optional[str] = None


class TeamMember(BaseModel):
    """A sales team member leads can be assigned to."""
    id: str
    name: str
    email: str
    role: str
