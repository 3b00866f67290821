"""In-memory lead cache, reconciled with the scoring backend by e-mail."""

import random
from datetime import date
from typing import Callable, Optional

from leaddesk import analytics
from leaddesk.logging_config import get_logger
from leaddesk.metrics import leads_created, remote_syncs, remote_write_failures
from leaddesk.models import (
    Activity,
    ActivityDraft,
    DashboardSummary,
    Lead,
    LeadDraft,
    LeadScoreResult,
    LeadStatus,
    LeadUpdate,
    MonthlyPerformance,
    OperationResult,
    PipelineColumn,
    RemoteLeadRow,
    ScoreBucket,
    SourceCount,
)
from leaddesk.scoring_client import RemoteUnavailable, ScoringClient
from leaddesk.seed_data import demo_leads, team_member_ids

logger = get_logger(__name__)

LEAD_NOT_FOUND = "Lead not found"
SYNTHETIC_SCORE_RANGE = (70, 99)


def _email_key(email: str) -> str:
    return email.strip().lower()


def _not_found() -> OperationResult:
    return OperationResult(success=False, error=LEAD_NOT_FOUND)


class LeadStore:
    """
    Ordered, mutable collection of leads for one process.

    Leads come from demo seed data, from the backend's lead list and from
    local creation. Writes never raise for missing leads or backend failures;
    they return an OperationResult instead.
    """

    def __init__(
        self,
        client: Optional[ScoringClient] = None,
        rng: Optional[random.Random] = None,
        today: Optional[Callable[[], date]] = None,
        seed: bool = True,
    ):
        self.client = client
        self.rng = rng or random.Random()
        self.today = today or date.today
        self._leads: list[Lead] = []
        self._next_lead_id = 1
        self._next_activity_id = 1

        if seed:
            self._init_demo_leads()

    def _init_demo_leads(self):
        if not self._leads:
            self._leads = demo_leads()
            self._sync_counters()

    def _sync_counters(self):
        """Keep id counters ahead of every id currently in the store."""
        lead_ids = [lead.id for lead in self._leads]
        activity_ids = [a.id for lead in self._leads for a in lead.activities]
        self._next_lead_id = max([self._next_lead_id, *(i + 1 for i in lead_ids)])
        self._next_activity_id = max([self._next_activity_id, *(i + 1 for i in activity_ids)])

    def _allocate_lead_id(self) -> int:
        lead_id = self._next_lead_id
        self._next_lead_id += 1
        return lead_id

    def _allocate_activity_id(self) -> int:
        activity_id = self._next_activity_id
        self._next_activity_id += 1
        return activity_id

    def _synthetic_score(self) -> int:
        return self.rng.randint(*SYNTHETIC_SCORE_RANGE)

    def _find_by_email(self, email: str) -> Optional[Lead]:
        key = _email_key(email)
        for lead in self._leads:
            if _email_key(lead.email) == key:
                return lead
        return None

    def __len__(self) -> int:
        return len(self._leads)

    # Reads

    def list_leads(self) -> list[Lead]:
        """
        All leads in store order.

        A sync puts remote leads ahead of the local ones it keeps; later
        local adds go to the front.
        """
        return list(self._leads)

    def get_by_id(self, lead_id: int) -> Optional[Lead]:
        for lead in self._leads:
            if lead.id == lead_id:
                return lead
        return None

    def filter_leads(self, search_term: str = "") -> list[Lead]:
        """Case-insensitive substring search over name, email, company, source and status."""
        if not search_term:
            return self.list_leads()

        term = search_term.lower()
        matches = []
        for lead in self._leads:
            fields = (lead.name, lead.email, lead.company, lead.source, lead.status.value)
            if any(field and term in field.lower() for field in fields):
                matches.append(lead)
        return matches

    def get_leads_by_status(self, status: LeadStatus) -> list[Lead]:
        return [lead for lead in self._leads if lead.status == status]

    # Aggregates

    def aggregate_by_source(self) -> list[SourceCount]:
        return analytics.leads_by_source(self._leads)

    def aggregate_monthly_performance(self) -> list[MonthlyPerformance]:
        return analytics.monthly_performance(self._leads, self.today())

    def pipeline_board(self) -> list[PipelineColumn]:
        return analytics.pipeline_board(self._leads)

    def score_distribution(self) -> list[ScoreBucket]:
        return analytics.score_distribution(self._leads)

    def dashboard_summary(self) -> DashboardSummary:
        return analytics.dashboard_summary(self._leads)

    # Remote reconciliation

    def _lead_from_row(self, row: RemoteLeadRow, today: date) -> Lead:
        return Lead(
            id=row.id,
            name=row.name,
            email=row.email,
            budget=row.budget,
            status=LeadStatus.NEW,
            score=self._synthetic_score(),
            last_contact=today,
            activities=[],
        )

    async def fetch_and_merge_remote(self) -> list[Lead]:
        """
        Replace the cache with the backend's leads plus local leads it does not know.

        Remote leads come first in backend order; a local lead is dropped when
        the backend has a lead with the same e-mail. On any backend failure the
        current contents are returned unchanged.
        """
        if self.client is None:
            logger.info("remote_leads_sync_skipped", reason="no_scoring_client")
            return self.list_leads()

        try:
            rows = await self.client.list_leads()
        except RemoteUnavailable as e:
            remote_syncs.labels(outcome="failed").inc()
            logger.warning("remote_leads_fetch_failed", error=str(e), cached_leads=len(self._leads))
            return self.list_leads()

        today = self.today()
        merged: list[Lead] = []
        seen_emails: set[str] = set()
        for row in rows:
            key = _email_key(row.email)
            if key in seen_emails:
                logger.warning("remote_lead_duplicate_email", lead_id=row.id, email=row.email)
                continue
            seen_emails.add(key)
            merged.append(self._lead_from_row(row, today))

        local_kept = [lead for lead in self._leads if _email_key(lead.email) not in seen_emails]
        dropped = len(self._leads) - len(local_kept)
        merged.extend(local_kept)

        self._leads = merged
        self._sync_counters()
        self._reassign_duplicate_ids()

        remote_syncs.labels(outcome="merged").inc()
        logger.info(
            "remote_leads_merged",
            remote=len(seen_emails),
            local_kept=len(local_kept),
            local_dropped=dropped,
        )
        return self.list_leads()

    def _reassign_duplicate_ids(self):
        """Give a fresh id to any lead whose id is already taken by an earlier lead."""
        seen_ids: set[int] = set()
        for lead in self._leads:
            if lead.id in seen_ids:
                old_id = lead.id
                lead.id = self._allocate_lead_id()
                for activity in lead.activities:
                    activity.lead_id = lead.id
                logger.info("lead_id_reassigned", old_id=old_id, new_id=lead.id, email=lead.email)
            seen_ids.add(lead.id)

    # Writes

    async def add_lead(self, draft: LeadDraft) -> OperationResult:
        """
        Add a lead locally and push it to the backend.

        The local insert always happens once the draft is valid. A backend
        failure comes back as an advisory ``error`` next to ``success=True``.
        """
        name = draft.name.strip()
        email = draft.email.strip()
        if not name or not email:
            return OperationResult(success=False, error="Name and email are required")
        if draft.assignee and draft.assignee not in team_member_ids():
            return OperationResult(success=False, error=f"Unknown assignee: {draft.assignee}")
        if self._find_by_email(email) is not None:
            return OperationResult(success=False, error="A lead with this email already exists")

        lead = Lead(
            id=self._allocate_lead_id(),
            name=name,
            email=email,
            budget=draft.budget,
            status=draft.status or LeadStatus.NEW,
            source=draft.source,
            company=draft.company,
            assignee=draft.assignee,
            score=self._synthetic_score(),
            last_contact=self.today(),
            activities=[],
        )
        self._leads.insert(0, lead)
        leads_created.inc()
        logger.info("lead_added", lead_id=lead.id, email=lead.email)

        advisory = await self._push_lead(lead)
        return OperationResult(success=True, error=advisory)

    async def _push_lead(self, lead: Lead) -> Optional[str]:
        if self.client is None:
            return None

        payload = {
            "name": lead.name,
            "email": lead.email,
            "budget": lead.budget,
            "source": lead.source,
            "status": lead.status.value,
        }
        if lead.company:
            payload["company"] = lead.company

        try:
            response = await self.client.add_lead(payload)
        except RemoteUnavailable as e:
            remote_write_failures.inc()
            logger.warning("remote_add_lead_failed", lead_id=lead.id, error=str(e))
            return str(e)

        if "error" in response:
            remote_write_failures.inc()
            logger.warning("remote_add_lead_rejected", lead_id=lead.id, error=response["error"])
            return str(response["error"])
        return None

    def update_lead(self, update: LeadUpdate) -> OperationResult:
        """Shallow-merge the fields set on ``update`` into the stored lead."""
        lead = self.get_by_id(update.id)
        if lead is None:
            return _not_found()

        changes = update.model_dump(exclude_unset=True, exclude_none=True, exclude={"id"})
        for field in ("name", "email"):
            if field in changes:
                changes[field] = changes[field].strip()
                if not changes[field]:
                    return OperationResult(success=False, error="Name and email are required")
        if "assignee" in changes and changes["assignee"] not in team_member_ids():
            return OperationResult(success=False, error=f"Unknown assignee: {changes['assignee']}")
        if "email" in changes:
            other = self._find_by_email(changes["email"])
            if other is not None and other.id != lead.id:
                return OperationResult(success=False, error="A lead with this email already exists")

        for field, value in changes.items():
            setattr(lead, field, value)

        logger.info("lead_updated", lead_id=lead.id, fields=sorted(changes))
        return OperationResult(success=True)

    def add_activity(self, lead_id: int, activity: ActivityDraft) -> OperationResult:
        lead = self.get_by_id(lead_id)
        if lead is None:
            return _not_found()

        today = self.today()
        lead.activities.insert(0, Activity(
            id=self._allocate_activity_id(),
            lead_id=lead_id,
            date=activity.date or today,
            type=activity.type,
            description=activity.description,
        ))
        lead.last_contact = today

        logger.info("lead_activity_added", lead_id=lead_id, activity_type=activity.type.value)
        return OperationResult(success=True)

    def add_note(self, lead_id: int, text: str) -> OperationResult:
        """Append a note, separated from earlier notes by a blank line."""
        lead = self.get_by_id(lead_id)
        if lead is None:
            return _not_found()
        if not text.strip():
            return OperationResult(success=False, error="Note text is required")

        lead.notes = f"{lead.notes}\n\n{text}" if lead.notes else text
        lead.last_contact = self.today()

        logger.info("lead_note_added", lead_id=lead_id)
        return OperationResult(success=True)

    # Scoring

    async def get_lead_score(self, email: str) -> LeadScoreResult:
        """Ask the backend for the Hot/Warm/Cold label. Failures are returned, not raised."""
        if self.client is None:
            return LeadScoreResult(email=email, error="Scoring backend is not configured")

        try:
            data = await self.client.score_lead(email)
        except RemoteUnavailable as e:
            logger.warning("lead_score_lookup_failed", email=email, error=str(e))
            return LeadScoreResult(email=email, error=str(e))

        lead_score = data.get("lead_score")
        if lead_score is not None:
            lead_score = str(lead_score)
        message = data.get("message")
        if lead_score is None and message is None:
            message = "Could not retrieve AI score"
        return LeadScoreResult(email=email, lead_score=lead_score, message=message)
