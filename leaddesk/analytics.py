"""Aggregates over lead collections for the dashboard and analytics pages."""

from datetime import date
from typing import Iterable, Sequence

from leaddesk.models import (
    DashboardSummary,
    Lead,
    LeadStatus,
    MonthlyPerformance,
    PipelineColumn,
    ScoreBucket,
    SourceCount,
)

MONTHS_IN_PERFORMANCE = 7

MONTH_ABBREVIATIONS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
                       "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

PIPELINE_STAGES = (
    LeadStatus.NEW,
    LeadStatus.CONTACTED,
    LeadStatus.QUALIFIED,
    LeadStatus.PROPOSAL,
    LeadStatus.NEGOTIATION,
    LeadStatus.CLOSED,
)

SCORE_BUCKETS = ((0, 20), (21, 40), (41, 60), (61, 80), (81, 100))


def leads_by_source(leads: Iterable[Lead]) -> list[SourceCount]:
    """Count leads per source, in order of first appearance."""
    counts: dict[str, int] = {}
    for lead in leads:
        source = lead.source or "Other"
        counts[source] = counts.get(source, 0) + 1
    return [SourceCount(name=name, value=value) for name, value in counts.items()]


def recent_months(today: date, count: int = MONTHS_IN_PERFORMANCE) -> list[tuple[int, int]]:
    """(year, month) pairs for the last ``count`` calendar months, oldest first."""
    months = []
    for offset in range(count - 1, -1, -1):
        index = today.year * 12 + (today.month - 1) - offset
        months.append((index // 12, index % 12 + 1))
    return months


def monthly_performance(leads: Sequence[Lead], today: date) -> list[MonthlyPerformance]:
    """
    Leads and conversions per month for the last seven months.

    A lead counts toward the month of its last contact; it is a conversion
    when its status is Closed.
    """
    totals = {key: [0, 0] for key in recent_months(today)}
    for lead in leads:
        if lead.last_contact is None:
            continue
        key = (lead.last_contact.year, lead.last_contact.month)
        if key not in totals:
            continue
        totals[key][0] += 1
        if lead.status == LeadStatus.CLOSED:
            totals[key][1] += 1

    result = []
    for (year, month), (lead_count, conversions) in totals.items():
        rate = conversions / lead_count * 100 if lead_count else 0.0
        result.append(MonthlyPerformance(
            month=MONTH_ABBREVIATIONS[month - 1],
            leads=lead_count,
            conversions=conversions,
            rate=rate,
        ))
    return result


def pipeline_board(leads: Sequence[Lead]) -> list[PipelineColumn]:
    """Group leads into kanban columns. Disqualified leads are left off the board."""
    columns = []
    for stage in PIPELINE_STAGES:
        stage_leads = [lead for lead in leads if lead.status == stage]
        columns.append(PipelineColumn(
            status=stage,
            count=len(stage_leads),
            total_budget=sum(lead.budget for lead in stage_leads),
            leads=stage_leads,
        ))
    return columns


def score_distribution(leads: Sequence[Lead]) -> list[ScoreBucket]:
    buckets = []
    for low, high in SCORE_BUCKETS:
        count = sum(1 for lead in leads if low <= lead.score <= high)
        buckets.append(ScoreBucket(score=f"{low}-{high}", count=count))
    return buckets


def dashboard_summary(leads: Sequence[Lead]) -> DashboardSummary:
    """Headline numbers for the dashboard cards."""
    total = len(leads)
    if not total:
        return DashboardSummary(total_leads=0, conversion_rate=0.0, average_score=0.0, pipeline_value=0.0)

    closed = sum(1 for lead in leads if lead.status == LeadStatus.CLOSED)
    open_value = sum(
        lead.budget for lead in leads
        if lead.status not in (LeadStatus.CLOSED, LeadStatus.DISQUALIFIED)
    )
    return DashboardSummary(
        total_leads=total,
        conversion_rate=closed / total * 100,
        average_score=sum(lead.score for lead in leads) / total,
        pipeline_value=open_value,
    )
