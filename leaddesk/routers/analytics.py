from fastapi import APIRouter, Depends

from leaddesk.dependencies import get_store
from leaddesk.leads_store import LeadStore
from leaddesk.models import (
    DashboardSummary,
    MonthlyPerformance,
    PipelineColumn,
    ScoreBucket,
    SourceCount,
)

router = APIRouter(prefix="/analytics", tags=["Analytics"])


# GET /analytics/sources
# Gets: nothing
# Returns: JSON array of {name, value}, one per lead source in first-seen order
# Example:
#   curl http://localhost:8080/analytics/sources
@router.get("/sources", response_model=list[SourceCount])
async def leads_by_source(store: LeadStore = Depends(get_store)):
    return store.aggregate_by_source()


# GET /analytics/monthly
# Gets: nothing
# Returns: 7 entries {month, leads, conversions, rate}, oldest month first
# Example:
#   curl http://localhost:8080/analytics/monthly
@router.get("/monthly", response_model=list[MonthlyPerformance])
async def monthly_performance(store: LeadStore = Depends(get_store)):
    return store.aggregate_monthly_performance()


# GET /analytics/pipeline
# Gets: nothing
# Returns: kanban columns {status, count, total_budget, leads}
# Example:
#   curl http://localhost:8080/analytics/pipeline
@router.get("/pipeline", response_model=list[PipelineColumn])
async def pipeline_board(store: LeadStore = Depends(get_store)):
    return store.pipeline_board()


# GET /analytics/scores
# Gets: nothing
# Returns: lead counts per score bucket {score, count}
# Example:
#   curl http://localhost:8080/analytics/scores
@router.get("/scores", response_model=list[ScoreBucket])
async def score_distribution(store: LeadStore = Depends(get_store)):
    return store.score_distribution()


# GET /analytics/summary
# Gets: nothing
# Returns: {total_leads, conversion_rate, average_score, pipeline_value}
# Example:
#   curl http://localhost:8080/analytics/summary
@router.get("/summary", response_model=DashboardSummary)
async def dashboard_summary(store: LeadStore = Depends(get_store)):
    """Headline numbers for the dashboard cards."""
    return store.dashboard_summary()
