from fastapi import APIRouter

from leaddesk.models import TeamMember
from leaddesk.seed_data import TEAM_MEMBERS

router = APIRouter(tags=["Core"])


# GET /
# Gets: nothing
# Returns: basic API metadata and a map of key endpoints
# Example:
#   curl http://localhost:8080/
@router.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "LeadDesk API - lead management for the CRM dashboard",
        "version": "1.0.0",
        "description": "Lead cache merged with the scoring backend, plus pipeline and analytics aggregates",
        "endpoints": {
            "leads": "/leads",
            "lead_sync": "/leads/sync",
            "lead_score": "/leads/{lead_id}/score",
            "analytics": "/analytics/summary",
            "pipeline": "/analytics/pipeline",
            "team": "/team",
            "health": "/health",
            "metrics": "/metrics",
        },
    }


# GET /team
# Gets: nothing
# Returns: JSON array of TeamMember objects leads can be assigned to
# Example:
#   curl http://localhost:8080/team
@router.get("/team", response_model=list[TeamMember])
async def list_team():
    """List the sales team roster."""
    return TEAM_MEMBERS
