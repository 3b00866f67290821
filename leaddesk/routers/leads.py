from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from leaddesk.dependencies import get_store
from leaddesk.leads_store import LEAD_NOT_FOUND, LeadStore
from leaddesk.models import (
    ActivityDraft,
    Lead,
    LeadChanges,
    LeadDraft,
    LeadScoreResult,
    LeadUpdate,
    NoteDraft,
    OperationResult,
    parse_status,
)

router = APIRouter(prefix="/leads", tags=["Leads"])


def _raise_for_result(result: OperationResult, lead_id: Optional[int] = None) -> None:
    if result.success:
        return
    if result.error == LEAD_NOT_FOUND:
        raise HTTPException(status_code=404, detail=f"Lead {lead_id} not found")
    raise HTTPException(status_code=400, detail=result.error)


def _get_lead_or_404(store: LeadStore, lead_id: int) -> Lead:
    lead = store.get_by_id(lead_id)
    if not lead:
        raise HTTPException(status_code=404, detail=f"Lead {lead_id} not found")
    return lead


# GET /leads?search=acme&status=New
# Gets: optional query params search (substring) and status (pipeline stage)
# Returns: JSON array of Lead objects in store order; status is matched case-insensitively
# Example:
#   curl 'http://localhost:8080/leads?search=acme'
@router.get("", response_model=list[Lead])
async def list_leads(
    search: str = "",
    status: Optional[str] = None,
    store: LeadStore = Depends(get_store),
):
    """List leads, optionally filtered by search term and status."""
    leads = store.filter_leads(search)
    if status:
        try:
            wanted = parse_status(status, strict=True)
        except ValueError as e:
            raise HTTPException(status_code=422, detail=str(e))
        leads = [lead for lead in leads if lead.status == wanted]
    return leads


# POST /leads
# Gets: JSON body {name, email, budget, status?, source?, company?, assignee?}
# Returns: OperationResult {success, error?}; error next to success=true is a backend warning
# Example:
#   curl -X POST http://localhost:8080/leads \
#     -H 'Content-Type: application/json' \
#     -d '{"name": "Zed", "email": "zed@x.com", "budget": 1000}'
@router.post("", response_model=OperationResult, status_code=201)
async def create_lead(draft: LeadDraft, store: LeadStore = Depends(get_store)):
    """Create a lead locally and push it to the scoring backend."""
    result = await store.add_lead(draft)
    _raise_for_result(result)
    return result


# POST /leads/sync
# Gets: nothing
# Returns: JSON array of Lead objects after merging the backend's lead list
# Example:
#   curl -X POST http://localhost:8080/leads/sync
@router.post("/sync", response_model=list[Lead])
async def sync_leads(store: LeadStore = Depends(get_store)):
    """Pull /all_leads/ from the scoring backend and merge it into the cache."""
    return await store.fetch_and_merge_remote()


# GET /leads/{lead_id}
# Gets: path param lead_id (int)
# Returns: Lead object, 404 if unknown
# Example:
#   curl http://localhost:8080/leads/1
@router.get("/{lead_id}", response_model=Lead)
async def get_lead(lead_id: int, store: LeadStore = Depends(get_store)):
    return _get_lead_or_404(store, lead_id)


# PATCH /leads/{lead_id}
# Gets: path param lead_id (int), JSON body with any Lead fields to change
# Returns: the updated Lead
# Example:
#   curl -X PATCH http://localhost:8080/leads/3 \
#     -H 'Content-Type: application/json' -d '{"status": "Proposal"}'
@router.patch("/{lead_id}", response_model=Lead)
async def update_lead(lead_id: int, changes: LeadChanges, store: LeadStore = Depends(get_store)):
    """Change only the fields present in the body."""
    update = LeadUpdate(id=lead_id, **changes.model_dump(exclude_unset=True))
    _raise_for_result(store.update_lead(update), lead_id)
    return store.get_by_id(lead_id)


# POST /leads/{lead_id}/activities
# Gets: path param lead_id (int), JSON body {type, description, date?}
# Returns: the updated Lead (new activity first)
# Example:
#   curl -X POST http://localhost:8080/leads/1/activities \
#     -H 'Content-Type: application/json' -d '{"type": "Call", "description": "Follow-up"}'
@router.post("/{lead_id}/activities", response_model=Lead, status_code=201)
async def add_activity(lead_id: int, activity: ActivityDraft, store: LeadStore = Depends(get_store)):
    _raise_for_result(store.add_activity(lead_id, activity), lead_id)
    return store.get_by_id(lead_id)


# POST /leads/{lead_id}/notes
# Gets: path param lead_id (int), JSON body {text}
# Returns: the updated Lead
# Example:
#   curl -X POST http://localhost:8080/leads/1/notes \
#     -H 'Content-Type: application/json' -d '{"text": "Asked for a quote"}'
@router.post("/{lead_id}/notes", response_model=Lead, status_code=201)
async def add_note(lead_id: int, note: NoteDraft, store: LeadStore = Depends(get_store)):
    _raise_for_result(store.add_note(lead_id, note.text), lead_id)
    return store.get_by_id(lead_id)


# GET /leads/{lead_id}/score
# Gets: path param lead_id (int)
# Returns: LeadScoreResult {email, lead_score?, message?, error?}
# Example:
#   curl http://localhost:8080/leads/1/score
@router.get("/{lead_id}/score", response_model=LeadScoreResult)
async def get_lead_score(lead_id: int, store: LeadStore = Depends(get_store)):
    """Look up the backend's Hot/Warm/Cold classification for a lead."""
    lead = _get_lead_or_404(store, lead_id)
    return await store.get_lead_score(lead.email)
