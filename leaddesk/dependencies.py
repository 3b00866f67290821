"""
Lead store wiring for the API.
One store per process, built from config on first use.
"""

import random
from typing import Optional

from leaddesk.config import config
from leaddesk.leads_store import LeadStore
from leaddesk.scoring_client import ScoringClient

_store: Optional[LeadStore] = None


def build_store() -> LeadStore:
    """Create a LeadStore from the current configuration."""
    client = ScoringClient() if config.has_scoring_backend() else None
    return LeadStore(
        client=client,
        rng=random.Random(config.LEAD_RANDOM_SEED),
        seed=config.SEED_DEMO_DATA,
    )


def get_store() -> LeadStore:
    """
    Dependency for getting the process-wide lead store.

    Usage in FastAPI:
        @router.get("/leads")
        async def list_leads(store: LeadStore = Depends(get_store)):
            return store.list_leads()
    """
    global _store

    if _store is None:
        _store = build_store()
    return _store


def reset_store() -> None:
    """Drop the process-wide store so the next get_store() rebuilds it."""
    global _store
    _store = None
