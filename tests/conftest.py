import random
from datetime import date

import httpx
import pytest

FIXED_TODAY = date(2026, 3, 15)
SCORING_BASE_URL = "http://scoring.test"
RNG_SEED = 42


@pytest.fixture(autouse=True)
def _safe_test_config(monkeypatch):
    """Force deterministic, offline-safe config for tests.

    The repo loads .env on import; these overrides keep the app from syncing
    with a real scoring backend and make synthetic scores reproducible.
    """
    from leaddesk.config import config, Config
    from leaddesk import dependencies

    monkeypatch.setattr(Config, "SCORING_API_BASE_URL", SCORING_BASE_URL, raising=False)
    monkeypatch.setattr(Config, "SCORING_API_TIMEOUT_SECONDS", 1.0, raising=False)
    monkeypatch.setattr(Config, "SEED_DEMO_DATA", True, raising=False)
    monkeypatch.setattr(Config, "LEAD_RANDOM_SEED", RNG_SEED, raising=False)
    monkeypatch.setattr(Config, "SYNC_ON_STARTUP", False, raising=False)

    dependencies.reset_store()
    yield config
    dependencies.reset_store()


class FakeScoringBackend:
    """In-process stand-in for the scoring backend, served through httpx.MockTransport."""

    def __init__(self):
        self.leads: list = []
        self.add_lead_response: dict = {"message": "Lead added successfully"}
        self.scores: dict[str, dict] = {}
        self.fail_with: Exception | None = None
        self.status_code = 200
        self.raw_body: bytes | None = None
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail_with is not None:
            raise self.fail_with
        if self.raw_body is not None:
            return httpx.Response(self.status_code, content=self.raw_body)

        path = request.url.path
        if request.method == "GET" and path == "/all_leads/":
            return httpx.Response(self.status_code, json={"leads": self.leads})
        if request.method == "POST" and path == "/add_lead/":
            return httpx.Response(self.status_code, json=self.add_lead_response)
        if request.method == "GET" and path.startswith("/score_lead/"):
            email = path[len("/score_lead/"):]
            body = self.scores.get(email, {"message": "Lead not found in scoring database"})
            return httpx.Response(self.status_code, json=body)
        return httpx.Response(404, json={"detail": "Not Found"})

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def backend():
    return FakeScoringBackend()


@pytest.fixture
def scoring_client(backend):
    from leaddesk.scoring_client import ScoringClient

    return ScoringClient(base_url=SCORING_BASE_URL, timeout_s=1.0, transport=backend.transport())


@pytest.fixture
def store(scoring_client):
    """Seeded store wired to the fake backend, with a fixed clock and RNG."""
    from leaddesk.leads_store import LeadStore

    return LeadStore(
        client=scoring_client,
        rng=random.Random(RNG_SEED),
        today=lambda: FIXED_TODAY,
    )


@pytest.fixture
def empty_store(scoring_client):
    from leaddesk.leads_store import LeadStore

    return LeadStore(
        client=scoring_client,
        rng=random.Random(RNG_SEED),
        today=lambda: FIXED_TODAY,
        seed=False,
    )
