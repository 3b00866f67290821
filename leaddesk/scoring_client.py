"""HTTP client for the external lead scoring backend.

Endpoints:
    POST /add_lead/            create a lead on the backend
    GET  /score_lead/{email}   Hot/Warm/Cold classification
    GET  /all_leads/           {"leads": [[id, name, email, budget], ...]}
"""

from typing import Any, Optional, Sequence
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from leaddesk.config import config
from leaddesk.models import RemoteLeadRow
from leaddesk.logging_config import get_logger

logger = get_logger(__name__)

LEAD_ROW_FIELDS = ("id", "name", "email", "budget")


class RemoteUnavailable(Exception):
    """The scoring backend could not be reached or answered with something unusable."""


class LeadDecodeError(RemoteUnavailable):
    """A row from /all_leads/ does not have the expected [id, name, email, budget] shape."""


def decode_lead_row(row: Any) -> RemoteLeadRow:
    """Name the positional fields of a backend lead row."""
    if isinstance(row, (str, bytes)) or not isinstance(row, Sequence):
        raise LeadDecodeError(f"Expected a lead row sequence, got {type(row).__name__}")
    if len(row) != len(LEAD_ROW_FIELDS):
        raise LeadDecodeError(
            f"Expected {len(LEAD_ROW_FIELDS)} fields in lead row, got {len(row)}: {list(row)!r}"
        )
    try:
        # Strict: a JSON true must not pass as id 1.
        return RemoteLeadRow.model_validate(dict(zip(LEAD_ROW_FIELDS, row)), strict=True)
    except ValidationError as e:
        raise LeadDecodeError(f"Invalid lead row {list(row)!r}: {e}") from e


class ScoringClient:
    """Async client for the scoring backend. Opens one connection per request."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout_s: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url or config.SCORING_API_BASE_URL).rstrip("/")
        self.timeout_s = timeout_s if timeout_s is not None else config.SCORING_API_TIMEOUT_SECONDS
        self._transport = transport

    async def _request(self, method: str, path: str, **kwargs) -> Any:
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout_s,
                transport=self._transport,
            ) as client:
                resp = await client.request(method, path, **kwargs)
                resp.raise_for_status()
                return resp.json()
        except httpx.TimeoutException as e:
            raise RemoteUnavailable(f"Timed out after {self.timeout_s}s calling {method} {path}") from e
        except httpx.HTTPStatusError as e:
            raise RemoteUnavailable(
                f"{method} {path} returned HTTP {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            raise RemoteUnavailable(f"{method} {path} failed: {e}") from e
        except httpx.InvalidURL as e:
            raise RemoteUnavailable(f"Invalid scoring backend URL {self.base_url!r}: {e}") from e
        except ValueError as e:
            # Body was not JSON.
            raise RemoteUnavailable(f"{method} {path} returned a malformed body") from e

    async def list_leads(self) -> list[RemoteLeadRow]:
        data = await self._request("GET", "/all_leads/")
        if not isinstance(data, dict) or not isinstance(data.get("leads"), list):
            raise RemoteUnavailable("GET /all_leads/ response has no 'leads' list")
        return [decode_lead_row(row) for row in data["leads"]]

    async def add_lead(self, payload: dict[str, Any]) -> dict[str, Any]:
        data = await self._request("POST", "/add_lead/", json=payload)
        if not isinstance(data, dict):
            raise RemoteUnavailable("POST /add_lead/ response is not a JSON object")
        return data

    async def score_lead(self, email: str) -> dict[str, Any]:
        path = f"/score_lead/{quote(email, safe='')}"
        data = await self._request("GET", path)
        if not isinstance(data, dict):
            raise RemoteUnavailable("GET /score_lead/ response is not a JSON object")
        return data
