"""Snapshot provider HTTP client for fetching financial summaries and goals"""

import httpx
from typing import Any, Dict, List
from urllib.parse import quote
from finhealth_gateway.domain.models import FinancialSnapshot, Goal
from finhealth_gateway.domain.exceptions import SnapshotProviderError, UserNotFoundError
from finhealth_gateway.config import settings


class SnapshotClient:
    """Client for the external financial snapshot API"""

    def __init__(self, base_url: str | None = None, timeout: float | None = None):
        self.base_url = base_url or settings.snapshot_api_base
        self.timeout = timeout or settings.http_timeout_seconds

    @staticmethod
    def _user_segment(user_id: str) -> str:
        """Encode the id as exactly one URL path segment"""
        # "." is encoded too so ids like ".." survive URL dot-segment removal
        return quote(user_id, safe="").replace(".", "%2E")

    async def _get_json(self, path: str, user_id: str) -> Dict[str, Any]:
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            try:
                response = await client.get(f"{self.base_url}{path}")
                response.raise_for_status()
                data = response.json()
            except httpx.TimeoutException as e:
                raise SnapshotProviderError(f"Snapshot API timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                if e.response.status_code == 404:
                    raise UserNotFoundError(f"No financial data for user {user_id}") from e
                raise SnapshotProviderError(f"Snapshot API error: {e.response.status_code}") from e
            except httpx.RequestError as e:
                raise SnapshotProviderError(f"Snapshot API unreachable: {e}") from e
            except ValueError as e:
                raise SnapshotProviderError(f"Invalid JSON from snapshot API: {e}") from e

        if not isinstance(data, dict):
            raise SnapshotProviderError(f"Unexpected response shape from {path}")
        return data

    async def get_financial_snapshot(self, user_id: str) -> FinancialSnapshot:
        """
        Fetch the user's current monthly totals.

        Missing or null fields come back as 0.

        Raises:
            UserNotFoundError: Provider has no profile for the user
            SnapshotProviderError: On timeout, HTTP errors, or invalid response
        """
        data = await self._get_json(f"/users/{self._user_segment(user_id)}/financial-summary", user_id)
        return FinancialSnapshot.from_mapping(data)

    async def get_goals(self, user_id: str) -> List[Goal]:
        """
        Fetch all of the user's goals, completed ones included.

        Raises:
            UserNotFoundError: Provider has no profile for the user
            SnapshotProviderError: On timeout, HTTP errors, or invalid response
        """
        data = await self._get_json(f"/users/{self._user_segment(user_id)}/goals", user_id)
        try:
            return [Goal.from_mapping(goal) for goal in data.get("goals", [])]
        except (AttributeError, TypeError) as e:
            raise SnapshotProviderError(f"Invalid goal data from snapshot API: {e}") from e
