"""Unit tests for the snapshot provider client"""

import asyncio
import httpx
import pytest
from unittest.mock import AsyncMock, patch
from finhealth_gateway.infrastructure.clients.snapshot import SnapshotClient
from finhealth_gateway.domain.exceptions import SnapshotProviderError, UserNotFoundError


def _response(status_code: int, payload) -> httpx.Response:
    return httpx.Response(status_code, json=payload, request=httpx.Request("GET", "http://provider/"))


@patch("httpx.AsyncClient.get", new_callable=AsyncMock)
def test_user_id_is_a_single_path_segment(mock_get: AsyncMock):
    """Reserved characters in the id cannot redirect the request to another resource"""
    mock_get.return_value = _response(200, {"goals": []})
    client = SnapshotClient(base_url="http://provider")

    asyncio.run(client.get_goals("user_healthy/financial-summary#"))

    assert mock_get.call_args.args[0] == "http://provider/users/user_healthy%2Ffinancial-summary%23/goals"


@patch("httpx.AsyncClient.get", new_callable=AsyncMock)
def test_query_and_dot_segments_are_encoded(mock_get: AsyncMock):
    mock_get.return_value = _response(200, {"income": 1})
    client = SnapshotClient(base_url="http://provider")

    asyncio.run(client.get_financial_snapshot("a?b=1"))
    assert mock_get.call_args.args[0] == "http://provider/users/a%3Fb%3D1/financial-summary"

    asyncio.run(client.get_financial_snapshot(".."))
    assert mock_get.call_args.args[0] == "http://provider/users/%2E%2E/financial-summary"


@patch("httpx.AsyncClient.get", new_callable=AsyncMock)
def test_plain_user_id_unchanged(mock_get: AsyncMock):
    mock_get.return_value = _response(200, {"income": 5000, "expenses": None})
    client = SnapshotClient(base_url="http://provider")

    snapshot = asyncio.run(client.get_financial_snapshot("user_demo"))

    assert mock_get.call_args.args[0] == "http://provider/users/user_demo/financial-summary"
    assert snapshot.income == 5000
    assert snapshot.expenses == 0.0


@patch("httpx.AsyncClient.get", new_callable=AsyncMock)
def test_not_found_maps_to_unknown_user(mock_get: AsyncMock):
    mock_get.return_value = _response(404, {"detail": "user not found"})

    with pytest.raises(UserNotFoundError):
        asyncio.run(SnapshotClient(base_url="http://provider").get_goals("ghost"))


@patch("httpx.AsyncClient.get", new_callable=AsyncMock)
def test_server_error_maps_to_provider_error(mock_get: AsyncMock):
    mock_get.return_value = _response(502, {})

    with pytest.raises(SnapshotProviderError) as exc_info:
        asyncio.run(SnapshotClient(base_url="http://provider").get_goals("user_demo"))
    assert not isinstance(exc_info.value, UserNotFoundError)


@patch("httpx.AsyncClient.get", new_callable=AsyncMock)
def test_malformed_goals_payload(mock_get: AsyncMock):
    mock_get.return_value = _response(200, {"goals": None})

    with pytest.raises(SnapshotProviderError):
        asyncio.run(SnapshotClient(base_url="http://provider").get_goals("user_demo"))
