"""
Shared pytest fixtures for monday-mcp tests.

Fixtures are loaded from the fixtures/ directory at project root.
Raw GraphQL payloads stay as dicts; adapter tests parse them through the
real adapter code.

HTTP client mocking is also provided here for testing adapters without
hitting the real monday.com API.
"""

import json
from pathlib import Path
from typing import Generator
from unittest.mock import MagicMock, patch

import pytest

from adapters.services import clear_service_cache

# Project root for fixture loading
PROJECT_ROOT = Path(__file__).parent.parent
FIXTURES_DIR = PROJECT_ROOT / "fixtures"


def load_fixture(category: str, name: str) -> dict:
    """
    Load a JSON fixture by category and name.

    Args:
        category: Subdirectory (aggregate, listings)
        name: Fixture name without extension

    Example:
        load_fixture("aggregate", "grouped_by_status")  # fixtures/aggregate/grouped_by_status.json
    """
    fixture_path = FIXTURES_DIR / category / f"{name}.json"
    with open(fixture_path) as f:
        return json.load(f)


@pytest.fixture(autouse=True)
def _fresh_http_client() -> Generator[None, None, None]:
    """No test sees a client cached by another test."""
    clear_service_cache()
    yield
    clear_service_cache()


# ============================================================================
# Aggregate Fixtures
# ============================================================================

@pytest.fixture
def aggregate_grouped_data() -> dict:
    """`data` of an aggregate response: COUNT(item_id) grouped by status."""
    return load_fixture("aggregate", "grouped_by_status")["data"]


@pytest.fixture
def aggregate_mixed_data() -> dict:
    """`data` of an aggregate response covering every value variant."""
    return load_fixture("aggregate", "mixed_values")["data"]


# ============================================================================
# HTTP Client Mocking Infrastructure
# ============================================================================

@pytest.fixture
def mock_http_client() -> MagicMock:
    """
    Create a mock httpx.Client.

    Use with patch to replace the real client:

        def test_something(mock_http_client):
            mock_http_client.post.return_value = graphql_response({"boards": []})
            with patch("adapters.graphql.get_http_client", return_value=mock_http_client):
                result = execute_graphql("query GetBoards { boards { id } }")
    """
    return MagicMock()


@pytest.fixture
def patch_http_client(mock_http_client: MagicMock) -> Generator[MagicMock, None, None]:
    """
    Fixture that patches get_http_client and yields the mock.

    Example:
        def test_something(patch_http_client):
            patch_http_client.post.return_value = graphql_response({"boards": []})
            result = list_boards(1, 10)  # Uses mocked client
    """
    with patch("adapters.graphql.get_http_client", return_value=mock_http_client):
        yield mock_http_client
