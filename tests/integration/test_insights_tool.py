"""
Integration tests for the board_insights MCP tool.

Needs MONDAY_TEST_BOARD_ID pointing at a board the token can read.
"""

import os

import pytest

from server import board_insights

BOARD_ID = os.environ.get("MONDAY_TEST_BOARD_ID")

pytestmark = pytest.mark.skipif(not BOARD_ID, reason="MONDAY_TEST_BOARD_ID not set")


@pytest.mark.integration
def test_count_items() -> None:
    result = board_insights(BOARD_ID, aggregations=[{"column_id": "item_id", "function": "COUNT"}])

    assert "error" not in result
    assert result["row_count"] == 1
    assert isinstance(result["rows"][0]["COUNT_item_id_0"], (int, float))


@pytest.mark.integration
def test_count_per_group() -> None:
    result = board_insights(
        BOARD_ID,
        aggregations=[{"column_id": "group"}, {"column_id": "item_id", "function": "COUNT"}],
        group_by=["group"],
    )

    assert "error" not in result
    for row in result["rows"]:
        assert set(row) == {"group", "COUNT_item_id_0"}
