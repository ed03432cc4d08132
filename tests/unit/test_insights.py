"""Tests for the board insights tool."""

import json
from unittest.mock import MagicMock, patch

import pytest

from models import (
    AggregationItem,
    AggregationSpec,
    GroupValue,
    MondayError,
    ErrorKind,
    ReductionValue,
    ResultEntry,
    ResultRow,
    UnsupportedFunctionError,
)
from tools.insights import NO_RESULTS_MESSAGE, do_board_insights, render_rows


def _spec(*items: AggregationItem, group_by: list[str] | None = None) -> AggregationSpec:
    return AggregationSpec(table_id="42", aggregations=list(items), group_by=group_by or [])


class TestRenderRows:

    def test_no_rows(self) -> None:
        assert render_rows([]) == NO_RESULTS_MESSAGE

    def test_rows_are_counted_and_dumped(self) -> None:
        rows = [{"status": "Done", "COUNT_item_id_0": 5}]
        content = render_rows(rows)
        header, _, body = content.partition("\n")
        assert header == "Board insights result (1 rows):"
        assert json.loads(body) == rows


class TestDoBoardInsights:

    @patch("tools.insights.run_aggregate")
    def test_builds_runs_and_flattens(self, mock_run: MagicMock) -> None:
        mock_run.return_value = [
            ResultRow([
                ResultEntry("status", GroupValue("Done")),
                ResultEntry("COUNT_item_id_0", ReductionValue(5)),
            ]),
        ]

        result = do_board_insights(
            _spec(AggregationItem("status"), AggregationItem("item_id", "COUNT"), group_by=["status"])
        )

        query = mock_run.call_args.args[0]
        assert query.from_clause == {"id": "42", "type": "TABLE"}
        assert query.group_by == ["status"]
        assert result.rows == [{"status": "Done", "COUNT_item_id_0": 5}]
        assert result.to_dict()["row_count"] == 1
        assert result.content.startswith("Board insights result (1 rows):")

    @patch("tools.insights.run_aggregate")
    def test_null_aggregate_means_no_results(self, mock_run: MagicMock) -> None:
        mock_run.return_value = None

        result = do_board_insights(_spec(AggregationItem("item_id", "COUNT")))

        assert result.rows == []
        assert result.content == NO_RESULTS_MESSAGE

    @patch("tools.insights.run_aggregate")
    def test_unsupported_function_makes_no_call(self, mock_run: MagicMock) -> None:
        with pytest.raises(UnsupportedFunctionError):
            do_board_insights(_spec(AggregationItem("status", "CASE")))
        mock_run.assert_not_called()

    @patch("tools.insights.run_aggregate")
    def test_adapter_error_propagates_unchanged(self, mock_run: MagicMock) -> None:
        error = MondayError(ErrorKind.NOT_FOUND, "Board not found")
        mock_run.side_effect = error

        with pytest.raises(MondayError) as exc_info:
            do_board_insights(_spec(AggregationItem("item_id", "COUNT")))

        assert exc_info.value is error
