"""
Board insights tool implementation.

Compiles the aggregation spec, runs it, and flattens the rows.
"""

import json

from adapters.aggregate import run_aggregate
from logging_config import logger
from models import AggregationSpec, CellValue, InsightsResult
from query.builder import build_aggregation_query
from query.results import flatten_rows

NO_RESULTS_MESSAGE = "No board insights found for the given query."


def render_rows(rows: list[dict[str, CellValue]]) -> str:
    """Human/LLM-readable rendering of flattened rows."""
    if not rows:
        return NO_RESULTS_MESSAGE
    return f"Board insights result ({len(rows)} rows):\n{json.dumps(rows, indent=2)}"


def do_board_insights(spec: AggregationSpec) -> InsightsResult:
    """
    Aggregate a board's items.

    The query is compiled before any API call, so an unsupported function
    costs no round trip.

    Args:
        spec: Validated spec (board id already in string form)

    Returns:
        InsightsResult; a null aggregate and zero rows both mean no results

    Raises:
        UnsupportedFunctionError: A requested function can't be expressed
        MondayError: Propagated unchanged from the adapter
    """
    query = build_aggregation_query(spec)
    logger.debug(
        f"board_insights {spec.table_id}: {len(query.select)} selects, "
        f"group_by={query.group_by}"
    )

    rows = flatten_rows(run_aggregate(query))
    return InsightsResult(table_id=spec.table_id, rows=rows, content=render_rows(rows))
