"""
Aggregate adapter — runs a compiled aggregation query.

Parses the union-typed `value` of each result entry into the explicit
ReductionValue / GroupValue variants so nothing downstream probes fields.
"""

from typing import Any

from adapters.graphql import execute_graphql
from logging_config import log_api_result
from models import (
    AggregateValue,
    AggregationQuery,
    GroupValue,
    ReductionValue,
    ResultEntry,
    ResultRow,
)

__all__ = [
    "run_aggregate",
    "parse_aggregate_value",
    "parse_result_rows",
]


AGGREGATE_QUERY = """
query aggregateBoardInsights($query: AggregateQueryInput!) {
  aggregate(query: $query) {
    results {
      entries {
        alias
        value {
          ... on AggregateBasicAggregationResult {
            result
          }
          ... on AggregateGroupByResult {
            value_string
            value_int
            value_float
            value_boolean
          }
        }
      }
    }
  }
}
"""

# Typed fields of AggregateGroupByResult; the backend populates at most one
GROUP_BY_VALUE_FIELDS = ("value_string", "value_int", "value_float", "value_boolean")


def parse_aggregate_value(raw: dict[str, Any] | None) -> AggregateValue:
    """
    Turn one entry's `value` object into its variant.

    Returns None for an explicit null value.
    """
    if raw is None:
        return None
    if "result" in raw:
        return ReductionValue(raw["result"])
    for field_name in GROUP_BY_VALUE_FIELDS:
        if raw.get(field_name) is not None:
            return GroupValue(raw[field_name])
    return GroupValue(None)


def parse_result_rows(results: list[dict[str, Any]] | None) -> list[ResultRow]:
    rows: list[ResultRow] = []
    for result_set in results or []:
        entries = [
            ResultEntry(
                alias=entry.get("alias") or "",
                value=parse_aggregate_value(entry.get("value")),
            )
            for entry in (result_set.get("entries") or [])
        ]
        rows.append(ResultRow(entries=entries))
    return rows


def run_aggregate(query: AggregationQuery) -> list[ResultRow] | None:
    """
    Execute an aggregation query.

    Args:
        query: Compiled tree from query.builder.build_aggregation_query()

    Returns:
        Result rows in backend order, or None when `aggregate` came back null

    Raises:
        MondayError: On API failure
    """
    data = execute_graphql(AGGREGATE_QUERY, {"query": query.to_dict()})
    aggregate = data.get("aggregate")
    if aggregate is None:
        log_api_result("aggregate", 0)
        return None

    rows = parse_result_rows(aggregate.get("results"))
    log_api_result("aggregate", len(rows))
    return rows
