"""
Aggregation query builder — pure function, no I/O.

Compiles an AggregationSpec into the AggregateQueryInput tree:

    {from, select, group_by, query?, limit?}

Select order is aggregation order, followed by one synthesized column select
for each group-by key that nothing selected. Snapshot tests depend on it.
"""

from typing import Any

from models import (
    AggregationQuery,
    AggregationSpec,
    ColumnSelect,
    FilterSpec,
    FunctionCategory,
    FunctionSelect,
    OrderBy,
    SelectExpression,
    UnsupportedFunctionError,
)
from .aliases import AliasAllocator
from .functions import classify_function


def build_from(table_id: str) -> dict[str, str]:
    """FROM clause for a board."""
    return {"id": str(table_id), "type": "TABLE"}


def build_filter(
    filters: FilterSpec | None, order_by: list[OrderBy] | None = None
) -> dict[str, Any] | None:
    """
    Translate filters and ordering into the backend ItemsQuery shape.

    Returns None when there is neither, so the backend sees "no filter"
    rather than an empty rule list. compare_attribute is only sent when set.
    """
    if filters is None and not order_by:
        return None

    query: dict[str, Any] = {}
    if filters is not None:
        rules: list[dict[str, Any]] = []
        for rule in filters.rules:
            wire_rule: dict[str, Any] = {
                "column_id": rule.column_id,
                "compare_value": rule.compare_value,
                "operator": rule.compare_operator,
            }
            if rule.compare_attribute is not None:
                wire_rule["compare_attribute"] = rule.compare_attribute
            rules.append(wire_rule)
        query["rules"] = rules
        query["operator"] = filters.combine_operator.value

    if order_by:
        query["order_by"] = [
            {"column_id": order.column_id, "direction": order.direction.value}
            for order in order_by
        ]

    return query


def _function_select(function_name: str, column_id: str, output_key: str) -> FunctionSelect:
    # The wrapped column keeps its own id as alias; only the outer key is caller-visible
    return FunctionSelect(
        function_name=function_name,
        params=[ColumnSelect(column_id=column_id, output_key=column_id)],
        output_key=output_key,
    )


def build_select_and_group_by(
    spec: AggregationSpec,
) -> tuple[list[SelectExpression], list[str]]:
    """
    Build the select list and group-by list for a spec.

    Raises:
        UnsupportedFunctionError: First aggregation whose function can't be
            expressed. Nothing is returned in that case.
    """
    aliases = AliasAllocator()
    caller_group_by = list(spec.group_by)
    group_by = list(caller_group_by)
    select: list[SelectExpression] = []

    for item in spec.aggregations:
        if item.function is None:
            output_key = aliases.allocate(None, item.column_id)
            # Same column selected twice yields the same key and value
            if any(element.output_key == output_key for element in select):
                continue
            select.append(ColumnSelect(column_id=item.column_id, output_key=output_key))
            continue

        category = classify_function(item.function)
        if category is FunctionCategory.UNSUPPORTED:
            raise UnsupportedFunctionError(item.function)

        output_key = aliases.allocate(item.function, item.column_id)

        if category is FunctionCategory.TRANSFORMING:
            # Group by the transformed value unless the raw column already groups
            if item.column_id not in caller_group_by and output_key not in group_by:
                group_by.append(output_key)

        select.append(_function_select(item.function, item.column_id, output_key))

    for key in group_by:
        if not any(element.output_key == key for element in select):
            select.append(ColumnSelect(column_id=key, output_key=key))

    return select, group_by


def build_aggregation_query(spec: AggregationSpec) -> AggregationQuery:
    """
    Compile a full aggregation request.

    All-or-nothing: an unsupported function anywhere fails the whole build.

    Args:
        spec: Validated aggregation spec

    Returns:
        AggregationQuery ready for adapters.aggregate.run_aggregate()
    """
    select, group_by = build_select_and_group_by(spec)
    return AggregationQuery(
        from_clause=build_from(spec.table_id),
        select=select,
        group_by=group_by,
        query=build_filter(spec.filters, spec.order_by),
        limit=spec.limit,
    )
