"""
Input validation and coercion at the tool boundary.

Handles:
- Search paging caps and search type tags
- Board id coercion to the string form the API expects
- Aggregation, filter and ordering arguments → typed models
- Kind-prefixed ids from search results → bare ids

Everything past this module assumes already-validated input.
"""

import re
from typing import Any

from api_config import MAX_INSIGHTS_LIMIT, SEARCH_LIMIT
from models import (
    AggregationItem,
    EntityKind,
    FilterOperator,
    FilterRule,
    FilterSpec,
    OrderBy,
    OrderDirection,
    UnsupportedSearchTypeError,
)

# =============================================================================
# PATTERNS
# =============================================================================

BOARD_ID_PATTERN = re.compile(r'^\d+$')
PREFIXED_ID_PATTERN = re.compile(r'^(board|doc|folder)-(\d+)$')

# Tags accepted for each entity kind, singular and plural
SEARCH_TYPE_ALIASES: dict[str, EntityKind] = {
    "BOARD": EntityKind.BOARD,
    "BOARDS": EntityKind.BOARD,
    "DOCUMENT": EntityKind.DOCUMENT,
    "DOCUMENTS": EntityKind.DOCUMENT,
    "DOC": EntityKind.DOCUMENT,
    "DOCS": EntityKind.DOCUMENT,
    "FOLDER": EntityKind.FOLDER,
    "FOLDERS": EntityKind.FOLDER,
}


# =============================================================================
# SEARCH
# =============================================================================

def validate_search_limit(limit: int) -> int:
    """Reject page sizes the search tool doesn't serve."""
    if isinstance(limit, bool) or not isinstance(limit, int):
        raise ValueError(f"limit must be an integer, got {limit!r}")
    if limit < 1 or limit > SEARCH_LIMIT:
        raise ValueError(f"limit must be between 1 and {SEARCH_LIMIT}, got {limit}")
    return limit


def validate_page(page: int) -> int:
    if isinstance(page, bool) or not isinstance(page, int):
        raise ValueError(f"page must be an integer, got {page!r}")
    if page < 1:
        raise ValueError(f"page must be 1 or greater, got {page}")
    return page


def parse_search_type(value: str | EntityKind) -> EntityKind:
    """
    Resolve a search type tag to an EntityKind.

    Raises:
        UnsupportedSearchTypeError: Unknown tag (the message names it)
    """
    if isinstance(value, EntityKind):
        return value
    kind = SEARCH_TYPE_ALIASES.get(str(value).strip().upper())
    if kind is None:
        raise UnsupportedSearchTypeError(value)
    return kind


def strip_id_prefix(value: str) -> str:
    """
    Turn a search result id back into a bare id.

    "board-123" → "123". Ids without a known prefix are returned unchanged.
    """
    match = PREFIXED_ID_PATTERN.match(value.strip())
    return match.group(2) if match else value.strip()


# =============================================================================
# BOARD INSIGHTS
# =============================================================================

def coerce_board_id(value: int | str) -> str:
    """Board ids travel as strings; accept ints, digit strings and board-N ids."""
    if isinstance(value, bool):
        raise ValueError(f"Invalid board id: {value!r}")
    text = strip_id_prefix(str(value))
    if not BOARD_ID_PATTERN.match(text):
        raise ValueError(f"Invalid board id: {value!r}\nBoard ids contain only digits")
    return text


def validate_insights_limit(limit: int) -> int:
    if isinstance(limit, bool) or not isinstance(limit, int):
        raise ValueError(f"limit must be an integer, got {limit!r}")
    if limit < 1 or limit > MAX_INSIGHTS_LIMIT:
        raise ValueError(f"limit must be between 1 and {MAX_INSIGHTS_LIMIT}, got {limit}")
    return limit


def _pick(raw: dict[str, Any], *keys: str) -> Any:
    """First present key; tool callers send either snake_case or camelCase."""
    for key in keys:
        if key in raw:
            return raw[key]
    return None


def _require_column_id(raw: dict[str, Any], what: str) -> str:
    column_id = _pick(raw, "column_id", "columnId")
    if not isinstance(column_id, str) or not column_id:
        raise ValueError(f"{what} needs a non-empty column_id, got {raw!r}")
    return column_id


def parse_aggregations(raw: list[dict[str, Any]]) -> list[AggregationItem]:
    """[{column_id, function?}] → AggregationItem list. Function names are upper-cased."""
    items: list[AggregationItem] = []
    for entry in raw:
        column_id = _require_column_id(entry, "aggregation")
        function = _pick(entry, "function")
        items.append(
            AggregationItem(
                column_id=column_id,
                function=str(function).upper() if function else None,
            )
        )
    return items


def parse_aggregation_arg(value: str) -> AggregationItem:
    """
    Parse the CLI form of an aggregation.

    Accepts:
    - "status" → plain column
    - "COUNT:item_id" → function over a column
    """
    value = value.strip()
    if not value:
        raise ValueError("Aggregation is required")
    if ":" in value:
        function, _, column_id = value.partition(":")
        if not function or not column_id:
            raise ValueError(f"Expected FUNCTION:column, got {value!r}")
        return AggregationItem(column_id=column_id, function=function.upper())
    return AggregationItem(column_id=value)


def parse_filter_operator(value: str | None) -> FilterOperator:
    if value is None:
        return FilterOperator.AND
    try:
        return FilterOperator(value.strip().lower())
    except ValueError:
        raise ValueError(f"filters_operator must be 'and' or 'or', got {value!r}") from None


def parse_filters(
    raw: list[dict[str, Any]] | None, operator: str | None = None
) -> FilterSpec | None:
    """[{column_id, compare_value, operator, compare_attribute?}] → FilterSpec."""
    if raw is None:
        return None
    rules: list[FilterRule] = []
    for entry in raw:
        column_id = _require_column_id(entry, "filter rule")
        rule_operator = _pick(entry, "operator", "compare_operator", "compareOperator")
        if not rule_operator:
            raise ValueError(f"filter rule for {column_id!r} needs an operator")
        rules.append(
            FilterRule(
                column_id=column_id,
                compare_value=_pick(entry, "compare_value", "compareValue"),
                compare_operator=str(rule_operator),
                compare_attribute=_pick(entry, "compare_attribute", "compareAttribute"),
            )
        )
    return FilterSpec(rules=rules, combine_operator=parse_filter_operator(operator))


def parse_order_by(raw: list[dict[str, Any]] | None) -> list[OrderBy]:
    orders: list[OrderBy] = []
    for entry in raw or []:
        column_id = _require_column_id(entry, "order_by")
        direction = _pick(entry, "direction") or "asc"
        try:
            orders.append(OrderBy(column_id=column_id, direction=OrderDirection(str(direction).lower())))
        except ValueError:
            raise ValueError(f"direction must be 'asc' or 'desc', got {direction!r}") from None
    return orders
