"""
Type definitions for monday-mcp.

Dataclasses defining the contracts between layers:
- Adapters produce these structures from GraphQL responses
- query/ consumes and produces them without doing any I/O
- Tools wire everything together

These types make the adapter→query contract explicit and IDE-checkable.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


# ============================================================================
# ERROR TYPES
# ============================================================================

class ErrorKind(Enum):
    """Categories of errors for consistent handling."""
    AUTH_EXPIRED = "auth_expired"        # Token rejected by the API
    AUTH_REQUIRED = "auth_required"      # No token configured
    NOT_FOUND = "not_found"              # Resource doesn't exist
    PERMISSION_DENIED = "permission_denied"  # No access to resource
    RATE_LIMITED = "rate_limited"        # Hit API complexity/rate budget
    NETWORK_ERROR = "network_error"      # Connection failed
    TIMEOUT = "timeout"                  # Request timed out
    INVALID_INPUT = "invalid_input"      # Bad parameters
    API_ERROR = "api_error"              # GraphQL returned an errors payload
    UNKNOWN = "unknown"                  # Unexpected error


class MondayError(Exception):
    """
    Structured error for consistent handling across layers.

    Adapters raise these on API failures.
    server.py catches and formats them for the MCP response.
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for MCP response."""
        return {
            "error": True,
            "kind": self.kind.value,
            "message": self.message,
            "retryable": self.retryable,
            **self.details,
        }


class UnsupportedFunctionError(MondayError):
    """An aggregation requested a function the query builder refuses to emit."""

    def __init__(self, function_name: str):
        super().__init__(
            ErrorKind.INVALID_INPUT,
            f"Complex function {function_name} is not supported",
            details={"function": function_name},
        )
        self.function_name = function_name


class UnsupportedSearchTypeError(MondayError):
    """Search was asked for an entity kind with no listing behind it."""

    def __init__(self, search_type: object):
        super().__init__(
            ErrorKind.INVALID_INPUT,
            f"Unsupported search type: {search_type}",
            details={"search_type": str(search_type)},
        )
        self.search_type = search_type


# ============================================================================
# AGGREGATION REQUEST TYPES
# ============================================================================

class FunctionCategory(Enum):
    """How an aggregate function affects grouping."""
    UNSUPPORTED = "unsupported"
    TRANSFORMING = "transforming"  # Changes each row's value; result is a grouping key
    REDUCING = "reducing"          # One scalar per group


class FilterOperator(Enum):
    """Logical combinator for filter rules (GraphQL ItemsQueryOperator)."""
    AND = "and"
    OR = "or"


class OrderDirection(Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass
class AggregationItem:
    """One column to select, optionally wrapped in an aggregate function."""
    column_id: str
    function: str | None = None  # e.g. COUNT, SUM, LABEL; None for the raw column


@dataclass
class FilterRule:
    """A single item filter, passed through to the backend field-for-field."""
    column_id: str
    compare_value: Any
    compare_operator: str  # ItemsQueryRuleOperator value, e.g. "any_of"
    compare_attribute: str | None = None


@dataclass
class FilterSpec:
    rules: list[FilterRule]
    combine_operator: FilterOperator = FilterOperator.AND


@dataclass
class OrderBy:
    column_id: str
    direction: OrderDirection = OrderDirection.ASC


@dataclass
class AggregationSpec:
    """
    A caller's "summarize this board" request.

    table_id is the board id in its string form. Everything else is optional
    except the aggregations themselves.
    """
    table_id: str
    aggregations: list[AggregationItem]
    group_by: list[str] = field(default_factory=list)
    filters: FilterSpec | None = None
    order_by: list[OrderBy] = field(default_factory=list)
    limit: int | None = None


@dataclass
class ColumnSelect:
    """Plain column reference in a select list."""
    column_id: str
    output_key: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": "COLUMN",
            "column": {"column_id": self.column_id},
            "as": self.output_key,
        }


@dataclass
class FunctionSelect:
    """Function call over one or more select expressions."""
    function_name: str
    params: list["SelectExpression"]
    output_key: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": "FUNCTION",
            "function": {
                "function": self.function_name,
                "params": [param.to_dict() for param in self.params],
            },
            "as": self.output_key,
        }


SelectExpression = ColumnSelect | FunctionSelect


@dataclass
class AggregationQuery:
    """
    Compiled query-expression tree for the aggregate endpoint.

    `query` is the backend filter clause (rules, operator, order_by) already
    in wire shape; None means "no filter", never an empty rule list.
    """
    from_clause: dict[str, str]  # {"id": <board id>, "type": "TABLE"}
    select: list[SelectExpression]
    group_by: list[str]
    query: dict[str, Any] | None = None
    limit: int | None = None

    def to_dict(self) -> dict[str, Any]:
        """Wire shape for the AggregateQueryInput GraphQL variable."""
        result: dict[str, Any] = {
            "from": dict(self.from_clause),
            "select": [element.to_dict() for element in self.select],
            "group_by": [{"column_id": column_id} for column_id in self.group_by],
        }
        if self.query is not None:
            result["query"] = self.query
        if self.limit is not None:
            result["limit"] = self.limit
        return result


# ============================================================================
# AGGREGATION RESULT TYPES
# ============================================================================

# Values a flattened aggregation record can hold
CellValue = str | int | float | bool | None


@dataclass(frozen=True)
class ReductionValue:
    """AggregateBasicAggregationResult: the scalar produced by COUNT/SUM/..."""
    result: int | float | None


@dataclass(frozen=True)
class GroupValue:
    """AggregateGroupByResult: the typed value of a grouping dimension."""
    value: str | int | float | bool | None


# Exactly one variant is active; None is the explicit null value
AggregateValue = ReductionValue | GroupValue | None


@dataclass
class ResultEntry:
    alias: str
    value: AggregateValue


@dataclass
class ResultRow:
    entries: list[ResultEntry] = field(default_factory=list)


@dataclass
class InsightsResult:
    """Board insights tool result: flattened rows plus a readable rendering."""
    table_id: str
    rows: list[dict[str, CellValue]]
    content: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "board_id": self.table_id,
            "content": self.content,
            "row_count": len(self.rows),
            "rows": self.rows,
        }


# ============================================================================
# SEARCH TYPES
# ============================================================================

class EntityKind(Enum):
    """Searchable entity kinds (one backend listing each)."""
    BOARD = "BOARD"
    DOCUMENT = "DOCUMENT"
    FOLDER = "FOLDER"


@dataclass
class SearchRequest:
    entity_kind: EntityKind
    search_term: str | None = None
    workspace_ids: list[int] | None = None
    page: int = 1
    limit: int = 100


@dataclass
class ListedEntity:
    """One row from a boards/docs/folders listing."""
    id: str
    name: str | None
    url: str | None = None


@dataclass
class PageOutcome:
    """
    What the virtual paginator decided.

    filtered_locally: the term was applied here and the page sliced here.
    caller_must_filter: the term was NOT applied; the caller gets every item
    and a disclaimer telling it to filter.
    """
    items: list[ListedEntity]
    filtered_locally: bool = False
    caller_must_filter: bool = False


@dataclass
class SearchResult:
    """A single search hit with a kind-prefixed id."""
    id: str
    title: str
    url: str | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"id": self.id, "title": self.title}
        if self.url is not None:
            result["url"] = self.url
        return result


@dataclass
class SearchResponse:
    results: list[SearchResult] = field(default_factory=list)
    disclaimer: str | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        if self.disclaimer is not None:
            result["disclaimer"] = self.disclaimer
        result["results"] = [r.to_dict() for r in self.results]
        return result
