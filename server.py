#!/usr/bin/env python3
"""
monday.com MCP Server

Read-only tools that let agents find and summarize monday.com data.

Tools:
- search: Boards, docs and folders by name
- board_insights: Filter, group and aggregate a board's items

Documentation is provided via MCP Resources, not a tool.

Architecture:
- query/: Pure functions (no MCP, no API calls)
- adapters/: Thin GraphQL wrappers
- tools/: Tool implementations (business logic)
- server.py: Thin MCP wrappers (this file)
"""

import os
import signal
from typing import Any

from mcp.server.fastmcp import FastMCP

from api_config import DEFAULT_INSIGHTS_LIMIT, LOG_LEVEL, SEARCH_LIMIT
from logging_config import configure_logging
from models import AggregationSpec, ErrorKind, MondayError, SearchRequest
from query.functions import REDUCING_FUNCTIONS, TRANSFORMING_FUNCTIONS
from tools import do_search, do_board_insights
from validation import (
    coerce_board_id,
    parse_aggregations,
    parse_filters,
    parse_order_by,
    parse_search_type,
    validate_insights_limit,
    validate_page,
    validate_search_limit,
)

# Initialize MCP server
mcp = FastMCP("monday.com")


def _invalid_input(message: str) -> dict[str, Any]:
    return {"error": True, "kind": ErrorKind.INVALID_INPUT.value, "message": message}


# ============================================================================
# TOOLS (thin wrappers)
# ============================================================================

@mcp.tool()
def search(
    search_type: str,
    search_term: str | None = None,
    page: int = 1,
    limit: int = SEARCH_LIMIT,
    workspace_ids: list[int] | None = None,
) -> dict[str, Any]:
    """
    Search within monday.com for boards, documents or folders.

    For users and teams, workspaces, items and groups use the dedicated tools.

    IMPORTANT: ids returned by this tool are prefixed with the type of the
    object (e.g. doc-123, board-456, folder-789). When passing ids to other
    tools, remove the prefix and pass just the number.

    Args:
        search_type: 'BOARD' | 'DOCUMENT' | 'FOLDER'
        search_term: Text to look for in names. Optional.
        page: Page number to get (default 1)
        limit: Number of results per page (max and default 100)
        workspace_ids: Only search in these workspaces

    Returns:
        results: List of {id, title, url?}
        disclaimer: Present when results were NOT filtered by search_term;
            filter them yourself
    """
    try:
        request = SearchRequest(
            entity_kind=parse_search_type(search_type),
            search_term=search_term,
            workspace_ids=workspace_ids,
            page=validate_page(page),
            limit=validate_search_limit(limit),
        )
        return do_search(request).to_dict()
    except MondayError as e:
        return e.to_dict()
    except ValueError as e:
        return _invalid_input(str(e))


@mcp.tool()
def board_insights(
    board_id: int | str,
    aggregations: list[dict[str, Any]] | None = None,
    group_by: list[str] | None = None,
    limit: int = DEFAULT_INSIGHTS_LIMIT,
    filters: list[dict[str, Any]] | None = None,
    filters_operator: str = "and",
    order_by: list[dict[str, Any]] | None = None,
) -> dict[str, Any]:
    """
    Calculate insights about a board's data by filtering, grouping and
    aggregating columns.

    Use it for summaries: total item count, items per status, sums per
    person, and so on. If you don't know the board's column ids or status
    labels, read the board's structure first.

    For some columns the human-friendly label comes back under
    'LABEL_<column_id>_0' (e.g. column 'status_123' → 'LABEL_status_123_0').

    Args:
        board_id: The board to aggregate
        aggregations: List of {column_id, function?}. Leave function out for the
            raw column value. Transforming functions (LABEL, COLOR, PERSON,
            DATE_TRUNC_*, UPPER, LENGTH, ...) are grouped by automatically.
            CASE, BETWEEN, LEFT, RAW and NONE are not supported.
        group_by: Column ids to group by
        limit: Maximum rows (default and max 1000)
        filters: List of {column_id, compare_value, operator, compare_attribute?}
        filters_operator: 'and' | 'or'
        order_by: List of {column_id, direction: 'asc' | 'desc'}

    Returns:
        content: Readable rendering of the rows
        rows: One dict per result row, keyed by output key
        row_count: Number of rows
    """
    if not aggregations:
        return {"content": 'Input must contain the "aggregations" field.', "rows": [], "row_count": 0}

    try:
        spec = AggregationSpec(
            table_id=coerce_board_id(board_id),
            aggregations=parse_aggregations(aggregations),
            group_by=list(group_by or []),
            filters=parse_filters(filters, filters_operator),
            order_by=parse_order_by(order_by),
            limit=validate_insights_limit(limit),
        )
        return do_board_insights(spec).to_dict()
    except MondayError as e:
        return e.to_dict()
    except ValueError as e:
        return _invalid_input(str(e))


# ============================================================================
# RESOURCES: self-documenting MCP capabilities
# ============================================================================

@mcp.resource("monday://docs/overview")
def docs_overview() -> str:
    """Overview of the monday.com MCP server."""
    return """# monday.com MCP

Read-only access to monday.com boards, docs and folders.

## Tools

| Tool | Purpose |
|------|---------|
| `search` | Find boards, docs or folders by name |
| `board_insights` | Count, sum, average... a board's items, grouped and filtered |

## Workflow

1. **search** for the board (ids come back as `board-123`)
2. Strip the prefix and call **board_insights** with `board_id=123`

## Resources

- `monday://docs/overview` — This overview
- `monday://docs/search` — Search tool details
- `monday://docs/insights` — Board insights details
"""


@mcp.resource("monday://docs/search")
def docs_search() -> str:
    """Detailed documentation for the search tool."""
    return f"""# search

## Parameters

| Param | Type | Description |
|-------|------|-------------|
| `search_type` | str | BOARD, DOCUMENT or FOLDER |
| `search_term` | str | Optional text to match in names |
| `page` | int | 1-based page (default 1) |
| `limit` | int | Page size, at most {SEARCH_LIMIT} |
| `workspace_ids` | list[int] | Restrict to workspaces |

## How term search works

monday.com listings can't filter by text. With a `search_term` the server
reads the whole listing in one request, then:

- **{SEARCH_LIMIT} items or fewer**: every item is returned with a
  `disclaimer`. Filter them yourself.
- **More than {SEARCH_LIMIT}**: names are matched case-insensitively and
  `page`/`limit` are applied to the matches. No disclaimer.

## Response Shape

```json
{{
  "results": [
    {{"id": "board-123", "title": "Roadmap", "url": "https://..."}}
  ]
}}
```

Folders have no `url`.
"""


@mcp.resource("monday://docs/insights")
def docs_insights() -> str:
    """Detailed documentation for the board_insights tool."""
    transforming = ", ".join(sorted(TRANSFORMING_FUNCTIONS))
    reducing = ", ".join(sorted(REDUCING_FUNCTIONS))
    return f"""# board_insights

## Output keys

- Plain column: the column id (`status`)
- Function: `FUNCTION_column_N`, N counting repeats (`SUM_numbers_0`, `SUM_numbers_1`)

## Functions

- Reducing (one value per group): {reducing}
- Transforming (grouped automatically): {transforming}
- Not supported: CASE, BETWEEN, LEFT, RAW, NONE

## Grouping

Every `group_by` column is also selected, so each row shows its group.

## Example

```json
{{
  "board_id": 123,
  "aggregations": [{{"column_id": "status"}}, {{"column_id": "item_id", "function": "COUNT"}}],
  "group_by": ["status"]
}}
```

→ rows like `{{"status": "Done", "COUNT_item_id_0": 5}}`
"""


# ============================================================================
# SERVER ENTRY POINT
# ============================================================================

def _shutdown_handler(signum: int, frame: object) -> None:
    """Handle termination signals by exiting immediately.

    os._exit() is required because sys.exit() raises SystemExit,
    which asyncio's event loop catches and ignores.
    """
    os._exit(0)


def run() -> None:
    configure_logging(LOG_LEVEL)
    signal.signal(signal.SIGTERM, _shutdown_handler)
    signal.signal(signal.SIGINT, _shutdown_handler)
    mcp.run()


if __name__ == "__main__":
    run()
