#!/usr/bin/env python3
"""
CLI interface for monday-mcp.

Usage:
    monday search BOARD --term "roadmap"
    monday insights 123 --agg status --agg COUNT:item_id --group-by status
    monday serve

This provides the same functionality as the MCP tools but via command line,
making it accessible to agents that don't support MCP.
"""

import argparse
import json
import sys

from api_config import DEFAULT_INSIGHTS_LIMIT, LOG_LEVEL, SEARCH_LIMIT
from logging_config import configure_logging
from models import AggregationSpec, MondayError, SearchRequest
from tools import do_search, do_board_insights
from validation import (
    coerce_board_id,
    parse_aggregation_arg,
    parse_filters,
    parse_order_by,
    parse_search_type,
    validate_insights_limit,
    validate_page,
    validate_search_limit,
)


def _parse_json_list(value: str | None, flag: str) -> list | None:
    if value is None:
        return None
    try:
        parsed = json.loads(value)
    except json.JSONDecodeError as e:
        raise ValueError(f"{flag} must be a JSON list: {e}") from None
    if not isinstance(parsed, list):
        raise ValueError(f"{flag} must be a JSON list, got {type(parsed).__name__}")
    return parsed


def cmd_search(args: argparse.Namespace) -> None:
    """Search boards, docs or folders."""
    request = SearchRequest(
        entity_kind=parse_search_type(args.type),
        search_term=args.term,
        workspace_ids=args.workspace or None,
        page=validate_page(args.page),
        limit=validate_search_limit(args.limit),
    )
    result = do_search(request)
    print(json.dumps(result.to_dict(), indent=2))


def cmd_insights(args: argparse.Namespace) -> None:
    """Aggregate a board's items."""
    spec = AggregationSpec(
        table_id=coerce_board_id(args.board_id),
        aggregations=[parse_aggregation_arg(value) for value in args.agg],
        group_by=args.group_by or [],
        filters=parse_filters(_parse_json_list(args.filters, "--filters"), args.filters_operator),
        order_by=parse_order_by(_parse_json_list(args.order_by, "--order-by")),
        limit=validate_insights_limit(args.limit),
    )
    result = do_board_insights(spec)
    print(json.dumps(result.to_dict(), indent=2))


def cmd_serve(args: argparse.Namespace) -> None:
    """Run the MCP server over stdio."""
    # Deferred so the CLI commands don't pay for the MCP import
    from server import run

    run()


def main() -> None:
    parser = argparse.ArgumentParser(
        description="monday.com search and board insights CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    monday search BOARD
    monday search DOCUMENT --term "onboarding" --limit 20
    monday search FOLDER --workspace 42 --workspace 43
    monday insights 123 --agg COUNT:item_id
    monday insights board-123 --agg status --agg COUNT:item_id --group-by status
    monday insights 123 --agg LABEL:status \\
        --filters '[{"column_id": "person", "compare_value": [1], "operator": "any_of"}]'
""",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # search
    search_p = subparsers.add_parser("search", help="Search boards, docs or folders")
    search_p.add_argument(
        "type",
        type=str.upper,
        choices=["BOARD", "DOCUMENT", "FOLDER"],
        help="What to search for",
    )
    search_p.add_argument("--term", help="Text to match in names")
    search_p.add_argument("--page", type=int, default=1, help="Page number (default: 1)")
    search_p.add_argument(
        "--limit",
        type=int,
        default=SEARCH_LIMIT,
        help=f"Results per page (default and max: {SEARCH_LIMIT})",
    )
    search_p.add_argument(
        "--workspace",
        type=int,
        action="append",
        help="Restrict to a workspace id (repeatable)",
    )
    search_p.set_defaults(func=cmd_search)

    # insights
    insights_p = subparsers.add_parser("insights", help="Aggregate a board's items")
    insights_p.add_argument("board_id", help="Board id (123 or board-123)")
    insights_p.add_argument(
        "--agg",
        action="append",
        required=True,
        help="column or FUNCTION:column (repeatable)",
    )
    insights_p.add_argument(
        "--group-by",
        action="append",
        help="Column id to group by (repeatable)",
    )
    insights_p.add_argument(
        "--limit",
        type=int,
        default=DEFAULT_INSIGHTS_LIMIT,
        help=f"Maximum rows (default: {DEFAULT_INSIGHTS_LIMIT})",
    )
    insights_p.add_argument("--filters", help="JSON list of filter rules")
    insights_p.add_argument(
        "--filters-operator",
        choices=["and", "or"],
        default="and",
        help="How filter rules combine (default: and)",
    )
    insights_p.add_argument("--order-by", help='JSON list of {"column_id", "direction"}')
    insights_p.set_defaults(func=cmd_insights)

    # serve
    serve_p = subparsers.add_parser("serve", help="Run the MCP server (stdio)")
    serve_p.set_defaults(func=cmd_serve)

    args = parser.parse_args()
    configure_logging(LOG_LEVEL)
    try:
        args.func(args)
    except MondayError as e:
        print(json.dumps(e.to_dict(), indent=2))
        sys.exit(1)
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        sys.exit(2)


if __name__ == "__main__":
    main()
