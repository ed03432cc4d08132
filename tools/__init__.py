"""
Tools — MCP tool implementations.

Each tool has its own module with the implementation logic.
server.py provides thin @mcp.tool() wrappers that call into these.

Tools:
- search: Boards, docs and folders by name, with kind-prefixed ids
- board_insights: Filter, group and aggregate a board's items
"""

from .search import do_search
from .insights import do_board_insights

__all__ = ["do_search", "do_board_insights"]
