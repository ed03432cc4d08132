"""
Query — pure functions for compiling requests and shaping results.

No MCP awareness, no API calls, no logging. Just transform input → output.
Easily testable without mocks.
"""

from .functions import classify_function
from .aliases import AliasAllocator
from .builder import build_aggregation_query, build_filter, build_from
from .results import flatten_rows, value_payload
from .pagination import DISCLAIMER, paginate

__all__ = [
    "classify_function",
    "AliasAllocator",
    "build_aggregation_query",
    "build_filter",
    "build_from",
    "flatten_rows",
    "value_payload",
    "DISCLAIMER",
    "paginate",
]
