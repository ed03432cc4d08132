"""
GraphQL HTTP client initialization.

Shared by all adapters. Reads the API token, builds one httpx.Client.
Uses lru_cache for thread-safe caching.

The client uses API_TIMEOUT so a stalled connection can't hang a tool call.
"""

from functools import lru_cache

import httpx

__all__ = [
    "get_http_client",
    "clear_service_cache",
]

from api_config import API_TIMEOUT, API_VERSION, get_api_token


def _build_headers(token: str) -> dict[str, str]:
    return {
        "Authorization": token,
        "API-Version": API_VERSION,
        "Content-Type": "application/json",
    }


@lru_cache(maxsize=1)
def get_http_client() -> httpx.Client:
    """Get authenticated HTTP client for the GraphQL endpoint (cached, thread-safe)."""
    token = get_api_token()
    return httpx.Client(
        headers=_build_headers(token),
        timeout=httpx.Timeout(API_TIMEOUT),
    )


def clear_service_cache() -> None:
    """Drop the cached client. Useful for testing or after a token change."""
    get_http_client.cache_clear()
