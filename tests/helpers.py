"""
Shared test helpers for monday-mcp.

Centralizes builders that repeat across test files.
"""

from __future__ import annotations

from typing import Any

import httpx

from api_config import API_URL
from models import ListedEntity


def graphql_response(
    data: dict[str, Any] | None = None,
    *,
    errors: list[dict[str, Any]] | None = None,
    status_code: int = 200,
) -> httpx.Response:
    """Build a real httpx.Response carrying a GraphQL payload.

    The request is attached so raise_for_status() works on error codes.

    Examples:
        graphql_response({"boards": []})
        graphql_response(errors=[{"message": "Boom"}])
        graphql_response(status_code=503)
    """
    payload: dict[str, Any] = {}
    if data is not None:
        payload["data"] = data
    if errors is not None:
        payload["errors"] = errors
    return httpx.Response(
        status_code,
        json=payload,
        request=httpx.Request("POST", API_URL),
    )


def make_entities(
    names: list[str | None],
    *,
    start_id: int = 1,
    with_url: bool = True,
) -> list[ListedEntity]:
    """Build listing rows with sequential ids.

    Example:
        make_entities(["Roadmap", "Bugs"])
        # → [ListedEntity("1", "Roadmap", "https://.../1"), ListedEntity("2", "Bugs", ...)]
    """
    entities = []
    for offset, name in enumerate(names):
        entity_id = str(start_id + offset)
        entities.append(
            ListedEntity(
                id=entity_id,
                name=name,
                url=f"https://acme.monday.com/boards/{entity_id}" if with_url else None,
            )
        )
    return entities
