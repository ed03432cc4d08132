"""
Listings adapter — boards, docs and folders.

One paged GraphQL listing per entity kind. None of these endpoints can
filter by free text, which is why tools/search.py sometimes filters locally.
"""

from typing import Any

from adapters.graphql import execute_graphql
from logging_config import log_api_result
from models import ListedEntity

__all__ = [
    "list_boards",
    "list_docs",
    "list_folders",
]


BOARDS_QUERY = """
query GetBoards($page: Int!, $limit: Int!, $workspace_ids: [ID]) {
  boards(page: $page, limit: $limit, workspace_ids: $workspace_ids) {
    id
    name
    url
  }
}
"""

DOCS_QUERY = """
query GetDocs($page: Int!, $limit: Int!, $workspace_ids: [ID]) {
  docs(page: $page, limit: $limit, workspace_ids: $workspace_ids) {
    id
    name
    url
  }
}
"""

# Folders have no url field
FOLDERS_QUERY = """
query GetFolders($page: Int!, $limit: Int!, $workspace_ids: [ID]) {
  folders(page: $page, limit: $limit, workspace_ids: $workspace_ids) {
    id
    name
  }
}
"""


def _parse_entities(rows: list[dict[str, Any] | None] | None) -> list[ListedEntity]:
    """Convert listing rows to ListedEntity, dropping null rows."""
    entities: list[ListedEntity] = []
    for row in rows or []:
        if not row:
            continue
        entities.append(
            ListedEntity(
                id=str(row["id"]),
                name=row.get("name"),
                url=row.get("url"),
            )
        )
    return entities


def _list(
    field_name: str,
    query: str,
    page: int,
    limit: int,
    workspace_ids: list[str] | None,
) -> list[ListedEntity]:
    variables: dict[str, Any] = {"page": page, "limit": limit}
    if workspace_ids is not None:
        variables["workspace_ids"] = workspace_ids

    data = execute_graphql(query, variables)
    entities = _parse_entities(data.get(field_name))
    log_api_result(field_name, len(entities))
    return entities


def list_boards(
    page: int, limit: int, workspace_ids: list[str] | None = None
) -> list[ListedEntity]:
    """
    List boards visible to the token owner.

    Args:
        page: 1-based page number
        limit: Page size
        workspace_ids: Restrict to these workspaces (ids as strings)

    Returns:
        Boards in backend order

    Raises:
        MondayError: On API failure
    """
    return _list("boards", BOARDS_QUERY, page, limit, workspace_ids)


def list_docs(
    page: int, limit: int, workspace_ids: list[str] | None = None
) -> list[ListedEntity]:
    """List workdocs. Same paging contract as list_boards()."""
    return _list("docs", DOCS_QUERY, page, limit, workspace_ids)


def list_folders(
    page: int, limit: int, workspace_ids: list[str] | None = None
) -> list[ListedEntity]:
    """List folders. Folders carry no url."""
    return _list("folders", FOLDERS_QUERY, page, limit, workspace_ids)
