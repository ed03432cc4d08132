"""
Search tool implementation.

Dispatches a typed search request to the matching listing, lets
query.pagination decide between backend paging and local filtering, and
prefixes every id with its entity kind.
"""

from adapters.listings import list_boards, list_docs, list_folders
from logging_config import logger
from models import (
    EntityKind,
    ListedEntity,
    SearchRequest,
    SearchResponse,
    SearchResult,
    UnsupportedSearchTypeError,
)
from query.pagination import DISCLAIMER, FetchPage, paginate

# Prefix per kind so ids from different listings never collide
OBJECT_PREFIXES: dict[EntityKind, str] = {
    EntityKind.BOARD: "board-",
    EntityKind.DOCUMENT: "doc-",
    EntityKind.FOLDER: "folder-",
}


def format_search_result(kind: EntityKind, entity: ListedEntity) -> SearchResult:
    """Convert a listing row to a SearchResult. Folders never carry a url."""
    return SearchResult(
        id=OBJECT_PREFIXES[kind] + entity.id,
        title=entity.name or "",
        url=None if kind is EntityKind.FOLDER else (entity.url or None),
    )


def _listing_for(request: SearchRequest) -> FetchPage:
    # Looked up per call so tests can patch the adapter functions
    listings = {
        EntityKind.BOARD: list_boards,
        EntityKind.DOCUMENT: list_docs,
        EntityKind.FOLDER: list_folders,
    }
    listing = listings.get(request.entity_kind)
    if listing is None:
        raise UnsupportedSearchTypeError(
            getattr(request.entity_kind, "value", request.entity_kind)
        )

    workspace_ids = (
        [str(workspace_id) for workspace_id in request.workspace_ids]
        if request.workspace_ids is not None
        else None
    )

    def fetch(page: int, limit: int) -> list[ListedEntity]:
        return listing(page, limit, workspace_ids)

    return fetch


def do_search(request: SearchRequest) -> SearchResponse:
    """
    Search boards, docs or folders.

    Exactly one backend round trip. With a search term the listing is read
    in one large page; if it's small the caller gets everything plus a
    disclaimer, otherwise matches are filtered and paged here.

    Args:
        request: Validated request (see validation.validate_search_limit)

    Returns:
        SearchResponse with prefixed ids and an optional disclaimer

    Raises:
        UnsupportedSearchTypeError: entity kind has no listing (before any API call)
        MondayError: Propagated unchanged from the adapter
    """
    fetch = _listing_for(request)
    outcome = paginate(request, fetch)

    if outcome.filtered_locally:
        logger.debug(
            f"search {request.entity_kind.value}: filtered locally, "
            f"{len(outcome.items)} items on page {request.page}"
        )
    elif outcome.caller_must_filter:
        logger.debug(
            f"search {request.entity_kind.value}: {len(outcome.items)} items "
            "returned unfiltered"
        )

    return SearchResponse(
        results=[format_search_result(request.entity_kind, item) for item in outcome.items],
        disclaimer=DISCLAIMER if outcome.caller_must_filter else None,
    )
