"""
Virtual pagination for listings that can't filter by text.

The backend listings page by (page, limit) only. With a search term we fetch
up to LOAD_INTO_MEMORY_LIMIT items in one round trip, then:

- at most SEARCH_LIMIT items: return them all, unfiltered, and tell the
  caller to filter (caller_must_filter)
- more than SEARCH_LIMIT: match the term case-insensitively against names
  and slice the caller's page out of the matches (filtered_locally)

Without a term the caller's page and limit go straight to the backend.
"""

from typing import Callable

from api_config import LOAD_INTO_MEMORY_LIMIT, SEARCH_LIMIT
from models import ListedEntity, PageOutcome, SearchRequest

DISCLAIMER = "[IMPORTANT]Items were not filtered. Please perform the filtering."

# (page, limit) -> one backend listing page
FetchPage = Callable[[int, int], list[ListedEntity]]


def has_search_term(search_term: str | None) -> bool:
    """Empty string counts as no term."""
    return bool(search_term)


def backend_paging(request: SearchRequest) -> tuple[int, int]:
    """(page, limit) to send to the backend for this request."""
    if has_search_term(request.search_term):
        return 1, LOAD_INTO_MEMORY_LIMIT
    return request.page, request.limit


def matches_term(name: str | None, search_term: str) -> bool:
    """Case-insensitive substring match on a display name."""
    return search_term.casefold() in (name or "").casefold()


def slice_page(items: list[ListedEntity], page: int, limit: int) -> list[ListedEntity]:
    """1-based page of `items`; past the end gives []."""
    start = (page - 1) * limit
    end = start + limit
    return items[start:end]


def paginate(request: SearchRequest, fetch: FetchPage) -> PageOutcome:
    """
    Run exactly one backend fetch and apply the two-tier rule.

    Args:
        request: Validated search request
        fetch: Listing for the request's entity kind

    Returns:
        PageOutcome with the items to show and how they were produced
    """
    page, limit = backend_paging(request)
    items = fetch(page, limit)

    if not has_search_term(request.search_term):
        return PageOutcome(items=items)

    if len(items) <= SEARCH_LIMIT:
        return PageOutcome(items=items, caller_must_filter=True)

    assert request.search_term is not None
    matched = [item for item in items if matches_term(item.name, request.search_term)]
    return PageOutcome(
        items=slice_page(matched, request.page, request.limit),
        filtered_locally=True,
    )
