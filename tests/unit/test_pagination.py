"""
Tests for virtual pagination.

The fetch callable is a plain Mock; paginate() never touches the API.
"""

from unittest.mock import Mock

import pytest

from api_config import LOAD_INTO_MEMORY_LIMIT
from models import EntityKind, SearchRequest
from query.pagination import (
    backend_paging,
    has_search_term,
    matches_term,
    paginate,
    slice_page,
)
from tests.helpers import make_entities


def _request(term: str | None = None, page: int = 1, limit: int = 100) -> SearchRequest:
    return SearchRequest(entity_kind=EntityKind.BOARD, search_term=term, page=page, limit=limit)


class TestHelpers:

    def test_has_search_term(self) -> None:
        assert has_search_term("x")
        assert not has_search_term("")
        assert not has_search_term(None)

    def test_backend_paging_without_term(self) -> None:
        assert backend_paging(_request(page=3, limit=25)) == (3, 25)

    def test_backend_paging_with_term(self) -> None:
        assert backend_paging(_request("x", page=3, limit=25)) == (1, LOAD_INTO_MEMORY_LIMIT)

    @pytest.mark.parametrize("name", ["TEST Board", "test board", "TeSt BoArD", "my test boards"])
    def test_matches_term_case_insensitive(self, name: str) -> None:
        assert matches_term(name, "test board")

    def test_matches_term_null_name(self) -> None:
        assert not matches_term(None, "x")

    def test_slice_page(self) -> None:
        items = make_entities([f"n{i}" for i in range(25)])
        assert [e.name for e in slice_page(items, 3, 10)] == ["n20", "n21", "n22", "n23", "n24"]
        assert slice_page(items, 4, 10) == []


class TestPaginateWithoutTerm:

    def test_passes_page_and_limit_through(self) -> None:
        items = make_entities(["a", "b"])
        fetch = Mock(return_value=items)

        outcome = paginate(_request(page=2, limit=50), fetch)

        fetch.assert_called_once_with(2, 50)
        assert outcome.items == items
        assert not outcome.filtered_locally
        assert not outcome.caller_must_filter

    def test_empty_term_behaves_like_no_term(self) -> None:
        fetch = Mock(return_value=make_entities(["a"]))

        outcome = paginate(_request("", page=4, limit=10), fetch)

        fetch.assert_called_once_with(4, 10)
        assert not outcome.caller_must_filter
        assert not outcome.filtered_locally


class TestPaginateWithTerm:

    def test_fetches_everything_once(self) -> None:
        fetch = Mock(return_value=[])
        paginate(_request("x", page=5, limit=10), fetch)
        fetch.assert_called_once_with(1, LOAD_INTO_MEMORY_LIMIT)

    def test_exactly_100_items_returned_unfiltered(self) -> None:
        items = make_entities([f"Item {i}" for i in range(100)])
        fetch = Mock(return_value=items)

        outcome = paginate(_request("nothing matches this"), fetch)

        assert outcome.items == items
        assert outcome.caller_must_filter
        assert not outcome.filtered_locally

    def test_small_listing_ignores_page_and_limit(self) -> None:
        items = make_entities([f"Item {i}" for i in range(40)])
        outcome = paginate(_request("Item", page=3, limit=5), Mock(return_value=items))
        assert len(outcome.items) == 40
        assert outcome.caller_must_filter

    def test_101_items_are_filtered(self) -> None:
        items = make_entities(["Alpha"] + [f"Other {i}" for i in range(100)])

        outcome = paginate(_request("alpha"), Mock(return_value=items))

        assert [e.name for e in outcome.items] == ["Alpha"]
        assert outcome.filtered_locally
        assert not outcome.caller_must_filter

    def test_slices_matches(self) -> None:
        items = make_entities([f"Match {i}" for i in range(125)])

        page_13 = paginate(_request("match", page=13, limit=10), Mock(return_value=items))
        assert [e.name for e in page_13.items] == [f"Match {i}" for i in range(120, 125)]

        page_14 = paginate(_request("match", page=14, limit=10), Mock(return_value=items))
        assert page_14.items == []
        assert page_14.filtered_locally

    def test_matching_keeps_backend_order(self) -> None:
        names = [f"Task {i}" if i % 2 else f"Project {i}" for i in range(120)]
        outcome = paginate(_request("project", limit=100), Mock(return_value=make_entities(names)))
        assert [e.name for e in outcome.items] == [f"Project {i}" for i in range(0, 120, 2)]

    def test_null_names_never_match(self) -> None:
        items = make_entities([None] * 50 + ["Target"] + [None] * 50)
        outcome = paginate(_request("target"), Mock(return_value=items))
        assert [e.name for e in outcome.items] == ["Target"]

    def test_fetch_errors_propagate(self) -> None:
        fetch = Mock(side_effect=RuntimeError("boom"))
        with pytest.raises(RuntimeError, match="boom"):
            paginate(_request("x"), fetch)
