"""
Tests for startup listing and search.
"""

import pytest

from src.pitches.listing import normalize_query, search_startups
from src.storage.base import StoreError
from src.storage.queries import STARTUPS_QUERY

from tests.sample_data import EDU, HEALTH, SOLAR


class TestNormalizeQuery:
    """Tests for the blank-query convention."""

    def test_none(self):
        assert normalize_query(None) is None

    def test_empty_string_means_no_filter(self):
        assert normalize_query("") is None

    def test_whitespace_means_no_filter(self):
        assert normalize_query("   \t") is None

    def test_strips(self):
        assert normalize_query("  solar ") == "solar"


class TestSearchStartups:
    """Tests for the listing query."""

    def test_none_returns_all_in_store_order(self, memory_store):
        startups = search_startups(memory_store, None)

        assert [s.id for s in startups] == [EDU["_id"], HEALTH["_id"], SOLAR["_id"]]

    def test_empty_string_matches_none(self, memory_store):
        assert search_startups(memory_store, "") == search_startups(memory_store, None)

    def test_filters(self, memory_store):
        startups = search_startups(memory_store, "Energy")

        assert [s.title for s in startups] == ["Solar Drones"]

    def test_no_results(self, memory_store):
        assert search_startups(memory_store, "nothing like this") == []

    def test_cards_carry_author(self, memory_store):
        solar = search_startups(memory_store, "solar")[0]

        assert solar.author.name == "Ada Lovelace"
        assert solar.views == 10

    def test_single_query_with_null_search(self, mock_client):
        mock_client.fetch.return_value = []

        search_startups(mock_client, "  ")

        mock_client.fetch.assert_called_once_with(STARTUPS_QUERY, {"search": None})

    def test_null_result_is_empty(self, mock_client):
        mock_client.fetch.return_value = None

        assert search_startups(mock_client, None) == []

    def test_store_error_propagates(self, mock_client):
        mock_client.fetch.side_effect = StoreError("down")

        with pytest.raises(StoreError):
            search_startups(mock_client, "x")
