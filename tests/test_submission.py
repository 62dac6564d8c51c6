"""
Tests for pitch submission and author profiles.
"""

import pytest

from src.models.identity import Session
from src.pitches.profile import load_profile
from src.pitches.submission import submit_startup
from src.storage.base import StoreError

from tests.sample_data import ADA, EDU, GRACE, HEALTH, SOLAR


VALID_FORM = {
    "title": "Rocket Bikes",
    "description": "Bikes with boosters",
    "category": "Mobility",
    "image": "https://images.example.com/bike.png",
    "pitch": "## Why\n\nBecause.",
}


class TestSubmitStartup:
    """Tests for submit_startup."""

    def test_creates_startup(self, memory_store, ada_session):
        result = submit_startup(VALID_FORM, ada_session, memory_store)

        assert result.success
        assert result.startup.id
        stored = memory_store.get(result.startup.id)
        assert stored["slug"]["current"] == "rocket-bikes"
        assert stored["author"] == {"_type": "reference", "_ref": ADA["_id"]}
        assert stored["views"] == 0

    def test_created_startup_is_listed_first(self, memory_store, ada_session):
        from src.pitches.listing import search_startups

        result = submit_startup(VALID_FORM, ada_session, memory_store)

        assert search_startups(memory_store)[0].id == result.startup.id

    def test_values_are_stripped(self, mock_write_client, ada_session):
        result = submit_startup({**VALID_FORM, "title": "  Rocket Bikes  "}, ada_session, mock_write_client)

        created = mock_write_client.create.call_args[0][0]
        assert created["title"] == "Rocket Bikes"
        assert result.values["title"] == "Rocket Bikes"

    def test_validation_errors(self, mock_write_client, ada_session):
        form = {**VALID_FORM, "category": "x" * 21, "image": "not-a-url"}

        result = submit_startup(form, ada_session, mock_write_client)

        assert not result.success
        assert set(result.errors) == {"category", "image"}
        mock_write_client.create.assert_not_called()

    def test_missing_fields(self, mock_write_client, ada_session):
        result = submit_startup({}, ada_session, mock_write_client)

        assert {"title", "category", "image"} <= set(result.errors)

    def test_title_without_slug_characters(self, mock_write_client, ada_session):
        result = submit_startup({**VALID_FORM, "title": "!!!"}, ada_session, mock_write_client)

        assert "title" in result.errors

    def test_requires_resolved_session(self, mock_write_client):
        for session in (None, Session(author_id=None, name="Ghost")):
            result = submit_startup(VALID_FORM, session, mock_write_client)

            assert "author" in result.errors

        mock_write_client.create.assert_not_called()

    def test_store_error_propagates(self, mock_write_client, ada_session):
        mock_write_client.create.side_effect = StoreError("down")

        with pytest.raises(StoreError):
            submit_startup(VALID_FORM, ada_session, mock_write_client)


class TestLoadProfile:
    """Tests for author profiles."""

    def test_profile_with_startups(self, memory_store):
        profile = load_profile(memory_store, ADA["_id"])

        assert profile.author.username == "ada"
        assert [s.id for s in profile.startups] == [HEALTH["_id"], SOLAR["_id"]]

    def test_profile_other_author(self, memory_store):
        profile = load_profile(memory_store, GRACE["_id"])

        assert [s.id for s in profile.startups] == [EDU["_id"]]

    def test_unknown_author(self, memory_store):
        assert load_profile(memory_store, "nobody") is None

    def test_unknown_author_skips_startup_query(self, mock_client):
        mock_client.fetch.return_value = None

        load_profile(mock_client, "nobody")

        assert mock_client.fetch.call_count == 1
