"""
Tests for the data models.

Tests store document conversion, Startup creation rules, slugs,
identities and session materialization.
"""

import pytest
from datetime import datetime, timezone

from src.models.author import Author, author_document_id
from src.models.identity import ProviderIdentity, Session
from src.models.playlist import Playlist
from src.models.startup import Startup, slugify, parse_timestamp


# =============================================================================
# Test Fixtures
# =============================================================================

@pytest.fixture
def valid_startup():
    """A Startup satisfying every creation rule."""
    return Startup(
        title="Solar Drones",
        category="Energy",
        image="https://images.example.com/solar.png",
        description="Drones that never land",
        pitch="# Pitch",
        author_id="author-github-101",
    )


# =============================================================================
# Test Author
# =============================================================================

class TestAuthor:
    """Tests for Author conversion."""

    def test_from_document(self):
        author = Author.from_document({
            "_id": "author-github-1",
            "id": 1,
            "name": "Ada",
            "username": "ada",
            "email": "ada@example.com",
            "image": "https://a.example.com/ada.png",
            "bio": None,
        })

        assert author.id == "author-github-1"
        assert author.external_id == "1"
        assert author.bio == ""

    def test_from_document_missing(self):
        assert Author.from_document(None) is None
        assert Author.from_document({}) is None
        assert Author.from_document({"name": "No id"}) is None

    def test_display_name_falls_back_to_username(self):
        assert Author(id="a", username="ada").display_name == "ada"
        assert Author(id="a").display_name == "Anonymous"

    def test_document_id_is_deterministic(self):
        assert author_document_id("42") == author_document_id("42")
        assert author_document_id("42") != author_document_id("43")

    def test_document_id_is_publicly_readable(self):
        # Sanity hides dotted ids from unauthenticated reads
        assert "." not in author_document_id("101")
        assert author_document_id("101") == "author-github-101"


# =============================================================================
# Test Startup
# =============================================================================

class TestStartupValidation:
    """Tests for the Startup creation rules."""

    def test_valid_startup(self, valid_startup):
        assert valid_startup.validation_errors() == {}
        valid_startup.validate()

    def test_category_required(self, valid_startup):
        valid_startup.category = "   "

        errors = valid_startup.validation_errors()

        assert "category" in errors

    def test_category_max_length(self, valid_startup):
        valid_startup.category = "x" * 20
        assert "category" not in valid_startup.validation_errors()

        valid_startup.category = "x" * 21
        assert "category" in valid_startup.validation_errors()

    def test_category_single_character_allowed(self, valid_startup):
        valid_startup.category = "A"
        assert "category" not in valid_startup.validation_errors()

    def test_image_required(self, valid_startup):
        valid_startup.image = ""
        assert "image" in valid_startup.validation_errors()

    def test_image_must_be_url(self, valid_startup):
        valid_startup.image = "ftp://example.com/a.png"
        assert "image" in valid_startup.validation_errors()

    def test_title_required(self, valid_startup):
        valid_startup.title = ""
        assert "title" in valid_startup.validation_errors()

    def test_validate_raises_with_all_problems(self):
        startup = Startup(title="", category="", image="")

        with pytest.raises(ValueError) as exc_info:
            startup.validate()

        message = str(exc_info.value)
        assert "Title" in message
        assert "Category" in message
        assert "Image" in message


class TestSlugify:
    """Tests for slug generation."""

    def test_basic(self):
        assert slugify("Solar Drones") == "solar-drones"

    def test_collapses_punctuation(self):
        assert slugify("  AI -- for   Cats!! ") == "ai-for-cats"

    def test_max_length(self):
        slug = slugify("word " * 50)
        assert len(slug) <= 96
        assert not slug.endswith("-")

    def test_empty(self):
        assert slugify("") == ""
        assert slugify("!!!") == ""

    def test_startup_generates_slug(self, valid_startup):
        assert valid_startup.slug == "solar-drones"


class TestStartupDocuments:
    """Tests for Startup <-> store document conversion."""

    def test_to_document(self, valid_startup):
        doc = valid_startup.to_document()

        assert doc["_type"] == "startup"
        assert doc["slug"] == {"_type": "slug", "current": "solar-drones"}
        assert doc["author"] == {"_type": "reference", "_ref": "author-github-101"}
        assert doc["views"] == 0
        assert "_id" not in doc

    def test_from_projection_with_author(self):
        startup = Startup.from_document({
            "_id": "s1",
            "_createdAt": "2025-01-01T09:00:00Z",
            "title": "Solar",
            "slug": {"current": "solar"},
            "category": "Energy",
            "image": "https://example.com/a.png",
            "views": None,
            "author": {"_id": "a1", "name": "Ada", "username": "ada"},
        })

        assert startup.id == "s1"
        assert startup.slug == "solar"
        assert startup.views == 0
        assert startup.author.name == "Ada"
        assert startup.author_id == "a1"
        assert startup.created_at == datetime(2025, 1, 1, 9, 0, tzinfo=timezone.utc)

    def test_from_document_with_reference(self):
        startup = Startup.from_document({
            "_id": "s1",
            "title": "Solar",
            "category": "Energy",
            "image": "https://example.com/a.png",
            "author": {"_type": "reference", "_ref": "a1"},
        })

        assert startup.author is None
        assert startup.author_id == "a1"

    def test_from_documents_preserves_order(self):
        docs = [{"_id": "b", "title": "B"}, None, {"_id": "a", "title": "A"}]

        startups = Startup.from_documents(docs)

        assert [s.id for s in startups] == ["b", "a"]

    def test_from_documents_none(self):
        assert Startup.from_documents(None) == []

    def test_parse_timestamp_invalid(self):
        assert parse_timestamp("not a date") is None
        assert parse_timestamp(None) is None


# =============================================================================
# Test Playlist
# =============================================================================

class TestPlaylist:
    """Tests for Playlist conversion."""

    def test_from_document_drops_dangling_references(self):
        playlist = Playlist.from_document({
            "_id": "p1",
            "title": "Editor Picks",
            "slug": {"current": "editor-picks"},
            "select": [{"_id": "s1", "title": "Solar"}, None],
        })

        assert playlist.slug == "editor-picks"
        assert len(playlist) == 1

    def test_from_document_without_selection(self):
        playlist = Playlist.from_document({"_id": "p1", "select": None})

        assert len(playlist) == 0

    def test_missing(self):
        assert Playlist.from_document(None) is None


# =============================================================================
# Test Identity and Session
# =============================================================================

class TestProviderIdentity:
    """Tests for ProviderIdentity."""

    def test_requires_external_id(self):
        with pytest.raises(ValueError):
            ProviderIdentity(external_id="", username="x", name="x")

    def test_author_fields_default_bio(self, identity):
        fields = identity.to_author_fields()

        assert fields["id"] == "303"
        assert fields["username"] == "linus"
        assert fields["image"] == "https://avatars.example.com/linus.png"
        assert fields["bio"] == ""


class TestSession:
    """Tests for Session materialization."""

    def test_from_token(self):
        session = Session.from_token({
            "id": "author-github-1",
            "name": "Ada",
            "email": "ada@example.com",
            "picture": "https://a.example.com/ada.png",
        })

        assert session.author_id == "author-github-1"
        assert session.image == "https://a.example.com/ada.png"
        assert session.is_resolved

    def test_from_empty_token(self):
        assert Session.from_token(None) is None
        assert Session.from_token({}) is None

    def test_unresolved_token(self):
        session = Session.from_token({"id": None, "name": "Ada"})

        assert session is not None
        assert not session.is_resolved
