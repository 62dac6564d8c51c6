"""
Data models module.

Defines data structures for authors, startups, playlists and sessions.
"""

from src.models.author import Author, author_document_id
from src.models.startup import Startup, slugify
from src.models.playlist import Playlist
from src.models.identity import ProviderIdentity, Session

__all__ = [
    "Author",
    "author_document_id",
    "Startup",
    "slugify",
    "Playlist",
    "ProviderIdentity",
    "Session",
]
