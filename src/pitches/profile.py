"""
Author profile page data.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from src.models.author import Author
from src.models.startup import Startup
from src.storage.base import ContentClient
from src.storage.queries import AUTHOR_BY_ID_QUERY, STARTUPS_BY_AUTHOR_QUERY


@dataclass
class AuthorProfile:
    author: Author
    startups: List[Startup] = field(default_factory=list)


def load_profile(client: ContentClient, author_id: str) -> Optional[AuthorProfile]:
    """Fetch an author by internal id with their startups; None if unknown."""
    author = Author.from_document(client.fetch(AUTHOR_BY_ID_QUERY, {"id": author_id}))
    if author is None:
        return None

    startups = Startup.from_documents(
        client.fetch(STARTUPS_BY_AUTHOR_QUERY, {"id": author.id})
    )
    return AuthorProfile(author=author, startups=startups)
