"""
Startup listing and search.

Filtering is entirely delegated to the store query; the result order is
the store's (newest first).
"""

from typing import List, Optional

from src.models.startup import Startup
from src.storage.base import ContentClient
from src.storage.queries import STARTUPS_QUERY


def normalize_query(query: Optional[str]) -> Optional[str]:
    """
    Normalize a free-text search.

    Blank and whitespace-only strings mean "no filter" and become None,
    the same as an absent query. Anything else is stripped.
    """
    if query is None:
        return None
    query = query.strip()
    return query or None


def search_startups(client: ContentClient, query: Optional[str] = None) -> List[Startup]:
    """
    List startups, optionally filtered by a free-text query.

    Args:
        client: Read client (cached reads are fine here).
        query: Text matched against title, category and author name.
            None or blank returns every startup.

    Returns:
        Startups in store order; empty list when nothing matches.
    """
    docs = client.fetch(STARTUPS_QUERY, {"search": normalize_query(query)})
    return Startup.from_documents(docs)
