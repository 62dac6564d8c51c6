"""
Author model for Pitch Board.

An Author is the profile linked to an external (GitHub) identity. Authors
live in the content store; this module only converts between store
documents and Python objects.
"""

from dataclasses import dataclass
from typing import Optional, Dict, Any


# Store document type for authors
AUTHOR_TYPE = "author"

# Prefix of the deterministic document id given to authors created at sign-in.
# Must not contain ".": Sanity only serves dotted ids to authenticated reads.
AUTHOR_ID_PREFIX = "author-github-"


def author_document_id(external_id: str) -> str:
    """
    Build the deterministic store id for the author of an external identity.

    Two sign-ins for the same GitHub account produce the same id, so the
    store can refuse the second create.
    """
    return f"{AUTHOR_ID_PREFIX}{external_id}"


@dataclass
class Author:
    """
    A user profile linked to an external identity provider account.

    Attributes:
        id: Internal store id (the document ``_id``).
        external_id: Identity provider account id (GitHub user id).
        username: Provider login.
        name: Display name.
        email: Email address (may be empty when the provider hides it).
        image: Avatar URL.
        bio: Short profile text.
    """

    id: str
    external_id: str = ""
    username: str = ""
    name: str = ""
    email: str = ""
    image: Optional[str] = None
    bio: str = ""

    @classmethod
    def from_document(cls, doc: Optional[Dict[str, Any]]) -> Optional["Author"]:
        """
        Create an Author from a store document or projection.

        Returns None when the document is missing or has no ``_id``.
        """
        if not doc or not doc.get("_id"):
            return None

        external_id = doc.get("id")
        return cls(
            id=doc["_id"],
            external_id=str(external_id) if external_id is not None else "",
            username=doc.get("username") or "",
            name=doc.get("name") or "",
            email=doc.get("email") or "",
            image=doc.get("image"),
            bio=doc.get("bio") or "",
        )

    @property
    def display_name(self) -> str:
        """Name to show on cards, falling back to the login."""
        return self.name or self.username or "Anonymous"

    def __str__(self) -> str:
        return f"{self.display_name} (@{self.username})"
