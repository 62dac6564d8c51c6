"""
Identity and session models.

ProviderIdentity is what a successful OAuth handshake hands to
reconciliation. Session is the per-request view of the signed token,
passed explicitly to whatever needs the signed-in author.
"""

from dataclasses import dataclass
from typing import Optional, Dict, Any


@dataclass(frozen=True)
class ProviderIdentity:
    """
    Profile asserted by the identity provider after sign-in.

    Attributes:
        external_id: Provider account id (GitHub numeric id, as a string).
        username: Provider login.
        name: Display name (callers fall back to the login when unset).
        email: Email address, empty when the provider withholds it.
        bio: Optional profile text.
        avatar_url: Optional avatar image URL.
    """

    external_id: str
    username: str
    name: str
    email: str = ""
    bio: Optional[str] = None
    avatar_url: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.external_id or not str(self.external_id).strip():
            raise ValueError("ProviderIdentity requires an external_id")

    def to_author_fields(self) -> Dict[str, Any]:
        """Fields for a newly created author document."""
        return {
            "id": self.external_id,
            "name": self.name,
            "username": self.username,
            "email": self.email,
            "image": self.avatar_url,
            "bio": self.bio or "",
        }


@dataclass(frozen=True)
class Session:
    """
    The signed-in author for the current request.

    Built from the token stored in the signed session cookie. ``author_id``
    is None when the author lookup at token issuance found nothing.
    """

    author_id: Optional[str]
    name: str = ""
    email: str = ""
    image: Optional[str] = None

    @classmethod
    def from_token(cls, token: Optional[Dict[str, Any]]) -> Optional["Session"]:
        """Materialize a session from a token dict, or None when signed out."""
        if not token:
            return None
        return cls(
            author_id=token.get("id"),
            name=token.get("name") or "",
            email=token.get("email") or "",
            image=token.get("picture"),
        )

    @property
    def is_resolved(self) -> bool:
        """True when the token carries an internal author id."""
        return bool(self.author_id)
