"""
Curated collection ("playlist") model.
"""

from dataclasses import dataclass, field
from typing import Optional, Dict, Any, List

from src.models.startup import Startup


@dataclass
class Playlist:
    """A named, store-managed selection of startups, looked up by slug."""

    id: str
    title: str = ""
    slug: str = ""
    startups: List[Startup] = field(default_factory=list)

    @classmethod
    def from_document(cls, doc: Optional[Dict[str, Any]]) -> Optional["Playlist"]:
        if not doc:
            return None

        slug = doc.get("slug")
        if isinstance(slug, dict):
            slug = slug.get("current")

        return cls(
            id=doc.get("_id", ""),
            title=doc.get("title") or "",
            slug=slug or "",
            # Dangling references dereference to null and are dropped
            startups=Startup.from_documents(doc.get("select")),
        )

    def __len__(self) -> int:
        return len(self.startups)
