"""
Startup pitch model for Pitch Board.

Defines the Startup dataclass, the unit that flows through listing,
detail and submission: store document -> Startup -> template.
"""

import re
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Dict, Any, List

from src.models.author import Author


STARTUP_TYPE = "startup"

CATEGORY_MIN_LENGTH = 1
CATEGORY_MAX_LENGTH = 20

# Sanity's default maximum length for generated slugs
SLUG_MAX_LENGTH = 96


def slugify(text: str) -> str:
    """
    Turn a title into a URL slug.

    Lowercases, collapses every run of non-alphanumeric characters to a
    single hyphen and trims to SLUG_MAX_LENGTH.
    """
    slug = re.sub(r"[^a-z0-9]+", "-", (text or "").lower()).strip("-")
    return slug[:SLUG_MAX_LENGTH].rstrip("-")


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse a store ISO timestamp ("...Z" allowed); None if unparseable."""
    if isinstance(value, datetime):
        return value
    if not value or not isinstance(value, str):
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


@dataclass
class Startup:
    """
    A pitch posted by an author.

    Attributes:
        title: Name of the startup.
        category: Short category label (1-20 characters).
        image: Cover image URL.
        id: Internal store id (``_id``); empty until created.
        slug: URL slug derived from the title.
        description: One-paragraph summary shown on cards.
        pitch: Markdown source of the full pitch.
        views: View counter, only ever incremented.
        created_at: Store creation timestamp (``_createdAt``).
        author: Owning author, when the query dereferenced it.
        author_id: Owning author's internal id.
    """

    # Required fields
    title: str
    category: str
    image: str

    # Optional fields with defaults
    id: str = ""
    slug: str = ""
    description: str = ""
    pitch: str = ""
    views: int = 0
    created_at: Optional[datetime] = None
    author: Optional[Author] = None
    author_id: str = ""

    def __post_init__(self) -> None:
        if not self.slug and self.title:
            self.slug = slugify(self.title)
        if self.author and not self.author_id:
            self.author_id = self.author.id

    def validation_errors(self) -> Dict[str, str]:
        """
        Check the creation invariants.

        Returns:
            Mapping of field name to error message (empty if valid).
        """
        errors = {}

        if not self.title or not self.title.strip():
            errors["title"] = "Title is required"

        category = (self.category or "").strip()
        if not category:
            errors["category"] = "Category is required"
        elif not (CATEGORY_MIN_LENGTH <= len(category) <= CATEGORY_MAX_LENGTH):
            errors["category"] = (
                f"Category must be {CATEGORY_MIN_LENGTH}-{CATEGORY_MAX_LENGTH} characters"
            )

        image = (self.image or "").strip()
        if not image:
            errors["image"] = "Image is required"
        elif not (image.startswith("http://") or image.startswith("https://")):
            errors["image"] = "Image must be an http:// or https:// URL"

        if self.views < 0:
            errors["views"] = "Views cannot be negative"

        return errors

    def validate(self) -> None:
        """
        Validate the creation invariants.

        Raises:
            ValueError: If validation fails.
        """
        errors = self.validation_errors()
        if errors:
            raise ValueError(f"Startup validation failed: {'; '.join(errors.values())}")

    def to_document(self) -> Dict[str, Any]:
        """
        Convert to a store document for creation.

        The author is stored as a reference; ``_id`` is left to the store.
        """
        doc = {
            "_type": STARTUP_TYPE,
            "title": self.title.strip(),
            "slug": {"_type": "slug", "current": self.slug},
            "category": self.category.strip(),
            "image": self.image.strip(),
            "description": self.description,
            "pitch": self.pitch,
            "views": self.views,
        }
        if self.author_id:
            doc["author"] = {"_type": "reference", "_ref": self.author_id}
        return doc

    @classmethod
    def from_document(cls, doc: Optional[Dict[str, Any]]) -> Optional["Startup"]:
        """
        Create a Startup from a store document or query projection.

        Stored documents are not re-validated: the store enforces the
        creation invariants. Returns None for a missing document.
        """
        if not doc:
            return None

        slug = doc.get("slug")
        if isinstance(slug, dict):
            slug = slug.get("current")

        raw_author = doc.get("author")
        author = None
        author_id = ""
        if isinstance(raw_author, dict):
            if "_ref" in raw_author:
                author_id = raw_author["_ref"]
            else:
                author = Author.from_document(raw_author)

        return cls(
            id=doc.get("_id", ""),
            title=doc.get("title") or "",
            slug=slug or "",
            category=doc.get("category") or "",
            image=doc.get("image") or "",
            description=doc.get("description") or "",
            pitch=doc.get("pitch") or "",
            views=int(doc.get("views") or 0),
            created_at=parse_timestamp(doc.get("_createdAt")),
            author=author,
            author_id=author_id,
        )

    @classmethod
    def from_documents(cls, docs: Optional[List[Dict[str, Any]]]) -> List["Startup"]:
        """Convert a query result list, preserving order and skipping empties."""
        startups = []
        for doc in docs or []:
            startup = cls.from_document(doc)
            if startup is not None:
                startups.append(startup)
        return startups

    def __str__(self) -> str:
        return f"[{self.category}] {self.title} ({self.views} views)"

    def __repr__(self) -> str:
        return (
            f"Startup(id={self.id!r}, title={self.title!r}, "
            f"category={self.category!r}, views={self.views})"
        )
