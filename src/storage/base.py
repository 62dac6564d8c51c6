"""
Base storage abstraction for Pitch Board.

Defines the two interfaces the application uses to talk to the content
store: a read client that runs parametrized queries and a write client
that applies mutations. The store owns all data; the application holds
no authoritative state.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional


class StoreError(Exception):
    """Raised when the content store is unreachable or rejects a request."""


class ContentClient(ABC):
    """
    Abstract read client.

    Queries are declarative store-specific strings (see
    src.storage.queries) parametrized by named variables such as
    ``id``, ``slug`` and ``search``.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """
        Return the name of this storage backend.

        Used for logging and debugging.
        """
        pass

    @abstractmethod
    def fetch(self, query: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """
        Run a read query.

        Args:
            query: Query string.
            params: Named query parameters.

        Returns:
            The query result: a document, a list, or None when nothing matched.

        Raises:
            StoreError: If the store cannot be reached or rejects the query.
        """
        pass

    @abstractmethod
    def with_config(self, use_cdn: bool) -> "ContentClient":
        """
        Return a client with the given cache setting.

        ``use_cdn=False`` bypasses cached reads; freshness-critical lookups
        such as author reconciliation use it.
        """
        pass

    def __str__(self) -> str:
        return f"ContentClient({self.name})"

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"


class WriteClient(ABC):
    """Abstract write client used for author creation, submissions and view counting."""

    @abstractmethod
    def create(self, document: Dict[str, Any]) -> Dict[str, Any]:
        """
        Create a document. The store assigns ``_id`` when absent.

        Returns:
            The created document, including ``_id``.

        Raises:
            StoreError: On failure.
        """
        pass

    @abstractmethod
    def create_if_not_exists(self, document: Dict[str, Any]) -> Dict[str, Any]:
        """
        Create a document with an explicit ``_id`` unless one already exists.

        The check and the write are a single store-side mutation, so
        concurrent callers end up with one document.

        Returns:
            The stored document (new or pre-existing).
        """
        pass

    @abstractmethod
    def increment(self, document_id: str, field: str, amount: int = 1) -> None:
        """
        Atomically add ``amount`` to a numeric field, treating a missing
        field as 0.
        """
        pass
