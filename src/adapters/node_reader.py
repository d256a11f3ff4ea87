"""Abstract base class for read-only access to a host document tree."""

from abc import ABC, abstractmethod
from typing import Any, Optional


class NodeReader(ABC):
    """Read-only view of one node in a host-owned document tree.

    The extractor only ever talks to this interface, so it can run against
    a parsed HTML page or an in-memory fixture alike.
    """

    @abstractmethod
    def query(self, selector: str) -> Optional["NodeReader"]:
        """Return the first descendant matching a CSS selector, or None."""
        ...

    @abstractmethod
    def query_all(self, selector: str) -> list["NodeReader"]:
        """Return all descendants matching a CSS selector, in document order."""
        ...

    @abstractmethod
    def attribute(self, name: str) -> Optional[str]:
        """Return a string attribute, or None if the node does not carry it."""
        ...

    @abstractmethod
    def property(self, name: str) -> Any:
        """Return a typed property (e.g. "postTitle"), or None if unavailable."""
        ...

    @abstractmethod
    def text(self) -> str:
        """Return the node's rendered text, trimmed."""
        ...
