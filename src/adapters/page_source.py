"""Page sources: where a rendered thread page comes from."""

import logging
from abc import ABC, abstractmethod
from pathlib import Path

from src.adapters.soup_node_reader import SoupNodeReader
from src.core.exceptions import PageFetchError
from src.core.types import HostPage

logger = logging.getLogger("threadscribe")


class PageSource(ABC):
    """Abstract interface for loading a thread page."""

    @abstractmethod
    def load(self) -> HostPage:
        """Load the page and return its title plus a reader over its root.

        Raises:
            NetworkError: The page could not be loaded
        """
        ...

    @abstractmethod
    def describe(self) -> str:
        """Short human-readable description of the source, for logs."""
        ...


def page_from_html(html: str) -> HostPage:
    """Parse HTML into a HostPage."""
    root = SoupNodeReader.from_html(html)
    return HostPage(title=root.document_title(), root=root)


class LocalFilePageSource(PageSource):
    """Loads a thread page saved to disk (e.g. "Save Page As" in a browser)."""

    def __init__(self, path: Path):
        self._path = Path(path)

    def load(self) -> HostPage:
        try:
            html = self._path.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            raise PageFetchError(f"Could not read {self._path}: {e}")
        logger.info(f"Loaded saved page {self._path.name} ({len(html)} chars)")
        return page_from_html(html)

    def describe(self) -> str:
        return str(self._path)
