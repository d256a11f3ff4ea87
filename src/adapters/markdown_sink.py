"""Sinks that persist a finished Markdown document."""

import logging
from abc import ABC, abstractmethod
from pathlib import Path

from src.core.exceptions import SinkError
from src.core.types import MarkdownDocument

logger = logging.getLogger("threadscribe")


class MarkdownSink(ABC):
    """Abstract interface for persisting an exported document."""

    @abstractmethod
    def save(self, document: MarkdownDocument) -> Path:
        """Persist the complete document once.

        Returns:
            Path the document was written to

        Raises:
            SinkError: The document could not be written
        """
        ...


class FileSink(MarkdownSink):
    """Writes documents into a directory under their derived filename."""

    def __init__(self, out_dir: Path, overwrite: bool = True):
        self.out_dir = Path(out_dir)
        self._overwrite = overwrite

    def save(self, document: MarkdownDocument) -> Path:
        path = self.out_dir / document.filename
        if path.exists() and not self._overwrite:
            raise SinkError(f"Refusing to overwrite existing file: {path}")
        write_document(document, path)
        return path


def write_document(document: MarkdownDocument, path: Path) -> None:
    """Write the document bytes to path, creating parent directories."""
    data = document.content.encode(document.encoding)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
    except OSError as e:
        logger.error(f"Failed to write {path}: {e}")
        raise SinkError(f"Failed to write {path}: {e}")
    logger.info(f"Wrote {document.mime_type} document {path.name} ({len(data)} bytes)")
