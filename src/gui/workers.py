"""QThread workers for background operations."""

import logging

from PyQt6.QtCore import QThread, pyqtSignal

from src.adapters.page_source import PageSource
from src.core.exceptions import (
    ExtractionError,
    NetworkError,
    RateLimitError,
    RunInProgressError,
    ThreadScribeError,
)
from src.services.export_service import ExportService

logger = logging.getLogger("threadscribe")


class ExportWorker(QThread):
    """Background worker that loads a page and builds its document.

    Saving happens on the main thread afterwards, since the save dialog
    must be shown from there.
    """
    document_ready = pyqtSignal(object)  # MarkdownDocument
    error_occurred = pyqtSignal(str)     # user-facing message
    progress = pyqtSignal(str)           # status message

    def __init__(self, export_service: ExportService, source: PageSource, parent=None):
        super().__init__(parent)
        self._service = export_service
        self._source = source

    def run(self):
        """Execute the export pipeline."""
        try:
            self.progress.emit(f"Scraping {self._source.describe()}...")
            document = self._service.build(self._source)
            self.document_ready.emit(document)
        except ThreadScribeError as e:
            self.error_occurred.emit(self._describe_error(e))
            logger.error(f"Export error: {e}")
        except Exception as e:
            self.error_occurred.emit(f"Unexpected error: {e}")
            logger.exception(f"Unexpected export error: {e}")

    @staticmethod
    def _describe_error(error: ThreadScribeError) -> str:
        """Map exception type to a status bar message."""
        if isinstance(error, RunInProgressError):
            return "An export is already running."
        if isinstance(error, RateLimitError):
            return "Reddit is rate limiting requests. Try again later."
        if isinstance(error, NetworkError):
            return f"Could not load the page: {error.message}"
        if isinstance(error, ExtractionError):
            return f"Nothing exported: {error.message}"
        return error.message
