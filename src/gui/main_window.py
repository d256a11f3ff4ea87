"""Main application window: pick a thread, scrape it to Markdown."""

import logging
from typing import Optional

from PyQt6.QtWidgets import (
    QMainWindow, QWidget, QHBoxLayout, QVBoxLayout,
    QPushButton, QLineEdit, QStatusBar, QLabel,
)
from PyQt6.QtCore import QTimer

from src.core.config_manager import ConfigManager
from src.core.exceptions import SinkError
from src.core.types import MarkdownDocument
from src.gui.save_dialog_sink import SaveDialogSink
from src.gui.workers import ExportWorker
from src.services.export_service import ExportService, page_source_for

logger = logging.getLogger("threadscribe")


class MainWindow(QMainWindow):
    """Single-view window with a source field and a scrape button."""

    def __init__(self, export_service: ExportService, config: ConfigManager):
        super().__init__()
        self._config = config
        self._export_service = export_service
        self._worker: Optional[ExportWorker] = None

        self.setWindowTitle("ThreadScribe")
        self.setMinimumSize(640, 160)

        self._init_ui()

        # Offer the trigger only once the window has settled
        delay = self._config.get("gui.settle_delay_ms", 2000)
        logger.debug(f"Waiting {delay}ms before offering the scrape button")
        QTimer.singleShot(delay, self._offer_scrape_button)

    def _init_ui(self):
        central = QWidget()
        self.setCentralWidget(central)
        layout = QVBoxLayout(central)
        layout.setContentsMargins(16, 16, 16, 16)

        layout.addWidget(QLabel("Thread URL or saved HTML file:"))

        row = QHBoxLayout()
        self._source_input = QLineEdit()
        self._source_input.setPlaceholderText("https://www.reddit.com/r/<subreddit>/comments/...")
        self._source_input.returnPressed.connect(self._on_scrape_clicked)
        row.addWidget(self._source_input)

        self._scrape_btn = QPushButton("Scrape to Markdown")
        self._scrape_btn.setEnabled(False)
        self._scrape_btn.setStyleSheet(self._scrape_btn_style())
        self._scrape_btn.clicked.connect(self._on_scrape_clicked)
        row.addWidget(self._scrape_btn)

        layout.addLayout(row)
        layout.addStretch()

        self._status_bar = QStatusBar()
        self.setStatusBar(self._status_bar)

    def _offer_scrape_button(self):
        if self._export_service.is_running():
            return
        self._scrape_btn.setEnabled(True)
        logger.info("Scrape button ready")

    def _on_scrape_clicked(self):
        """Start one export run, unless one is already active."""
        if not self._scrape_btn.isEnabled() or self._export_service.is_running():
            logger.debug("Scrape ignored: a run is already active")
            return

        location = self._source_input.text().strip()
        if not location:
            self._status_bar.showMessage("Enter a thread URL or HTML file first.", 3000)
            return

        source = page_source_for(
            location,
            timeout=self._config.get("fetch.timeout", 30),
            max_retries=self._config.get("fetch.max_retries", 3),
            user_agent=self._config.get("fetch.user_agent"),
        )

        self._scrape_btn.setEnabled(False)
        self._worker = ExportWorker(self._export_service, source, self)
        self._worker.progress.connect(self._status_bar.showMessage)
        self._worker.document_ready.connect(self._on_document_ready)
        self._worker.error_occurred.connect(self._on_error)
        self._worker.finished.connect(self._on_worker_finished)
        self._worker.start()

    def _on_document_ready(self, document: MarkdownDocument):
        sink = SaveDialogSink(self, self._config.get_output_dir())
        try:
            path = sink.save(document)
        except SinkError as e:
            self._status_bar.showMessage(e.message, 5000)
            return
        self._status_bar.showMessage(f"Saved {path}", 5000)

    def _on_error(self, message: str):
        self._status_bar.showMessage(message, 8000)

    def _on_worker_finished(self):
        self._worker = None
        self._scrape_btn.setEnabled(True)

    @staticmethod
    def _scrape_btn_style() -> str:
        """Return stylesheet for the scrape button."""
        return (
            "QPushButton {"
            "  margin-left: 10px;"
            "  padding: 5px 10px;"
            "  border: 1px solid #555555;"
            "  border-radius: 12px;"
            "  background-color: #2b2b2b;"
            "  color: #dddddd;"
            "}"
            "QPushButton:disabled {"
            "  color: #777777;"
            "}"
        )
